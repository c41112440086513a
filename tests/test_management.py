import os
import shutil

import pytest

from synchive_monitor.management import DirectoryManagement
from synchive_monitor.processor import calculate_crc32, directory_unique_id
from synchive_monitor.settings import ID_FILE_NAME, VERSION


@pytest.fixture
def tree(tmp_path):
    root = str(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"123456789")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_bytes(b"hello")
    return root


def _loaded(root):
    manager = DirectoryManagement(root)
    manager.read_in_ids()
    return manager


def _from_id_file(root):
    _loaded(root).write_to_file()
    return _loaded(root)


def test_read_in_ids_collects_checksums(tree):
    manager = _loaded(tree)
    root_id = directory_unique_id(tree, 0, tree)
    sub_id = directory_unique_id(os.path.join(tree, "sub"), 1, tree)
    assert manager.directory_list[root_id] == {"a.txt": "CBF43926"}
    assert manager.directory_list[sub_id] == {
        "b.txt": calculate_crc32(os.path.join(tree, "sub", "b.txt"))
    }
    assert manager.modified is True


def test_write_and_read_back_round_trip(tree):
    first = _loaded(tree)
    first.write_to_file()
    assert first.modified is False

    with open(os.path.join(tree, ID_FILE_NAME), encoding="utf-8-sig") as handle:
        header = handle.readline().rstrip("\n")
    assert header == f"Generated with SynchiveMonitor {VERSION} - root={tree}"

    second = _loaded(tree)
    assert second.directory_list == first.directory_list
    assert second.modified is False


def test_write_skipped_when_unmodified(tree):
    manager = _from_id_file(tree)
    os.remove(os.path.join(tree, ID_FILE_NAME))
    manager.write_to_file()
    assert not os.path.exists(os.path.join(tree, ID_FILE_NAME))


def test_file_created_ignores_id_file(tree):
    manager = _from_id_file(tree)
    manager.file_created(os.path.join(tree, ID_FILE_NAME))
    assert list(manager.processing_queue) == []


def test_created_file_is_checksummed(tree, tmp_path):
    manager = _from_id_file(tree)
    new_file = tmp_path / "c.txt"
    new_file.write_bytes(b"new content")
    manager.file_created(str(new_file))
    manager.process_queue()

    root_id = directory_unique_id(tree, 0, tree)
    assert manager.directory_list[root_id]["c.txt"] == calculate_crc32(str(new_file))
    assert manager.modified is True
    assert list(manager.processing_queue) == []


def test_created_directory_is_walked(tree, tmp_path):
    manager = _from_id_file(tree)
    (tmp_path / "new" / "deep").mkdir(parents=True)
    target = tmp_path / "new" / "deep" / "f.txt"
    target.write_bytes(b"data")
    manager.file_created(str(tmp_path / "new"))
    manager.process_queue()

    deep_id = directory_unique_id(os.path.join(tree, "new", "deep"), 2, tree)
    assert manager.directory_list[deep_id] == {"f.txt": calculate_crc32(str(target))}


def test_missing_queued_path_is_dropped(tree):
    manager = _from_id_file(tree)
    before = {key: dict(files) for key, files in manager.directory_list.items()}
    manager.file_created(os.path.join(tree, "ghost.txt"))
    manager.process_queue()
    assert list(manager.processing_queue) == []
    assert manager.directory_list == before
    assert manager.modified is False


def test_deleted_file_is_forgotten(tree):
    manager = _from_id_file(tree)
    path = os.path.join(tree, "a.txt")
    os.remove(path)
    manager.file_deleted(path)
    assert manager.directory_list[directory_unique_id(tree, 0, tree)] == {}
    assert manager.modified is True


def test_deleted_directory_removes_subtree_only(tmp_path):
    root = str(tmp_path)
    (tmp_path / "a" / "inner").mkdir(parents=True)
    (tmp_path / "a" / "inner" / "x.txt").write_bytes(b"x")
    (tmp_path / "ab").mkdir()
    (tmp_path / "ab" / "y.txt").write_bytes(b"y")
    manager = _from_id_file(root)

    shutil.rmtree(tmp_path / "a")
    manager.file_deleted(os.path.join(root, "a"))

    assert directory_unique_id(os.path.join(root, "a"), 1, root) not in manager.directory_list
    assert (
        directory_unique_id(os.path.join(root, "a", "inner"), 2, root)
        not in manager.directory_list
    )
    assert directory_unique_id(os.path.join(root, "ab"), 1, root) in manager.directory_list
    assert manager.modified is True


def test_renamed_file_keeps_checksum(tree):
    manager = _from_id_file(tree)
    old = os.path.join(tree, "a.txt")
    new = os.path.join(tree, "renamed.txt")
    os.rename(old, new)
    manager.file_renamed(new, old)

    files = manager.directory_list[directory_unique_id(tree, 0, tree)]
    assert files == {"renamed.txt": calculate_crc32(new)}
    assert list(manager.processing_queue) == [new]
    assert manager.modified is True


def test_renamed_directory_moves_subtree(tmp_path):
    root = str(tmp_path)
    (tmp_path / "d" / "inner").mkdir(parents=True)
    (tmp_path / "d" / "inner" / "f.txt").write_bytes(b"f")
    manager = _from_id_file(root)
    old_inner = directory_unique_id(os.path.join(root, "d", "inner"), 2, root)
    inner_files = dict(manager.directory_list[old_inner])

    os.rename(tmp_path / "d", tmp_path / "e")
    manager.file_renamed(os.path.join(root, "e"), os.path.join(root, "d"))

    new_outer = directory_unique_id(os.path.join(root, "e"), 1, root)
    new_inner = directory_unique_id(os.path.join(root, "e", "inner"), 2, root)
    assert directory_unique_id(os.path.join(root, "d"), 1, root) not in manager.directory_list
    assert old_inner not in manager.directory_list
    assert new_outer in manager.directory_list
    assert manager.directory_list[new_inner] == inner_files