"""Keep the checksum list of a monitored tree current and write it to disk."""

from __future__ import annotations

import logging
import os
from collections import deque

from .processor import (
    FileProcessorBase,
    calculate_crc32,
    directory_unique_id,
    file_unique_id,
    get_depth,
    parse_directory_id,
    relative_path,
)
from .settings import ID_FILE_NAME, VERSION

_log = logging.getLogger(__name__)


class DirectoryManagement(FileProcessorBase):
    """Holds every directory's file checksums and applies file-system changes."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        # directory ID -> {file name: checksum}
        self.directory_list: dict[str, dict[str, str | None]] = {}
        # files and directories waiting to be checksummed
        self.processing_queue: deque[str] = deque()
        # set whenever the ID file on disk is out of date
        self.modified = False

    def _directory_id(self, dir_path: str) -> str:
        depth = get_depth(dir_path, self.root.path, False)
        return directory_unique_id(dir_path, depth, self.root.path)

    def did_process_file(
        self, file_id: str, dir_id: str, path: str, depth: int, crc: str | None
    ) -> None:
        if not self.root_id_file_exists():
            self.modified = True
        self.directory_list.setdefault(dir_id, {})[os.path.basename(path)] = crc

    def will_process_directory(self, dir_id: str, path: str, depth: int) -> None:
        if not self.root_id_file_exists():
            self.modified = True
        self.directory_list.setdefault(dir_id, {})

    def file_created(self, path: str) -> None:
        """Queue a new or changed file or directory for checksumming."""
        if os.path.basename(path) == ID_FILE_NAME:
            return
        _log.info("FileCreated: %s", path)
        self.processing_queue.append(path)

    def file_deleted(self, path: str) -> None:
        """Forget a deleted file, or a deleted directory and all below it."""
        _log.info("FileDeleted: %s", path)
        root = self.root.path
        dir_id = self._directory_id(path)

        if dir_id in self.directory_list:
            prefix = path + os.sep
            doomed = [
                key
                for key in self.directory_list
                if (found := parse_directory_id(key, root).path) == path
                or found.startswith(prefix)
            ]
            for key in doomed:
                del self.directory_list[key]
        else:
            files = self.directory_list.get(self._directory_id(os.path.dirname(path)))
            if files is not None:
                files.pop(os.path.basename(path), None)
        self.modified = True

    def file_renamed(self, path: str, old_path: str) -> None:
        """Move the stored checksums of a renamed file or directory."""
        _log.info("FileRenamed to: %s from %s", path, old_path)
        # the new name may belong to something not yet processed
        self.file_created(path)

        if os.path.isdir(path):
            self._handle_directory_rename(path, path, old_path)
        elif os.path.isfile(path):
            old_files = self.directory_list.get(
                self._directory_id(os.path.dirname(old_path))
            )
            crc = None
            if old_files is not None:
                crc = old_files.pop(os.path.basename(old_path), None)
            new_dir_id = self._directory_id(os.path.dirname(path))
            self.directory_list.setdefault(new_dir_id, {})[os.path.basename(path)] = crc
            self.modified = True

    def _handle_directory_rename(
        self, path: str, new_base_path: str, old_base_path: str
    ) -> None:
        with os.scandir(path) as scan:
            subdirs = sorted(entry.path for entry in scan if entry.is_dir())
        for subdir in subdirs:
            self._handle_directory_rename(subdir, new_base_path, old_base_path)

        old_path = old_base_path + relative_path(path, new_base_path)
        old_id = self._directory_id(old_path)
        new_id = self._directory_id(path)

        # may be missing when a directory is renamed before it was processed
        files = self.directory_list.pop(old_id, None)
        if files is not None:
            self.directory_list[new_id] = files
            self.modified = True

    def process_queue(self) -> None:
        """Checksum everything queued; stop early if a file is still in use."""
        try:
            while self.processing_queue:
                path = self.processing_queue[0]
                if os.path.isdir(path):
                    if self._directory_id(path) not in self.directory_list:
                        with os.scandir(path) as scan:
                            entries = sorted(scan, key=lambda entry: entry.name)
                        self.processing_queue.extend(
                            entry.path for entry in entries if entry.is_dir()
                        )
                        self.processing_queue.extend(
                            entry.path for entry in entries if entry.is_file()
                        )
                elif os.path.isfile(path):
                    crc = calculate_crc32(path)
                    if crc is not None:
                        dir_id = self._directory_id(os.path.dirname(path))
                        files = self.directory_list.setdefault(dir_id, {})
                        files[os.path.basename(path)] = crc
                        self.modified = True
                # removed only now so that a failure leaves it queued
                self.processing_queue.popleft()
        except OSError as exc:
            _log.info("postponing queue processing: %s", exc)

    def write_to_file(self) -> None:
        """Write the ID file at the root if anything changed."""
        if not self.modified:
            return
        self.modified = False
        _log.info("Writing ID file under %s", self.root.path)
        id_file = os.path.join(self.root.path, ID_FILE_NAME)
        with open(id_file, "w", encoding="utf-8-sig") as handle:
            handle.write(
                f"Generated with SynchiveMonitor {VERSION} - root={self.root.path}\n"
            )
            for dir_id, files in self.directory_list.items():
                handle.write(f"{dir_id}\n")
                for name, crc in files.items():
                    handle.write(f"{file_unique_id(name, crc)}\n")