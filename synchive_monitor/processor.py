"""Walk a directory tree or its ID files and report every directory and file."""

from __future__ import annotations

import abc
import logging
import os
import re
from dataclasses import dataclass

from .crc32 import CRC32
from .settings import DIR_LINE_PREFIX, ID_FILE_NAME

_log = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\\/]")


class IDFileFormatError(ValueError):
    """Raised when an ID file or an ID string is malformed."""


@dataclass
class SynchiveFile:
    path: str
    depth: int = 0
    crc: str | None = None


@dataclass
class SynchiveDirectory:
    path: str
    depth: int = 0


def directory_unique_id(file_path: str, level: int, root_path: str) -> str:
    """Return the ID line of a directory relative to the root."""
    return f"{DIR_LINE_PREFIX}{level}: {file_path[len(root_path):]}"


def file_unique_id(name: str, crc: str | None) -> str:
    """Return the ID line of a file: its checksum and quoted name."""
    return f'{crc or ""} "{name}"'


def _split_entry(line: str) -> list[str]:
    parts = line.split(" ", 1)
    if len(parts) != 2:
        raise IDFileFormatError("Bad format found")
    return parts


def _parse_level(token: str) -> int:
    body = token[len(DIR_LINE_PREFIX):]
    if body.endswith(":"):
        body = body[:-1]
    try:
        return int(body)
    except ValueError:
        raise IDFileFormatError(f"Bad directory level: {token!r}") from None


def _unquote(quoted: str) -> str:
    if len(quoted) < 2:
        raise IDFileFormatError("Bad format found")
    return quoted[1:-1]


def parse_directory_id(dir_id: str, root: str) -> SynchiveDirectory:
    """Turn a directory ID back into a path and depth under root."""
    level_token, relative = _split_entry(dir_id)
    return SynchiveDirectory(path=root + relative, depth=_parse_level(level_token))


def parse_file_id(file_id: str, parent: str) -> SynchiveFile:
    """Turn a file ID back into a path inside parent and its checksum."""
    crc, quoted = _split_entry(file_id)
    return SynchiveFile(path=os.path.join(parent, _unquote(quoted)), crc=crc)


def calculate_crc32(path: str | os.PathLike[str]) -> str | None:
    """Checksum a file; None if it does not exist."""
    return CRC32().compute_hash(path)


def get_depth(path: str, root: str, is_file: bool) -> int:
    """Number of directory levels between root and path."""
    parts = _SEPARATORS.split(path[len(root):])
    depth = len(parts) - (1 if is_file else 0)
    return depth - sum(1 for part in parts if not part)


def relative_path(path: str, base_path: str) -> str:
    """The part of path that follows base_path."""
    return path[len(base_path):]


class FileProcessorBase(abc.ABC):
    """Reads a tree, preferring stored ID files over hashing files again."""

    def __init__(self, path: str) -> None:
        self.root = SynchiveDirectory(path=path, depth=0)
        self._pending: list[SynchiveDirectory] = [self.root]

    @abc.abstractmethod
    def did_process_file(
        self, file_id: str, dir_id: str, path: str, depth: int, crc: str | None
    ) -> None:
        """Called for every file found."""

    @abc.abstractmethod
    def will_process_directory(self, dir_id: str, path: str, depth: int) -> None:
        """Called before the files of a directory are reported."""

    def root_id_file_exists(self) -> bool:
        return os.path.isfile(os.path.join(self.root.path, ID_FILE_NAME))

    def read_in_ids(self) -> None:
        """Report every directory and file below the root."""
        _log.debug("reading IDs under %s", self.root.path)
        while self._pending:
            directory = self._pending.pop()
            id_file = os.path.join(directory.path, ID_FILE_NAME)
            if os.path.isfile(id_file):
                try:
                    self._read_from_id_file(id_file, directory.depth)
                except IDFileFormatError as exc:
                    _log.warning("%s: %s", id_file, exc)
            else:
                dir_id = directory_unique_id(
                    directory.path, directory.depth, self.root.path
                )
                self.will_process_directory(dir_id, directory.path, directory.depth)
                self._read_files_within_directory(directory)

    def _read_files_within_directory(self, directory: SynchiveDirectory) -> None:
        with os.scandir(directory.path) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)

        for entry in entries:
            if entry.is_dir():
                self._pending.append(
                    SynchiveDirectory(path=entry.path, depth=directory.depth + 1)
                )

        dir_id = directory_unique_id(directory.path, directory.depth, self.root.path)
        for entry in entries:
            if not entry.is_file() or entry.name == ID_FILE_NAME:
                continue
            crc = calculate_crc32(entry.path)
            self.did_process_file(
                file_unique_id(entry.name, crc), dir_id, entry.path, directory.depth, crc
            )

    def _read_from_id_file(self, path: str, base_depth: int) -> None:
        _log.debug("reading ID file %s", path)
        with open(path, encoding="utf-8-sig") as handle:
            lines = (line.rstrip("\r\n") for line in handle)
            if next(lines, None) is None:
                raise IDFileFormatError("Empty File")

            location_dir = os.path.dirname(path)
            line = next(lines, None)
            while line is not None and line.startswith(DIR_LINE_PREFIX):
                level_token, relative = _split_entry(line)
                level = _parse_level(level_token) + base_depth
                dir_path = location_dir + relative
                dir_id = directory_unique_id(dir_path, level, self.root.path)
                self.will_process_directory(dir_id, dir_path, level)

                line = next(lines, None)
                while line is not None and not line.startswith(DIR_LINE_PREFIX):
                    crc, quoted = _split_entry(line)
                    file_path = dir_path + os.sep + _unquote(quoted)
                    self.did_process_file(
                        file_unique_id(os.path.basename(file_path), crc),
                        dir_id,
                        file_path,
                        level,
                        crc,
                    )
                    line = next(lines, None)