"""CRC-32 checksums of files, formatted as fixed-width upper-case hex."""

from __future__ import annotations

import os
import zlib
from typing import BinaryIO

from .settings import BUFFER_SIZE, CRC32_LENGTH

_MASK = 0xFFFFFFFF


class FileInUseError(OSError):
    """Raised when a file exists but cannot be read."""


class CRC32:
    """Running CRC-32 (IEEE 802.3) accumulator."""

    def __init__(self) -> None:
        self.value = _MASK

    def update(self, data: bytes) -> None:
        """Feed more bytes into the checksum."""
        self.value = zlib.crc32(data, self.value ^ _MASK) ^ _MASK

    def compute_stream(self, stream: BinaryIO) -> str:
        """Consume a binary stream and return the checksum text."""
        for chunk in iter(lambda: stream.read(BUFFER_SIZE), b""):
            self.update(chunk)
        return str(self)

    def compute_hash(self, file_path: str | os.PathLike[str]) -> str | None:
        """Checksum a file; None if it does not exist."""
        try:
            with open(file_path, "rb") as handle:
                return self.compute_stream(handle)
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise FileInUseError("File in use") from exc

    def __str__(self) -> str:
        return f"{self.value ^ _MASK:0{CRC32_LENGTH}X}"