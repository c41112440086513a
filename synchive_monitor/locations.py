"""Persist the list of monitored locations and start monitoring them."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

from .settings import LOCATIONS_FILE


def normalize_slashes(path: str) -> str:
    """Convert alternative path separators to the platform's own."""
    if os.altsep:
        return path.replace(os.altsep, os.sep)
    return path


class LocationsManager:
    """Keeps the locations file in the storage directory and launches monitors."""

    def __init__(
        self, storage_dir: str | os.PathLike[str], launcher: Callable[[str], object]
    ) -> None:
        self.storage_dir = Path(storage_dir)
        self.locations_file = self.storage_dir / LOCATIONS_FILE
        self._launcher = launcher
        self._locations: list[str] = []

        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.locations_file.touch(exist_ok=True)
        self._read_in_locations()

    def _read_in_locations(self) -> None:
        with self.locations_file.open(encoding="utf-8") as handle:
            self._locations = [
                line.rstrip("\r\n") for line in handle if line.strip()
            ]

    def _write_locations(self) -> None:
        with self.locations_file.open("w", encoding="utf-8") as handle:
            handle.writelines(f"{location}\n" for location in self._locations)

    def _contains(self, path: str) -> bool:
        wanted = path.lower()
        return any(location.lower() == wanted for location in self._locations)

    def start_monitoring_locations(self) -> None:
        """Launch a monitor for every stored location."""
        for location in list(self._locations):
            self._launcher(location)

    def new_location(self, path: str, is_persistent: bool) -> str:
        """Start monitoring path, storing it when is_persistent; return the path."""
        if not os.path.isdir(path):
            raise NotADirectoryError("Bad Path")
        path = normalize_slashes(path)
        if self._contains(path):
            raise ValueError("Path already monitored")

        if is_persistent:
            with self.locations_file.open("a", encoding="utf-8") as handle:
                handle.write(f"{path}\n")
            self._locations.append(path)

        self._launcher(path)
        return path

    def remove_location(self, path: str) -> str:
        """Stop storing path; return it as normalised."""
        path = normalize_slashes(path)
        if not self._contains(path):
            raise LookupError("Location not found")
        wanted = path.lower()
        self._locations = [
            location for location in self._locations if location.lower() != wanted
        ]
        self._write_locations()
        return path

    def list_locations(self) -> list[str]:
        """Every stored location, in the order it was added."""
        return list(self._locations)

    def remove_all(self) -> None:
        """Forget every stored location."""
        self._locations = []
        self._write_locations()