"""Shared names, sizes and locations used throughout the monitor."""

from __future__ import annotations

import os
from pathlib import Path

VERSION = "0.10"

ID_FILE_NAME = "~listOfFilesInCRC.txt"
DIR_LINE_PREFIX = "~"
LEFTOVER_FOLDER_NAME = "~leftovers"

KILOBYTE = 1024
MEGABYTE = 1024 * KILOBYTE
BUFFER_SIZE = 20 * MEGABYTE

SECOND = 1.0
MINUTE = 60 * SECOND
SCHEDULED_INTERVAL = 1 * MINUTE

CRC32_LENGTH = 8

LOCATIONS_FILE = "SynchiveMonitor_Locations.ini"
STORAGE_FOLDER_NAME = "Synchive"

MONITOR_KEYWORD = "-monitor"
START_ALL_KEYWORD = "-startAll"


def storage_path() -> Path:
    """Return the per-user directory where the monitor keeps its state."""
    base = os.environ.get("APPDATA")
    if not base:
        base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(
            os.path.expanduser("~"), ".config"
        )
    return Path(base) / STORAGE_FOLDER_NAME