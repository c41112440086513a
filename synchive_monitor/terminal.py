"""Interactive command prompt for managing monitored locations."""

from __future__ import annotations

import enum
import sys
from collections.abc import Callable
from typing import TextIO

from .settings import VERSION


class TerminalCommand(enum.Enum):
    MONITOR_NEW_LOCATION = enum.auto()
    MONITOR_LOCATION_ONCE = enum.auto()
    LIST_LOCATIONS = enum.auto()
    REMOVE_LOCATION = enum.auto()
    REMOVE_ALL_LOCATIONS = enum.auto()


Delegate = Callable[[TerminalCommand, "str | None"], None]

_HELP_LINES = (
    'Schedule new monitoring, usage: "new <path>"',
    'Run single instance, usage: "once <path>"',
    'List monitoring locations, usage: "list"',
    'Remove monitoring location, usage: "remove <path>"',
    'Remove all monitoring locs, usage: "removeall"',
)

_WITH_LOCATION = (
    ("new ", TerminalCommand.MONITOR_NEW_LOCATION),
    ("once ", TerminalCommand.MONITOR_LOCATION_ONCE),
)


class Terminal:
    """Reads commands line by line and hands them to a delegate."""

    def __init__(
        self,
        delegate: Delegate | None = None,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ) -> None:
        self.delegate = delegate
        self._input_stream = input_stream
        self._output_stream = output_stream

    @property
    def _input(self) -> TextIO:
        return self._input_stream if self._input_stream is not None else sys.stdin

    @property
    def _output(self) -> TextIO:
        return self._output_stream if self._output_stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def _send(self, command: TerminalCommand, location: str | None = None) -> None:
        if self.delegate is not None:
            self.delegate(command, location)

    def _dispatch(self, line: str) -> None:
        lowered = line.lower()
        for prefix, command in _WITH_LOCATION:
            if lowered.startswith(prefix):
                self._send(command, line.split(" ", 1)[1])
                return
        if lowered.startswith("list"):
            self._send(TerminalCommand.LIST_LOCATIONS)
        elif lowered.startswith("removeall"):
            self._send(TerminalCommand.REMOVE_ALL_LOCATIONS)
        elif lowered.startswith("remove "):
            self._send(TerminalCommand.REMOVE_LOCATION, line.split(" ", 1)[1])
        elif lowered.startswith(("help", "/?", "\\?")):
            self.print_help()
        else:
            self.write_line("Invalid Command")

    def run(self) -> None:
        """Prompt for commands until "q" or end of input."""
        self.write_line(f"Welcome to Synchive Monitor {VERSION}")
        self.print_help()
        self._write(">")
        for raw in self._input:
            line = raw.rstrip("\r\n")
            if line.lower() == "q":
                break
            self._dispatch(line)
            self._write(">")

    def write_line(self, text: str) -> None:
        """Print text on its own line unless it is empty."""
        if text:
            self._write(f"{text}\n")

    def print_help(self) -> None:
        for line in _HELP_LINES:
            self.write_line(line)