"""Command-line entry point: monitor one location, start all, or prompt."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Sequence

from .locations import LocationsManager
from .monitor import DirectoryMonitor
from .settings import MINUTE, MONITOR_KEYWORD, START_ALL_KEYWORD, storage_path
from .terminal import Terminal, TerminalCommand


class Controller:
    """Chooses what to do from the arguments and carries out terminal commands."""

    def __init__(
        self, args: Sequence[str], storage_dir: str | os.PathLike[str] | None = None
    ) -> None:
        self.args = list(args)
        self._monitors: list[DirectoryMonitor] = []
        self._stop_event = threading.Event()
        self.locations = LocationsManager(
            storage_dir if storage_dir is not None else storage_path(), self._launch
        )
        self.terminal = Terminal(self.handle_command)

    def _launch(self, path: str) -> None:
        monitor = DirectoryMonitor(path)
        monitor.start()
        self._monitors.append(monitor)

    def _stop_monitors(self) -> None:
        monitors, self._monitors = self._monitors, []
        for monitor in monitors:
            monitor.stop()

    def _wait_for_monitors(self) -> None:
        if not self._monitors:
            return
        try:
            while not self._stop_event.wait(MINUTE):
                pass
        except KeyboardInterrupt:
            pass
        finally:
            self._stop_monitors()

    def run(self) -> int:
        """Act on the arguments; return the exit status."""
        if self.args and self.args[0] == MONITOR_KEYWORD:
            path = " ".join(self.args[1:])
            if not path:
                print(f"Usage: {MONITOR_KEYWORD} <path>", file=sys.stderr)
                return 2
            print(f"Monitoring: {path}")
            try:
                monitor = DirectoryMonitor(path)
            except OSError as exc:
                print(exc, file=sys.stderr)
                return 1
            return monitor.run()
        if self.args and self.args[0] == START_ALL_KEYWORD:
            self.locations.start_monitoring_locations()
            self._wait_for_monitors()
            return 0
        self.start_terminal()
        return 0

    def start_terminal(self) -> None:
        """Run the interactive prompt; monitors started from it end with it."""
        try:
            self.terminal.run()
        finally:
            self._stop_monitors()

    def handle_command(self, command: TerminalCommand, location: str | None) -> None:
        """Carry out one terminal command and report the result."""
        write = self.terminal.write_line
        if command in (
            TerminalCommand.MONITOR_NEW_LOCATION,
            TerminalCommand.MONITOR_LOCATION_ONCE,
        ):
            persistent = command is TerminalCommand.MONITOR_NEW_LOCATION
            try:
                path = self.locations.new_location(location or "", persistent)
            except (OSError, ValueError) as exc:
                write(str(exc))
            else:
                write(f"Monitoring {path}")
        elif command is TerminalCommand.LIST_LOCATIONS:
            write("Monitoring Locations:")
            write("\n".join(self.locations.list_locations()))
        elif command is TerminalCommand.REMOVE_LOCATION:
            try:
                removed = self.locations.remove_location(location or "")
            except LookupError as exc:
                removed = str(exc)
            write(f"Removed: {removed}")
        elif command is TerminalCommand.REMOVE_ALL_LOCATIONS:
            write("All Locations Removed")
            self.locations.remove_all()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the monitor with command-line arguments."""
    args = sys.argv[1:] if argv is None else argv
    return Controller(args).run()


if __name__ == "__main__":
    sys.exit(main())