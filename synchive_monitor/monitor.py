"""Watch a directory tree and periodically refresh its ID file."""

from __future__ import annotations

import logging
import os
import threading

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .management import DirectoryManagement
from .settings import MINUTE, SCHEDULED_INTERVAL

_log = logging.getLogger(__name__)


class _EventForwarder(FileSystemEventHandler):
    def __init__(self, monitor: DirectoryMonitor) -> None:
        super().__init__()
        self._monitor = monitor

    def on_created(self, event: FileSystemEvent) -> None:
        self._monitor._apply(self._monitor.manager.file_created, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._monitor._apply(self._monitor.manager.file_created, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._monitor._apply(self._monitor.manager.file_deleted, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._monitor._apply(
            self._monitor.manager.file_renamed, event.dest_path, event.src_path
        )


class DirectoryMonitor:
    """Feeds file-system events to a DirectoryManagement and flushes it on a timer."""

    def __init__(self, path: str, interval: float = SCHEDULED_INTERVAL) -> None:
        self.path = path
        self.interval = interval
        self.manager = DirectoryManagement(path)
        self.manager.read_in_ids()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._observer: Observer | None = None
        self._timer: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def _apply(self, handler, *paths) -> None:
        with self._lock:
            handler(*(os.fsdecode(path) for path in paths))

    def tick(self) -> None:
        """Process queued changes and write the ID file if needed."""
        _log.debug("Timer event")
        with self._lock:
            self.manager.process_queue()
            self.manager.write_to_file()

    def _timer_loop(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.tick()
            except OSError as exc:
                _log.warning("update failed: %s", exc)

    def start(self) -> None:
        """Begin watching and start the periodic flush."""
        if self.running:
            return
        self._stop_event.clear()
        observer = Observer()
        observer.schedule(_EventForwarder(self), self.path, recursive=True)
        observer.start()
        self._timer = threading.Thread(target=self._timer_loop, daemon=True)
        self._timer.start()
        self._observer = observer

    def stop(self) -> None:
        """Stop watching and flushing."""
        self._stop_event.set()
        observer, self._observer = self._observer, None
        timer, self._timer = self._timer, None
        if observer is not None:
            observer.stop()
            observer.join()
        if timer is not None:
            timer.join()

    def run(self) -> int:
        """Watch until stopped or interrupted."""
        self.start()
        try:
            while not self._stop_event.wait(MINUTE):
                pass
        except KeyboardInterrupt:
            pass
        finally:
            self.stop()
        return 0