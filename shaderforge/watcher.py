# shaderforge/watcher.py
from __future__ import annotations

import logging
import os

from watchdog.events import (
    FileSystemEvent,
    FileSystemEventHandler,
    FileSystemMovedEvent,
)
from watchdog.observers import Observer

from shaderforge.collaborators import ChangeHandler
from shaderforge.paths import PathLike, normalize

logger = logging.getLogger(__name__)


class _ForwardingEventHandler(FileSystemEventHandler):
    """Reports file events as root-relative paths. Runs on the observer thread."""

    def __init__(self, root: str, handler: ChangeHandler) -> None:
        super().__init__()
        self._root = root
        self._handler = handler

    def _forward(self, path: str) -> None:
        try:
            rel_path = os.path.relpath(path, self._root)
        except ValueError:
            rel_path = path
        self._handler.on_path_changed(normalize(rel_path))

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(os.fsdecode(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._forward(os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory and isinstance(event, FileSystemMovedEvent):
            self._forward(os.fsdecode(event.dest_path))


class FileSystemWatcher:
    """Recursive watchdog observer over one directory."""

    def __init__(self, root: PathLike, handler: ChangeHandler) -> None:
        self.root = normalize(root)
        self._observer = Observer()
        self._observer.schedule(
            _ForwardingEventHandler(self.root, handler), self.root, recursive=True
        )

    def start(self) -> None:
        self._observer.start()
        logger.debug("Watching %s", self.root)

    def stop(self) -> None:
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join()
