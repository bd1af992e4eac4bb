# shaderforge/collaborators.py
"""
Interfaces the shader compiler talks to, plus do-nothing defaults.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ChangeHandler(Protocol):
    def on_path_changed(self, path: str) -> None:
        """Called from the watcher thread with a path relative to the watched root."""
        ...


class ResourceReloader(Protocol):
    def reload(self, path: str) -> None: ...


class Notifier(Protocol):
    def begin(self, message: str) -> int:
        """Show a progress message, return a handle for end()."""
        ...

    def end(self, handle: int, keep_visible_seconds: float) -> None: ...

    def alert(self, message: str) -> None:
        """Blocking, user-facing error."""
        ...


class PauseSwitch(Protocol):
    def enable_update(self, enabled: bool) -> None: ...


class NullReloader:
    def reload(self, path: str) -> None:
        logger.debug("Nothing to reload %s into", path)


class LogNotifier:
    """Notifications that end up in the log only."""

    def __init__(self) -> None:
        self._next_handle = 0

    def begin(self, message: str) -> int:
        self._next_handle += 1
        logger.info(message)
        return self._next_handle

    def end(self, handle: int, keep_visible_seconds: float) -> None:
        logger.info("Shader compilation finished")

    def alert(self, message: str) -> None:
        logger.critical(message)


class NullPauseSwitch:
    def enable_update(self, enabled: bool) -> None:
        pass
