# shaderforge/notifications.py
from __future__ import annotations

import logging
import time
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)


class CaptionNotifier:
    """
    Shows compile progress in the pygame window title.

    The host calls tick() once per frame; the title goes back to the
    original caption once a finished notification has been visible long
    enough.
    """

    def __init__(self) -> None:
        self._base_caption: Optional[str] = None
        self._next_handle = 0
        self._expiry: Dict[int, float] = {}
        self._active: Dict[int, str] = {}

    def begin(self, message: str) -> int:
        if self._base_caption is None:
            caption = pygame.display.get_caption()
            self._base_caption = caption[0] if caption else ""

        self._next_handle += 1
        self._active[self._next_handle] = message
        self._show(message)
        return self._next_handle

    def end(self, handle: int, keep_visible_seconds: float) -> None:
        message = self._active.pop(handle, None)
        if message is None:
            return
        self._show(f"{message} done")
        self._expiry[handle] = time.perf_counter() + keep_visible_seconds

    def alert(self, message: str) -> None:
        logger.critical(message)
        self._show(f"ERROR: {message}")

    def tick(self) -> None:
        now = time.perf_counter()
        for handle in [h for h, t in self._expiry.items() if t <= now]:
            del self._expiry[handle]

        if not self._expiry and not self._active and self._base_caption is not None:
            pygame.display.set_caption(self._base_caption)
            self._base_caption = None

    def _show(self, text: str) -> None:
        base = self._base_caption or ""
        pygame.display.set_caption(f"{base} - {text}" if base else text)
