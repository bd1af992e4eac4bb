# shaderforge/changes.py
from __future__ import annotations

import threading
from typing import List, Optional


class ChangeQueue:
    """
    Inbox for changed paths reported by the watcher thread.

    The lock is held only while the list is touched, never around I/O.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._paths: List[str] = []

    def push(self, path: str) -> None:
        with self._lock:
            self._paths.append(path)

    def pop_latest(self) -> Optional[str]:
        """Drop exact duplicates, then pop the most recently pushed path."""
        with self._lock:
            if not self._paths:
                return None

            seen = set()
            latest_first = []
            for path in reversed(self._paths):
                if path not in seen:
                    seen.add(path)
                    latest_first.append(path)
            latest_first.reverse()

            self._paths = latest_first
            return self._paths.pop()

    def clear(self) -> None:
        with self._lock:
            self._paths.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
