# shaderforge/reload.py
from __future__ import annotations

import logging
from typing import List

from shaderforge.collaborators import ResourceReloader
from shaderforge.dependencies import DependencyGraph
from shaderforge.paths import PathLike

logger = logging.getLogger(__name__)


class ReloadCoordinator:
    """
    Collects descriptors compiled during a drain cycle and, once the
    compile queue is empty, reloads them and re-derives the dependency graph.
    """

    def __init__(self, reloader: ResourceReloader, graph: DependencyGraph) -> None:
        self._reloader = reloader
        self._graph = graph
        self._to_reload: List[str] = []

    def add(self, path: str) -> None:
        self._to_reload.append(path)

    @property
    def pending(self) -> List[str]:
        return list(self._to_reload)

    def finish_cycle(self, compiled_dir: PathLike) -> List[str]:
        reloaded = list(dict.fromkeys(self._to_reload))
        for path in reloaded:
            logger.debug("Reloading %s", path)
            self._reloader.reload(path)
        self._to_reload.clear()

        self._graph.rebuild(compiled_dir)
        return reloaded
