# shaderforge/dependencies.py
from __future__ import annotations

import logging
import os
from collections import defaultdict
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from shaderforge.importers.depfile import DepfileImporter
from shaderforge.paths import FileInfo, PathLike, has_extension, join, normalize
from shaderforge.sources import ShaderSourceIndex
from shaderforge.types import DEPFILE_EXTENSION

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    dependency path -> binary variants built from it.

    Keys are descriptors, stage sources and shared includes; values are
    .shb paths. Only ever rebuilt as a whole from the compiler's .d files.
    """

    def __init__(self, sources: ShaderSourceIndex) -> None:
        self._sources = sources
        self._importer = DepfileImporter()
        self._edges: Dict[str, Set[str]] = {}

    def rebuild(self, compiled_dir: PathLike) -> None:
        edges: Dict[str, Set[str]] = defaultdict(set)

        try:
            names = sorted(os.listdir(compiled_dir))
        except OSError:
            logger.debug("No compiled shaders in %s", compiled_dir)
            names = []

        for name in names:
            if not has_extension(name, DEPFILE_EXTENSION):
                continue

            path = join(compiled_dir, name)
            try:
                record = self._importer.import_file(path)
            except (OSError, ValueError) as e:
                logger.error("Could not open %s: %s", path, e)
                continue

            for dependency in record.dependencies:
                edges[dependency].add(record.variant)

            src = self.source_from_binary_basename(FileInfo.of(record.variant).basename)
            if src is not None:
                edges[src].add(record.variant)

        self._edges = dict(edges)
        logger.debug(
            "Dependency graph rebuilt: %d files, %d edges",
            len(self._edges),
            sum(len(v) for v in self._edges.values()),
        )

    def source_from_binary_basename(self, binary_basename: str) -> Optional[str]:
        return self._sources.source_from_binary_basename(binary_basename)

    def variants_of(self, path: PathLike) -> FrozenSet[str]:
        return frozenset(self._edges.get(normalize(path), ()))

    def descriptors_for(self, path: PathLike) -> List[str]:
        """Distinct descriptors whose variants were built from path."""
        found = set()
        for variant in self.variants_of(path):
            src = self.source_from_binary_basename(FileInfo.of(variant).basename)
            if src is not None:
                found.add(src)
        return sorted(found)

    def items(self) -> Iterator[Tuple[str, FrozenSet[str]]]:
        for key in sorted(self._edges):
            yield key, frozenset(self._edges[key])

    def clear(self) -> None:
        self._edges = {}

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize(path) in self._edges

    def __len__(self) -> int:
        return len(self._edges)
