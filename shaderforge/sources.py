# shaderforge/sources.py
from __future__ import annotations

import logging
import os
from typing import Iterator, List, Optional

from shaderforge.paths import FileInfo, PathLike, has_extension, join, normalize
from shaderforge.types import DESCRIPTOR_EXTENSION

logger = logging.getLogger(__name__)


class ShaderSourceIndex:
    """
    Set of known .shd descriptor paths under the pipeline root.
    """

    def __init__(self) -> None:
        self._paths: List[str] = []

    def discover(self, root: PathLike) -> List[str]:
        """
        Walk root recursively and replace the index with every descriptor found.
        Hidden directories are skipped, unreadable ones silently ignored.
        """
        found: List[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            for name in filenames:
                if has_extension(name, DESCRIPTOR_EXTENSION):
                    found.append(join(dirpath, name))

        self._paths = sorted(set(found))
        logger.debug("Found %d shader descriptors under %s", len(self._paths), root)
        return list(self._paths)

    def add(self, path: PathLike) -> bool:
        """Index a descriptor created after discovery. False if already known."""
        norm = normalize(path)
        if norm in self._paths:
            return False
        self._paths.append(norm)
        return True

    def source_from_binary_basename(self, binary_basename: str) -> Optional[str]:
        """
        Descriptor a binary was built from: 'basic_MAIN1_vs' -> '.../basic.shd'.
        First match in index order wins.
        """
        shd_basename = binary_basename.split("_", 1)[0]
        matches = [p for p in self._paths if FileInfo.of(p).basename == shd_basename]

        if not matches:
            logger.info("%s binary shader has no source code", binary_basename)
            return None
        if len(matches) > 1:
            logger.warning(
                "%s binary shader matches several sources (%s), using %s",
                binary_basename,
                ", ".join(matches),
                matches[0],
            )
        return matches[0]

    @property
    def paths(self) -> List[str]:
        return list(self._paths)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize(path) in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)
