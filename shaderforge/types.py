# shaderforge/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from shaderforge.paths import FileInfo

MAX_DEFINES = 16  # widest define bitset a descriptor may declare

DESCRIPTOR_EXTENSION = "shd"
BINARY_EXTENSION = "shb"
DEPFILE_EXTENSION = "d"
WATCHED_EXTENSIONS = frozenset({"sc", "shd", "sh"})


class Stage(str, Enum):
    """Programmable stage a variant is compiled for."""

    VERTEX = "vertex"
    FRAGMENT = "fragment"

    @property
    def tag(self) -> str:
        return "vs" if self is Stage.VERTEX else "fs"

    @property
    def source_suffix(self) -> str:
        """e.g. '_vs.sc'"""
        return f"_{self.tag}.sc"

    @property
    def binary_suffix(self) -> str:
        """e.g. '_vs.shb'"""
        return f"_{self.tag}.{BINARY_EXTENSION}"


STAGES: Tuple[Stage, ...] = (Stage.VERTEX, Stage.FRAGMENT)


@dataclass(frozen=True, slots=True)
class ShaderDescriptor:
    """
    Parsed .shd file.

    Masks are bitsets over `defines`: bit i set means define i affects
    that pass/stage and gets its own on/off variants.
    """

    path: str
    passes: Tuple[str, ...]
    defines: Tuple[str, ...]
    vs_local_masks: Tuple[int, ...]
    fs_local_masks: Tuple[int, ...]

    @property
    def basename(self) -> str:
        return FileInfo.of(self.path).basename

    def local_mask(self, pass_index: int, stage: Stage) -> int:
        masks = self.vs_local_masks if stage is Stage.VERTEX else self.fs_local_masks
        return masks[pass_index]

    def stage_path(self, stage: Stage) -> str:
        """Path of the stage source that sits next to the descriptor."""
        info = FileInfo.of(self.path)
        return f"{info.dir}{info.basename}{stage.source_suffix}"


@dataclass(frozen=True, slots=True)
class Variant:
    """One compiled binary: a (pass, define mask, stage) combination."""

    pass_name: str
    mask: int
    stage: Stage
    path: str


@dataclass(frozen=True, slots=True)
class DependencyRecord:
    """Contents of one compiler-emitted .d file."""

    variant: str
    dependencies: Tuple[str, ...]
