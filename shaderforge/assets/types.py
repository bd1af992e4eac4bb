# shaderforge/assets/types.py
from dataclasses import dataclass, field
from typing import Dict, Tuple

from shaderforge.types import Stage


@dataclass(frozen=True)
class ShaderBinary:
    """One compiled variant as read from disk."""

    pass_name: str
    mask: int
    stage: Stage
    data: bytes


@dataclass(frozen=True)
class CompiledShader:
    """All variant binaries of one descriptor, ready for the renderer."""

    path: str
    defines: Tuple[str, ...]
    binaries: Dict[Tuple[str, int, Stage], ShaderBinary] = field(default_factory=dict)
    missing: Tuple[str, ...] = ()  # variant paths that were not on disk

    def binary(self, pass_name: str, mask: int, stage: Stage) -> ShaderBinary:
        return self.binaries[(pass_name, mask, stage)]
