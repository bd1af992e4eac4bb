# shaderforge/settings.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from shaderforge.backend import OPENGL, RenderBackend
from shaderforge.paths import join, normalize


@dataclass(frozen=True, slots=True)
class CompilerSettings:
    """Shader build configuration."""

    pipelines_dir: Path = Path("pipelines")
    backend: RenderBackend = OPENGL
    shaderc: Optional[str] = None  # falls back to $SHADERC, then PATH
    optimization_level: int = 3
    varying_def: str = "varying.def.sc"
    notification_seconds: float = 3.0
    watch: bool = True

    @property
    def root(self) -> str:
        return normalize(self.pipelines_dir.absolute())

    @property
    def compiled_dir(self) -> str:
        return join(self.root, self.backend.compiled_dir_name)

    @property
    def include_dir(self) -> str:
        return self.root + "/"

    @property
    def varying_path(self) -> str:
        return join(self.root, self.varying_def)
