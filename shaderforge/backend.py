# shaderforge/backend.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict

import moderngl

from shaderforge.types import Stage

# GLSL profiles shaderc accepts for --profile
GLSL_PROFILES = (120, 130, 140, 150, 330, 400, 410, 420, 430, 440)


@dataclass(frozen=True, slots=True)
class RenderBackend:
    """Where binaries go and which shaderc target they are built for."""

    name: str
    compiled_dir_name: str
    platform: str
    vertex_profile: str
    fragment_profile: str

    def profile(self, stage: Stage) -> str:
        return self.vertex_profile if stage is Stage.VERTEX else self.fragment_profile


OPENGL = RenderBackend(
    name="opengl",
    compiled_dir_name="compiled_gl",
    platform="linux",
    vertex_profile="140",
    fragment_profile="140",
)

DIRECT3D11 = RenderBackend(
    name="d3d11",
    compiled_dir_name="compiled",
    platform="windows",
    vertex_profile="vs_5_0",
    fragment_profile="ps_5_0",
)

BACKENDS: Dict[str, RenderBackend] = {b.name: b for b in (OPENGL, DIRECT3D11)}


def glsl_profile(version_code: int) -> str:
    """Highest GLSL profile not above the context version (e.g. 460 -> '440')."""
    usable = [p for p in GLSL_PROFILES if p <= version_code]
    return str(usable[-1] if usable else GLSL_PROFILES[0])


def backend_for_context(ctx: moderngl.Context) -> RenderBackend:
    """OpenGL backend targeting the GLSL version of a live context."""
    profile = glsl_profile(ctx.version_code)
    return replace(OPENGL, vertex_profile=profile, fragment_profile=profile)
