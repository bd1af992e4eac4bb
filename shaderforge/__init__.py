from shaderforge.backend import BACKENDS, DIRECT3D11, OPENGL, RenderBackend
from shaderforge.changes import ChangeQueue
from shaderforge.compiler import ShaderCompiler
from shaderforge.dependencies import DependencyGraph
from shaderforge.reload import ReloadCoordinator
from shaderforge.settings import CompilerSettings
from shaderforge.sources import ShaderSourceIndex
from shaderforge.staleness import is_stale
from shaderforge.types import ShaderDescriptor, Stage, Variant

__all__ = [
    "BACKENDS",
    "DIRECT3D11",
    "OPENGL",
    "RenderBackend",
    "ChangeQueue",
    "ShaderCompiler",
    "DependencyGraph",
    "ReloadCoordinator",
    "CompilerSettings",
    "ShaderSourceIndex",
    "is_stale",
    "ShaderDescriptor",
    "Stage",
    "Variant",
]
