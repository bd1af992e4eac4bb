from shaderforge.assets.handle import ShaderHandle, ShaderId
from shaderforge.assets.registry import ShaderRegistry
from shaderforge.assets.server import ShaderAssetServer
from shaderforge.assets.types import CompiledShader, ShaderBinary

__all__ = [
    "ShaderAssetServer",
    "ShaderHandle",
    "ShaderId",
    "ShaderRegistry",
    "CompiledShader",
    "ShaderBinary",
]
