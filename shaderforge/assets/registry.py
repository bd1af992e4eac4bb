# shaderforge/assets/registry.py
from typing import Dict, Optional

from shaderforge.assets.handle import ShaderId
from shaderforge.assets.types import CompiledShader


class ShaderRegistry:
    """
    Stores loaded shader binaries mapped by ShaderId.
    """

    def __init__(self) -> None:
        self._storage: Dict[ShaderId, CompiledShader] = {}

    def store(self, shader_id: ShaderId, shader: CompiledShader) -> None:
        """Register (or replace) a loaded shader."""
        self._storage[shader_id] = shader

    def get(self, shader_id: ShaderId) -> Optional[CompiledShader]:
        """Retrieve shader binaries if available."""
        return self._storage.get(shader_id)

    def __contains__(self, shader_id: ShaderId) -> bool:
        return shader_id in self._storage

    def clear(self) -> None:
        """Forget all loaded shaders."""
        self._storage.clear()
