# shaderforge/assets/handle.py
from dataclasses import dataclass
from typing import NewType

ShaderId = NewType("ShaderId", int)  # hash of the normalized descriptor path


@dataclass(frozen=True)
class ShaderHandle:
    """
    Lightweight reference to a compiled shader.
    Holding this does not guarantee its binaries are loaded.
    """

    id: ShaderId
    path: str
