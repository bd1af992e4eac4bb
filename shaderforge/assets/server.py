# shaderforge/assets/server.py
import hashlib
import logging
from concurrent.futures import ThreadPoolExecutor
from queue import Queue
from typing import Dict, List, Tuple

from shaderforge.assets.handle import ShaderHandle, ShaderId
from shaderforge.assets.registry import ShaderRegistry
from shaderforge.assets.types import CompiledShader, ShaderBinary
from shaderforge.importers.descriptor import DescriptorImporter
from shaderforge.paths import PathLike, normalize
from shaderforge.types import Stage
from shaderforge.variants import iter_variants

logger = logging.getLogger(__name__)


def shader_id_for(path: str) -> ShaderId:
    return ShaderId(int(hashlib.sha256(path.encode()).hexdigest(), 16) % (10**16))


class ShaderAssetServer:
    """
    Loads compiled variants for descriptors. Doubles as the reload target
    of ShaderCompiler: reload() re-reads a descriptor's binaries.
    """

    def __init__(self, compiled_dir: PathLike) -> None:
        self.compiled_dir = normalize(compiled_dir)
        self.registry = ShaderRegistry()

        self._executor = ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="ShaderLoader"
        )
        self._loaded_queue: "Queue[Tuple[ShaderId, CompiledShader]]" = Queue()
        self._importer = DescriptorImporter()

        self._handles: Dict[str, ShaderHandle] = {}  # Path -> Handle

    def load(self, path: str) -> ShaderHandle:
        """
        Non-blocking load request. Return handle instantly.
        """
        path = normalize(path)
        if path in self._handles:
            return self._handles[path]

        handle = ShaderHandle(shader_id_for(path), path)
        self._handles[path] = handle
        self._executor.submit(self._worker_load, handle)

        return handle

    def reload(self, path: str) -> None:
        """Re-read binaries of a shader that was just recompiled."""
        path = normalize(path)
        handle = self._handles.get(path)
        if handle is None:
            self.load(path)
            return
        self._executor.submit(self._worker_load, handle)

    def _worker_load(self, handle: ShaderHandle) -> None:
        """
        Read descriptor and variant binaries on a background thread.
        """
        try:
            descriptor = self._importer.import_file(handle.path)
            binaries: Dict[Tuple[str, int, Stage], ShaderBinary] = {}
            missing: List[str] = []

            for variant in iter_variants(descriptor, self.compiled_dir):
                try:
                    with open(variant.path, "rb") as f:
                        data = f.read()
                except FileNotFoundError:
                    missing.append(variant.path)
                    continue
                binaries[(variant.pass_name, variant.mask, variant.stage)] = (
                    ShaderBinary(variant.pass_name, variant.mask, variant.stage, data)
                )

            shader = CompiledShader(
                path=handle.path,
                defines=descriptor.defines,
                binaries=binaries,
                missing=tuple(missing),
            )
            self._loaded_queue.put((handle.id, shader))
        except (OSError, ValueError) as e:
            logger.error("Failed to load %s: %s", handle.path, e)

    def update(self) -> List[ShaderId]:
        """
        Called on the main thread every frame.
        Return ids loaded since the last call so the renderer can upload them.
        """
        loaded_ids = []
        while not self._loaded_queue.empty():
            shader_id, shader = self._loaded_queue.get()
            self.registry.store(shader_id, shader)
            loaded_ids.append(shader_id)

        return loaded_ids

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
