# shaderforge/compiler.py
from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional

from shaderforge.changes import ChangeQueue
from shaderforge.collaborators import (
    ChangeHandler,
    LogNotifier,
    Notifier,
    NullPauseSwitch,
    NullReloader,
    PauseSwitch,
    ResourceReloader,
)
from shaderforge.dependencies import DependencyGraph
from shaderforge.importers.descriptor import DescriptorImporter
from shaderforge.paths import (
    basename,
    extension,
    has_extension,
    join,
    last_modified,
    normalize,
)
from shaderforge.reload import ReloadCoordinator
from shaderforge.settings import CompilerSettings
from shaderforge.sources import ShaderSourceIndex
from shaderforge.staleness import is_stale
from shaderforge.toolchain import CompilerInvocation, ShadercToolchain, Toolchain
from shaderforge.types import (
    DESCRIPTOR_EXTENSION,
    STAGES,
    WATCHED_EXTENSIONS,
    ShaderDescriptor,
    Variant,
)
from shaderforge.variants import DefineLookup, define_string, iter_variants
from shaderforge.watcher import FileSystemWatcher

logger = logging.getLogger(__name__)

WatcherFactory = Callable[[str, ChangeHandler], FileSystemWatcher]


def is_supported_name(path: str) -> bool:
    """Underscores separate basename, pass and stage in binary names."""
    return "_" not in basename(path)


class ShaderCompiler:
    """
    Incremental shader build driven by a cooperative update loop.

    The watcher thread only ever touches `changes`. Everything else is
    owned by the thread calling update(), which compiles at most one
    descriptor per call.
    """

    def __init__(
        self,
        settings: Optional[CompilerSettings] = None,
        *,
        toolchain: Optional[Toolchain] = None,
        reloader: Optional[ResourceReloader] = None,
        notifier: Optional[Notifier] = None,
        pause: Optional[PauseSwitch] = None,
        define_lookup: DefineLookup = str,
        watcher_factory: WatcherFactory = FileSystemWatcher,
    ) -> None:
        self.settings = settings or CompilerSettings()
        self.root = self.settings.root
        self.compiled_dir = self.settings.compiled_dir

        self.toolchain: Toolchain = toolchain or ShadercToolchain(self.settings.shaderc)
        self.notifier: Notifier = notifier or LogNotifier()
        self.pause: PauseSwitch = pause or NullPauseSwitch()
        self.define_lookup = define_lookup

        self.sources = ShaderSourceIndex()
        self.dependencies = DependencyGraph(self.sources)
        self.changes = ChangeQueue()
        self.reloads = ReloadCoordinator(reloader or NullReloader(), self.dependencies)

        self._importer = DescriptorImporter()
        self._to_compile: List[str] = []
        self.failed: List[str] = []  # variant paths that failed in the current cycle
        self._notification: Optional[int] = None
        self._watcher: Optional[FileSystemWatcher] = None

        if self.settings.watch:
            self._start_watcher(watcher_factory)

        self.sources.discover(self.root)
        self.dependencies.rebuild(self.compiled_dir)
        self.make_up_to_date(wait=False)

    # --- Lifecycle ---

    def _start_watcher(self, watcher_factory: WatcherFactory) -> None:
        if not os.path.isdir(self.root) and not self._ensure_directories():
            return
        try:
            self._watcher = watcher_factory(self.root, self)
            self._watcher.start()
        except OSError as e:
            logger.error("Could not watch %s: %s", self.root, e)
            self._watcher = None

    def close(self) -> None:
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None

    def __enter__(self) -> ShaderCompiler:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def pending(self) -> List[str]:
        """Descriptors waiting to be compiled, next one last."""
        return list(self._to_compile)

    @property
    def is_idle(self) -> bool:
        return not self._to_compile

    # --- Change intake (watcher thread) ---

    def on_path_changed(self, path: str) -> None:
        if extension(path) not in WATCHED_EXTENSIONS:
            return
        self.changes.push(join(self.root, path))

    # --- Update loop ---

    def update(self) -> None:
        """One cooperative step: admit one change, compile one descriptor."""
        self._update_notifications()
        self.process_changed_files()

        if not self._to_compile:
            return

        self.pause.enable_update(False)
        self.compile(self._to_compile[-1])
        self._to_compile.pop()

        if not self._to_compile:
            self.reloads.finish_cycle(self.compiled_dir)
            self.pause.enable_update(True)
            self._update_notifications()

    def wait(self) -> None:
        """Block until the compile queue has drained."""
        while self._to_compile:
            self.update()

    def make_up_to_date(self, wait: bool = False) -> List[str]:
        """
        Queue every descriptor with a missing or outdated variant.
        Returns what was queued.
        """
        if self._to_compile:
            if wait:
                self.wait()
            return []
        if not len(self.sources):
            return []
        if not self._ensure_directories():
            return []

        queued = [p for p in self.stale_descriptors() if self._enqueue(p)]
        queued += [p for p in self._outdated_by_dependencies() if self._enqueue(p)]

        if wait:
            self.wait()
        return list(dict.fromkeys(queued))

    def process_changed_files(self) -> List[str]:
        """
        Resolve one pending change into descriptors to compile.
        Does nothing while a drain cycle is in progress.
        """
        if self._to_compile:
            return []

        changed = self.changes.pop_latest()
        if changed is None:
            return []

        path = changed
        if path not in self.dependencies:
            for stage in STAGES:
                suffix = stage.source_suffix
                if path.endswith(suffix) and len(path) > len(suffix):
                    path = f"{path[: -len(suffix)]}.{DESCRIPTOR_EXTENSION}"
                    break

        if has_extension(path, DESCRIPTOR_EXTENSION):
            if not self._is_known_descriptor(path):
                logger.debug("No shader descriptor for %s", changed)
                return []
            return [path] if self._enqueue(path) else []

        if path in self.dependencies:
            return [p for p in self.dependencies.descriptors_for(path) if self._enqueue(p)]

        logger.debug("Nothing depends on %s", changed)
        return []

    # --- Compilation ---

    def compile(self, path: str) -> bool:
        """
        Build every variant of one descriptor. Individual variant failures
        are logged and do not stop the rest. False if nothing was attempted.
        """
        path = normalize(path)
        if not self._check_name(path):
            return False
        if not self._ensure_directories():
            return False

        descriptor = self.read_descriptor(path)
        if descriptor is None:
            return False

        failed = 0
        for stage in STAGES:
            for variant in iter_variants(descriptor, self.compiled_dir, stages=(stage,)):
                self._update_notifications()
                if not self._compile_variant(descriptor, variant):
                    failed += 1

        if failed:
            logger.warning("%s: %d variant(s) failed to compile", path, failed)
        self.reloads.add(path)
        return True

    def _compile_variant(self, descriptor: ShaderDescriptor, variant: Variant) -> bool:
        backend = self.settings.backend
        defines = define_string(
            descriptor, variant.pass_name, variant.mask, self.define_lookup
        )
        invocation = CompilerInvocation(
            source=descriptor.stage_path(variant.stage),
            output=variant.path,
            stage=variant.stage,
            include_dir=self.settings.include_dir,
            varying_def=self.settings.varying_path,
            platform=backend.platform,
            profile=backend.profile(variant.stage),
            optimization_level=self.settings.optimization_level,
            defines=defines,
        )

        result = self.toolchain.run(invocation)
        if not result.ok:
            self.failed.append(variant.path)
            logger.error(
                'Failed to compile %s (%s), defines = "%s"\n%s',
                invocation.source,
                invocation.output,
                defines,
                result.output.rstrip(),
            )
        return result.ok

    # --- Staleness ---

    def stale_descriptors(self) -> List[str]:
        """Indexed descriptors with at least one missing or outdated variant."""
        stale = []
        for path in self.sources:
            descriptor = self.read_descriptor(path)
            if descriptor is not None and is_stale(descriptor, self.compiled_dir):
                stale.append(path)
        return stale

    def _outdated_by_dependencies(self) -> List[str]:
        """Descriptors with a variant older than some file it was built from."""
        outdated = []
        for dependency, variants in self.dependencies.items():
            dependency_time = last_modified(dependency)
            for variant in sorted(variants):
                variant_time = last_modified(variant)
                if variant_time is not None and (
                    dependency_time is None or variant_time >= dependency_time
                ):
                    continue
                src = self.dependencies.source_from_binary_basename(basename(variant))
                if src is not None:
                    outdated.append(src)
        return list(dict.fromkeys(outdated))

    # --- Helpers ---

    def _enqueue(self, path: str) -> bool:
        if not self._check_name(path):
            return False
        if not self._to_compile:
            self.failed.clear()
        if path not in self._to_compile:
            self._to_compile.append(path)
        return True

    def _check_name(self, path: str) -> bool:
        if not is_supported_name(path):
            logger.error(
                "Shaders with underscore are not supported. %s will not be compiled.",
                path,
            )
            return False
        return True

    def _is_known_descriptor(self, path: str) -> bool:
        if path in self.dependencies or path in self.sources:
            return True
        if os.path.isfile(path):
            logger.info("New shader %s", path)
            self.sources.add(path)
            return True
        return False

    def read_descriptor(self, path: str) -> Optional[ShaderDescriptor]:
        try:
            return self._importer.import_file(path)
        except OSError as e:
            logger.error("Could not open %s: %s", path, e)
        except ValueError as e:
            logger.error("Invalid shader descriptor %s: %s", path, e)
        return None

    def _ensure_directories(self) -> bool:
        for directory in (self.root, self.compiled_dir):
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                self.notifier.alert(
                    f"Could not create directory {directory} ({e}). "
                    "Please create it and restart."
                )
                return False
        return True

    def _update_notifications(self) -> None:
        if self._to_compile and self._notification is None:
            self._notification = self.notifier.begin("Compiling shaders...")

        if not self._to_compile and self._notification is not None:
            self.notifier.end(self._notification, self.settings.notification_seconds)
            self._notification = None
