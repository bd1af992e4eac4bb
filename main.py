"""
Live shader editing host.

Opens a window, compiles every descriptor under ./pipelines for the GLSL
version of the context and keeps recompiling while sources are edited.
Progress is shown in the window title.

Expected keys:
    - R: force a full rebuild check
    - ESC: quit
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import moderngl
import pygame

from shaderforge.assets import ShaderAssetServer
from shaderforge.backend import backend_for_context
from shaderforge.cli import configure_logging
from shaderforge.compiler import ShaderCompiler
from shaderforge.notifications import CaptionNotifier
from shaderforge.settings import CompilerSettings


@dataclass(slots=True)
class AppState:
    updating: bool = True  # False while a compile cycle is running

    def enable_update(self, enabled: bool) -> None:
        self.updating = enabled


def _handle_pygame_events(compiler: ShaderCompiler) -> None:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            compiler.close()
            pygame.quit()
            sys.exit(0)
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                compiler.close()
                pygame.quit()
                sys.exit(0)
            if event.key == pygame.K_r:
                compiler.make_up_to_date()


def main() -> None:
    """Main entrypoint for the live shader editing host."""
    configure_logging(verbose=False)

    window_width, window_height = 960, 540

    pygame.init()
    pygame.display.set_mode(
        (window_width, window_height),
        pygame.OPENGL | pygame.DOUBLEBUF,
    )
    pygame.display.set_caption("shaderforge")
    clock = pygame.time.Clock()

    ctx = moderngl.create_context()
    gl_version = ctx.version_code
    print(f"OpenGL version {str(gl_version)[0]}.{str(gl_version)[1:]}")

    settings = CompilerSettings(
        pipelines_dir=Path("pipelines"),
        backend=backend_for_context(ctx),
    )

    state = AppState()
    notifier = CaptionNotifier()
    shaders = ShaderAssetServer(settings.compiled_dir)

    compiler = ShaderCompiler(
        settings, reloader=shaders, notifier=notifier, pause=state
    )
    for path in compiler.sources:
        shaders.load(path)

    while True:
        _handle_pygame_events(compiler)

        compiler.update()
        notifier.tick()

        for shader_id in shaders.update():
            shader = shaders.registry.get(shader_id)
            if shader is not None and shader.missing:
                print(f"[Shaders] {shader.path}: {len(shader.missing)} variant(s) missing")

        # lighter background while a compile cycle runs
        brightness = 0.05 if state.updating else 0.15
        ctx.clear(brightness, brightness, brightness)
        pygame.display.flip()
        clock.tick(60)


if __name__ == "__main__":
    main()
