# shaderforge/cli.py
"""
Command line front end.

    shaderforge build  [--root pipelines] [--backend opengl|d3d11]
    shaderforge status [--root pipelines]
    shaderforge watch  [--root pipelines] [--fps 10]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pygame

from shaderforge.backend import BACKENDS
from shaderforge.compiler import ShaderCompiler, is_supported_name
from shaderforge.settings import CompilerSettings
from shaderforge.staleness import stale_variants

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="shaderforge", description="Incremental shaderc build for .shd shaders."
    )
    parser.add_argument("command", choices=("build", "status", "watch"))
    parser.add_argument("--root", type=Path, default=Path("pipelines"), help="Pipeline directory.")
    parser.add_argument("--backend", choices=sorted(BACKENDS), default="opengl")
    parser.add_argument("--shaderc", type=str, help="Path to the shaderc executable.")
    parser.add_argument("-O", dest="optimization_level", type=int, default=3)
    parser.add_argument("--fps", type=int, default=10, help="Update rate in watch mode.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(name)s] %(levelname)s: %(message)s",
    )


def _status(compiler: ShaderCompiler) -> int:
    stale = 0
    unsupported = 0
    for path in compiler.sources:
        if not is_supported_name(path):
            unsupported += 1
            print(f"{path}: unsupported name (underscore), never compiled")
            continue
        descriptor = compiler.read_descriptor(path)
        if descriptor is None:
            continue
        variants = stale_variants(descriptor, compiler.compiled_dir)
        if variants:
            stale += 1
            print(f"{path}: {len(variants)} stale variant(s)")
            for v in variants:
                print(f"    {v.path}")
    print(f"{stale} of {len(compiler.sources) - unsupported} shaders need compiling")
    return 1 if stale else 0


def _watch(compiler: ShaderCompiler, fps: int) -> int:
    pygame.init()
    clock = pygame.time.Clock()
    logger.info("Watching %s (Ctrl+C to stop)", compiler.root)
    try:
        while True:
            compiler.update()
            clock.tick(fps)
    except KeyboardInterrupt:
        logger.info("Stopped")
    finally:
        pygame.quit()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    settings = CompilerSettings(
        pipelines_dir=args.root,
        backend=BACKENDS[args.backend],
        shaderc=args.shaderc,
        optimization_level=args.optimization_level,
        watch=args.command == "watch",
    )

    with ShaderCompiler(settings) as compiler:
        if args.command == "status":
            return _status(compiler)
        if args.command == "watch":
            return _watch(compiler, args.fps)

        compiler.wait()
        if compiler.failed:
            logger.error("%d variant(s) failed to compile", len(compiler.failed))
            return 1
        return 0
