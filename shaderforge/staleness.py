# shaderforge/staleness.py
from __future__ import annotations

import math
from typing import List

from shaderforge.paths import PathLike, last_modified
from shaderforge.types import STAGES, ShaderDescriptor, Variant
from shaderforge.variants import iter_variants


def source_timestamp(descriptor: ShaderDescriptor) -> float:
    """
    Newest mtime among the descriptor and its two stage sources.
    A missing file is infinitely new, so everything built from it is stale.
    """
    newest = -math.inf
    for path in (descriptor.path, *(descriptor.stage_path(s) for s in STAGES)):
        mtime = last_modified(path)
        if mtime is None:
            return math.inf
        newest = max(newest, mtime)
    return newest


def _is_outdated(variant: Variant, baseline: float) -> bool:
    mtime = last_modified(variant.path)
    return mtime is None or mtime < baseline


def is_stale(descriptor: ShaderDescriptor, compiled_dir: PathLike) -> bool:
    """True as soon as one in-scope variant is missing or older than its sources."""
    baseline = source_timestamp(descriptor)
    return any(
        _is_outdated(v, baseline) for v in iter_variants(descriptor, compiled_dir)
    )


def stale_variants(descriptor: ShaderDescriptor, compiled_dir: PathLike) -> List[Variant]:
    baseline = source_timestamp(descriptor)
    return [v for v in iter_variants(descriptor, compiled_dir) if _is_outdated(v, baseline)]
