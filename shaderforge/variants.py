# shaderforge/variants.py
from __future__ import annotations

from typing import Callable, Iterator, List, Sequence

import numpy as np

from shaderforge.paths import PathLike, join
from shaderforge.types import MAX_DEFINES, STAGES, ShaderDescriptor, Stage, Variant

DefineLookup = Callable[[str], str]


def is_subset(mask: int, local_mask: int) -> bool:
    """A variant exists only for masks that stay inside the local mask."""
    return (mask & ~local_mask) == 0


def enumerate_masks(local_mask: int, define_count: int) -> List[int]:
    """
    All masks in 0 .. 2^define_count - 1 that are subsets of local_mask,
    ascending.
    """
    if not 0 <= define_count <= MAX_DEFINES:
        raise ValueError(f"define_count must be in 0..{MAX_DEFINES}, got {define_count}")

    masks = np.arange(1 << define_count, dtype=np.uint32)
    keep = (masks & np.uint32(~local_mask & 0xFFFFFFFF)) == 0
    return [int(m) for m in masks[keep]]


def variant_path(
    compiled_dir: PathLike, basename: str, pass_name: str, mask: int, stage: Stage
) -> str:
    """{compiled_dir}/{basename}_{pass}{mask}_{vs|fs}.shb"""
    return join(compiled_dir, f"{basename}_{pass_name}{mask}{stage.binary_suffix}")


def iter_variants(
    descriptor: ShaderDescriptor,
    compiled_dir: PathLike,
    stages: Sequence[Stage] = STAGES,
) -> Iterator[Variant]:
    """
    Yield every in-scope variant, ordered by pass, then mask, then stage.

    Masks outside a pass's local mask are never turned into a path.
    """
    define_count = len(descriptor.defines)
    basename = descriptor.basename

    for i, pass_name in enumerate(descriptor.passes):
        per_stage = {
            stage: set(enumerate_masks(descriptor.local_mask(i, stage), define_count))
            for stage in stages
        }
        for mask in sorted(set().union(*per_stage.values())):
            for stage in stages:
                if mask in per_stage[stage]:
                    yield Variant(
                        pass_name=pass_name,
                        mask=mask,
                        stage=stage,
                        path=variant_path(
                            compiled_dir, basename, pass_name, mask, stage
                        ),
                    )


def define_string(
    descriptor: ShaderDescriptor,
    pass_name: str,
    mask: int,
    lookup: DefineLookup = str,
) -> str:
    """Pass name followed by every define whose bit is set, ';'-joined."""
    names = [pass_name]
    for bit, define in enumerate(descriptor.defines):
        if mask & (1 << bit):
            names.append(lookup(define))
    return ";".join(names)
