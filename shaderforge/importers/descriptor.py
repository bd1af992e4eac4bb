# shaderforge/importers/descriptor.py
import re
from typing import Dict, List

from shaderforge.importers.base import TextImporter
from shaderforge.paths import normalize
from shaderforge.types import MAX_DEFINES, ShaderDescriptor

# string literals are matched first so "--" inside quotes survives
_COMMENT = re.compile(r'("[^"\n]*")|--[^\n]*')
_STATEMENT = re.compile(
    r'\bpass\s*\(?\s*"(?P<pass>[^"]*)"\s*\)?'
    r"|\b(?P<stage>vs|fs)\s*\{(?P<body>[^}]*)\}"
)
_NAME = re.compile(r'"([^"]*)"')


def _strip_comments(text: str) -> str:
    return _COMMENT.sub(lambda m: m.group(1) or "", text)


class DescriptorImporter(TextImporter):
    """
    Parses .shd descriptors.

        pass "MAIN"
            vs { "SKINNED" }
            fs { "SKINNED", "ALPHA_CUTOUT" }

    Anything that is not a pass/vs/fs statement (texture slots, uniforms...)
    is left alone.
    """

    def parse(self, text: str, path: str) -> ShaderDescriptor:
        passes: List[str] = []
        vs_masks: List[int] = []
        fs_masks: List[int] = []
        define_bits: Dict[str, int] = {}

        for match in _STATEMENT.finditer(_strip_comments(text)):
            if match.group("stage") is None:
                name = match.group("pass").strip()
                if not name:
                    raise ValueError(f"Empty pass name in {path}")
                passes.append(name)
                vs_masks.append(0)
                fs_masks.append(0)
                continue

            if not passes:
                raise ValueError(
                    f"'{match.group('stage')}' block before any pass in {path}"
                )

            mask = 0
            for define in _NAME.findall(match.group("body")):
                define = define.strip()
                if not define:
                    continue
                if define not in define_bits:
                    if len(define_bits) >= MAX_DEFINES:
                        raise ValueError(
                            f"Too many defines in {path} (max {MAX_DEFINES})"
                        )
                    define_bits[define] = len(define_bits)
                mask |= 1 << define_bits[define]

            if match.group("stage") == "vs":
                vs_masks[-1] |= mask
            else:
                fs_masks[-1] |= mask

        return ShaderDescriptor(
            path=normalize(path),
            passes=tuple(passes),
            defines=tuple(define_bits),
            vs_local_masks=tuple(vs_masks),
            fs_local_masks=tuple(fs_masks),
        )
