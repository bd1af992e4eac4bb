# shaderforge/importers/depfile.py
from typing import List

from shaderforge.importers.base import TextImporter
from shaderforge.paths import normalize
from shaderforge.types import DependencyRecord


def _first_token(line: str) -> str:
    return line.strip().split(" ", 1)[0]


class DepfileImporter(TextImporter):
    """
    Parses the dependency listing shaderc writes next to each binary.

    First line names the binary, every following line one file the compiler
    read. Make syntax after the first space (' : ', ' \\') is dropped.
    """

    def parse(self, text: str, path: str) -> DependencyRecord:
        lines = text.splitlines()
        variant = _first_token(lines[0]).rstrip(":") if lines else ""
        if not variant:
            raise ValueError(f"No binary named in dependency file {path}")

        dependencies: List[str] = []
        for line in lines[1:]:
            token = _first_token(line).rstrip(":")
            if not token or token == "\\":
                continue
            dependencies.append(normalize(token))

        return DependencyRecord(
            variant=normalize(variant), dependencies=tuple(dependencies)
        )
