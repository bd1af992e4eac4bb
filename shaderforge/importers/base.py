# shaderforge/importers/base.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union


class TextImporter(ABC):
    """Turns a text file from the pipeline tree into a plain data object."""

    def import_file(self, path: Union[str, Path]) -> Any:
        """
        Read file from disk and parse it.
        Raises OSError when the file cannot be read, ValueError when it is malformed.
        """
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        return self.parse(text, str(path))

    @abstractmethod
    def parse(self, text: str, path: str) -> Any:
        """Must be thread-safe."""
        pass
