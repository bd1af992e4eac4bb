# shaderforge/paths.py
from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


def normalize(path: PathLike) -> str:
    """
    Canonical string form of a path.

    Forward slashes only, no '.' or duplicate separators, '..' collapsed.
    Every path stored in a queue, index or graph goes through here so that
    plain string comparison is enough.
    """
    text = os.fspath(path).replace("\\", "/")
    if not text:
        return ""
    return posixpath.normpath(text)


def join(root: PathLike, *parts: str) -> str:
    return normalize(posixpath.join(normalize(root), *parts))


def extension(path: PathLike) -> str:
    """Extension without the dot, empty when there is none."""
    name = posixpath.basename(normalize(path))
    stem, dot, ext = name.rpartition(".")
    return ext if dot and stem else ""


def has_extension(path: PathLike, ext: str) -> bool:
    return extension(path) == ext


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Directory / basename / extension split of a path."""

    dir: str  # keeps the trailing '/', empty for bare file names
    basename: str  # file name without extension
    extension: str  # without the dot

    @classmethod
    def of(cls, path: PathLike) -> FileInfo:
        norm = normalize(path)
        head, slash, name = norm.rpartition("/")
        directory = head + "/" if slash else ""
        stem, dot, ext = name.rpartition(".")
        if not dot or not stem:
            stem, ext = name, ""
        return cls(dir=directory, basename=stem, extension=ext)


def basename(path: PathLike) -> str:
    return FileInfo.of(path).basename


def last_modified(path: PathLike) -> Optional[float]:
    """Modification time, or None when the file does not exist."""
    try:
        return os.path.getmtime(path)
    except OSError:
        return None
