# shaderforge/toolchain.py
from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol

from shaderforge.types import Stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompilerInvocation:
    """Everything shaderc needs to build one variant."""

    source: str
    output: str
    stage: Stage
    include_dir: str
    varying_def: str
    platform: str
    profile: str
    optimization_level: int
    defines: str

    def arguments(self) -> List[str]:
        return [
            "-f", self.source,
            "-o", self.output,
            "--depends",
            "-i", self.include_dir,
            "--varyingdef", self.varying_def,
            "--platform", self.platform,
            "--profile", self.profile,
            "--type", self.stage.value,
            f"-O{self.optimization_level}",
            "--define", self.defines,
        ]


@dataclass(frozen=True, slots=True)
class CompileResult:
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Toolchain(Protocol):
    def run(self, invocation: CompilerInvocation) -> CompileResult: ...


def discover_shaderc(explicit: Optional[str] = None) -> str:
    if explicit:
        return explicit
    env_path = os.environ.get("SHADERC")
    if env_path:
        return env_path
    return shutil.which("shaderc") or "shaderc"


class ShadercToolchain:
    """
    Runs the shaderc executable, one process per variant.

    No timeout is put on the compiler process.
    """

    def __init__(self, executable: Optional[str] = None) -> None:
        self.executable = discover_shaderc(executable)

    def run(self, invocation: CompilerInvocation) -> CompileResult:
        cmd = [self.executable, *invocation.arguments()]
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True
            )
        except OSError as e:
            return CompileResult(returncode=-1, output=f"Could not run {self.executable}: {e}")
        return CompileResult(returncode=proc.returncode, output=proc.stdout or "")
