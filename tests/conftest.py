import os
import re
from pathlib import Path
from typing import List, Optional, Set

import pytest

from shaderforge.compiler import ShaderCompiler
from shaderforge.settings import CompilerSettings
from shaderforge.toolchain import CompileResult, CompilerInvocation

_INCLUDE = re.compile(r'#include\s+[<"]([^">]+)[">]')

BASIC_SHD = """
pass "MAIN"
    vs { "SKINNED" }
    fs { "SKINNED" }
"""


class FakeToolchain:
    """
    Stands in for shaderc: writes the binary and a .d file listing the
    stage source, every #include it finds and the varying file.
    """

    def __init__(self) -> None:
        self.invocations: List[CompilerInvocation] = []
        self.fail: Set[str] = set()  # output basenames that should fail

    def run(self, invocation: CompilerInvocation) -> CompileResult:
        self.invocations.append(invocation)
        name = os.path.basename(invocation.output)
        if name in self.fail:
            return CompileResult(returncode=1, output=f"{invocation.source}(1): error: boom")

        consulted = [invocation.source, invocation.varying_def]
        with open(invocation.source, "r", encoding="utf-8") as f:
            for include in _INCLUDE.findall(f.read()):
                consulted.append(os.path.join(invocation.include_dir, include))

        with open(invocation.output, "wb") as f:
            f.write(f"{invocation.defines}|{invocation.stage.value}".encode())
        with open(invocation.output + ".d", "w", encoding="utf-8") as f:
            f.write(f"{invocation.output} : {invocation.source} \\\n")
            for path in consulted:
                f.write(f"    {path} \\\n")
        return CompileResult(returncode=0)

    @property
    def outputs(self) -> List[str]:
        return [os.path.basename(i.output) for i in self.invocations]


class RecordingReloader:
    def __init__(self) -> None:
        self.paths: List[str] = []

    def reload(self, path: str) -> None:
        self.paths.append(path)


class RecordingNotifier:
    def __init__(self) -> None:
        self.events: List[tuple] = []

    def begin(self, message: str) -> int:
        self.events.append(("begin", message))
        return len(self.events)

    def end(self, handle: int, keep_visible_seconds: float) -> None:
        self.events.append(("end", keep_visible_seconds))

    def alert(self, message: str) -> None:
        self.events.append(("alert", message))


class RecordingPause:
    def __init__(self) -> None:
        self.states: List[bool] = []

    def enable_update(self, enabled: bool) -> None:
        self.states.append(enabled)


def write_shader(
    root: Path,
    name: str,
    shd: str = BASIC_SHD,
    vs: str = "void main() {}",
    fs: str = "void main() {}",
) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / f"{name}_vs.sc").write_text(vs)
    (root / f"{name}_fs.sc").write_text(fs)
    path = root / f"{name}.shd"
    path.write_text(shd)
    return path


def set_mtime(path, when: float) -> None:
    os.utime(path, (when, when))


@pytest.fixture
def pipeline(tmp_path):
    """Empty pipeline directory with a varying definition file."""
    root = tmp_path / "pipelines"
    root.mkdir()
    (root / "varying.def.sc").write_text("vec3 a_position : POSITION;")
    return root


@pytest.fixture
def shader_files():
    """Helpers for laying out shader sources."""

    class Files:
        write = staticmethod(write_shader)
        touch = staticmethod(set_mtime)
        basic = BASIC_SHD

    return Files


@pytest.fixture
def toolchain():
    return FakeToolchain()


@pytest.fixture
def reloader():
    return RecordingReloader()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def pause():
    return RecordingPause()


@pytest.fixture
def make_compiler(pipeline, toolchain, reloader, notifier, pause):
    """Builds a ShaderCompiler over the pipeline fixture, without a watcher."""
    created: List[ShaderCompiler] = []

    def factory(root: Optional[Path] = None, **kwargs) -> ShaderCompiler:
        settings = kwargs.pop("settings", None) or CompilerSettings(
            pipelines_dir=root or pipeline, watch=False
        )
        kwargs.setdefault("toolchain", toolchain)
        kwargs.setdefault("reloader", reloader)
        kwargs.setdefault("notifier", notifier)
        kwargs.setdefault("pause", pause)
        compiler = ShaderCompiler(settings, **kwargs)
        created.append(compiler)
        return compiler

    yield factory

    for compiler in created:
        compiler.close()
