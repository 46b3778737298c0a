"""Shared test fixtures."""

from __future__ import annotations

import io
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from cgobuild import Build, MetadataReporter, ToolOutput
from cgobuild.config import BuildEnvironment
from cgobuild.toolchain import Compilers


@dataclass(slots=True)
class FakeRunner:
    """Records invocations and returns a canned result instead of running go."""

    result: ToolOutput = field(default_factory=lambda: ToolOutput(returncode=0))
    calls: list[tuple[tuple[str, ...], dict[str, str]]] = field(default_factory=list)

    def run(self, argv: Sequence[str], env: Mapping[str, str]) -> ToolOutput:
        self.calls.append((tuple(argv), dict(env)))
        return self.result


def fixed_compilers(env: BuildEnvironment) -> Compilers:
    return Compilers(cc=Path("/usr/bin/cc"), cxx=Path("/usr/bin/c++"))


@pytest.fixture
def cargo_env(tmp_path: Path) -> dict[str, str]:
    return {
        "CARGO_CFG_TARGET_ARCH": "x86_64",
        "CARGO_CFG_TARGET_OS": "linux",
        "OUT_DIR": str(tmp_path / "out"),
    }


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def builder(runner: FakeRunner, stdout: io.StringIO) -> Build:
    return Build(
        runner=runner,
        reporter=MetadataReporter(stream=stdout),
        compilers=fixed_compilers,
        host="linux",
    )


@pytest.fixture
def compilers():
    return fixed_compilers
