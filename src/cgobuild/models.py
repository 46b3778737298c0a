"""Core typed dataclasses for build configuration, invocations and results."""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Literal

LinkKind = Literal["static", "dynamic"]


class BuildMode(StrEnum):
    """Artifact kind requested from ``go build -buildmode``.

    See https://pkg.go.dev/cmd/go#hdr-Build_modes.
    """

    # Build the listed main package, plus all packages it imports, into a C
    # archive file. Only functions exported with a cgo //export comment are
    # callable.
    C_ARCHIVE = "c-archive"
    # Same as C_ARCHIVE, but produces a C shared library.
    C_SHARED = "c-shared"

    @property
    def link_kind(self) -> LinkKind:
        if self is BuildMode.C_SHARED:
            return "dynamic"
        return "static"


class BuildPhase(StrEnum):
    CONFIGURED = "configured"
    TRANSLATING = "translating"
    INVOKING = "invoking"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(slots=True)
class BuildConfig:
    """Options accumulated by :class:`cgobuild.build.Build`. Never validated."""

    build_mode: BuildMode = BuildMode.C_ARCHIVE
    cargo_metadata: bool = True
    change_dir: Path | None = None
    ldflags: str | None = None
    out_dir: Path | None = None
    packages: list[str] = field(default_factory=list)
    trimpath: bool = False
    tool: str = "go"
    extra_env: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GoTarget:
    goarch: str
    goos: str


@dataclass(frozen=True, slots=True)
class Invocation:
    """A fully assembled ``go build`` command, ready to be executed."""

    argv: tuple[str, ...]
    env: Mapping[str, str]
    out_dir: Path
    out_path: Path
    lib_name: str
    output: str
    link_kind: LinkKind

    @property
    def command(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True, slots=True)
class ToolOutput:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True, slots=True)
class BuildOutcome:
    invocation: Invocation
    output: ToolOutput
    directives: tuple[str, ...] = field(default_factory=tuple)

    @property
    def artifact(self) -> Path:
        return self.invocation.out_path
