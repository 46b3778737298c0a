"""Compile Go packages with cgo from build scripts and link them via cargo."""

from .build import Build
from .config import BuildEnvironment
from .errors import (
    CgoBuildError,
    EnvVarNotFoundError,
    ErrorKind,
    InvalidGoArchError,
    InvalidGoOsError,
    ToolExecError,
)
from .metadata import MetadataReporter
from .models import BuildConfig, BuildMode, BuildOutcome, BuildPhase, GoTarget, Invocation, ToolOutput
from .naming import format_lib_name
from .runner import CommandRunner, SubprocessRunner
from .target import goarch_for, goos_for, target_from_env
from .toolchain import Compilers, resolve_cc, resolve_cxx

__all__ = [
    "Build",
    "BuildConfig",
    "BuildEnvironment",
    "BuildMode",
    "BuildOutcome",
    "BuildPhase",
    "CgoBuildError",
    "CommandRunner",
    "Compilers",
    "EnvVarNotFoundError",
    "ErrorKind",
    "GoTarget",
    "InvalidGoArchError",
    "InvalidGoOsError",
    "Invocation",
    "MetadataReporter",
    "SubprocessRunner",
    "ToolExecError",
    "ToolOutput",
    "format_lib_name",
    "goarch_for",
    "goos_for",
    "resolve_cc",
    "resolve_cxx",
    "target_from_env",
]
