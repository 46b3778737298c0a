"""Typed build error model with a fixed, machine-readable error kind."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class ErrorKind(StrEnum):
    """Stable error kinds reported by a build invocation."""

    ENV_VAR_NOT_FOUND = "EnvVarNotFound"
    INVALID_GOARCH = "InvalidGOARCH"
    INVALID_GOOS = "InvalidGOOS"
    TOOL_EXEC = "ToolExecError"


class CgoBuildError(Exception):
    """Base error class that carries a kind, a message and optional context."""

    kind: ErrorKind
    message: str
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "context": dict(self.context),
        }


class EnvVarNotFoundError(CgoBuildError):
    def __init__(self, key: str) -> None:
        super().__init__(
            f"could not find environment variable {key}",
            kind=ErrorKind.ENV_VAR_NOT_FOUND,
            context={"key": key},
        )


class InvalidGoArchError(CgoBuildError):
    def __init__(self, target_arch: str) -> None:
        super().__init__(
            f"unexpected target arch {target_arch}",
            kind=ErrorKind.INVALID_GOARCH,
            context={"target_arch": target_arch},
        )


class InvalidGoOsError(CgoBuildError):
    def __init__(self, target_os: str) -> None:
        super().__init__(
            f"unexpected target os {target_os}",
            kind=ErrorKind.INVALID_GOOS,
            context={"target_os": target_os},
        )


class ToolExecError(CgoBuildError):
    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, kind=ErrorKind.TOOL_EXEC, context=context)


__all__ = [
    "CgoBuildError",
    "EnvVarNotFoundError",
    "ErrorKind",
    "InvalidGoArchError",
    "InvalidGoOsError",
    "ToolExecError",
]
