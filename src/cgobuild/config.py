"""Environment-driven configuration supplied by the host build pipeline."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from cgobuild.errors import EnvVarNotFoundError

TARGET_ARCH_VAR = "CARGO_CFG_TARGET_ARCH"
TARGET_OS_VAR = "CARGO_CFG_TARGET_OS"
OUT_DIR_VAR = "OUT_DIR"
TARGET_VAR = "TARGET"
HOST_VAR = "HOST"


@dataclass(frozen=True, slots=True)
class BuildEnvironment:
    """Read-only view over the variables a build script is launched with."""

    values: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> BuildEnvironment:
        source = os.environ if environ is None else environ
        return cls(values=dict(source))

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def require(self, key: str) -> str:
        value = self.values.get(key)
        if value is None:
            raise EnvVarNotFoundError(key)
        return value

    @property
    def target_arch(self) -> str:
        return self.require(TARGET_ARCH_VAR)

    @property
    def target_os(self) -> str:
        return self.require(TARGET_OS_VAR)

    @property
    def target_triple(self) -> str | None:
        return self.get(TARGET_VAR)

    def out_dir(self, explicit: Path | None = None) -> Path:
        """Return the explicit output directory, or ``OUT_DIR`` if none was set."""
        if explicit is not None:
            return explicit
        return Path(self.require(OUT_DIR_VAR))

    @property
    def host_triple(self) -> str | None:
        return self.get(HOST_VAR)

    @property
    def cross_compiling(self) -> bool:
        target, host = self.target_triple, self.host_triple
        return bool(target and host and target != host)
