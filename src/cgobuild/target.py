"""Translation of cargo target identifiers into ``GOARCH``/``GOOS`` values.

References:

- https://doc.rust-lang.org/reference/conditional-compilation.html
- https://go.dev/doc/install/source#environment
"""

from __future__ import annotations

from cgobuild.config import BuildEnvironment
from cgobuild.errors import InvalidGoArchError, InvalidGoOsError
from cgobuild.models import GoTarget

_GOARCH_RENAMES: dict[str, str] = {
    "x86": "386",
    "x86_64": "amd64",
    "powerpc64": "ppc64",
    "aarch64": "arm64",
}
_GOARCH_IDENTITY = frozenset({"mips", "mips64", "arm"})

_GOOS_RENAMES: dict[str, str] = {
    "macos": "darwin",
}
_GOOS_IDENTITY = frozenset(
    {
        "windows",
        "ios",
        "linux",
        "android",
        "freebsd",
        "dragonfly",
        "openbsd",
        "netbsd",
    }
)


def goarch_for(target_arch: str) -> str:
    if target_arch in _GOARCH_RENAMES:
        return _GOARCH_RENAMES[target_arch]
    if target_arch in _GOARCH_IDENTITY:
        return target_arch
    raise InvalidGoArchError(target_arch)


def goos_for(target_os: str) -> str:
    if target_os in _GOOS_RENAMES:
        return _GOOS_RENAMES[target_os]
    if target_os in _GOOS_IDENTITY:
        return target_os
    raise InvalidGoOsError(target_os)


def target_from_env(env: BuildEnvironment) -> GoTarget:
    """Translate the cargo-reported target, architecture first.

    The first missing variable or unknown identifier is raised; the OS is not
    looked at when the architecture already failed.
    """
    goarch = goarch_for(env.target_arch)
    goos = goos_for(env.target_os)
    return GoTarget(goarch=goarch, goos=goos)
