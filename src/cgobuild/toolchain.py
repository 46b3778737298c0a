"""Host C/C++ compiler resolution for the cgo ``CC``/``CXX`` variables.

Lookup follows the convention build scripts already use for C code:
``<VAR>_<target>`` (verbatim, then with ``-`` replaced by ``_``), then
``HOST_<VAR>`` for native builds or ``TARGET_<VAR>`` for cross builds, then
the plain variable, and finally a default for the target. Cross builds to
GNU targets default to the prefixed cross compiler, e.g.
``aarch64-linux-gnu-gcc``. The returned path is not checked for existence;
a bad compiler surfaces when ``go build`` runs.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from cgobuild.config import BuildEnvironment


@dataclass(frozen=True, slots=True)
class Compilers:
    cc: Path
    cxx: Path


CompilerResolver = Callable[[BuildEnvironment], Compilers]

# Triples whose cross toolchain prefix is not simply ``<arch>-<os>-<env>``.
_CROSS_PREFIXES: dict[str, str] = {
    "x86_64-pc-windows-gnu": "x86_64-w64-mingw32",
    "i686-pc-windows-gnu": "i686-w64-mingw32",
    "armv7-unknown-linux-gnueabihf": "arm-linux-gnueabihf",
    "riscv64gc-unknown-linux-gnu": "riscv64-linux-gnu",
}


def resolve_cc(env: BuildEnvironment) -> Path:
    return _resolve(env, var="CC", cpp=False)


def resolve_cxx(env: BuildEnvironment) -> Path:
    return _resolve(env, var="CXX", cpp=True)


def resolve_compilers(env: BuildEnvironment) -> Compilers:
    return Compilers(cc=resolve_cc(env), cxx=resolve_cxx(env))


def cross_prefix(target: str) -> str | None:
    """Return the GNU cross toolchain prefix for ``target``, if it has one."""
    if target in _CROSS_PREFIXES:
        return _CROSS_PREFIXES[target]
    parts = target.split("-")
    if len(parts) == 4 and parts[2] == "linux" and parts[3].startswith("gnu"):
        arch, _vendor, system, abi = parts
        return f"{arch}-{system}-{abi}"
    return None


def _resolve(env: BuildEnvironment, *, var: str, cpp: bool) -> Path:
    for key in _candidate_keys(var, env):
        value = env.get(key)
        if value:
            return Path(value)
    return Path(_default_compiler(env, cpp=cpp))


def _candidate_keys(var: str, env: BuildEnvironment) -> list[str]:
    keys: list[str] = []
    target = env.target_triple
    if target:
        keys.append(f"{var}_{target}")
        keys.append(f"{var}_{target.replace('-', '_')}")
    kind = "TARGET" if env.cross_compiling else "HOST"
    keys.append(f"{kind}_{var}")
    keys.append(var)
    return keys


def _default_compiler(env: BuildEnvironment, *, cpp: bool) -> str:
    target = env.target_triple or ""
    if target.endswith("-msvc"):
        return "cl.exe"
    if env.cross_compiling:
        prefix = cross_prefix(target)
        if prefix is not None:
            return f"{prefix}-g++" if cpp else f"{prefix}-gcc"
    if target.endswith("-windows-gnu"):
        return "g++" if cpp else "gcc"
    return "c++" if cpp else "cc"
