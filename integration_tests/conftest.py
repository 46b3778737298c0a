"""Shared helpers for integration tests."""

from __future__ import annotations

import platform
import shutil

import pytest

_CARGO_ARCH = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


def host_cargo_env() -> dict[str, str]:
    """Describe the running host the way cargo describes a native target."""
    arch = _CARGO_ARCH.get(platform.machine().lower())
    if arch is None:
        pytest.skip(f"unsupported host architecture {platform.machine()}")
    system = platform.system().lower()
    target_os = {"darwin": "macos"}.get(system, system)
    return {"CARGO_CFG_TARGET_ARCH": arch, "CARGO_CFG_TARGET_OS": target_os}


requires_go = pytest.mark.skipif(
    shutil.which("go") is None or shutil.which("cc") is None,
    reason="go and a C compiler are required.",
)
