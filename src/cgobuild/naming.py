"""Platform-specific library file names."""

from __future__ import annotations

import sys

from cgobuild.models import BuildMode


def host_os() -> str:
    if sys.platform.startswith("win") or sys.platform == "cygwin":
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    return sys.platform


def format_lib_name(output: str, build_mode: BuildMode, host: str | None = None) -> str:
    """Return ``lib<output>`` with the extension for ``build_mode`` on ``host``.

    ``host`` defaults to the running interpreter's platform. Shared libraries
    use ``.so`` on every non-Windows host, macOS included.
    """
    windows = (host or host_os()) == "windows"
    if build_mode is BuildMode.C_SHARED:
        extension = ".dll" if windows else ".so"
    else:
        extension = ".lib" if windows else ".a"
    return f"lib{output}{extension}"
