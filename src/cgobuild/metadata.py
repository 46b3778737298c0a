"""Cargo metadata directives describing how to link the built library."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from cgobuild.models import LinkKind


def link_search_directive(out_dir: Path) -> str:
    return f"cargo:rustc-link-search=native={out_dir}"


def link_lib_directive(kind: LinkKind, output: str) -> str:
    return f"cargo:rustc-link-lib={kind}={output}"


def link_directives(*, out_dir: Path, output: str, kind: LinkKind) -> tuple[str, ...]:
    """Search path first, then the library itself."""
    return (
        link_search_directive(out_dir),
        link_lib_directive(kind, output),
    )


@dataclass(slots=True)
class MetadataReporter:
    """Writes directives to the stream cargo reads build script output from."""

    stream: TextIO | None = None

    def emit(self, directives: tuple[str, ...]) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        for directive in directives:
            stream.write(directive + "\n")
        stream.flush()
