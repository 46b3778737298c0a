"""Synchronous execution of an assembled ``go build`` invocation.

The runner is the only impure step of a build. It blocks until the child
exits; there is no timeout.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

from cgobuild.errors import ToolExecError
from cgobuild.models import ToolOutput


class CommandRunner(Protocol):
    def run(self, argv: Sequence[str], env: Mapping[str, str]) -> ToolOutput:
        """Run ``argv`` with ``env`` overlaid on the parent environment."""


@dataclass(slots=True)
class SubprocessRunner:
    inherit_env: bool = True

    def run(self, argv: Sequence[str], env: Mapping[str, str]) -> ToolOutput:
        child_env = dict(os.environ) if self.inherit_env else {}
        child_env.update(env)
        try:
            result = subprocess.run(
                list(argv),
                env=child_env,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ToolExecError(
                f"failed to execute go command: {exc}",
                context={"command": shlex.join(argv)},
            ) from exc
        return ToolOutput(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )


def describe_status(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status: {returncode}"


def failure_message(output: ToolOutput) -> str:
    """Render a failed build's status and any non-blank output streams."""
    message = f"failed to build Go library ({describe_status(output.returncode)}). Build output:"
    for stream_name, text in (("stdout", output.stdout), ("stderr", output.stderr)):
        text = text.strip()
        if not text:
            continue
        message += f"\n=== {stream_name}:\n{text}"
    return message


def ensure_success(output: ToolOutput, *, command: str) -> ToolOutput:
    if output.success:
        return output
    raise ToolExecError(
        failure_message(output),
        context={"command": command, "returncode": str(output.returncode)},
    )
