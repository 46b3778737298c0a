"""Fluent builder that compiles Go packages into C-linkable libraries.

Typical use from a build script::

    Build().package("pkg/example/main.go").build("example")

``try_build`` raises :class:`cgobuild.errors.CgoBuildError` on failure;
``build`` reports the error on stderr and exits the process instead.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

from cgobuild.config import BuildEnvironment
from cgobuild.errors import CgoBuildError
from cgobuild.metadata import MetadataReporter, link_directives
from cgobuild.models import BuildConfig, BuildMode, BuildOutcome, BuildPhase, Invocation
from cgobuild.naming import format_lib_name
from cgobuild.observability import StructuredLogger
from cgobuild.runner import CommandRunner, SubprocessRunner, ensure_success
from cgobuild.target import target_from_env
from cgobuild.toolchain import CompilerResolver, resolve_compilers

_BUILDER = "go"


@dataclass(slots=True)
class Build:
    """A builder for the compilation of a Go library."""

    runner: CommandRunner = field(default_factory=SubprocessRunner)
    reporter: MetadataReporter = field(default_factory=MetadataReporter)
    compilers: CompilerResolver = resolve_compilers
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    host: str | None = None
    _config: BuildConfig = field(init=False, default_factory=BuildConfig, repr=False)

    @property
    def config(self) -> BuildConfig:
        return self._config

    def build_mode(self, build_mode: BuildMode) -> Self:
        """Use ``build_mode`` for ``-buildmode``. Defaults to ``C_ARCHIVE``."""
        self._config.build_mode = build_mode
        return self

    def cargo_metadata(self, cargo_metadata: bool) -> Self:
        """Print cargo link directives after a successful build. On by default."""
        self._config.cargo_metadata = cargo_metadata
        return self

    def change_dir(self, directory: str | os.PathLike[str]) -> Self:
        """Run ``go build -C directory``; other paths are relative to it."""
        self._config.change_dir = Path(directory)
        return self

    def ldflags(self, ldflags: str) -> Self:
        self._config.ldflags = ldflags
        return self

    def out_dir(self, out_dir: str | os.PathLike[str]) -> Self:
        """Write the library to ``out_dir`` instead of cargo's ``OUT_DIR``."""
        self._config.out_dir = Path(out_dir)
        return self

    def package(self, package: str | os.PathLike[str]) -> Self:
        """Add a package to compile. May be called more than once."""
        self._config.packages.append(os.fspath(package))
        return self

    def packages(self, *packages: str | os.PathLike[str]) -> Self:
        for package in packages:
            self.package(package)
        return self

    def trimpath(self, trimpath: bool) -> Self:
        self._config.trimpath = trimpath
        return self

    def tool(self, tool: str) -> Self:
        self._config.tool = tool
        return self

    def env(self, key: str, value: str) -> Self:
        """Pass an extra variable to ``go build``. Cgo variables take precedence."""
        self._config.extra_env[key] = value
        return self

    def log_file(self, path: str | os.PathLike[str]) -> Self:
        """Append structured build records to ``path`` as JSON lines."""
        self.logger.sink = Path(path)
        return self

    def plan(
        self,
        output: str,
        environ: BuildEnvironment | Mapping[str, str] | None = None,
    ) -> Invocation:
        """Assemble the command and child environment without running anything."""
        env = _as_build_environment(environ)
        config = self._config

        target = target_from_env(env)
        lib_name = format_lib_name(output, config.build_mode, self.host)
        out_dir = env.out_dir(config.out_dir)
        out_path = out_dir / lib_name
        compilers = self.compilers(env)

        child_env = dict(config.extra_env)
        child_env.update(
            {
                "CGO_ENABLED": "1",
                "GOOS": target.goos,
                "GOARCH": target.goarch,
                "CC": str(compilers.cc),
                "CXX": str(compilers.cxx),
            }
        )

        argv: list[str] = [config.tool, "build"]
        if config.change_dir is not None:
            # Go 1.21+ rejects -C unless it is the first flag.
            argv.extend(["-C", str(config.change_dir)])
        if config.ldflags is not None:
            argv.extend(["-ldflags", config.ldflags])
        if config.trimpath:
            argv.append("-trimpath")
        argv.extend(["-buildmode", str(config.build_mode)])
        argv.extend(["-o", str(out_path)])
        argv.extend(config.packages)

        return Invocation(
            argv=tuple(argv),
            env=child_env,
            out_dir=out_dir,
            out_path=out_path,
            lib_name=lib_name,
            output=output,
            link_kind=config.build_mode.link_kind,
        )

    def try_build(
        self,
        output: str,
        environ: BuildEnvironment | Mapping[str, str] | None = None,
    ) -> BuildOutcome:
        """Build the Go package into ``lib<output>`` and report cargo metadata."""
        self._log(BuildPhase.CONFIGURED, f"building {output}")
        try:
            self._log(BuildPhase.TRANSLATING, "resolving target and toolchain")
            invocation = self.plan(output, environ)

            self._log(
                BuildPhase.INVOKING,
                invocation.command,
                extra={"env": dict(sorted(invocation.env.items()))},
            )
            result = self.runner.run(invocation.argv, invocation.env)
            ensure_success(result, command=invocation.command)
        except CgoBuildError as exc:
            self._log(BuildPhase.FAILED, exc.message, level="error", extra=exc.to_dict())
            raise

        directives: tuple[str, ...] = ()
        if self._config.cargo_metadata:
            directives = link_directives(
                out_dir=invocation.out_dir,
                output=output,
                kind=invocation.link_kind,
            )
            self.reporter.emit(directives)

        self._log(BuildPhase.SUCCEEDED, f"built {invocation.out_path}")
        return BuildOutcome(invocation=invocation, output=result, directives=directives)

    def build(
        self,
        output: str,
        environ: BuildEnvironment | Mapping[str, str] | None = None,
    ) -> BuildOutcome:
        """Like :meth:`try_build`, but print the error and exit with status 1."""
        try:
            return self.try_build(output, environ)
        except CgoBuildError as exc:
            print(f"\n\nerror occurred: {exc}\n", file=sys.stderr)
            sys.exit(1)

    def _log(
        self,
        phase: BuildPhase,
        message: str,
        *,
        level: str = "info",
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.logger.log(
            operation="build",
            phase=phase.value,
            builder=_BUILDER,
            message=message,
            level=level,
            extra=extra,
        )


def _as_build_environment(
    environ: BuildEnvironment | Mapping[str, str] | None,
) -> BuildEnvironment:
    if isinstance(environ, BuildEnvironment):
        return environ
    return BuildEnvironment.from_environ(environ)
