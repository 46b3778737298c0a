import io
import json
from pathlib import Path

import pytest

from cgobuild import Build, BuildMode, MetadataReporter, ToolOutput
from cgobuild.errors import CgoBuildError, ErrorKind, InvalidGoOsError, ToolExecError
from cgobuild.models import BuildPhase


def test_try_build_runs_planned_invocation(builder, runner, cargo_env) -> None:
    outcome = builder.package("main.go").try_build("example", cargo_env)

    assert len(runner.calls) == 1
    argv, env = runner.calls[0]
    assert argv == outcome.invocation.argv
    assert env == dict(outcome.invocation.env)
    assert outcome.artifact == Path(cargo_env["OUT_DIR"]) / "libexample.a"
    assert outcome.output.success


def test_shared_build_emits_search_then_dynamic_link(builder, stdout, cargo_env) -> None:
    outcome = (
        builder.build_mode(BuildMode.C_SHARED)
        .out_dir("/tmp/out")
        .package("main.go")
        .try_build("example", cargo_env)
    )

    expected = (
        f"cargo:rustc-link-search=native={Path('/tmp/out')}",
        "cargo:rustc-link-lib=dynamic=example",
    )
    assert outcome.directives == expected
    assert stdout.getvalue().splitlines() == list(expected)


def test_archive_build_links_statically(builder, stdout, cargo_env) -> None:
    builder.package("main.go").try_build("example", cargo_env)

    assert stdout.getvalue().splitlines() == [
        f"cargo:rustc-link-search=native={cargo_env['OUT_DIR']}",
        "cargo:rustc-link-lib=static=example",
    ]


def test_disabled_metadata_emits_nothing(builder, stdout, cargo_env) -> None:
    outcome = builder.cargo_metadata(False).package("main.go").try_build("example", cargo_env)

    assert outcome.directives == ()
    assert stdout.getvalue() == ""


def test_failed_build_raises_without_directives(builder, runner, stdout, cargo_env) -> None:
    runner.result = ToolOutput(returncode=1, stdout="compile error: x.go:3", stderr="")

    with pytest.raises(ToolExecError) as excinfo:
        builder.package("main.go").try_build("example", cargo_env)

    assert "=== stdout:\ncompile error: x.go:3" in excinfo.value.message
    assert "=== stderr:" not in excinfo.value.message
    assert stdout.getvalue() == ""


def test_translation_failure_never_invokes_go(builder, runner, stdout, cargo_env) -> None:
    cargo_env["CARGO_CFG_TARGET_OS"] = "redox"

    with pytest.raises(InvalidGoOsError):
        builder.package("main.go").try_build("example", cargo_env)

    assert runner.calls == []
    assert stdout.getvalue() == ""


def test_missing_target_arch_variable(builder, runner, cargo_env) -> None:
    del cargo_env["CARGO_CFG_TARGET_ARCH"]

    with pytest.raises(CgoBuildError) as excinfo:
        builder.try_build("example", cargo_env)

    assert excinfo.value.kind is ErrorKind.ENV_VAR_NOT_FOUND
    assert "CARGO_CFG_TARGET_ARCH" in excinfo.value.message
    assert runner.calls == []


def test_phase_transitions_are_logged(builder, runner, cargo_env) -> None:
    builder.package("main.go").try_build("example", cargo_env)

    assert builder.logger.phases() == [
        BuildPhase.CONFIGURED,
        BuildPhase.TRANSLATING,
        BuildPhase.INVOKING,
        BuildPhase.SUCCEEDED,
    ]
    invoking = builder.logger.records_for_phase(BuildPhase.INVOKING)[0]
    assert invoking["message"].startswith("go build -buildmode c-archive -o ")
    assert invoking["extra"]["env"]["CGO_ENABLED"] == "1"


def test_failure_is_logged_with_kind(builder, runner, cargo_env) -> None:
    runner.result = ToolOutput(returncode=2, stderr="boom")

    with pytest.raises(ToolExecError):
        builder.try_build("example", cargo_env)

    assert builder.logger.phases()[-1] == BuildPhase.FAILED
    [error] = builder.logger.errors()
    assert error["extra"]["kind"] == "ToolExecError"


def test_build_exits_with_status_one(builder, runner, capsys, cargo_env) -> None:
    runner.result = ToolOutput(returncode=1, stderr="undefined: x")

    with pytest.raises(SystemExit) as excinfo:
        builder.package("main.go").build("example", cargo_env)

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("\n\nerror occurred: ToolExecError: failed to build Go library")
    assert "undefined: x" in err


def test_build_returns_outcome_on_success(builder, cargo_env) -> None:
    outcome = builder.package("main.go").build("example", cargo_env)
    assert outcome.invocation.output == "example"


def test_default_reporter_prints_to_stdout(runner, compilers, capsys, cargo_env) -> None:
    Build(runner=runner, compilers=compilers, host="linux").try_build("example", cargo_env)

    assert capsys.readouterr().out.splitlines()[-1] == "cargo:rustc-link-lib=static=example"


def test_reporter_writes_to_given_stream() -> None:
    stream = io.StringIO()
    MetadataReporter(stream=stream).emit(("a", "b"))

    assert stream.getvalue() == "a\nb\n"


def test_log_file_survives_process_exit(builder, runner, tmp_path, cargo_env) -> None:
    log_path = tmp_path / "target" / "cgobuild.jsonl"
    runner.result = ToolOutput(returncode=1, stderr="undefined: x")

    with pytest.raises(SystemExit):
        builder.log_file(log_path).package("main.go").build("example", cargo_env)

    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [record["phase"] for record in records] == [
        "configured",
        "translating",
        "invoking",
        "failed",
    ]
    assert records[-1]["extra"]["kind"] == "ToolExecError"
    assert records[2]["extra"]["env"]["CGO_ENABLED"] == "1"
