"""Build the bundled Go example as a shared library into an explicit directory."""

import sys

from cgobuild import Build, BuildMode, CgoBuildError


def build_shared(out_dir: str) -> int:
    try:
        outcome = (
            Build()
            .build_mode(BuildMode.C_SHARED)
            .cargo_metadata(False)
            .change_dir("./examples/example")
            .out_dir(out_dir)
            .package("main.go")
            .try_build("example")
        )
    except CgoBuildError as exc:
        print(f"{exc.kind}: {exc.message}", file=sys.stderr)
        return 1
    print(outcome.artifact)
    return 0


if __name__ == "__main__":
    sys.exit(build_shared(sys.argv[1] if len(sys.argv) > 1 else "build"))
