"""Build script compiling the bundled Go example into a static archive.

Run from a cargo ``build.rs`` (which provides ``CARGO_CFG_TARGET_*`` and
``OUT_DIR``) or by exporting those variables by hand.
"""

from cgobuild import Build


def build_example() -> None:
    (
        Build()
        .trimpath(True)
        .ldflags("-s -w")
        .change_dir("./examples/example")
        .package("main.go")
        .build("integrationtest")
    )


if __name__ == "__main__":
    build_example()
