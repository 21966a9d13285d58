"""jvm-function-buildpack CLI.

`build` is the buildpack's `bin/build` entry and follows the platform's calling
convention (`build <layers> <platform> <plan>`, app dir as working directory).
`launch` and `verify` are local helpers for inspecting the outputs.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich import print as rprint

from jvm_function_buildpack.config import debug_enabled
from jvm_function_buildpack.core import BuildContext, build_pipeline
from jvm_function_buildpack.errors import BuildFailed, IntegrityError
from jvm_function_buildpack.launch import assemble_launch, render_launch_toml
from jvm_function_buildpack.logging import BuildLogger, get_logger

app = typer.Typer(add_completion=False, help="Build Java function apps into runnable layers")


@app.command()
def build(
    layers: str = typer.Argument(..., help="Layers directory provided by the platform"),
    platform: str = typer.Argument(..., help="Platform directory (env/ holds user env vars)"),
    plan: str = typer.Argument(..., help="Build plan path (unused)"),
    app_dir: str = typer.Option(".", "--app-dir", help="Application source directory"),
    buildpack_dir: str = typer.Option(
        ...,
        "--buildpack-dir",
        envvar="CNB_BUILDPACK_DIR",
        help="Directory holding buildpack.toml",
    ),
    java: str = typer.Option("java", "--java", help="Java executable used to run the runtime"),
    verify_integrity: bool | None = typer.Option(
        None,
        "--verify-integrity/--no-verify-integrity",
        help="Check the runtime's SHA-256 (default: buildpack.toml setting)",
        show_default=False,
    ),
) -> None:
    _ = plan
    ctx = BuildContext(
        app_dir=Path(app_dir).resolve(),
        layers_dir=Path(layers).resolve(),
        buildpack_dir=Path(buildpack_dir).resolve(),
        platform_dir=Path(platform).resolve(),
        java=java,
        verify_integrity=verify_integrity,
    )
    debug = debug_enabled(ctx.platform_dir)
    if debug:
        # Process-wide; the CLI runs a single build per process.
        get_logger().setLevel(logging.DEBUG)
    try:
        build_pipeline(ctx, BuildLogger(debug=debug))
    except BuildFailed:
        raise typer.Exit(code=1)


@app.command()
def launch(
    runtime_jar: str = typer.Argument(..., help="Path to the installed runtime.jar"),
    function_dir: str = typer.Argument(..., help="Path to the function bundle layer"),
) -> None:
    print(render_launch_toml(assemble_launch(Path(runtime_jar), Path(function_dir))), end="")


@app.command()
def verify(
    file: str = typer.Argument(..., help="Path to a downloaded runtime jar"),
    sha256: str = typer.Argument(..., help="Expected digest (hex or sha256:<hex>)"),
) -> None:
    from jvm_function_buildpack.signing.checks import verify_sha256

    try:
        verify_sha256(Path(file), expected=sha256)
    except IntegrityError as exc:
        rprint(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    rprint("[green]SHA-256 verified.[/green]")


if __name__ == "__main__":
    app()
