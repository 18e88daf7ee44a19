from __future__ import annotations

import os
from pathlib import Path

import typer

from buildver import __version__
from buildver.cli.commands.receipt_cmd import receipt_app
from buildver.cli.commands.timestamp_cmd import timestamp
from buildver.cli.commands.upload_plan import upload_plan
from buildver.cli.commands.version_cmd import version
from buildver.core.build_root import ROOT_ENV_VAR, is_build_root
from buildver.core.config import CONFIG_FILE_NAME
from buildver.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(version)
app.command()(timestamp)
app.command("upload-plan")(upload_plan)

# Sub-apps
app.add_typer(receipt_app, name="receipt")


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    show_version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help=f"Build root (directory holding {CONFIG_FILE_NAME}; overrides auto detection)",
    ),
) -> None:
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if root is not None:
        try:
            resolved = root.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --root: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not resolved.is_dir() or not is_build_root(resolved):
            typer.echo(
                f"error: --root '{resolved}' is not a build root (missing {CONFIG_FILE_NAME})",
                err=True,
            )
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[ROOT_ENV_VAR] = str(resolved)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
