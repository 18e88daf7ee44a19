from __future__ import annotations

from pathlib import Path

import typer

from buildver.cli.context import build_context
from buildver.cli.errors import fail
from buildver.core.errors import ErrorCode
from buildver.output.console import Style
from buildver.versioning.errors import ReceiptIOError
from buildver.versioning.receipt import parse_properties

receipt_app = typer.Typer(add_completion=False, no_args_is_help=True)


@receipt_app.command("show")
def show_cmd(
    path: Path | None = typer.Argument(None, help="Receipt file (default: the build's own)"),
    incoming: bool = typer.Option(
        False, "--incoming", help="Show the receipt under incoming-distributions/"
    ),
) -> None:
    """Print the properties of a build receipt."""
    ctx = build_context()
    if path is None:
        path = ctx.build_root.incoming_receipt_path if incoming else ctx.build_root.receipt_path

    if not path.is_file():
        ctx.console.error(f"no build receipt at {path}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    try:
        props = parse_properties(path.read_bytes())
    except OSError as e:
        fail(ReceiptIOError(path=path, operation="read", reason=str(e)), ctx.console)

    ctx.console.print(str(path), Style.DIM)
    for key, value in props.items():
        ctx.console.print(f"{key}={value}")
