"""Option declarations shared by commands that configure a build."""

from __future__ import annotations

import typer

SNAPSHOT_OPTION = typer.Option(False, "--snapshot", help="Build a timestamped snapshot.")
RELEASE_OPTION = typer.Option(False, "--release", help="Build a final release.")
MILESTONE_OPTION = typer.Option(False, "--milestone", help="Build a milestone release.")
IGNORE_RECEIPT_OPTION = typer.Option(
    False,
    "--ignore-incoming-build-receipt",
    help="Generate a fresh timestamp even if incoming-distributions/ holds a receipt.",
)
