from __future__ import annotations

import typer

from buildver.cli.commands._options import (
    IGNORE_RECEIPT_OPTION,
    MILESTONE_OPTION,
    RELEASE_OPTION,
    SNAPSHOT_OPTION,
)
from buildver.cli.context import build_context
from buildver.cli.errors import exit_on_error
from buildver.plugin import configure_build
from buildver.versioning.build_type import intents_from_flags


def version(
    snapshot: bool = SNAPSHOT_OPTION,
    release: bool = RELEASE_OPTION,
    milestone: bool = MILESTONE_OPTION,
    ignore_incoming_build_receipt: bool = IGNORE_RECEIPT_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Also report build details."),
) -> None:
    """Print the version this build resolves to.

    A snapshot build also writes build-receipt.properties at the build root.
    """
    ctx = build_context()
    build = exit_on_error(
        configure_build(
            config=ctx.config,
            build_root=ctx.build_root,
            intents=intents_from_flags(snapshot=snapshot, release=release, milestone=milestone),
            ignore_incoming_receipt=ignore_incoming_build_receipt,
            console=ctx.console,
        ),
        ctx.console,
    )
    resolved = exit_on_error(build.version.render(), ctx.console)

    ctx.console.print(resolved)
    if verbose:
        ctx.console.info(f"build type: {build.build_type}")
        ctx.console.info(f"build timestamp: {build.build_timestamp}")
        if build.receipt_written:
            ctx.console.info(f"receipt: {ctx.build_root.receipt_path}")
        if build.repository is not None:
            ctx.console.info(f"repository: {build.repository.url}")
