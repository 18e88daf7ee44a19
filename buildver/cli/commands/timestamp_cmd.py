from __future__ import annotations

from buildver.cli.commands._options import IGNORE_RECEIPT_OPTION
from buildver.cli.context import build_context
from buildver.cli.errors import exit_on_error
from buildver.versioning.timestamp import determine_timestamp


def timestamp(ignore_incoming_build_receipt: bool = IGNORE_RECEIPT_OPTION) -> None:
    """Print the build timestamp this build would use. Nothing is written."""
    ctx = build_context()
    value = exit_on_error(
        determine_timestamp(
            ignore_incoming_receipt=ignore_incoming_build_receipt,
            receipt_path=ctx.build_root.incoming_receipt_path,
            console=ctx.console,
        ),
        ctx.console,
    )
    ctx.console.print(value)
