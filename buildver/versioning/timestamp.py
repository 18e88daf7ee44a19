"""Build timestamp determination and receipt hand-off.

A snapshot build mints a timestamp and records it in a build receipt. A later
stage that receives the produced distributions (placed under
``incoming-distributions/``) reads the receipt back so that both stages agree
on the same snapshot version.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from buildver.core.files import atomic_write_bytes
from buildver.core.result import Err, Ok, Result
from buildver.output.console import ConsoleProtocol
from buildver.versioning.errors import MissingTimestampError, ReceiptIOError, TimestampError
from buildver.versioning.receipt import format_properties, parse_properties

__all__ = [
    "BUILD_TIMESTAMP_PROPERTY",
    "TIMESTAMP_FORMAT",
    "determine_timestamp",
    "format_timestamp",
    "persist_timestamp",
]

BUILD_TIMESTAMP_PROPERTY = "buildTimestamp"

# yyyyMMddHHmmssZ, e.g. 20240101120000+0000
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S%z"

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(instant: datetime) -> str:
    """Render ``instant`` in UTC. Naive datetimes are taken to be UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def determine_timestamp(
    *,
    ignore_incoming_receipt: bool,
    receipt_path: Path,
    console: ConsoleProtocol,
    now: Clock | None = None,
) -> Result[str, TimestampError]:
    """Return the authoritative timestamp for this build.

    A fresh one is generated when ``ignore_incoming_receipt`` is set or no
    receipt exists at ``receipt_path``; otherwise the receipt's value is reused
    verbatim.
    """
    if ignore_incoming_receipt or not receipt_path.is_file():
        return Ok(format_timestamp((now or _utc_now)()))

    try:
        props = parse_properties(receipt_path.read_bytes())
    except OSError as e:
        return Err(ReceiptIOError(path=receipt_path, operation="read", reason=str(e)))

    timestamp = props.get(BUILD_TIMESTAMP_PROPERTY)
    if timestamp is None:
        return Err(MissingTimestampError(path=receipt_path, key=BUILD_TIMESTAMP_PROPERTY))

    console.warning(f"Using build timestamp from incoming build receipt: {timestamp}")
    return Ok(timestamp)


def persist_timestamp(
    timestamp: str,
    output_path: Path,
    *,
    now: Clock | None = None,
) -> Result[None, ReceiptIOError]:
    """Write a receipt holding only ``buildTimestamp``, replacing any previous one."""
    content = format_properties(
        {BUILD_TIMESTAMP_PROPERTY: timestamp},
        stamp=(now or _utc_now)(),
    )
    try:
        atomic_write_bytes(output_path, content)
    except OSError as e:
        return Err(ReceiptIOError(path=output_path, operation="write", reason=str(e)))
    return Ok(None)
