"""Tests for buildver.versioning.timestamp."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest

from buildver.core.result import Err, Ok
from buildver.output.console import MockConsole
from buildver.versioning.errors import MissingTimestampError, ReceiptIOError
from buildver.versioning.timestamp import (
    determine_timestamp,
    format_timestamp,
    persist_timestamp,
)

TIMESTAMP_RE = re.compile(r"^\d{14}\+0000$")


def _fixed(dt: datetime) -> Callable[[], datetime]:
    return lambda: dt


def test_format_timestamp_is_utc() -> None:
    assert format_timestamp(datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)) == "20240101120000+0000"


def test_format_timestamp_converts_offsets_to_utc() -> None:
    cet = timezone(timedelta(hours=1))
    assert format_timestamp(datetime(2024, 1, 1, 13, 0, 0, tzinfo=cet)) == "20240101120000+0000"


def test_format_timestamp_treats_naive_as_utc() -> None:
    assert format_timestamp(datetime(2024, 6, 30, 23, 59, 59)) == "20240630235959+0000"


def test_generates_when_no_receipt(tmp_path: Path) -> None:
    console = MockConsole()
    result = determine_timestamp(
        ignore_incoming_receipt=False,
        receipt_path=tmp_path / "incoming-distributions" / "build-receipt.properties",
        console=console,
        now=_fixed(datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)),
    )
    assert result == Ok("20240101120000+0000")
    assert not console.has_warning()


def test_default_clock_matches_pattern(tmp_path: Path) -> None:
    result = determine_timestamp(
        ignore_incoming_receipt=False,
        receipt_path=tmp_path / "missing.properties",
        console=MockConsole(),
    )
    assert isinstance(result, Ok)
    assert TIMESTAMP_RE.match(result.value)


def test_write_then_read_roundtrip(tmp_path: Path) -> None:
    receipt = tmp_path / "build-receipt.properties"
    assert persist_timestamp("20231231235959+0000", receipt) == Ok(None)

    console = MockConsole()
    result = determine_timestamp(
        ignore_incoming_receipt=False,
        receipt_path=receipt,
        console=console,
    )
    assert result == Ok("20231231235959+0000")
    assert console.warnings == [
        "warning: Using build timestamp from incoming build receipt: 20231231235959+0000"
    ]


def test_override_flag_ignores_existing_receipt(tmp_path: Path) -> None:
    receipt = tmp_path / "build-receipt.properties"
    receipt.write_text("buildTimestamp=19990101000000+0000\n", encoding="utf-8")

    console = MockConsole()
    result = determine_timestamp(
        ignore_incoming_receipt=True,
        receipt_path=receipt,
        console=console,
    )
    assert isinstance(result, Ok)
    assert TIMESTAMP_RE.match(result.value)
    assert result.value != "19990101000000+0000"
    assert not console.has_warning()


def test_receipt_without_timestamp(tmp_path: Path) -> None:
    receipt = tmp_path / "build-receipt.properties"
    receipt.write_text("#only a comment\nother=1\n", encoding="utf-8")

    result = determine_timestamp(ignore_incoming_receipt=False, receipt_path=receipt, console=MockConsole())
    assert isinstance(result, Err)
    assert isinstance(result.error, MissingTimestampError)
    assert result.error.path == receipt


def test_unreadable_receipt(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    receipt = tmp_path / "build-receipt.properties"
    receipt.write_text("buildTimestamp=x\n", encoding="utf-8")

    def boom(self: Path) -> bytes:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "read_bytes", boom)

    result = determine_timestamp(ignore_incoming_receipt=False, receipt_path=receipt, console=MockConsole())
    assert isinstance(result, Err)
    assert isinstance(result.error, ReceiptIOError)
    assert result.error.operation == "read"
    assert "denied" in result.error.message


def test_persist_overwrites_with_single_property(tmp_path: Path) -> None:
    receipt = tmp_path / "build-receipt.properties"
    receipt.write_text("buildTimestamp=old\nextra=1\n", encoding="utf-8")

    assert persist_timestamp("20240101120000+0000", receipt) == Ok(None)

    lines = receipt.read_text(encoding="iso-8859-1").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["buildTimestamp=20240101120000+0000"]


def test_persist_failure_is_reported(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    result = persist_timestamp("20240101120000+0000", blocker / "build-receipt.properties")
    assert isinstance(result, Err)
    assert isinstance(result.error, ReceiptIOError)
    assert result.error.operation == "write"


@pytest.mark.parametrize("value", [" 20240101120000+0000 ", "20240101120000+0000\t", ""])
def test_receipt_value_is_returned_verbatim(tmp_path: Path, value: str) -> None:
    receipt = tmp_path / "build-receipt.properties"
    assert persist_timestamp(value, receipt) == Ok(None)

    result = determine_timestamp(ignore_incoming_receipt=False, receipt_path=receipt, console=MockConsole())
    assert result == Ok(value)
