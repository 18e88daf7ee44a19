"""Tests for buildver.plugin."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from buildver.core.build_root import BuildRoot
from buildver.core.config import BuildConfig, ProjectConfig
from buildver.core.result import Err, Ok
from buildver.output.console import MockConsole
from buildver.plugin import Project, configure_build, configure_project, configure_projects
from buildver.tasks.publications import Publication
from buildver.versioning.build_type import BuildType
from buildver.versioning.calculator import VersionDetails
from buildver.versioning.errors import (
    ConflictingBuildTypeError,
    MissingCredentialsError,
    MissingTimestampError,
    UnknownTaskError,
)
from buildver.versioning.repository import SNAPSHOT_REPOSITORY_URL, Credentials
from buildver.versioning.timestamp import persist_timestamp

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
CONFIG = BuildConfig(
    versions=VersionDetails(next_version="0.22", next_snapshot="5"),
    projects=(
        ProjectConfig(
            name="native-platform",
            publications=(Publication("main", "main"), Publication("linuxAmd64", "jni")),
        ),
        ProjectConfig(name="testApp", publications=(Publication("main", "main"),)),
    ),
)


def _root(tmp_path: Path) -> BuildRoot:
    (tmp_path / "buildver.toml").write_text("", encoding="utf-8")
    return BuildRoot(root=tmp_path)


def test_snapshot_build_writes_matching_receipt(tmp_path: Path) -> None:
    root = _root(tmp_path)
    result = configure_build(
        config=CONFIG,
        build_root=root,
        intents={"snapshot"},
        ignore_incoming_receipt=False,
        console=MockConsole(),
        credentials=Credentials(),
        now=lambda: NOW,
    )
    assert isinstance(result, Ok)
    ctx = result.value
    assert ctx.build_type == BuildType.SNAPSHOT
    assert ctx.receipt_written
    assert ctx.version.render() == Ok("0.22-snapshot-20240101120000+0000")

    text = root.receipt_path.read_text(encoding="iso-8859-1")
    assert f"buildTimestamp={ctx.build_timestamp}" in text.splitlines()


def test_non_snapshot_build_writes_no_receipt(tmp_path: Path) -> None:
    root = _root(tmp_path)
    result = configure_build(
        config=CONFIG,
        build_root=root,
        intents={"milestone"},
        ignore_incoming_receipt=False,
        console=MockConsole(),
        credentials=Credentials(),
    )
    assert isinstance(result, Ok)
    assert not result.value.receipt_written
    assert not root.receipt_path.exists()
    assert result.value.version.render() == Ok("0.22-milestone-5")


def test_consumer_stage_reuses_incoming_timestamp(tmp_path: Path) -> None:
    root = _root(tmp_path)
    assert persist_timestamp("20230102030405+0000", root.incoming_receipt_path) == Ok(None)

    console = MockConsole()
    result = configure_build(
        config=CONFIG,
        build_root=root,
        intents={"snapshot"},
        ignore_incoming_receipt=False,
        console=console,
        credentials=Credentials(),
    )
    assert isinstance(result, Ok)
    assert str(result.value.version) == "0.22-snapshot-20230102030405+0000"
    assert console.has_warning()
    # The producing receipt mirrors the reused timestamp.
    assert "buildTimestamp=20230102030405+0000" in root.receipt_path.read_text(encoding="iso-8859-1")


def test_conflicting_intents_abort_before_any_io(tmp_path: Path) -> None:
    root = _root(tmp_path)
    result = configure_build(
        config=CONFIG,
        build_root=root,
        intents={"snapshot", "release"},
        ignore_incoming_receipt=False,
        console=MockConsole(),
    )
    assert isinstance(result, Err)
    assert isinstance(result.error, ConflictingBuildTypeError)
    assert not root.receipt_path.exists()


def test_broken_incoming_receipt_aborts(tmp_path: Path) -> None:
    root = _root(tmp_path)
    root.incoming_dir.mkdir()
    root.incoming_receipt_path.write_text("nothing=here\n", encoding="utf-8")

    result = configure_build(
        config=CONFIG,
        build_root=root,
        intents=(),
        ignore_incoming_receipt=False,
        console=MockConsole(),
    )
    assert isinstance(result, Err)
    assert isinstance(result.error, MissingTimestampError)


def test_use_repo_requires_credentials(tmp_path: Path) -> None:
    config = BuildConfig(versions=VersionDetails(next_version="1.0", use_repo=True))
    common = dict(
        config=config,
        build_root=_root(tmp_path),
        intents={"snapshot"},
        ignore_incoming_receipt=True,
        console=MockConsole(),
    )

    missing = configure_build(credentials=Credentials(), **common)  # type: ignore[arg-type]
    assert isinstance(missing, Err)
    assert isinstance(missing.error, MissingCredentialsError)

    ok = configure_build(credentials=Credentials("u", "k"), **common)  # type: ignore[arg-type]
    assert isinstance(ok, Ok)
    assert ok.value.repository is not None
    assert ok.value.repository.url == SNAPSHOT_REPOSITORY_URL


def test_projects_share_one_version_calculator(tmp_path: Path) -> None:
    built = configure_build(
        config=CONFIG,
        build_root=_root(tmp_path),
        intents=(),
        ignore_incoming_receipt=True,
        console=MockConsole(),
        credentials=Credentials(),
    )
    assert isinstance(built, Ok)

    projects = configure_projects(built.value, [Project.from_config(p) for p in CONFIG.projects])
    assert isinstance(projects, Ok)
    first, second = projects.value
    assert first.version is second.version is built.value.version
    assert str(first.version) == str(second.version) == "0.22-dev"

    assert first.lifecycle is not None
    assert first.lifecycle.main.dependencies == ("uploadMainPublication",)
    assert first.lifecycle.other.dependencies == ("uploadLinuxAmd64Publication",)
    assert second.lifecycle is not None
    assert second.lifecycle.other.dependencies == ()


def test_project_without_upload_tasks_fails(tmp_path: Path) -> None:
    built = configure_build(
        config=CONFIG,
        build_root=_root(tmp_path),
        intents=(),
        ignore_incoming_receipt=True,
        console=MockConsole(),
        credentials=Credentials(),
    )
    assert isinstance(built, Ok)

    bare = Project(name="bare", publications=(Publication("main", "main"),))
    result = configure_project(built.value, bare)
    assert isinstance(result, Err)
    assert isinstance(result.error, UnknownTaskError)
