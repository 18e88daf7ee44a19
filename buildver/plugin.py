"""Build-wide configuration.

``configure_build`` runs once, before any project is configured, and produces
the ``BuildContext`` holding the single build type, timestamp and version
calculator of the build. ``configure_project`` then applies that context to
every project so they all resolve to the same version.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime

from buildver.core.build_root import BuildRoot
from buildver.core.config import BuildConfig, ProjectConfig
from buildver.core.result import Err, Ok, Result
from buildver.output.console import ConsoleProtocol
from buildver.tasks.graph import TaskRegistry
from buildver.tasks.lifecycle import LifecycleTasks, UploadLifecycleAggregator
from buildver.tasks.publications import Publication, register_upload_tasks
from buildver.versioning.build_type import BuildIntent, BuildType, resolve_build_type
from buildver.versioning.calculator import VersionCalculator, VersionDetails
from buildver.versioning.errors import VersioningError
from buildver.versioning.repository import Credentials, MavenRepository, select_repository
from buildver.versioning.timestamp import determine_timestamp, persist_timestamp

__all__ = [
    "BuildContext",
    "Project",
    "configure_build",
    "configure_project",
    "configure_projects",
]


@dataclass(frozen=True, slots=True)
class BuildContext:
    build_type: BuildType
    build_timestamp: str
    versions: VersionDetails
    version: VersionCalculator
    repository: MavenRepository | None
    receipt_written: bool = False


def _empty_publications() -> tuple[Publication, ...]:
    return ()


@dataclass(eq=False)
class Project:
    """A unit of work that receives the build's version and upload wiring."""

    name: str
    publications: tuple[Publication, ...] = field(default_factory=_empty_publications)
    tasks: TaskRegistry = field(init=False)
    version: VersionCalculator | None = None
    repository: MavenRepository | None = None
    lifecycle: LifecycleTasks | None = None

    def __post_init__(self) -> None:
        self.tasks = TaskRegistry(project=self.name)

    @classmethod
    def from_config(cls, config: ProjectConfig) -> Project:
        project = cls(name=config.name, publications=config.publications)
        register_upload_tasks(project.tasks, project.publications)
        return project


def configure_build(
    *,
    config: BuildConfig,
    build_root: BuildRoot,
    intents: Iterable[BuildIntent],
    ignore_incoming_receipt: bool,
    console: ConsoleProtocol,
    credentials: Credentials | None = None,
    now: Callable[[], datetime] | None = None,
) -> Result[BuildContext, VersioningError]:
    """Resolve everything build-wide. The first failure aborts configuration."""
    resolved = resolve_build_type(intents)
    if isinstance(resolved, Err):
        return resolved
    build_type = resolved.value

    timestamp = determine_timestamp(
        ignore_incoming_receipt=ignore_incoming_receipt,
        receipt_path=build_root.incoming_receipt_path,
        console=console,
        now=now,
    )
    if isinstance(timestamp, Err):
        return timestamp

    receipt_written = False
    if build_type == BuildType.SNAPSHOT:
        written = persist_timestamp(timestamp.value, build_root.receipt_path, now=now)
        if isinstance(written, Err):
            return written
        receipt_written = True

    repository = select_repository(
        build_type,
        config.versions,
        credentials if credentials is not None else config.credentials.with_env(),
    )
    if isinstance(repository, Err):
        return repository

    return Ok(
        BuildContext(
            build_type=build_type,
            build_timestamp=timestamp.value,
            versions=config.versions,
            version=VersionCalculator(config.versions, build_type, timestamp.value),
            repository=repository.value,
            receipt_written=receipt_written,
        )
    )


def configure_project(ctx: BuildContext, project: Project) -> Result[None, VersioningError]:
    project.version = ctx.version
    project.repository = ctx.repository

    lifecycle = UploadLifecycleAggregator(project.tasks, ctx.build_type).build(project.publications)
    if isinstance(lifecycle, Err):
        return lifecycle
    project.lifecycle = lifecycle.value
    return Ok(None)


def configure_projects(
    ctx: BuildContext, projects: Iterable[Project]
) -> Result[tuple[Project, ...], VersioningError]:
    configured: list[Project] = []
    for project in projects:
        result = configure_project(ctx, project)
        if isinstance(result, Err):
            return result
        configured.append(project)
    return Ok(tuple(configured))
