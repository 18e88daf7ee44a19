"""Upload lifecycle tasks.

``uploadMain`` and ``uploadJni`` let CI trigger "upload the main publication"
and "upload every native publication" as single units, typically on
different machines. They carry no action; each just depends on the
per-publication upload tasks of its group.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from buildver.core.result import Err, Ok, Result
from buildver.tasks.graph import Task, TaskRegistry
from buildver.tasks.publications import (
    UPLOAD_GROUP,
    Publication,
    default_upload_task_name,
    is_main_publication,
)
from buildver.versioning.build_type import BuildType
from buildver.versioning.errors import UnknownTaskError

__all__ = [
    "UPLOAD_GROUP",
    "UPLOAD_JNI_TASK",
    "UPLOAD_MAIN_TASK",
    "LifecycleTasks",
    "UploadLifecycleAggregator",
]

UPLOAD_MAIN_TASK = "uploadMain"
UPLOAD_JNI_TASK = "uploadJni"

UploadTaskNamer = Callable[[Publication, BuildType], str]
PublicationClassifier = Callable[[Publication], bool]


@dataclass(frozen=True, slots=True)
class LifecycleTasks:
    main: Task
    other: Task


class UploadLifecycleAggregator:
    """Wire per-publication upload tasks under the two lifecycle tasks.

    ``upload_task_name`` and ``is_main`` belong to the publishing side and are
    injected; the defaults follow the built-in publish naming rules.
    """

    def __init__(
        self,
        tasks: TaskRegistry,
        build_type: BuildType,
        *,
        upload_task_name: UploadTaskNamer = default_upload_task_name,
        is_main: PublicationClassifier = is_main_publication,
    ) -> None:
        self._tasks = tasks
        self._build_type = build_type
        self._upload_task_name = upload_task_name
        self._is_main = is_main

    def lifecycle_tasks(self) -> LifecycleTasks:
        main = self._tasks.maybe_create(UPLOAD_MAIN_TASK)
        main.group = UPLOAD_GROUP
        main.description = "Upload Main publication"

        other = self._tasks.maybe_create(UPLOAD_JNI_TASK)
        other.group = UPLOAD_GROUP
        other.description = "Upload all JNI publications"
        return LifecycleTasks(main=main, other=other)

    def build(self, publications: Iterable[Publication]) -> Result[LifecycleTasks, UnknownTaskError]:
        lifecycle = self.lifecycle_tasks()

        for publication in publications:
            found = self._tasks.named(self._upload_task_name(publication, self._build_type))
            if isinstance(found, Err):
                return found

            target = lifecycle.main if self._is_main(publication) else lifecycle.other
            target.depends_on(found.value)

        return Ok(lifecycle)
