"""Publication descriptors and the default publish-side naming rules.

Each project publishes one main artifact bundle plus any number of native
(JNI) variants. Upload tasks are named after the publication, with a
different prefix when uploading to the snapshot repository.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from buildver.tasks.graph import TaskRegistry
from buildver.versioning.build_type import BuildType

__all__ = [
    "UPLOAD_GROUP",
    "Publication",
    "PublicationKind",
    "default_upload_task_name",
    "is_main_publication",
    "register_upload_tasks",
]

PublicationKind = Literal["main", "jni"]

UPLOAD_PREFIX = "upload"
SNAPSHOT_UPLOAD_PREFIX = "uploadSnapshot"
PUBLICATION_SUFFIX = "Publication"
UPLOAD_GROUP = "Upload"


@dataclass(frozen=True, slots=True)
class Publication:
    name: str
    kind: PublicationKind = "jni"


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def snapshot_upload_task_name(publication: Publication) -> str:
    return SNAPSHOT_UPLOAD_PREFIX + _capitalize(publication.name) + PUBLICATION_SUFFIX


def release_upload_task_name(publication: Publication) -> str:
    return UPLOAD_PREFIX + _capitalize(publication.name) + PUBLICATION_SUFFIX


def default_upload_task_name(publication: Publication, build_type: BuildType) -> str:
    if build_type == BuildType.SNAPSHOT:
        return snapshot_upload_task_name(publication)
    return release_upload_task_name(publication)


def is_main_publication(publication: Publication) -> bool:
    return publication.kind == "main"


def register_upload_tasks(tasks: TaskRegistry, publications: Iterable[Publication]) -> None:
    """Register both upload tasks of every publication, as the publish plugins do."""
    for publication in publications:
        for name in (release_upload_task_name(publication), snapshot_upload_task_name(publication)):
            if name not in tasks:
                tasks.register(
                    name,
                    group=UPLOAD_GROUP,
                    description=f"Upload {publication.name} publication",
                )
