"""Tests for buildver.tasks.lifecycle."""

from __future__ import annotations

import random

import pytest

from buildver.core.result import Err, Ok
from buildver.tasks.graph import TaskRegistry
from buildver.tasks.lifecycle import UPLOAD_JNI_TASK, UPLOAD_MAIN_TASK, UploadLifecycleAggregator
from buildver.tasks.publications import (
    UPLOAD_GROUP,
    Publication,
    default_upload_task_name,
    register_upload_tasks,
)
from buildver.versioning.build_type import BuildType
from buildver.versioning.errors import UnknownTaskError

PUBLICATIONS = (
    Publication("main", "main"),
    Publication("linuxAmd64", "jni"),
    Publication("osxAarch64", "jni"),
    Publication("windowsI386", "jni"),
)


def _registry() -> TaskRegistry:
    tasks = TaskRegistry(project="native-platform")
    register_upload_tasks(tasks, PUBLICATIONS)
    return tasks


def test_default_upload_task_names() -> None:
    pub = Publication("linuxAmd64", "jni")
    assert default_upload_task_name(pub, BuildType.SNAPSHOT) == "uploadSnapshotLinuxAmd64Publication"
    for build_type in (BuildType.RELEASE, BuildType.MILESTONE, BuildType.DEV):
        assert default_upload_task_name(pub, build_type) == "uploadLinuxAmd64Publication"


def test_lifecycle_tasks_metadata() -> None:
    lifecycle = UploadLifecycleAggregator(_registry(), BuildType.DEV).lifecycle_tasks()
    assert lifecycle.main.name == UPLOAD_MAIN_TASK == "uploadMain"
    assert lifecycle.other.name == UPLOAD_JNI_TASK == "uploadJni"
    assert lifecycle.main.group == lifecycle.other.group == "Upload"
    assert lifecycle.main.description == "Upload Main publication"
    assert lifecycle.other.description == "Upload all JNI publications"


def test_upload_tasks_share_the_lifecycle_group() -> None:
    tasks = _registry()
    UploadLifecycleAggregator(tasks, BuildType.RELEASE).lifecycle_tasks()

    assert len(tasks) == 2 * len(PUBLICATIONS) + 2
    assert {task.group for task in tasks} == {UPLOAD_GROUP}


@pytest.mark.parametrize(
    ("build_type", "prefix"),
    [(BuildType.SNAPSHOT, "uploadSnapshot"), (BuildType.RELEASE, "upload")],
)
def test_publications_partitioned_by_classification(build_type: BuildType, prefix: str) -> None:
    result = UploadLifecycleAggregator(_registry(), build_type).build(PUBLICATIONS)
    assert isinstance(result, Ok)

    assert result.value.main.dependencies == (f"{prefix}MainPublication",)
    assert set(result.value.other.dependencies) == {
        f"{prefix}LinuxAmd64Publication",
        f"{prefix}OsxAarch64Publication",
        f"{prefix}WindowsI386Publication",
    }


def test_each_publication_lands_in_exactly_one_aggregate() -> None:
    shuffled = list(PUBLICATIONS)
    random.Random(7).shuffle(shuffled)

    result = UploadLifecycleAggregator(_registry(), BuildType.RELEASE).build(shuffled)
    assert isinstance(result, Ok)

    main = set(result.value.main.dependencies)
    other = set(result.value.other.dependencies)
    assert not main & other
    assert len(main) + len(other) == len(PUBLICATIONS)


def test_build_is_idempotent_on_lifecycle_tasks() -> None:
    tasks = _registry()
    first = UploadLifecycleAggregator(tasks, BuildType.DEV).build(PUBLICATIONS)
    second = UploadLifecycleAggregator(tasks, BuildType.DEV).build(PUBLICATIONS)
    assert isinstance(first, Ok) and isinstance(second, Ok)
    assert first.value.main is second.value.main
    assert first.value.other is second.value.other
    assert first.value.main.dependencies == ("uploadMainPublication",)


def test_no_publications_leaves_empty_aggregates() -> None:
    result = UploadLifecycleAggregator(TaskRegistry(), BuildType.DEV).build([])
    assert isinstance(result, Ok)
    assert result.value.main.dependencies == ()
    assert result.value.other.dependencies == ()


def test_missing_upload_task_fails() -> None:
    tasks = TaskRegistry(project="p")
    result = UploadLifecycleAggregator(tasks, BuildType.SNAPSHOT).build([Publication("main", "main")])
    assert isinstance(result, Err)
    assert result.error == UnknownTaskError(name="uploadSnapshotMainPublication", project="p")


def test_injected_naming_and_classification() -> None:
    tasks = TaskRegistry()
    tasks.register("push-a")
    tasks.register("push-b")

    aggregator = UploadLifecycleAggregator(
        tasks,
        BuildType.DEV,
        upload_task_name=lambda pub, _bt: f"push-{pub.name}",
        is_main=lambda pub: pub.name == "b",
    )
    result = aggregator.build([Publication("a"), Publication("b")])
    assert isinstance(result, Ok)
    assert result.value.main.dependencies == ("push-b",)
    assert result.value.other.dependencies == ("push-a",)
