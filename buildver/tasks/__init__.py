"""Task graph model and upload lifecycle wiring."""

from .graph import Task, TaskRegistry
from .lifecycle import (
    UPLOAD_JNI_TASK,
    UPLOAD_MAIN_TASK,
    LifecycleTasks,
    UploadLifecycleAggregator,
)
from .publications import (
    Publication,
    PublicationKind,
    default_upload_task_name,
    is_main_publication,
    register_upload_tasks,
)

__all__ = [
    "Task",
    "TaskRegistry",
    "UPLOAD_JNI_TASK",
    "UPLOAD_MAIN_TASK",
    "LifecycleTasks",
    "UploadLifecycleAggregator",
    "Publication",
    "PublicationKind",
    "default_upload_task_name",
    "is_main_publication",
    "register_upload_tasks",
]
