"""Minimal task registry standing in for the host build's task graph.

Only what lifecycle wiring needs: create-or-reuse by name, lookup by name,
and dependency edges. Tasks carry no actions of their own.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from buildver.core.result import Err, Ok, Result
from buildver.versioning.errors import UnknownTaskError

__all__ = ["Task", "TaskRegistry"]


def _empty_names() -> dict[str, None]:
    return {}


@dataclass(eq=False)
class Task:
    name: str
    group: str | None = None
    description: str | None = None
    # Insertion-ordered set of dependency names.
    _depends_on: dict[str, None] = field(default_factory=_empty_names, repr=False)

    def depends_on(self, *tasks: Task) -> None:
        for task in tasks:
            self._depends_on.setdefault(task.name, None)

    @property
    def dependencies(self) -> tuple[str, ...]:
        return tuple(self._depends_on)


class TaskRegistry:
    def __init__(self, project: str | None = None) -> None:
        self.project = project
        self._tasks: dict[str, Task] = {}

    def register(self, name: str, *, group: str | None = None, description: str | None = None) -> Task:
        """Register a new task. Registering an existing name is a programming error."""
        if name in self._tasks:
            raise ValueError(f"task {name!r} already registered")
        task = Task(name=name, group=group, description=description)
        self._tasks[name] = task
        return task

    def maybe_create(self, name: str) -> Task:
        """Return the task called ``name``, creating it if needed."""
        task = self._tasks.get(name)
        if task is None:
            task = self.register(name)
        return task

    def named(self, name: str) -> Result[Task, UnknownTaskError]:
        task = self._tasks.get(name)
        if task is None:
            return Err(UnknownTaskError(name=name, project=self.project))
        return Ok(task)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)
