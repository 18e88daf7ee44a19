from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Literal

from buildver.core.result import Err, Ok, Result
from buildver.versioning.errors import ConflictingBuildTypeError

__all__ = [
    "BuildIntent",
    "BuildType",
    "intents_from_flags",
    "resolve_build_type",
]


BuildIntent = Literal["snapshot", "release", "milestone"]


class BuildType(Enum):
    """Release channel of a build. Exactly one is active per build."""

    DEV = "Dev"
    SNAPSHOT = "Snapshot"
    MILESTONE = "Milestone"
    RELEASE = "Release"

    def __str__(self) -> str:
        return self.value


# Order in which conflicting types are reported.
_INTENT_TYPES: tuple[tuple[BuildIntent, BuildType], ...] = (
    ("release", BuildType.RELEASE),
    ("milestone", BuildType.MILESTONE),
    ("snapshot", BuildType.SNAPSHOT),
)


def intents_from_flags(
    *, snapshot: bool = False, release: bool = False, milestone: bool = False
) -> frozenset[BuildIntent]:
    selected: set[BuildIntent] = set()
    if snapshot:
        selected.add("snapshot")
    if release:
        selected.add("release")
    if milestone:
        selected.add("milestone")
    return frozenset(selected)


def resolve_build_type(
    intents: Iterable[BuildIntent],
) -> Result[BuildType, ConflictingBuildTypeError]:
    """Pick the single active build type; no intent means a dev build."""
    wanted = set(intents)
    enabled = [build_type for intent, build_type in _INTENT_TYPES if intent in wanted]
    if len(enabled) > 1:
        return Err(ConflictingBuildTypeError(types=tuple(str(t) for t in enabled)))
    if not enabled:
        return Ok(BuildType.DEV)
    return Ok(enabled[0])
