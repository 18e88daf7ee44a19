from __future__ import annotations

import threading
from dataclasses import dataclass

from buildver.core.result import Err, Ok, Result
from buildver.versioning.build_type import BuildType
from buildver.versioning.errors import MissingMilestoneError, MissingVersionError, VersionError

__all__ = ["VersionCalculator", "VersionDetails"]


@dataclass(frozen=True, slots=True)
class VersionDetails:
    """Externally supplied version facts.

    ``next_snapshot`` is the milestone qualifier; it is only consulted for
    milestone builds.
    """

    next_version: str | None = None
    next_snapshot: str | None = None
    use_repo: bool = False


class VersionCalculator:
    """Lazily computed version shared by every project of a build.

    The version is computed on first successful ``render()`` and never
    recomputed. ``str()`` resolves it, so the calculator can be handed out
    wherever a version string is eventually formatted.
    """

    __slots__ = ("_details", "_build_type", "_build_timestamp", "_version", "_lock")

    def __init__(self, details: VersionDetails, build_type: BuildType, build_timestamp: str) -> None:
        self._details = details
        self._build_type = build_type
        self._build_timestamp = build_timestamp
        self._version: str | None = None
        self._lock = threading.Lock()

    @property
    def build_type(self) -> BuildType:
        return self._build_type

    @property
    def build_timestamp(self) -> str:
        return self._build_timestamp

    @property
    def is_resolved(self) -> bool:
        return self._version is not None

    def render(self) -> Result[str, VersionError]:
        version = self._version
        if version is not None:
            return Ok(version)

        with self._lock:
            if self._version is None:
                computed = self._compute()
                if isinstance(computed, Err):
                    return computed
                self._version = computed.value
            return Ok(self._version)

    def resolve(self) -> str:
        """Return the version, raising ``ValueError`` if it cannot be computed."""
        rendered = self.render()
        if isinstance(rendered, Err):
            raise ValueError(rendered.error.message)
        return rendered.value

    def _compute(self) -> Result[str, VersionError]:
        next_version = self._details.next_version
        if next_version is None:
            return Err(MissingVersionError())

        match self._build_type:
            case BuildType.RELEASE:
                return Ok(next_version)
            case BuildType.MILESTONE:
                qualifier = self._details.next_snapshot
                if qualifier is None:
                    return Err(MissingMilestoneError())
                return Ok(f"{next_version}-milestone-{qualifier}")
            case BuildType.SNAPSHOT:
                return Ok(f"{next_version}-snapshot-{self._build_timestamp}")
            case BuildType.DEV:
                return Ok(f"{next_version}-dev")

    def __str__(self) -> str:
        return self.resolve()

    def __repr__(self) -> str:
        shown = self._version if self._version is not None else "<unresolved>"
        return f"VersionCalculator({self._build_type}, {shown})"
