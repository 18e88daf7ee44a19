"""Error variants for build configuration.

Every variant aborts the build configuration: there is no retry and no
partial result. Each one exposes ``message`` (what is wrong) and ``hint``
(what to change) so commands can render them uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True, slots=True)
class ConflictingBuildTypeError:
    types: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Cannot build {' and '.join(self.types)} in same build."

    @property
    def hint(self) -> str | None:
        return "pass at most one of --release, --milestone, --snapshot"


@dataclass(frozen=True, slots=True)
class MissingVersionError:
    @property
    def message(self) -> str:
        return "Next version not specified."

    @property
    def hint(self) -> str | None:
        return "set versions.next_version in buildver.toml"


@dataclass(frozen=True, slots=True)
class MissingMilestoneError:
    @property
    def message(self) -> str:
        return "Next milestone not specified."

    @property
    def hint(self) -> str | None:
        return "set versions.next_snapshot in buildver.toml"


@dataclass(frozen=True, slots=True)
class MissingTimestampError:
    path: Path
    key: str = "buildTimestamp"

    @property
    def message(self) -> str:
        return f"build receipt {self.path} has no {self.key} property"

    @property
    def hint(self) -> str | None:
        return "pass --ignore-incoming-build-receipt to generate a fresh timestamp"


@dataclass(frozen=True, slots=True)
class ReceiptIOError:
    path: Path
    operation: Literal["read", "write"]
    reason: str

    @property
    def message(self) -> str:
        return f"failed to {self.operation} build receipt {self.path}: {self.reason}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class MissingCredentialsError:
    missing: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"repository credentials not provided: {', '.join(self.missing)}"

    @property
    def hint(self) -> str | None:
        return "set BINTRAY_USERNAME and BINTRAY_API_KEY (or [credentials] in buildver.toml)"


@dataclass(frozen=True, slots=True)
class UnknownTaskError:
    name: str
    project: str | None = None

    @property
    def message(self) -> str:
        where = f" in project {self.project}" if self.project else ""
        return f"task {self.name!r} not found{where}"

    @property
    def hint(self) -> str | None:
        return "publication upload tasks must be registered before lifecycle tasks are wired"


VersionError = MissingVersionError | MissingMilestoneError
TimestampError = MissingTimestampError | ReceiptIOError

VersioningError = (
    ConflictingBuildTypeError
    | MissingVersionError
    | MissingMilestoneError
    | MissingTimestampError
    | ReceiptIOError
    | MissingCredentialsError
    | UnknownTaskError
)
