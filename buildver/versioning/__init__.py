"""Build type, build timestamp and version resolution."""

from .build_type import BuildIntent, BuildType, intents_from_flags, resolve_build_type
from .calculator import VersionCalculator, VersionDetails
from .errors import (
    ConflictingBuildTypeError,
    MissingCredentialsError,
    MissingMilestoneError,
    MissingTimestampError,
    MissingVersionError,
    ReceiptIOError,
    UnknownTaskError,
    VersioningError,
)
from .repository import Credentials, MavenRepository, select_repository
from .timestamp import determine_timestamp, format_timestamp, persist_timestamp

__all__ = [
    # build_type
    "BuildIntent",
    "BuildType",
    "intents_from_flags",
    "resolve_build_type",
    # calculator
    "VersionCalculator",
    "VersionDetails",
    # errors
    "ConflictingBuildTypeError",
    "MissingCredentialsError",
    "MissingMilestoneError",
    "MissingTimestampError",
    "MissingVersionError",
    "ReceiptIOError",
    "UnknownTaskError",
    "VersioningError",
    # repository
    "Credentials",
    "MavenRepository",
    "select_repository",
    # timestamp
    "determine_timestamp",
    "format_timestamp",
    "persist_timestamp",
]
