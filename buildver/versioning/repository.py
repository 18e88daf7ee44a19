"""Remote Maven repository selection.

When a build is told to use the remote repository (for example while
assembling a test distribution during a snapshot or release build), it
resolves against the snapshot or the release repository depending on the
build type, authenticated with the provided credentials.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from buildver.core.result import Err, Ok, Result
from buildver.versioning.build_type import BuildType
from buildver.versioning.calculator import VersionDetails
from buildver.versioning.errors import MissingCredentialsError

__all__ = [
    "RELEASES_REPOSITORY_URL",
    "SNAPSHOT_REPOSITORY_URL",
    "Credentials",
    "MavenRepository",
    "select_repository",
]

SNAPSHOT_REPOSITORY_URL = "https://repo.gradle.org/gradle/ext-snapshots-local"
RELEASES_REPOSITORY_URL = "https://dl.bintray.com/adammurdoch/maven"

USER_NAME_ENV_VAR = "BINTRAY_USERNAME"
API_KEY_ENV_VAR = "BINTRAY_API_KEY"


@dataclass(frozen=True, slots=True)
class Credentials:
    user_name: str | None = None
    api_key: str | None = None

    def with_env(self, env: Mapping[str, str] | None = None) -> Credentials:
        """Overlay credentials from the environment; non-empty env values win."""
        source = os.environ if env is None else env
        return Credentials(
            user_name=source.get(USER_NAME_ENV_VAR) or self.user_name,
            api_key=source.get(API_KEY_ENV_VAR) or self.api_key,
        )

    def assert_present(self) -> Result[None, MissingCredentialsError]:
        missing = tuple(
            name
            for name, value in (("user name", self.user_name), ("api key", self.api_key))
            if not value
        )
        if missing:
            return Err(MissingCredentialsError(missing=missing))
        return Ok(None)

    def __repr__(self) -> str:
        # api key is masked
        masked = "***" if self.api_key else None
        return f"Credentials(user_name={self.user_name!r}, api_key={masked!r})"


@dataclass(frozen=True, slots=True)
class MavenRepository:
    url: str
    user_name: str
    password: str
    authentication: Literal["basic"] = "basic"

    def __repr__(self) -> str:
        return f"MavenRepository(url={self.url!r}, user_name={self.user_name!r})"


def repository_url(build_type: BuildType) -> str:
    if build_type == BuildType.SNAPSHOT:
        return SNAPSHOT_REPOSITORY_URL
    return RELEASES_REPOSITORY_URL


def select_repository(
    build_type: BuildType,
    details: VersionDetails,
    credentials: Credentials,
) -> Result[MavenRepository | None, MissingCredentialsError]:
    """Return the repository to resolve against, or None when not using one."""
    if not details.use_repo:
        return Ok(None)

    present = credentials.assert_present()
    if isinstance(present, Err):
        return present

    return Ok(
        MavenRepository(
            url=repository_url(build_type),
            user_name=credentials.user_name or "",
            password=credentials.api_key or "",
        )
    )
