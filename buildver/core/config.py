"""Typed loading of ``buildver.toml``.

The config file carries the externally supplied facts the version logic
consumes (next version, milestone qualifier, repository usage), optional
repository credentials, and the projects with their declared publications.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from buildver.tasks.publications import Publication, PublicationKind
from buildver.versioning.calculator import VersionDetails
from buildver.versioning.repository import Credentials

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_list, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "BuildConfig",
    "ConfigError",
    "ProjectConfig",
    "load_config",
]

CONFIG_FILE_NAME = "buildver.toml"

_PUBLICATION_KINDS: tuple[PublicationKind, ...] = ("main", "jni")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    @property
    def hint(self) -> str | None:
        return str(self.path) if self.path is not None else None


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """A (sub-)project and the publications it declares."""

    name: str
    publications: tuple[Publication, ...] = ()


@dataclass(frozen=True, slots=True)
class BuildConfig:
    versions: VersionDetails = field(default_factory=VersionDetails)
    credentials: Credentials = field(default_factory=Credentials)
    projects: tuple[ProjectConfig, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[BuildConfig, str]:
        versions: StrDict = get_table(data, "versions") or {}
        credentials: StrDict = get_table(data, "credentials") or {}

        for key in ("next_version", "next_snapshot"):
            value = versions.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                # tomllib has already normalised 0.10 to 0.1
                return Err(f"versions.{key} must be a quoted string")

        projects: list[ProjectConfig] = []
        for raw in get_list(data, "projects") or []:
            table = as_str_dict(raw)
            if table is None:
                return Err("projects entries must be tables")
            project = _parse_project(table)
            if isinstance(project, Err):
                return project
            projects.append(project.value)

        return Ok(
            cls(
                versions=VersionDetails(
                    next_version=get_str(versions, "next_version"),
                    next_snapshot=get_str(versions, "next_snapshot"),
                    use_repo=get_bool(versions, "use_repo"),
                ),
                credentials=Credentials(
                    user_name=get_str(credentials, "user_name"),
                    api_key=get_str(credentials, "api_key"),
                ),
                projects=tuple(projects),
            )
        )


def _parse_project(table: StrDict) -> Result[ProjectConfig, str]:
    name = get_str(table, "name")
    if name is None:
        return Err("project is missing a name")

    publications: list[Publication] = []
    seen: set[str] = set()
    for raw in get_list(table, "publications") or []:
        entry = as_str_dict(raw)
        if entry is None:
            return Err(f"publications of {name} must be tables")
        pub_name = get_str(entry, "name")
        if pub_name is None:
            return Err(f"publication of {name} is missing a name")
        if pub_name in seen:
            return Err(f"duplicate publication {pub_name!r} in {name}")
        seen.add(pub_name)
        kind = get_str(entry, "kind") or "jni"
        if kind not in _PUBLICATION_KINDS:
            return Err(f"invalid publication kind {kind!r} for {name}:{pub_name}")
        publications.append(Publication(name=pub_name, kind=kind))

    return Ok(ProjectConfig(name=name, publications=tuple(publications)))


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[BuildConfig, ConfigError]:
    """Load and parse ``buildver.toml``.

    Returns:
        Ok(BuildConfig) on success, Err(ConfigError) on failure
    """
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    config = BuildConfig.from_dict(parsed.value)
    if isinstance(config, Err):
        return Err(ConfigError(f"Invalid config structure: {config.error}", path=path))
    return config
