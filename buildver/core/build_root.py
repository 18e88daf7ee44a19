"""Build root detection and well-known paths.

The build root is the top of the source tree being built. It is identified by
the presence of a ``buildver.toml`` file, which also carries the version
settings. The receipt file and the incoming-distributions directory are fixed
relative to it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILE_NAME
from .result import Err, Ok, Result

__all__ = [
    "BUILD_RECEIPT_NAME",
    "INCOMING_DISTRIBUTIONS_DIR",
    "BuildRoot",
    "BuildRootError",
    "detect_build_root",
]

BUILD_RECEIPT_NAME = "build-receipt.properties"
INCOMING_DISTRIBUTIONS_DIR = "incoming-distributions"

ROOT_ENV_VAR = "BUILDVER_ROOT"


@dataclass(frozen=True)
class BuildRootError:
    """Error when the build root cannot be detected."""

    message: str
    searched_from: Path | None = None

    @property
    def hint(self) -> str | None:
        return f"create {CONFIG_FILE_NAME} at the top of the source tree or pass --root"


@dataclass(frozen=True, slots=True)
class BuildRoot:
    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE_NAME

    @property
    def receipt_path(self) -> Path:
        """Where a snapshot build writes its receipt."""
        return self.root / BUILD_RECEIPT_NAME

    @property
    def incoming_dir(self) -> Path:
        """Where a consuming stage finds distributions of a prior build."""
        return self.root / INCOMING_DISTRIBUTIONS_DIR

    @property
    def incoming_receipt_path(self) -> Path:
        return self.incoming_dir / BUILD_RECEIPT_NAME

    def __str__(self) -> str:
        return str(self.root)


def is_build_root(path: Path) -> bool:
    return (path / CONFIG_FILE_NAME).is_file()


def find_build_root_upward(start: Path) -> Path | None:
    current = start.resolve()
    for candidate in (current, *current.parents):
        if is_build_root(candidate):
            return candidate
    return None


def detect_build_root(
    explicit: Path | None = None,
    *,
    start_dir: Path | None = None,
) -> Result[BuildRoot, BuildRootError]:
    """Detect the build root.

    Order of precedence:
    1. ``explicit`` (the ``--root`` option)
    2. ``BUILDVER_ROOT`` environment variable
    3. Upward search from ``start_dir`` (default: cwd)

    An explicit root or environment override must contain ``buildver.toml``;
    it is never silently ignored.
    """
    override = explicit
    if override is None:
        env = os.environ.get(ROOT_ENV_VAR)
        if env:
            override = Path(env)

    if override is not None:
        root = override.expanduser().resolve()
        if not is_build_root(root):
            return Err(BuildRootError(f"{root} is not a build root (missing {CONFIG_FILE_NAME})"))
        return Ok(BuildRoot(root=root))

    search_from = (start_dir or Path.cwd()).resolve()
    found = find_build_root_upward(search_from)
    if found is None:
        return Err(
            BuildRootError(
                f"no {CONFIG_FILE_NAME} found in {search_from} or any parent",
                searched_from=search_from,
            )
        )
    return Ok(BuildRoot(root=found))
