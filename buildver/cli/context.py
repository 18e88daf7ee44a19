from __future__ import annotations

from dataclasses import dataclass

from buildver.cli.errors import exit_on_error
from buildver.core.build_root import BuildRoot, detect_build_root
from buildver.core.config import BuildConfig, load_config
from buildver.core.errors import ErrorCode
from buildver.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    build_root: BuildRoot
    config: BuildConfig
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole()
    build_root = exit_on_error(detect_build_root(), console, ErrorCode.ENV_ERROR)
    config = exit_on_error(load_config(build_root.config_path), console, ErrorCode.USER_ERROR)
    return CLIContext(build_root=build_root, config=config, console=console)
