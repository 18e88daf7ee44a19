"""Error presentation for CLI commands.

Centralizes how configuration errors are printed and which exit code each
one maps to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, Protocol, TypeVar

import typer

from buildver.core.errors import ErrorCode
from buildver.core.result import Err, Result
from buildver.output.console import Style
from buildver.versioning.errors import (
    ConflictingBuildTypeError,
    MissingCredentialsError,
    MissingMilestoneError,
    MissingTimestampError,
    MissingVersionError,
    ReceiptIOError,
    UnknownTaskError,
)

if TYPE_CHECKING:
    from buildver.output.console import ConsoleProtocol

__all__ = ["error_exit_code", "exit_on_error", "fail", "print_error"]


class _Reportable(Protocol):
    @property
    def message(self) -> str: ...

    @property
    def hint(self) -> str | None: ...


T = TypeVar("T")
E = TypeVar("E", bound=_Reportable)


def error_exit_code(error: object) -> ErrorCode:
    match error:
        case ConflictingBuildTypeError() | MissingVersionError() | MissingMilestoneError():
            return ErrorCode.USER_ERROR
        case MissingTimestampError() | ReceiptIOError():
            return ErrorCode.IO_ERROR
        case MissingCredentialsError():
            return ErrorCode.ENV_ERROR
        case UnknownTaskError():
            return ErrorCode.BUILD_ERROR
    return ErrorCode.USER_ERROR


def print_error(error: _Reportable, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def fail(
    error: _Reportable,
    console: ConsoleProtocol,
    error_code: ErrorCode | None = None,
) -> NoReturn:
    print_error(error, console)
    code = error_code if error_code is not None else error_exit_code(error)
    raise typer.Exit(code=int(code))


def exit_on_error(
    result: Result[T, E],
    console: ConsoleProtocol,
    error_code: ErrorCode | None = None,
) -> T:
    """Return the value of ``result`` or print its error and exit.

    Without ``error_code`` the exit code is derived from the error variant.
    """
    if isinstance(result, Err):
        fail(result.error, console, error_code)
    return result.value
