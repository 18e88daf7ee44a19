"""Result type for configuration steps that can fail.

Each configuration step (build type resolution, receipt I/O, version
rendering, task wiring) returns either ``Ok(value)`` or ``Err(error)``.
Callers branch with ``isinstance`` or structural pattern matching:

    match resolve_build_type(intents):
        case Ok(build_type):
            ...
        case Err(error):
            console.error(error.message)

Errors are plain frozen dataclasses, so no exception escapes a step unless a
caller explicitly asks for it with ``unwrap()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeGuard, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")

__all__ = ["Ok", "Err", "Result", "is_ok", "is_err"]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raise ``ValueError`` describing the error.

        Error payloads exposing a ``message`` attribute are rendered with it,
        anything else falls back to ``str()``.
        """
        message: str = getattr(self.error, "message", str(self.error))
        raise ValueError(message)

    def unwrap_or(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
