"""Two-variant outcome type used instead of exceptions across the pipeline."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from publishflow.exceptions import ErrorCode, PublishError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a typed error."""

    error: PublishError

    @property
    def ok(self) -> bool:
        return False

    @property
    def code(self) -> ErrorCode:
        return self.error.code


Result = Union[Ok[T], Err]


def fail(
    message: str,
    code: ErrorCode,
    cause: object | None = None,
    fix_hint: str | None = None,
) -> Err:
    """Shorthand for Err(PublishError(...))."""
    return Err(PublishError(message, code, cause=cause, fix_hint=fix_hint))
