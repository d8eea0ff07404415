"""Error taxonomy for phrase resolution, matcher dispatch and polling."""

from __future__ import annotations

from typing import Any


class ValidationNotSupported(ValueError):
    """Raised when a phrase does not match the validation grammar."""

    def __init__(self, phrase: str, kind: str = "Validation") -> None:
        self.phrase = phrase
        super().__init__(f"{kind} '{phrase}' is not supported")


class MatcherNotFound(AttributeError):
    """Raised when a handle is asked for a matcher the registry does not hold."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} matcher not found", name=name)


class NotANumber(TypeError):
    """Raised when a numeric matcher is given a value that cannot be parsed."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"{value} is not a number")


class AssertionFailure(AssertionError):
    """Hard assertion failure.

    Raised when a matcher verdict disagrees with the expectation of the
    handle. A hard failure is meant to stop the surrounding test.
    """

    is_soft = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SoftAssertionFailure(AssertionFailure):
    """Soft assertion failure.

    Carries the same message as the hard failure it was raised from; the
    hard failure is available as ``__cause__`` (and ``cause``). Collectors
    that keep a test running after a failed check should catch this type
    and only this type.
    """

    is_soft = True

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class PollTimeout(AssertionFailure):
    """Raised when polling ran out of time before any attempt completed."""

    def __init__(self, timeout: float, message: str | None = None) -> None:
        self.timeout = timeout
        super().__init__(message or f"Poll was not settled before timeout of {timeout}s")


def failure_for(message: str, *, soft: bool) -> AssertionFailure:
    """Build the failure matching the requested kind.

    Soft failures are chained to a hard failure carrying the same message so
    that the originating verdict stays inspectable.
    """
    hard = AssertionFailure(message)
    if not soft:
        return hard
    error = SoftAssertionFailure(message)
    error.__cause__ = hard
    return error
