"""Base matcher types and message helpers."""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import BaseModel
from rich.pretty import pretty_repr


class MatcherResult(BaseModel):
    """Verdict returned by a matcher.

    Attributes
    ----------
    passed
        Whether the underlying predicate held for the received value.
        Negation is applied by the handle, not by the matcher.
    message
        Human-readable description used when the verdict turns into a failure.
    """

    passed: bool
    message: str


@dataclass(frozen=True, slots=True)
class MatcherContext:
    """Snapshot of the handle state passed to a matcher.

    Attributes
    ----------
    received
        Value under test. Under polling this is the freshly produced value of
        the current attempt.
    is_not
        Whether the expectation is negated.
    is_soft
        Whether a failure is raised as a soft failure.
    is_poll
        Whether the matcher runs inside a polling evaluation.
    """

    received: Any
    is_not: bool = False
    is_soft: bool = False
    is_poll: bool = False

    def format_message(self, expected: Any, assertion: str) -> str:
        return format_message(self.received, expected, assertion, self.is_not)


class Matcher(Protocol):
    """Callable protocol for matcher functions."""

    def __call__(
        self, ctx: MatcherContext, *args: Any, **kwargs: Any
    ) -> MatcherResult | Awaitable[MatcherResult]: ...


def describe(value: Any) -> str:
    """Render a value for a failure message."""
    if isinstance(value, type):
        return f"<class {value.__name__}>"
    if callable(value) and hasattr(value, "__name__"):
        return f"<function {value.__name__}>"
    return pretty_repr(value, max_width=120, max_length=20, max_string=200)


def format_message(received: Any, expected: Any, assertion: str, is_not: bool) -> str:
    """Build ``expected <received> [not ]<assertion> <expected>``."""
    negation = "not " if is_not else ""
    return f"expected {describe(received)} {negation}{assertion} {describe(expected)}"


def verdict(passed: bool, positive: str, negative: str) -> MatcherResult:
    """Pick the message that explains the verdict.

    ``positive`` describes the positive expectation and is used when the
    predicate failed; ``negative`` is used when it held, which can only fail
    a negated expectation.
    """
    return MatcherResult(passed=passed, message=negative if passed else positive)
