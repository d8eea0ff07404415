"""Matchers for functions and awaitables."""

from __future__ import annotations

import inspect
import re
from typing import Any

from phrase_validation.matchers.base import MatcherContext, MatcherResult, describe, format_message
from phrase_validation.matchers.string import show_pattern


def _error_matches(error: BaseException, expected: str | re.Pattern[str] | type[BaseException] | None) -> bool:
    if expected is None:
        return True
    if isinstance(expected, type):
        return isinstance(error, expected)
    text = str(error)
    if isinstance(expected, re.Pattern):
        return expected.search(text) is not None
    return expected in text


def to_throw(
    ctx: MatcherContext, expected: str | re.Pattern[str] | type[BaseException] | None = None
) -> MatcherResult:
    """Call ``received`` and check that it raises.

    ``expected`` narrows the check to an exception type, a substring of the
    message or a compiled pattern searched in the message.
    """
    if not callable(ctx.received):
        raise TypeError(f"Expected a function, got {type(ctx.received).__name__}")
    try:
        ctx.received()
    except Exception as error:
        passed = _error_matches(error, expected)
        if passed:
            message = f"expected function not to throw, but it raised {error!r}"
        else:
            message = f"expected function to throw {_describe_error(expected)}, but it raised {error!r}"
        return MatcherResult(passed=passed, message=message)
    return MatcherResult(passed=False, message="expected function to throw")


async def _settle(received: Any) -> Any:
    if inspect.isawaitable(received):
        return await received
    if callable(received):
        result = received()
        return await result if inspect.isawaitable(result) else result
    raise TypeError(f"Expected an awaitable or a function, got {type(received).__name__}")


def _describe_error(expected: str | re.Pattern[str] | type[BaseException]) -> str:
    return expected.__name__ if isinstance(expected, type) else show_pattern(expected)


async def to_resolve_with(ctx: MatcherContext, expected: Any) -> MatcherResult:
    try:
        value = await _settle(ctx.received)
    except Exception as error:
        return MatcherResult(passed=False, message=f"expected awaitable to resolve, but it raised {error!r}")
    return MatcherResult(
        passed=value == expected,
        message=format_message(value, expected, "to resolve with", ctx.is_not),
    )


async def to_reject_with(
    ctx: MatcherContext, expected: str | re.Pattern[str] | type[BaseException]
) -> MatcherResult:
    try:
        value = await _settle(ctx.received)
    except Exception as error:
        passed = _error_matches(error, expected)
        negation = "not " if passed else ""
        return MatcherResult(
            passed=passed,
            message=f"expected awaitable {negation}to raise {_describe_error(expected)}, got {error!r}",
        )
    return MatcherResult(
        passed=False, message=f"expected awaitable to raise, but it returned {describe(value)}"
    )


async def to_pass(ctx: MatcherContext) -> MatcherResult:
    try:
        await _settle(ctx.received)
    except Exception as error:
        return MatcherResult(
            passed=False, message=f"expected provided function to pass, but it raised {error!r}"
        )
    return MatcherResult(passed=True, message="expected provided function not to pass")
