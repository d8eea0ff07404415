"""Resolve validation phrases into reusable verification functions."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from phrase_validation.config import get_settings
from phrase_validation.expect import Expect, ExpectFactory
from phrase_validation.expect import expect as default_expect
from phrase_validation.matchers.number import to_number
from phrase_validation.matchers.string import to_regexp
from phrase_validation.phrases.grammar import Validation, parse_phrase
from phrase_validation.polling import call_maybe_async, poll_until

logger = logging.getLogger(__name__)

Verify = Callable[[Any, Any], None]
PollVerify = Callable[..., Awaitable[None]]


def _above(handle: Expect[Any], expected: Any) -> Any:
    return handle.to_be_greater_than(to_number(expected))


def _below(handle: Expect[Any], expected: Any) -> Any:
    return handle.to_be_less_than(to_number(expected))


VALIDATION_FNS: dict[Validation, Callable[[Expect[Any], Any], Any]] = {
    Validation.EQUAL: lambda handle, expected: handle.to_simple_equal(expected),
    Validation.STRICTLY_EQUAL: lambda handle, expected: handle.to_equal(expected),
    Validation.DEEPLY_EQUAL: lambda handle, expected: handle.to_deep_equal(expected),
    Validation.DEEPLY_STRICTLY_EQUAL: lambda handle, expected: handle.to_deep_strict_equal(expected),
    Validation.HAVE_MEMBERS: lambda handle, expected: handle.to_have_members(expected),
    Validation.INCLUDE_MEMBERS: lambda handle, expected: handle.to_include_members(expected),
    Validation.MATCH: lambda handle, expected: handle.to_match(to_regexp(expected)),
    Validation.CONTAIN: lambda handle, expected: handle.to_contain(expected),
    Validation.ABOVE: _above,
    Validation.GREATER: _above,
    Validation.BELOW: _below,
    Validation.LESS: _below,
    Validation.HAVE_TYPE: lambda handle, expected: handle.to_have_type(expected),
    Validation.HAVE_PROPERTY: lambda handle, expected: handle.to_have_property(expected),
    Validation.MATCH_SCHEMA: lambda handle, expected: handle.to_match_schema(expected),
    Validation.CASE_INSENSITIVE_EQUAL: lambda handle, expected: handle.to_case_insensitive_equal(expected),
    Validation.SATISFY: lambda handle, expected: handle.to_satisfy(expected),
}


def _invoke(
    received: Any,
    expected: Any,
    validation: Validation | str,
    reverse: bool,
    soft: bool,
    expect: ExpectFactory | None,
) -> Any:
    factory = expect or default_expect
    handle = factory(received, not_=reverse, soft=soft)
    return VALIDATION_FNS[Validation(validation)](handle, expected)


def verify(
    received: Any,
    expected: Any,
    validation: Validation | str,
    *,
    reverse: bool = False,
    soft: bool = False,
    expect: ExpectFactory | None = None,
) -> None:
    """Run one comparison and raise on failure.

    Raises
    ------
    AssertionFailure
        Hard or soft, depending on ``soft``, when the comparison fails.
    TypeError
        If the bound matcher is asynchronous; use :func:`averify` instead.
    """
    outcome = _invoke(received, expected, validation, reverse, soft, expect)
    if inspect.isawaitable(outcome):
        close = getattr(outcome, "close", None)
        if close is not None:
            close()
        raise TypeError(f"Validation '{Validation(validation).value}' is asynchronous, use averify()")


async def averify(
    received: Any,
    expected: Any,
    validation: Validation | str,
    *,
    reverse: bool = False,
    soft: bool = False,
    expect: ExpectFactory | None = None,
) -> None:
    """Like :func:`verify`, awaiting asynchronous matchers."""
    outcome = _invoke(received, expected, validation, reverse, soft, expect)
    if inspect.isawaitable(outcome):
        await outcome


def get_validation(phrase: str, soft: bool = False, *, expect: ExpectFactory | None = None) -> Verify:
    """Resolve ``phrase`` into ``verify(received, expected)``.

    The resolved function raises a soft failure when ``soft`` is set or when
    the phrase says ``softly``.

    Raises
    ------
    ValidationNotSupported
        If ``phrase`` is not a recognised validation phrase.

    Examples
    --------
    >>> get_validation("is not greater than")(1, "2")
    >>> get_validation("to softly equal")("a", "b")  # raises SoftAssertionFailure
    """
    match = parse_phrase(phrase)
    is_soft = soft or match.soft
    logger.debug("Resolved %r to %s (reverse=%s, soft=%s)", phrase, match.validation.name, match.reverse, is_soft)

    def validate(received: Any, expected: Any) -> None:
        verify(received, expected, match.validation, reverse=match.reverse, soft=is_soft, expect=expect)

    return validate


def get_poll_validation(phrase: str, soft: bool = False, *, expect: ExpectFactory | None = None) -> PollVerify:
    """Resolve ``phrase`` into an asynchronous polling verification.

    The returned coroutine function takes ``(producer, expected, *, timeout=None,
    interval=None)``. ``producer`` is called once per attempt and may return a
    value or an awaitable. Timing defaults come from
    :class:`~phrase_validation.config.PollSettings` (phrase timing).

    Raises
    ------
    ValidationNotSupported
        If ``phrase`` is not a recognised validation phrase.
    """
    match = parse_phrase(phrase, kind="Poll validation")
    is_soft = soft or match.soft
    logger.debug("Resolved poll %r to %s (reverse=%s, soft=%s)", phrase, match.validation.name, match.reverse, is_soft)

    async def validate(
        producer: Callable[[], Any],
        expected: Any,
        *,
        timeout: float | None = None,
        interval: float | None = None,
    ) -> None:
        if not callable(producer):
            raise TypeError(f"Provided value must be a function, got {type(producer).__name__}")
        options = get_settings().phrase_options(timeout, interval)

        async def attempt() -> None:
            received = await call_maybe_async(producer)
            await averify(received, expected, match.validation, reverse=match.reverse, soft=is_soft, expect=expect)

        await poll_until(attempt, options)

    return validate
