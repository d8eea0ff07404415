"""Numeric ordering matchers."""

from __future__ import annotations

import math
import operator
from collections.abc import Callable
from typing import Any

from phrase_validation.errors import NotANumber
from phrase_validation.matchers.base import MatcherContext, MatcherResult, describe, verdict


def to_number(value: Any) -> float | int:
    """Parse ``value`` as a number.

    Raises
    ------
    NotANumber
        If ``value`` is not numeric and cannot be parsed as a float, or parses
        to ``nan``.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and math.isnan(value):
            raise NotANumber(value)
        return value
    try:
        parsed = float(str(value).strip())
    except ValueError:
        raise NotANumber(value) from None
    if math.isnan(parsed):
        raise NotANumber(value)
    return parsed


def as_number(value: Any) -> float | int:
    """Coerce a received value; anything unparseable becomes ``nan``."""
    try:
        return to_number(value)
    except NotANumber:
        return math.nan


def _compare(
    ctx: MatcherContext, expected: Any, op: Callable[[Any, Any], bool], wording: str
) -> MatcherResult:
    received = as_number(ctx.received)
    limit = as_number(expected)
    passed = op(received, limit)
    shown = describe(ctx.received)
    return verdict(
        passed,
        f"expected {shown} to be {wording} {describe(expected)}",
        f"expected {shown} not to be {wording} {describe(expected)}",
    )


def to_be_greater_than(ctx: MatcherContext, expected: Any) -> MatcherResult:
    return _compare(ctx, expected, operator.gt, "greater than")


def to_be_greater_than_or_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    return _compare(ctx, expected, operator.ge, "greater than or equal to")


def to_be_less_than(ctx: MatcherContext, expected: Any) -> MatcherResult:
    return _compare(ctx, expected, operator.lt, "less than")


def to_be_less_than_or_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    return _compare(ctx, expected, operator.le, "less than or equal to")


def to_be_nan(ctx: MatcherContext) -> MatcherResult:
    received = ctx.received
    passed = isinstance(received, float) and math.isnan(received)
    return verdict(
        passed,
        f"expected {describe(received)} to be nan",
        f"expected {describe(received)} not to be nan",
    )
