"""Equality matchers.

Four flavours are provided, from the loosest to the strictest:

``to_simple_equal``
    Loose equality. Numbers and numeric strings compare by value
    (``"1"`` equals ``1``).
``to_equal`` / ``to_be``
    Same-value equality. Scalars must agree on type and value, ``nan`` equals
    ``nan`` and ``0.0`` differs from ``-0.0``; anything else must be the same
    object.
``to_deep_equal``
    Structural equality. Mappings compare key by key, sets by content and
    sequences element by element regardless of order.
``to_deep_strict_equal`` / ``to_strict_equal``
    Structural equality in order, with exact type agreement at every level.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence, Set
from numbers import Number
from typing import Any

from phrase_validation.matchers.base import MatcherContext, MatcherResult, describe, verdict

_SCALARS = (int, float, complex, str, bytes, bool, type(None))


def same_value(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, float):
        if math.isnan(a) and math.isnan(b):
            return True
        if a == 0.0 and b == 0.0:
            return math.copysign(1.0, a) == math.copysign(1.0, b)
        return a == b
    if isinstance(a, _SCALARS):
        return a == b
    return a is b


def loose_equal(a: Any, b: Any) -> bool:
    if a == b:
        return True
    if isinstance(a, str) and isinstance(b, Number):
        a, b = b, a
    if isinstance(a, Number) and not isinstance(a, bool) and isinstance(b, str):
        try:
            return a == float(b.strip())
        except ValueError:
            return False
    return False


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _unordered_equal(left: Sequence[Any], right: Sequence[Any]) -> bool:
    if len(left) != len(right):
        return False
    remaining = list(right)
    for item in left:
        for index, candidate in enumerate(remaining):
            if deep_equal(item, candidate):
                del remaining[index]
                break
        else:
            return False
    return True


def deep_equal(a: Any, b: Any) -> bool:
    if same_value(a, b):
        return True
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[key], b[key]) for key in a)
    if _is_sequence(a) and _is_sequence(b):
        return _unordered_equal(a, b)
    if isinstance(a, Set) and isinstance(b, Set):
        return a == b
    if hasattr(a, "__dict__") and hasattr(b, "__dict__") and not callable(a):
        return type(a) is type(b) and deep_equal(vars(a), vars(b))
    return a == b


def deep_strict_equal(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if same_value(a, b):
        return True
    if isinstance(a, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_strict_equal(a[key], b[key]) for key in a)
    if _is_sequence(a):
        return len(a) == len(b) and all(deep_strict_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, Set):
        return a == b
    if hasattr(a, "__dict__") and not callable(a):
        return deep_strict_equal(vars(a), vars(b))
    return a == b


def to_simple_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    passed = loose_equal(ctx.received, expected)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to equal"))


def to_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    passed = same_value(ctx.received, expected)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to equal"))


def to_be(ctx: MatcherContext, expected: Any) -> MatcherResult:
    received = describe(ctx.received)
    return verdict(
        same_value(ctx.received, expected),
        f"expected {received} to be {describe(expected)}",
        f"expected {received} not to be {describe(expected)}",
    )


def to_deep_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    passed = deep_equal(ctx.received, expected)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to deeply equal"))


def to_deep_strict_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    passed = deep_strict_equal(ctx.received, expected)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to deeply strictly equal"))


def to_strict_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    passed = deep_strict_equal(ctx.received, expected)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to strictly equal"))


def to_case_insensitive_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    passed = str(ctx.received).casefold() == str(expected).casefold()
    return MatcherResult(
        passed=passed, message=ctx.format_message(expected, "to case insensitive equal")
    )
