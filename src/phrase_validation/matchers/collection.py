"""Containment and membership matchers."""

from __future__ import annotations

from collections.abc import Container, Iterable, Mapping
from typing import Any

from phrase_validation.matchers.base import MatcherContext, MatcherResult, describe, verdict
from phrase_validation.matchers.equality import deep_equal, same_value


def contains(received: Any, expected: Any) -> bool:
    """Containment test behind ``to_contain``.

    Strings and bytes are searched for a substring of the same kind, mappings
    for a key, other containers and iterables for an element.

    Raises
    ------
    TypeError
        If ``received`` is not searchable or a text needle has the wrong type.
    """
    if isinstance(received, str):
        if not isinstance(expected, str):
            raise TypeError(f"Cannot search str for {type(expected).__name__} value {expected!r}")
        return expected in received
    if isinstance(received, (bytes, bytearray)):
        if not isinstance(expected, (bytes, bytearray, int)):
            raise TypeError(f"Cannot search bytes for {type(expected).__name__} value {expected!r}")
        return expected in received
    if isinstance(received, Mapping):
        return expected in received
    if isinstance(received, (Container, Iterable)):
        return expected in received
    raise TypeError(f"{type(received).__name__} value {received!r} does not support containment")


def _remove_matching(pool: list[Any], item: Any) -> bool:
    for index, candidate in enumerate(pool):
        if deep_equal(item, candidate):
            del pool[index]
            return True
    return False


def same_members(received: Iterable[Any], expected: Iterable[Any]) -> bool:
    pool = list(received)
    wanted = list(expected)
    if len(pool) != len(wanted):
        return False
    return all(_remove_matching(pool, item) for item in wanted)


def includes_members(received: Iterable[Any], expected: Iterable[Any]) -> bool:
    pool = list(received)
    return all(_remove_matching(pool, item) for item in expected)


def _members_of(value: Any, role: str) -> list[Any]:
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
        raise TypeError(f"{role} value {value!r} must be a list-like collection")
    return list(value)


def to_contain(ctx: MatcherContext, expected: Any) -> MatcherResult:
    passed = contains(ctx.received, expected)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to contain"))


def to_contain_equal(ctx: MatcherContext, expected: Any) -> MatcherResult:
    items = _members_of(ctx.received, "Received")
    passed = any(same_value(item, expected) or deep_equal(item, expected) for item in items)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to contain equal"))


def to_have_members(ctx: MatcherContext, expected: Any) -> MatcherResult:
    received = _members_of(ctx.received, "Received")
    wanted = _members_of(expected, "Expected")
    passed = same_members(received, wanted)
    return MatcherResult(
        passed=passed, message=ctx.format_message(expected, "to have the same members as")
    )


def to_include_members(ctx: MatcherContext, expected: Any) -> MatcherResult:
    received = _members_of(ctx.received, "Received")
    wanted = _members_of(expected, "Expected")
    passed = includes_members(received, wanted)
    return MatcherResult(passed=passed, message=ctx.format_message(expected, "to include members"))


def to_have_length(ctx: MatcherContext, expected: int) -> MatcherResult:
    received = ctx.received
    try:
        length = len(received)
    except TypeError:
        raise TypeError(f"{type(received).__name__} value {received!r} has no length") from None
    return verdict(
        length == expected,
        f"expected {describe(received)} to have length {expected}, got {length}",
        f"expected {describe(received)} not to have length {expected}",
    )
