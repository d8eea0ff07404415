"""Type, property and predicate matchers."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from phrase_validation.matchers.base import MatcherContext, MatcherResult, describe, verdict
from phrase_validation.matchers.equality import deep_equal

_MISSING = object()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "number": _is_number,
    "string": lambda value: isinstance(value, str),
    "boolean": lambda value: isinstance(value, bool),
    "object": lambda value: isinstance(value, Mapping),
    "array": _is_array,
    "function": callable,
    "null": lambda value: value is None,
}


def _type_name(expected: str | type) -> str:
    if isinstance(expected, type):
        return expected.__name__
    if not isinstance(expected, str):
        raise TypeError(f"Expected a type or a type name, got {type(expected).__name__} value {expected!r}")
    return expected


def has_type(value: Any, expected: str | type) -> bool:
    if isinstance(expected, type):
        return isinstance(value, expected)
    name = _type_name(expected)
    check = TYPE_CHECKS.get(name.lower())
    if check is not None:
        return check(value)
    return any(cls.__name__ == name for cls in type(value).__mro__)


def _article(name: str) -> str:
    return "an" if name[:1].lower() in "aeiou" else "a"


def to_have_type(ctx: MatcherContext, expected: str | type) -> MatcherResult:
    """Check the kind of ``received``.

    ``expected`` is a class checked with ``isinstance``, a portable name
    (``number``, ``string``, ``boolean``, ``object``, ``array``,
    ``function``, ``null``) or the name of a Python class in the MRO of
    ``received`` (``int``, ``dict``, ...).
    """
    received = describe(ctx.received)
    name = _type_name(expected)
    kind = f"{_article(name)} {name}"
    return verdict(
        has_type(ctx.received, expected),
        f"expected {received} to be {kind}",
        f"expected {received} not to be {kind}",
    )


def _index(key: Any) -> int | None:
    if isinstance(key, int) and not isinstance(key, bool):
        return key
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


def _step(value: Any, key: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, _MISSING)
    if _is_array(value):
        index = _index(key)
        if index is not None:
            return value[index] if 0 <= index < len(value) else _MISSING
    if not isinstance(key, str):
        return _MISSING
    return getattr(value, key, _MISSING)


def get_property(value: Any, key: Any) -> Any:
    """Resolve ``key`` on ``value``; dotted string keys walk nested values.

    Non-string keys are looked up as mapping keys or sequence indexes only.
    Returns the module-private missing sentinel when the path does not exist.
    """
    direct = _step(value, key)
    if direct is not _MISSING or not isinstance(key, str) or "." not in key:
        return direct
    current = value
    for part in key.split("."):
        current = _step(current, part)
        if current is _MISSING:
            break
    return current


def to_have_property(ctx: MatcherContext, key: Any, value: Any = _MISSING) -> MatcherResult:
    found = get_property(ctx.received, key)
    passed = found is not _MISSING
    if passed and value is not _MISSING:
        passed = deep_equal(found, value)
    suffix = "" if value is _MISSING else f" with value {describe(value)}"
    return verdict(
        passed,
        f'expected {describe(ctx.received)} to have property "{key}"{suffix}',
        f'expected {describe(ctx.received)} not to have property "{key}"{suffix}',
    )


def _satisfied(ctx: MatcherContext, predicate: Callable[[Any], Any], outcome: Any) -> MatcherResult:
    return MatcherResult(passed=bool(outcome), message=ctx.format_message(predicate, "to satisfy"))


async def _satisfied_async(
    ctx: MatcherContext, predicate: Callable[[Any], Any], pending: Awaitable[Any] | None = None
) -> MatcherResult:
    if pending is None:
        pending = predicate(ctx.received)
    return _satisfied(ctx, predicate, await pending)


def to_satisfy(
    ctx: MatcherContext, expected: Callable[[Any], Any]
) -> MatcherResult | Awaitable[MatcherResult]:
    """Check ``expected(received)`` for truthiness.

    An asynchronous predicate makes the matcher asynchronous: await the
    handle call, or go through ``averify`` or polling.
    """
    if not callable(expected):
        raise TypeError(f"Expected a predicate function, got {type(expected).__name__}")
    if inspect.iscoroutinefunction(expected):
        return _satisfied_async(ctx, expected)
    outcome = expected(ctx.received)
    if inspect.isawaitable(outcome):
        return _satisfied_async(ctx, expected, outcome)
    return _satisfied(ctx, expected, outcome)


def to_be_none(ctx: MatcherContext) -> MatcherResult:
    received = describe(ctx.received)
    return verdict(
        ctx.received is None,
        f"expected {received} to be None",
        f"expected {received} not to be None",
    )


def to_be_truthy(ctx: MatcherContext) -> MatcherResult:
    received = describe(ctx.received)
    return verdict(
        bool(ctx.received),
        f"expected {received} to be truthy",
        f"expected {received} not to be truthy",
    )


def to_be_falsy(ctx: MatcherContext) -> MatcherResult:
    received = describe(ctx.received)
    return verdict(
        not ctx.received,
        f"expected {received} to be falsy",
        f"expected {received} not to be falsy",
    )
