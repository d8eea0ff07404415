"""Pattern matchers for string values."""

from __future__ import annotations

import re

from phrase_validation.matchers.base import MatcherContext, MatcherResult, describe, verdict


def to_regexp(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile ``pattern`` unless it is already a compiled expression."""
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def show_pattern(pattern: str | re.Pattern[str]) -> str:
    if isinstance(pattern, re.Pattern):
        return f"/{pattern.pattern}/"
    return describe(pattern)


def to_match(ctx: MatcherContext, expected: str | re.Pattern[str]) -> MatcherResult:
    """Search ``received`` for a compiled pattern, or for a plain substring."""
    received = ctx.received
    if not isinstance(received, str):
        raise TypeError(f"Cannot match {type(received).__name__} value {received!r}, expected a string")
    if isinstance(expected, re.Pattern):
        passed = expected.search(received) is not None
    else:
        passed = expected in received
    shown = describe(received)
    return verdict(
        passed,
        f"expected {shown} to match {show_pattern(expected)}",
        f"expected {shown} not to match {show_pattern(expected)}",
    )
