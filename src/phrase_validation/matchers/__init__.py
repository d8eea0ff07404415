"""Built-in matcher library."""

from phrase_validation.matchers.base import Matcher, MatcherContext, MatcherResult, format_message
from phrase_validation.matchers.callables import to_pass, to_reject_with, to_resolve_with, to_throw
from phrase_validation.matchers.collection import (
    to_contain,
    to_contain_equal,
    to_have_length,
    to_have_members,
    to_include_members,
)
from phrase_validation.matchers.equality import (
    to_be,
    to_case_insensitive_equal,
    to_deep_equal,
    to_deep_strict_equal,
    to_equal,
    to_simple_equal,
    to_strict_equal,
)
from phrase_validation.matchers.number import (
    to_be_greater_than,
    to_be_greater_than_or_equal,
    to_be_less_than,
    to_be_less_than_or_equal,
    to_be_nan,
)
from phrase_validation.matchers.object import (
    to_be_falsy,
    to_be_none,
    to_be_truthy,
    to_have_property,
    to_have_type,
    to_satisfy,
)
from phrase_validation.matchers.registry import (
    MatcherRegistry,
    get_default_registry,
    reset_default_registry,
)
from phrase_validation.matchers.schema import (
    SchemaCompiler,
    SchemaError,
    SchemaValidation,
    compile_json_schema,
    make_schema_matcher,
    to_match_schema,
)
from phrase_validation.matchers.string import to_match


BUILTIN_MATCHERS: dict[str, Matcher] = {
    # Equality
    "to_simple_equal": to_simple_equal,
    "to_equal": to_equal,
    "to_be": to_be,
    "to_deep_equal": to_deep_equal,
    "to_deep_strict_equal": to_deep_strict_equal,
    "to_strict_equal": to_strict_equal,
    "to_case_insensitive_equal": to_case_insensitive_equal,
    # Ordering
    "to_be_greater_than": to_be_greater_than,
    "to_be_greater_than_or_equal": to_be_greater_than_or_equal,
    "to_be_less_than": to_be_less_than,
    "to_be_less_than_or_equal": to_be_less_than_or_equal,
    "to_be_nan": to_be_nan,
    # Containment
    "to_contain": to_contain,
    "to_contain_equal": to_contain_equal,
    "to_have_members": to_have_members,
    "to_include_members": to_include_members,
    "to_have_length": to_have_length,
    "to_match": to_match,
    # Objects and predicates
    "to_have_type": to_have_type,
    "to_have_property": to_have_property,
    "to_satisfy": to_satisfy,
    "to_be_none": to_be_none,
    "to_be_truthy": to_be_truthy,
    "to_be_falsy": to_be_falsy,
    "to_match_schema": to_match_schema,
    # Callables and awaitables
    "to_throw": to_throw,
    "to_resolve_with": to_resolve_with,
    "to_reject_with": to_reject_with,
    "to_pass": to_pass,
}


def create_default_registry() -> MatcherRegistry:
    """Build a fresh registry holding every built-in matcher."""
    return MatcherRegistry(BUILTIN_MATCHERS)


__all__ = [
    "BUILTIN_MATCHERS",
    "Matcher",
    "MatcherContext",
    "MatcherRegistry",
    "MatcherResult",
    "SchemaCompiler",
    "SchemaError",
    "SchemaValidation",
    "compile_json_schema",
    "create_default_registry",
    "format_message",
    "get_default_registry",
    "make_schema_matcher",
    "reset_default_registry",
]
