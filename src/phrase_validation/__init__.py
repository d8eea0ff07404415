"""Phrase validation - natural-language assertions with polling."""

from .config import PollOptions, PollSettings, get_settings
from .errors import (
    AssertionFailure,
    MatcherNotFound,
    NotANumber,
    PollTimeout,
    SoftAssertionFailure,
    ValidationNotSupported,
)
from .expect import Expect, ExpectFactory, expect
from .matchers import MatcherContext, MatcherRegistry, MatcherResult, get_default_registry
from .phrases import (
    VALIDATION_REGEXP,
    PhraseMatch,
    Validation,
    averify,
    find_validation,
    get_poll_validation,
    get_validation,
    parse_phrase,
    verify,
)
from .polling import poll
from .version import __version__


__all__ = [
    # Phrases
    "get_validation",
    "get_poll_validation",
    "verify",
    "averify",
    "parse_phrase",
    "find_validation",
    "PhraseMatch",
    "Validation",
    "VALIDATION_REGEXP",
    # Fluent API
    "expect",
    "Expect",
    "ExpectFactory",
    "MatcherContext",
    "MatcherResult",
    "MatcherRegistry",
    "get_default_registry",
    # Polling
    "poll",
    "PollOptions",
    "PollSettings",
    "get_settings",
    # Errors
    "AssertionFailure",
    "SoftAssertionFailure",
    "PollTimeout",
    "ValidationNotSupported",
    "MatcherNotFound",
    "NotANumber",
    "__version__",
]
