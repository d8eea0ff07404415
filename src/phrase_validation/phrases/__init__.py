"""Natural-language validation phrases."""

from phrase_validation.phrases.grammar import (
    VALIDATION_EXTRACT_REGEXP,
    VALIDATION_REGEXP,
    PhraseMatch,
    Validation,
    find_validation,
    parse_phrase,
)
from phrase_validation.phrases.resolver import (
    VALIDATION_FNS,
    averify,
    get_poll_validation,
    get_validation,
    verify,
)

__all__ = [
    "VALIDATION_EXTRACT_REGEXP",
    "VALIDATION_FNS",
    "VALIDATION_REGEXP",
    "PhraseMatch",
    "Validation",
    "averify",
    "find_validation",
    "get_poll_validation",
    "get_validation",
    "parse_phrase",
    "verify",
]
