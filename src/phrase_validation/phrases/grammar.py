"""Validation phrase grammar.

A phrase is assembled from fixed fragments, in this order::

    [is |do |does |to ] [not |to not ] [to ][be ] [softly ] <keyword>[s|es| to]

Only the negation, the ``softly`` marker and the keyword are captured. The
keyword alternation is built in declaration order of :class:`Validation`;
a keyword must be declared before any shorter keyword it starts with, which
is checked when the module is imported.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from phrase_validation.errors import ValidationNotSupported


class Validation(str, Enum):
    """Recognised validation keywords, longest compound keywords first."""

    DEEPLY_STRICTLY_EQUAL = "deeply strictly equal"
    DEEPLY_EQUAL = "deeply equal"
    STRICTLY_EQUAL = "strictly equal"
    CASE_INSENSITIVE_EQUAL = "case insensitive equal"
    EQUAL = "equal"
    HAVE_MEMBERS = "have member"
    INCLUDE_MEMBERS = "include member"
    MATCH_SCHEMA = "match schema"
    MATCH = "match"
    CONTAIN = "contain"
    ABOVE = "above"
    BELOW = "below"
    GREATER = "greater than"
    LESS = "less than"
    HAVE_TYPE = "have type"
    HAVE_PROPERTY = "have property"
    SATISFY = "satisfy"


IS_CLAUSE = r"(?:is |do |does |to )?"
NOT_CLAUSE = r"(?P<reverse>not |to not )?"
TO_BE_CLAUSE = r"(?:to )?(?:be )?"
SOFTLY_CLAUSE = r"(?P<soft>softly )?"
SUFFIX_CLAUSE = r"(?:s|es| to)?"


def check_keyword_order(keywords: Iterable[str]) -> None:
    """Reject an ordering where a keyword precedes a longer one it starts with.

    Regex alternation takes the first branch that matches, so ``match`` listed
    before ``match schema`` would make an unanchored search stop at ``match``.

    Raises
    ------
    ValueError
        If the ordering would shadow a longer keyword.
    """
    seen: list[str] = []
    for keyword in keywords:
        for earlier in seen:
            if keyword.startswith(earlier):
                raise ValueError(
                    f"Validation keyword '{keyword}' must be declared before '{earlier}'"
                )
        seen.append(keyword)


def build_pattern(keywords: Iterable[str], *, anchored: bool) -> re.Pattern[str]:
    """Compile the phrase grammar over ``keywords``.

    The anchored variant only accepts a whole phrase; the unanchored one finds
    a phrase embedded in a longer sentence.
    """
    keywords = list(keywords)
    check_keyword_order(keywords)
    alternation = "|".join(re.escape(keyword) for keyword in keywords)
    validation_clause = rf"(?:(?P<validation>{alternation}){SUFFIX_CLAUSE})"
    body = f"{IS_CLAUSE}{NOT_CLAUSE}{TO_BE_CLAUSE}{SOFTLY_CLAUSE}{validation_clause}"
    if anchored:
        return re.compile(rf"\A{body}\Z")
    return re.compile(f"({body})")


VALIDATION_EXTRACT_REGEXP = build_pattern((v.value for v in Validation), anchored=True)
VALIDATION_REGEXP = build_pattern((v.value for v in Validation), anchored=False)


@dataclass(frozen=True, slots=True)
class PhraseMatch:
    """Facts extracted from a validation phrase.

    Attributes
    ----------
    reverse
        The phrase is negated (``not``).
    soft
        The phrase asks for a soft failure (``softly``).
    validation
        The comparison keyword.
    """

    reverse: bool
    soft: bool
    validation: Validation

    @classmethod
    def from_match(cls, match: re.Match[str]) -> PhraseMatch:
        return cls(
            reverse=bool(match.group("reverse")),
            soft=bool(match.group("soft")),
            validation=Validation(match.group("validation")),
        )


def parse_phrase(phrase: str, *, kind: str = "Validation") -> PhraseMatch:
    """Parse a whole phrase such as ``"is not softly greater than"``.

    Raises
    ------
    ValidationNotSupported
        If the phrase does not match the grammar end to end.
    """
    match = VALIDATION_EXTRACT_REGEXP.match(phrase)
    if match is None:
        raise ValidationNotSupported(phrase, kind)
    return PhraseMatch.from_match(match)


def find_validation(sentence: str) -> PhraseMatch | None:
    """Find the first validation phrase embedded in ``sentence``."""
    match = VALIDATION_REGEXP.search(sentence)
    return PhraseMatch.from_match(match) if match else None
