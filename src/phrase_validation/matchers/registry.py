"""Matcher registry.

Maps matcher names to matcher functions. Later registrations for the same
name overwrite earlier ones. A registry may be derived from a parent: lookups
fall through to the parent, registrations never propagate upward.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from phrase_validation.errors import MatcherNotFound
from phrase_validation.matchers.base import Matcher

logger = logging.getLogger(__name__)

# Attributes of the assertion handle; a matcher under one of these names
# would be shadowed and could never be dispatched.
RESERVED_NAMES = frozenset(
    {
        "not_",
        "soft",
        "poll",
        "context",
        "settle",
        "resolve",
        "received",
        "registry",
        "is_not",
        "is_soft",
        "is_poll",
        "poll_options",
    }
)


class MatcherRegistry:
    """Name to matcher mapping with optional parent fallback."""

    def __init__(
        self,
        matchers: Mapping[str, Matcher] | None = None,
        *,
        parent: MatcherRegistry | None = None,
    ) -> None:
        self._matchers: dict[str, Matcher] = {}
        self._parent = parent
        if matchers:
            self.update(matchers)

    def register(self, name: str, fn: Matcher) -> None:
        """Register ``fn`` under ``name``, replacing any previous entry.

        Raises
        ------
        TypeError
            If ``fn`` is not callable.
        ValueError
            If ``name`` is private or collides with an attribute of the handle.
        """
        if not callable(fn):
            raise TypeError(f"Matcher '{name}' must be callable, got {type(fn).__name__}")
        if name.startswith("_"):
            raise ValueError(f"Matcher name '{name}' must not start with an underscore")
        if name in RESERVED_NAMES:
            raise ValueError(f"Matcher name '{name}' is reserved by the assertion handle")
        if name in self._matchers:
            logger.debug("Overwriting matcher %s", name)
        else:
            logger.debug("Registering matcher %s", name)
        self._matchers[name] = fn

    def update(self, matchers: Mapping[str, Matcher]) -> None:
        for name, fn in matchers.items():
            self.register(name, fn)

    def lookup(self, name: str) -> Matcher:
        """Return the matcher registered under ``name``.

        Raises
        ------
        MatcherNotFound
            If neither this registry nor any parent holds ``name``.
        """
        if name in self._matchers:
            return self._matchers[name]
        if self._parent is not None:
            return self._parent.lookup(name)
        raise MatcherNotFound(name)

    def derive(self, matchers: Mapping[str, Matcher] | None = None) -> MatcherRegistry:
        """Create a child registry holding ``matchers`` on top of this one."""
        return MatcherRegistry(matchers, parent=self)

    def names(self) -> set[str]:
        inherited = self._parent.names() if self._parent is not None else set()
        return inherited | set(self._matchers)

    def __contains__(self, name: object) -> bool:
        if name in self._matchers:
            return True
        return self._parent is not None and name in self._parent

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names()))

    def __len__(self) -> int:
        return len(self.names())


_default_registry: MatcherRegistry | None = None


def get_default_registry() -> MatcherRegistry:
    """Get the process-wide registry, building it with the built-in matchers on first use."""
    global _default_registry
    if _default_registry is None:
        from phrase_validation.matchers import create_default_registry

        _default_registry = create_default_registry()
    return _default_registry


def reset_default_registry() -> MatcherRegistry:
    """Rebuild the process-wide registry, dropping anything registered since."""
    global _default_registry
    _default_registry = None
    return get_default_registry()
