"""Fluent assertion handles.

``expect(value)`` wraps a received value together with its modifiers and
dispatches matcher calls to a :class:`~phrase_validation.matchers.MatcherRegistry`.
Every matcher call ends in the same decision: when the matcher verdict equals
the negation flag, a hard or soft failure is raised with the matcher message.

Examples
--------
>>> expect(3).to_be_greater_than(2).to_be_less_than(5)
>>> expect("abc").not_.to_contain("z")
>>> expect(1).soft.to_equal(2)  # raises SoftAssertionFailure
>>> await expect(fetch_status).poll(timeout=2.0).to_equal("ready")
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Generator, Mapping
from typing import Any, Generic, Self, TypeVar

from phrase_validation.config import PollOptions, PollSettings, get_settings
from phrase_validation.errors import failure_for
from phrase_validation.matchers.base import Matcher, MatcherContext, MatcherResult
from phrase_validation.matchers.registry import MatcherRegistry, get_default_registry
from phrase_validation.polling import call_maybe_async, poll_until

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class Expect(Generic[T]):
    """Assertion handle around a single received value.

    Modifiers are applied before the first matcher call; once a matcher has
    been invoked the handle is sealed and modifiers raise ``RuntimeError``.
    Matcher calls return the handle itself so that further matchers can be
    chained, or an awaitable of it for asynchronous matchers and polling.

    Parameters
    ----------
    received
        Value under test. For polling, a zero-argument function producing it.
    registry
        Registry used to resolve matcher names.
    not_, soft, poll
        Initial modifier state.
    settings
        Source of the default polling timing.
    """

    def __init__(
        self,
        received: T,
        *,
        registry: MatcherRegistry,
        not_: bool = False,
        soft: bool = False,
        poll: bool = False,
        settings: PollSettings | None = None,
    ) -> None:
        self.received = received
        self.is_not = not_
        self.is_soft = soft
        self.is_poll = False
        self.registry = registry
        self._settings = settings or get_settings()
        self.poll_options: PollOptions = self._settings.expect_options()
        self._sealed = False
        if poll:
            self.poll()

    def _check_open(self, modifier: str) -> None:
        if self._sealed:
            raise RuntimeError(f"'{modifier}' must be applied before a matcher is invoked")

    @property
    def not_(self) -> Self:
        """Negate the expectation."""
        self._check_open("not_")
        self.is_not = True
        return self

    @property
    def soft(self) -> Self:
        """Raise soft failures instead of hard ones."""
        self._check_open("soft")
        self.is_soft = True
        return self

    def poll(self, timeout: float | None = None, interval: float | None = None) -> Self:
        """Re-evaluate the matcher against fresh values produced by ``received``.

        Raises
        ------
        TypeError
            If ``received`` is not callable.
        """
        self._check_open("poll")
        if not callable(self.received):
            raise TypeError("Provided value must be a function")
        self.is_poll = True
        self.poll_options = self._settings.expect_options(timeout, interval)
        return self

    def context(self, received: Any = _UNSET) -> MatcherContext:
        """Snapshot the handle state for one matcher invocation."""
        return MatcherContext(
            received=self.received if received is _UNSET else received,
            is_not=self.is_not,
            is_soft=self.is_soft,
            is_poll=self.is_poll,
        )

    def settle(self, result: MatcherResult) -> Self:
        """Turn a matcher verdict into a pass or a raised failure."""
        if self.is_not == result.passed:
            raise failure_for(result.message, soft=self.is_soft)
        return self

    async def _poll(self, matcher: Matcher, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Self:
        producer: Callable[[], Any] = self.received  # type: ignore[assignment]

        async def attempt() -> None:
            received = await call_maybe_async(producer)
            result = await call_maybe_async(matcher, self.context(received), *args, **kwargs)
            self.settle(result)

        await poll_until(attempt, self.poll_options, eager=True)
        return self

    def resolve(self, name: str) -> Callable[..., Any]:
        """Return ``name`` from the registry bound to this handle.

        Raises
        ------
        MatcherNotFound
            If the registry does not hold ``name``.
        """
        matcher = self.registry.lookup(name)

        def invoke(*args: Any, **kwargs: Any) -> Any:
            self._sealed = True
            if self.is_poll:
                return self._poll(matcher, args, kwargs)
            result = matcher(self.context(), *args, **kwargs)
            if inspect.isawaitable(result):
                return PendingAssertion(self, result)
            return self.settle(result)

        invoke.__name__ = name
        invoke.__doc__ = matcher.__doc__
        return invoke

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.resolve(name)

    def __repr__(self) -> str:
        flags = [name for name, on in (("not", self.is_not), ("soft", self.is_soft), ("poll", self.is_poll)) if on]
        return f"Expect({', '.join([repr(self.received), *flags])})"


class PendingAssertion(Generic[T]):
    """Outcome of an asynchronous matcher call, settled when awaited.

    ``close()`` discards the matcher without running it, for callers that
    cannot await.
    """

    def __init__(self, handle: Expect[T], pending: Awaitable[MatcherResult]) -> None:
        self.handle = handle
        self.pending = pending

    async def _settle(self) -> Expect[T]:
        return self.handle.settle(await self.pending)

    def __await__(self) -> Generator[Any, None, Expect[T]]:
        return self._settle().__await__()

    def close(self) -> None:
        if inspect.iscoroutine(self.pending):
            self.pending.close()


class ExpectFactory:
    """Creates :class:`Expect` handles bound to a registry.

    Parameters
    ----------
    registry
        Registry for the handles. When omitted, the process-wide default
        registry is looked up at every call.
    settings
        Polling defaults for the handles.
    """

    def __init__(self, registry: MatcherRegistry | None = None, settings: PollSettings | None = None) -> None:
        self._registry = registry
        self._settings = settings

    @property
    def registry(self) -> MatcherRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    def __call__(
        self, received: T, *, not_: bool = False, soft: bool = False, poll: bool = False
    ) -> Expect[T]:
        return Expect(
            received,
            registry=self.registry,
            not_=not_,
            soft=soft,
            poll=poll,
            settings=self._settings,
        )

    def extend(self, matchers: Mapping[str, Matcher]) -> ExpectFactory:
        """Return a factory whose handles also know ``matchers``.

        The new entries live in a registry derived from this factory's one:
        handles from this factory keep their current set of matchers.
        """
        logger.debug("Extending expect with %s", ", ".join(sorted(matchers)))
        return ExpectFactory(self.registry.derive(matchers), self._settings)


expect = ExpectFactory()
