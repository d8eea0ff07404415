"""Polling evaluator.

Re-runs an attempt on a fixed interval until it stops raising or a timeout
elapses. The retry loop runs inside an ``asyncio.timeout`` scope, so the
timeout cancels whatever the loop is awaiting (the delay, the producer or an
asynchronous matcher) and no attempt can start once the evaluation settled.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from phrase_validation.config import PollOptions, get_settings
from phrase_validation.errors import PollTimeout

logger = logging.getLogger(__name__)


class Ticker:
    """Async iterator yielding once per interval until closed.

    Each tick is only requested after the consumer finished handling the
    previous one, so ticks never overlap.

    Parameters
    ----------
    interval
        Delay in seconds before each tick.
    eager
        Yield the first tick immediately instead of after one interval.
    """

    def __init__(self, interval: float, *, eager: bool = False) -> None:
        self.interval = interval
        self.eager = eager
        self.ticks = 0
        self.closed = False

    def __aiter__(self) -> Ticker:
        return self

    async def __anext__(self) -> int:
        if self.closed:
            raise StopAsyncIteration
        if self.ticks or not self.eager:
            await asyncio.sleep(self.interval)
        if self.closed:
            raise StopAsyncIteration
        self.ticks += 1
        return self.ticks

    def close(self) -> None:
        self.closed = True


@dataclass
class PollState:
    """Bookkeeping for one polling evaluation."""

    start: float = field(default_factory=time.monotonic)
    attempts: int = 0
    last_error: Exception | None = None

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.start


async def poll_until(
    attempt: Callable[[], Awaitable[Any]],
    options: PollOptions,
    *,
    eager: bool = False,
    ticker: Ticker | None = None,
) -> None:
    """Run ``attempt`` every ``options.interval`` seconds until it succeeds.

    Parameters
    ----------
    attempt
        Coroutine function performing one full verification; raising means
        "not yet".
    options
        Timeout and interval for this evaluation.
    eager
        Run the first attempt without waiting one interval.
    ticker
        Ticker to drive the attempts; a new one is created when omitted.

    Raises
    ------
    Exception
        The error raised by the last attempt that completed before the
        timeout, re-raised unchanged in type with a note about the timeout.
    PollTimeout
        If the timeout elapsed before any attempt completed.
    """
    ticker = ticker or Ticker(options.interval, eager=eager)
    state = PollState()
    try:
        async with asyncio.timeout(options.timeout):
            async for _ in ticker:
                try:
                    await attempt()
                except Exception as error:
                    state.attempts += 1
                    state.last_error = error
                    logger.debug("Poll attempt %d failed after %.3fs: %s", state.attempts, state.elapsed, error)
                    continue
                state.attempts += 1
                logger.debug("Poll settled after %d attempt(s) in %.3fs", state.attempts, state.elapsed)
                return
    except TimeoutError:
        logger.debug("Poll timed out after %d attempt(s) in %.3fs", state.attempts, state.elapsed)
    finally:
        ticker.close()

    error = state.last_error
    if error is None:
        raise PollTimeout(options.timeout)
    note = f"Poll timed out after {options.timeout}s and {state.attempts} attempt(s)"
    if note not in getattr(error, "__notes__", ()):
        error.add_note(note)
    raise error


async def call_maybe_async(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result


async def poll(
    fn: Callable[[], Any],
    *,
    timeout: float | None = None,
    interval: float | None = None,
) -> None:
    """Retry ``fn`` until it stops raising.

    ``fn`` may be a plain function or a coroutine function. Defaults come from
    :class:`~phrase_validation.config.PollSettings` (phrase timing).

    Examples
    --------
    >>> await poll(lambda: expect(queue.size()).to_equal(0), timeout=2.0)
    """
    if not callable(fn):
        raise TypeError(f"Provided value must be a function, got {type(fn).__name__}")
    options = get_settings().phrase_options(timeout, interval)
    await poll_until(lambda: call_maybe_async(fn), options)
