"""Tests for polling: phrase polls, generic poll and fluent expect(...).poll()."""

import asyncio
import time

import pytest

from phrase_validation import (
    AssertionFailure,
    MatcherResult,
    PollTimeout,
    SoftAssertionFailure,
    expect,
    get_poll_validation,
    get_settings,
    poll,
)
from phrase_validation.config import PollOptions
from phrase_validation.polling import Ticker, poll_until


class Producer:
    """Async producer returning ``values`` one per call, repeating the last one."""

    def __init__(self, *values, delays=None):
        self.values = values
        self.delays = delays or {}
        self.calls = 0

    async def __call__(self):
        index = min(self.calls, len(self.values) - 1)
        self.calls += 1
        delay = self.delays.get(self.calls)
        if delay:
            await asyncio.sleep(delay)
        return self.values[index]


@pytest.fixture
def producer():
    return Producer("uno", "dos", "tres")


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestPhrasePoll:
    @pytest.mark.asyncio
    async def test_settles_once_value_matches(self, producer):
        validate = get_poll_validation("to equal")

        await validate(producer, "tres", timeout=2.0, interval=0.05)

        assert producer.calls == 3

    @pytest.mark.asyncio
    async def test_contain_settles_on_first_match(self, producer):
        await get_poll_validation("to contain")(producer, "os", timeout=2.0, interval=0.05)

        assert producer.calls == 2

    @pytest.mark.asyncio
    async def test_negated_phrase(self, producer):
        await get_poll_validation("does not equal")(producer, "uno", timeout=2.0, interval=0.05)

        assert producer.calls == 2

    @pytest.mark.asyncio
    async def test_timeout_surfaces_last_failure(self, producer):
        validate = get_poll_validation("to equal")

        with pytest.raises(AssertionFailure, match="expected 'uno' to equal 'fail'") as exc_info:
            await validate(producer, "fail", timeout=0.3, interval=0.2)

        assert producer.calls == 1
        assert not isinstance(exc_info.value, (SoftAssertionFailure, PollTimeout))
        assert exc_info.value.__notes__ == ["Poll timed out after 0.3s and 1 attempt(s)"]

    @pytest.mark.asyncio
    async def test_soft_phrase_times_out_with_soft_failure(self, producer):
        with pytest.raises(SoftAssertionFailure, match="expected 'tres' to equal 'fail'"):
            await get_poll_validation("to softly equal")(producer, "fail", timeout=0.3, interval=0.05)

    @pytest.mark.asyncio
    async def test_soft_flag_times_out_with_soft_failure(self, producer):
        with pytest.raises(SoftAssertionFailure):
            await get_poll_validation("to equal", soft=True)(producer, "fail", timeout=0.2, interval=0.05)

    @pytest.mark.asyncio
    async def test_poll_timeout_when_no_attempt_completed(self):
        slow = Producer("uno", delays={1: 1.0})

        with pytest.raises(PollTimeout, match="Poll was not settled before timeout of 0.1s"):
            await get_poll_validation("to equal")(slow, "uno", timeout=0.1, interval=0.01)

    @pytest.mark.asyncio
    async def test_in_flight_attempt_does_not_delay_timeout(self):
        stuck = Producer("uno", "dos", delays={2: 10.0})
        started = time.monotonic()

        with pytest.raises(AssertionFailure, match="expected 'uno' to equal 'dos'"):
            await get_poll_validation("to equal")(stuck, "dos", timeout=0.3, interval=0.05)

        assert time.monotonic() - started < 1.0
        assert stuck.calls == 2

    @pytest.mark.asyncio
    async def test_no_attempts_after_success(self, producer):
        await get_poll_validation("to equal")(producer, "dos", timeout=2.0, interval=0.02)
        calls = producer.calls

        await asyncio.sleep(0.15)

        assert producer.calls == calls == 2

    @pytest.mark.asyncio
    async def test_no_attempts_after_timeout(self, producer):
        with pytest.raises(AssertionFailure):
            await get_poll_validation("to equal")(producer, "fail", timeout=0.1, interval=0.02)
        calls = producer.calls

        await asyncio.sleep(0.15)

        assert producer.calls == calls

    @pytest.mark.asyncio
    async def test_synchronous_producer(self):
        values = iter(range(10))

        await get_poll_validation("to be above")(lambda: next(values), 2, timeout=2.0, interval=0.02)

    @pytest.mark.asyncio
    async def test_producer_must_be_callable(self):
        with pytest.raises(TypeError, match="Provided value must be a function"):
            await get_poll_validation("to equal")("uno", "uno")

    @pytest.mark.asyncio
    async def test_default_timing_comes_from_settings(self, monkeypatch, producer):
        monkeypatch.setenv("PHRASE_VALIDATION_PHRASE_INTERVAL", "0.01")
        get_settings.cache_clear()
        started = time.monotonic()

        await get_poll_validation("to equal")(producer, "tres")

        assert time.monotonic() - started < 0.4


class TestGenericPoll:
    @pytest.mark.asyncio
    async def test_retries_until_function_stops_raising(self):
        attempts = []

        def check():
            attempts.append(len(attempts) + 1)
            expect(len(attempts)).to_equal(3)

        await poll(check, timeout=1.0, interval=0.02)

        assert attempts == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_accepts_coroutine_functions(self, producer):
        async def check():
            expect(await producer()).to_equal("dos")

        await poll(check, timeout=1.0, interval=0.02)

    @pytest.mark.asyncio
    async def test_timeout_reraises_last_error(self):
        def check():
            raise ValueError("not ready")

        with pytest.raises(ValueError, match="not ready") as exc_info:
            await poll(check, timeout=0.1, interval=0.02)

        assert "Poll timed out after 0.1s" in exc_info.value.__notes__[0]

    @pytest.mark.asyncio
    async def test_reused_error_gets_a_single_timeout_note(self):
        error = ValueError("still not ready")

        def check():
            raise error

        for _ in range(2):
            with pytest.raises(ValueError) as exc_info:
                await poll(check, timeout=0.15, interval=0.1)
            assert exc_info.value is error

        assert len(error.__notes__) == 1

    @pytest.mark.asyncio
    async def test_requires_callable(self):
        with pytest.raises(TypeError, match="Provided value must be a function"):
            await poll(42)


class TestFluentPoll:
    @pytest.mark.asyncio
    async def test_poll_settles_with_fresh_values(self, producer):
        handle = expect(producer).poll(timeout=1.0, interval=0.02)

        assert await handle.to_equal("tres") is handle
        assert producer.calls == 3

    @pytest.mark.asyncio
    async def test_first_attempt_runs_immediately(self):
        started = time.monotonic()

        await expect(lambda: 1).poll(timeout=2.0, interval=0.5).to_equal(1)

        assert time.monotonic() - started < 0.4

    @pytest.mark.asyncio
    async def test_poll_from_constructor_uses_default_timing(self, producer):
        handle = expect(producer, poll=True)

        assert handle.poll_options == PollOptions(timeout=5.0, interval=0.1)
        await handle.to_contain("re")

    @pytest.mark.asyncio
    async def test_poll_failure_after_timeout(self):
        with pytest.raises(AssertionFailure, match="expected 'uno' to equal 'dos'"):
            await expect(lambda: "uno").poll(timeout=0.2, interval=0.05).to_equal("dos")

    @pytest.mark.asyncio
    async def test_poll_with_not_and_soft(self):
        with pytest.raises(SoftAssertionFailure, match="expected 'uno' not to equal 'uno'"):
            await expect(lambda: "uno").not_.soft.poll(timeout=0.2, interval=0.05).to_equal("uno")

    @pytest.mark.asyncio
    async def test_matcher_sees_poll_flag_and_produced_value(self, producer):
        seen = []

        def to_be_recorded(ctx):
            seen.append((ctx.received, ctx.is_poll))
            return MatcherResult(passed=ctx.received == "dos", message="recorded")

        extended = expect.extend({"to_be_recorded": to_be_recorded})
        await extended(producer).poll(timeout=1.0, interval=0.02).to_be_recorded()

        assert seen == [("uno", True), ("dos", True)]

    @pytest.mark.asyncio
    async def test_async_matcher_under_poll(self, producer):
        async def to_be_ready(ctx):
            await asyncio.sleep(0)
            return MatcherResult(passed=ctx.received == "tres", message="not ready")

        extended = expect.extend({"to_be_ready": to_be_ready})

        await extended(producer).poll(timeout=1.0, interval=0.02).to_be_ready()

    def test_poll_requires_callable(self):
        with pytest.raises(TypeError, match="Provided value must be a function"):
            expect("uno").poll()


class TestTicker:
    @pytest.mark.asyncio
    async def test_eager_ticker_stops_when_closed(self):
        ticker = Ticker(0.01, eager=True)
        ticks = []

        async for tick in ticker:
            ticks.append(tick)
            if tick == 3:
                ticker.close()

        assert ticks == [1, 2, 3]
        assert ticker.closed

    @pytest.mark.asyncio
    async def test_lazy_ticker_waits_before_first_tick(self):
        ticker = Ticker(0.1)
        started = time.monotonic()

        await ticker.__anext__()

        assert time.monotonic() - started >= 0.09

    @pytest.mark.asyncio
    async def test_poll_until_closes_ticker_on_success(self):
        ticker = Ticker(0.01)
        attempts = []

        async def attempt():
            attempts.append(1)
            if len(attempts) < 2:
                raise AssertionError("again")

        await poll_until(attempt, PollOptions(timeout=1.0, interval=0.01), ticker=ticker)

        assert ticker.closed
        assert ticker.ticks == len(attempts) == 2

    @pytest.mark.asyncio
    async def test_poll_until_closes_ticker_on_timeout(self):
        ticker = Ticker(0.01)

        async def attempt():
            raise AssertionError("never")

        with pytest.raises(AssertionError, match="never"):
            await poll_until(attempt, PollOptions(timeout=0.1, interval=0.01), ticker=ticker)

        ticks = ticker.ticks
        await asyncio.sleep(0.05)
        assert ticker.closed
        assert ticker.ticks == ticks
