"""Polling configuration."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PollSettings(BaseSettings):
    """Default timing for polling evaluations, in seconds.

    Loads from environment variables automatically:
        PHRASE_VALIDATION_PHRASE_TIMEOUT, PHRASE_VALIDATION_PHRASE_INTERVAL,
        PHRASE_VALIDATION_EXPECT_TIMEOUT, PHRASE_VALIDATION_EXPECT_INTERVAL

    Attributes
    ----------
    phrase_timeout, phrase_interval
        Defaults for phrase-driven polling (``get_poll_validation`` and ``poll``).
    expect_timeout, expect_interval
        Defaults for the fluent ``expect(fn).poll()`` form.
    """

    phrase_timeout: float = Field(default=5.0, gt=0)
    phrase_interval: float = Field(default=0.5, gt=0)
    expect_timeout: float = Field(default=5.0, gt=0)
    expect_interval: float = Field(default=0.1, gt=0)

    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="PHRASE_VALIDATION_",
    )

    def phrase_options(self, timeout: float | None = None, interval: float | None = None) -> "PollOptions":
        return PollOptions(
            timeout=self.phrase_timeout if timeout is None else timeout,
            interval=self.phrase_interval if interval is None else interval,
        )

    def expect_options(self, timeout: float | None = None, interval: float | None = None) -> "PollOptions":
        return PollOptions(
            timeout=self.expect_timeout if timeout is None else timeout,
            interval=self.expect_interval if interval is None else interval,
        )


class PollOptions(BaseModel):
    """Timing for a single polling evaluation.

    Attributes
    ----------
    timeout
        Overall budget in seconds; the evaluation settles no later than this.
    interval
        Delay in seconds before each attempt.
    """

    model_config = {"frozen": True}

    timeout: float = Field(gt=0)
    interval: float = Field(gt=0)


@lru_cache(maxsize=1)
def get_settings() -> PollSettings:
    """Return the process-wide settings, read from the environment once."""
    return PollSettings()
