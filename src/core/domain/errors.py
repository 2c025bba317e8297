"""Exception hierarchy for pricebot."""

from __future__ import annotations


class PriceBotError(Exception):
    """Base class for every error raised by pricebot."""


class UserInputError(PriceBotError):
    """An answer in the conversation could not be accepted.

    The state machine always recovers by reprompting; the message is not
    shown to the user.
    """


class LookupFailure(PriceBotError):
    """A single partition lookup failed (network, API error, bad payload)."""

    def __init__(self, partition_id: int | str, reason: str) -> None:
        super().__init__(f"partition {partition_id}: {reason}")
        self.partition_id = partition_id
        self.reason = reason


class ConfigurationError(PriceBotError):
    """Startup configuration is missing or invalid."""
