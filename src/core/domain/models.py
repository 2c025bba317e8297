"""Domain models (Pydantic v2).

These models describe *what* the bot works with: partitions, matches,
conversation sessions and quotes. Nothing here performs I/O.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Partition(BaseModel):
    """One searchable data source (a Monday.com board) for a language code.

    Several language codes may point at the same `partition_id`.
    """

    model_config = ConfigDict(frozen=True)

    language_code: str = Field(
        ...,
        min_length=1,
        max_length=8,
        description="Market/language code served by the partition (e.g. 'IT').",
    )
    partition_id: int = Field(
        ...,
        ge=0,
        description="Identifier of the partition (Monday.com board id).",
    )


class Match(BaseModel):
    """A domain found in one partition, with its publisher cost."""

    model_config = ConfigDict(frozen=True)

    language_code: str = Field(..., min_length=1, max_length=8)
    partition_id: int = Field(..., ge=0)
    publisher_cost: Decimal = Field(
        ...,
        ge=0,
        description="Base cost returned by the partition record.",
    )


class MarginBand(BaseModel):
    """Margin constants for one language group."""

    model_config = ConfigDict(frozen=True)

    low: Decimal = Field(..., ge=0, description="Flat margin when cost < 300.")
    mid: Decimal = Field(..., ge=0, description="Flat margin when cost < 500.")
    percentage: Decimal = Field(
        default=Decimal("0.20"),
        ge=0,
        le=1,
        description="Share of the cost added when cost >= 500.",
    )


class SessionState(str, Enum):
    """Pending question of an active conversation."""

    AWAITING_LANGUAGE_CODE = "awaiting_language_code"
    AWAITING_COPY_DECISION = "awaiting_copy_decision"
    AWAITING_WORD_COUNT = "awaiting_word_count"


class _SessionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    domain_name: str = Field(..., min_length=1, max_length=253)
    matches: tuple[Match, ...] = Field(..., min_length=1)

    def language_codes(self) -> list[str]:
        return [match.language_code for match in self.matches]


class AwaitingLanguageCode(_SessionBase):
    state: Literal[SessionState.AWAITING_LANGUAGE_CODE] = SessionState.AWAITING_LANGUAGE_CODE


class AwaitingCopyDecision(_SessionBase):
    state: Literal[SessionState.AWAITING_COPY_DECISION] = SessionState.AWAITING_COPY_DECISION

    language_code: str = Field(..., min_length=1, max_length=8)
    publisher_cost: Decimal = Field(..., ge=0)


class AwaitingWordCount(_SessionBase):
    state: Literal[SessionState.AWAITING_WORD_COUNT] = SessionState.AWAITING_WORD_COUNT

    language_code: str = Field(..., min_length=1, max_length=8)
    publisher_cost: Decimal = Field(..., ge=0)
    copy_included: Literal[True] = True


Session = Annotated[
    Union[AwaitingLanguageCode, AwaitingCopyDecision, AwaitingWordCount],
    Field(discriminator="state"),
]


class Quote(BaseModel):
    """Full breakdown of a computed price."""

    model_config = ConfigDict(frozen=True)

    domain_name: str
    language_code: str
    publisher_cost: Decimal = Field(..., ge=0)
    margin: Decimal = Field(..., ge=0)
    word_count: int = Field(default=0, ge=0)
    copy_rate: Decimal = Field(default=Decimal("0"), ge=0)
    copy_price: Decimal = Field(default=Decimal("0"), ge=0)
    final_price: Decimal = Field(..., ge=0)


class ChatMessage(BaseModel):
    """Inbound chat event: who wrote what."""

    sender_id: str = Field(..., min_length=1, description="Stable identity of the author.")
    text: str = Field(default="", description="Raw message text.")
