"""Pytest configuration: shared partitions, sessions and state machine."""

from __future__ import annotations

from decimal import Decimal

import pytest

from core.domain.models import Partition
from core.services.conversation import ConversationStateMachine
from core.services.domain_search import FederatedDomainSearch
from core.services.session_store import SessionStore
from fakes import FakeLookup


@pytest.fixture
def partitions() -> tuple[Partition, ...]:
    # RU and LT share board 9 on purpose.
    return (
        Partition(language_code="EN", partition_id=1),
        Partition(language_code="DE", partition_id=2),
        Partition(language_code="IT", partition_id=3),
        Partition(language_code="RU", partition_id=9),
        Partition(language_code="LT", partition_id=9),
    )


@pytest.fixture
def lookup() -> FakeLookup:
    return FakeLookup(
        {
            (1, "acme.com"): Decimal("350"),
            (1, "multi.eu"): Decimal("250"),
            (2, "multi.eu"): Decimal("400"),
            (3, "multi.eu"): Decimal("620"),
        }
    )


@pytest.fixture
def sessions():
    with SessionStore() as store:
        yield store


@pytest.fixture
def machine(partitions, lookup, sessions) -> ConversationStateMachine:
    return ConversationStateMachine(
        search=FederatedDomainSearch(partitions=partitions, lookup=lookup),
        sessions=sessions,
        price_command="priceme",
    )
