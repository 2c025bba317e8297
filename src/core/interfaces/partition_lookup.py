"""Partition lookup contract.

A partition lookup answers one question: "is there an item named exactly
`domain_name` in this partition, and what is its publisher cost?".
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, runtime_checkable


@runtime_checkable
class PartitionLookup(Protocol):
    """Minimal contract for a partition data source.

    Design rules:
    - `lookup` is asynchronous because it typically performs I/O (HTTP).
    - Returns the publisher cost, or `None` when the domain is absent.
    - May raise (`LookupFailure`, transport errors); callers map failures
      to absence.
    """

    async def lookup(self, partition_id: int, domain_name: str) -> Decimal | None:
        ...
