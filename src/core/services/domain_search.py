"""Federated domain search.

Asks every configured partition whether it holds a domain and collects the
publisher costs found. Lookups run concurrently; results come back in the
order the partitions are declared, never in arrival order, so the same
inputs always produce the same match list.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal, InvalidOperation
from typing import Sequence

from core.domain.models import Match, Partition
from core.interfaces.partition_lookup import PartitionLookup
from core.logger import get_logger

log = get_logger("search")


class FederatedDomainSearch:
    """Fan-out/fan-in search across a static partition table."""

    def __init__(
        self,
        *,
        partitions: Sequence[Partition],
        lookup: PartitionLookup,
        max_concurrency: int = 8,
    ) -> None:
        self._partitions = tuple(partitions)
        self._lookup = lookup
        self._max_concurrency = max(1, max_concurrency)

    @property
    def partitions(self) -> tuple[Partition, ...]:
        return self._partitions

    async def search(self, domain_name: str) -> list[Match]:
        """Return one `Match` per partition holding `domain_name`, in table order.

        Partition failures count as "not found"; this method does not raise
        for them.
        """

        domain = domain_name.strip()
        if not domain or not self._partitions:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def safe_lookup(partition: Partition) -> Decimal | None:
            log.debug(
                "Searching partition %s (%s) for domain=%r",
                partition.partition_id,
                partition.language_code,
                domain,
            )
            async with semaphore:
                try:
                    cost = await self._lookup.lookup(partition.partition_id, domain)
                except Exception as exc:
                    log.warning(
                        "Lookup failed for partition %s (%s): %s",
                        partition.partition_id,
                        partition.language_code,
                        exc,
                    )
                    return None
            return _coerce_cost(cost, partition)

        costs = await asyncio.gather(*(safe_lookup(p) for p in self._partitions))

        matches: list[Match] = []
        for partition, cost in zip(self._partitions, costs):
            if cost is None:
                continue
            log.info(
                "Found domain %r in partition %s (%s): cost=%s",
                domain,
                partition.partition_id,
                partition.language_code,
                cost,
            )
            matches.append(
                Match(
                    language_code=partition.language_code,
                    partition_id=partition.partition_id,
                    publisher_cost=cost,
                )
            )
        return matches


def _coerce_cost(cost: object, partition: Partition) -> Decimal | None:
    if cost is None:
        return None
    try:
        value = cost if isinstance(cost, Decimal) else Decimal(str(cost))
    except (InvalidOperation, ValueError):
        log.warning("Partition %s returned a non-numeric cost: %r", partition.partition_id, cost)
        return None
    if not value.is_finite() or value < 0:
        log.warning("Partition %s returned an invalid cost: %s", partition.partition_id, value)
        return None
    return value
