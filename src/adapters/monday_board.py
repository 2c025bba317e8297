"""Partition lookup over Monday.com boards (GraphQL API v2).

Each partition is a board whose items are named after domains; the publisher
cost lives in one column (`AppSettings.monday_cost_column_id`).

Besides `lookup`, the adapter exposes `whoami` and `list_boards`, used by
`pricebot doctor` to check the token and the configured board ids.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

import httpx

from adapters.http_client import build_monday_client
from core.config import AppSettings
from core.domain.errors import LookupFailure
from core.interfaces.partition_lookup import PartitionLookup
from core.logger import get_logger

log = get_logger("monday")

_DECIMAL_COMMA_RE = re.compile(r"\d+,\d{1,2}")

ITEMS_BY_NAME_QUERY = """
query ($boardId: ID!, $name: String!, $costColumn: String!) {
  items_page_by_column_values(
    limit: 50,
    board_id: $boardId,
    columns: [{column_id: "name", column_values: [$name]}]
  ) {
    items {
      id
      name
      column_values(ids: [$costColumn]) {
        id
        text
      }
    }
  }
}
"""

ME_QUERY = """
query {
  me {
    id
    name
  }
}
"""

BOARDS_QUERY = """
query ($ids: [ID!], $limit: Int!) {
  boards(ids: $ids, limit: $limit) {
    id
    name
  }
}
"""


class MondayGraphQLError(Exception):
    """The API answered with a GraphQL `errors` array or a non-200 status."""


class MondayBoardLookup(PartitionLookup):
    """Find domains on Monday.com boards.

    The underlying `httpx.AsyncClient` is shared by every lookup of a search;
    use the instance as an async context manager (or call `aclose`).
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_monday_client(self._settings)

    async def __aenter__(self) -> "MondayBoardLookup":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST a GraphQL query and return its `data` object."""

        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        response = await self._client.post(self._settings.monday_api_url, json=payload)
        if response.status_code != 200:
            raise MondayGraphQLError(f"HTTP {response.status_code}")

        body = response.json()
        if not isinstance(body, dict):
            raise MondayGraphQLError("unexpected response body")
        if body.get("errors"):
            raise MondayGraphQLError(str(body["errors"]))
        data = body.get("data")
        if not isinstance(data, dict):
            raise MondayGraphQLError("response without data")
        return data

    async def lookup(self, partition_id: int, domain_name: str) -> Decimal | None:
        variables = {
            "boardId": str(partition_id),
            "name": domain_name,
            "costColumn": self._settings.monday_cost_column_id,
        }
        try:
            data = await self.execute(ITEMS_BY_NAME_QUERY, variables)
        except (httpx.HTTPError, MondayGraphQLError, ValueError) as exc:
            raise LookupFailure(partition_id, str(exc)) from exc

        page = data.get("items_page_by_column_values") or {}
        items = page.get("items") or []
        if not items:
            return None

        cost = _extract_cost(items[0])
        if cost is None:
            raise LookupFailure(partition_id, f"item {items[0].get('name')!r} has no publisher cost")
        return cost

    async def whoami(self) -> dict[str, Any]:
        data = await self.execute(ME_QUERY)
        return data.get("me") or {}

    async def list_boards(self, ids: Sequence[int] | None = None, *, limit: int = 1000) -> list[dict[str, Any]]:
        variables: dict[str, Any] = {"limit": limit}
        if ids:
            variables["ids"] = [str(board_id) for board_id in ids]
        data = await self.execute(BOARDS_QUERY, variables)
        boards = data.get("boards") or []
        return [board for board in boards if isinstance(board, dict)]


def _extract_cost(item: dict[str, Any]) -> Decimal | None:
    for column in item.get("column_values") or []:
        text = column.get("text") if isinstance(column, dict) else None
        if not isinstance(text, str) or not text.strip():
            continue
        raw = text.strip().replace(" ", "")
        if "," in raw:
            # Only "350,50"-style decimal commas; "1,200" is ambiguous.
            if not _DECIMAL_COMMA_RE.fullmatch(raw):
                log.debug("Ambiguous comma in cost cell %r on item %r", text, item.get("name"))
                return None
            raw = raw.replace(",", ".")
        try:
            value = Decimal(raw)
        except InvalidOperation:
            log.debug("Unparsable cost cell %r on item %r", text, item.get("name"))
            return None
        if not value.is_finite() or value < 0:
            return None
        return value
    return None
