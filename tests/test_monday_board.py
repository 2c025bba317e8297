"""
Tests for the Monday.com board lookup (GraphQL over httpx.MockTransport).
"""

import json
from decimal import Decimal

import httpx
import pytest

from adapters.http_client import build_monday_client
from adapters.monday_board import MondayBoardLookup, MondayGraphQLError
from core.config import AppSettings
from core.domain.errors import LookupFailure


def _settings(**overrides) -> AppSettings:
    values = {"monday_api_token": "secret-token", "monday_cost_column_id": "cost"}
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


def _items_response(*items: dict) -> dict:
    return {"data": {"items_page_by_column_values": {"items": list(items)}}}


def _lookup_with(handler, settings: AppSettings | None = None) -> MondayBoardLookup:
    settings = settings or _settings()
    client = build_monday_client(settings, transport=httpx.MockTransport(handler))
    return MondayBoardLookup(settings, client=client)


class TestLookup:
    @pytest.mark.asyncio
    async def test_found_returns_cost_and_sends_variables(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=_items_response(
                    {"id": "1", "name": "acme.com", "column_values": [{"id": "cost", "text": "350"}]}
                ),
            )

        async with _lookup_with(handler) as lookup:
            cost = await lookup.lookup(391082834, "acme.com")

        assert cost == Decimal("350")
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.monday.com/v2"
        assert request.headers["Authorization"] == "secret-token"
        assert request.headers["API-version"] == "2023-10"
        payload = json.loads(request.content)
        assert "items_page_by_column_values" in payload["query"]
        assert payload["variables"] == {"boardId": "391082834", "name": "acme.com", "costColumn": "cost"}

    @pytest.mark.asyncio
    async def test_no_items_is_absent(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_items_response())

        async with _lookup_with(handler) as lookup:
            assert await lookup.lookup(1, "missing.com") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text,expected",
        [("350,50", Decimal("350.50")), ("350,5", Decimal("350.5")), ("1 200", Decimal("1200")), ("1E+3", Decimal("1000"))],
    )
    async def test_cost_cell_forms(self, text, expected):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=_items_response({"name": "a.it", "column_values": [{"id": "cost", "text": text}]}),
            )

        async with _lookup_with(handler) as lookup:
            assert await lookup.lookup(1, "a.it") == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["1,200", "1,200.50", "1.200,50", ",50", "350,"])
    async def test_ambiguous_comma_cost_raises_lookup_failure(self, text):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=_items_response({"name": "a.it", "column_values": [{"id": "cost", "text": text}]}),
            )

        async with _lookup_with(handler) as lookup:
            with pytest.raises(LookupFailure):
                await lookup.lookup(1, "a.it")

    @pytest.mark.asyncio
    async def test_graphql_errors_raise_lookup_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"errors": [{"message": "Board not found"}]})

        async with _lookup_with(handler) as lookup:
            with pytest.raises(LookupFailure) as info:
                await lookup.lookup(7, "acme.com")

        assert info.value.partition_id == 7
        assert "Board not found" in info.value.reason

    @pytest.mark.asyncio
    async def test_http_error_status_raises_lookup_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="oops")

        async with _lookup_with(handler) as lookup:
            with pytest.raises(LookupFailure):
                await lookup.lookup(1, "acme.com")

    @pytest.mark.asyncio
    async def test_transport_error_raises_lookup_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with _lookup_with(handler) as lookup:
            with pytest.raises(LookupFailure):
                await lookup.lookup(1, "acme.com")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "columns",
        [[], [{"id": "cost", "text": ""}], [{"id": "cost", "text": None}], [{"id": "cost", "text": "n/a"}]],
    )
    async def test_missing_or_bad_cost_raises_lookup_failure(self, columns):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_items_response({"name": "acme.com", "column_values": columns}))

        async with _lookup_with(handler) as lookup:
            with pytest.raises(LookupFailure):
                await lookup.lookup(1, "acme.com")


class TestDiagnostics:
    @pytest.mark.asyncio
    async def test_whoami(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert "me" in json.loads(request.content)["query"]
            return httpx.Response(200, json={"data": {"me": {"id": "42", "name": "Ada"}}})

        async with _lookup_with(handler) as lookup:
            assert await lookup.whoami() == {"id": "42", "name": "Ada"}

    @pytest.mark.asyncio
    async def test_list_boards_sends_ids_as_strings(self):
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content)["variables"])
            return httpx.Response(200, json={"data": {"boards": [{"id": "1", "name": "EN"}, None]}})

        async with _lookup_with(handler) as lookup:
            boards = await lookup.list_boards([1, 2])

        assert boards == [{"id": "1", "name": "EN"}]
        assert seen[0] == {"limit": 1000, "ids": ["1", "2"]}

    @pytest.mark.asyncio
    async def test_execute_rejects_missing_data(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"account_id": 1})

        async with _lookup_with(handler) as lookup:
            with pytest.raises(MondayGraphQLError):
                await lookup.execute("query { me { id } }")


def test_client_without_token_sends_no_authorization():
    client = build_monday_client(_settings(monday_api_token=None))

    assert "Authorization" not in client.headers
    assert client.headers["API-version"] == "2023-10"
