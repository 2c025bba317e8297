"""httpx client builder.

Standardizes timeouts and headers so every Monday.com call behaves the same,
and lets tests inject an `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the project defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_monday_client(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Client pre-configured with the Monday.com auth and version headers."""

    headers = {
        "Content-Type": "application/json",
        "API-version": settings.monday_api_version,
    }
    if settings.monday_api_token:
        headers["Authorization"] = settings.monday_api_token
    return build_async_client(settings, extra_headers=headers, transport=transport)
