"""Shared pytest fixtures for test modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from caddy_admin.client import CaddyAdminClient
from tests.fakes.caddy import BASE_URL, FakeCaddyTransport

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@pytest.fixture
def fake_caddy() -> FakeCaddyTransport:
    """An empty in-memory admin endpoint."""
    return FakeCaddyTransport()


@pytest.fixture
async def caddy(fake_caddy: FakeCaddyTransport) -> AsyncGenerator[CaddyAdminClient]:
    """A client wired to ``fake_caddy``.

    Usage:
        async def test_something(caddy: CaddyAdminClient, fake_caddy: FakeCaddyTransport) -> None:
            result = await caddy.get_config()
            assert fake_caddy.last_request is not None
    """
    async with httpx.AsyncClient(transport=fake_caddy) as http_client:
        yield CaddyAdminClient(BASE_URL, client=http_client)
