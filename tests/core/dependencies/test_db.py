"""
Test suite for the database session dependency.

Run all tests:
    pytest tests/core/dependencies/test_db.py -v
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.dependencies import get_async_session


@pytest.fixture
async def counting_client(app, session_factory, email_gateway):
    """Client whose session override records every session it hands out."""
    opened = []

    async def override_get_session():
        async with session_factory() as session:
            opened.append(session)
            yield session

    app.dependency_overrides[get_async_session] = override_get_session
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as client:
            yield client, opened
    finally:
        app.dependency_overrides.pop(get_async_session, None)


class TestDBSession:

    @pytest.mark.asyncio
    async def test_auth_and_route_share_one_session(self, counting_client, auth_headers):
        client, opened = counting_client

        response = await client.get("/api/user/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert len(opened) == 1

    @pytest.mark.asyncio
    async def test_inventory_routes_share_one_session(
        self, counting_client, auth_headers
    ):
        client, opened = counting_client

        response = await client.get("/api/rooms", headers=auth_headers)

        assert response.status_code == 200
        assert len(opened) == 1

    @pytest.mark.asyncio
    async def test_health_uses_request_session(self, counting_client):
        client, opened = counting_client

        response = await client.get("/health")

        assert response.status_code == 200
        assert len(opened) == 1
