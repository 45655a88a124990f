"""
Tests for the application entry points in app.main.

Run all tests:
    pytest tests/test_main.py -v
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from sqlalchemy.exc import OperationalError


class TestRoot:

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Welcome to DormSpace API"
        assert data["documentations"]["swagger"] == "http://test/docs"
        assert data["documentations"]["redoc"] == "http://test/redoc"


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_health_ok(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["checks"]["database"] == "ok"

    @pytest.mark.asyncio
    async def test_email_check_is_informational(self, client):
        from app.core.services import EmailManagerService

        EmailManagerService._reset()

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["checks"]["email"] == "not_initialized"

    @pytest.mark.asyncio
    async def test_health_degraded_when_database_fails(self, app, client):
        from app.core.dependencies import get_async_session

        class BrokenSession:
            def begin(self):
                raise OperationalError("SELECT 1", {}, Exception("unreachable"))

        async def broken_session():
            yield BrokenSession()

        app.dependency_overrides[get_async_session] = broken_session

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"detail": "One or more health checks failed."}


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self, app: FastAPI):
        from app.core.services import BrevoService, EmailManagerService, Renderer

        with patch("app.main.dispose_db", new_callable=AsyncMock) as mock_dispose:
            try:
                async with app.router.lifespan_context(app):
                    assert BrevoService.is_initialized() is True
                    assert Renderer.is_initialized() is True
                    assert EmailManagerService.is_initialized() is True
                    assert BrevoService._client is not None

                assert BrevoService._client is None
                mock_dispose.assert_awaited_once()
            finally:
                BrevoService._reset()
                Renderer._reset()
                EmailManagerService._reset()


class TestRoutes:

    def test_api_routes_registered(self, app: FastAPI):
        paths = set(app.openapi()["paths"]) | {
            getattr(route, "path", None) for route in app.routes
        }

        for path in [
            "/api/user/register",
            "/api/user/verify",
            "/api/user/resend-otp",
            "/api/user/login",
            "/api/user/auth/me",
            "/api/user/logout",
            "/api/user/forgot-password",
            "/api/user/reset-password",
            "/api/rooms",
            "/api/rooms/{room_id}",
            "/api/assets",
            "/api/assets/room/{room_id}",
            "/api/assets/{asset_id}",
            "/api/asset-categories",
            "/health",
        ]:
            assert path in paths
