"""
Malls API Backend — Application Wiring (HTTP)
===============================================

What we test:
    ✅ /health reports the database probe
    ✅ X-Request-ID is generated, echoed and stamped into error bodies
    ✅ Unknown routes and methods use the common error shape
"""

import pytest
from sqlalchemy.exc import OperationalError

from mallsapi import database


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unhealthy_when_database_unreachable(self, test_client, monkeypatch):
        class BrokenEngine:
            def connect(self):
                raise OperationalError("SELECT 1", {}, Exception("down"))

        monkeypatch.setattr(database, "engine", BrokenEngine())
        response = await test_client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/malls")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_is_echoed_into_errors(self, test_client):
        response = await test_client.get("/api/malls/123", headers={"X-Request-ID": "trace-42"})
        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"


class TestErrorShape:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/api/unknown")
        assert response.status_code == 404
        body = response.json()
        assert body == {
            "status": "Not Found",
            "statusCode": 404,
            "message": "Can not find /api/unknown",
            "details": None,
            "request_id": body["request_id"],
        }

    @pytest.mark.asyncio
    async def test_method_not_allowed_keeps_its_code(self, test_client):
        response = await test_client.patch("/api/malls")
        assert response.status_code == 405
        assert response.json()["statusCode"] == 405

    @pytest.mark.asyncio
    async def test_missing_body_is_400(self, test_client, user_token):
        response = await test_client.post("/api/stores", headers={"x-auth-token": user_token})
        assert response.status_code == 400
        assert response.json()["statusCode"] == 400
