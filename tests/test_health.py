"""Smoke tests for health, readiness and the middleware stack."""

from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from app.middleware import RequestSizeLimitMiddleware


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"]


async def test_ready_checks_database(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "ok"}


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert len(response.headers["X-Request-ID"]) == 32


async def test_safe_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id; drop"}
    )
    assert response.headers["X-Request-ID"] != "bad id; drop"


async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "cache-control" not in response.headers


async def test_auth_responses_are_not_cached(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={})
    assert response.headers["cache-control"] == "no-store"


async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["status"] == "error"


def _echo_app(max_bytes: int) -> FastAPI:
    app = FastAPI()

    @app.post("/echo")
    async def echo(request: Request) -> dict:
        return {"size": len(await request.body())}

    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=max_bytes)
    return app


async def test_request_size_limit() -> None:
    transport = ASGITransport(app=_echo_app(16))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        ok = await ac.post("/echo", content=b"x" * 16)
        assert ok.status_code == 200
        assert ok.json() == {"size": 16}

        too_big = await ac.post("/echo", content=b"x" * 17)
        assert too_big.status_code == 413
        assert too_big.json()["status"] == "error"
