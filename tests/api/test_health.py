"""Health endpoint and request id propagation."""

from httpx import AsyncClient


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "1.0.0"}


async def test_request_id_minted(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert len(response.headers["x-request-id"]) == 32


async def test_request_id_forwarded(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "trace-abc"})
    assert response.headers["x-request-id"] == "trace-abc"


async def test_unsafe_request_id_replaced(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id!"})
    assert response.headers["x-request-id"] != "bad id!"
