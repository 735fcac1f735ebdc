import pytest
from httpx import ASGITransport, AsyncClient

from metadata_health.dependencies import get_dataset
from metadata_health.main import app
from metadata_health.services.dataset_service import DatasetService
from metadata_health.services.snapshot_loader import SnapshotNames
from metadata_health.services.snapshot_source import InMemorySnapshotSource


@pytest.mark.asyncio
async def test_request_id_in_response(client: AsyncClient):
    """All responses include X-Request-ID header."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert "X-Request-ID" in response.headers
    # UUID format: 8-4-4-4-12
    assert len(response.headers["X-Request-ID"]) == 36


@pytest.mark.asyncio
async def test_404_returns_structured_json(client: AsyncClient):
    """Non-existent endpoint returns structured JSON error with request_id."""
    response = await client.get("/nonexistent")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] is True
    assert data["status_code"] == 404
    assert data["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_health_reports_dataset_state(client: AsyncClient):
    before = (await client.get("/health")).json()
    assert before["status"] == "ok"
    assert before["dataset_ready"] is False
    assert before["loaded_at"] is None

    await client.get("/api/v1/providers/attributes")
    after = (await client.get("/health")).json()
    assert after["dataset_ready"] is True
    assert after["loaded_at"].endswith("Z")


@pytest.mark.asyncio
async def test_root_redirects_to_docs(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 302
    assert response.headers["location"] == "/docs"


@pytest.mark.asyncio
async def test_cors_allows_any_origin(client: AsyncClient):
    response = await client.get("/api/v1/clients/C1", headers={"Origin": "https://example.org"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_load_failure_returns_generic_500():
    """Unloadable snapshots produce a generic error without internal detail."""
    dataset = DatasetService(InMemorySnapshotSource(), SnapshotNames())
    app.dependency_overrides[get_dataset] = lambda: dataset
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            for path in ("/api/v1/providers/attributes", "/api/v1/clients/C1"):
                response = await c.get(path)
                assert response.status_code == 500
                body = response.json()
                assert body["detail"] == "Failed to initialize data cache"
                assert "providers_attributes.json" not in response.text
    finally:
        app.dependency_overrides.clear()
    assert not dataset.is_ready


@pytest.mark.asyncio
async def test_openapi_lists_routes(client: AsyncClient):
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/api/v1/providers/{provider_id}/clients" in paths
    assert "/api/v1/clients/{client_id}/stats" in paths
    for path, operations in paths.items():
        if path.startswith("/api/v1/"):
            assert operations["get"].get("description"), path
