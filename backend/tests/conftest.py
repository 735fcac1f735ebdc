"""Shared test fixtures: in-memory snapshots, dataset service, test client."""

import json

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from metadata_health.dependencies import get_dataset
from metadata_health.main import app
from metadata_health.services.dataset_service import DatasetService
from metadata_health.services.snapshot_loader import SnapshotNames
from metadata_health.services.snapshot_source import InMemorySnapshotSource

NAMES = SnapshotNames()

PROVIDERS_ATTRIBUTES = [
    {"id": "P1", "relationships": {"clients": ["C1"]}},
    {"id": "P2", "attributes": {"name": "Two"}, "relationships": {"clients": ["C2", "missing", "C1"]}},
    {"id": "P3", "attributes": {"name": "No relationships"}},
    {"id": "P4", "relationships": {"clients": []}},
    {"id": "P5", "relationships": {"clients": ["missing"]}},
]
PROVIDERS_STATS = [
    {"id": "P1", "stats": {"works": 5}},
    {"id": "ORPHAN", "stats": {"works": 1}},
]
CLIENTS_ATTRIBUTES = [
    {"id": "C1"},
    {"id": "C2", "attributes": {"name": "Client Two", "provider": "P2"}},
]
CLIENTS_STATS = [
    {"id": "C2", "stats": {"views": 3}, "meta": {"source": "ignored"}},
]


def snapshot(records) -> str:
    """Serialize records as a snapshot document."""
    return json.dumps({"data": records})


def snapshot_documents(
    providers_attributes=None,
    providers_stats=None,
    clients_attributes=None,
    clients_stats=None,
) -> dict[str, str]:
    return {
        NAMES.providers_attributes: snapshot(
            PROVIDERS_ATTRIBUTES if providers_attributes is None else providers_attributes
        ),
        NAMES.providers_stats: snapshot(PROVIDERS_STATS if providers_stats is None else providers_stats),
        NAMES.clients_attributes: snapshot(
            CLIENTS_ATTRIBUTES if clients_attributes is None else clients_attributes
        ),
        NAMES.clients_stats: snapshot(CLIENTS_STATS if clients_stats is None else clients_stats),
    }


@pytest.fixture
def source() -> InMemorySnapshotSource:
    """In-memory snapshot source holding the default test snapshots."""
    return InMemorySnapshotSource(snapshot_documents())


@pytest.fixture
def make_source():
    """Factory for sources with some tables replaced, e.g. make_source(clients_stats=[])."""

    def _make(**tables) -> InMemorySnapshotSource:
        return InMemorySnapshotSource(snapshot_documents(**tables))

    return _make


@pytest.fixture
def dataset(source: InMemorySnapshotSource) -> DatasetService:
    """A fresh, not-yet-loaded dataset service."""
    return DatasetService(source, NAMES)


@pytest_asyncio.fixture
async def client(dataset: DatasetService) -> AsyncClient:
    """Yield an httpx AsyncClient wired to the test dataset."""
    app.dependency_overrides[get_dataset] = lambda: dataset
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
