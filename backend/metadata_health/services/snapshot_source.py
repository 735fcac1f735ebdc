"""Snapshot source abstraction.

Provides a pluggable place to read the pre-generated JSON snapshots from.
Default is a local directory; tests use the in-memory source.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path


class SnapshotSource(ABC):
    """Abstract source of raw snapshot documents."""

    @abstractmethod
    async def read(self, name: str) -> bytes:
        """Read a snapshot document by name. Raises FileNotFoundError if missing."""
        ...


class LocalSnapshotSource(SnapshotSource):
    """Reads snapshot documents from a directory on the local filesystem.

    Names must be plain file names inside that directory; anything with a
    path separator or a relative component is rejected with ValueError.
    """

    def __init__(self, base_dir: str | Path | None = None):
        if base_dir is None:
            from metadata_health.config import settings
            base_dir = settings.data_path
        self._base_dir = Path(base_dir)

    def _path(self, name: str) -> Path:
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise ValueError(f"Snapshot name must be a plain file name, got {name!r}")
        return self._base_dir / name

    async def read(self, name: str) -> bytes:
        path = self._path(name)
        if not path.is_file():
            raise FileNotFoundError(f"Snapshot not found: {path}")
        # Blocking read runs off the event loop so several snapshots load concurrently
        return await asyncio.to_thread(path.read_bytes)


class InMemorySnapshotSource(SnapshotSource):
    """In-memory snapshot documents for testing. No disk I/O."""

    def __init__(self, documents: dict[str, bytes | str] | None = None):
        self._documents: dict[str, bytes] = {}
        for name, body in (documents or {}).items():
            self.put(name, body)
        self.reads = 0

    def put(self, name: str, body: bytes | str) -> None:
        self._documents[name] = body.encode() if isinstance(body, str) else body

    def remove(self, name: str) -> None:
        self._documents.pop(name, None)

    async def read(self, name: str) -> bytes:
        self.reads += 1
        # Yield so concurrent reads interleave the way real I/O does
        await asyncio.sleep(0)
        if name not in self._documents:
            raise FileNotFoundError(f"Snapshot not found: {name}")
        return self._documents[name]


# Module-level singleton, replaceable in tests
_source: SnapshotSource | None = None


def get_snapshot_source() -> SnapshotSource:
    """Get the current snapshot source."""
    global _source
    if _source is None:
        _source = LocalSnapshotSource()
    return _source


def set_snapshot_source(source: SnapshotSource | None) -> None:
    """Set the snapshot source (used for testing)."""
    global _source
    _source = source
