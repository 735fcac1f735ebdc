from metadata_health.config import PROJECT_ROOT, Settings
from metadata_health.services.snapshot_loader import SnapshotNames


def test_defaults():
    s = Settings(_env_file=None)
    assert s.api_prefix == "/api/v1"
    assert s.cors_origins_list == ["*"]
    assert s.data_path == PROJECT_ROOT / "data"


def test_cors_origins_split():
    s = Settings(_env_file=None, cors_allow_origins="https://a.org, https://b.org,")
    assert s.cors_origins_list == ["https://a.org", "https://b.org"]


def test_snapshot_names_from_env(monkeypatch):
    monkeypatch.setenv("CLIENTS_STATS_FILE", "clients_stats_2024.json")
    monkeypatch.setattr("metadata_health.config.settings", Settings(_env_file=None))
    names = SnapshotNames.from_settings()
    assert names.clients_stats == "clients_stats_2024.json"
    assert names.providers_attributes == "providers_attributes.json"


def test_data_path_resolution(tmp_path, monkeypatch):
    """Relative data dirs resolve against the project root, not the working directory."""
    monkeypatch.chdir(tmp_path)
    assert Settings(_env_file=None, data_dir="snapshots").data_path == PROJECT_ROOT / "snapshots"
    assert Settings(_env_file=None, data_dir=str(tmp_path)).data_path == tmp_path
