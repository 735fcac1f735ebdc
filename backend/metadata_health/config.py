from pathlib import Path

from pydantic_settings import BaseSettings

# Repository root: backend/metadata_health/config.py -> parents[2]
PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "DataCite Metadata Health API"
    app_version: str = "1.0.0"
    docs_enabled: bool = True

    # API
    api_prefix: str = "/api/v1"

    # Snapshots; a relative data_dir resolves against PROJECT_ROOT
    data_dir: str = "data"
    providers_attributes_file: str = "providers_attributes.json"
    providers_stats_file: str = "providers_stats.json"
    clients_attributes_file: str = "clients_attributes.json"
    clients_stats_file: str = "clients_stats.json"
    preload_on_startup: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS: comma-separated origins, "*" for any
    cors_allow_origins: str = "*"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    @property
    def data_path(self) -> Path:
        path = Path(self.data_dir).expanduser()
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path


settings = Settings()
