from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "prismic_ingest"
    db_username: str = "prismic_ingest"
    db_password: str = "secret"

    custom_types_dir: str = "custom_types"
    type_prefix: str = ""
    node_id_namespace: str = "prismic-ingest"

    normalize_images: bool = True
    remote_file_cache_dir: str = ".cache/prismic-files"
    remote_file_timeout_seconds: int = 30
    remote_file_max_concurrency: int = 4
