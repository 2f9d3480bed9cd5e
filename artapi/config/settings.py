from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8080
    keep_alive_timeout_seconds: int = 60

    storage_provider: str = "minio"
    storage_bucket_name: str = "holodeck-art-submissions"
    storage_endpoint: str = "storage.googleapis.com"
    storage_access_key: str = ""
    storage_secret_key: str = ""
    storage_region: str | None = None
    storage_secure: bool = True
    storage_signed_url_ttl_seconds: int = 3600

    analysis_provider: str = "openai"
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_timeout_seconds: int = 30
    openai_max_tokens: int = 100
    openai_compatible_base_url: str | None = None

    submission_timeout_seconds: float = 60.0

    rate_limit_window_seconds: float = 60.0
    rate_limit_retention_seconds: float = 300.0

    max_image_bytes: int = 5 << 20
    max_form_bytes: int = 10 << 20
