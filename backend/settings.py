from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "MRT Jakarta API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    # CORS: "*" for dev; in production set to comma-separated origins, e.g. "https://app.example.com"
    cors_origins: str = "*"
    rate_limit: str = "100/minute"  # slowapi default limit per client IP

    # Upstream: Jakarta MRT website data endpoint (JSON array of stations)
    mrt_stations_url: str = "https://www.jakartamrt.co.id/id/val/stasiuns"
    mrt_request_timeout_seconds: float = 10.0
    timezone: str = "Asia/Jakarta"  # IANA name; "now" for schedule filtering is taken in this zone


def get_settings() -> Settings:
    return Settings()
