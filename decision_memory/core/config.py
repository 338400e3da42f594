from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Decision Memory"
    debug: bool = False

    # Remote API
    api_base_url: str = "http://localhost:3001/api"
    api_token: str = ""
    request_timeout_seconds: float = 15.0

    # Durable draft storage
    redis_url: str = "redis://localhost:6379"
    draft_key_prefix: str = "decision-memory:draft:"
    draft_debounce_seconds: float = 1.0
    draft_ttl_seconds: int | None = None  # None keeps drafts until cleared

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    # Flags fetched on session start; unlisted keys stay unknown (and therefore off)
    known_feature_flags: list[str] = [
        "decision_streaks",
        "decision_templates",
        "decision_linking",
        "failure_detection",
        "monthly_report",
        "quality_meter",
        "risk_analyzer",
        "success_dashboard",
    ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
