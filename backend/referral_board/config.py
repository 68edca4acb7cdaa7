from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/referrals.db"
    secret_key: str = "dev-secret-key-change-in-production"
    token_algorithm: str = "HS256"
    token_expire_days: int = 5

    # Rejected-referral cleanup
    cleanup_enabled: bool = True
    cleanup_interval_hours: int = 1
    rejected_retention_hours: int = 24

    # Allow accepted <-> rejected once a referral has left pending
    allow_terminal_status_change: bool = False

    # Include exception text in 500 responses (trusted deployments only)
    expose_error_details: bool = False

    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
