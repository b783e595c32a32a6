"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database (full URL wins over the individual PostgreSQL parts)
    database_url: str = ""
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "upiconnect"
    postgres_password: str = "password"
    postgres_db: str = "upiconnect"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    password_reset_expire_minutes: int = 60

    # Transactional email (Resend)
    resend_api_key: str = ""
    resend_base_url: str = "https://api.resend.com"
    email_from: str = "onboarding@resend.dev"
    email_timeout_seconds: float = 10.0

    # Front-end origin used to build password reset links
    app_base_url: str = "http://localhost:3000"

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL for SQLAlchemy"""
        if self.database_url:
            # Heroku/Render style URLs still say postgres://
            if self.database_url.startswith("postgres://"):
                return self.database_url.replace("postgres://", "postgresql://", 1)
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
