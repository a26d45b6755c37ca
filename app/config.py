"""Application configuration using Pydantic Settings."""
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "ClarityEd Attendance"
    debug: bool = False
    log_level: str = "INFO"

    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "clarityed"

    # JWT
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    jwt_refresh_token_expire_days: int = 30

    # Analytics
    analytics_record_limit: int = 1000  # newest records fed to one analysis run
    default_school_year: str = ""

    # Seed admin (skipped when password is empty)
    admin_email: str = "admin@clarityed.local"
    admin_password: str = ""
    admin_full_name: str = "ClarityEd Admin"

    # CORS (comma-separated origins, e.g. "https://app.clarityed.org,https://admin.clarityed.org")
    cors_origins: str = "http://localhost:5173"

    @model_validator(mode="after")
    def _validate_production_secrets(self):
        if not self.debug:
            if self.jwt_secret_key in ("change-me-in-production", ""):
                raise ValueError(
                    "JWT_SECRET_KEY must be set to a strong secret when DEBUG is not enabled. "
                    "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )
        return self


settings = Settings()
