import logging
import os
import tomllib
from datetime import timedelta
from enum import StrEnum
from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from yarl import URL

PROJECT_DIR = Path(__file__).parent.parent.parent
PROJECT_TOML_PATH = PROJECT_DIR / "pyproject.toml"

with open(PROJECT_TOML_PATH, "rb") as f:
    PYPROJECT_CONTENT = tomllib.load(f)["project"]


class Environment(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    STG = "stg"
    PRD = "prd"


def convert_app_name(s: str) -> str:
    return " ".join(word.capitalize() for word in s.split("-"))


class Settings(BaseSettings):
    """
    Application settings.

    These parameters can be configured
    with environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=False,
        extra="ignore",
    )

    # App variables
    app_name: str = PYPROJECT_CONTENT["name"]
    app_title: str = os.getenv("APP_TITLE", convert_app_name(app_name))
    app_version: str = PYPROJECT_CONTENT["version"]
    app_description: str = PYPROJECT_CONTENT["description"]

    backend_host: str = "0.0.0.0"
    backend_port: int = 8080

    cors_origins: str = "*"

    # Number of workers for uvicorn / gunicorn
    workers_count: int = 1

    # Enable uvicorn reloading
    reload_uvicorn: bool = False

    # Current working environment
    current_environment: Environment = Environment.DEV
    log_level: int = logging.INFO
    log_to_file: bool = True
    debug: bool = False

    # Variables for the database
    database_url: str | None = None  # Full URL, takes precedence over the postgres_* parts
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "user_starter_kit"
    postgres_db_schema: str | None = None

    # Token security settings
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_seconds: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", timedelta(hours=24).total_seconds())
    )

    # Login rate limiting (attempts per fixed window, per client IP)
    rate_limit_enabled: bool = True
    login_rate_limit_attempts: int = 5
    login_rate_limit_window: int = int(timedelta(minutes=15).total_seconds())
    rate_limit_sweep_interval: int = 300  # Seconds between stale entry sweeps, 0 disables
    # Comma-separated peer IPs or CIDRs whose forwarding headers are honoured, "*" trusts all
    trusted_proxies: str = "*"

    # Listing
    pagination_default_limit: int = 10
    pagination_max_limit: int = 100

    # Seeding
    seed_admin_name: str = "Admin"
    seed_admin_email: str = "admin@example.com"
    seed_admin_password: str = "password123"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS origins from a comma-separated string.
        """
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def trusted_proxies_list(self) -> list[str]:
        return [proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()]

    @property
    def db_url(self) -> str:
        """
        SQLAlchemy URL of the database.

        ``database_url`` is returned untouched; re-parsing it would mangle
        host-less URLs such as ``sqlite+aiosqlite:///./app.db``.
        """
        if self.database_url:
            return self.database_url

        return str(
            URL.build(
                scheme="postgresql+asyncpg",
                host=self.postgres_host,
                port=self.postgres_port,
                user=self.postgres_user,
                password=self.postgres_password or None,
                path=f"/{self.postgres_db}",
            )
        )


settings = Settings()  # type: ignore
