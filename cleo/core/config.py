"""
Centralised application settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via ``CLEO_*``
env vars or the .env file at the project root.  Bootstrap values have no
defaults: a missing one raises at import time and aborts startup.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "Cleo"
    VERSION: str = "0.1.0"
    API_PREFIX: str = ""

    # ── Server ───────────────────────────────────────────────────────
    HOST: str
    PORT: int

    # ── Instance (seeded into instance_info on first run) ────────────
    HOSTNAME: str
    INSTANCE_NAME: str
    FILE_DIR: str

    # ── Outbound mail ────────────────────────────────────────────────
    SMTP_SERVER: str
    SMTP_USERNAME: str
    SMTP_PASS: str
    SMTP_PORT: int = 465
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT_SECONDS: float = 30.0

    # ── Default admin (seeded on first startup) ─────────────────────
    ADMIN_USERNAME: str
    ADMIN_EMAIL: str
    ADMIN_PASSWORD: str
    ADMIN_DISPLAY_NAME: str

    # ── Database (async PostgreSQL via asyncpg) ─────────────────────
    POSTGRES_USER: str
    POSTGRES_PASS: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int
    POSTGRES_DB: str = "cleo"
    DATABASE_URL: str | None = None  # overrides the composed Postgres URL
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE_SECONDS: int = 300
    DB_ECHO: bool = False

    # ── Accounts ─────────────────────────────────────────────────────
    ENFORCE_SINGLE_USE_KEYS: bool = True
    BCRYPT_ROUNDS: int = 12
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024

    # ── CORS ─────────────────────────────────────────────────────────
    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v  # type: ignore[return-value]

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_prefix": "CLEO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASS}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()  # type: ignore[call-arg]
