"""Pydantic BaseSettings — signing defaults, RPC access and relayer identity."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ─────────────────────────────────────────────
    APP_ENV: Literal["dev", "test", "prod"] = "dev"
    APP_NAME: str = "nanotoken-signatures"
    LOG_LEVEL: str = "INFO"

    # ── Signing ─────────────────────────────────────────────────
    # Validity window applied when a caller does not pass a deadline
    SIGNATURE_TTL_SECONDS: int = Field(default=3600, gt=0)
    SIGNER_MAX_WORKERS: int = Field(default=2, ge=1)

    # ── Network / Contract ──────────────────────────────────────
    RPC_URL: str = "http://127.0.0.1:8545"
    RPC_REQUEST_TIMEOUT_SECONDS: float = 10.0
    TOKEN_ADDRESS: str = ""
    # Optional EIP-712 domain name; when empty the token's name() is read
    TOKEN_NAME: str = ""

    # ── Credentials (never commit real values) ──────────────────
    RELAYER_PRIVATE_KEY: str = ""


settings = Settings()
