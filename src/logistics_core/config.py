"""Application configuration and settings management."""

from __future__ import annotations

import json
import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# HS256 keys shorter than the digest size weaken the signature.
MIN_SECRET_BYTES = 32

logger = logging.getLogger(__name__)


def _generate_secret() -> SecretStr:
    logger.warning(
        "LOGISTICS_JWT_SECRET is not set; using a random per-process signing secret. "
        "Tokens will not survive a restart."
    )
    return SecretStr(secrets.token_urlsafe(48))


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LOGISTICS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Logistics Core API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=("http://localhost:5173", "http://127.0.0.1:5173"),
        description="Permitted web origins for browser clients (CORS).",
    )

    jwt_secret: SecretStr = Field(
        default_factory=_generate_secret,
        description="Symmetric signing secret for access tokens (at least 256 bits).",
    )
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    token_ttl_ms: int = Field(default=24 * 60 * 60 * 1000, ge=1, description="Default token lifetime in milliseconds.")
    default_role: str = "USER"
    password_schemes: tuple[str, ...] = Field(
        default=("pbkdf2_sha256",),
        description="passlib schemes; the first one is used for new hashes.",
    )

    distance_metric: Literal["planar", "haversine"] = Field(
        default="planar",
        description="Distance formula used by route optimization.",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("jwt_secret")
    @classmethod
    def _check_secret_strength(cls, value: SecretStr) -> SecretStr:
        if len(value.get_secret_value().encode("utf-8")) < MIN_SECRET_BYTES:
            raise ValueError(f"jwt_secret must be at least {MIN_SECRET_BYTES} bytes long")
        return value

    @field_validator("frontend_allowed_origins", "password_schemes", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    def auth_config(self) -> "AuthConfig":
        return AuthConfig(
            secret=self.jwt_secret.get_secret_value(),
            default_ttl=timedelta(milliseconds=self.token_ttl_ms),
            algorithm=self.jwt_algorithm,
        )


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Signing material held for the process lifetime and injected into the auth services."""

    secret: str
    default_ttl: timedelta
    algorithm: str = "HS256"

    def __repr__(self) -> str:
        return f"AuthConfig(secret='***', default_ttl={self.default_ttl!r}, algorithm={self.algorithm!r})"


settings = Settings()
