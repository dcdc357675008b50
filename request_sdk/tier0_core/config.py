"""
request_sdk.tier0_core.config
──────────────────────────────
Typed client configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic and prefixed with REQUEST_SDK_.
Invalid values raise at construction time, not mid-request.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """
    Typed request client configuration. Every field can be overridden by an
    environment variable named REQUEST_SDK_<FIELD>.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REQUEST_SDK_",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ───────────────────────────────────────────────────────────
    environment: str = Field(default="development")

    # ── Transport ─────────────────────────────────────────────────────────────
    request_timeout: float = Field(default=120.0)
    token_expired_status: int = Field(default=4000)

    # ── Wire headers ──────────────────────────────────────────────────────────
    device_type: str = Field(default="ios")
    device_token_header: str = Field(default="device_token")
    simulator_device_token: str = Field(default="simulator-device-token")

    # ── Multipart ─────────────────────────────────────────────────────────────
    boundary_prefix: str = Field(default="Boundary-")

    # ── Collaborators ─────────────────────────────────────────────────────────
    reachability_backend: str = Field(default="socket")
    reachability_host: str = Field(default="1.1.1.1")
    reachability_port: int = Field(default=53)
    reachability_timeout: float = Field(default=1.5)
    credentials_backend: str = Field(default="env")
    location_backend: str = Field(default="fixed")
    default_latitude: float = Field(default=0.0)
    default_longitude: float = Field(default=0.0)

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # ── Error reporting ───────────────────────────────────────────────────────
    error_backend: str = Field(default="none")

    @field_validator("environment")
    @classmethod
    def validate_env(cls, v: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if v.lower() not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("request_timeout", "reachability_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeouts must be positive, got {v!r}")
        return v


@lru_cache(maxsize=1)
def get_config() -> ClientConfig:
    """
    Return the singleton client config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return ClientConfig()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = ["ClientConfig", "get_config"]
