from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_SECONDS = 2.0
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    """Backend settings loaded from the environment."""

    openai_api_key: str = ""
    openai_model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    # Retry loop
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    backoff_seconds: float = DEFAULT_BACKOFF_SECONDS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    log_level: str = "INFO"
    cors_allow_origins: Tuple[str, ...] = ("*",)

    @property
    def has_openai_key(self) -> bool:
        return bool(self.openai_api_key.strip())


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Configuration value is invalid: {name}={raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Configuration value is invalid: {name}={raw!r}")


def load_settings() -> Settings:
    origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    settings = Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        openai_model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL,
        temperature=_env_float("OPENAI_TEMPERATURE", DEFAULT_TEMPERATURE),
        max_tokens=_env_int("OPENAI_MAX_TOKENS", DEFAULT_MAX_TOKENS),
        max_attempts=_env_int("GATEWAY_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
        backoff_seconds=_env_float("GATEWAY_BACKOFF_SECONDS", DEFAULT_BACKOFF_SECONDS),
        timeout_seconds=_env_float("OPENAI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",),
    )
    if settings.max_attempts < 1:
        raise ValueError("Configuration value is invalid: GATEWAY_MAX_ATTEMPTS must be >= 1")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return load_settings()
