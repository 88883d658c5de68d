"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_REFRESH_INTERVAL = 5 * 60.0
DEFAULT_SEARCH_DEBOUNCE = 0.3
DEFAULT_CACHE_TTL = 5 * 60.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@dataclass(frozen=True, slots=True)
class Settings:
    alpha_vantage_api_key: str = ""
    storage_path: str = ""  # empty → watchlist lives in memory only
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    search_debounce: float = DEFAULT_SEARCH_DEBOUNCE
    cache_ttl: float = DEFAULT_CACHE_TTL
    log_level: str = "INFO"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the process environment (or a given mapping).

        Blank values fall back to defaults. Non-numeric durations raise
        ValueError naming the offending variable.
        """
        env = os.environ if environ is None else environ
        return cls(
            alpha_vantage_api_key=env.get("ALPHA_VANTAGE_API_KEY", "").strip(),
            storage_path=env.get("STOCKWATCH_STORAGE_PATH", "").strip(),
            refresh_interval=_seconds(env, "STOCKWATCH_REFRESH_INTERVAL", DEFAULT_REFRESH_INTERVAL),
            search_debounce=_seconds(env, "STOCKWATCH_SEARCH_DEBOUNCE", DEFAULT_SEARCH_DEBOUNCE),
            cache_ttl=_seconds(env, "STOCKWATCH_CACHE_TTL", DEFAULT_CACHE_TTL),
            log_level=env.get("STOCKWATCH_LOG_LEVEL", "").strip().upper() or "INFO",
            host=env.get("STOCKWATCH_HOST", "").strip() or DEFAULT_HOST,
            port=_port(env, "STOCKWATCH_PORT", DEFAULT_PORT),
        )


def _seconds(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def _port(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer port, got {raw!r}") from None
    if not 0 < value < 65536:
        raise ValueError(f"{name} must be between 1 and 65535, got {raw!r}")
    return value
