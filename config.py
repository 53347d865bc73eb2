"""Runtime configuration read from the environment or Streamlit secrets."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_HISTORY_PATH = Path(__file__).resolve().parent / "storage" / "played_history.json"


@dataclass
class AppConfig:
    tmdb_api_key: Optional[str] = None
    sportsdb_api_key: str = "3"
    history_path: Path = DEFAULT_HISTORY_PATH
    category_delay_seconds: float = 0.5
    http_timeout_seconds: float = 10.0
    log_level: str = "INFO"


def _get_secret(name: str) -> Optional[str]:
    """Return a setting from env vars or Streamlit secrets when available."""
    value = os.getenv(name)
    if value:
        return value
    import streamlit as st  # type: ignore

    try:
        if name in st.secrets:
            return str(st.secrets[name])
    except FileNotFoundError:
        # No secrets.toml on this machine.
        return None
    return None


def _get_float(name: str, default: float) -> float:
    raw = _get_secret(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise EnvironmentError(f"{name} must be a number, got {raw!r}") from exc


def load_config() -> AppConfig:
    history_path = _get_secret("HISTORY_PATH")
    return AppConfig(
        tmdb_api_key=_get_secret("TMDB_API_KEY"),
        sportsdb_api_key=_get_secret("SPORTSDB_API_KEY") or "3",
        history_path=Path(history_path) if history_path else DEFAULT_HISTORY_PATH,
        category_delay_seconds=_get_float("CATEGORY_DELAY_SECONDS", 0.5),
        http_timeout_seconds=_get_float("HTTP_TIMEOUT_SECONDS", 10.0),
        log_level=(_get_secret("LOG_LEVEL") or "INFO").upper(),
    )
