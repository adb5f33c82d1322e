"""
Purpose: Process-level configuration, read once from the environment (.env supported).
Also owns logging setup so the UI and tests share one format.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gpt-4o"
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_POOL_MULTIPLIER = 8
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    openai_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    pool_multiplier: int = DEFAULT_POOL_MULTIPLIER
    log_level: str = "INFO"

    @property
    def has_model(self) -> bool:
        return bool(self.openai_api_key)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings(*, dotenv: bool = True) -> AppConfig:
    """Read AppConfig from env vars (after loading a .env file if present)."""
    if dotenv:
        load_dotenv()
    return AppConfig(
        openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
        model=(os.getenv("QGEN_MODEL") or "").strip() or DEFAULT_MODEL,
        timeout_seconds=_env_float("QGEN_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        pool_multiplier=_env_int("QGEN_POOL_MULTIPLIER", DEFAULT_POOL_MULTIPLIER),
        log_level=(os.getenv("QGEN_LOG_LEVEL") or "INFO").strip().upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT
    )
