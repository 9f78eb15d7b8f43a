from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    """Load ``.env`` and then ``.env.<APP_ENV>`` from the working dir or the project root."""
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file: str = "homehub.log"
    currency: str = "EUR"
    cache_ttl_seconds: float = 30.0
    # 0 = Monday ... 6 = Sunday, same numbering as date.weekday()
    week_starts_on: int = 0


def _number(environ: Mapping[str, str], name: str, default: str, cast):
    raw = environ.get(name, default).strip() or default
    try:
        return cast(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc


def read_settings(environ: Mapping[str, str] | None = None) -> Settings:
    environ = os.environ if environ is None else environ

    database_url = environ.get("DATABASE_URL", "").strip()
    if not database_url:
        raise RuntimeError("DATABASE_URL is not set. Create a .env file with your connection string.")

    log_level = environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"LOG_LEVEL {log_level!r} is not a logging level")

    currency = environ.get("HOMEHUB_CURRENCY", "EUR").strip().upper() or "EUR"
    if len(currency) != 3 or not currency.isalpha():
        raise RuntimeError(f"HOMEHUB_CURRENCY must be a 3-letter code, got {currency!r}")

    cache_ttl = _number(environ, "CACHE_TTL_SECONDS", "30", float)
    if cache_ttl < 0:
        raise RuntimeError("CACHE_TTL_SECONDS cannot be negative")

    week_starts_on = _number(environ, "WEEK_STARTS_ON", "0", int)
    if not 0 <= week_starts_on <= 6:
        raise RuntimeError("WEEK_STARTS_ON must be between 0 (Monday) and 6 (Sunday)")

    return Settings(
        database_url=database_url,
        log_level=log_level,
        log_dir=environ.get("LOG_DIR", "logs").strip() or "logs",
        log_file=environ.get("LOG_FILE", "homehub.log").strip() or "homehub.log",
        currency=currency,
        cache_ttl_seconds=cache_ttl,
        week_starts_on=week_starts_on,
    )


load_env()

SETTINGS = read_settings()
