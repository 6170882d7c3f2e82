"""Runtime settings, read from the environment (and a local .env file)."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        return float(raw) if raw.strip() else default
    except ValueError:
        return default


class Settings:
    api_url: str = os.getenv("PARTSTOCK_API_URL", "http://localhost:3000")
    token: str = os.getenv("PARTSTOCK_TOKEN", "")
    timeout: float = _float("PARTSTOCK_TIMEOUT", 30.0)
    log_level: str = os.getenv("PARTSTOCK_LOG_LEVEL", "WARNING").upper()


settings = Settings()
