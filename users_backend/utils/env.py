from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_FILE = ".env"
PRODUCTION = "production"

_REPO_ROOT = Path(__file__).resolve().parents[2]


def load_env(*, override: bool = False) -> Path | None:
    """
    Load the repository `.env`, or else the nearest one at or above the
    working directory. Returns the file that was loaded.
    """
    path: Path | None = _REPO_ROOT / ENV_FILE
    if not path.is_file():
        located = find_dotenv(ENV_FILE, usecwd=True)
        path = Path(located) if located else None
    if path is not None:
        load_dotenv(dotenv_path=path, override=override)
    return path


def get_app_env() -> str:
    """Runtime mode from `APP_ENV` (defaults to development)."""
    return (os.getenv("APP_ENV") or "development").strip().lower()


def is_production() -> bool:
    return get_app_env() == PRODUCTION
