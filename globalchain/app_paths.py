"""Locations of the application's data and cache directories."""

from __future__ import annotations

from pathlib import Path

import platformdirs

APP_IDENTIFIER = "globalchain"
APP_NAME = "global"
APP_CACHE_DIR = "Cache"
_FALLBACK_ROOT = "app_data"


def _app_data_root() -> Path:
    try:
        platform_dir = platformdirs.user_data_dir(APP_IDENTIFIER)
    except Exception:
        platform_dir = None
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise OSError("Failed to get home directory") from exc
    return home / (platform_dir or _FALLBACK_ROOT)


def get_app_data_dir() -> Path:
    """Return the application data directory, creating it if needed."""
    root = _app_data_root()
    root.mkdir(parents=True, exist_ok=True)
    data_dir = root / APP_NAME
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_app_cache_dir() -> Path:
    """Return the cache directory inside the data directory, creating it if needed."""
    cache_dir = get_app_data_dir() / APP_CACHE_DIR
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir