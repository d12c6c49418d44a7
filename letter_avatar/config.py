"""Configuration helpers for the avatar builder."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


FONTS_DIR = Path(__file__).resolve().parent / "fonts"
DEFAULT_FONT_PATH = FONTS_DIR / "Lato-Light.ttf"


@dataclass
class Settings:
    """Centralized environment-driven configuration.

    Values are read once at import time, after the package bootstrap has loaded
    any ``.env`` files. Builders pull their defaults from here.
    """

    render_backend: str = os.getenv("AVATAR_RENDER_BACKEND", "pillow")
    font_path: str = os.getenv("AVATAR_FONT_PATH", str(DEFAULT_FONT_PATH))
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance to avoid repeated environment reads."""

    return Settings()


def resolve_log_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its number, falling back to WARNING."""

    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


settings = get_settings()
