"""Initials avatar generator.

Builds small identicon-style avatars: a colored square or circle with one or
two letters of initials (or custom text) centered on it, encoded as PNG, JPEG,
WEBP or a Base64 data URL.
"""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv


# Load base env first, then allow .env.local to override for developer-specific tweaks.
load_dotenv(Path.cwd() / ".env")
load_dotenv(Path.cwd() / ".env.local", override=True)

from .config import resolve_log_level, settings  # noqa: E402
from .avatar import PALETTE, AvatarBuilder  # noqa: E402
from .errors import (  # noqa: E402
    AvatarError,
    BackendUnavailableError,
    RenderError,
    UnsupportedBackendError,
)
from .models.schemas import AvatarConfig, FontSpec  # noqa: E402
from .services.render_backend import (  # noqa: E402
    BACKENDS,
    DEFAULT_BACKEND,
    RenderBackend,
    available_backends,
    get_backend,
)

logging.getLogger(__name__).setLevel(resolve_log_level(settings.log_level))

__all__ = [
    "AvatarBuilder",
    "AvatarConfig",
    "AvatarError",
    "BACKENDS",
    "BackendUnavailableError",
    "DEFAULT_BACKEND",
    "FontSpec",
    "PALETTE",
    "RenderBackend",
    "RenderError",
    "UnsupportedBackendError",
    "available_backends",
    "get_backend",
]
