"""Exceptions raised by the avatar builder and its render backends."""
from __future__ import annotations


class AvatarError(Exception):
    """Base class for every avatar failure."""


class UnsupportedBackendError(AvatarError):
    """The requested backend name is not one of the registered backends."""


class BackendUnavailableError(AvatarError):
    """The backend is known, but its runtime support is not installed."""


class RenderError(AvatarError):
    """Drawing or encoding failed inside the render backend."""
