"""Backend registry: name lookup and availability checks."""
from __future__ import annotations

import logging
from typing import Dict, List, Type

from ..errors import BackendUnavailableError, UnsupportedBackendError
from .base import RenderBackend
from .pillow_backend import PillowBackend
from .svg_backend import SvgBackend

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = PillowBackend.name

BACKENDS: Dict[str, Type[RenderBackend]] = {
    PillowBackend.name: PillowBackend,
    SvgBackend.name: SvgBackend,
}


def available_backends() -> List[str]:
    """Names of the registered backends whose libraries are installed."""

    return [name for name, backend_cls in BACKENDS.items() if backend_cls.is_available()]


def get_backend(name: str) -> RenderBackend:
    """Instantiate the backend registered under ``name``.

    Raises:
        UnsupportedBackendError: ``name`` is not registered.
        BackendUnavailableError: the backend's libraries are not installed.
    """

    backend_cls = BACKENDS.get(name)
    if backend_cls is None:
        supported = ", ".join(sorted(BACKENDS))
        raise UnsupportedBackendError(f"Unsupported render backend {name!r}; supported: {supported}")
    if not backend_cls.is_available():
        raise BackendUnavailableError(
            f"Render backend {name!r} selected, but {', '.join(backend_cls.required_modules)} "
            "is not installed"
        )
    logger.debug("Created %s render backend", name)
    return backend_cls()
