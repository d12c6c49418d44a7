"""Render backend contract shared by every drawing library adapter."""
from __future__ import annotations

import importlib.util
from typing import Any, Optional, Tuple, Union

from ..models.schemas import FontSpec


SUPPORTED_FORMATS = ("png", "jpeg", "webp", "data-url")

MIME_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
}


def mime_type(fmt: str) -> str:
    """Return the MIME type for an encoded image format."""

    return MIME_TYPES[fmt]


class RenderBackend:
    """Drawing primitives the avatar builder relies on.

    Canvas handles are backend specific but always expose ``width``,
    ``height`` and ``size``. Every primitive returns the (possibly new)
    canvas handle so calls can be chained.
    """

    name: str = ""
    required_modules: Tuple[str, ...] = ()

    @classmethod
    def is_available(cls) -> bool:
        """Report whether the libraries this backend needs can be imported."""

        return all(importlib.util.find_spec(module) is not None for module in cls.required_modules)

    def create_canvas(self, width: int, height: int, fill_color: Optional[str] = None) -> Any:
        raise NotImplementedError

    def draw_circle(
        self, canvas: Any, diameter: float, center_x: float, center_y: float, fill_color: str
    ) -> Any:
        raise NotImplementedError

    def draw_text(self, canvas: Any, text: Optional[str], x: float, y: float, font: FontSpec) -> Any:
        raise NotImplementedError

    def encode(self, canvas: Any, fmt: str, quality: Optional[int] = None) -> Union[bytes, str]:
        raise NotImplementedError
