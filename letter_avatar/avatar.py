"""Fluent builder that turns a name or short text into an avatar image."""
from __future__ import annotations

import logging
import math
import random
import re
from typing import Any, Callable, Optional, Union

from . import config
from .errors import RenderError
from .models.schemas import AvatarConfig, FontSpec
from .services.base import RenderBackend
from .services.render_backend import get_backend

logger = logging.getLogger(__name__)


PALETTE = (
    "#545C96", "#5DA85F", "#62BDB8",
    "#BA9D4C", "#AB5454", "#AD61AC",
    "#7761B0", "#D188AF", "#658DC2",
    "#5EAD83", "#6EAD68", "#D6AD67",
)

_UNIT_SUFFIXES = ("px", "em", "rem")
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _coerce_count(value: Any) -> int:
    """Turn ``150``, ``150.7``, ``"150px"``, ``"1e2px"`` or ``"10rem"`` into an int.

    Strings lose their unit suffix and keep only their leading numeric part,
    truncated toward zero. Anything unparseable or non-finite becomes 0, and
    negative values are clamped to 0, so this never raises.
    """

    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        number = value
    else:
        cleaned = str(value)
        for suffix in _UNIT_SUFFIXES:
            cleaned = cleaned.replace(suffix, "")
        match = _LEADING_NUMBER.match(cleaned)
        number = float(match.group(1)) if match else 0.0
    if not math.isfinite(number):
        return 0
    return max(int(number), 0)


class AvatarBuilder:
    """Accumulates avatar settings through chained setters and renders on demand.

    Example::

        png = AvatarBuilder().set_name("John Doe").set_size(128).set_rounded().encode_png()

    A builder is meant to serve one request at a time; it is not safe to mutate
    from several threads at once.
    """

    def __init__(self, backend: Optional[str] = None) -> None:
        settings = config.get_settings()
        self._backend: Optional[RenderBackend] = None
        self._config = AvatarConfig(
            font_family=settings.font_path,
            render_backend=backend or settings.render_backend,
        )
        self.set_backend(self._config.render_backend)

    # -- configuration -------------------------------------------------

    def set_backend(self, name: str) -> AvatarBuilder:
        """Select the render backend, failing fast if it cannot be used."""

        self._backend = get_backend(name)
        self._config.render_backend = name
        logger.info("Using %s render backend", name)
        return self

    def set_height(self, value: Union[int, float, str]) -> AvatarBuilder:
        self._config.height = _coerce_count(value)
        return self

    def set_width(self, value: Union[int, float, str]) -> AvatarBuilder:
        self._config.width = _coerce_count(value)
        return self

    def set_dimensions(
        self, width: Union[int, float, str], height: Union[int, float, str]
    ) -> AvatarBuilder:
        return self.set_width(width).set_height(height)

    def set_size(self, size: Union[int, float, str]) -> AvatarBuilder:
        """Square shorthand for :meth:`set_dimensions`."""

        return self.set_dimensions(size, size)

    def set_background_color(self, color: str) -> AvatarBuilder:
        self._config.background_color = color
        return self

    def set_font_color(self, color: str) -> AvatarBuilder:
        self._config.font_color = color
        return self

    def set_font_size(self, size: int) -> AvatarBuilder:
        self._config.font_size = size
        return self

    def set_font(self, path: str) -> AvatarBuilder:
        self._config.font_family = path
        return self

    def set_name(self, name: str) -> AvatarBuilder:
        """Show the initials of ``name``; takes precedence over :meth:`set_text`."""

        self._config.name = name
        return self

    def set_text(self, text: str) -> AvatarBuilder:
        self._config.text = text
        return self

    def set_text_length(self, length: Union[int, float, str]) -> AvatarBuilder:
        self._config.text_length = _coerce_count(length)
        return self

    def set_rounded(self) -> AvatarBuilder:
        self._config.rounded = True
        return self

    # -- accessors -----------------------------------------------------

    def get_render_backend(self) -> RenderBackend:
        return self._backend

    def get_config(self) -> AvatarConfig:
        return self._config

    def compute_display_text(self) -> Optional[str]:
        """Return the characters drawn on the avatar, or None when there are none."""

        cfg = self._config
        if cfg.name is not None:
            initials = "".join(part[:1] for part in cfg.name.split(" "))
            return initials[: cfg.text_length]
        if cfg.text is not None:
            return cfg.text[: cfg.text_length]
        return None

    # -- rendering -----------------------------------------------------

    def render_canvas(self) -> Any:
        """Draw the avatar and return the backend's canvas handle."""

        cfg = self._config
        background = cfg.background_color if cfg.background_color is not None else random.choice(PALETTE)
        text = self.compute_display_text()
        logger.debug(
            "Rendering %sx%s avatar (rounded=%s, background=%s, text=%r)",
            cfg.width,
            cfg.height,
            cfg.rounded,
            background,
            text,
        )

        def draw() -> Any:
            if cfg.rounded:
                canvas = self._backend.create_canvas(cfg.width, cfg.height, None)
                canvas = self._backend.draw_circle(
                    canvas, cfg.width - 2, cfg.width / 2, cfg.height / 2, background
                )
            else:
                canvas = self._backend.create_canvas(cfg.width, cfg.height, background)
            font = FontSpec(file=cfg.font_family, size=cfg.font_size, color=cfg.font_color)
            return self._backend.draw_text(canvas, text, cfg.width / 2, cfg.height / 2, font)

        return self._call_backend(draw)

    def encode_webp(self, quality: int = 100) -> bytes:
        return self._encode("webp", quality)

    def encode_png(self) -> bytes:
        return self._encode("png")

    def encode_jpeg(self, quality: int = 100) -> bytes:
        return self._encode("jpeg", quality)

    def encode_base64(self) -> str:
        """Render and return a ``data:image/png;base64,...`` URL."""

        return self._encode("data-url")

    def _encode(self, fmt: str, quality: Optional[int] = None) -> Union[bytes, str]:
        canvas = self.render_canvas()
        return self._call_backend(lambda: self._backend.encode(canvas, fmt, quality))

    def _call_backend(self, operation: Callable[[], Any]) -> Any:
        try:
            return operation()
        except RenderError:
            raise
        except Exception as exc:
            logger.error("%s backend failed: %s", self._config.render_backend, exc)
            raise RenderError(f"{self._config.render_backend} backend failed: {exc}") from exc
