"""Pillow render backend, the default and most portable choice."""
from __future__ import annotations

import base64
import io
import logging
from typing import Optional, Union

from PIL import Image, ImageDraw, ImageFont

from ..errors import RenderError
from ..models.schemas import FontSpec
from .base import RenderBackend, SUPPORTED_FORMATS, mime_type

logger = logging.getLogger(__name__)

HORIZONTAL_ANCHORS = {"left": "l", "center": "m", "right": "r"}
VERTICAL_ANCHORS = {"top": "t", "center": "m", "bottom": "b"}


def encode_image(image: Image.Image, fmt: str, quality: Optional[int] = None) -> Union[bytes, str]:
    """Serialize a Pillow image to ``png``, ``jpeg``, ``webp`` or a PNG data URL."""

    if fmt not in SUPPORTED_FORMATS:
        raise RenderError(f"Unsupported output format: {fmt}")

    if fmt == "data-url":
        png = encode_image(image, "png")
        return f"data:{mime_type('png')};base64,{base64.b64encode(png).decode('ascii')}"

    options = {}
    if fmt == "jpeg":
        # JPEG has no alpha channel; transparent corners become white.
        if image.mode in ("RGBA", "LA", "P"):
            flattened = Image.new("RGB", image.size, "white")
            rgba = image.convert("RGBA")
            flattened.paste(rgba, mask=rgba.getchannel("A"))
            image = flattened
        if quality is not None:
            options["quality"] = quality
    elif fmt == "webp" and quality is not None:
        options["quality"] = quality

    buffer = io.BytesIO()
    image.save(buffer, format=fmt.upper(), **options)
    return buffer.getvalue()


class PillowBackend(RenderBackend):
    """Draws avatars on RGBA ``PIL.Image`` canvases."""

    name = "pillow"
    required_modules = ("PIL",)

    def create_canvas(self, width: int, height: int, fill_color: Optional[str] = None) -> Image.Image:
        return Image.new("RGBA", (width, height), fill_color if fill_color is not None else (0, 0, 0, 0))

    def draw_circle(
        self,
        canvas: Image.Image,
        diameter: float,
        center_x: float,
        center_y: float,
        fill_color: str,
    ) -> Image.Image:
        radius = diameter / 2
        ImageDraw.Draw(canvas).ellipse(
            [center_x - radius, center_y - radius, center_x + radius, center_y + radius],
            fill=fill_color,
        )
        return canvas

    def draw_text(
        self, canvas: Image.Image, text: Optional[str], x: float, y: float, font: FontSpec
    ) -> Image.Image:
        if not text:
            return canvas
        try:
            typeface = ImageFont.truetype(font.file, font.size)
        except OSError as exc:
            raise RenderError(f"Unable to load font {font.file}: {exc}") from exc

        anchor = HORIZONTAL_ANCHORS.get(font.align, "m") + VERTICAL_ANCHORS.get(font.valign, "m")
        ImageDraw.Draw(canvas).text((x, y), text, fill=font.color, font=typeface, anchor=anchor)
        return canvas

    def encode(self, canvas: Image.Image, fmt: str, quality: Optional[int] = None) -> Union[bytes, str]:
        logger.debug("Encoding %sx%s canvas as %s", canvas.width, canvas.height, fmt)
        return encode_image(canvas, fmt, quality)
