"""SVG render backend rasterized through cairosvg."""
from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union
from xml.sax.saxutils import escape, quoteattr

from PIL import Image

from ..errors import RenderError
from ..models.schemas import FontSpec
from .base import RenderBackend, SUPPORTED_FORMATS
from .pillow_backend import PillowBackend, encode_image

logger = logging.getLogger(__name__)

TEXT_ANCHORS = {"left": "start", "center": "middle", "right": "end"}
BASELINES = {"top": "text-before-edge", "center": "central", "bottom": "text-after-edge"}


@dataclass(frozen=True)
class SvgLabel:
    """Text placed on an :class:`SvgCanvas`, drawn from its own font file."""

    text: str
    x: float
    y: float
    font: FontSpec


@dataclass
class SvgCanvas:
    """SVG document under construction.

    Shapes are kept as SVG elements. Text is kept as labels so that every
    consumer renders it from the configured font file: the markup embeds the
    file as an ``@font-face`` data URL, and rasterizing draws the labels with
    the file's own glyphs.
    """

    width: int
    height: int
    fill_color: Optional[str] = None
    elements: List[str] = field(default_factory=list)
    labels: List[SvgLabel] = field(default_factory=list)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def to_svg(self, include_text: bool = True) -> str:
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}">'
        ]
        if include_text and self.labels:
            parts.append(self._font_faces())
        if self.fill_color is not None:
            parts.append(f'<rect width="{self.width}" height="{self.height}" fill={quoteattr(self.fill_color)}/>')
        parts.extend(self.elements)
        if include_text:
            parts.extend(self._text_element(label) for label in self.labels)
        parts.append("</svg>")
        return "".join(parts)

    def _font_families(self) -> List[str]:
        return list(dict.fromkeys(label.font.file for label in self.labels))

    def _family_name(self, font_file: str) -> str:
        return f"avatar-font-{self._font_families().index(font_file)}"

    def _font_faces(self) -> str:
        faces = []
        for font_file in self._font_families():
            encoded = base64.b64encode(Path(font_file).read_bytes()).decode("ascii")
            faces.append(
                f'@font-face {{ font-family: "{self._family_name(font_file)}"; '
                f'src: url(data:font/ttf;base64,{encoded}); }}'
            )
        return f"<style>{' '.join(faces)}</style>"

    def _text_element(self, label: SvgLabel) -> str:
        font = label.font
        return (
            f'<text x="{label.x}" y="{label.y}" font-family={quoteattr(self._family_name(font.file))} '
            f'font-size="{font.size}" fill={quoteattr(font.color)} '
            f'text-anchor="{TEXT_ANCHORS.get(font.align, "middle")}" '
            f'dominant-baseline="{BASELINES.get(font.valign, "central")}">{escape(label.text)}</text>'
        )


class SvgBackend(RenderBackend):
    """Composes avatars as SVG markup and rasterizes them with cairosvg.

    cairosvg only sees system fonts, so shapes are rasterized by cairosvg and
    text is drawn on top from the configured font file with Pillow.
    """

    name = "svg"
    required_modules = ("cairosvg", "PIL")

    def __init__(self) -> None:
        self._text_renderer = PillowBackend()

    def create_canvas(self, width: int, height: int, fill_color: Optional[str] = None) -> SvgCanvas:
        return SvgCanvas(width=width, height=height, fill_color=fill_color)

    def draw_circle(
        self,
        canvas: SvgCanvas,
        diameter: float,
        center_x: float,
        center_y: float,
        fill_color: str,
    ) -> SvgCanvas:
        canvas.elements.append(
            f'<circle cx="{center_x}" cy="{center_y}" r="{diameter / 2}" fill={quoteattr(fill_color)}/>'
        )
        return canvas

    def draw_text(
        self, canvas: SvgCanvas, text: Optional[str], x: float, y: float, font: FontSpec
    ) -> SvgCanvas:
        if not text:
            return canvas
        if not Path(font.file).is_file():
            raise RenderError(f"Unable to load font {font.file}: file not found")

        canvas.labels.append(SvgLabel(text=text, x=x, y=y, font=font))
        return canvas

    def draw_labels(self, canvas: SvgCanvas, image: Image.Image) -> Image.Image:
        """Draw the canvas labels onto a rasterized image using their font files."""

        for label in canvas.labels:
            image = self._text_renderer.draw_text(image, label.text, label.x, label.y, label.font)
        return image

    def encode(self, canvas: SvgCanvas, fmt: str, quality: Optional[int] = None) -> Union[bytes, str]:
        if fmt not in SUPPORTED_FORMATS:
            raise RenderError(f"Unsupported output format: {fmt}")

        import cairosvg

        logger.debug("Rasterizing %sx%s SVG canvas as %s", canvas.width, canvas.height, fmt)
        png = cairosvg.svg2png(
            bytestring=canvas.to_svg(include_text=False).encode("utf-8"),
            output_width=canvas.width,
            output_height=canvas.height,
        )
        with Image.open(io.BytesIO(png)) as shapes:
            image = shapes.convert("RGBA")
        return encode_image(self.draw_labels(canvas, image), fmt, quality)
