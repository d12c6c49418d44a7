from __future__ import annotations

import base64
import io

import pytest
from PIL import Image

from letter_avatar import AvatarBuilder, RenderError
from letter_avatar.config import DEFAULT_FONT_PATH
from letter_avatar.models.schemas import FontSpec
from letter_avatar.services.pillow_backend import PillowBackend, encode_image


def _decode(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def test_png_round_trip_keeps_dimensions():
    image = _decode(AvatarBuilder().set_dimensions(120, 80).set_name("John Doe").encode_png())
    assert image.format == "PNG"
    assert image.size == (120, 80)


def test_jpeg_encoding():
    image = _decode(AvatarBuilder().set_size(64).set_text("Hi").encode_jpeg(quality=80))
    assert image.format == "JPEG"
    assert image.size == (64, 64)


def test_jpeg_flattens_transparent_corners_to_white():
    data = AvatarBuilder().set_size(64).set_background_color("#112233").set_rounded().encode_jpeg()
    corner = _decode(data).convert("RGB").getpixel((0, 0))
    assert all(channel > 240 for channel in corner)


def test_webp_encoding():
    image = _decode(AvatarBuilder().set_size(48).set_name("Grace Hopper").encode_webp(quality=90))
    assert image.format == "WEBP"
    assert image.size == (48, 48)


def test_base64_is_png_data_url():
    url = AvatarBuilder().set_size(32).set_name("John Doe").encode_base64()
    prefix = "data:image/png;base64,"
    assert url.startswith(prefix)
    image = _decode(base64.b64decode(url[len(prefix):]))
    assert image.size == (32, 32)


def test_text_is_drawn_in_font_color():
    canvas = (
        AvatarBuilder()
        .set_background_color("#000000")
        .set_font_color("#FFFFFF")
        .set_font_size(80)
        .set_text("W")
        .render_canvas()
    )
    colors = {color for _, color in canvas.getcolors(maxcolors=100_000)}
    assert any(min(color[:3]) > 200 for color in colors)


def test_empty_text_draws_nothing():
    backend = PillowBackend()
    canvas = backend.create_canvas(20, 20, "#112233")
    font = FontSpec(file=str(DEFAULT_FONT_PATH), size=10, color="#FFFFFF")
    backend.draw_text(canvas, None, 10, 10, font)
    assert canvas.getcolors() == [(400, (0x11, 0x22, 0x33, 255))]


def test_unknown_format_rejected():
    with pytest.raises(RenderError):
        encode_image(Image.new("RGBA", (4, 4)), "gif")


def test_backend_is_available():
    assert PillowBackend.is_available()


def test_pillow_is_the_default_available_backend():
    from letter_avatar import DEFAULT_BACKEND, available_backends

    assert DEFAULT_BACKEND == "pillow"
    assert "pillow" in available_backends()
