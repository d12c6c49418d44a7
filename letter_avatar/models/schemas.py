"""Pydantic models describing avatar configuration and font settings."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field


class AvatarConfig(BaseModel):
    """Mutable configuration accumulated by :class:`AvatarBuilder`.

    Assignments are not re-validated; the builder stores what the caller gave
    it and leaves color or font problems to the render backend.
    """

    width: int = Field(default=100, description="Canvas width in pixels")
    height: int = Field(default=100, description="Canvas height in pixels")
    background_color: Optional[str] = Field(
        default=None, description="Pinned background color; random palette entry when unset"
    )
    font_color: str = Field(default="#F7F7F7", description="Text color")
    font_size: int = Field(default=50, description="Text size in pixels")
    font_family: str = Field(..., description="Path to the font file used for the text")
    text_length: int = Field(default=2, description="Maximum number of characters drawn")
    name: Optional[str] = Field(default=None, description="Name turned into initials")
    text: Optional[str] = Field(default=None, description="Literal text, used when no name is set")
    rounded: bool = Field(default=False, description="Circular avatar instead of a square one")
    render_backend: str = Field(..., description="Name of the selected render backend")


@dataclass(frozen=True)
class FontSpec:
    """Font settings handed to ``RenderBackend.draw_text``."""

    file: str
    size: int
    color: str
    align: str = "center"
    valign: str = "center"
