from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple

from PIL import Image, ImageDraw, ImageFont

from .vector import VectorDescriptor

logger = logging.getLogger(__name__)

FONT_RATIO = 0.4
TEXT_COLOR = (255, 255, 255)

_UNSET: Any = object()


class FontResolver(Protocol):
    def available(self) -> bool: ...

    def load(self, size: int) -> ImageFont.FreeTypeFont: ...


@dataclass(frozen=True, slots=True)
class FontAsset:
    """TrueType/OpenType font file, read only. A missing file means "unavailable"."""

    path: str

    def available(self) -> bool:
        return os.path.isfile(self.path)

    def load(self, size: int) -> ImageFont.FreeTypeFont:
        return ImageFont.truetype(self.path, size)


def load_engine() -> Optional[Any]:
    # cairosvg raises OSError at import time when libcairo is not installed
    try:
        import cairosvg
    except (ImportError, OSError) as exc:
        logger.info("SVG rasterization engine unavailable: %s", exc)
        return None
    return cairosvg


def text_center(
    image: Image.Image,
    text: str,
    font: ImageFont.FreeTypeFont,
) -> Tuple[int, int]:
    """
    Bottom-left (baseline) position that centers `text` on `image`.

    Horizontal uses the text width, vertical adds the ascent because the
    text grows upwards from the baseline.
    """
    width, height = image.size
    left, top, right, bottom = font.getbbox(text, anchor="ls")

    # the bbox can be negative
    text_width = abs(right)
    text_height = abs(top)

    x = int((width - text_width) / 2)
    y = int((height + text_height) / 2)
    return x, y


def _png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()


class Rasterizer:
    """Vector descriptor to PNG bytes, CairoSVG first and a Pillow drawing as fallback."""

    def __init__(self, font: FontResolver, engine: Any = _UNSET) -> None:
        self.font = font
        self._engine = engine

    @property
    def engine(self) -> Optional[Any]:
        if self._engine is _UNSET:
            self._engine = load_engine()
        return self._engine

    def rasterize(self, descriptor: VectorDescriptor) -> Optional[bytes]:
        data = self.from_svg(descriptor)
        if data is None:
            data = self.draw(descriptor)
        if data is None:
            logger.warning("Could not rasterize avatar %r at %spx", descriptor.glyph, descriptor.size)
        return data

    def from_svg(self, descriptor: VectorDescriptor) -> Optional[bytes]:
        engine = self.engine
        if engine is None:
            return None
        try:
            data = engine.svg2png(
                bytestring=descriptor.encode(),
                output_width=descriptor.size,
                output_height=descriptor.size,
            )
            with Image.open(io.BytesIO(data)) as image:
                image.load()
        except Exception as exc:
            logger.warning("SVG rasterization failed: %s", exc)
            return None
        return data

    def draw(self, descriptor: VectorDescriptor) -> Optional[bytes]:
        if not self.font.available():
            logger.info("Avatar font is missing, skipping raster drawing")
            return None

        size = descriptor.size
        try:
            font = self.font.load(max(1, int(size * FONT_RATIO)))
            image = Image.new("RGB", (size, size), tuple(descriptor.fill))
            x, y = text_center(image, descriptor.glyph, font)
            ImageDraw.Draw(image).text(
                (x, y), descriptor.glyph, fill=TEXT_COLOR, font=font, anchor="ls"
            )
            return _png(image)
        except (OSError, ValueError) as exc:
            logger.warning("Raster drawing failed: %s", exc)
            return None
