import io
from typing import List

import pytest
from PIL import Image, ImageFont

from monogram.helpers.raster import Rasterizer


class BundledFont:
    """Pillow's built-in FreeType font, so tests do not depend on system fonts."""

    def available(self) -> bool:
        return True

    def load(self, size: int) -> ImageFont.FreeTypeFont:
        return ImageFont.load_default(size=size)


class MissingFont:
    def available(self) -> bool:
        return False

    def load(self, size: int) -> ImageFont.FreeTypeFont:
        raise OSError("cannot open resource")


class FakeEngine:
    """Stands in for cairosvg: records calls and returns a flat PNG."""

    def __init__(self, color=(1, 2, 3), fail: bool = False) -> None:
        self.color = color
        self.fail = fail
        self.calls: List[dict] = []

    def svg2png(self, bytestring: bytes, output_width: int, output_height: int) -> bytes:
        self.calls.append({"bytestring": bytestring, "width": output_width, "height": output_height})
        if self.fail:
            raise ValueError("malformed svg")
        buffer = io.BytesIO()
        Image.new("RGB", (output_width, output_height), self.color).save(buffer, "PNG")
        return buffer.getvalue()


def png_bytes(size=(16, 16), color=(10, 20, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, "PNG")
    return buffer.getvalue()


def open_png(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    assert image.format == "PNG"
    return image.convert("RGB")


@pytest.fixture
def drawing_rasterizer() -> Rasterizer:
    return Rasterizer(BundledFont(), engine=None)


@pytest.fixture
def unavailable_rasterizer() -> Rasterizer:
    return Rasterizer(MissingFont(), engine=None)
