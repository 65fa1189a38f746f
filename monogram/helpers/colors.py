from functools import lru_cache
from typing import List, NamedTuple, Tuple


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return "%02x%02x%02x" % (self.r, self.g, self.b)


RED = Color(182, 70, 157)
YELLOW = Color(221, 203, 85)
BLUE = Color(0, 130, 201)

# 3 anchors * 6 steps = 18 colors
STEPS = 6

Palette = Tuple[Color, ...]


def _step(steps: int, start: Color, end: Color) -> Tuple[float, float, float]:
    return (
        (end.r - start.r) / steps,
        (end.g - start.g) / steps,
        (end.b - start.b) / steps,
    )


def mix_palette(steps: int, color_a: Color, color_b: Color) -> List[Color]:
    """Linear ramp from color_a towards color_b, excluding color_b itself."""
    palette = [color_a]
    dr, dg, db = _step(steps, color_a, color_b)
    for i in range(1, steps):
        palette.append(Color(
            int(color_a.r + dr * i),
            int(color_a.g + dg * i),
            int(color_a.b + db * i),
        ))
    return palette


@lru_cache(maxsize=None)
def build_palette(
    steps: int = STEPS,
    anchors: Tuple[Color, Color, Color] = (RED, YELLOW, BLUE),
) -> Palette:
    red, yellow, blue = anchors
    return tuple(
        mix_palette(steps, red, yellow)
        + mix_palette(steps, yellow, blue)
        + mix_palette(steps, blue, red)
    )
