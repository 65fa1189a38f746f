from dataclasses import dataclass
from xml.sax.saxutils import escape

from .colors import Color

# Viewbox is fixed at 500x500, {size} only scales the output.
# A 0.4 letter-to-height ratio gives 200px caps; with a 0.715 cap-height
# font that is 200 / 0.715 = 280px. Text starts on the baseline, so y is
# shifted by half the caps height: 500 / 2 + 100 = 350.
SVG_TEMPLATE = """<?xml version="1.0" encoding="utf-8" standalone="no"?>
<svg width="{size}" height="{size}" version="1.1" viewBox="0 0 500 500" xmlns="http://www.w3.org/2000/svg">
  <rect stroke="none" width="100%" height="100%" fill="#cccccc"></rect>
  <path stroke="none" fill="#efefef"
    d="M341.942,356.432 c -20.705,-12.637 -28.134,-11.364 -28.134,-36.612 0,-8.837 0,-25.256 0,-40.403
       11.364,-12.62 15.497,-11.049 25.107,-60.597 19.433,0 18.174,-25.248 27.34,-47.644 7.471,-18.238
       1.213,-25.632 -5.08,-28.654 C 366.319,76.06 366.319,30.286 290.883,16.086
       263.539,-7.351 222.278,0.606 202.725,4.517
       c -19.536,3.911 -37.159,0 -37.159,0 l 3.356,31.49 c -28.608,34.332 -14.302,80.106 -18.908,106.916
       -6.002,3.27 -11.416,10.809 -4.269,28.253 9.165,22.396 7.906,47.644 27.34,47.644 9.61,49.548
       13.742,47.977 25.107,60.597 0,15.147 0,31.566 0,40.403 0,25.248 -8.581,25.683 -28.133,36.612
       C 122.919,382.781 61.49,398.09 50.484,480.442 48.468,495.504 134.952,511.948 256,512
       377.048,511.948 463.528,495.504 461.517,480.442 450.511,398.09 388.519,384.847 341.942,356.432 Z"></path>
  <text x="50%" y="350" style="font-weight:normal;font-size:280px;font-family:'Noto Sans';text-anchor:middle;fill:#{fill}">{letter}</text>
</svg>"""


@dataclass(frozen=True, slots=True)
class VectorDescriptor:
    size: int
    fill: Color
    glyph: str
    svg: str

    def encode(self) -> bytes:
        return self.svg.encode("utf-8")


def render_vector(size: int, fill: Color, glyph: str) -> VectorDescriptor:
    """
    Fill the avatar template.

    {size} = output width/height in pixels
    {fill} = 6 hex digits, lowercase
    {letter} = glyph to display
    """
    replacements = {
        "{size}": str(size),
        "{fill}": fill.hex,
        "{letter}": escape(glyph),
    }
    svg = SVG_TEMPLATE
    for placeholder, value in replacements.items():
        svg = svg.replace(placeholder, value)
    return VectorDescriptor(size=size, fill=fill, glyph=glyph, svg=svg)
