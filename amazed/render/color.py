"""Color helpers: RGB values, distance ramps and palette handling.

Interpolation wraps each channel modulo 256 instead of clamping, so a ramp
from red 250 to red 10 ends on 10 rather than going negative.
"""

from __future__ import annotations

import math
import random
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

_PREFIXED_HEX_PATTERN = re.compile(r"^(?:0x|#)([0-9a-fA-F]{1,6})$", re.IGNORECASE)
_BARE_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{1,6}$")
_DECIMAL_PATTERN = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class RGBColor:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        # Out-of-range channels are masked, never propagated.
        object.__setattr__(self, "red", int(self.red) & 0xFF)
        object.__setattr__(self, "green", int(self.green) & 0xFF)
        object.__setattr__(self, "blue", int(self.blue) & 0xFF)

    @classmethod
    def from_int(cls, value: int) -> "RGBColor":
        """Build a color from ``0xRRGGBB``; any alpha byte is ignored."""
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def unpack(cls, pixel: int) -> "RGBColor":
        """Inverse of :meth:`pack`."""
        return cls((pixel >> 24) & 0xFF, (pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF)

    def pack(self) -> int:
        """32-bit pixel value ``red<<24 | green<<16 | blue<<8``; low byte unused."""
        return (self.red << 24) | (self.green << 16) | (self.blue << 8)

    def to_int(self) -> int:
        return (self.red << 16) | (self.green << 8) | self.blue

    def to_hex(self) -> str:
        return f"#{self.to_int():06x}"

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)


BLACK = RGBColor(0, 0, 0)
WHITE = RGBColor(255, 255, 255)


def parse_color(text: str) -> RGBColor:
    """Parse ``0xRRGGBB``, ``#RRGGBB``, bare hex such as ``ff8800`` or a decimal value.

    A bare string of digits is decimal, so ``255`` is blue.
    """
    text = text.strip()
    match = _PREFIXED_HEX_PATTERN.match(text)
    if match:
        return RGBColor.from_int(int(match.group(1), 16))
    if _DECIMAL_PATTERN.match(text):
        value = int(text, 10)
        if value > 0xFFFFFF:
            raise ValueError(f"Invalid color '{text}': decimal value above 16777215")
        return RGBColor.from_int(value)
    if _BARE_HEX_PATTERN.match(text):
        return RGBColor.from_int(int(text, 16))
    raise ValueError(f"Invalid color '{text}': expected hex such as 0x1f8a3c or a decimal value")


def random_color(rng: random.Random) -> RGBColor:
    return RGBColor.from_int(rng.randint(0, 0xFFFFFF))


def distance_coefficient(distance: int, max_distance: int) -> float:
    if max_distance == 0:
        return 0.0
    return distance / max_distance


def ramp(coeff: float, start: RGBColor, end: RGBColor) -> RGBColor:
    """Linear interpolation between two colors with modulo-256 wrap."""

    def channel(a: int, b: int) -> int:
        return (a + math.floor(coeff * (b - a))) % 256

    return RGBColor(
        channel(start.red, end.red),
        channel(start.green, end.green),
        channel(start.blue, end.blue),
    )


def dual_ramp(
    distance: int,
    max_distance: int,
    colors: Sequence[RGBColor],
    threshold: int,
) -> RGBColor:
    """Two gradients: ``colors[0]->colors[1]`` below ``threshold``, ``colors[2]->colors[3]`` from it on."""
    if len(colors) < 4:
        raise ValueError("dual_ramp needs four colors")
    if distance < threshold:
        return ramp(distance / threshold, colors[0], colors[1])
    span = max_distance - threshold
    coeff = (distance - threshold) / span if span else 0.0
    return ramp(coeff, colors[2], colors[3])


def expand_palette(colors: Sequence[RGBColor]) -> List[RGBColor]:
    """Normalize 1-4 user colors into the palette consumed by the rasterizer.

    One color ramps to white; three colors share the middle one between
    both gradients.
    """
    palette = list(colors)
    if not 1 <= len(palette) <= 4:
        raise ValueError("Must specify between 1 and 4 colors")
    if len(palette) == 1:
        palette.append(WHITE)
    elif len(palette) == 3:
        palette = [palette[0], palette[1], palette[1], palette[2]]
    return palette


class ColorRamp:
    """Map a cell's distance to a color for one labeled maze.

    Two-color palettes use a single ramp; four-color palettes switch to the
    dual ramp at ``threshold`` (half the maximum distance by default).
    """

    def __init__(
        self,
        colors: Sequence[RGBColor],
        max_distance: int,
        *,
        threshold: Optional[int] = None,
    ) -> None:
        self.palette = expand_palette(colors)
        self.max_distance = int(max_distance)
        self.threshold = int(threshold) if threshold is not None else self.max_distance // 2

    @property
    def is_dual(self) -> bool:
        return len(self.palette) == 4

    def __call__(self, distance: int) -> RGBColor:
        if self.is_dual:
            return dual_ramp(distance, self.max_distance, self.palette, self.threshold)
        return ramp(distance_coefficient(distance, self.max_distance), self.palette[0], self.palette[1])


__all__ = [
    "BLACK",
    "ColorRamp",
    "RGBColor",
    "WHITE",
    "distance_coefficient",
    "dual_ramp",
    "expand_palette",
    "parse_color",
    "random_color",
    "ramp",
]
