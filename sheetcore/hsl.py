"""Conversions between RGB and hue, saturation and lightness colours."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

_OPAQUE = 0xFFFF


@dataclass(frozen=True)
class HSL:
    """A colour as hue, saturation and lightness, each in the range 0 to 1."""

    h: float
    s: float
    l: float  # noqa: E741

    def rgba(self) -> tuple[int, int, int, int]:
        """Return 16-bit alpha-premultiplied red, green, blue and alpha."""
        r, g, b = hsl_to_rgb(self.h, self.s, self.l)
        return r * 0x101, g * 0x101, b * 0x101, _OPAQUE


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert 8-bit RGB components to an ``(h, s, l)`` triple."""
    f_r = r / 255
    f_g = g / 255
    f_b = b / 255
    high = max(f_r, f_g, f_b)
    low = min(f_r, f_g, f_b)
    lightness = (high + low) / 2
    if high == low:
        return 0.0, 0.0, lightness

    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2.0 - high - low)
    else:
        saturation = delta / (high + low)

    if high == f_r:
        hue = (f_g - f_b) / delta
        if f_g < f_b:
            hue += 6
    elif high == f_g:
        hue = (f_b - f_r) / delta + 2
    else:
        hue = (f_r - f_g) / delta + 4
    return hue / 6, saturation, lightness


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1.0 / 6:
        return p + (q - p) * 6 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3:
        return p + (q - p) * (2.0 / 3 - t) * 6
    return p


def _to_byte(value: float) -> int:
    return int(value * 255 + 0.5) & 0xFF


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:  # noqa: E741
    """Convert an HSL triple to 8-bit RGB components."""
    if s == 0:
        f_r = f_g = f_b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - s * l
        p = 2 * l - q
        f_r = _hue_to_rgb(p, q, h + 1.0 / 3)
        f_g = _hue_to_rgb(p, q, h)
        f_b = _hue_to_rgb(p, q, h - 1.0 / 3)
    return _to_byte(f_r), _to_byte(f_g), _to_byte(f_b)


def hsl_model(color: Any) -> HSL:
    """Convert a colour to :class:`HSL`.

    ``color`` is an :class:`HSL`, an object with an ``rgba()`` method that
    returns 16-bit components, or a sequence of 16-bit ``(r, g, b[, a])``.
    """
    if isinstance(color, HSL):
        return color
    rgba = getattr(color, "rgba", None)
    if callable(rgba):
        components: Sequence[int] = rgba()
    elif isinstance(color, Sequence) and len(color) in (3, 4):
        components = color
    else:
        raise TypeError(f"cannot convert {color!r} to HSL")
    r, g, b = (int(c) >> 8 & 0xFF for c in components[:3])
    return HSL(*rgb_to_hsl(r, g, b))