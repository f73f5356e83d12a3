"""
Immutable color value types.

Each type validates its fields once, at construction. Conversion and
difference functions accept any instance as valid and never re-check it.
"""

import math
import numbers
from dataclasses import dataclass, astuple
from typing import Tuple

from .exceptions import RangeError


def _clamp(value, minimum, maximum):
    """Constrain a value between a minimum and maximum (inclusive)."""
    return max(min(value, maximum), minimum)


def _lerp(a: float, b: float, t: float) -> float:
    return (1 - t) * a + t * b


def _check_range(field: str, value, minimum, maximum):
    # Written as a negated chain so NaN fails too.
    if not (minimum <= value <= maximum):
        raise RangeError(field, minimum, maximum, value)


def _wrap_hue(hue: float) -> float:
    hue %= 360
    # a tiny negative hue rounds up to a full turn
    return 0.0 if hue >= 360 else hue


@dataclass(frozen=True)
class RgbColor:
    """A color in the sRGB color space, one integer per channel in [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for field, value in (("Red", self.r), ("Green", self.g), ("Blue", self.b)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise TypeError(f"{field} must be an integer, got {type(value).__name__}")
            _check_range(field, value, 0, 255)

        # numpy integers are accepted but stored as plain ints
        object.__setattr__(self, "r", int(self.r))
        object.__setattr__(self, "g", int(self.g))
        object.__setattr__(self, "b", int(self.b))

    def as_tuple(self) -> Tuple[int, int, int]:
        return astuple(self)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @staticmethod
    def lerp(a: "RgbColor", b: "RgbColor", t: float) -> "RgbColor":
        """
        Determine the point between two colors using linear interpolation.

        Channels are blended independently, which is not perceptually uniform;
        interpolate an HslColor or HsvColor when that matters. ``t`` may be
        extrapolated beyond 0 and 1, only the resulting channels are clamped.
        Channel values are truncated towards zero before clamping.
        """
        return RgbColor(
            _clamp(int(_lerp(a.r, b.r, t)), 0, 255),
            _clamp(int(_lerp(a.g, b.g, t)), 0, 255),
            _clamp(int(_lerp(a.b, b.b, t)), 0, 255),
        )


@dataclass(frozen=True)
class HslColor:
    """
    Cylindrical (hue, saturation, lightness) representation of an sRGB color.

    Hue is in degrees [0, 360], with the red, green and blue primaries at 0,
    120 and 240. Saturation and lightness are in [0, 1].
    """
    h: float
    s: float
    l: float

    def __post_init__(self):
        _check_range("Hue", self.h, 0, 360)
        _check_range("Saturation", self.s, 0, 1)
        _check_range("Lightness", self.l, 0, 1)
        object.__setattr__(self, "h", float(self.h))
        object.__setattr__(self, "s", float(self.s))
        object.__setattr__(self, "l", float(self.l))

    def as_tuple(self) -> Tuple[float, float, float]:
        return astuple(self)

    @staticmethod
    def lerp(a: "HslColor", b: "HslColor", t: float) -> "HslColor":
        """
        Linear interpolation between two colors.

        Hue is blended linearly and then reduced modulo 360, so the result does
        not follow the shorter arc around the hue circle. Saturation and
        lightness are clamped into [0, 1].
        """
        return HslColor(
            _wrap_hue(_lerp(a.h, b.h, t)),
            _clamp(_lerp(a.s, b.s, t), 0.0, 1.0),
            _clamp(_lerp(a.l, b.l, t), 0.0, 1.0),
        )


@dataclass(frozen=True)
class HsvColor:
    """Cylindrical (hue, saturation, value) representation of an sRGB color."""
    h: float
    s: float
    v: float

    def __post_init__(self):
        _check_range("Hue", self.h, 0, 360)
        _check_range("Saturation", self.s, 0, 1)
        _check_range("Value", self.v, 0, 1)
        object.__setattr__(self, "h", float(self.h))
        object.__setattr__(self, "s", float(self.s))
        object.__setattr__(self, "v", float(self.v))

    def as_tuple(self) -> Tuple[float, float, float]:
        return astuple(self)

    @staticmethod
    def lerp(a: "HsvColor", b: "HsvColor", t: float) -> "HsvColor":
        """Linear interpolation between two colors, see ``HslColor.lerp``."""
        return HsvColor(
            _wrap_hue(_lerp(a.h, b.h, t)),
            _clamp(_lerp(a.s, b.s, t), 0.0, 1.0),
            _clamp(_lerp(a.v, b.v, t), 0.0, 1.0),
        )


@dataclass(frozen=True)
class CieXyzColor:
    """
    A color in the CIEXYZ color space, on the 0-100 scale (Y = 100 for white).

    Components are not range checked: their magnitude depends on the
    illuminant the color was measured under.
    """
    x: float
    y: float
    z: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    def as_tuple(self) -> Tuple[float, float, float]:
        return astuple(self)


@dataclass(frozen=True)
class CieLabColor:
    """
    A color in the CIELAB color space.

    ``l`` is lightness from black (0) to white (100). ``a`` runs from green
    (negative) to red (positive) and ``b`` from blue (negative) to yellow
    (positive); both are unbounded.
    """
    l: float
    a: float
    b: float

    def __post_init__(self):
        _check_range("Lightness", self.l, 0, 100)
        for field, value in (("a", self.a), ("b", self.b)):
            if not math.isfinite(value):
                raise RangeError(field, -math.inf, math.inf, value,
                                 message=f"{field} must be a finite number, got {value}")
        object.__setattr__(self, "l", float(self.l))
        object.__setattr__(self, "a", float(self.a))
        object.__setattr__(self, "b", float(self.b))

    def as_tuple(self) -> Tuple[float, float, float]:
        return astuple(self)

    def chroma(self) -> float:
        """Chroma of the color in cylindrical (CIELCh) form."""
        return math.sqrt(self.a ** 2 + self.b ** 2)

    def hue(self) -> float:
        """
        Hue angle of the color in cylindrical (CIELCh) form, in [0, 360).

        Not comparable with the hue of an HslColor or HsvColor.
        """
        hue = math.degrees(math.atan2(self.b, self.a))
        if hue < 0:
            hue += 360
            # tiny negative angles round up to a full turn
            if hue >= 360:
                hue = 0.0
        return hue
