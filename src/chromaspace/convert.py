"""
Conversions between RGB, HSL, HSV, CIEXYZ and CIELAB colors.

All functions are pure. RGB is sRGB (IEC 61966-2-1) and CIEXYZ uses the
0-100 scale, so that sRGB white maps to roughly (95.05, 100.00, 108.91).
"""

from typing import Optional

from .colors import RgbColor, HslColor, HsvColor, CieXyzColor, CieLabColor
from .illuminants import D65

# Linear sRGB -> CIEXYZ (D65), rows give X, Y, Z.
SRGB_TO_XYZ = (
    (0.41239079926595934, 0.357584339383878, 0.1804807884018343),
    (0.21263900587151027, 0.715168678767756, 0.0721923153607337),
    (0.01933081871559182, 0.119194779794626, 0.9505321522496607),
)

XYZ_TO_SRGB = (
    (3.2409699419045226, -1.5373831775700940, -0.4986107602930034),
    (-0.9692436362808796, 1.8759675015077202, 0.0415550574071756),
    (0.0556300796969937, -0.2039769588889765, 1.0569715142428786),
)

# sRGB transfer function breakpoints
SRGB_LINEAR_THRESHOLD = 0.04045
SRGB_GAMMA_THRESHOLD = 0.0031308

# CIE f(t) constants: EPSILON ~= (6/29)**3, KAPPA ~= (1/3) * (29/6)**2
LAB_DELTA = 6 / 29
LAB_EPSILON = 0.008856
LAB_KAPPA = 7.787


def _mat_vec(matrix, vector):
    return tuple(sum(m * v for m, v in zip(row, vector)) for row in matrix)


def srgb_to_linear(c: float) -> float:
    """Expand a gamma-compressed sRGB channel in [0, 1] to linear light."""
    if c > SRGB_LINEAR_THRESHOLD:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def linear_to_srgb(c: float) -> float:
    """Compress a linear-light channel with the sRGB transfer function."""
    if c > SRGB_GAMMA_THRESHOLD:
        return 1.055 * c ** (1 / 2.4) - 0.055
    return 12.92 * c


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1 / 3)
    return LAB_KAPPA * t + 16 / 116


def _lab_f_inverse(t: float) -> float:
    if t > LAB_DELTA:
        return t ** 3
    return 3 * LAB_DELTA ** 2 * (t - 4 / 29)


def _rgb_to_hue(r: float, g: float, b: float, max_c: float, delta: float) -> float:
    """Hue shared by HSL and HSV, in degrees [0, 360)."""
    # Black or a shade of grey (R = G = B)
    if delta == 0:
        return 0.0

    if max_c == r:
        hue = (g - b) / delta
    elif max_c == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4

    hue *= 60
    if hue < 0:
        hue += 360
    return hue


def _sector_to_rgb(hue: float, chroma: float, secondary: float, match: float) -> RgbColor:
    """Place chroma and the secondary component by 60 degree hue sector."""
    red = green = blue = 0.0

    if hue < 60:
        red, green = chroma, secondary
    elif hue < 120:
        red, green = secondary, chroma
    elif hue < 180:
        green, blue = chroma, secondary
    elif hue < 240:
        green, blue = secondary, chroma
    elif hue < 300:
        red, blue = secondary, chroma
    else:
        red, blue = chroma, secondary

    return RgbColor(
        int((red + match) * 255),
        int((green + match) * 255),
        int((blue + match) * 255),
    )


def rgb_to_hsl(color: RgbColor) -> HslColor:
    """Convert an RGB color to HSL."""
    r, g, b = color.r / 255, color.g / 255, color.b / 255

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c

    h = _rgb_to_hue(r, g, b, max_c, delta)
    l = (max_c + min_c) / 2
    s = 0.0
    if 0 < l < 1:
        # rounding can push a fully saturated color a hair above 1
        s = min((max_c - l) / min(l, 1 - l), 1.0)
    return HslColor(h, s, l)


def rgb_to_hsv(color: RgbColor) -> HsvColor:
    """Convert an RGB color to HSV."""
    r, g, b = color.r / 255, color.g / 255, color.b / 255

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c

    h = _rgb_to_hue(r, g, b, max_c, delta)
    s = 0.0 if max_c == 0 else delta / max_c
    return HsvColor(h, s, max_c)


def hsl_to_rgb(color: HslColor) -> RgbColor:
    """Convert an HSL color to RGB, truncating each channel to an integer."""
    chroma = (1 - abs(2 * color.l - 1)) * color.s
    secondary = chroma * (1 - abs((color.h / 60) % 2 - 1))
    match = color.l - chroma / 2
    return _sector_to_rgb(color.h, chroma, secondary, match)


def hsv_to_rgb(color: HsvColor) -> RgbColor:
    """Convert an HSV color to RGB, truncating each channel to an integer."""
    chroma = color.v * color.s
    secondary = chroma * (1 - abs((color.h / 60) % 2 - 1))
    match = color.v - chroma
    return _sector_to_rgb(color.h, chroma, secondary, match)


def rgb_to_cie_xyz(color: RgbColor) -> CieXyzColor:
    """Convert an sRGB color to CIEXYZ (D65, 0-100 scale)."""
    linear = (
        srgb_to_linear(color.r / 255),
        srgb_to_linear(color.g / 255),
        srgb_to_linear(color.b / 255),
    )
    x, y, z = _mat_vec(SRGB_TO_XYZ, linear)
    return CieXyzColor(x * 100, y * 100, z * 100)


def cie_xyz_to_rgb(color: CieXyzColor) -> RgbColor:
    """
    Convert a CIEXYZ color (D65, 0-100 scale) to sRGB.

    Colors outside the sRGB gamut are clipped channel by channel to [0, 255]
    rather than gamut mapped, so such colors may come back noticeably
    different from the input.
    """
    linear = _mat_vec(XYZ_TO_SRGB, (color.x / 100, color.y / 100, color.z / 100))
    r, g, b = (linear_to_srgb(c) for c in linear)

    return RgbColor(
        max(min(int(round(r * 255)), 255), 0),
        max(min(int(round(g * 255)), 255), 0),
        max(min(int(round(b * 255)), 255), 0),
    )


def cie_xyz_to_cie_lab(color: CieXyzColor, reference_white: Optional[CieXyzColor] = None) -> CieLabColor:
    """
    Convert a CIEXYZ color to CIELAB.

    Args:
        color: The color to convert.
        reference_white: Reference white the color was measured against.
            Defaults to D65.
    """
    if reference_white is None:
        reference_white = D65()

    fx = _lab_f(color.x / reference_white.x)
    fy = _lab_f(color.y / reference_white.y)
    fz = _lab_f(color.z / reference_white.z)

    return CieLabColor(
        116 * fy - 16,
        500 * (fx - fy),
        200 * (fy - fz),
    )


def cie_lab_to_cie_xyz(color: CieLabColor, reference_white: Optional[CieXyzColor] = None) -> CieXyzColor:
    """
    Convert a CIELAB color to CIEXYZ.

    Args:
        color: The color to convert.
        reference_white: Reference white of the resulting CIEXYZ color.
            Defaults to D65.
    """
    if reference_white is None:
        reference_white = D65()

    fy = (color.l + 16) / 116
    fx = fy + color.a / 500
    fz = fy - color.b / 200

    return CieXyzColor(
        reference_white.x * _lab_f_inverse(fx),
        reference_white.y * _lab_f_inverse(fy),
        reference_white.z * _lab_f_inverse(fz),
    )


def rgb_to_cie_lab(color: RgbColor, reference_white: Optional[CieXyzColor] = None) -> CieLabColor:
    """Convenience helper for sRGB -> CIEXYZ -> CIELAB."""
    return cie_xyz_to_cie_lab(rgb_to_cie_xyz(color), reference_white)


def cie_lab_to_rgb(color: CieLabColor, reference_white: Optional[CieXyzColor] = None) -> RgbColor:
    """CIELAB -> CIEXYZ -> sRGB convenience helper, clipping out-of-gamut colors."""
    return cie_xyz_to_rgb(cie_lab_to_cie_xyz(color, reference_white))
