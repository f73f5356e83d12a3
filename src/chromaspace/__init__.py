"""
chromaspace

Color value types, conversions between sRGB, HSL, HSV, CIEXYZ and CIELAB,
and CIE76, CIE94, CMC l:c and CIEDE2000 color difference metrics.
"""

__version__ = "1.0.0"

from .exceptions import RangeError
from .colors import RgbColor, HslColor, HsvColor, CieXyzColor, CieLabColor
from .illuminants import D50, D65, get_reference_white
from .convert import (
    rgb_to_hsl,
    rgb_to_hsv,
    hsl_to_rgb,
    hsv_to_rgb,
    rgb_to_cie_xyz,
    cie_xyz_to_rgb,
    cie_xyz_to_cie_lab,
    cie_lab_to_cie_xyz,
    rgb_to_cie_lab,
    cie_lab_to_rgb,
)
from .difference import delta_e, delta_e76, delta_e94, delta_cmc, delta_e2000, GRAPHIC_ARTS, TEXTILES
from .config import Config
from .palette import Palette, PaletteColor

__all__ = [
    "RangeError",
    "RgbColor",
    "HslColor",
    "HsvColor",
    "CieXyzColor",
    "CieLabColor",
    "D50",
    "D65",
    "get_reference_white",
    "rgb_to_hsl",
    "rgb_to_hsv",
    "hsl_to_rgb",
    "hsv_to_rgb",
    "rgb_to_cie_xyz",
    "cie_xyz_to_rgb",
    "cie_xyz_to_cie_lab",
    "cie_lab_to_cie_xyz",
    "rgb_to_cie_lab",
    "cie_lab_to_rgb",
    "delta_e",
    "delta_e76",
    "delta_e94",
    "delta_cmc",
    "delta_e2000",
    "GRAPHIC_ARTS",
    "TEXTILES",
    "Config",
    "Palette",
    "PaletteColor",
]
