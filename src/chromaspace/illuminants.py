"""
Reference whites for CIEXYZ <-> CIELAB conversions.

Instances are created once at import time and shared; CieXyzColor is frozen,
so handing out the same object to every caller is safe.
"""

from typing import Dict

from .colors import CieXyzColor

# Horizon light, used by print and graphic-arts workflows.
_D50 = CieXyzColor(96.422, 100.000, 82.521)

# Noon daylight, per ASTM E308-01. Other published values include
# (95.0489, 100.000, 108.8840) and CSS Color 4's (95.0456, 100.000, 108.9058).
_D65 = CieXyzColor(95.047, 100.000, 108.883)

REFERENCE_WHITES: Dict[str, CieXyzColor] = {
    "D50": _D50,
    "D65": _D65,
}


def D50() -> CieXyzColor:
    """Get the CIE standard illuminant D50 reference white."""
    return _D50


def D65() -> CieXyzColor:
    """Get the CIE standard illuminant D65 reference white."""
    return _D65


def get_reference_white(name: str) -> CieXyzColor:
    """Look up a reference white by name (case-insensitive)."""
    key = name.strip().upper()
    if key not in REFERENCE_WHITES:
        raise ValueError(f"Unknown reference white '{name}'. Available: {list(REFERENCE_WHITES.keys())}")
    return REFERENCE_WHITES[key]
