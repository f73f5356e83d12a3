"""
Vectorised color math for whole images and palettes.

Provides:
    - sRGB <-> CIEXYZ <-> CIELAB conversion on (..., 3) arrays
    - CIE76 and CIEDE2000 delta E with numpy broadcasting

Constants, thresholds, the 0-100 CIEXYZ scale and the CIEDE2000 edge-case
branches are the same as in ``chromaspace.convert`` and
``chromaspace.difference``, so results agree with the per-color functions.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .colors import CieXyzColor
from .convert import (
    LAB_DELTA,
    LAB_EPSILON,
    LAB_KAPPA,
    SRGB_GAMMA_THRESHOLD,
    SRGB_LINEAR_THRESHOLD,
    SRGB_TO_XYZ as _SRGB_TO_XYZ,
    XYZ_TO_SRGB as _XYZ_TO_SRGB,
)
from .illuminants import D65

SRGB_TO_XYZ = np.array(_SRGB_TO_XYZ, dtype=np.float64)
XYZ_TO_SRGB = np.array(_XYZ_TO_SRGB, dtype=np.float64)


def _to_ndarray(color) -> np.ndarray:
    arr = np.asarray(color, dtype=np.float64)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError("Input color must have three channels")
    return arr


def _white(reference_white: Optional[CieXyzColor]) -> np.ndarray:
    if reference_white is None:
        reference_white = D65()
    return np.array(reference_white.as_tuple(), dtype=np.float64)


def srgb_to_linear(rgb) -> np.ndarray:
    """Convert sRGB channels in [0, 1] to linear RGB."""
    rgb = _to_ndarray(rgb)
    return np.where(
        rgb > SRGB_LINEAR_THRESHOLD,
        ((np.maximum(rgb, SRGB_LINEAR_THRESHOLD) + 0.055) / 1.055) ** 2.4,
        rgb / 12.92,
    )


def linear_to_srgb(linear_rgb) -> np.ndarray:
    """Convert linear RGB to gamma-compressed sRGB channels (unclipped)."""
    linear_rgb = _to_ndarray(linear_rgb)
    return np.where(
        linear_rgb > SRGB_GAMMA_THRESHOLD,
        1.055 * np.power(np.maximum(linear_rgb, SRGB_GAMMA_THRESHOLD), 1 / 2.4) - 0.055,
        12.92 * linear_rgb,
    )


def rgb_to_xyz(rgb) -> np.ndarray:
    """Convert sRGB (0-255) to CIEXYZ (D65, 0-100 scale)."""
    linear = srgb_to_linear(_to_ndarray(rgb) / 255.0)
    return (linear @ SRGB_TO_XYZ.T) * 100.0


def xyz_to_rgb(xyz) -> np.ndarray:
    """Convert CIEXYZ (D65, 0-100 scale) to sRGB uint8, clipping out-of-gamut channels."""
    linear = (_to_ndarray(xyz) / 100.0) @ XYZ_TO_SRGB.T
    srgb = np.rint(linear_to_srgb(linear) * 255.0)
    return np.clip(srgb, 0, 255).astype(np.uint8)


def xyz_to_lab(xyz, reference_white: Optional[CieXyzColor] = None) -> np.ndarray:
    """Convert CIEXYZ to CIELAB (defaults to D65)."""
    xyz = _to_ndarray(xyz) / _white(reference_white)

    def f(t):
        return np.where(t > LAB_EPSILON, np.cbrt(t), LAB_KAPPA * t + 16 / 116)

    fx = f(xyz[..., 0])
    fy = f(xyz[..., 1])
    fz = f(xyz[..., 2])

    L = (116 * fy) - 16
    a = 500 * (fx - fy)
    b = 200 * (fy - fz)
    return np.stack([L, a, b], axis=-1)


def lab_to_xyz(lab, reference_white: Optional[CieXyzColor] = None) -> np.ndarray:
    """Convert CIELAB back to CIEXYZ (defaults to D65)."""
    lab = _to_ndarray(lab)
    L, a, b = lab[..., 0], lab[..., 1], lab[..., 2]

    fy = (L + 16) / 116
    fx = fy + (a / 500)
    fz = fy - (b / 200)

    def finv(t):
        return np.where(
            t > LAB_DELTA, t**3, (t - 4 / 29) * (3 * LAB_DELTA**2)
        )

    xyz = np.stack([finv(fx), finv(fy), finv(fz)], axis=-1)
    return xyz * _white(reference_white)


def rgb_to_lab(rgb, reference_white: Optional[CieXyzColor] = None) -> np.ndarray:
    """Convenience helper for sRGB -> CIELAB."""
    return xyz_to_lab(rgb_to_xyz(rgb), reference_white)


def lab_to_rgb(lab, reference_white: Optional[CieXyzColor] = None) -> np.ndarray:
    """CIELAB -> sRGB uint8 convenience helper."""
    return xyz_to_rgb(lab_to_xyz(lab, reference_white))


def delta_e76(lab1, lab2) -> np.ndarray:
    """Euclidean CIELAB distance with numpy broadcasting."""
    return np.linalg.norm(_to_ndarray(lab2) - _to_ndarray(lab1), axis=-1)


def _hue_angle(a_component, b_component) -> np.ndarray:
    angle = np.degrees(np.arctan2(b_component, a_component))
    angle = np.where(angle < 0, angle + 360, angle)
    return np.where((a_component == 0) & (b_component == 0), 0.0, angle)


def delta_e2000(lab1, lab2, k_l: float = 1, k_c: float = 1, k_h: float = 1) -> np.ndarray:
    """
    CIEDE2000 color difference with numpy broadcasting.

    lab1 and lab2 may be:
        - matching shapes (...,3)
        - lab1 shape (...,3) and lab2 shape (3,) (broadcast)
    Returns an array with the broadcasted leading dimensions.
    """

    lab1 = _to_ndarray(lab1)
    lab2 = _to_ndarray(lab2)

    L1, a1, b1 = lab1[..., 0], lab1[..., 1], lab1[..., 2]
    L2, a2, b2 = lab2[..., 0], lab2[..., 1], lab2[..., 2]

    C1 = np.sqrt(a1**2 + b1**2)
    C2 = np.sqrt(a2**2 + b2**2)
    C_mean = (C1 + C2) / 2

    G = 0.5 * (1 - np.sqrt((C_mean**7) / (C_mean**7 + 25**7)))
    a1_prime = (1 + G) * a1
    a2_prime = (1 + G) * a2
    C1_prime = np.sqrt(a1_prime**2 + b1**2)
    C2_prime = np.sqrt(a2_prime**2 + b2**2)
    C_mean_prime = (C1_prime + C2_prime) / 2

    h1_prime = _hue_angle(a1_prime, b1)
    h2_prime = _hue_angle(a2_prime, b2)
    chromatic = (C1_prime * C2_prime) != 0

    delta_h_prime = h2_prime - h1_prime
    delta_h_prime = np.where(delta_h_prime > 180, delta_h_prime - 360, delta_h_prime)
    delta_h_prime = np.where(delta_h_prime < -180, delta_h_prime + 360, delta_h_prime)
    delta_h_prime = np.where(chromatic, delta_h_prime, 0.0)

    delta_L_prime = L2 - L1
    delta_C_prime = C2_prime - C1_prime
    delta_H_prime = 2 * np.sqrt(C1_prime * C2_prime) * np.sin(
        np.radians(delta_h_prime / 2)
    )

    L_mean = (L1 + L2) / 2
    H_sum = h1_prime + h2_prime
    H_mean_prime = np.where(
        np.abs(h1_prime - h2_prime) > 180,
        np.where(H_sum < 360, (H_sum + 360) / 2, (H_sum - 360) / 2),
        H_sum / 2,
    )
    H_mean_prime = np.where(chromatic, H_mean_prime, H_sum)

    T = (
        1
        - 0.17 * np.cos(np.radians(H_mean_prime - 30))
        + 0.24 * np.cos(np.radians(2 * H_mean_prime))
        + 0.32 * np.cos(np.radians(3 * H_mean_prime + 6))
        - 0.20 * np.cos(np.radians(4 * H_mean_prime - 63))
    )

    delta_theta = 30 * np.exp(-(((H_mean_prime - 275) / 25) ** 2))
    R_C = 2 * np.sqrt((C_mean_prime**7) / (C_mean_prime**7 + 25**7))
    R_T = -np.sin(np.radians(2 * delta_theta)) * R_C

    S_L = 1 + ((0.015 * (L_mean - 50) ** 2) / np.sqrt(20 + (L_mean - 50) ** 2))
    S_C = 1 + 0.045 * C_mean_prime
    S_H = 1 + 0.015 * C_mean_prime * T

    dL = delta_L_prime / (k_l * S_L)
    dC = delta_C_prime / (k_c * S_C)
    dH = delta_H_prime / (k_h * S_H)

    return np.sqrt(dL**2 + dC**2 + dH**2 + R_T * dC * dH)
