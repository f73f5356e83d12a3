"""
Color difference (delta E) metrics between two CIELAB colors.

Every metric takes a reference color first and a sample color second.
CIE76 is symmetric; CIE94 and CMC l:c weight by the reference color only
and are not.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict

from .colors import CieLabColor
from .exceptions import RangeError


@dataclass(frozen=True)
class Cie94Weights:
    """Application specific weights for the CIE94 formula."""
    k1: float
    k2: float
    k_l: int


GRAPHIC_ARTS = Cie94Weights(k1=0.045, k2=0.015, k_l=1)
TEXTILES = Cie94Weights(k1=0.048, k2=0.014, k_l=2)

CIE94_APPLICATIONS: Dict[str, Cie94Weights] = {
    "graphic_arts": GRAPHIC_ARTS,
    "textiles": TEXTILES,
}


def _hue_difference(color1: CieLabColor, color2: CieLabColor, delta_c: float) -> float:
    """delta H as used by CIE94 and CMC, derived from delta a, delta b and delta C."""
    radicand = (color1.a - color2.a) ** 2 + (color1.b - color2.b) ** 2 - delta_c ** 2
    # cancellation can leave a tiny negative for near-identical hues
    return math.sqrt(max(radicand, 0.0))


def delta_e76(color1: CieLabColor, color2: CieLabColor) -> float:
    """
    Calculate delta E as the Euclidean distance in CIELAB (CIE76).

    CIELAB is not as perceptually uniform as intended, so this formula rates
    differences between saturated colors too highly.
    """
    return math.sqrt(
        (color2.l - color1.l) ** 2
        + (color2.a - color1.a) ** 2
        + (color2.b - color1.b) ** 2
    )


def delta_e94(color1: CieLabColor, color2: CieLabColor,
              k1: float = 0.045, k2: float = 0.015,
              k_l: int = 1, k_c: int = 1, k_h: int = 1) -> float:
    """
    Calculate delta E using application specific weights (CIE94).

    Args:
        color1: The reference color.
        color2: The sample color.
        k1: Chroma weight. Graphic arts 0.045 (default), textiles 0.048.
        k2: Hue weight. Graphic arts 0.015 (default), textiles 0.014.
        k_l: Lightness weight. Graphic arts 1 (default), textiles 2.
        k_c: Chroma parametric factor.
        k_h: Hue parametric factor.

    Raises:
        RangeError: If k1 or k2 is not positive, or k_l is not 1 or 2.
    """
    if not k1 > 0:
        raise RangeError("k1", 0, value=k1)
    if not k2 > 0:
        raise RangeError("k2", 0, value=k2)
    if k_l not in (1, 2):
        raise RangeError("kL", 1, 2, value=k_l,
                         message=f"kL must be 1 (graphic arts) or 2 (textiles), got {k_l}")

    c1 = color1.chroma()
    c2 = color2.chroma()

    delta_l = color1.l - color2.l
    delta_c = c1 - c2
    delta_h = _hue_difference(color1, color2, delta_c)

    s_l = 1.0
    s_c = 1 + k1 * c1
    s_h = 1 + k2 * c1

    return math.sqrt(
        (delta_l / (k_l * s_l)) ** 2
        + (delta_c / (k_c * s_c)) ** 2
        + (delta_h / (k_h * s_h)) ** 2
    )


def delta_cmc(color1: CieLabColor, color2: CieLabColor, k_l: float = 2, k_c: float = 1) -> float:
    """
    Calculate delta E using the CMC l:c (1984) metric.

    Use a 2:1 lightness to chroma ratio for acceptability (default) and 1:1
    for imperceptibility.

    Args:
        color1: The reference color.
        color2: The sample color.
        k_l: Weight given to lightness.
        k_c: Weight given to chroma.
    """
    c1 = color1.chroma()
    c2 = color2.chroma()
    h1 = color1.hue()

    if h1 < 164 or h1 > 345:
        t = 0.36 + abs(0.4 * math.cos(math.radians(h1 + 35)))
    else:
        t = 0.56 + abs(0.2 * math.cos(math.radians(h1 + 168)))
    f = math.sqrt(c1 ** 4 / (c1 ** 4 + 1900))

    if color1.l < 16:
        s_l = 0.511
    else:
        s_l = (0.040975 * color1.l) / (1 + 0.01765 * color1.l)
    s_c = (0.0638 * c1) / (1 + 0.0131 * c1) + 0.638
    s_h = s_c * (f * t + 1 - f)

    delta_h = _hue_difference(color1, color2, c1 - c2)

    return math.sqrt(
        ((color2.l - color1.l) / (k_l * s_l)) ** 2
        + ((c2 - c1) / (k_c * s_c)) ** 2
        + (delta_h / s_h) ** 2
    )


def _hue_angle(a: float, b: float) -> float:
    if a == 0 and b == 0:
        return 0.0
    h = math.degrees(math.atan2(b, a))
    return h + 360 if h < 0 else h


def delta_e2000(color1: CieLabColor, color2: CieLabColor,
                k_l: float = 1, k_c: float = 1, k_h: float = 1) -> float:
    """
    Calculate delta E using the CIEDE2000 formula.

    Improves on CIE94 with a hue rotation term for blue hues drifting towards
    purple, compensation for neutral colors, and further lightness, chroma
    and hue compensations. Equation numbers follow Sharma, Wu and Dalal,
    "The CIEDE2000 Color-Difference Formula" (2005).

    Args:
        color1: The reference color.
        color2: The sample color.
        k_l: Lightness parametric factor.
        k_c: Chroma parametric factor.
        k_h: Hue parametric factor.
    """
    # Step 1: equations 2-7
    c_avg = (color1.chroma() + color2.chroma()) / 2
    g = (1 - math.sqrt(c_avg ** 7 / (c_avg ** 7 + 25 ** 7))) / 2
    a1 = (1 + g) * color1.a
    a2 = (1 + g) * color2.a
    c1 = math.sqrt(a1 ** 2 + color1.b ** 2)
    c2 = math.sqrt(a2 ** 2 + color2.b ** 2)
    h1 = _hue_angle(a1, color1.b)
    h2 = _hue_angle(a2, color2.b)

    # Step 2: equations 8-11
    delta_l = color2.l - color1.l
    delta_c = c2 - c1
    delta_h = 0.0
    if c1 * c2 != 0:
        delta_h = h2 - h1
        if delta_h > 180:
            delta_h -= 360
        elif delta_h < -180:
            delta_h += 360
    delta_h = 2 * math.sqrt(c1 * c2) * math.sin(math.radians(delta_h / 2))

    # Step 3: equations 12-24
    l_avg = (color1.l + color2.l) / 2
    c_avg = (c1 + c2) / 2
    # When either chroma is zero the mean hue is the plain sum (eq. 14).
    h_avg = h1 + h2
    if c1 * c2 != 0:
        if abs(h1 - h2) > 180:
            if h_avg < 360:
                h_avg = (h_avg + 360) / 2
            else:
                h_avg = (h_avg - 360) / 2
        else:
            h_avg = h_avg / 2

    t = (1
         - 0.17 * math.cos(math.radians(h_avg - 30))
         + 0.24 * math.cos(math.radians(2 * h_avg))
         + 0.32 * math.cos(math.radians(3 * h_avg + 6))
         - 0.20 * math.cos(math.radians(4 * h_avg - 63)))
    delta_theta = 30 * math.exp(-(((h_avg - 275) / 25) ** 2))

    l_avg_sqr = (l_avg - 50) ** 2
    s_l = 1 + (0.015 * l_avg_sqr) / math.sqrt(20 + l_avg_sqr)
    s_c = 1 + 0.045 * c_avg
    s_h = 1 + 0.015 * c_avg * t
    r_c = 2 * math.sqrt(c_avg ** 7 / (c_avg ** 7 + 25 ** 7))
    r_t = -math.sin(math.radians(2 * delta_theta)) * r_c

    delta_l /= k_l * s_l
    delta_c /= k_c * s_c
    delta_h /= k_h * s_h
    return math.sqrt(delta_l ** 2 + delta_c ** 2 + delta_h ** 2 + r_t * delta_c * delta_h)


METRICS: Dict[str, Callable[..., float]] = {
    "cie76": delta_e76,
    "76": delta_e76,
    "cie94": delta_e94,
    "94": delta_e94,
    "cmc": delta_cmc,
    "ciede2000": delta_e2000,
    "2000": delta_e2000,
}


def get_metric(name: str) -> Callable[..., float]:
    """Look up a delta E function by metric name."""
    key = str(name).strip().lower()
    if key not in METRICS:
        raise ValueError(f"Unknown metric '{name}'. Available: {sorted(set(METRICS.keys()))}")
    return METRICS[key]


def delta_e(color1: CieLabColor, color2: CieLabColor, metric: str = "ciede2000", **params) -> float:
    """Calculate delta E with the named metric, passing extra weights through."""
    return get_metric(metric)(color1, color2, **params)


def delta_e_from_config(color1: CieLabColor, color2: CieLabColor, config) -> float:
    """
    Calculate delta E with the metric and weights of a ``DifferenceConfig``.
    """
    return delta_e(color1, color2, config.metric, **config.metric_params())
