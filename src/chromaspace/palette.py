"""
Named color palettes with nearest-color lookup by delta E.
"""

import csv
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Union

import numpy as np

from . import color_math
from .colors import CieLabColor, RgbColor
from .convert import rgb_to_cie_lab
from .difference import get_metric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteColor:
    """A single named palette entry."""
    code: str
    name: str
    rgb: RgbColor
    lab: CieLabColor = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "lab", rgb_to_cie_lab(self.rgb))

    @property
    def hex(self) -> str:
        return self.rgb.hex


class Palette:
    """Ordered palette with nearest-color matching."""

    def __init__(self, colors: Iterable[PaletteColor] = ()):
        self.colors: List[PaletteColor] = []
        self.lookup: Dict[str, PaletteColor] = {}
        self.lab_array: Optional[np.ndarray] = None

        for color in colors:
            self.add(color)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[PaletteColor]:
        return iter(self.colors)

    def add(self, color: PaletteColor):
        """Append a color; a repeated code replaces the lookup entry but keeps both in order."""
        if color.code in self.lookup:
            logger.warning("Duplicate palette code %s, later entry wins lookups", color.code)
        self.colors.append(color)
        self.lookup[color.code] = color
        self.lab_array = None

    def get(self, code: str) -> Optional[PaletteColor]:
        """Get a palette color by code."""
        return self.lookup.get(code)

    @classmethod
    def from_csv(cls, csv_path: str) -> "Palette":
        """
        Load a palette from a CSV file with ``code,name,r,g,b`` columns.

        Rows with missing or out-of-range channels are skipped.
        """
        if not os.path.exists(csv_path):
            raise FileNotFoundError(f"Palette file not found: {csv_path}")

        palette = cls()
        with open(csv_path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            for row in reader:
                try:
                    code = (row.get('code') or '').strip()
                    if not code:
                        continue
                    name = (row.get('name') or '').strip()
                    rgb = RgbColor(int(row['r']), int(row['g']), int(row['b']))
                except (ValueError, KeyError, TypeError) as e:
                    logger.warning("Skipping invalid palette entry %s: %s", row, e)
                    continue
                palette.add(PaletteColor(code, name, rgb))

        logger.info("Loaded %d palette colors from %s", len(palette), csv_path)
        return palette

    def _ensure_lab_array(self) -> np.ndarray:
        if not self.colors:
            raise ValueError("Palette is empty")
        if self.lab_array is None:
            self.lab_array = np.array([color.lab.as_tuple() for color in self.colors])
        return self.lab_array

    @staticmethod
    def _as_lab(color: Union[RgbColor, CieLabColor]) -> CieLabColor:
        if isinstance(color, RgbColor):
            return rgb_to_cie_lab(color)
        return color

    def find_nearest(self, color: Union[RgbColor, CieLabColor],
                     metric: str = "ciede2000", **params) -> PaletteColor:
        """Find the palette color closest to ``color`` under the named delta E metric."""
        self._ensure_lab_array()
        delta_e = get_metric(metric)
        target = self._as_lab(color)

        best_color = self.colors[0]
        min_distance = float('inf')
        for candidate in self.colors:
            # palette entry is the reference, the query is the sample
            distance = delta_e(candidate.lab, target, **params)
            if distance < min_distance:
                min_distance = distance
                best_color = candidate

        return best_color

    def find_nearest_fast(self, color: Union[RgbColor, CieLabColor]) -> PaletteColor:
        """Nearest palette color by vectorised CIE76 distance."""
        lab_array = self._ensure_lab_array()
        target = np.array(self._as_lab(color).as_tuple())
        distances = color_math.delta_e76(lab_array, target)
        return self.colors[int(np.argmin(distances))]

    def to_dict(self) -> dict:
        """Export palette to dictionary format."""
        return {
            color.code: {
                'name': color.name,
                'rgb': color.rgb.as_tuple(),
                'hex': color.hex,
                'lab': color.lab.as_tuple(),
            }
            for color in self.colors
        }
