"""
Configuration management for chromaspace defaults.
"""

import logging
import os
import yaml
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

from .colors import CieXyzColor
from .difference import CIE94_APPLICATIONS, get_metric
from .exceptions import RangeError
from .illuminants import REFERENCE_WHITES, get_reference_white

logger = logging.getLogger(__name__)


@dataclass
class DifferenceConfig:
    """Color difference metric and its weights."""
    metric: str = "ciede2000"

    # CIE94
    cie94_application: Literal["graphic_arts", "textiles"] = "graphic_arts"

    # CMC l:c, 2:1 for acceptability, 1:1 for imperceptibility
    cmc_l: float = 2.0
    cmc_c: float = 1.0

    # CIEDE2000 parametric factors
    k_l: float = 1.0
    k_c: float = 1.0
    k_h: float = 1.0

    def metric_params(self) -> Dict[str, Any]:
        """Keyword arguments for the configured metric's delta E function."""
        metric = get_metric(self.metric).__name__
        if metric == "delta_e94":
            weights = CIE94_APPLICATIONS[self.cie94_application]
            return {"k1": weights.k1, "k2": weights.k2, "k_l": weights.k_l}
        if metric == "delta_cmc":
            return {"k_l": self.cmc_l, "k_c": self.cmc_c}
        if metric == "delta_e2000":
            return {"k_l": self.k_l, "k_c": self.k_c, "k_h": self.k_h}
        return {}


@dataclass
class ConversionConfig:
    """CIEXYZ <-> CIELAB conversion settings."""
    reference_white: Literal["D50", "D65"] = "D65"

    @property
    def reference_white_xyz(self) -> CieXyzColor:
        return get_reference_white(self.reference_white)


@dataclass
class Config:
    """Main configuration class."""
    config_file: Optional[str] = None

    difference: DifferenceConfig = field(default_factory=DifferenceConfig)
    conversion: ConversionConfig = field(default_factory=ConversionConfig)

    @classmethod
    def from_yaml(cls, config_path: str, **overrides) -> "Config":
        """Load configuration from YAML file with optional overrides."""
        if not os.path.exists(config_path):
            logger.info("Config file %s not found, using defaults", config_path)
            config = cls()
            config.config_file = config_path
        else:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

            config = cls(
                config_file=config_path,
                difference=DifferenceConfig(**data.get('difference', {})),
                conversion=ConversionConfig(**data.get('conversion', {})),
            )
            logger.info("Loaded configuration from %s", config_path)

        # Apply overrides onto whichever section owns the attribute
        for key, value in overrides.items():
            if value is None:
                continue
            if hasattr(config.difference, key):
                setattr(config.difference, key, value)
            elif hasattr(config.conversion, key):
                setattr(config.conversion, key, value)
            else:
                raise ValueError(f"Unknown configuration option '{key}'")

        config.validate()
        return config

    def validate(self):
        """Validate configuration parameters."""
        get_metric(self.difference.metric)

        if self.difference.cie94_application not in CIE94_APPLICATIONS:
            raise ValueError(
                f"Unknown CIE94 application '{self.difference.cie94_application}'. "
                f"Available: {list(CIE94_APPLICATIONS.keys())}"
            )

        for name in ("cmc_l", "cmc_c", "k_l", "k_c", "k_h"):
            value = getattr(self.difference, name)
            if not value > 0:
                raise RangeError(name, 0, value=value)

        if self.conversion.reference_white.upper() not in REFERENCE_WHITES:
            raise ValueError(
                f"Unknown reference white '{self.conversion.reference_white}'. "
                f"Available: {list(REFERENCE_WHITES.keys())}"
            )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'difference': {
                'metric': self.difference.metric,
                'cie94_application': self.difference.cie94_application,
                'cmc_l': self.difference.cmc_l,
                'cmc_c': self.difference.cmc_c,
                'k_l': self.difference.k_l,
                'k_c': self.difference.k_c,
                'k_h': self.difference.k_h,
            },
            'conversion': {
                'reference_white': self.conversion.reference_white,
            },
        }

    def save_yaml(self, path: Optional[str] = None):
        """Save configuration to YAML file."""
        if path is None:
            path = self.config_file or "chromaspace.yaml"

        dir_path = os.path.dirname(path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)
