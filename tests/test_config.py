import sys
from pathlib import Path

import pytest
import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from chromaspace.colors import CieLabColor
from chromaspace.config import Config, ConversionConfig, DifferenceConfig
from chromaspace.difference import delta_cmc, delta_e2000, delta_e94, delta_e_from_config
from chromaspace.exceptions import RangeError
from chromaspace.illuminants import D50


def test_missing_file_returns_defaults(tmp_path):
    config_path = tmp_path / "missing.yaml"
    config = Config.from_yaml(str(config_path))
    assert config.config_file == str(config_path)
    assert config.difference.metric == "ciede2000"
    assert config.difference.cie94_application == "graphic_arts"
    assert config.conversion.reference_white == "D65"


def test_loads_nested_sections(tmp_path):
    config_path = tmp_path / "chromaspace.yaml"
    config_path.write_text(
        yaml.safe_dump({
            "difference": {"metric": "cmc", "cmc_l": 1.0, "cmc_c": 1.0},
            "conversion": {"reference_white": "D50"},
        }),
        encoding="utf-8",
    )

    config = Config.from_yaml(str(config_path))
    assert config.difference.metric == "cmc"
    assert config.difference.cmc_l == 1.0
    assert config.conversion.reference_white == "D50"
    assert config.conversion.reference_white_xyz is D50()


def test_overrides_apply_to_owning_section(tmp_path):
    config = Config.from_yaml(str(tmp_path / "none.yaml"), metric="cie94", reference_white="D50", k_h=None)
    assert config.difference.metric == "cie94"
    assert config.conversion.reference_white == "D50"
    assert config.difference.k_h == 1.0

    with pytest.raises(ValueError, match="Unknown configuration option"):
        Config.from_yaml(str(tmp_path / "none.yaml"), dither=True)


@pytest.mark.parametrize(
    "difference, conversion, error",
    [
        ({"metric": "cie2020"}, {}, ValueError),
        ({"cie94_application": "automotive"}, {}, ValueError),
        ({"cmc_l": 0}, {}, RangeError),
        ({"k_h": -1}, {}, RangeError),
        ({"cmc_c": float("nan")}, {}, RangeError),
        ({}, {"reference_white": "D75"}, ValueError),
    ],
)
def test_validation(difference, conversion, error):
    config = Config(
        difference=DifferenceConfig(**difference),
        conversion=ConversionConfig(**conversion),
    )
    with pytest.raises(error):
        config.validate()


def test_save_and_reload_round_trip(tmp_path):
    config = Config()
    config.difference.metric = "cie94"
    config.difference.cie94_application = "textiles"
    config.conversion.reference_white = "D50"

    path = tmp_path / "nested" / "saved.yaml"
    config.save_yaml(str(path))
    assert path.exists()

    reloaded = Config.from_yaml(str(path))
    assert reloaded.to_dict() == config.to_dict()


def test_metric_params():
    assert DifferenceConfig(metric="cie76").metric_params() == {}
    assert DifferenceConfig(metric="94", cie94_application="textiles").metric_params() == {
        "k1": 0.048, "k2": 0.014, "k_l": 2,
    }
    assert DifferenceConfig(metric="cmc", cmc_l=1, cmc_c=1).metric_params() == {"k_l": 1, "k_c": 1}
    assert DifferenceConfig(k_l=2).metric_params() == {"k_l": 2, "k_c": 1.0, "k_h": 1.0}


def test_delta_e_from_config():
    reference = CieLabColor(36.3124, 55.0280, -100.7268)
    sample = CieLabColor(97.6071, -15.7529, 93.3885)

    assert delta_e_from_config(reference, sample, DifferenceConfig()) == delta_e2000(reference, sample)
    assert delta_e_from_config(reference, sample, DifferenceConfig(metric="cmc", cmc_l=1)) == delta_cmc(
        reference, sample, k_l=1, k_c=1.0
    )
    textiles = DifferenceConfig(metric="cie94", cie94_application="textiles")
    assert delta_e_from_config(reference, sample, textiles) == delta_e94(
        reference, sample, k1=0.048, k2=0.014, k_l=2
    )
