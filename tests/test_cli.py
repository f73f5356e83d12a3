import sys
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from chromaspace.cli import cli, convert_color
from chromaspace.colors import CieLabColor, HslColor, RgbColor
from chromaspace.illuminants import D50


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "chromaspace.yaml")


def _invoke(*args):
    return CliRunner().invoke(cli, list(args))


def test_convert_rgb_to_hsl(config_path):
    result = _invoke("convert", "--to", "hsl", "-c", config_path, "rgb", "255", "0", "0")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "0.0000 1.0000 0.5000"


def test_convert_lab_to_rgb(config_path):
    result = _invoke("convert", "--to", "rgb", "-c", config_path, "lab", "100", "0", "0")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "255 255 255"


def test_convert_accepts_negative_components(config_path):
    result = _invoke("convert", "--to", "lab", "-c", config_path, "lab", "--", "50", "-20", "-10")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "50.0000 -20.0000 -10.0000"


def test_convert_out_of_range_input_is_a_usage_error(config_path):
    result = _invoke("convert", "--to", "hsl", "-c", config_path, "rgb", "256", "0", "0")
    assert result.exit_code == 2
    assert "Red must be between 0 and 255" in result.output


def test_delta_e_metrics(config_path):
    result = _invoke("delta-e", "-c", config_path, "-m", "cie76", "100", "0", "0", "0", "0", "0")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "100.0000"

    result = _invoke("delta-e", "-c", config_path, "--", "50", "2.5", "0", "73", "25", "-18")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "27.1492"


def test_delta_e_reads_metric_from_config(config_path):
    Path(config_path).write_text(yaml.safe_dump({"difference": {"metric": "cmc"}}), encoding="utf-8")
    result = _invoke("delta-e", "-c", config_path, "100", "0", "0", "0", "0", "0")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "33.7401"


def test_convert_color_routes_between_spaces():
    assert convert_color(HslColor(120, 1, 0.5), "rgb") == RgbColor(0, 255, 0)
    assert convert_color(RgbColor(255, 255, 255), "hsv").v == 1.0
    lab = convert_color(RgbColor(255, 0, 0), "lab", D50())
    assert isinstance(lab, CieLabColor)
    assert convert_color(CieLabColor(100, 0, 0), "xyz", D50()).as_tuple() == D50().as_tuple()
    with pytest.raises(ValueError):
        convert_color(RgbColor(0, 0, 0), "cmyk")
