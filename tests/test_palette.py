import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from chromaspace.colors import RgbColor
from chromaspace.convert import rgb_to_cie_lab
from chromaspace.palette import Palette, PaletteColor

PRIMARY_PALETTE = [
    ("310", "Black", (0, 0, 0)),
    ("B5200", "Snow White", (255, 255, 255)),
    ("321", "Red", (215, 32, 64)),
    ("444", "Dark Lemon", (252, 214, 86)),
    ("700", "Bright Green", (60, 140, 70)),
    ("797", "Royal Blue", (30, 64, 119)),
    ("738", "Very Light Tan", (236, 208, 168)),
]


def _palette() -> Palette:
    return Palette(PaletteColor(code, name, RgbColor(*rgb)) for code, name, rgb in PRIMARY_PALETTE)


def test_palette_color_derives_lab_and_hex():
    color = PaletteColor("321", "Red", RgbColor(215, 32, 64))
    assert color.hex == "#d72040"
    assert color.lab == rgb_to_cie_lab(RgbColor(215, 32, 64))
    assert color.lab.a > 60


@pytest.mark.parametrize(
    "expected_code, rgb",
    [
        ("310", (0, 0, 0)),
        ("310", (20, 18, 25)),
        ("B5200", (250, 250, 248)),
        ("321", (200, 20, 50)),
        ("444", (255, 220, 90)),
        ("700", (50, 150, 60)),
        ("797", (20, 50, 130)),
        ("738", (230, 200, 160)),
    ],
)
@pytest.mark.parametrize("metric", ["ciede2000", "cie94", "cmc", "cie76"])
def test_find_nearest(expected_code, rgb, metric):
    palette = _palette()
    assert palette.find_nearest(RgbColor(*rgb), metric=metric).code == expected_code
    assert palette.find_nearest_fast(RgbColor(*rgb)).code == expected_code


def test_find_nearest_accepts_lab_and_keeps_first_on_ties():
    palette = Palette([
        PaletteColor("a", "first", RgbColor(10, 10, 10)),
        PaletteColor("b", "second", RgbColor(10, 10, 10)),
    ])
    target = rgb_to_cie_lab(RgbColor(12, 12, 12))
    assert palette.find_nearest(target).code == "a"
    assert palette.find_nearest_fast(target).code == "a"


def test_empty_palette_raises():
    with pytest.raises(ValueError, match="empty"):
        Palette().find_nearest(RgbColor(0, 0, 0))


def test_lookup_and_iteration():
    palette = _palette()
    assert len(palette) == len(PRIMARY_PALETTE)
    assert [color.code for color in palette] == [code for code, _, _ in PRIMARY_PALETTE]
    assert palette.get("797").name == "Royal Blue"
    assert palette.get("0000") is None
    exported = palette.to_dict()
    assert exported["B5200"]["rgb"] == (255, 255, 255)
    assert exported["B5200"]["hex"] == "#ffffff"


def test_from_csv_skips_invalid_rows(tmp_path, caplog):
    csv_path = tmp_path / "palette.csv"
    csv_path.write_text(
        "code,name,r,g,b\n"
        "310,Black,0,0,0\n"
        "bad,Too Bright,300,0,0\n"
        "nan,Not A Number,x,0,0\n"
        ",No Code,1,2,3\n"
        "321,Red,215,32,64\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING, logger="chromaspace.palette"):
        palette = Palette.from_csv(str(csv_path))

    assert [color.code for color in palette] == ["310", "321"]
    assert "Skipping invalid palette entry" in caplog.text


def test_from_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Palette.from_csv(str(tmp_path / "missing.csv"))


def test_adding_invalidates_cached_lab_array():
    palette = Palette([PaletteColor("310", "Black", RgbColor(0, 0, 0))])
    assert palette.find_nearest_fast(RgbColor(250, 250, 250)).code == "310"
    palette.add(PaletteColor("B5200", "Snow White", RgbColor(255, 255, 255)))
    assert palette.find_nearest_fast(RgbColor(250, 250, 250)).code == "B5200"
