"""
Command-line interface for chromaspace conversions and color differences.
"""

import logging

import click

from . import __version__
from .colors import RgbColor, HslColor, HsvColor, CieXyzColor, CieLabColor
from .config import Config
from .convert import (
    rgb_to_hsl,
    rgb_to_hsv,
    hsl_to_rgb,
    hsv_to_rgb,
    rgb_to_cie_xyz,
    cie_xyz_to_rgb,
    cie_xyz_to_cie_lab,
    cie_lab_to_cie_xyz,
)
from .difference import METRICS, delta_e_from_config
from .illuminants import REFERENCE_WHITES, get_reference_white

logger = logging.getLogger(__name__)

SPACES = {
    "rgb": RgbColor,
    "hsl": HslColor,
    "hsv": HsvColor,
    "xyz": CieXyzColor,
    "lab": CieLabColor,
}


def _to_xyz(color, reference_white):
    if isinstance(color, CieXyzColor):
        return color
    if isinstance(color, CieLabColor):
        return cie_lab_to_cie_xyz(color, reference_white)
    return rgb_to_cie_xyz(_to_rgb(color, reference_white))


def _to_rgb(color, reference_white):
    if isinstance(color, RgbColor):
        return color
    if isinstance(color, HslColor):
        return hsl_to_rgb(color)
    if isinstance(color, HsvColor):
        return hsv_to_rgb(color)
    return cie_xyz_to_rgb(_to_xyz(color, reference_white))


def convert_color(color, target: str, reference_white=None):
    """Convert any color type to the named space, routing through RGB or CIEXYZ."""
    if target == "rgb":
        return _to_rgb(color, reference_white)
    if target == "hsl":
        return rgb_to_hsl(_to_rgb(color, reference_white))
    if target == "hsv":
        return rgb_to_hsv(_to_rgb(color, reference_white))
    if target == "xyz":
        return _to_xyz(color, reference_white)
    if target == "lab":
        return cie_xyz_to_cie_lab(_to_xyz(color, reference_white), reference_white)
    raise ValueError(f"Unknown color space '{target}'. Available: {list(SPACES.keys())}")


def _build_color(space: str, values):
    if space == "rgb":
        values = [int(round(v)) for v in values]
    return SPACES[space](*values)


def _format(color) -> str:
    return " ".join(
        str(v) if isinstance(v, int) else f"{v:.4f}" for v in color.as_tuple()
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def cli(verbose):
    """
    Color space conversions and delta E color differences.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command()
@click.argument('space', type=click.Choice(list(SPACES.keys())))
@click.argument('values', nargs=3, type=float)
@click.option('--to', 'target', required=True, type=click.Choice(list(SPACES.keys())),
              help='Target color space')
@click.option('--reference-white', '-w', type=click.Choice(list(REFERENCE_WHITES.keys())),
              default=None, help='Reference white for CIEXYZ <-> CIELAB (default: from config, D65)')
@click.option('--config', '-c', default='chromaspace.yaml', help='Configuration file path')
def convert(space, values, target, reference_white, config):
    """
    Convert a color between spaces.

    SPACE: Input color space, followed by its three components
    """
    try:
        settings = Config.from_yaml(config, reference_white=reference_white)
        white = get_reference_white(settings.conversion.reference_white)
        color = _build_color(space, values)
        logger.info("Converting %s to %s (reference white %s)",
                    color, target, settings.conversion.reference_white)
        result = convert_color(color, target, white)
    except ValueError as e:
        raise click.UsageError(str(e))

    click.echo(_format(result))


@cli.command(name='delta-e')
@click.argument('values', nargs=6, type=float)
@click.option('--metric', '-m', type=click.Choice(sorted(set(METRICS.keys()))), default=None,
              help='Delta E metric (default: from config, ciede2000)')
@click.option('--config', '-c', default='chromaspace.yaml', help='Configuration file path')
def delta_e(values, metric, config):
    """
    Color difference between a reference and a sample CIELAB color.

    VALUES: L* a* b* of the reference followed by L* a* b* of the sample
    """
    try:
        settings = Config.from_yaml(config, metric=metric)
        reference = CieLabColor(*values[:3])
        sample = CieLabColor(*values[3:])
        distance = delta_e_from_config(reference, sample, settings.difference)
    except ValueError as e:
        raise click.UsageError(str(e))

    logger.info("%s delta E between %s and %s", settings.difference.metric, reference, sample)
    click.echo(f"{distance:.4f}")


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
