#!/usr/bin/env python3
"""
Command-line interface for the tile labeler
Exports a labeled tile sheet without the GUI

Examples:
  # Assembly for two labeled tiles
  tile-labeler asm sheet.png --config "0x00:0_0,0x01:0_1"

  # Config stored in a file, custom symbol prefix
  tile-labeler asm sheet.png --config @labels.cfg --prefix Font_ -o font.asm

  # Labels written as Tile_0x00, Tile_0x01, ...
  tile-labeler asm sheet.png --config @labels.cfg --label-prefix Tile_ --prefix ""

  # Grid size of a sheet
  tile-labeler grid sheet.png
"""

import argparse
import sys
from pathlib import Path

from .constants import DEFAULT_LABEL_PREFIX, DEFAULT_SYMBOL_PREFIX
from .exceptions import TileLabelerError, format_error_message
from .logging_config import get_logger, setup_logging
from .raster import load_raster
from .tile_registry import TileRegistry
from .tile_utils import export_assembly

logger = get_logger("cli")


def read_config_argument(value: str) -> str:
    """Config text, or the contents of a file when prefixed with @"""
    if value.startswith("@"):
        return Path(value[1:]).read_text().strip()
    return value


def write_output(text: str, output):
    if output:
        Path(output).write_text(text)
        logger.info(f"Wrote {output}")
    else:
        sys.stdout.write(text)


def cmd_asm(args) -> int:
    image = load_raster(args.image)
    registry = TileRegistry()
    registry.import_config(read_config_argument(args.config))

    result = export_assembly(registry, image, args.prefix, args.label_prefix)
    write_output(result.text, args.output)

    for failure in result.failures:
        print(
            f"Error: {failure.label} at {tuple(failure.coord)}: {failure.reason}",
            file=sys.stderr,
        )
    return 0 if result.ok else 1


def cmd_config(args) -> int:
    registry = TileRegistry()
    registry.import_config(read_config_argument(args.config))
    write_output(registry.export_config() + "\n", args.output)
    return 0


def cmd_grid(args) -> int:
    image = load_raster(args.image)
    rows, cols = image.grid_size()
    print(f"{rows} {cols}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tile-labeler",
        description="Export labeled 8x8 tiles as config text or 2bpp assembly",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1],
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    asm = subparsers.add_parser("asm", help="Export pattern data as assembly")
    asm.add_argument("image", help="Tile sheet image")
    asm.add_argument("--config", required=True, help="Config text or @file")
    asm.add_argument("--prefix", default=DEFAULT_SYMBOL_PREFIX, help="Symbol prefix")
    asm.add_argument(
        "--label-prefix", default=DEFAULT_LABEL_PREFIX,
        help="Prefix stripped from labels before reading their hex address",
    )
    asm.add_argument("-o", "--output", help="Output file (default: stdout)")
    asm.set_defaults(func=cmd_asm)

    config = subparsers.add_parser("config", help="Normalize a config line")
    config.add_argument("--config", required=True, help="Config text or @file")
    config.add_argument("-o", "--output", help="Output file (default: stdout)")
    config.set_defaults(func=cmd_config)

    grid = subparsers.add_parser("grid", help="Print the tile grid size")
    grid.add_argument("image", help="Tile sheet image")
    grid.set_defaults(func=cmd_grid)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, stream=sys.stderr)

    try:
        return args.func(args)
    except (OSError, TileLabelerError) as e:
        print(f"Error: {format_error_message(args.command, e)}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
