#!/usr/bin/env python3
"""
Constants for the tile labeler
Tile geometry, codec limits and text format separators in one place
"""

# Tile specifications
TILE_WIDTH = 8  # pixels
TILE_HEIGHT = 8  # pixels
PIXELS_PER_TILE = 64  # 8x8
CHANNELS_PER_PIXEL = 4  # RGBA8
BYTES_PER_TILE_RGBA = 256  # 64 pixels * 4 channels

# Pattern codec
MAX_PALETTE_LEVELS = 4  # 2 bits per pixel
BITPLANES_PER_TILE = 2
PATTERN_STRIDE = 16  # bytes per encoded tile (8 rows * 2 planes)
SAMPLED_CHANNEL = 0  # only the first channel is quantized

# Assembly output
ASM_COMMENT = ";"
ASM_ORG_DIRECTIVE = "       .org"
ASM_SYMBOL_INDENT = "        "
ASM_DATA_DIRECTIVE = "        .db     %"
ASM_TERMINATOR = ";"

# Config text format
ENTRY_SEPARATOR = ","
FIELD_SEPARATOR = ":"
COORD_SEPARATOR = "_"
IGNORED_TOKEN_LENGTH = 3  # tokens this long or shorter are skipped on import

# Label generation
LABEL_FORMAT = "#04x"  # 0x00, 0x1f, 0x100
DEFAULT_LABEL_PREFIX = ""
DEFAULT_SYMBOL_PREFIX = "Tile_"
