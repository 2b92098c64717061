"""
Tile Labeler
Assigns labels to 8x8 tiles of a tile sheet and exports them as config
text or 2bpp assembly pattern data
"""

from .raster import RasterImage, load_raster
from .session import EditorState, dispatch
from .tile_registry import GridCoord, TileRegistry, format_label
from .tile_utils import AssemblyExport, PatternFailure, encode_pattern, export_assembly

__version__ = "1.0.0"
__all__ = [
    "AssemblyExport",
    "EditorState",
    "GridCoord",
    "PatternFailure",
    "RasterImage",
    "TileRegistry",
    "dispatch",
    "encode_pattern",
    "export_assembly",
    "format_label",
    "load_raster",
]
