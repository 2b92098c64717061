"""
Controllers package for the tile labeler
Provides controller classes for MVC architecture
"""

from .base_controller import BaseController
from .tile_sheet_controller import TileSheetController

__all__ = [
    "BaseController",
    "TileSheetController",
]
