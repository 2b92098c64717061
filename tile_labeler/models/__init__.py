"""
Models package for the tile labeler
Provides data models for MVC architecture
"""

from .base_model import BaseModel, ObservableProperty
from .tile_sheet_model import TileSheetModel

__all__ = [
    'BaseModel',
    'ObservableProperty',
    'TileSheetModel',
]
