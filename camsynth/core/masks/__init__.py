"""Viewpoint masks."""

from .raster import XYGrid, rasterize_nodes
from .viewpoint_mask import ViewpointMask, ViewpointMaskBuilder, room_structure

__all__ = [
    "XYGrid",
    "rasterize_nodes",
    "ViewpointMask",
    "ViewpointMaskBuilder",
    "room_structure",
]
