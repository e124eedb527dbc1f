"""Admissible ground-level viewpoint locations inside a room."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy.ndimage import binary_erosion

from ..errors import MaskResolutionError, RoomStructureError
from ..models.config import CameraConfig
from ..scene.geometry import BoundingBox
from ..scene.nodes import NodeCategory, SceneNode
from ..scene.scene import Scene
from .raster import XYGrid, rasterize_nodes

# Largest grid spacing used for viewpoint masks
MAX_GRID_SPACING = 0.1

logger = logging.getLogger(__name__)


def room_structure(room: SceneNode) -> Tuple[SceneNode, SceneNode, SceneNode]:
    """Wall, floor and ceiling groups of a room.

    Raises:
        RoomStructureError: If room is not a Room# node whose first three
            children are Walls#, Floors# and Ceilings# nodes
    """
    if room is None or room.category != NodeCategory.ROOM:
        raise RoomStructureError(f"Not a room node: {room!r}")
    if len(room.children) < 3:
        raise RoomStructureError(f"Room {room.name} has fewer than 3 children")
    expected = (NodeCategory.WALLS, NodeCategory.FLOORS, NodeCategory.CEILINGS)
    for child, category in zip(room.children[:3], expected):
        if child.category != category:
            raise RoomStructureError(
                f"Room {room.name}: expected {category.value} node, found {child.name!r}"
            )
    walls, floors, ceilings = room.children[:3]
    return walls, floors, ceilings


def erode(mask: np.ndarray, iterations: int, border_value: int) -> np.ndarray:
    """Binary erosion by a number of cells, identity for zero iterations."""
    if iterations <= 0:
        return mask.astype(bool)
    return binary_erosion(mask.astype(bool), iterations=iterations, border_value=border_value)


@dataclass
class ViewpointMask:
    """0/1 grid of admissible viewpoints over a room's XY extent."""

    grid: XYGrid
    floor_mask: np.ndarray
    free_mask: np.ndarray

    @property
    def values(self) -> np.ndarray:
        return self.grid.values

    @property
    def spacing(self) -> float:
        return self.grid.cell_width

    def value_at(self, x: float, y: float) -> float:
        return self.grid.value_at(x, y)

    def is_admissible(self, x: float, y: float) -> bool:
        """True where the location is on the floor and clear of obstacles."""
        return self.value_at(x, y) >= 0.5

    def admissible_count(self) -> int:
        return int(np.count_nonzero(self.grid.values >= 0.5))


class ViewpointMaskBuilder:
    """Rasterizes a room's floor and obstacles into a ViewpointMask."""

    def __init__(self, scene: Scene, config: Optional[CameraConfig] = None):
        self.scene = scene
        self.config = config or CameraConfig()

    def grid_spacing(self) -> float:
        clearance = self.config.min_distance_from_obstacle
        if clearance == 0:
            return MAX_GRID_SPACING
        return min(MAX_GRID_SPACING, clearance / 2.0)

    def erosion_cells(self, spacing: float) -> int:
        """Cells to erode so the margin matches the clearance distance."""
        return int(round(self.config.min_distance_from_obstacle / spacing))

    def build(self, room: SceneNode) -> ViewpointMask:
        """Build the viewpoint mask for one room.

        Raises:
            RoomStructureError: Room lacks the wall/floor/ceiling triple
            MaskResolutionError: Room is smaller than 3x3 grid cells
        """
        walls, floors, ceilings = room_structure(room)
        scene = self.scene

        room_bbox = scene.node_bbox(room)
        floor_bbox = scene.node_bbox(floors)
        ceiling_bbox = scene.node_bbox(ceilings)
        if room_bbox is None or floor_bbox is None:
            raise RoomStructureError(f"Room {room.name} has no floor geometry")

        spacing = self.grid_spacing()
        xlen, ylen = room_bbox.lengths[0], room_bbox.lengths[1]
        xres = int(xlen / spacing)
        yres = int(ylen / spacing)
        if xres < 3 or yres < 3:
            raise MaskResolutionError(
                f"Room {room.name} mask resolution {xres}x{yres} is below 3x3"
            )
        cells = self.erosion_cells(spacing)

        # Floor presence, inset from the floor boundary
        floor_grid = XYGrid(room_bbox.lo[0], room_bbox.lo[1], room_bbox.hi[0], room_bbox.hi[1], xres, yres)
        rasterize_nodes(floor_grid, scene, [floors], floor_bbox)
        floor_grid.threshold(0.5, 0.0, 1.0)
        floor_mask = erode(floor_grid.values > 0.5, cells, border_value=0)

        # Obstacles between floor top and ceiling bottom
        eps = 1e-6
        slab_lo = room_bbox.lo.copy()
        slab_hi = room_bbox.hi.copy()
        slab_lo[2] = floor_bbox.hi[2] + eps
        slab_hi[2] = (ceiling_bbox.lo[2] if ceiling_bbox is not None else room_bbox.hi[2]) - eps
        slab = BoundingBox(slab_lo, slab_hi)

        obstacles = [child for child in room.children if child is not floors and child is not ceilings]
        if room.parent is not None:
            obstacles.extend(node for node in room.parent.children if node.is_leaf)

        object_grid = floor_grid.copy_empty()
        rasterize_nodes(object_grid, scene, obstacles, slab)
        object_grid.threshold(0.5, 1.0, 0.0)
        free_mask = erode(object_grid.values > 0.5, cells, border_value=1)

        mask_grid = floor_grid.copy_empty()
        mask_grid.values = (floor_mask & free_mask).astype(float)

        logger.debug(
            f"Viewpoint mask for {room.name}: {xres}x{yres} cells, "
            f"{int(mask_grid.values.sum())} admissible"
        )
        return ViewpointMask(grid=mask_grid, floor_mask=floor_mask, free_mask=free_mask)
