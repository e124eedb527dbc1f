"""Synthetic box-shaped houses for tests and demos."""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..scene.geometry import box_mesh, quad_mesh
from ..scene.layout import FloorLayout, RoomLayout, SceneLayout, WallSegment
from ..scene.nodes import SceneNode
from ..scene.scene import Scene

# (center, size) of an axis-aligned box
BoxSpec = Tuple[Sequence[float], Sequence[float]]


class SceneGenerator:
    """Builds scene trees following the Project#/Room#/Walls# naming scheme.

    Every room gets Walls#, Floors# and Ceilings# children first, in that
    order, followed by its objects.
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize scene generator.

        Args:
            seed: Random seed for reproducible object placement
        """
        self.rng = np.random.default_rng(seed)
        self.root = SceneNode("Project#0")
        self.floors: List[FloorLayout] = []
        self._room_count = 0
        self._object_count = 0

    def add_floor(self, height: float) -> FloorLayout:
        """Start a new storey; rooms added afterwards belong to it."""
        floor = FloorLayout(height=height)
        self.floors.append(floor)
        return floor

    def add_room(
        self,
        lo: Sequence[float],
        hi: Sequence[float],
        wall_thickness: float = 0.1
    ) -> SceneNode:
        """Add a room whose interior is the box [lo, hi].

        Walls are boxes just outside the interior footprint; the floor and
        ceiling are quads at the bottom and top of the interior.

        Args:
            lo: Interior minimum corner [x, y, z]
            hi: Interior maximum corner [x, y, z]
            wall_thickness: Wall box thickness; 0 builds no wall geometry

        Returns:
            The Room# node
        """
        lo = np.asarray(lo, dtype=float)
        hi = np.asarray(hi, dtype=float)
        if np.any(hi <= lo):
            raise ValueError(f"Room interior must have positive extent, got {lo} to {hi}")
        if not self.floors:
            self.add_floor(hi[2] - lo[2])

        k = self._room_count
        self._room_count += 1
        room = self.root.add_child(SceneNode(f"Room#{k}"))
        walls = room.add_child(SceneNode(f"Walls#{k}"))
        room.add_child(SceneNode(f"Floors#{k}", meshes=[quad_mesh(lo[:2], hi[:2], lo[2], facing_up=True)]))
        room.add_child(SceneNode(f"Ceilings#{k}", meshes=[quad_mesh(lo[:2], hi[:2], hi[2], facing_up=False)]))

        t = wall_thickness
        if t > 0:
            (x0, y0, z0), (x1, y1, z1) = lo, hi
            walls.add_mesh(box_mesh([x0 - t, y0 - t, z0], [x1 + t, y0, z1]))
            walls.add_mesh(box_mesh([x1, y0, z0], [x1 + t, y1, z1]))
            walls.add_mesh(box_mesh([x0 - t, y1, z0], [x1 + t, y1 + t, z1]))
            walls.add_mesh(box_mesh([x0 - t, y0, z0], [x0, y1, z1]))

        # Wall centerlines, counter-clockwise
        h = 0.5 * t
        corners = [
            (lo[0] - h, lo[1] - h), (hi[0] + h, lo[1] - h),
            (hi[0] + h, hi[1] + h), (lo[0] - h, hi[1] + h),
        ]
        segments = [WallSegment(corners[i], corners[(i + 1) % 4], t) for i in range(4)]
        self.floors[-1].rooms.append(RoomLayout(node=room, walls=segments))
        return room

    def add_box(self, parent: SceneNode, center: Sequence[float], size: Sequence[float], name: Optional[str] = None) -> SceneNode:
        """Add an axis-aligned box object under parent."""
        center = np.asarray(center, dtype=float)
        half = 0.5 * np.broadcast_to(np.asarray(size, dtype=float), (3,))
        if name is None:
            name = f"Object#{self._object_count}"
        self._object_count += 1
        return parent.add_child(SceneNode(name, meshes=[box_mesh(center - half, center + half)]))

    def add_random_boxes(
        self,
        room: SceneNode,
        count: int,
        size_range: Tuple[float, float] = (0.4, 1.2),
        margin: float = 0.5
    ) -> List[SceneNode]:
        """Scatter boxes standing on the floor of a room.

        Args:
            room: Room# node created by add_room
            count: Number of boxes
            size_range: Min and max box edge length
            margin: Distance kept between boxes and walls

        Returns:
            The new object nodes
        """
        floors = room.children[1]
        lo = floors.meshes[0].vertices.min(axis=0)
        hi = floors.meshes[0].vertices.max(axis=0)
        boxes = []
        for _ in range(count):
            size = self.rng.uniform(size_range[0], size_range[1], 3)
            xy_lo = lo[:2] + margin + 0.5 * size[:2]
            xy_hi = hi[:2] - margin - 0.5 * size[:2]
            if np.any(xy_hi <= xy_lo):
                continue
            xy = self.rng.uniform(xy_lo, xy_hi)
            center = [xy[0], xy[1], lo[2] + 0.5 * size[2]]
            boxes.append(self.add_box(room, center, size))
        return boxes

    def build(self) -> Scene:
        """Scene over everything added so far, with its floor plan."""
        return Scene(self.root, layout=SceneLayout(floors=list(self.floors)))


def make_box_room(
    room_size: Sequence[float] = (10.0, 10.0, 3.0),
    objects: Optional[Sequence[BoxSpec]] = None,
    wall_thickness: float = 0.1,
    seed: Optional[int] = None
) -> Scene:
    """Single room with its interior from the origin to room_size.

    Args:
        room_size: Interior extent (x, y, z)
        objects: (center, size) of each box object placed in the room
        wall_thickness: Wall box thickness; 0 builds no walls
        seed: Random seed

    Returns:
        Scene with a Project#0 root and one Room#0
    """
    generator = SceneGenerator(seed)
    room = generator.add_room([0.0, 0.0, 0.0], room_size, wall_thickness)
    for center, size in objects or []:
        generator.add_box(room, center, size)
    return generator.build()


def make_two_room_house(
    room_size: Sequence[float] = (6.0, 5.0, 2.8),
    objects_per_room: int = 4,
    wall_thickness: float = 0.1,
    seed: Optional[int] = None
) -> Scene:
    """Two rooms side by side along x, each with random furniture boxes."""
    generator = SceneGenerator(seed)
    sx, sy, sz = room_size
    offset = sx + 2.0 * wall_thickness
    for i in range(2):
        lo = [i * offset, 0.0, 0.0]
        hi = [i * offset + sx, sy, sz]
        room = generator.add_room(lo, hi, wall_thickness)
        generator.add_random_boxes(room, objects_per_room)
    return generator.build()
