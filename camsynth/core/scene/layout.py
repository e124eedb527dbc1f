"""Floor plan data used by wall-centric camera generation."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .nodes import SceneNode
from .geometry import BoundingBox


@dataclass
class WallSegment:
    """Straight wall in the floor plane, world XY coordinates."""

    start: Tuple[float, float]
    end: Tuple[float, float]
    thickness: float = 0.0

    @property
    def length(self) -> float:
        return float(np.linalg.norm(np.subtract(self.end, self.start)))

    def direction(self) -> np.ndarray:
        d = np.subtract(self.end, self.start).astype(float)
        return d / np.linalg.norm(d)

    def normal(self) -> np.ndarray:
        """Left-hand unit normal of the segment."""
        d = self.direction()
        return np.array([-d[1], d[0]])

    def point(self, t: float) -> np.ndarray:
        """Point at arclength t from start."""
        return np.asarray(self.start, dtype=float) + t * self.direction()


@dataclass
class RoomLayout:
    """A room node together with the walls bounding it."""

    node: SceneNode
    walls: List[WallSegment] = field(default_factory=list)

    def wall_bbox(self) -> Optional[BoundingBox]:
        """XY box around all wall endpoints (z is zero)."""
        if not self.walls:
            return None
        points = []
        for wall in self.walls:
            points.append([wall.start[0], wall.start[1], 0.0])
            points.append([wall.end[0], wall.end[1], 0.0])
        return BoundingBox.from_points(np.array(points))


@dataclass
class FloorLayout:
    """One storey: its height and the rooms on it."""

    height: float
    rooms: List[RoomLayout] = field(default_factory=list)


@dataclass
class SceneLayout:
    """Storeys of a house, bottom to top."""

    floors: List[FloorLayout] = field(default_factory=list)

    def floor_heights(self, eye_height: float) -> List[float]:
        """Camera height on each storey: eye height plus the storeys below."""
        heights = []
        z = eye_height
        for floor in self.floors:
            heights.append(z)
            z += floor.height
        return heights
