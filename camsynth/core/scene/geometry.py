"""Triangle meshes and axis-aligned bounding boxes."""

import numpy as np
from typing import Optional


class BoundingBox:
    """Axis-aligned box in world coordinates."""

    def __init__(self, lo: np.ndarray, hi: np.ndarray):
        self.lo = np.asarray(lo, dtype=float)
        self.hi = np.asarray(hi, dtype=float)

    @classmethod
    def from_points(cls, points: np.ndarray) -> Optional["BoundingBox"]:
        """Tight box around an Nx3 point array, None if there are no points."""
        points = np.asarray(points, dtype=float).reshape(-1, 3)
        if len(points) == 0:
            return None
        return cls(points.min(axis=0), points.max(axis=0))

    @property
    def centroid(self) -> np.ndarray:
        return 0.5 * (self.lo + self.hi)

    @property
    def lengths(self) -> np.ndarray:
        return self.hi - self.lo

    @property
    def diagonal_radius(self) -> float:
        """Half the length of the box diagonal."""
        return 0.5 * float(np.linalg.norm(self.hi - self.lo))

    def intersects(self, other: "BoundingBox") -> bool:
        return bool(np.all(self.lo <= other.hi) and np.all(other.lo <= self.hi))

    def contains_xy(self, x: float, y: float) -> bool:
        return bool(self.lo[0] <= x <= self.hi[0] and self.lo[1] <= y <= self.hi[1])

    def __repr__(self) -> str:
        return f"BoundingBox(lo={self.lo.tolist()}, hi={self.hi.tolist()})"


class TriangleMesh:
    """Indexed triangle surface in node-local coordinates."""

    def __init__(self, vertices: np.ndarray, faces: np.ndarray):
        vertices = np.asarray(vertices, dtype=float)
        faces = np.asarray(faces, dtype=int)
        if vertices.ndim != 2 or vertices.shape[1] != 3:
            raise ValueError(f"vertices must be Nx3 array, got shape {vertices.shape}")
        if faces.ndim != 2 or faces.shape[1] != 3:
            raise ValueError(f"faces must be Mx3 array, got shape {faces.shape}")
        if len(faces) > 0 and (faces.min() < 0 or faces.max() >= len(vertices)):
            raise ValueError("face indices out of range")
        self.vertices = vertices
        self.faces = faces

    @property
    def n_triangles(self) -> int:
        return len(self.faces)

    def triangles(self) -> np.ndarray:
        """(M, 3, 3) array of triangle vertex positions."""
        return self.vertices[self.faces]


def triangle_areas(triangles: np.ndarray) -> np.ndarray:
    """Areas of an (M, 3, 3) triangle array."""
    if len(triangles) == 0:
        return np.zeros(0)
    e1 = triangles[:, 1] - triangles[:, 0]
    e2 = triangles[:, 2] - triangles[:, 0]
    return 0.5 * np.linalg.norm(np.cross(e1, e2), axis=1)


def box_mesh(lo: np.ndarray, hi: np.ndarray) -> TriangleMesh:
    """Closed 12-triangle mesh of an axis-aligned box."""
    x0, y0, z0 = np.asarray(lo, dtype=float)
    x1, y1, z1 = np.asarray(hi, dtype=float)
    vertices = np.array([
        [x0, y0, z0], [x1, y0, z0], [x1, y1, z0], [x0, y1, z0],
        [x0, y0, z1], [x1, y0, z1], [x1, y1, z1], [x0, y1, z1],
    ])
    faces = np.array([
        [0, 2, 1], [0, 3, 2],  # bottom
        [4, 5, 6], [4, 6, 7],  # top
        [0, 1, 5], [0, 5, 4],  # -y
        [1, 2, 6], [1, 6, 5],  # +x
        [2, 3, 7], [2, 7, 6],  # +y
        [3, 0, 4], [3, 4, 7],  # -x
    ])
    return TriangleMesh(vertices, faces)


def quad_mesh(lo_xy: np.ndarray, hi_xy: np.ndarray, z: float, facing_up: bool = True) -> TriangleMesh:
    """Horizontal rectangle at height z as two triangles."""
    x0, y0 = np.asarray(lo_xy, dtype=float)
    x1, y1 = np.asarray(hi_xy, dtype=float)
    vertices = np.array([[x0, y0, z], [x1, y0, z], [x1, y1, z], [x0, y1, z]])
    if facing_up:
        faces = np.array([[0, 1, 2], [0, 2, 3]])
    else:
        faces = np.array([[0, 2, 1], [0, 3, 2]])
    return TriangleMesh(vertices, faces)
