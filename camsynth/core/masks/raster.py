"""Scalar grids over the XY plane and triangle rasterization into them."""

import numpy as np
from typing import Iterable, Optional

from ..scene.geometry import BoundingBox
from ..scene.nodes import SceneNode
from ..scene.scene import Scene


class XYGrid:
    """Regular grid of scalar values over a world-space XY rectangle.

    values[iy, ix] covers the cell whose lower-left corner is
    (xmin + ix * cell_width, ymin + iy * cell_height).
    """

    def __init__(self, xmin: float, ymin: float, xmax: float, ymax: float, xres: int, yres: int):
        if xres <= 0 or yres <= 0:
            raise ValueError(f"Grid resolution must be positive, got {xres}x{yres}")
        self.xmin, self.ymin, self.xmax, self.ymax = float(xmin), float(ymin), float(xmax), float(ymax)
        self.xres = int(xres)
        self.yres = int(yres)
        self.cell_width = (self.xmax - self.xmin) / self.xres
        self.cell_height = (self.ymax - self.ymin) / self.yres
        self.values = np.zeros((self.yres, self.xres))

    def copy_empty(self) -> "XYGrid":
        return XYGrid(self.xmin, self.ymin, self.xmax, self.ymax, self.xres, self.yres)

    def contains(self, x: float, y: float) -> bool:
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    def world_to_index(self, x: float, y: float):
        """Cell (ix, iy) containing a world point, None outside the grid."""
        if not self.contains(x, y):
            return None
        ix = min(int((x - self.xmin) / self.cell_width), self.xres - 1)
        iy = min(int((y - self.ymin) / self.cell_height), self.yres - 1)
        return ix, iy

    def value_at(self, x: float, y: float) -> float:
        """Value of the cell containing (x, y), 0 outside the grid."""
        index = self.world_to_index(x, y)
        if index is None:
            return 0.0
        ix, iy = index
        return float(self.values[iy, ix])

    def threshold(self, level: float, low: float = 0.0, high: float = 1.0) -> None:
        """Replace values <= level by low and the rest by high."""
        self.values = np.where(self.values <= level, low, high).astype(float)

    def rasterize_triangle(self, p0, p1, p2, value: float = 1.0) -> None:
        """Add value to every cell the triangle touches.

        Cells whose centers lie inside the triangle are covered, and so are
        cells crossed by its edges, so edge-on (vertical) faces still mark
        their footprint.
        """
        p0 = np.asarray(p0, dtype=float)[:2]
        p1 = np.asarray(p1, dtype=float)[:2]
        p2 = np.asarray(p2, dtype=float)[:2]
        covered = np.zeros(self.values.shape, dtype=bool)

        # Interior: cell centers inside the triangle
        area2 = (p1[0] - p0[0]) * (p2[1] - p0[1]) - (p2[0] - p0[0]) * (p1[1] - p0[1])
        if abs(area2) > 1e-12:
            lo = np.minimum(np.minimum(p0, p1), p2)
            hi = np.maximum(np.maximum(p0, p1), p2)
            ix0 = max(int(np.floor((lo[0] - self.xmin) / self.cell_width)), 0)
            ix1 = min(int(np.ceil((hi[0] - self.xmin) / self.cell_width)), self.xres)
            iy0 = max(int(np.floor((lo[1] - self.ymin) / self.cell_height)), 0)
            iy1 = min(int(np.ceil((hi[1] - self.ymin) / self.cell_height)), self.yres)
            if ix1 > ix0 and iy1 > iy0:
                xs = self.xmin + (np.arange(ix0, ix1) + 0.5) * self.cell_width
                ys = self.ymin + (np.arange(iy0, iy1) + 0.5) * self.cell_height
                X, Y = np.meshgrid(xs, ys)
                inside = np.ones(X.shape, dtype=bool)
                for a, b in ((p0, p1), (p1, p2), (p2, p0)):
                    edge = (b[0] - a[0]) * (Y - a[1]) - (b[1] - a[1]) * (X - a[0])
                    inside &= edge * np.sign(area2) >= -1e-12
                covered[iy0:iy1, ix0:ix1] |= inside

        # Edges: sample at half-cell steps
        step = 0.5 * min(self.cell_width, self.cell_height)
        for a, b in ((p0, p1), (p1, p2), (p2, p0)):
            n = max(int(np.ceil(np.linalg.norm(b - a) / step)), 1)
            s = np.linspace(0.0, 1.0, n + 1)[:, np.newaxis]
            pts = a + s * (b - a)
            ix = np.floor((pts[:, 0] - self.xmin) / self.cell_width).astype(int)
            iy = np.floor((pts[:, 1] - self.ymin) / self.cell_height).astype(int)
            ix = np.clip(ix, 0, self.xres - 1)
            iy = np.clip(iy, 0, self.yres - 1)
            covered[iy, ix] = True

        self.values[covered] += value


def rasterize_nodes(
    grid: XYGrid,
    scene: Scene,
    nodes: Iterable[SceneNode],
    clip_box: Optional[BoundingBox] = None
) -> int:
    """Rasterize the subtrees of nodes into grid.

    Triangles are skipped when their world box misses clip_box or when any
    vertex falls outside the grid rectangle.

    Returns:
        Number of triangles rasterized
    """
    count = 0
    for node in nodes:
        node_bbox = scene.node_bbox(node)
        if node_bbox is None:
            continue
        if clip_box is not None and not clip_box.intersects(node_bbox):
            continue

        triangles = scene.subtree_triangles(node)
        keep = np.ones(len(triangles), dtype=bool)
        if clip_box is not None:
            tri_lo = triangles.min(axis=1)
            tri_hi = triangles.max(axis=1)
            keep &= np.all(tri_lo <= clip_box.hi, axis=1) & np.all(clip_box.lo <= tri_hi, axis=1)
        xy = triangles[:, :, :2]
        keep &= np.all(
            (xy[:, :, 0] >= grid.xmin) & (xy[:, :, 0] <= grid.xmax)
            & (xy[:, :, 1] >= grid.ymin) & (xy[:, :, 1] <= grid.ymax),
            axis=1
        )

        for triangle in triangles[keep]:
            grid.rasterize_triangle(triangle[0], triangle[1], triangle[2], 1.0)
            count += 1
    return count
