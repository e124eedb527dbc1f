"""In-memory scene tree with the queries camera synthesis needs."""

import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ..math.transforms import ancestor_transform, transform_points
from .geometry import BoundingBox, triangle_areas
from .layout import SceneLayout
from .nodes import SceneNode
from .raycast import NO_HIT, TriangleSoup

logger = logging.getLogger(__name__)


class Scene:
    """Scene tree plus a world-space triangle soup for ray queries.

    Nodes are indexed in pre-order, so every subtree covers a contiguous
    range of node indices and of triangles. Call `refresh()` after editing
    the tree, transforms or meshes.
    """

    def __init__(self, root: SceneNode, layout: Optional[SceneLayout] = None):
        self.root = root
        self.layout = layout
        self.refresh()

    def refresh(self) -> None:
        """Re-index nodes and rebuild world-space geometry."""
        self.nodes: List[SceneNode] = list(self._preorder(self.root))
        n = len(self.nodes)
        for i, node in enumerate(self.nodes):
            node.index = i

        self._subtree_end = np.zeros(n, dtype=int)
        for node in reversed(self.nodes):
            end = node.index + 1
            for child in node.children:
                end = max(end, self._subtree_end[child.index])
            self._subtree_end[node.index] = end

        self._world = [None] * n
        triangles = []
        owners = []
        self._tri_start = np.zeros(n + 1, dtype=int)
        for node in self.nodes:
            parent_world = np.eye(4) if node.parent is None else self._world[node.parent.index]
            world = parent_world @ node.transform
            self._world[node.index] = world
            local = node.local_triangles()
            if len(local):
                world_tris = transform_points(world, local.reshape(-1, 3)).reshape(-1, 3, 3)
                triangles.append(world_tris)
                owners.append(np.full(len(world_tris), node.index, dtype=int))
            self._tri_start[node.index + 1] = self._tri_start[node.index] + len(local)

        if triangles:
            all_tris = np.concatenate(triangles, axis=0)
            self._triangle_nodes = np.concatenate(owners)
        else:
            all_tris = np.zeros((0, 3, 3))
            self._triangle_nodes = np.zeros(0, dtype=int)
        self._soup = TriangleSoup(all_tris)
        self._bboxes = {}

        logger.debug(f"Scene indexed: {n} nodes, {len(all_tris)} triangles")

    @staticmethod
    def _preorder(root: SceneNode) -> Iterator[SceneNode]:
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @property
    def n_nodes(self) -> int:
        return len(self.nodes)

    @property
    def n_triangles(self) -> int:
        return len(self._soup)

    def find(self, name: str) -> Optional[SceneNode]:
        """First node (pre-order) with the given name."""
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def rooms(self) -> List[SceneNode]:
        return [node for node in self.nodes if node.is_room()]

    def objects(self) -> List[SceneNode]:
        return [node for node in self.nodes if node.is_object()]

    # Transforms

    def world_transform(self, node: SceneNode) -> np.ndarray:
        """Transform from node-local coordinates to world coordinates."""
        return self._world[node.index]

    def ancestor_transform(self, node: SceneNode) -> np.ndarray:
        """Transform from the node's parent frame to world coordinates."""
        return ancestor_transform(node)

    # Geometry

    def node_triangles(self, node: SceneNode) -> np.ndarray:
        """World-space triangles of the node's own meshes."""
        lo, hi = self._tri_start[node.index], self._tri_start[node.index + 1]
        return self._soup.triangles[lo:hi]

    def subtree_triangles(self, node: SceneNode) -> np.ndarray:
        """World-space triangles of the node and all descendants."""
        lo, hi = self._subtree_triangle_range(node)
        return self._soup.triangles[lo:hi]

    def _subtree_triangle_range(self, node: SceneNode) -> Tuple[int, int]:
        return int(self._tri_start[node.index]), int(self._tri_start[self._subtree_end[node.index]])

    def node_bbox(self, node: SceneNode) -> Optional[BoundingBox]:
        """World-space box of the node's subtree geometry, None if it has none."""
        if node.index not in self._bboxes:
            self._bboxes[node.index] = BoundingBox.from_points(
                self.subtree_triangles(node).reshape(-1, 3)
            )
        return self._bboxes[node.index]

    @property
    def bbox(self) -> Optional[BoundingBox]:
        return self.node_bbox(self.root)

    def surface_samples(
        self,
        node: SceneNode,
        target_count: int,
        max_count: int,
        rng: np.random.Generator
    ) -> np.ndarray:
        """Area-weighted random points on the node's own surface.

        Each triangle receives target_count * area / total_area samples, the
        fractional part resolved by one Bernoulli draw. At most max_count
        points are returned.

        Returns:
            Kx3 world-space points (K may be 0)
        """
        triangles = self.node_triangles(node)
        areas = triangle_areas(triangles)
        total_area = areas.sum()
        if len(triangles) == 0 or total_area <= 1e-12:
            return np.zeros((0, 3))

        expected = target_count * areas / total_area
        counts = np.floor(expected).astype(int)
        counts += (rng.random(len(triangles)) < (expected - counts)).astype(int)

        tri_index = np.repeat(np.arange(len(triangles)), counts)[:max_count]
        r1 = np.sqrt(rng.random(len(tri_index)))
        r2 = rng.random(len(tri_index))
        a = triangles[tri_index, 0]
        b = triangles[tri_index, 1]
        c = triangles[tri_index, 2]
        points = (
            (1.0 - r1)[:, np.newaxis] * a
            + (r1 * (1.0 - r2))[:, np.newaxis] * b
            + (r1 * r2)[:, np.newaxis] * c
        )
        return points

    # Ray queries

    def cast_rays(
        self,
        origins: np.ndarray,
        directions: np.ndarray,
        t_min=0.0,
        t_max=np.inf,
        root: Optional[SceneNode] = None
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Closest hit per ray against the scene or one subtree.

        Returns:
            Tuple of (t_hit, node_ids); t_hit is inf and node_ids is -1 where
            the ray hits nothing
        """
        root = self.root if root is None else root
        lo, hi = self._subtree_triangle_range(root)
        result = self._soup.cast_rays(origins, directions, t_min, t_max, start=lo, stop=hi)
        prim_ids = result["primitive_ids"]
        node_ids = np.where(prim_ids == NO_HIT, NO_HIT, self._triangle_nodes[np.maximum(prim_ids, 0)])
        return result["t_hit"], node_ids

    def intersect(
        self,
        origin: np.ndarray,
        direction: np.ndarray,
        max_distance: float = np.inf,
        min_distance: float = 0.0
    ) -> Optional[Tuple[SceneNode, float]]:
        """First node hit by a single ray within [min_distance, max_distance].

        Args:
            origin: Ray origin
            direction: Ray direction (normalized internally)
            max_distance: Farthest accepted hit
            min_distance: Nearest accepted hit

        Returns:
            (node, distance) of the first hit, or None
        """
        direction = np.asarray(direction, dtype=float)
        direction = direction / np.linalg.norm(direction)
        t_hit, node_ids = self.cast_rays(
            np.asarray(origin, dtype=float)[np.newaxis],
            direction[np.newaxis],
            min_distance,
            max_distance
        )
        if node_ids[0] == NO_HIT:
            return None
        return self.nodes[node_ids[0]], float(t_hit[0])
