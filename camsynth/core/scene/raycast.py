"""Ray/triangle casting backed by open3d raycasting scenes."""

import logging
from typing import Dict, Tuple, Union

import numpy as np
import open3d as o3d

logger = logging.getLogger(__name__)

NO_HIT = -1


class TriangleSoup:
    """Flat array of world-space triangles prepared for ray casting.

    One open3d RaycastingScene is built lazily per contiguous triangle
    range, so subtree-restricted queries reuse their own acceleration
    structure.
    """

    def __init__(self, triangles: np.ndarray):
        self.triangles = np.asarray(triangles, dtype=float).reshape(-1, 3, 3)
        self._scenes: Dict[Tuple[int, int], o3d.t.geometry.RaycastingScene] = {}

    def __len__(self) -> int:
        return len(self.triangles)

    def raycasting_scene(self, start: int, stop: int) -> o3d.t.geometry.RaycastingScene:
        """Raycasting scene over triangles [start, stop), built on first use."""
        key = (start, stop)
        if key not in self._scenes:
            triangles = self.triangles[start:stop]
            vertices = o3d.core.Tensor(triangles.reshape(-1, 3).astype(np.float32))
            indices = o3d.core.Tensor(np.arange(3 * len(triangles), dtype=np.uint32).reshape(-1, 3))
            scene = o3d.t.geometry.RaycastingScene()
            scene.add_triangles(vertices, indices)
            self._scenes[key] = scene
            logger.debug(f"Raycasting scene created for triangles {start}:{stop}")
        return self._scenes[key]

    def cast_rays(
        self,
        origins: np.ndarray,
        directions: np.ndarray,
        t_min: Union[float, np.ndarray] = 0.0,
        t_max: Union[float, np.ndarray] = np.inf,
        start: int = 0,
        stop: int = None
    ) -> Dict[str, np.ndarray]:
        """Find the closest triangle hit along each ray.

        Triangles are two-sided. Only triangles in [start, stop) are tested.

        Args:
            origins: Nx3 ray origins
            directions: Nx3 ray directions (unit length for metric t)
            t_min: Minimum accepted hit distance, scalar or per ray
            t_max: Maximum accepted hit distance, scalar or per ray
            start: First triangle index considered
            stop: One past the last triangle index considered

        Returns:
            Dictionary with 't_hit' (inf where no hit) and 'primitive_ids'
            (NO_HIT where no hit), both of length N
        """
        origins = np.atleast_2d(np.asarray(origins, dtype=float))
        directions = np.atleast_2d(np.asarray(directions, dtype=float))
        n_rays = len(origins)
        if directions.shape != origins.shape:
            raise ValueError(
                f"origins and directions must have the same shape, got {origins.shape} and {directions.shape}"
            )
        t_min = np.broadcast_to(np.asarray(t_min, dtype=float), (n_rays,))
        t_max = np.broadcast_to(np.asarray(t_max, dtype=float), (n_rays,))

        stop = len(self) if stop is None else stop
        t_hit = np.full(n_rays, np.inf)
        prim_ids = np.full(n_rays, NO_HIT, dtype=int)
        if n_rays == 0 or stop <= start:
            return {"t_hit": t_hit, "primitive_ids": prim_ids}

        # Rays start at t_min, so hits closer than that are never reported
        starts = origins + t_min[:, np.newaxis] * directions
        rays = o3d.core.Tensor(np.hstack([starts, directions]).astype(np.float32))
        results = self.raycasting_scene(start, stop).cast_rays(rays)
        hit_t = results["t_hit"].numpy().astype(float) + t_min
        hit_ids = results["primitive_ids"].numpy().astype(np.int64)

        hit = np.isfinite(hit_t) & (hit_t <= t_max)
        t_hit[hit] = hit_t[hit]
        prim_ids[hit] = hit_ids[hit] + start
        return {"t_hit": t_hit, "primitive_ids": prim_ids}
