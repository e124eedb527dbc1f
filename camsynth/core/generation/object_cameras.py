"""Close-up cameras, one per object."""

import logging
import math
import time
from typing import List

import numpy as np

from ..models.entities import Camera
from ..scene.nodes import SceneNode
from .candidates import CandidateGenerator, CandidateSet, direction_buckets

logger = logging.getLogger(__name__)


class ObjectCameraGenerator(CandidateGenerator):
    """Looks at every object from jittered directions around it.

    Each direction bucket proposes one viewpoint on a circle around the
    object's centroid, pulled in front of any occluder, and scored by object
    coverage. The best bucket per object is kept.
    """

    strategy = "object"

    def floor_height(self, node: SceneNode):
        """World z of the floor under node when its parent is a room or floor."""
        parent = node.parent
        if parent is None or not parent.name:
            return None
        if "Room" not in parent.name and "Floor" not in parent.name:
            return None
        parent_bbox = self.scene.node_bbox(parent)
        if parent_bbox is None:
            return None
        return float(parent_bbox.lo[2])

    def candidate_viewpoint(self, node: SceneNode, centroid: np.ndarray, radius: float, direction: np.ndarray) -> np.ndarray:
        """Viewpoint for one view direction, kept in front of occluders."""
        config = self.config
        clearance = config.min_distance_from_obstacle
        min_distance = max(radius, clearance)
        max_distance = max(1.5 * radius / math.tan(self.xfov), clearance)
        viewpoint = centroid - max_distance * direction

        floor_z = self.floor_height(node)
        if floor_z is not None:
            viewpoint[2] = floor_z + config.eye_height + self.eye_jitter()

        back = viewpoint - centroid
        distance = float(np.linalg.norm(back))
        if distance < 1e-9:
            return viewpoint
        back /= distance
        if distance > min_distance:
            hit = self.scene.intersect(centroid, back, max_distance=distance, min_distance=min_distance)
            if hit is not None:
                _, hit_t = hit
                viewpoint = centroid + (hit_t - clearance) * back
        return viewpoint

    def generate(self) -> List[Camera]:
        start_time = time.time()
        candidates = CandidateSet(self.config.min_score)
        nangles, angle_spacing = direction_buckets(self.angle_sampling)

        for node in self.scene.objects():
            bbox = self.scene.node_bbox(node)
            if bbox is None:
                continue
            centroid = bbox.centroid
            radius = bbox.diagonal_radius

            for j in range(nangles):
                angle = (j + self.rng.random()) * angle_spacing
                direction = np.array([-math.cos(angle), -math.sin(angle), 0.0])

                viewpoint = self.candidate_viewpoint(node, centroid, radius, direction)
                towards = centroid - viewpoint
                if np.linalg.norm(towards) < 1e-9:
                    continue

                camera = self.make_camera(viewpoint, towards, name=node.name)
                camera.value = self.scorer.object_coverage(camera, node)
                candidates.offer(node.index, camera)

            best = candidates.best(node.index)
            if best is not None:
                logger.debug(f"OBJECT {node.name or '-'} {best.value:g}")

        cameras = candidates.cameras()
        logger.info(
            f"Created object cameras: {len(cameras)} cameras in {time.time() - start_time:.2f} seconds"
        )
        return cameras
