"""Cameras standing in front of each wall, looking into the room."""

import logging
import math
import time
from typing import List

import numpy as np

from ..models.entities import Camera
from ..math.vectors import rotate_2d
from ..scene.layout import RoomLayout, WallSegment
from ..scene.nodes import NodeCategory, SceneNode
from .candidates import CandidateGenerator, CandidateSet, direction_buckets

logger = logging.getLogger(__name__)


def has_ceiling(room: SceneNode) -> bool:
    return len(room.children) >= 3 and room.children[2].category == NodeCategory.CEILINGS


class WallCameraGenerator(CandidateGenerator):
    """Sweeps positions along every wall and view angles into the room.

    Needs the scene's floor plan (`scene.layout`). Storeys stack: cameras on
    storey i sit at eye height plus the heights of the storeys below.
    """

    strategy = "wall"

    def wall_positions(self, wall: WallSegment, room_layout: RoomLayout):
        """Yield (position, inward normal) pairs along a wall."""
        length = wall.length
        if length <= 0:
            return
        room_bbox = room_layout.wall_bbox()
        center = room_bbox.centroid[:2]

        npositions = int(length / self.config.position_sampling + 0.5)
        spacing = length / npositions if npositions > 1 else length
        t = 0.5 * spacing
        while t < length:
            position = wall.point(t)
            normal = wall.normal()
            if np.dot(center - position, normal) < 0:
                normal = -normal
            position = position + (wall.thickness + self.config.min_distance_from_obstacle) * normal
            if room_bbox.contains_xy(position[0], position[1]):
                yield position, normal
            t += spacing

    def wall_angles(self):
        """Jittered view angles between xfov and pi - xfov from the wall."""
        angle_range = math.pi - 2.0 * self.xfov
        nangles, spacing = direction_buckets(self.angle_sampling, angle_range)
        for i in range(nangles):
            yield self.xfov + (i + self.rng.random()) * spacing

    def generate(self) -> List[Camera]:
        start_time = time.time()
        layout = self.scene.layout
        if layout is None:
            logger.warning("Scene has no floor plan layout, skipping wall cameras")
            return []

        config = self.config
        cameras = []
        heights = layout.floor_heights(config.eye_height)
        for i, (floor, z) in enumerate(zip(layout.floors, heights)):
            for j, room_layout in enumerate(floor.rooms):
                room = room_layout.node
                if not has_ceiling(room):
                    logger.warning(f"Skipping room {room.name}: no Ceilings# third child")
                    continue
                if not room_layout.walls:
                    continue

                candidates = CandidateSet(config.min_score)
                for k, wall in enumerate(room_layout.walls):
                    for position, normal in self.wall_positions(wall, room_layout):
                        for angle in self.wall_angles():
                            direction = rotate_2d(normal, angle - math.pi / 2.0)
                            zcamera = z + self.eye_jitter()
                            viewpoint = np.array([position[0], position[1], zcamera])
                            towards = np.array([direction[0], direction[1], config.view_pitch])
                            camera = self.make_camera(viewpoint, towards, name=f"{room.name}_{k}")
                            camera.value = self.scorer.scene_coverage(camera, room)
                            candidates.offer(k, camera)

                    best = candidates.best(k)
                    if best is not None:
                        logger.debug(f"WALL {i} {j} {k} {best.value:g}")

                cameras.extend(candidates.cameras())

        logger.info(
            f"Created wall cameras: {len(cameras)} cameras in {time.time() - start_time:.2f} seconds"
        )
        return cameras
