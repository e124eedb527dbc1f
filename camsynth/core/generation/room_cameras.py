"""Cameras scattered over each room's floor, one per view direction."""

import logging
import math
import time
from typing import List, Optional

import numpy as np

from ..errors import MaskResolutionError, RoomStructureError
from ..masks.viewpoint_mask import ViewpointMaskBuilder
from ..models.entities import Camera
from .candidates import CandidateGenerator, CandidateSet, direction_buckets

logger = logging.getLogger(__name__)


def grid_steps(lo: float, hi: float, step: float) -> np.ndarray:
    """lo, lo + step, ... up to and including hi."""
    count = int(math.floor((hi - lo) / step + 1e-9)) + 1
    return lo + step * np.arange(max(count, 0))


class RoomCameraGenerator(CandidateGenerator):
    """Scans admissible floor positions of every room per direction bucket.

    Positions come from a jittered grid filtered by the room's viewpoint
    mask; the best scene-coverage camera per (room, bucket) is kept.
    """

    strategy = "room"

    def __init__(self, *args, mask_builder: Optional[ViewpointMaskBuilder] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.mask_builder = mask_builder or ViewpointMaskBuilder(self.scene, self.config)

    def generate(self) -> List[Camera]:
        start_time = time.time()
        config = self.config
        step = config.position_sampling
        nangles, angle_spacing = direction_buckets(self.angle_sampling)
        cameras = []

        for room in self.scene.rooms():
            room_bbox = self.scene.node_bbox(room)
            if room_bbox is None:
                continue
            z = room_bbox.lo[2] + config.eye_height + self.eye_jitter()
            if z > room_bbox.hi[2]:
                logger.debug(f"Skipping room {room.name}: eye height above ceiling")
                continue

            try:
                mask = self.mask_builder.build(room)
            except (RoomStructureError, MaskResolutionError) as e:
                logger.warning(f"Skipping room {room.name}: {e}")
                continue

            candidates = CandidateSet(config.min_score)
            for j in range(nangles):
                for y in grid_steps(room_bbox.lo[1], room_bbox.hi[1], step):
                    for x in grid_steps(room_bbox.lo[0], room_bbox.hi[0], step):
                        px = x + step * self.rng.random()
                        py = y + step * self.rng.random()
                        if not mask.is_admissible(px, py):
                            continue

                        angle = (j + self.rng.random()) * angle_spacing
                        towards = np.array([math.cos(angle), math.sin(angle), config.view_pitch])
                        viewpoint = np.array([px, py, z])
                        camera = self.make_camera(viewpoint, towards, name=f"{room.name}_{j}")
                        camera.value = self.scorer.scene_coverage(camera, room)
                        candidates.offer(j, camera)

                best = candidates.best(j)
                if best is not None:
                    logger.debug(f"ROOM {room.name} {j} : {best.value:g}")

            cameras.extend(candidates.cameras())

        logger.info(
            f"Created room cameras: {len(cameras)} cameras in {time.time() - start_time:.2f} seconds"
        )
        return cameras
