"""End-to-end camera synthesis: generate, score, select, order, export."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from .errors import SceneLoadError
from .export.camera_files import (
    write_cameras,
    write_camera_extrinsics,
    write_camera_intrinsics,
    write_camera_names,
    write_node_names,
)
from .generation.object_cameras import ObjectCameraGenerator
from .generation.room_cameras import RoomCameraGenerator
from .generation.wall_cameras import WallCameraGenerator
from .models.config import CameraConfig
from .models.entities import Camera
from .scene.render import Renderer
from .scene.scene import Scene
from .scoring.visibility import VisibilityScorer
from .selection.ordering import sort_cameras
from .trajectory.interpolation import TrajectoryInterpolator


@dataclass
class OutputPaths:
    """Destination files; None skips that output."""

    cameras: Optional[Union[str, Path]] = None
    extrinsics: Optional[Union[str, Path]] = None
    intrinsics: Optional[Union[str, Path]] = None
    names: Optional[Union[str, Path]] = None
    node_names: Optional[Union[str, Path]] = None


class CameraPipeline:
    """Runs the enabled generation strategies over a scene.

    All strategies share one scorer (and so one surface sample cache) and
    one random generator seeded from the configuration.
    """

    def __init__(
        self,
        scene: Scene,
        config: Optional[CameraConfig] = None,
        renderer: Optional[Renderer] = None
    ):
        """Initialize the pipeline.

        Args:
            scene: Scene to place cameras in
            config: Generation parameters
            renderer: Node-index renderer, ray casting by default

        Raises:
            SceneLoadError: If the scene has no geometry
        """
        if scene.n_triangles == 0:
            raise SceneLoadError("Scene has no geometry")

        self.scene = scene
        self.config = config or CameraConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.scorer = VisibilityScorer(scene, self.config, renderer=renderer, rng=self.rng)
        self.cameras: List[Camera] = []
        self.logger = logging.getLogger(__name__)

    def _generator(self, cls):
        return cls(self.scene, self.config, scorer=self.scorer, rng=self.rng)

    def generate(self, input_cameras: Optional[Sequence[Camera]] = None) -> List[Camera]:
        """Candidates from every enabled strategy, then any input cameras."""
        config = self.config
        create_room_cameras = config.create_room_cameras
        if not config.any_strategy_enabled() and not input_cameras:
            self.logger.info("No camera strategy enabled, defaulting to room cameras")
            create_room_cameras = True

        cameras = []
        if config.create_object_cameras:
            cameras.extend(self._generator(ObjectCameraGenerator).generate())
        if config.create_wall_cameras:
            cameras.extend(self._generator(WallCameraGenerator).generate())
        if create_room_cameras:
            cameras.extend(self._generator(RoomCameraGenerator).generate())
        if input_cameras:
            cameras.extend(input_cameras)
        return cameras

    def run(self, input_cameras: Optional[Sequence[Camera]] = None) -> List[Camera]:
        """Generate cameras and order them, or resample them along a trajectory.

        Args:
            input_cameras: Extra cameras appended after the generated ones

        Returns:
            Final camera list (also kept on self.cameras)

        Raises:
            InsufficientDataError: If interpolation is requested with fewer
                than 2 cameras
        """
        start_time = time.time()
        cameras = self.generate(input_cameras)

        if self.config.interpolate_camera_trajectory:
            interpolator = TrajectoryInterpolator(self.config.interpolation_step)
            cameras = interpolator.resample(cameras)
        else:
            cameras = sort_cameras(cameras, self.config.ordering)

        self.cameras = cameras
        self.logger.info(
            f"Camera pipeline produced {len(cameras)} cameras in {time.time() - start_time:.2f} seconds"
        )
        return cameras

    def write_outputs(self, paths: OutputPaths) -> None:
        """Write the current camera list to every requested file."""
        config = self.config
        if paths.cameras is not None:
            write_cameras(paths.cameras, self.cameras)
        if paths.extrinsics is not None:
            write_camera_extrinsics(paths.extrinsics, self.cameras)
        if paths.intrinsics is not None:
            write_camera_intrinsics(paths.intrinsics, self.cameras, config.width, config.height)
        if paths.names is not None:
            write_camera_names(paths.names, self.cameras)
        if paths.node_names is not None:
            write_node_names(paths.node_names, self.scene)
