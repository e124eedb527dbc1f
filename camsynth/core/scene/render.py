"""Node-index image rendering."""

import threading
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..math.camera import pixel_rays
from ..models.entities import Camera
from .nodes import SceneNode
from .raycast import NO_HIT
from .scene import Scene

# Pixel value for background and unresolved pixels
UNKNOWN_NODE = NO_HIT


class Renderer(ABC):
    """Produces per-pixel node index images for a camera."""

    @abstractmethod
    def render(
        self,
        camera: Camera,
        root: Optional[SceneNode],
        width: int,
        height: int
    ) -> np.ndarray:
        """Render the subtree under root (whole scene when None).

        Returns:
            (height, width) int array of scene node indices, UNKNOWN_NODE
            where no geometry of the subtree is visible
        """


class RayCastRenderer(Renderer):
    """CPU renderer casting one ray per pixel center.

    Renders are serialized with a lock, one image in flight at a time.
    """

    def __init__(self, scene: Scene):
        self.scene = scene
        self._lock = threading.Lock()

    def render(
        self,
        camera: Camera,
        root: Optional[SceneNode] = None,
        width: int = 640,
        height: int = 480
    ) -> np.ndarray:
        directions = pixel_rays(
            camera.get_towards(), camera.get_up(), camera.xfov, camera.yfov, width, height
        ).reshape(-1, 3)
        origins = np.broadcast_to(camera.get_origin(), directions.shape)

        # Clip distances are measured along the optical axis
        cos_angle = directions @ camera.get_towards()
        t_min = camera.near / cos_angle
        t_max = camera.far / cos_angle

        with self._lock:
            _, node_ids = self.scene.cast_rays(origins, directions, t_min, t_max, root=root)
        return node_ids.reshape(height, width)
