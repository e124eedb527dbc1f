"""Camera quality scores: object surface coverage and scene coverage."""

import logging
from collections import OrderedDict
from typing import Optional

import numpy as np

from ..models.config import CameraConfig
from ..models.entities import Camera
from ..scene.nodes import SceneNode
from ..scene.render import UNKNOWN_NODE, RayCastRenderer, Renderer
from ..scene.scene import Scene


class VisibilityScorer:
    """Scores candidate cameras against a scene.

    Object coverage is the fraction of sampled surface points of one node
    that the camera sees unoccluded. Scene coverage is computed from a
    rendered node-index image and rewards seeing many objects at a useful
    size.

    Surface samples are cached per node (keyed by scene index) in a bounded
    LRU map, so calls for different nodes may be interleaved freely.
    """

    def __init__(
        self,
        scene: Scene,
        config: Optional[CameraConfig] = None,
        renderer: Optional[Renderer] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.scene = scene
        self.config = config or CameraConfig()
        self.renderer = renderer or RayCastRenderer(scene)
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.logger = logging.getLogger(__name__)

        self._sample_cache: "OrderedDict[int, np.ndarray]" = OrderedDict()
        self._indexed_nodes = None
        self._object_mask = None

    def _sync_with_scene(self) -> None:
        # Scene.refresh() replaces the node list and may renumber nodes
        if self._indexed_nodes is not self.scene.nodes:
            self._indexed_nodes = self.scene.nodes
            self._object_mask = np.array([node.is_object() for node in self.scene.nodes], dtype=bool)
            self._sample_cache.clear()

    @property
    def object_mask(self) -> np.ndarray:
        """Per scene node index, whether the node is an object."""
        self._sync_with_scene()
        return self._object_mask

    def surface_points(self, node: SceneNode) -> np.ndarray:
        """Cached area-weighted surface samples of a node."""
        self._sync_with_scene()
        key = node.index
        if key in self._sample_cache:
            self._sample_cache.move_to_end(key)
            return self._sample_cache[key]

        points = self.scene.surface_samples(
            node,
            self.config.object_target_samples,
            self.config.object_max_samples,
            self.rng
        )
        self.logger.debug(f"Sampled {len(points)} surface points on {node.name}")
        self._sample_cache[key] = points
        while len(self._sample_cache) > self.config.sample_cache_size:
            self._sample_cache.popitem(last=False)
        return points

    def clear_cache(self) -> None:
        self._sample_cache.clear()

    def object_coverage(self, camera: Camera, node: SceneNode) -> float:
        """Fraction of the node's surface samples visible from the camera.

        A sample is visible when the first hit along the ray from the camera
        origin lands on the node within visibility_tolerance of the sample's
        distance.

        Returns:
            Score in [0, 1]; 0 for nodes without surface area
        """
        points = self.surface_points(node)
        if len(points) == 0:
            return 0.0

        tolerance = self.config.visibility_tolerance
        origin = camera.get_origin()
        offsets = points - origin
        distances = np.linalg.norm(offsets, axis=1)
        usable = distances > 1e-9
        if not np.any(usable):
            return 0.0

        directions = offsets[usable] / distances[usable, np.newaxis]
        origins = np.broadcast_to(origin, directions.shape)
        t_hit, node_ids = self.scene.cast_rays(
            origins, directions, 0.0, distances[usable] + tolerance
        )
        visible = (node_ids == node.index) & (np.abs(t_hit - distances[usable]) <= tolerance)
        return float(np.count_nonzero(visible)) / float(len(points))

    def node_pixel_counts(self, image: np.ndarray) -> np.ndarray:
        """Visible pixel count per scene node index."""
        values = image[image != UNKNOWN_NODE].ravel()
        values = values[(values >= 0) & (values < self.scene.n_nodes)]
        return np.bincount(values, minlength=self.scene.n_nodes)

    def scene_coverage(self, camera: Camera, room: Optional[SceneNode] = None) -> float:
        """Score a camera by the objects it sees.

        Only objects covering more than min_visible_fraction of the image
        qualify. Method 0 returns (#objects * #object pixels) / #pixels,
        method 1 the sum of log(pixels / minimum pixels). Either is 0 unless
        more than min_visible_objects objects qualify.

        Args:
            camera: Candidate camera
            room: Restrict rendering to this subtree when given

        Returns:
            Score >= 0
        """
        config = self.config
        max_pixel_count = config.pixel_count
        min_pixel_count = int(config.min_visible_fraction * max_pixel_count)
        if max_pixel_count == 0 or min_pixel_count == 0:
            return 0.0

        image = self.renderer.render(camera, room, config.width, config.height)
        counts = self.node_pixel_counts(image)

        qualifying = self.object_mask & (counts > min_pixel_count)
        node_count = int(np.count_nonzero(qualifying))
        if node_count <= config.min_visible_objects:
            return 0.0

        if config.scene_scoring_method == 0:
            pixel_count = int(counts[qualifying].sum())
            return node_count * pixel_count / float(max_pixel_count)
        return float(np.sum(np.log(counts[qualifying] / float(min_pixel_count))))
