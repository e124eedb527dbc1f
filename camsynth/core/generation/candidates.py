"""Best-of-bucket candidate reduction and shared generator plumbing."""

import math
from abc import ABC, abstractmethod
from typing import Dict, Hashable, List, Optional, Tuple

import numpy as np

from ..models.config import CameraConfig
from ..models.entities import Camera
from ..scene.scene import Scene
from ..scoring.visibility import VisibilityScorer


def direction_buckets(angle_sampling: float, angle_range: float = 2.0 * math.pi) -> Tuple[int, float]:
    """Number of direction buckets over angle_range and their spacing.

    Returns:
        (count, spacing); count is at least 1 and spacing is the whole
        range when count == 1
    """
    count = max(int(angle_range / angle_sampling + 0.5), 1)
    spacing = angle_range / count
    return count, spacing


class CandidateSet:
    """Best camera seen so far per group key.

    A candidate replaces the current best only with a strictly greater
    score, so the first camera to reach a score keeps it. Candidates scoring
    0 or below min_score are never kept.
    """

    def __init__(self, min_score: float = 0.0):
        self.min_score = min_score
        self._best: Dict[Hashable, Camera] = {}

    def offer(self, key: Hashable, camera: Camera) -> bool:
        """Consider a scored camera for a key; True if it became the best."""
        if camera.value <= 0 or camera.value < self.min_score:
            return False
        current = self._best.get(key)
        if current is not None and camera.value <= current.value:
            return False
        self._best[key] = camera
        return True

    def best(self, key: Hashable) -> Optional[Camera]:
        return self._best.get(key)

    def keys(self) -> List[Hashable]:
        return list(self._best.keys())

    def cameras(self) -> List[Camera]:
        """Winning cameras in the order their keys were first filled."""
        return list(self._best.values())

    def __len__(self) -> int:
        return len(self._best)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._best


class CandidateGenerator(ABC):
    """Shared state for the camera generation strategies.

    Subclasses set `strategy` ("object", "wall" or "room"), which selects
    their angle sampling.
    """

    strategy: str

    def __init__(
        self,
        scene: Scene,
        config: Optional[CameraConfig] = None,
        scorer: Optional[VisibilityScorer] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.scene = scene
        self.config = config or CameraConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.scorer = scorer or VisibilityScorer(scene, self.config, rng=self.rng)

        bbox = scene.bbox
        radius = bbox.diagonal_radius if bbox is not None else 1.0
        self.near = 0.01 * radius
        self.far = 100.0 * radius
        self.xfov = self.config.xfov
        self.yfov = self.config.yfov
        self.angle_sampling = self.config.angle_sampling_for(self.strategy)

    def jitter(self) -> float:
        """Uniform draw in [-1, 1)."""
        return 2.0 * (self.rng.random() - 0.5)

    def eye_jitter(self) -> float:
        return self.jitter() * self.config.eye_height_radius

    def make_camera(self, viewpoint: np.ndarray, towards: np.ndarray, name: Optional[str] = None) -> Camera:
        """Camera at viewpoint looking along towards, up from world +z."""
        return Camera.looking(viewpoint, towards, self.xfov, self.yfov, self.near, self.far, name=name)

    @abstractmethod
    def generate(self) -> List[Camera]:
        """Run the strategy and return its winning cameras."""
        pass
