"""Tests for object and scene coverage scores."""

import math

import numpy as np
import pytest

from camsynth.core.models.config import CameraConfig
from camsynth.core.models.entities import Camera
from camsynth.core.scene.geometry import box_mesh
from camsynth.core.scene.nodes import SceneNode
from camsynth.core.scene.render import UNKNOWN_NODE, Renderer
from camsynth.core.scene.scene import Scene
from camsynth.core.scoring.visibility import VisibilityScorer


class FixedImageRenderer(Renderer):
    """Returns the same node-index image for every camera."""

    def __init__(self, image):
        self.image = np.asarray(image)
        self.calls = []

    def render(self, camera, root, width, height):
        self.calls.append((root, width, height))
        return self.image


def make_scene():
    root = SceneNode("Project#0")
    room = root.add_child(SceneNode("Room#0"))
    room.add_child(SceneNode("Walls#0", meshes=[box_mesh([-1, -1, 0], [0, 1, 1])]))
    for i, x in enumerate((2.0, 4.0, 6.0)):
        room.add_child(SceneNode(f"Box{i}", meshes=[box_mesh([x, 0, 0], [x + 1, 1, 1])]))
    return Scene(root)


def coverage_image(counts, size=100):
    """Flattened 10x10 image with the given pixel count per node index."""
    pixels = []
    for index, count in counts.items():
        pixels.extend([index] * count)
    pixels.extend([UNKNOWN_NODE] * (size - len(pixels)))
    return np.array(pixels).reshape(10, 10)


class TestSceneCoverage:
    """Test the scene coverage formulas."""

    def setup_method(self):
        self.scene = make_scene()
        self.walls = self.scene.find("Walls#0").index
        self.boxes = [self.scene.find(f"Box{i}").index for i in range(3)]
        self.camera = Camera.looking(np.zeros(3), np.array([1.0, 0.0, 0.0]), 0.5, 0.5)
        # 20 and 10 pixels qualify (> 5), 3 pixels and the wall pixels do not count
        self.image = coverage_image({
            self.boxes[0]: 20, self.boxes[1]: 10, self.boxes[2]: 3, self.walls: 30
        })

    def make_scorer(self, **overrides):
        settings = dict(width=10, height=10, min_visible_fraction=0.05, min_visible_objects=1)
        settings.update(overrides)
        config = CameraConfig(**settings)
        return VisibilityScorer(self.scene, config, renderer=FixedImageRenderer(self.image))

    def test_method_0(self):
        scorer = self.make_scorer(scene_scoring_method=0)
        assert scorer.scene_coverage(self.camera) == pytest.approx(2 * 30 / 100)

    def test_method_1(self):
        scorer = self.make_scorer(scene_scoring_method=1)
        assert scorer.scene_coverage(self.camera) == pytest.approx(math.log(4.0) + math.log(2.0))

    def test_needs_more_than_min_visible_objects(self):
        scorer = self.make_scorer(min_visible_objects=2)
        assert scorer.scene_coverage(self.camera) == 0.0

    def test_zero_minimum_pixels(self):
        scorer = self.make_scorer(min_visible_fraction=0.001)
        assert scorer.scene_coverage(self.camera) == 0.0

    def test_renders_room_subtree(self):
        scorer = self.make_scorer()
        room = self.scene.find("Room#0")
        scorer.scene_coverage(self.camera, room)

        assert scorer.renderer.calls == [(room, 10, 10)]

    def test_node_pixel_counts(self):
        scorer = self.make_scorer()
        counts = scorer.node_pixel_counts(self.image)

        assert len(counts) == self.scene.n_nodes
        assert counts[self.boxes[0]] == 20
        assert counts[self.walls] == 30
        assert counts.sum() == 63

    def test_objects_added_after_refresh(self):
        scorer = self.make_scorer(scene_scoring_method=0)
        assert scorer.scene_coverage(self.camera) == pytest.approx(0.6)

        room = self.scene.find("Room#0")
        room.add_child(SceneNode("Box3", meshes=[box_mesh([8, 0, 0], [9, 1, 1])]))
        self.scene.refresh()
        box3 = self.scene.find("Box3").index
        scorer.renderer.image = coverage_image({
            self.boxes[0]: 20, self.boxes[1]: 10, self.boxes[2]: 3, self.walls: 30, box3: 20
        })

        assert len(scorer.object_mask) == self.scene.n_nodes
        assert scorer.object_mask[box3]
        assert scorer.scene_coverage(self.camera) == pytest.approx(3 * 50 / 100)

    def test_score_nonnegative_with_ray_casting(self):
        config = CameraConfig(width=32, height=24, min_visible_objects=0, scene_scoring_method=1)
        scorer = VisibilityScorer(self.scene, config)
        camera = Camera.looking(np.array([-0.5, 0.5, 3.0]), np.array([1.0, 0.0, -0.5]), 0.6, 0.5)

        assert scorer.scene_coverage(camera) >= 0.0


class TestObjectCoverage:
    """Test surface-sample visibility."""

    def setup_method(self):
        self.scene = make_scene()
        self.box = self.scene.find("Box0")
        config = CameraConfig(object_target_samples=600, object_max_samples=1200, sample_cache_size=2, seed=3)
        self.scorer = VisibilityScorer(self.scene, config)

    def test_one_face_visible(self):
        # Box0 spans x in [2, 3]; only its -x face is visible from here
        camera = Camera.look_at(np.array([1.0, 0.5, 0.5]), np.array([2.5, 0.5, 0.5]), 0.5, 0.5)
        coverage = self.scorer.object_coverage(camera, self.box)

        assert 0.1 < coverage < 0.25

    def test_occluded_object(self):
        # Box0 stands between the camera and Box1
        box1 = self.scene.find("Box1")
        camera = Camera.look_at(np.array([1.0, 0.5, 0.5]), np.array([4.5, 0.5, 0.5]), 0.5, 0.5)

        assert self.scorer.object_coverage(camera, box1) == 0.0

    def test_score_range(self):
        camera = Camera.look_at(np.array([2.5, 4.0, 3.0]), np.array([2.5, 0.5, 0.5]), 0.5, 0.5)
        coverage = self.scorer.object_coverage(camera, self.box)

        assert 0.0 <= coverage <= 1.0
        assert coverage > 0.0

    def test_node_without_surface(self):
        camera = Camera.look_at(np.array([1.0, 0.5, 0.5]), np.array([2.5, 0.5, 0.5]), 0.5, 0.5)
        assert self.scorer.object_coverage(camera, self.scene.find("Room#0")) == 0.0

    def test_samples_cached_per_node(self):
        first = self.scorer.surface_points(self.box)
        box1 = self.scene.find("Box1")
        self.scorer.surface_points(box1)

        assert self.scorer.surface_points(self.box) is first

    def test_cache_eviction(self):
        boxes = [self.scene.find(f"Box{i}") for i in range(3)]
        for box in boxes:
            self.scorer.surface_points(box)

        assert list(self.scorer._sample_cache.keys()) == [boxes[1].index, boxes[2].index]

        self.scorer.clear_cache()
        assert len(self.scorer._sample_cache) == 0
