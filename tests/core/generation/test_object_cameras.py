"""Tests for object-centric camera generation."""

import math

import numpy as np
import pytest

from camsynth.core.generation.object_cameras import ObjectCameraGenerator
from camsynth.core.models.config import CameraConfig
from camsynth.core.synthetic.scene_gen import SceneGenerator


class TestObjectCameraGenerator:
    """Test object cameras in a single room."""

    def setup_method(self):
        self.config = CameraConfig(
            width=32,
            height=24,
            angle_sampling=math.pi / 2,
            min_distance_from_obstacle=0.2,
            object_target_samples=256,
            object_max_samples=512,
            seed=11,
        )

    def test_single_object_single_camera(self, box_room):
        cameras = ObjectCameraGenerator(box_room, self.config).generate()

        assert len(cameras) == 1
        camera = cameras[0]
        assert camera.name == "Object#0"
        assert camera.value > 0
        assert camera.value <= 1.0

        centroid = np.array([5.0, 5.0, 1.5])
        to_centroid = centroid - camera.get_origin()
        to_centroid /= np.linalg.norm(to_centroid)
        assert np.dot(camera.get_towards(), to_centroid) == pytest.approx(1.0, abs=1e-9)

    def test_viewpoint_at_eye_height_and_distance(self, box_room):
        camera = ObjectCameraGenerator(box_room, self.config).generate()[0]
        origin = camera.get_origin()

        assert 1.5 <= origin[2] <= 1.6
        horizontal = np.linalg.norm(origin[:2] - np.array([5.0, 5.0]))
        assert horizontal == pytest.approx(1.5 / math.tan(0.5), rel=1e-6)

    def test_floor_height_from_room_parent(self, box_room):
        generator = ObjectCameraGenerator(box_room, self.config)

        assert generator.floor_height(box_room.find("Object#0")) == pytest.approx(0.0)
        assert generator.floor_height(box_room.find("Room#0")) is None

    def test_viewpoint_pulled_in_front_of_occluder(self):
        builder = SceneGenerator()
        room = builder.add_room([0, 0, 0], [10, 10, 3])
        box = builder.add_box(room, (5.0, 5.0, 1.5), 2.0 / math.sqrt(3.0))
        builder.add_box(room, (6.55, 5.0, 1.5), (0.1, 4.0, 3.0), name="Screen")
        scene = builder.build()

        generator = ObjectCameraGenerator(scene, self.config)
        viewpoint = generator.candidate_viewpoint(
            box, np.array([5.0, 5.0, 1.5]), 1.0, np.array([-1.0, 0.0, 0.0])
        )

        assert 5.6 < viewpoint[0] < 6.5
        assert viewpoint[0] == pytest.approx(6.3, abs=0.05)

    def test_min_score_rejects_everything(self, box_room):
        config = self.config.model_copy(update={"min_score": 2.0})
        assert ObjectCameraGenerator(box_room, config).generate() == []

    def test_deterministic_with_seed(self, box_room):
        first = ObjectCameraGenerator(box_room, self.config).generate()
        second = ObjectCameraGenerator(box_room, self.config).generate()

        np.testing.assert_allclose(first[0].origin, second[0].origin)
        assert first[0].value == second[0].value
