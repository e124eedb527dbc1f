"""Tests for the Camera model."""

import numpy as np
import pytest
from pydantic import ValidationError

from camsynth.core.models.entities import Camera


class TestCameraEntity:
    """Test Camera construction and invariants."""

    def test_camera_creation(self):
        camera = Camera(
            origin=[1.0, 2.0, 1.5],
            towards=[2.0, 0.0, 0.0],
            up=[0.0, 0.0, 5.0],
            xfov=0.5,
            yfov=0.4,
        )

        np.testing.assert_allclose(camera.towards, [1, 0, 0])
        np.testing.assert_allclose(camera.up, [0, 0, 1])
        assert camera.value == 0.0
        assert camera.name is None

    def test_orthonormalization(self):
        camera = Camera(
            origin=[0.0, 0.0, 0.0],
            towards=[1.0, 1.0, -0.2],
            up=[0.0, 0.3, 1.0],
            xfov=0.5,
            yfov=0.4,
        )
        towards, up, right = camera.get_towards(), camera.get_up(), camera.get_right()

        np.testing.assert_allclose(np.linalg.norm(towards), 1.0)
        np.testing.assert_allclose(np.linalg.norm(up), 1.0)
        np.testing.assert_allclose(np.linalg.norm(right), 1.0)
        assert abs(np.dot(towards, up)) < 1e-12
        np.testing.assert_allclose(np.cross(right, towards), up, atol=1e-12)

    def test_zero_towards_rejected(self):
        with pytest.raises(ValidationError):
            Camera(origin=[0, 0, 0], towards=[0, 0, 0], up=[0, 0, 1], xfov=0.5, yfov=0.4)

    def test_parallel_up_rejected(self):
        with pytest.raises(ValidationError):
            Camera(origin=[0, 0, 0], towards=[0, 0, 2], up=[0, 0, 1], xfov=0.5, yfov=0.4)

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError):
            Camera(origin=[np.nan, 0, 0], towards=[1, 0, 0], up=[0, 0, 1], xfov=0.5, yfov=0.4)

    def test_fov_range(self):
        with pytest.raises(ValidationError):
            Camera(origin=[0, 0, 0], towards=[1, 0, 0], up=[0, 0, 1], xfov=2.0, yfov=0.4)

    def test_wrong_vector_length(self):
        with pytest.raises(ValidationError):
            Camera(origin=[0, 0], towards=[1, 0, 0], up=[0, 0, 1], xfov=0.5, yfov=0.4)


class TestCameraConstructors:
    """Test convenience constructors and copies."""

    def test_looking_uses_world_up(self):
        camera = Camera.looking(np.zeros(3), np.array([0.0, 1.0, -0.2]), 0.5, 0.4)

        assert camera.up[2] > 0
        np.testing.assert_allclose(np.linalg.norm(camera.get_towards()), 1.0)

    def test_look_at(self):
        camera = Camera.look_at(np.array([0.0, 0.0, 1.0]), np.array([3.0, 0.0, 1.0]), 0.5, 0.4, name="cam")

        np.testing.assert_allclose(camera.towards, [1, 0, 0], atol=1e-12)
        assert camera.name == "cam"

