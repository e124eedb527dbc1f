"""Tests for camera projection helpers."""

import numpy as np
import pytest

from camsynth.core.math.camera import (
    camera_to_world,
    intrinsics_matrix,
    pixel_rays,
    yfov_from_xfov,
)


class TestFieldOfView:
    """Test derived vertical field of view."""

    def test_square_image(self):
        assert yfov_from_xfov(0.5, 100, 100) == pytest.approx(0.5)

    def test_landscape_image(self):
        yfov = yfov_from_xfov(0.5, 640, 480)
        assert np.tan(yfov) == pytest.approx(0.75 * np.tan(0.5))

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            yfov_from_xfov(0.5, 0, 480)


class TestPixelRays:
    """Test per-pixel ray directions."""

    def setup_method(self):
        self.towards = np.array([1.0, 0.0, 0.0])
        self.up = np.array([0.0, 0.0, 1.0])

    def test_shape_and_unit_length(self):
        rays = pixel_rays(self.towards, self.up, 0.5, 0.4, 8, 6)

        assert rays.shape == (6, 8, 3)
        np.testing.assert_allclose(np.linalg.norm(rays, axis=2), 1.0)

    def test_top_row_points_up(self):
        rays = pixel_rays(self.towards, self.up, 0.5, 0.4, 8, 6)

        assert rays[0, 4, 2] > 0
        assert rays[-1, 4, 2] < 0

    def test_left_column_points_left(self):
        # right = towards x up = -y, so the left edge looks towards +y
        rays = pixel_rays(self.towards, self.up, 0.5, 0.4, 8, 6)

        assert rays[3, 0, 1] > 0
        assert rays[3, -1, 1] < 0

    def test_corner_ray_within_field_of_view(self):
        rays = pixel_rays(self.towards, self.up, 0.5, 0.4, 8, 6)
        horizontal = np.arctan2(abs(rays[0, 0, 1]), rays[0, 0, 0])

        assert horizontal < 0.5


class TestCalibrationMatrices:
    """Test extrinsics and intrinsics matrices."""

    def test_camera_to_world_columns(self):
        origin = np.array([1.0, 2.0, 3.0])
        M = camera_to_world(origin, np.array([1.0, 0.0, 0.0]), np.array([0.0, 0.0, 1.0]))

        np.testing.assert_allclose(M[:3, 0], [0, -1, 0])
        np.testing.assert_allclose(M[:3, 1], [0, 0, 1])
        np.testing.assert_allclose(M[:3, 2], [-1, 0, 0])
        np.testing.assert_allclose(M[:3, 3], origin)
        np.testing.assert_allclose(M[3], [0, 0, 0, 1])

    def test_intrinsics_use_tangent(self):
        K = intrinsics_matrix(np.pi / 4, np.pi / 4, 200, 100)

        np.testing.assert_allclose(K[0, 0], 100.0)
        np.testing.assert_allclose(K[1, 1], 50.0)
        np.testing.assert_allclose(K[0, 2], 100.0)
        np.testing.assert_allclose(K[1, 2], 50.0)
        np.testing.assert_allclose(K[2], [0, 0, 1])
