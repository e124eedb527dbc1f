"""Tests for vector helpers."""

import numpy as np
import pytest

from camsynth.core.math.vectors import (
    WORLD_UP,
    interior_angle,
    look_at_basis,
    normalize,
    rotate_2d,
)


class TestNormalize:
    """Test normalize."""

    def test_unit_length(self):
        v = normalize(np.array([3.0, 4.0, 0.0]))
        np.testing.assert_allclose(v, [0.6, 0.8, 0.0])

    def test_zero_vector_raises(self):
        with pytest.raises(ValueError):
            normalize(np.zeros(3))


class TestLookAtBasis:
    """Test camera frame construction."""

    def test_horizontal_view(self):
        towards, up, right = look_at_basis(np.array([1.0, 0.0, 0.0]))

        np.testing.assert_allclose(towards, [1, 0, 0], atol=1e-12)
        np.testing.assert_allclose(up, [0, 0, 1], atol=1e-12)
        np.testing.assert_allclose(right, [0, -1, 0], atol=1e-12)

    def test_basis_is_right_handed_orthonormal(self):
        towards, up, right = look_at_basis(np.array([0.3, -1.2, -0.2]))

        assert abs(np.dot(towards, up)) < 1e-12
        assert abs(np.dot(towards, right)) < 1e-12
        assert abs(np.dot(up, right)) < 1e-12
        np.testing.assert_allclose(np.cross(towards, up), right, atol=1e-12)
        assert up[2] > 0

    def test_looking_straight_down(self):
        towards, up, right = look_at_basis(-WORLD_UP)

        np.testing.assert_allclose(np.linalg.norm(up), 1.0)
        assert abs(np.dot(towards, up)) < 1e-12


class TestAngles:
    """Test angle and rotation helpers."""

    def test_interior_angle(self):
        assert interior_angle([1, 0, 0], [0, 1, 0]) == pytest.approx(np.pi / 2)
        assert interior_angle([1, 0, 0], [-1, 0, 0]) == pytest.approx(np.pi)
        assert interior_angle([1, 0, 0], [0, 0, 0]) == 0.0

    def test_rotate_2d_quarter_turn(self):
        np.testing.assert_allclose(rotate_2d([1.0, 0.0], np.pi / 2), [0.0, 1.0], atol=1e-12)
