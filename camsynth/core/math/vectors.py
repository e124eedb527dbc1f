"""Vector helpers for camera frames and planar sampling."""

import numpy as np
from typing import Tuple

WORLD_UP = np.array([0.0, 0.0, 1.0])


def normalize(v: np.ndarray) -> np.ndarray:
    """Return v scaled to unit length.

    Raises:
        ValueError: If v has (near) zero length
    """
    v = np.asarray(v, dtype=float)
    norm = np.linalg.norm(v)
    if norm < 1e-12:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / norm


def look_at_basis(
    towards: np.ndarray,
    world_up: np.ndarray = WORLD_UP
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Build a right-handed camera frame looking along `towards`.

    right = towards x world_up and up = right x towards, so that
    towards x up == right.

    Args:
        towards: View direction (need not be normalized)
        world_up: Reference up direction

    Returns:
        Tuple of unit (towards, up, right) vectors
    """
    towards = normalize(towards)
    right = np.cross(towards, world_up)
    if np.linalg.norm(right) < 1e-9:
        # Looking straight up or down, fall back to world +y as reference
        right = np.cross(towards, np.array([0.0, 1.0, 0.0]))
    right = normalize(right)
    up = normalize(np.cross(right, towards))
    return towards, up, right


def interior_angle(a: np.ndarray, b: np.ndarray) -> float:
    """Angle in radians between two vectors, 0 if either is zero."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    na = np.linalg.norm(a)
    nb = np.linalg.norm(b)
    if na < 1e-12 or nb < 1e-12:
        return 0.0
    cos_angle = np.clip(np.dot(a, b) / (na * nb), -1.0, 1.0)
    return float(np.arccos(cos_angle))


def rotate_2d(v: np.ndarray, angle: float) -> np.ndarray:
    """Rotate a 2D vector counter-clockwise by angle radians."""
    c = np.cos(angle)
    s = np.sin(angle)
    x, y = float(v[0]), float(v[1])
    return np.array([c * x - s * y, s * x + c * y])
