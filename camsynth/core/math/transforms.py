"""Homogeneous 4x4 affine transforms and scene-tree accumulation."""

import numpy as np
from typing import Sequence


def translation(offset: Sequence[float]) -> np.ndarray:
    """Transform translating by offset [x, y, z]."""
    T = np.eye(4)
    T[:3, 3] = np.asarray(offset, dtype=float)
    return T


def scaling(s: float) -> np.ndarray:
    """Uniform scale transform."""
    T = np.eye(4)
    T[:3, :3] *= float(s)
    return T


def rotation_z(angle: float) -> np.ndarray:
    """Rotation about the z axis by angle radians."""
    c = np.cos(angle)
    s = np.sin(angle)
    T = np.eye(4)
    T[:2, :2] = [[c, -s], [s, c]]
    return T


def compose(*transforms: np.ndarray) -> np.ndarray:
    """Compose transforms left to right: compose(A, B) applies B first."""
    result = np.eye(4)
    for T in transforms:
        result = result @ T
    return result


def transform_points(T: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Apply transform to an Nx3 (or 3-element) array of points."""
    points = np.asarray(points, dtype=float)
    single = points.ndim == 1
    P = np.atleast_2d(points)
    out = P @ T[:3, :3].T + T[:3, 3]
    return out[0] if single else out


def ancestor_transform(node, include_self: bool = False) -> np.ndarray:
    """Compose the local transforms from node up to the scene root.

    Args:
        node: Any object with `transform` (4x4) and `parent` attributes
        include_self: Whether node's own transform is included

    Returns:
        4x4 transform mapping node-local (or parent-local) coordinates to world
    """
    result = np.eye(4)
    ancestor = node if include_self else node.parent
    while ancestor is not None:
        result = ancestor.transform @ result
        ancestor = ancestor.parent
    return result
