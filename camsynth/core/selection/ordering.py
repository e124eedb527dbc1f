"""Deterministic ordering of selected cameras."""

from typing import Callable, List, Sequence, Union

import numpy as np
from scipy.spatial.distance import cdist

from ..models.entities import Camera

ORDERINGS = ("score", "name", "spatial")


def score_key(camera: Camera):
    """Highest value first, ties by name then origin."""
    return (-camera.value, camera.name or "", tuple(camera.origin))


def name_key(camera: Camera):
    """Name ascending, ties by highest value then origin."""
    return (camera.name or "", -camera.value, tuple(camera.origin))


def spatial_order(cameras: Sequence[Camera]) -> List[Camera]:
    """Greedy nearest-neighbour tour over camera origins.

    Starts at the best scoring camera; ties in distance go to the camera
    that ranks first by score.
    """
    if len(cameras) <= 1:
        return list(cameras)

    ranked = sorted(cameras, key=score_key)
    points = np.array([c.origin for c in ranked])
    dist_matrix = cdist(points, points)

    visited = np.zeros(len(ranked), dtype=bool)
    path = [0]
    visited[0] = True
    while not visited.all():
        distances = np.where(visited, np.inf, dist_matrix[path[-1]])
        next_node = int(np.argmin(distances))
        path.append(next_node)
        visited[next_node] = True
    return [ranked[i] for i in path]


def sort_cameras(
    cameras: Sequence[Camera],
    ordering: Union[str, Callable[[Camera], object]] = "score"
) -> List[Camera]:
    """Order cameras for output.

    Args:
        cameras: Selected cameras
        ordering: "score", "name", "spatial" or a sort key callable

    Returns:
        New list in the requested order
    """
    if callable(ordering):
        return sorted(cameras, key=ordering)
    if ordering == "score":
        return sorted(cameras, key=score_key)
    if ordering == "name":
        return sorted(cameras, key=name_key)
    if ordering == "spatial":
        return spatial_order(cameras)
    raise ValueError(f"Unknown camera ordering '{ordering}', expected one of {ORDERINGS}")
