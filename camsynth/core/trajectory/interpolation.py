"""Smooth camera trajectories through an ordered list of keypoint cameras."""

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from scipy.interpolate import CubicHermiteSpline

from ..errors import InsufficientDataError
from ..math.vectors import interior_angle
from ..models.entities import Camera


def catmull_rom_spline(params: np.ndarray, points: np.ndarray) -> CubicHermiteSpline:
    """Catmull-Rom spline through points at strictly increasing params.

    Tangents are central finite differences, one-sided at the ends.

    Args:
        params: (N,) strictly increasing curve parameters, N >= 2
        points: (N, D) keypoint positions

    Returns:
        Callable spline mapping parameters to (.., D) positions
    """
    params = np.asarray(params, dtype=float)
    points = np.asarray(points, dtype=float)
    tangents = np.empty_like(points)
    tangents[1:-1] = (points[2:] - points[:-2]) / (params[2:] - params[:-2])[:, np.newaxis]
    tangents[0] = (points[1] - points[0]) / (params[1] - params[0])
    tangents[-1] = (points[-1] - points[-2]) / (params[-1] - params[-2])
    return CubicHermiteSpline(params, points, tangents, axis=0)


@dataclass
class CameraTrajectory:
    """Splines through camera origins, view targets and up targets."""

    params: np.ndarray
    origin_spline: CubicHermiteSpline
    towards_spline: CubicHermiteSpline
    up_spline: CubicHermiteSpline
    template: Camera

    @property
    def start(self) -> float:
        return float(self.params[0])

    @property
    def end(self) -> float:
        return float(self.params[-1])

    def evaluate(self, u: float):
        """Origin, view direction and up direction at parameter u."""
        origin = self.origin_spline(u)
        towards = self.towards_spline(u) - origin
        up = self.up_spline(u) - origin
        return origin, towards, up

    def camera_at(self, u: float) -> Camera:
        origin, towards, up = self.evaluate(u)
        t = self.template
        return Camera.from_vectors(
            origin, towards, up, t.xfov, t.yfov, t.near, t.far, name=f"T{u:f}"
        )

    def sample_parameters(self, step: float) -> np.ndarray:
        """start, start + step, ... up to and including end."""
        count = int(np.floor((self.end - self.start) / step + 1e-9)) + 1
        return self.start + step * np.arange(count)


class TrajectoryInterpolator:
    """Fits a trajectory through keypoint cameras and resamples it uniformly.

    The curve parameter advances by the distance between consecutive
    origins plus the angle between their view directions, so both moving
    and turning take time along the path.
    """

    def __init__(self, step: float = 0.1):
        if step <= 0:
            raise ValueError(f"Interpolation step must be positive, got {step}")
        self.step = step
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def keypoint_parameters(cameras: Sequence[Camera]) -> np.ndarray:
        params = np.zeros(len(cameras))
        for i in range(1, len(cameras)):
            distance = np.linalg.norm(cameras[i].get_origin() - cameras[i - 1].get_origin())
            angle = interior_angle(cameras[i - 1].get_towards(), cameras[i].get_towards())
            params[i] = params[i - 1] + distance + angle
        return params

    def fit(self, cameras: Sequence[Camera]) -> CameraTrajectory:
        """Fit splines through the cameras, in order.

        Keypoints that do not advance the curve parameter are merged into
        their predecessor.

        Raises:
            InsufficientDataError: Fewer than 2 cameras
        """
        if len(cameras) < 2:
            raise InsufficientDataError(
                f"Need at least 2 cameras to interpolate a trajectory, got {len(cameras)}"
            )

        params = self.keypoint_parameters(cameras)
        keep = np.concatenate([[True], np.diff(params) > 1e-12])
        kept = [camera for camera, k in zip(cameras, keep) if k]
        params = params[keep]
        if len(kept) < len(cameras):
            self.logger.debug(f"Merged {len(cameras) - len(kept)} coincident keypoints")

        origins = np.array([c.get_origin() for c in kept])
        towards = origins + np.array([c.get_towards() for c in kept])
        ups = origins + np.array([c.get_up() for c in kept])

        spline_params = params
        if len(kept) < 2:
            # Zero-length trajectory holds the first camera
            spline_params = np.array([0.0, 1.0])
            origins = np.repeat(origins, 2, axis=0)
            towards = np.repeat(towards, 2, axis=0)
            ups = np.repeat(ups, 2, axis=0)

        return CameraTrajectory(
            params,
            catmull_rom_spline(spline_params, origins),
            catmull_rom_spline(spline_params, towards),
            catmull_rom_spline(spline_params, ups),
            cameras[0]
        )

    def resample(self, cameras: Sequence[Camera]) -> List[Camera]:
        """Cameras spaced every `step` along the fitted trajectory."""
        trajectory = self.fit(cameras)
        samples = [trajectory.camera_at(u) for u in trajectory.sample_parameters(self.step)]
        self.logger.info(
            f"Interpolated {len(samples)} trajectory cameras from {len(cameras)} keypoints"
        )
        return samples
