"""Camera trajectory interpolation."""

from .interpolation import CameraTrajectory, TrajectoryInterpolator, catmull_rom_spline

__all__ = [
    "CameraTrajectory",
    "TrajectoryInterpolator",
    "catmull_rom_spline",
]
