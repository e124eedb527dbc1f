"""Data models for camsynth."""

from .entities import Camera
from .config import CameraConfig, DEFAULT_ANGLE_SAMPLING, load_config

__all__ = [
    "Camera",
    "CameraConfig",
    "DEFAULT_ANGLE_SAMPLING",
    "load_config",
]
