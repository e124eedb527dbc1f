"""Math primitives for camsynth."""

from .vectors import WORLD_UP, normalize, look_at_basis, interior_angle, rotate_2d
from .transforms import (
    translation,
    scaling,
    rotation_z,
    compose,
    transform_points,
    ancestor_transform,
)
from .camera import yfov_from_xfov, pixel_rays, camera_to_world, intrinsics_matrix

__all__ = [
    "WORLD_UP",
    "normalize",
    "look_at_basis",
    "interior_angle",
    "rotate_2d",
    "translation",
    "scaling",
    "rotation_z",
    "compose",
    "transform_points",
    "ancestor_transform",
    "yfov_from_xfov",
    "pixel_rays",
    "camera_to_world",
    "intrinsics_matrix",
]
