"""Camera synthesis configuration."""

import json
import math
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..math.camera import yfov_from_xfov

# Direction sampling each strategy uses when angle_sampling is not set
DEFAULT_ANGLE_SAMPLING = {
    "object": math.pi / 6.0,
    "wall": math.pi / 3.0,
    "room": math.pi / 2.0,
}


class CameraConfig(BaseModel):
    """Immutable settings for candidate generation, scoring and output."""

    model_config = ConfigDict(frozen=True)

    # Camera parameters
    width: int = Field(default=640, gt=0, description="Image width in pixels")
    height: int = Field(default=480, gt=0, description="Image height in pixels")
    xfov: float = Field(default=0.5, gt=0, lt=math.pi / 2, description="Horizontal half field of view (radians)")
    eye_height: float = Field(default=1.55, description="Camera height above the floor")
    eye_height_radius: float = Field(default=0.05, ge=0, description="Uniform jitter applied to eye height")
    view_pitch: float = Field(
        default=-0.2,
        description="Vertical component of the view direction for wall and room cameras"
    )

    # Sampling
    position_sampling: float = Field(default=0.25, gt=0, description="Spacing between candidate positions")
    angle_sampling: Optional[float] = Field(
        default=None,
        gt=0,
        description="Spacing between candidate directions; per-strategy default when unset"
    )
    interpolation_step: float = Field(default=0.1, gt=0, description="Trajectory resampling step")

    # Scoring
    scene_scoring_method: Literal[0, 1] = Field(default=0, description="Scene coverage score formula")
    min_visible_objects: int = Field(default=3, ge=0, description="Objects that must be exceeded for a nonzero score")
    min_visible_fraction: float = Field(
        default=0.01,
        ge=0,
        le=1,
        description="Fraction of the image an object must exceed to count"
    )
    min_distance_from_obstacle: float = Field(default=0.1, ge=0, description="Clearance around obstacles")
    min_score: float = Field(default=0.0, description="Cameras scoring below this are rejected")
    object_target_samples: int = Field(default=512, gt=0, description="Expected surface samples per object")
    object_max_samples: int = Field(default=1024, gt=0, description="Hard cap on surface samples per object")
    visibility_tolerance: float = Field(default=0.01, gt=0, description="Hit distance tolerance for sample visibility")
    sample_cache_size: int = Field(default=64, gt=0, description="Objects whose surface samples are kept")

    # Strategy toggles
    create_object_cameras: bool = False
    create_wall_cameras: bool = False
    create_room_cameras: bool = False
    interpolate_camera_trajectory: bool = False

    # Output
    ordering: Literal["score", "name", "spatial"] = Field(
        default="score",
        description="Final ordering when no trajectory is interpolated"
    )
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible sampling")

    @model_validator(mode='after')
    def validate_samples(self):
        if self.object_max_samples < self.object_target_samples:
            raise ValueError("object_max_samples must be >= object_target_samples")
        return self

    @property
    def aspect(self) -> float:
        """Image height over width."""
        return self.height / self.width

    @property
    def yfov(self) -> float:
        """Vertical half field of view derived from xfov and aspect."""
        return yfov_from_xfov(self.xfov, self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def angle_sampling_for(self, strategy: Literal["object", "wall", "room"]) -> float:
        """Direction spacing used by a generation strategy."""
        if self.angle_sampling is not None:
            return self.angle_sampling
        return DEFAULT_ANGLE_SAMPLING[strategy]

    def any_strategy_enabled(self) -> bool:
        return self.create_object_cameras or self.create_wall_cameras or self.create_room_cameras


def load_config(path: Union[str, Path]) -> CameraConfig:
    """Load a CameraConfig from a YAML or JSON file.

    Args:
        path: File whose top level is a mapping of CameraConfig fields

    Returns:
        Validated configuration
    """
    path = Path(path)
    with open(path) as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    return CameraConfig.model_validate(data or {})
