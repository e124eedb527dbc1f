"""Core entity: Camera."""

from typing import Optional, List
import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from ..math.vectors import look_at_basis


class Camera(BaseModel):
    """Pinhole camera pose with field of view, clip range and quality score.

    The frame is kept orthonormal: on construction `towards` is normalized,
    `right = towards x up` and `up = right x towards`, so (towards, up, right)
    is a right-handed basis.
    """

    origin: List[float] = Field(
        description="Viewpoint [x, y, z] in world coordinates",
        min_length=3,
        max_length=3
    )
    towards: List[float] = Field(
        description="Unit view direction",
        min_length=3,
        max_length=3
    )
    up: List[float] = Field(
        description="Unit up vector, orthogonal to towards",
        min_length=3,
        max_length=3
    )
    xfov: float = Field(gt=0, lt=np.pi / 2, description="Horizontal half field of view (radians)")
    yfov: float = Field(gt=0, lt=np.pi / 2, description="Vertical half field of view (radians)")
    near: float = Field(default=0.01, gt=0, description="Near clip distance")
    far: float = Field(default=100.0, gt=0, description="Far clip distance")
    value: float = Field(default=0.0, description="Quality score")
    name: Optional[str] = Field(default=None, description="Optional label")

    @field_validator('origin', 'towards', 'up')
    @classmethod
    def validate_finite(cls, v):
        if not all(np.isfinite(v)):
            raise ValueError("vector components must be finite")
        return v

    @model_validator(mode='after')
    def orthonormalize(self):
        towards = np.array(self.towards, dtype=float)
        up = np.array(self.up, dtype=float)
        if np.linalg.norm(towards) < 1e-12:
            raise ValueError("towards must be non-zero")
        right = np.cross(towards, up)
        if np.linalg.norm(right) < 1e-12:
            raise ValueError("up must not be parallel to towards")
        towards = towards / np.linalg.norm(towards)
        right = right / np.linalg.norm(right)
        up = np.cross(right, towards)
        up = up / np.linalg.norm(up)
        self.towards = towards.tolist()
        self.up = up.tolist()
        return self

    @classmethod
    def from_vectors(
        cls,
        origin: np.ndarray,
        towards: np.ndarray,
        up: np.ndarray,
        xfov: float,
        yfov: float,
        near: float = 0.01,
        far: float = 100.0,
        value: float = 0.0,
        name: Optional[str] = None
    ) -> "Camera":
        """Create a camera from numpy vectors."""
        return cls(
            origin=np.asarray(origin, dtype=float).tolist(),
            towards=np.asarray(towards, dtype=float).tolist(),
            up=np.asarray(up, dtype=float).tolist(),
            xfov=float(xfov),
            yfov=float(yfov),
            near=float(near),
            far=float(far),
            value=float(value),
            name=name
        )

    @classmethod
    def looking(
        cls,
        origin: np.ndarray,
        towards: np.ndarray,
        xfov: float,
        yfov: float,
        near: float = 0.01,
        far: float = 100.0,
        name: Optional[str] = None
    ) -> "Camera":
        """Create a camera looking along `towards` with up derived from world +z."""
        towards, up, _ = look_at_basis(towards)
        return cls.from_vectors(origin, towards, up, xfov, yfov, near, far, name=name)

    @classmethod
    def look_at(
        cls,
        origin: np.ndarray,
        target: np.ndarray,
        xfov: float,
        yfov: float,
        near: float = 0.01,
        far: float = 100.0,
        name: Optional[str] = None
    ) -> "Camera":
        """Create a camera at origin looking at target."""
        towards = np.asarray(target, dtype=float) - np.asarray(origin, dtype=float)
        return cls.looking(origin, towards, xfov, yfov, near, far, name=name)

    def get_origin(self) -> np.ndarray:
        """Get viewpoint as numpy array."""
        return np.array(self.origin)

    def get_towards(self) -> np.ndarray:
        """Get view direction as numpy array."""
        return np.array(self.towards)

    def get_up(self) -> np.ndarray:
        """Get up vector as numpy array."""
        return np.array(self.up)

    def get_right(self) -> np.ndarray:
        """Get right vector (towards x up)."""
        return np.cross(self.get_towards(), self.get_up())
