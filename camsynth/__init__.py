"""camsynth - Camera viewpoint synthesis for indoor scenes

Generates, scores and orders camera viewpoints inside a house-like scene of
rooms, walls, floors, ceilings and objects.
"""

__version__ = "0.1.0"

# Core models
from .core.errors import (
    CamSynthError,
    RoomStructureError,
    MaskResolutionError,
    InsufficientDataError,
    SceneLoadError,
)
from .core.models.entities import Camera
from .core.models.config import CameraConfig, load_config

# Scene
from .core.scene.nodes import SceneNode
from .core.scene.scene import Scene
from .core.scene.render import RayCastRenderer

# Generation and scoring
from .core.scoring.visibility import VisibilityScorer
from .core.masks.viewpoint_mask import ViewpointMaskBuilder
from .core.generation import ObjectCameraGenerator, WallCameraGenerator, RoomCameraGenerator
from .core.trajectory.interpolation import TrajectoryInterpolator
from .core.selection.ordering import sort_cameras

# Pipeline
from .core.pipeline import CameraPipeline, OutputPaths

__all__ = [
    # Version
    "__version__",
    # Errors
    "CamSynthError",
    "RoomStructureError",
    "MaskResolutionError",
    "InsufficientDataError",
    "SceneLoadError",
    # Models
    "Camera",
    "CameraConfig",
    "load_config",
    # Scene
    "SceneNode",
    "Scene",
    "RayCastRenderer",
    # Generation
    "VisibilityScorer",
    "ViewpointMaskBuilder",
    "ObjectCameraGenerator",
    "WallCameraGenerator",
    "RoomCameraGenerator",
    "TrajectoryInterpolator",
    "sort_cameras",
    # Pipeline
    "CameraPipeline",
    "OutputPaths",
]
