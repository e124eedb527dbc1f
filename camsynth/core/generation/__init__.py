"""Candidate camera generation strategies."""

from .candidates import CandidateSet, CandidateGenerator, direction_buckets
from .object_cameras import ObjectCameraGenerator
from .wall_cameras import WallCameraGenerator
from .room_cameras import RoomCameraGenerator

__all__ = [
    "CandidateSet",
    "CandidateGenerator",
    "direction_buckets",
    "ObjectCameraGenerator",
    "WallCameraGenerator",
    "RoomCameraGenerator",
]
