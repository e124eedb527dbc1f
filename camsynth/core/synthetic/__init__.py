"""Synthetic scene generation."""

from .scene_gen import SceneGenerator, make_box_room, make_two_room_house

__all__ = [
    "SceneGenerator",
    "make_box_room",
    "make_two_room_house",
]
