"""Shared scenes and configurations."""

import numpy as np
import pytest

from camsynth.core.models.config import CameraConfig
from camsynth.core.synthetic.scene_gen import make_box_room

# Cube with a half diagonal of 1
UNIT_RADIUS_CUBE = 2.0 / np.sqrt(3.0)


@pytest.fixture
def box_room():
    """10x10x3 room with a radius-1 box at its center."""
    return make_box_room(
        room_size=(10.0, 10.0, 3.0),
        objects=[((5.0, 5.0, 1.5), UNIT_RADIUS_CUBE)],
        wall_thickness=0.1,
    )


@pytest.fixture
def empty_room():
    """10x10x3 room with a floor and ceiling only."""
    return make_box_room(room_size=(10.0, 10.0, 3.0), wall_thickness=0.0)


@pytest.fixture
def small_config():
    """Low resolution settings that keep ray casting fast."""
    return CameraConfig(
        width=32,
        height=24,
        position_sampling=1.0,
        min_visible_objects=0,
        object_target_samples=256,
        object_max_samples=512,
        seed=7,
    )
