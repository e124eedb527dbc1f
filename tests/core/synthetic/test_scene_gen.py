"""Tests for synthetic scene generation."""

import numpy as np
import pytest

from camsynth.core.scene.nodes import NodeCategory
from camsynth.core.synthetic.scene_gen import (
    SceneGenerator,
    make_box_room,
    make_two_room_house,
)


class TestSceneGenerator:
    """Test SceneGenerator."""

    def test_room_structure(self):
        generator = SceneGenerator(seed=42)
        room = generator.add_room([0, 0, 0], [4, 3, 2.5])

        assert room.name == "Room#0"
        assert [c.category for c in room.children] == [
            NodeCategory.WALLS, NodeCategory.FLOORS, NodeCategory.CEILINGS
        ]
        assert len(room.children[0].meshes) == 4

    def test_room_without_walls(self):
        generator = SceneGenerator()
        room = generator.add_room([0, 0, 0], [4, 3, 2.5], wall_thickness=0.0)
        assert room.children[0].meshes == []

    def test_invalid_room(self):
        with pytest.raises(ValueError):
            SceneGenerator().add_room([0, 0, 0], [4, 0, 2.5])

    def test_wall_layout(self):
        generator = SceneGenerator()
        generator.add_room([0, 0, 0], [4, 3, 2.5], wall_thickness=0.2)
        scene = generator.build()

        room_layout = scene.layout.floors[0].rooms[0]
        assert room_layout.node is scene.rooms()[0]
        assert len(room_layout.walls) == 4
        assert room_layout.walls[0].thickness == 0.2
        assert room_layout.walls[0].length == pytest.approx(4.2)
        bbox = room_layout.wall_bbox()
        np.testing.assert_allclose(bbox.lo[:2], [-0.1, -0.1])
        np.testing.assert_allclose(bbox.hi[:2], [4.1, 3.1])

    def test_random_boxes_stand_on_floor(self):
        generator = SceneGenerator(seed=1)
        room = generator.add_room([0, 0, 0], [6, 6, 3])
        boxes = generator.add_random_boxes(room, 5)
        scene = generator.build()

        assert len(boxes) == 5
        for box in boxes:
            bbox = scene.node_bbox(box)
            assert bbox.lo[2] == pytest.approx(0.0)
            assert np.all(bbox.lo[:2] >= 0.5 - 1e-9)
            assert np.all(bbox.hi[:2] <= 5.5 + 1e-9)

    def test_seed_reproducible(self):
        a = make_two_room_house(seed=3)
        b = make_two_room_house(seed=3)

        np.testing.assert_allclose(a.bbox.lo, b.bbox.lo)
        np.testing.assert_allclose(
            a.node_bbox(a.objects()[0]).lo, b.node_bbox(b.objects()[0]).lo
        )


class TestSceneHelpers:
    """Test ready-made scenes."""

    def test_make_box_room(self):
        scene = make_box_room(objects=[((5, 5, 1.5), 1.0)])

        assert scene.root.name == "Project#0"
        assert len(scene.rooms()) == 1
        assert [n.name for n in scene.objects()] == ["Object#0"]
        room = scene.rooms()[0]
        np.testing.assert_allclose(scene.node_bbox(room.children[1]).lo, [0, 0, 0])
        np.testing.assert_allclose(scene.node_bbox(room.children[2]).hi, [10, 10, 3])

    def test_make_two_room_house(self):
        scene = make_two_room_house(objects_per_room=3, seed=0)

        assert [r.name for r in scene.rooms()] == ["Room#0", "Room#1"]
        assert len(scene.objects()) == 6
        assert len(scene.layout.floors) == 1
        assert len(scene.layout.floors[0].rooms) == 2
        first, second = scene.rooms()
        assert scene.node_bbox(first).hi[0] <= scene.node_bbox(second).lo[0] + 1e-9
