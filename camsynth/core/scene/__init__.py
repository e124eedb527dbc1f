"""Scene tree, ray queries and rendering."""

from .geometry import BoundingBox, TriangleMesh, triangle_areas, box_mesh, quad_mesh
from .nodes import NodeCategory, SceneNode, classify_name
from .layout import WallSegment, RoomLayout, FloorLayout, SceneLayout
from .scene import Scene
from .render import UNKNOWN_NODE, Renderer, RayCastRenderer

__all__ = [
    "BoundingBox",
    "TriangleMesh",
    "triangle_areas",
    "box_mesh",
    "quad_mesh",
    "NodeCategory",
    "SceneNode",
    "classify_name",
    "WallSegment",
    "RoomLayout",
    "FloorLayout",
    "SceneLayout",
    "Scene",
    "UNKNOWN_NODE",
    "Renderer",
    "RayCastRenderer",
]
