"""Scene tree nodes and their semantic classification."""

from enum import Enum
from typing import List, Optional

import numpy as np

from .geometry import TriangleMesh


class NodeCategory(str, Enum):
    """Semantic role of a node, inferred from its name."""

    PROJECT = "project"
    ROOM = "room"
    WALLS = "walls"
    FLOORS = "floors"
    CEILINGS = "ceilings"
    OPENING = "opening"
    OBJECT = "object"


# Categories that never count as scoreable objects
STRUCTURAL_CATEGORIES = frozenset({
    NodeCategory.WALLS,
    NodeCategory.FLOORS,
    NodeCategory.CEILINGS,
    NodeCategory.OPENING,
})


def classify_name(name: Optional[str]) -> NodeCategory:
    """Map a node name to its category using the house naming convention.

    `Project#`, `Room#`, `Walls#`, `Floors#` and `Ceilings#` prefixes mark
    structure; names containing `Door` or `Window` are openings.
    """
    if not name:
        return NodeCategory.OBJECT
    if name.startswith("Project#"):
        return NodeCategory.PROJECT
    if name.startswith("Room#"):
        return NodeCategory.ROOM
    if name.startswith("Walls#"):
        return NodeCategory.WALLS
    if name.startswith("Floors#"):
        return NodeCategory.FLOORS
    if name.startswith("Ceilings#"):
        return NodeCategory.CEILINGS
    if "Door" in name or "Window" in name:
        return NodeCategory.OPENING
    return NodeCategory.OBJECT


class SceneNode:
    """Node of a scene tree with a local transform and leaf geometry.

    `index` is the node's pre-order position and is assigned by the owning
    Scene; it is -1 for detached nodes.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        transform: Optional[np.ndarray] = None,
        meshes: Optional[List[TriangleMesh]] = None
    ):
        self.name = name
        self.transform = np.eye(4) if transform is None else np.asarray(transform, dtype=float)
        if self.transform.shape != (4, 4):
            raise ValueError(f"transform must be 4x4, got shape {self.transform.shape}")
        self.meshes: List[TriangleMesh] = list(meshes or [])
        self.parent: Optional["SceneNode"] = None
        self.children: List["SceneNode"] = []
        self.index = -1

    def add_child(self, child: "SceneNode") -> "SceneNode":
        """Attach child as the last child of this node and return it."""
        if child.parent is not None:
            raise ValueError(f"Node {child.name!r} already has a parent")
        node = self
        while node is not None:
            if node is child:
                raise ValueError("Adding this child would create a cycle")
            node = node.parent
        child.parent = self
        self.children.append(child)
        return child

    def add_mesh(self, mesh: TriangleMesh) -> None:
        self.meshes.append(mesh)

    @property
    def category(self) -> NodeCategory:
        return classify_name(self.name)

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def is_object(self) -> bool:
        """Leaf node that is not a wall, floor, ceiling, door or window."""
        return self.is_leaf and self.category not in STRUCTURAL_CATEGORIES

    def is_room(self) -> bool:
        return self.category == NodeCategory.ROOM

    def local_triangles(self) -> np.ndarray:
        """(M, 3, 3) triangles of this node's own meshes, local coordinates."""
        if not self.meshes:
            return np.zeros((0, 3, 3))
        return np.concatenate([mesh.triangles() for mesh in self.meshes], axis=0)

    def __repr__(self) -> str:
        return f"SceneNode(name={self.name!r}, index={self.index}, children={len(self.children)})"
