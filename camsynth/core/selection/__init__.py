"""Final ordering of selected cameras."""

from .ordering import ORDERINGS, score_key, name_key, spatial_order, sort_cameras

__all__ = [
    "ORDERINGS",
    "score_key",
    "name_key",
    "spatial_order",
    "sort_cameras",
]
