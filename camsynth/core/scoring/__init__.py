"""Camera scoring."""

from .visibility import VisibilityScorer

__all__ = ["VisibilityScorer"]
