"""Exceptions raised by camsynth."""


class CamSynthError(Exception):
    """Base class for camsynth errors."""


class RoomStructureError(CamSynthError, ValueError):
    """Room node lacks the Walls#/Floors#/Ceilings# children in that order."""


class MaskResolutionError(CamSynthError, ValueError):
    """Viewpoint mask grid would be smaller than 3x3 cells."""


class InsufficientDataError(CamSynthError, ValueError):
    """Not enough keypoints to fit a camera trajectory."""


class SceneLoadError(CamSynthError, IOError):
    """Scene is missing or unusable."""
