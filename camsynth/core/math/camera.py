"""Camera frame, ray generation and calibration matrices."""

import numpy as np


def yfov_from_xfov(xfov: float, width: int, height: int) -> float:
    """Vertical half field of view matching an image aspect ratio.

    Args:
        xfov: Horizontal half field of view in radians
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Vertical half field of view in radians
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")
    aspect = height / width
    return float(np.arctan(aspect * np.tan(xfov)))


def pixel_rays(
    towards: np.ndarray,
    up: np.ndarray,
    xfov: float,
    yfov: float,
    width: int,
    height: int
) -> np.ndarray:
    """Unit ray directions through every pixel center.

    Row 0 is the top of the image, column 0 the left edge.

    Args:
        towards: Unit view direction
        up: Unit up vector orthogonal to towards
        xfov: Horizontal half field of view in radians
        yfov: Vertical half field of view in radians
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        (height, width, 3) array of unit world-space directions
    """
    towards = np.asarray(towards, dtype=float)
    up = np.asarray(up, dtype=float)
    right = np.cross(towards, up)

    # Normalized device coordinates of pixel centers in [-1, 1]
    sx = (2.0 * (np.arange(width) + 0.5) / width - 1.0) * np.tan(xfov)
    sy = (1.0 - 2.0 * (np.arange(height) + 0.5) / height) * np.tan(yfov)

    directions = (
        towards[np.newaxis, np.newaxis, :]
        + sx[np.newaxis, :, np.newaxis] * right[np.newaxis, np.newaxis, :]
        + sy[:, np.newaxis, np.newaxis] * up[np.newaxis, np.newaxis, :]
    )
    directions /= np.linalg.norm(directions, axis=2, keepdims=True)
    return directions


def camera_to_world(origin: np.ndarray, towards: np.ndarray, up: np.ndarray) -> np.ndarray:
    """Camera coordinate system as a 4x4 matrix.

    Columns are right, up, backwards (-towards) and the origin, so the camera
    looks down its local -z axis.
    """
    towards = np.asarray(towards, dtype=float)
    up = np.asarray(up, dtype=float)
    M = np.eye(4)
    M[:3, 0] = np.cross(towards, up)
    M[:3, 1] = up
    M[:3, 2] = -towards
    M[:3, 3] = np.asarray(origin, dtype=float)
    return M


def intrinsics_matrix(xfov: float, yfov: float, width: int, height: int) -> np.ndarray:
    """3x3 pinhole intrinsics with the principal point at the image center."""
    fx = 0.5 * width / np.tan(xfov)
    fy = 0.5 * height / np.tan(yfov)
    return np.array([
        [fx, 0.0, 0.5 * width],
        [0.0, fy, 0.5 * height],
        [0.0, 0.0, 1.0],
    ])
