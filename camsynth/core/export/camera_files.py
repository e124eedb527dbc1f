"""Plain-text camera list files.

One camera per line in every format; lines follow list order so the files
written for one camera list stay aligned with each other.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..math.camera import camera_to_world, intrinsics_matrix, yfov_from_xfov
from ..models.config import CameraConfig
from ..models.entities import Camera
from ..scene.scene import Scene

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def format_camera(camera: Camera) -> str:
    """`ox oy oz  tx ty tz  ux uy uz  xfov yfov  value`"""
    o, t, u = camera.origin, camera.towards, camera.up
    return "%g %g %g  %g %g %g  %g %g %g  %g %g  %g" % (
        o[0], o[1], o[2],
        t[0], t[1], t[2],
        u[0], u[1], u[2],
        camera.xfov, camera.yfov,
        camera.value
    )


def write_cameras(path: PathLike, cameras: Sequence[Camera]) -> None:
    with open(path, "w") as f:
        for camera in cameras:
            f.write(format_camera(camera) + "\n")
    logger.info(f"Wrote {len(cameras)} cameras to {path}")


def read_cameras(
    path: PathLike,
    config: Optional[CameraConfig] = None,
    scene_radius: float = 1.0
) -> List[Camera]:
    """Read a camera list written by write_cameras.

    The vertical field of view is recomputed from the configured image
    aspect, and clip distances from the scene radius. Reading stops at the
    first incomplete or malformed record.

    Args:
        path: Camera file
        config: Image size used for the vertical field of view
        scene_radius: Half diagonal of the scene bounding box

    Returns:
        Cameras in file order

    Raises:
        OSError: If the file cannot be read
    """
    config = config or CameraConfig()
    near = 0.01 * scene_radius
    far = 100.0 * scene_radius

    with open(path) as f:
        tokens = f.read().split()

    cameras = []
    for start in range(0, len(tokens) - 11, 12):
        try:
            values = [float(token) for token in tokens[start:start + 12]]
        except ValueError:
            logger.warning(f"Stopped reading {path} at malformed camera record {len(cameras)}")
            break
        origin, towards, up = values[0:3], values[3:6], values[6:9]
        xfov, value = values[9], values[11]
        yfov = yfov_from_xfov(xfov, config.width, config.height)
        cameras.append(Camera.from_vectors(origin, towards, up, xfov, yfov, near, far, value=value))

    logger.info(f"Read {len(cameras)} cameras from {path}")
    return cameras


def write_camera_extrinsics(path: PathLike, cameras: Sequence[Camera]) -> None:
    """Top three rows of each camera-to-world matrix, row-major."""
    with open(path, "w") as f:
        for camera in cameras:
            M = camera_to_world(camera.get_origin(), camera.get_towards(), camera.get_up())
            rows = ["%g %g %g %g" % tuple(M[i]) for i in range(3)]
            f.write("   ".join(rows) + "\n")
    logger.info(f"Wrote camera extrinsics to {path}")


def write_camera_intrinsics(path: PathLike, cameras: Sequence[Camera], width: int, height: int) -> None:
    with open(path, "w") as f:
        for camera in cameras:
            K = intrinsics_matrix(camera.xfov, camera.yfov, width, height)
            f.write("%g 0 %g   0 %g %g  0 0 1\n" % (K[0, 0], K[0, 2], K[1, 1], K[1, 2]))
    logger.info(f"Wrote camera intrinsics to {path}")


def write_camera_names(path: PathLike, cameras: Sequence[Camera]) -> None:
    with open(path, "w") as f:
        for camera in cameras:
            f.write(f"{camera.name or '-'}\n")
    logger.info(f"Wrote camera names to {path}")


def write_node_names(path: PathLike, scene: Scene) -> None:
    """`index+1 name` for every scene node, `-` for unnamed nodes."""
    with open(path, "w") as f:
        for node in scene.nodes:
            f.write(f"{node.index + 1} {node.name or '-'}\n")
    logger.info(f"Wrote {scene.n_nodes} node names to {path}")
