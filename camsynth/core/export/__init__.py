"""Camera list file readers and writers."""

from .camera_files import (
    format_camera,
    read_cameras,
    write_cameras,
    write_camera_extrinsics,
    write_camera_intrinsics,
    write_camera_names,
    write_node_names,
)

__all__ = [
    "format_camera",
    "read_cameras",
    "write_cameras",
    "write_camera_extrinsics",
    "write_camera_intrinsics",
    "write_camera_names",
    "write_node_names",
]
