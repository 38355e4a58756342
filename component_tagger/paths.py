"""Project-relative display paths for tagged files."""

from __future__ import annotations

import os
from typing import Union

from .config import DEFAULT_ROOT_MARKER

UNKNOWN_PATH = "unknown"

PathInput = Union[str, "os.PathLike[str]", None]


def normalize_path(file_path: PathInput, root_marker: str = DEFAULT_ROOT_MARKER) -> str:
    """Trim ``file_path`` so it starts at the first ``root_marker`` occurrence.

    ``/abs/project/src/pages/Foo.tsx`` becomes ``src/pages/Foo.tsx``. Paths
    without the marker are returned unchanged and a missing path becomes
    ``"unknown"``. Non path-like input raises ``TypeError``.
    """
    if file_path is None:
        return UNKNOWN_PATH
    path = os.fspath(file_path)
    if not isinstance(path, str):
        raise TypeError(f"Expected a text path, got {type(path).__name__}")
    if not path:
        return UNKNOWN_PATH

    index = path.find(root_marker) if root_marker else -1
    if index == -1:
        return path
    return path[index:]


__all__ = ["UNKNOWN_PATH", "normalize_path"]
