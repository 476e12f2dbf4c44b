"""Permission checking utilities."""

import os
from pathlib import Path


def check_path_writable(path: str) -> bool:
    """Check if a destination path is writable."""
    p = Path(path).expanduser()
    if p.exists():
        return p.is_dir() and os.access(str(p), os.W_OK)
    # Check parent
    parent = p.parent
    while not parent.exists():
        parent = parent.parent
    return os.access(str(parent), os.W_OK)
