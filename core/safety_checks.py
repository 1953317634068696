"""
safety_checks.py - Safety Check Module

Access checks run by the caller before committing a rename batch
"""

from pathlib import Path
from typing import Iterable, Optional
import ctypes
import os
import stat

from .models_fs import RenamePreview


def is_running_as_admin() -> bool:
    """Whether the process runs as root (POSIX) or administrator (Windows)"""
    if hasattr(os, "geteuid"):
        return os.geteuid() == 0
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False


def can_write_to_directory(directory: Path) -> bool:
    """Whether new entries can be created in directory"""
    return directory.is_dir() and os.access(directory, os.W_OK)


def can_modify_file(path: Path) -> bool:
    """
    Check if a file can be renamed by this process

    Args:
        path: File to check

    Returns:
        Whether the file (or, if missing, its directory) is writable
    """
    path = Path(path)
    if not os.path.lexists(path):
        return can_write_to_directory(path.parent)

    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False

    read_only = not mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH)
    if read_only and not is_running_as_admin():
        return False

    return os.access(path, os.W_OK)


def find_denied(previews: Iterable[RenamePreview]) -> Optional[Path]:
    """
    Find the first preview whose source cannot be modified

    Returns:
        The offending original path, or None if all are writable
    """
    for preview in previews:
        if not can_modify_file(preview.original_path):
            return preview.original_path
    return None
