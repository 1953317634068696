"""
scan_files.py - File Scanning Module

Lists the files of a single directory (non-recursive)
"""

from pathlib import Path
from typing import List, Union
import logging
import os

from .errors import NotFoundError, ReadFailureError
from .models_fs import FileRecord
from .sort_rules import sort_natural

logger = logging.getLogger(__name__)


def scan_directory(path: Union[str, Path]) -> List[FileRecord]:
    """
    Scan a directory for files to rename

    A path that names a file yields that single file. Subdirectories are
    skipped. Any read error aborts the whole scan.

    Args:
        path: Directory (or single file) to scan

    Returns:
        File records sorted in natural order

    Raises:
        NotFoundError: path does not exist
        ReadFailureError: listing or an entry could not be read
    """
    path = Path(path)

    if not path.exists():
        raise NotFoundError(path)

    if not path.is_dir():
        # Single-file mode
        record = FileRecord.from_path(path.parent.resolve() / path.name)
        logger.debug("Scanned single file %s", record.path)
        return [record]

    directory = path.resolve()
    results: List[FileRecord] = []

    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                # Only process files, not directories
                if entry.is_dir():
                    continue
                results.append(FileRecord.from_path(directory / entry.name))
    except OSError as e:
        raise ReadFailureError(directory, e.strerror or str(e)) from e

    logger.debug("Scanned %d files in %s", len(results), directory)
    return sort_natural(results)
