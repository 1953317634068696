"""
gui_workers.py - GUI Worker Threads

Runs scans and rename commits off the UI thread
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QThread, Signal, QObject

from core import (
    RenamePreview, RenameToolError, RenameFailedError,
    scan_directory, execute_renames,
)


class ScanWorker(QThread):
    """File scanning worker thread"""

    # Signals
    completed = Signal(list)        # List[FileRecord]
    failed = Signal(str)            # Error message

    def __init__(self, path: Path, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.path = path

    def run(self):
        try:
            files = scan_directory(self.path)
        except RenameToolError as e:
            self.failed.emit(str(e))
            return
        self.completed.emit(files)


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    completed = Signal(int)             # Renamed count
    failed = Signal(str, list)          # Error message, stranded temp paths

    def __init__(self, previews: List[RenamePreview], parent: Optional[QObject] = None):
        super().__init__(parent)
        self.previews = list(previews)

    def run(self):
        def progress_callback(current: int, total: int, msg: str):
            self.progress.emit(current, total, msg)

        try:
            count = execute_renames(self.previews, progress_callback=progress_callback)
        except RenameFailedError as e:
            self.failed.emit(str(e), [str(p) for p in e.stranded])
            return
        except RenameToolError as e:
            self.failed.emit(str(e), [])
            return
        self.completed.emit(count)
