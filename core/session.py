"""
session.py - Rename Session State

The user-orderable list of files being renamed, with a selection cursor.
Order matters: sequential numbering follows it.
"""

from typing import Iterable, List, Optional

from .config import MAX_FILES
from .models_fs import FileRecord, RenameParams, RenamePreview
from .plan_rename import plan_previews


class RenameSession:
    """File list and selection for one window"""

    def __init__(self, max_files: int = MAX_FILES):
        self.max_files = max_files
        self.files: List[FileRecord] = []
        self.selected_index: Optional[int] = None

    def __len__(self) -> int:
        return len(self.files)

    def add_files(self, records: Iterable[FileRecord]) -> bool:
        """
        Append records not already in the list

        Returns:
            True if max_files was reached before all records were added
        """
        known = {f.path for f in self.files}
        for record in records:
            if record.path in known:
                continue
            if len(self.files) >= self.max_files:
                return True
            self.files.append(record)
            known.add(record.path)
        return False

    def select(self, index: Optional[int]) -> None:
        if index is None or 0 <= index < len(self.files):
            self.selected_index = index

    def move_up(self) -> bool:
        """Swap the selected file with the one above; returns whether it moved"""
        i = self.selected_index
        if i is None or i <= 0:
            return False
        self.files[i - 1], self.files[i] = self.files[i], self.files[i - 1]
        self.selected_index = i - 1
        return True

    def move_down(self) -> bool:
        """Swap the selected file with the one below; returns whether it moved"""
        i = self.selected_index
        if i is None or i >= len(self.files) - 1:
            return False
        self.files[i + 1], self.files[i] = self.files[i], self.files[i + 1]
        self.selected_index = i + 1
        return True

    def remove_selected(self) -> Optional[FileRecord]:
        """Remove the selected file; the selection stays at the same row"""
        i = self.selected_index
        if i is None or i >= len(self.files):
            return None
        removed = self.files.pop(i)
        if not self.files:
            self.selected_index = None
        elif i >= len(self.files):
            self.selected_index = len(self.files) - 1
        return removed

    def clear(self) -> None:
        self.files.clear()
        self.selected_index = None

    def preview(self, params: RenameParams) -> List[RenamePreview]:
        """Previews for the current order; empty when there are no files"""
        if not self.files:
            return []
        return plan_previews(self.files, params)
