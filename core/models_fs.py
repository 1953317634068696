"""
models_fs.py - Core Data Structure Definitions

Contains:
- FileRecord: A file found by a scan
- RenamePreview: A proposed rename of one file
- FindReplaceParams / IterationParams: Rename strategy parameters
- AppMode: Which strategy the user is working with
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union
from enum import Enum

from .config import PLACEHOLDER


class AppMode(Enum):
    """Rename mode enumeration"""
    FIND_REPLACE = "find_replace"
    ITERATION = "iteration"

    @property
    def label(self) -> str:
        if self is AppMode.FIND_REPLACE:
            return "Find & Replace"
        return "Iteration Numbering"


@dataclass(frozen=True)
class FileRecord:
    """File information data class"""
    path: Path                      # Absolute path
    name: str                       # Final path component

    @classmethod
    def from_path(cls, p: Path) -> "FileRecord":
        """Create FileRecord from Path object"""
        return cls(path=p, name=p.name)

    @property
    def suffix(self) -> str:
        """Extension including the leading dot, or empty string"""
        return self.path.suffix


@dataclass(frozen=True)
class RenamePreview:
    """Proposed rename of one file"""
    original_path: Path
    original_name: str              # Same string object as FileRecord.name
    new_name: str
    has_conflict: bool = False

    @property
    def target_path(self) -> Path:
        """Resolved destination path"""
        return self.original_path.parent / self.new_name

    @property
    def is_noop(self) -> bool:
        """Whether the proposed name equals the original"""
        return self.new_name == self.original_name

    @classmethod
    def for_record(cls, record: FileRecord, new_name: str) -> "RenamePreview":
        return cls(
            original_path=record.path,
            original_name=record.name,
            new_name=new_name,
        )


@dataclass(frozen=True)
class FindReplaceParams:
    """Find/replace strategy parameters"""
    pattern: str
    replacement: str = ""
    use_regex: bool = False
    case_sensitive: bool = True


@dataclass(frozen=True)
class IterationParams:
    """Sequential numbering strategy parameters"""
    template: str = PLACEHOLDER
    start_number: int = 1
    padding: int = 3


RenameParams = Union[FindReplaceParams, IterationParams]
