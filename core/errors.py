"""
errors.py - Error Taxonomy

Validation errors are raised before any filesystem mutation.
RenameFailedError is the only partial-failure condition.
"""

from pathlib import Path
from typing import List, Optional


class RenameToolError(Exception):
    """Base class for all rename tool errors"""


class NotFoundError(RenameToolError):
    """Scan target does not exist"""

    def __init__(self, path: Path):
        super().__init__(f"Path does not exist: {path}")
        self.path = path


class ReadFailureError(RenameToolError):
    """Directory listing or entry metadata could not be read"""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path


class PatternTooLongError(RenameToolError):
    def __init__(self, max_length: int):
        super().__init__(f"Pattern too long (max {max_length} chars)")
        self.max_length = max_length


class TemplateTooLongError(RenameToolError):
    def __init__(self, max_length: int):
        super().__init__(f"Template too long (max {max_length} chars)")
        self.max_length = max_length


class InvalidPatternError(RenameToolError):
    def __init__(self, reason: str):
        super().__init__(f"Invalid regex: {reason}")


class MissingPlaceholderError(RenameToolError):
    def __init__(self, placeholder: str):
        super().__init__(f"Template must contain {placeholder} placeholder")
        self.placeholder = placeholder


class InvalidNameError(RenameToolError):
    """Proposed name is not a bare file name"""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid file name {name!r}: {reason}")
        self.name = name


class TargetExistsError(RenameToolError):
    def __init__(self, target: Path):
        super().__init__(f"Target exists: {target}")
        self.target = target


class DuplicateTargetError(RenameToolError):
    def __init__(self, target: Path):
        super().__init__(f"Duplicate target: {target.name}")
        self.target = target


class RenameFailedError(RenameToolError):
    """
    A filesystem rename failed during commit

    Attributes:
        phase: 1 (original -> temporary) or 2 (temporary -> final)
        source: Path that could not be renamed
        target: Path it was being renamed to
        stranded: Temporary paths left on disk, in phase-1 order
        renamed: Number of files already at their final name
    """

    def __init__(
        self,
        phase: int,
        source: Path,
        target: Path,
        reason: str,
        stranded: Optional[List[Path]] = None,
        renamed: int = 0,
    ):
        stranded = list(stranded or [])
        message = f"Phase {phase} failed renaming {source} -> {target.name}: {reason}"
        if stranded:
            message += f" ({len(stranded)} file(s) left with temporary names)"
        super().__init__(message)
        self.phase = phase
        self.source = source
        self.target = target
        self.stranded = stranded
        self.renamed = renamed
