"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Validate a preview batch against the live filesystem
- Two-phase execution (first rename to temporary name, then to final name)
- Recovery of files left at temporary names
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple
import logging
import os
import re
import sys

from .errors import (
    DuplicateTargetError, InvalidNameError, RenameFailedError, TargetExistsError,
)
from .models_fs import RenamePreview
from .text_match import is_valid_filename

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]

_TEMP_NAME_RE = re.compile(r"^\.rename_temp_(\d+)_(.+)$", re.DOTALL)


def temp_prefix() -> str:
    """Temporary name prefix, unique to this process"""
    return f".rename_temp_{os.getpid()}_"


def _temp_path(preview: RenamePreview) -> Path:
    return preview.original_path.parent / f"{temp_prefix()}{preview.new_name}"


def _is_own_entry(target: Path, source: Path) -> bool:
    """Whether target is source's own directory entry spelled in another case"""
    if target.parent != source.parent or target.name.lower() != source.name.lower():
        return False
    try:
        target_st = os.lstat(target)
        source_st = os.lstat(source)
    except OSError:
        return False
    # A second link to the file is a different entry
    return (
        (target_st.st_dev, target_st.st_ino) == (source_st.st_dev, source_st.st_ino)
        and source_st.st_nlink == 1
    )


def validate_previews(previews: Sequence[RenamePreview]) -> None:
    """
    Check a batch before any file is touched

    A target that already exists is allowed only when it is one of the
    batch's original paths, or its own source spelled in another case on a
    case-insensitive filesystem. Hard links to a source are not exempt.

    Args:
        previews: Preview batch

    Raises:
        InvalidNameError: a new name is not a bare file name
        TargetExistsError: a target is occupied by a file outside the batch
        DuplicateTargetError: two previews resolve to the same target
    """
    original_paths: Set[Path] = {p.original_path for p in previews}
    targets: Set[Path] = set()

    for preview in previews:
        valid, error = is_valid_filename(preview.new_name)
        if not valid:
            raise InvalidNameError(preview.new_name, error)

        target = preview.target_path
        if (
            os.path.lexists(target)
            and target not in original_paths
            and not _is_own_entry(target, preview.original_path)
        ):
            raise TargetExistsError(target)
        if target in targets:
            raise DuplicateTargetError(target)
        targets.add(target)

        if not preview.is_noop and os.path.lexists(_temp_path(preview)):
            raise TargetExistsError(_temp_path(preview))


def execute_renames(
    previews: Sequence[RenamePreview],
    progress_callback: Optional[ProgressCallback] = None,
) -> int:
    """
    Validate and commit a preview batch (two-phase)

    Nothing is rolled back on failure: files already moved stay where they
    are and the error lists the ones left at temporary names.

    Args:
        previews: Approved preview batch
        progress_callback: Progress callback (current, total, message)

    Returns:
        Number of files renamed

    Raises:
        InvalidNameError, TargetExistsError, DuplicateTargetError: before
            any mutation
        RenameFailedError: a rename failed mid-commit
    """
    if not previews:
        return 0

    validate_previews(previews)

    pending = [p for p in previews if not p.is_noop]
    total = len(pending)
    logger.info("Renaming %d file(s), %d unchanged", total, len(previews) - total)

    # Phase 1: Rename all to temporary names
    temp_renames: List[Tuple[Path, Path]] = []  # (temp_path, final_path)

    for i, preview in enumerate(pending):
        if progress_callback:
            progress_callback(i + 1, total * 2, f"[Phase 1] {preview.original_name} -> temp name")

        temp_path = _temp_path(preview)
        try:
            os.rename(preview.original_path, temp_path)
        except OSError as e:
            logger.error("Phase 1 failed for %s: %s", preview.original_path, e)
            raise RenameFailedError(
                1, preview.original_path, temp_path, str(e),
                stranded=[t for t, _ in temp_renames],
            ) from e
        logger.debug("Phase 1: %s -> %s", preview.original_path, temp_path.name)
        temp_renames.append((temp_path, preview.target_path))

    # Phase 2: Rename from temporary names to final names
    renamed_count = 0
    for i, (temp_path, final_path) in enumerate(temp_renames):
        if progress_callback:
            progress_callback(total + i + 1, total * 2, f"[Phase 2] temp name -> {final_path.name}")

        try:
            os.rename(temp_path, final_path)
        except OSError as e:
            logger.error("Phase 2 failed for %s: %s", final_path, e)
            raise RenameFailedError(
                2, temp_path, final_path, str(e),
                stranded=[t for t, _ in temp_renames[i:]],
                renamed=renamed_count,
            ) from e
        logger.debug("Phase 2: %s -> %s", temp_path.name, final_path)
        renamed_count += 1

    logger.info("Renamed %d file(s)", renamed_count)
    return renamed_count


def _pid_alive(pid: int) -> bool:
    """Whether another process with this pid is running"""
    if pid <= 0 or pid > 0x7FFFFFFF or pid == os.getpid():
        return False
    if sys.platform == "win32":
        import ctypes
        # PROCESS_QUERY_LIMITED_INFORMATION
        handle = ctypes.windll.kernel32.OpenProcess(0x1000, False, pid)
        if not handle:
            return False
        ctypes.windll.kernel32.CloseHandle(handle)
        return True
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    except OSError:
        return False
    return True


def find_temp_files(directory: Path) -> Dict[Path, str]:
    """
    List files left at temporary names

    Returns:
        Mapping of temporary path -> intended final name
    """
    found: Dict[Path, str] = {}
    for item in Path(directory).iterdir():
        match = _TEMP_NAME_RE.match(item.name)
        if match and not item.is_dir():
            found[item] = match.group(2)
    return found


def recover_temp_files(directory: Path, include_live: bool = False) -> int:
    """
    Finish renames interrupted after phase 1

    Each temporary file is moved to the final name it encodes, unless that
    name is already taken. Files whose pid belongs to another running process
    may still be mid-commit and are skipped unless include_live is set.

    Args:
        directory: Directory
        include_live: Also recover files of processes that are still running

    Returns:
        Number of recovered files
    """
    count = 0
    for temp_path, final_name in sorted(find_temp_files(directory).items()):
        pid = int(_TEMP_NAME_RE.match(temp_path.name).group(1))
        if not include_live and _pid_alive(pid):
            logger.warning("Not recovering %s: process %d is still running", temp_path.name, pid)
            continue
        final_path = temp_path.parent / final_name
        if os.path.lexists(final_path):
            logger.warning("Not recovering %s: %s already exists", temp_path.name, final_name)
            continue
        try:
            os.rename(temp_path, final_path)
        except OSError as e:
            logger.warning("Could not recover %s: %s", temp_path.name, e)
            continue
        logger.info("Recovered %s -> %s (from process %d)", temp_path.name, final_name, pid)
        count += 1
    return count
