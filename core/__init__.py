"""
core - Batch Rename Tool Core Module

Provides directory scanning, rename preview generation, conflict detection
and two-phase rename execution
"""

from .config import (
    MAX_PATTERN_LENGTH,
    MAX_TEMPLATE_LENGTH,
    MAX_FILES,
    MAX_PADDING,
    PLACEHOLDER,
    DEBOUNCE_MS,
)

from .errors import (
    RenameToolError,
    NotFoundError,
    ReadFailureError,
    PatternTooLongError,
    TemplateTooLongError,
    InvalidPatternError,
    MissingPlaceholderError,
    InvalidNameError,
    TargetExistsError,
    DuplicateTargetError,
    RenameFailedError,
)

from .models_fs import (
    AppMode,
    FileRecord,
    RenamePreview,
    FindReplaceParams,
    IterationParams,
    RenameParams,
)

from .sort_rules import (
    natural_cmp,
    natural_key,
    sort_natural,
)

from .scan_files import (
    scan_directory,
)

from .text_match import (
    replace_text,
    is_valid_filename,
)

from .plan_rename import (
    apply_find_replace,
    apply_iteration_template,
    detect_conflicts,
    plan_previews,
)

from .exec_rename import (
    execute_renames,
    validate_previews,
    find_temp_files,
    recover_temp_files,
    temp_prefix,
)

from .safety_checks import (
    can_modify_file,
    find_denied,
)

from .session import RenameSession

from .settings import (
    Settings,
    SettingsStore,
)

__all__ = [
    # Limits
    "MAX_PATTERN_LENGTH",
    "MAX_TEMPLATE_LENGTH",
    "MAX_FILES",
    "MAX_PADDING",
    "PLACEHOLDER",
    "DEBOUNCE_MS",

    # Errors
    "RenameToolError",
    "NotFoundError",
    "ReadFailureError",
    "PatternTooLongError",
    "TemplateTooLongError",
    "InvalidPatternError",
    "MissingPlaceholderError",
    "InvalidNameError",
    "TargetExistsError",
    "DuplicateTargetError",
    "RenameFailedError",

    # Data models
    "AppMode",
    "FileRecord",
    "RenamePreview",
    "FindReplaceParams",
    "IterationParams",
    "RenameParams",

    # Sorting
    "natural_cmp",
    "natural_key",
    "sort_natural",

    # Scanning
    "scan_directory",

    # Text processing
    "replace_text",
    "is_valid_filename",

    # Planning
    "apply_find_replace",
    "apply_iteration_template",
    "detect_conflicts",
    "plan_previews",

    # Execution
    "execute_renames",
    "validate_previews",
    "find_temp_files",
    "recover_temp_files",
    "temp_prefix",

    # Safety checks
    "can_modify_file",
    "find_denied",

    # Session and settings
    "RenameSession",
    "Settings",
    "SettingsStore",
]
