"""
plan_rename.py - Rename Preview Generation Module

Responsibilities:
- Generate proposed names (find/replace or sequential numbering)
- Flag proposed names that collide within the batch
- Dispatch on the strategy parameters
"""

from collections import Counter
from dataclasses import replace
from typing import List, Sequence

from .config import (
    MAX_PADDING, MAX_PATTERN_LENGTH, MAX_SEQUENCE_NUMBER, MAX_TEMPLATE_LENGTH,
    PLACEHOLDER,
)
from .errors import MissingPlaceholderError, PatternTooLongError, TemplateTooLongError
from .models_fs import (
    FileRecord, RenamePreview, RenameParams, FindReplaceParams, IterationParams,
)
from .text_match import replace_text, compile_pattern, regex_replace


def detect_conflicts(previews: Sequence[RenamePreview]) -> List[RenamePreview]:
    """
    Mark previews whose new names collide (case-insensitive)

    Args:
        previews: Preview batch

    Returns:
        New list with has_conflict recomputed for every preview
    """
    counts = Counter(p.new_name.lower() for p in previews)
    return [
        replace(p, has_conflict=counts[p.new_name.lower()] > 1)
        for p in previews
    ]


def apply_find_replace(
    files: Sequence[FileRecord],
    pattern: str,
    replacement: str,
    use_regex: bool = False,
    case_sensitive: bool = True,
) -> List[RenamePreview]:
    """
    Generate find/replace previews

    Args:
        files: File list
        pattern: Text or regular expression to find
        replacement: Replacement string (re template syntax in regex mode)
        use_regex: Whether pattern is a regular expression
        case_sensitive: Whether case-sensitive

    Returns:
        Previews for files whose name changes, in input order

    Raises:
        PatternTooLongError: pattern exceeds MAX_PATTERN_LENGTH
        InvalidPatternError: regex or replacement template is invalid
    """
    if not pattern:
        return []

    if len(pattern) > MAX_PATTERN_LENGTH:
        raise PatternTooLongError(MAX_PATTERN_LENGTH)

    previews: List[RenamePreview] = []

    if use_regex:
        regex = compile_pattern(pattern, case_sensitive)
        for f in files:
            new_name = regex_replace(regex, f.name, replacement)
            if new_name != f.name:
                previews.append(RenamePreview.for_record(f, new_name))
    else:
        for f in files:
            new_name = replace_text(f.name, pattern, replacement, case_sensitive)
            if new_name != f.name:
                previews.append(RenamePreview.for_record(f, new_name))

    return detect_conflicts(previews)


def format_sequence_number(number: int, padding: int) -> str:
    """Zero-pad number to at least `padding` digits"""
    return str(number).zfill(padding)


def apply_iteration_template(
    files: Sequence[FileRecord],
    template: str,
    start_number: int = 1,
    padding: int = 3,
) -> List[RenamePreview]:
    """
    Generate sequential numbering previews

    The position in `files` decides each number, so callers reorder the list
    to change the numbering. Every file gets a preview.

    Args:
        files: File list in numbering order
        template: Name template containing {n}
        start_number: Number given to the first file
        padding: Minimum digit width (capped at MAX_PADDING)

    Returns:
        One preview per file, in input order

    Raises:
        MissingPlaceholderError: template lacks {n}
        TemplateTooLongError: template exceeds MAX_TEMPLATE_LENGTH
        ValueError: start_number is negative
    """
    if len(template) > MAX_TEMPLATE_LENGTH:
        raise TemplateTooLongError(MAX_TEMPLATE_LENGTH)

    if PLACEHOLDER not in template:
        raise MissingPlaceholderError(PLACEHOLDER)

    if start_number < 0:
        raise ValueError(f"Start number must be non-negative: {start_number}")

    padding = max(0, min(padding, MAX_PADDING))
    previews: List[RenamePreview] = []

    for i, f in enumerate(files):
        number = min(start_number + i, MAX_SEQUENCE_NUMBER)
        stem = template.replace(PLACEHOLDER, format_sequence_number(number, padding))
        previews.append(RenamePreview.for_record(f, f"{stem}{f.suffix}"))

    return detect_conflicts(previews)


def plan_previews(files: Sequence[FileRecord], params: RenameParams) -> List[RenamePreview]:
    """Run the strategy selected by the parameter type"""
    if isinstance(params, FindReplaceParams):
        return apply_find_replace(
            files,
            params.pattern,
            params.replacement,
            use_regex=params.use_regex,
            case_sensitive=params.case_sensitive,
        )
    elif isinstance(params, IterationParams):
        return apply_iteration_template(
            files,
            params.template,
            start_number=params.start_number,
            padding=params.padding,
        )
    else:
        raise TypeError(f"Unknown rename parameters: {type(params).__name__}")
