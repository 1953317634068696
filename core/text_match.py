"""
text_match.py - Text Matching Tools

Provides literal and regex replacement and file name validation
"""

from typing import Optional
import os
import re

from .errors import InvalidPatternError


def replace_text(text: str, old: str, new: str, case_sensitive: bool = True) -> str:
    """
    Replace every occurrence of a literal string

    Args:
        text: Original text
        old: String to replace
        new: Replacement string, inserted verbatim
        case_sensitive: Whether case-sensitive

    Returns:
        Replaced text
    """
    if not old:
        return text

    if case_sensitive:
        return text.replace(old, new)
    else:
        # Case-insensitive replacement; the callable keeps `new` from being
        # parsed as a substitution template
        pattern = re.compile(re.escape(old), re.IGNORECASE)
        return pattern.sub(lambda _m: new, text)


def compile_pattern(pattern: str, case_sensitive: bool = True) -> re.Pattern:
    """
    Compile a user-supplied regular expression

    Raises:
        InvalidPatternError: syntax error or a pattern too large to compile
    """
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidPatternError(str(e)) from e
    except (OverflowError, RecursionError) as e:
        raise InvalidPatternError(f"pattern too complex ({e})") from e


def regex_replace(regex: re.Pattern, text: str, replacement: str) -> str:
    """
    Replace all non-overlapping matches, honoring re substitution syntax

    Raises:
        InvalidPatternError: replacement references a missing group
    """
    try:
        return regex.sub(replacement, text)
    except re.error as e:
        raise InvalidPatternError(f"bad replacement: {e}") from e


def is_valid_filename(name: str) -> tuple[bool, Optional[str]]:
    """
    Check that name is a bare file name usable inside its directory

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    if name in (".", ".."):
        return False, "Filename cannot be a directory reference"

    if "\0" in name:
        return False, "Filename contains a NUL character"

    for sep in {"/", os.sep, os.altsep} - {None}:
        if sep in name:
            return False, f"Filename contains path separator: {sep}"

    return True, None
