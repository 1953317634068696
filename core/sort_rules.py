"""
sort_rules.py - Sorting Rules Module

Natural ordering of file names: digit runs compare by value, everything else
compares ASCII-case-insensitively
"""

from functools import cmp_to_key
from typing import List, Tuple

from .config import MAX_NATURAL_NUMBER
from .models_fs import FileRecord

_DIGITS = "0123456789"


def _ascii_lower(ch: str) -> str:
    if "A" <= ch <= "Z":
        return chr(ord(ch) + 32)
    return ch


def _extract_number(text: str, pos: int) -> Tuple[int, int]:
    """
    Consume the digit run starting at pos

    Returns:
        (value saturated at MAX_NATURAL_NUMBER, position after the run)
    """
    value = 0
    while pos < len(text) and text[pos] in _DIGITS:
        value = min(value * 10 + (ord(text[pos]) - 48), MAX_NATURAL_NUMBER)
        pos += 1
    return value, pos


def natural_cmp(a: str, b: str) -> int:
    """
    Compare two strings in natural order

    Args:
        a: First string
        b: Second string

    Returns:
        Negative, zero or positive, like a classic cmp function
    """
    i = j = 0
    while True:
        if i >= len(a) and j >= len(b):
            return 0
        if i >= len(a):
            return -1
        if j >= len(b):
            return 1

        ac, bc = a[i], b[j]
        if ac in _DIGITS and bc in _DIGITS:
            a_num, i = _extract_number(a, i)
            b_num, j = _extract_number(b, j)
            if a_num != b_num:
                return -1 if a_num < b_num else 1
            continue

        ac, bc = _ascii_lower(ac), _ascii_lower(bc)
        if ac != bc:
            return -1 if ac < bc else 1
        i += 1
        j += 1


natural_key = cmp_to_key(natural_cmp)


def sort_natural(files: List[FileRecord], reverse: bool = False) -> List[FileRecord]:
    """
    Sort file records by name in natural order

    Args:
        files: File list
        reverse: Whether to sort in reverse

    Returns:
        Sorted file list (new list)
    """
    return sorted(files, key=lambda f: natural_key(f.name), reverse=reverse)
