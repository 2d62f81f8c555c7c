"""
text_match.py - Text Matching Tools

Locates occurrences of a literal target (exact or case-insensitive) and
removes the ones selected by a RemovePosition.
"""

from typing import List, Optional, Tuple
import logging
import re

from .models_rule import RemovePosition

logger = logging.getLogger(__name__)

# Errors the regex engine may raise while building or running a pattern
MATCHER_ERRORS = (re.error, OverflowError, RecursionError, MemoryError)


def contains(text: str, keyword: str, case_sensitive: bool = True) -> bool:
    """
    Check if text contains keyword

    Args:
        text: Text to check
        keyword: Keyword (empty matches everything)
        case_sensitive: Whether case-sensitive

    Returns:
        Whether contains
    """
    if not keyword:
        return True

    if case_sensitive:
        return keyword in text
    else:
        return keyword.casefold() in text.casefold()


def compile_literal(target: str, case_sensitive: bool = True) -> "re.Pattern[str]":
    """Compile target as a literal pattern"""
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(re.escape(target), flags)


def find_occurrences(text: str, target: str, case_sensitive: bool = True) -> List[Tuple[int, int]]:
    """
    Find non-overlapping occurrences, scanning left to right

    Spans always refer to the original text, also in case-insensitive mode.

    Args:
        text: Text to search
        target: Literal to look for
        case_sensitive: Whether case-sensitive

    Returns:
        List of (start, end) spans
    """
    if not target:
        return []

    if case_sensitive:
        spans = []
        start = text.find(target)
        while start != -1:
            end = start + len(target)
            spans.append((start, end))
            start = text.find(target, end)
        return spans

    return [m.span() for m in compile_literal(target, case_sensitive=False).finditer(text)]


def remove_occurrences(
    text: str,
    target: str,
    position: RemovePosition = RemovePosition.ALL,
    case_sensitive: bool = True,
) -> str:
    """
    Remove occurrence(s) of target from text

    If the matcher cannot be built or run for target, text is returned
    unmodified.

    Args:
        text: Original text
        target: Literal to remove
        position: Which occurrence(s) to remove
        case_sensitive: Whether case-sensitive

    Returns:
        Text with the selected occurrence(s) removed

    Raises:
        ValueError: position is not a RemovePosition
    """
    if not target:
        return text

    try:
        if position is RemovePosition.ALL:
            if case_sensitive:
                return text.replace(target, "")
            return compile_literal(target, case_sensitive=False).sub("", text)

        if position is RemovePosition.FIRST:
            if case_sensitive:
                return text.replace(target, "", 1)
            return compile_literal(target, case_sensitive=False).sub("", text, count=1)

        if position is RemovePosition.LAST:
            spans = find_occurrences(text, target, case_sensitive)
            if not spans:
                return text
            start, end = spans[-1]
            return text[:start] + text[end:]
    except MATCHER_ERRORS as e:
        logger.warning("Cannot match %r, leaving %r unchanged: %s", target, text, e)
        return text

    raise ValueError(f"Unknown remove position: {position!r}")


def is_valid_filename(name: str) -> Tuple[bool, Optional[str]]:
    """
    Check if filename is valid (mainly for Windows)

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    if name in (".", ".."):
        return False, f"Filename cannot be {name!r}"

    invalid_chars = '<>:"/\\|?*\0'
    for char in invalid_chars:
        if char in name:
            return False, f"Filename contains invalid character: {char!r}"

    if name.endswith(' ') or name.endswith('.'):
        return False, "Filename cannot end with space or dot"

    reserved_names = {
        'CON', 'PRN', 'AUX', 'NUL',
        'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
        'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
    }
    name_upper = name.upper().split('.')[0]
    if name_upper in reserved_names:
        return False, f"Filename is a Windows reserved name: {name_upper}"

    if len(name) > 255:
        return False, "Filename exceeds 255 characters"

    return True, None
