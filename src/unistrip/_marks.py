"""
The combining diacritical marks block (U+0300..U+036F).

Shared by the offline decomposition engine and the runtime stripper: a
codepoint in this block always strips to the empty string and is never
used as a table key.
"""

from __future__ import annotations

__all__ = ["DIACRITIC_FIRST", "DIACRITIC_LAST", "is_diacritic", "is_diacritic_codepoint"]

DIACRITIC_FIRST = 0x0300
DIACRITIC_LAST = 0x036F


def is_diacritic_codepoint(cp: int) -> bool:
    """Check if an integer codepoint lies in the combining diacritical marks block."""
    return DIACRITIC_FIRST <= cp <= DIACRITIC_LAST


def is_diacritic(ch: str) -> bool:
    """
    Check if a character is a combining diacritical mark.

    Args:
        ch: A single character

    Returns:
        True for U+0300..U+036F, False otherwise

    Example:
        >>> is_diacritic("\\u0301")
        True
        >>> is_diacritic("e")
        False
    """
    return DIACRITIC_FIRST <= ord(ch) <= DIACRITIC_LAST
