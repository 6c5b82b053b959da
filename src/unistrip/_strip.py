"""
Diacritic stripping for arbitrary Unicode text.

Replaces each accented character with its plain equivalent (é → e,
Å → A, ǅ → Dz) by looking it up in a perfect hash table built once per
process from the interpreter's Unicode data. Bare combining marks in
U+0300..U+036F are dropped.
"""

from __future__ import annotations

import functools
import unicodedata
from typing import Optional

from unistrip._marks import DIACRITIC_FIRST, DIACRITIC_LAST
from unistrip.decomposition import build_diacritic_mapping, records_from_unicodedata
from unistrip.phf import PerfectHashTable, build_table

__all__ = ["diacritics_table", "strip_char", "strip_diacritics", "unicode_version"]


@functools.lru_cache(maxsize=None)
def diacritics_table() -> PerfectHashTable:
    """
    Return the process-wide diacritics table, building it on first call.

    The table is immutable and shared by every caller.
    """
    mapping = build_diacritic_mapping(records_from_unicodedata(relevant_only=True))
    return build_table(mapping)


def unicode_version() -> str:
    """Return the UCD version the default table is built from."""
    return unicodedata.unidata_version


def strip_char(ch: str, table: Optional[PerfectHashTable] = None) -> Optional[str]:
    """
    Return the replacement for a single character.

    Args:
        ch: A single character
        table: Table to consult instead of the default one

    Returns:
        "" for a combining diacritical mark, the plain form for an accented
        character, or None if the character is left as is

    Example:
        >>> strip_char("é")
        'e'
        >>> strip_char("\\u0301")
        ''
        >>> strip_char("x") is None
        True
    """
    cp = ord(ch)
    if DIACRITIC_FIRST <= cp <= DIACRITIC_LAST:
        return ""
    if table is None:
        table = diacritics_table()
    return table.get(cp)


def _next_replacement(
    text: str, start: int, table: PerfectHashTable
) -> Optional[tuple[int, str]]:
    for i in range(start, len(text)):
        replacement = strip_char(text[i], table)
        if replacement is not None:
            return i, replacement
    return None


def strip_diacritics(text: str, table: Optional[PerfectHashTable] = None) -> str:
    """
    Remove diacritics from text, preserving case.

    Text with nothing to replace is returned as the same object, uncopied.

    Args:
        text: Any Unicode text
        table: Table to consult instead of the default one

    Returns:
        Text with every replaceable character substituted

    Example:
        >>> strip_diacritics("TÅRÖÄàèéìòù")
        'TAROAaeeiou'
    """
    if table is None:
        table = diacritics_table()

    found = _next_replacement(text, 0, table)
    if found is None:
        return text

    pieces: list[str] = []
    start = 0
    while found is not None:
        i, replacement = found
        pieces.append(text[start:i])
        pieces.append(replacement)
        start = i + 1
        found = _next_replacement(text, start, table)
    pieces.append(text[start:])
    return "".join(pieces)
