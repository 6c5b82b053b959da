"""
Decomposition engine submodule.

Builds the codepoint -> diacritic-free replacement mapping from Unicode
decomposition data.

Basic usage:
    >>> from unistrip.decomposition import build_diacritic_mapping, records_from_unicodedata
    >>> mapping = build_diacritic_mapping(records_from_unicodedata(relevant_only=True))
    >>> mapping[0xE9]
    'e'

    >>> from unistrip.decomposition import load_unicode_data
    >>> records = load_unicode_data("UnicodeData.txt")  # doctest: +SKIP
"""

from unistrip.decomposition._engine import (
    DecompositionCycleError,
    MAX_DECOMPOSITION_DEPTH,
    add_mapping,
    build_diacritic_mapping,
    compute_fully_decomposed,
    decompose,
    filter_diacritics,
    is_hangul_syllable,
    sort_codepoints,
)
from unistrip.decomposition._records import (
    Category,
    DecompositionRecord,
    DecompositionTables,
    UnicodeDataError,
    collect_tables,
    load_unicode_data,
    parse_decomposition,
    parse_unicode_data,
    records_from_unicodedata,
)

__all__ = [
    "Category",
    "DecompositionCycleError",
    "DecompositionRecord",
    "DecompositionTables",
    "MAX_DECOMPOSITION_DEPTH",
    "UnicodeDataError",
    "add_mapping",
    "build_diacritic_mapping",
    "collect_tables",
    "compute_fully_decomposed",
    "decompose",
    "filter_diacritics",
    "is_hangul_syllable",
    "load_unicode_data",
    "parse_decomposition",
    "parse_unicode_data",
    "records_from_unicodedata",
    "sort_codepoints",
]
