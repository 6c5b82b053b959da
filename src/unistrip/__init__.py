"""
unistrip: strip diacritics from Unicode text.

Maps every accented character to its plain-letter equivalent using a
static perfect hash table derived from Unicode decomposition data.

Basic usage:
    >>> from unistrip import strip_diacritics
    >>> strip_diacritics("TÅRÖÄàèéìòù")
    'TAROAaeeiou'

Per-character usage:
    >>> from unistrip import is_diacritic, strip_char
    >>> is_diacritic("\\u0301")
    True
    >>> strip_char("ǅ")
    'Dz'
"""

from unistrip._marks import is_diacritic
from unistrip._strip import diacritics_table, strip_char, strip_diacritics, unicode_version

__version__ = "0.1.0"
__all__ = [
    "diacritics_table",
    "is_diacritic",
    "strip_char",
    "strip_diacritics",
    "unicode_version",
]


# Lazy import for spaCy components (only when spacy is installed)
def __getattr__(name: str):
    if name == "DiacriticsStripperComponent":
        try:
            from unistrip.spacy import DiacriticsStripperComponent
            return DiacriticsStripperComponent
        except ImportError:
            raise ImportError(
                "spaCy integration requires spacy. "
                "Install with: pip install unistrip[spacy]"
            )
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
