"""
Per-codepoint Unicode records consumed by the decomposition engine.

Two providers produce the same record stream:
- parse_unicode_data(): lines of a UCD ``UnicodeData.txt`` file
- records_from_unicodedata(): the interpreter's bundled ``unicodedata``

collect_tables() folds either stream into the three lookup tables the
engine needs (combining classes, canonical and compatibility decompositions).
"""

from __future__ import annotations

import logging
import sys
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional

__all__ = [
    "Category",
    "DecompositionRecord",
    "DecompositionTables",
    "UnicodeDataError",
    "collect_tables",
    "load_unicode_data",
    "parse_decomposition",
    "parse_unicode_data",
    "records_from_unicodedata",
]

logger = logging.getLogger(__name__)

# UnicodeData.txt has exactly 15 semicolon-separated fields per line
_FIELD_COUNT = 15


class UnicodeDataError(ValueError):
    """A malformed record in the Unicode data source."""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
        self.line_no = line_no


# =============================================================================
# General Category
# =============================================================================


class Category(Enum):
    """Unicode general category, keyed by its two-letter tag."""

    UPPERCASE_LETTER = "Lu"
    LOWERCASE_LETTER = "Ll"
    TITLECASE_LETTER = "Lt"
    MODIFIER_LETTER = "Lm"
    OTHER_LETTER = "Lo"
    NONSPACING_MARK = "Mn"
    SPACING_MARK = "Mc"
    ENCLOSING_MARK = "Me"
    DECIMAL_NUMBER = "Nd"
    LETTER_NUMBER = "Nl"
    OTHER_NUMBER = "No"
    CONNECTOR_PUNCTUATION = "Pc"
    DASH_PUNCTUATION = "Pd"
    OPEN_PUNCTUATION = "Ps"
    CLOSE_PUNCTUATION = "Pe"
    INITIAL_PUNCTUATION = "Pi"
    FINAL_PUNCTUATION = "Pf"
    OTHER_PUNCTUATION = "Po"
    MATH_SYMBOL = "Sm"
    CURRENCY_SYMBOL = "Sc"
    MODIFIER_SYMBOL = "Sk"
    OTHER_SYMBOL = "So"
    SPACE_SEPARATOR = "Zs"
    LINE_SEPARATOR = "Zl"
    PARAGRAPH_SEPARATOR = "Zp"
    CONTROL = "Cc"
    FORMAT = "Cf"
    SURROGATE = "Cs"
    PRIVATE_USE = "Co"
    UNASSIGNED = "Cn"

    @property
    def tag(self) -> str:
        return self.value

    def is_cased_letter(self) -> bool:
        return self.value in ("Lu", "Ll", "Lt")

    def is_letter(self) -> bool:
        return self.value[0] == "L"

    def is_mark(self) -> bool:
        return self.value[0] == "M"

    def is_number(self) -> bool:
        return self.value[0] == "N"

    def is_punctuation(self) -> bool:
        return self.value[0] == "P"

    def is_symbol(self) -> bool:
        return self.value[0] == "S"

    def is_separator(self) -> bool:
        return self.value[0] == "Z"

    def is_other(self) -> bool:
        return self.value[0] == "C"


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class DecompositionRecord:
    """
    One codepoint's decomposition-relevant properties.

    At most one of ``canonical`` / ``compatibility`` is set: the source data
    marks a compatibility mapping with a ``<tag>`` prefix, a canonical one
    with none.
    """

    codepoint: int
    category: Category
    combining_class: int = 0
    canonical: Optional[tuple[int, ...]] = None
    compatibility: Optional[tuple[int, ...]] = None


@dataclass
class DecompositionTables:
    """Lookup tables folded from a record stream."""

    combining_classes: dict[int, int] = field(default_factory=dict)
    canonical: dict[int, list[int]] = field(default_factory=dict)
    compatibility: dict[int, list[int]] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"DecompositionTables(classes={len(self.combining_classes)}, "
            f"canonical={len(self.canonical)}, compatibility={len(self.compatibility)})"
        )


def _parse_hex_sequence(text: str) -> tuple[int, ...]:
    seq = tuple(int(part, 16) for part in text.split())
    if not seq:
        raise ValueError("empty decomposition sequence")
    return seq


def parse_decomposition(
    text: str,
) -> tuple[Optional[tuple[int, ...]], Optional[tuple[int, ...]]]:
    """
    Split a decomposition field into (canonical, compatibility).

    ``"0065 0301"`` is canonical, ``"<compat> 0020 0308"`` is compatibility
    (the tag is dropped), and an empty field is neither.

    Raises:
        ValueError: on a non-hex element, an unterminated tag or a tag
            with no codepoints after it
    """
    text = text.strip()
    if not text:
        return None, None
    if text.startswith("<"):
        tag_end = text.find(">")
        if tag_end < 0:
            raise ValueError(f"unterminated decomposition tag: {text!r}")
        return None, _parse_hex_sequence(text[tag_end + 1:])
    return _parse_hex_sequence(text), None


def parse_unicode_data(lines: Iterable[str]) -> Iterator[DecompositionRecord]:
    """
    Parse ``UnicodeData.txt`` lines into DecompositionRecords.

    Blank lines are skipped. Every other line must have 15 fields, a hex
    codepoint, a known assigned category and a decimal combining class in
    0..255.

    Args:
        lines: Lines of the file (with or without trailing newlines)

    Yields:
        One record per data line

    Raises:
        UnicodeDataError: on the first malformed line
    """
    for line_no, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue

        fields = line.split(";")
        if len(fields) != _FIELD_COUNT:
            raise UnicodeDataError(
                f"expected {_FIELD_COUNT} fields, got {len(fields)}", line_no
            )

        try:
            codepoint = int(fields[0], 16)
        except ValueError:
            raise UnicodeDataError(f"invalid codepoint {fields[0]!r}", line_no) from None
        if not 0 <= codepoint <= sys.maxunicode:
            raise UnicodeDataError(f"codepoint out of range: {fields[0]}", line_no)

        try:
            category = Category(fields[2])
        except ValueError:
            raise UnicodeDataError(f"invalid category {fields[2]!r}", line_no) from None
        if category is Category.UNASSIGNED:
            raise UnicodeDataError("unassigned codepoint listed in data", line_no)

        try:
            combining_class = int(fields[3], 10)
        except ValueError:
            raise UnicodeDataError(
                f"invalid combining class {fields[3]!r}", line_no
            ) from None
        if not 0 <= combining_class <= 255:
            raise UnicodeDataError(
                f"combining class out of range: {combining_class}", line_no
            )

        try:
            canonical, compatibility = parse_decomposition(fields[5])
        except ValueError as exc:
            raise UnicodeDataError(f"invalid decomposition: {exc}", line_no) from None

        yield DecompositionRecord(
            codepoint=codepoint,
            category=category,
            combining_class=combining_class,
            canonical=canonical,
            compatibility=compatibility,
        )


def load_unicode_data(path: str | Path) -> list[DecompositionRecord]:
    """Read and parse a ``UnicodeData.txt`` file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Unicode data file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        records = list(parse_unicode_data(f))

    logger.debug("Parsed %d records from %s", len(records), path)
    return records


def records_from_unicodedata(relevant_only: bool = False) -> Iterator[DecompositionRecord]:
    """
    Yield records for every assigned codepoint known to ``unicodedata``.

    Unassigned codepoints (category ``Cn``) are skipped, mirroring the
    contents of ``UnicodeData.txt`` for the interpreter's UCD version.

    Args:
        relevant_only: Only yield codepoints that have a decomposition or a
            nonzero combining class (all the engine ever reads)
    """
    for codepoint in range(sys.maxunicode + 1):
        ch = chr(codepoint)
        decomposition = unicodedata.decomposition(ch)
        combining_class = unicodedata.combining(ch)
        if relevant_only and not decomposition and not combining_class:
            continue
        tag = unicodedata.category(ch)
        if tag == "Cn":
            continue
        canonical, compatibility = parse_decomposition(decomposition)
        yield DecompositionRecord(
            codepoint=codepoint,
            category=Category(tag),
            combining_class=combining_class,
            canonical=canonical,
            compatibility=compatibility,
        )


def collect_tables(records: Iterable[DecompositionRecord]) -> DecompositionTables:
    """
    Fold a record stream into lookup tables.

    Only nonzero combining classes are stored; absent entries mean class 0.
    """
    tables = DecompositionTables()
    count = 0
    for record in records:
        count += 1
        if record.combining_class:
            tables.combining_classes[record.codepoint] = record.combining_class
        if record.canonical is not None:
            tables.canonical[record.codepoint] = list(record.canonical)
        elif record.compatibility is not None:
            tables.compatibility[record.codepoint] = list(record.compatibility)

    logger.debug("Collected %r from %d records", tables, count)
    return tables
