"""
Full decomposition and diacritic filtering.

Turns DecompositionTables into the final diacritic mapping:

1. compute_fully_decomposed(): expand every codepoint recursively, once
   canonical-only and once canonical+compatibility
2. sort_codepoints(): canonical reordering of combining marks
3. filter_diacritics(): drop U+0300..U+036F, keep only sequences that lost
   at least one mark
4. build_diacritic_mapping(): canonical entries first, compatibility
   entries overwrite

Hangul syllables decompose arithmetically and are never expanded here.
"""

from __future__ import annotations

import logging
from operator import itemgetter
from typing import Iterable, Optional

from unistrip._marks import is_diacritic_codepoint
from unistrip.decomposition._records import (
    DecompositionRecord,
    DecompositionTables,
    collect_tables,
)

__all__ = [
    "DecompositionCycleError",
    "MAX_DECOMPOSITION_DEPTH",
    "add_mapping",
    "build_diacritic_mapping",
    "compute_fully_decomposed",
    "decompose",
    "filter_diacritics",
    "is_hangul_syllable",
    "sort_codepoints",
]

logger = logging.getLogger(__name__)

# Conjoining Jamo Behavior, Unicode 9.0.0 section 3.12
S_BASE = 0xAC00
L_COUNT = 19
V_COUNT = 21
T_COUNT = 28
S_COUNT = L_COUNT * V_COUNT * T_COUNT

# Real data nests at most ~3 levels
MAX_DECOMPOSITION_DEPTH = 32


class DecompositionCycleError(ValueError):
    """A decomposition chain loops back on itself or nests too deeply."""


def is_hangul_syllable(cp: int) -> bool:
    return S_BASE <= cp < S_BASE + S_COUNT


def _expand(
    cp: int,
    tables: DecompositionTables,
    compatible: bool,
    path: tuple[int, ...],
    out: list[int],
) -> None:
    # ASCII never decomposes
    if cp <= 0x7F:
        out.append(cp)
        return

    seq = tables.canonical.get(cp)
    if seq is None and compatible:
        seq = tables.compatibility.get(cp)
    if seq is None:
        out.append(cp)
        return

    if cp in path:
        chain = " -> ".join(f"U+{c:04X}" for c in path + (cp,))
        raise DecompositionCycleError(f"decomposition cycle: {chain}")
    if len(path) >= MAX_DECOMPOSITION_DEPTH:
        raise DecompositionCycleError(
            f"decomposition of U+{path[0]:04X} nests deeper than {MAX_DECOMPOSITION_DEPTH}"
        )

    path = path + (cp,)
    for child in seq:
        _expand(child, tables, compatible, path, out)


def decompose(cp: int, tables: DecompositionTables, compatible: bool = False) -> list[int]:
    """
    Fully decompose a codepoint.

    Canonical decompositions are always followed; compatibility ones only
    when ``compatible`` is set. Expansion stops at ASCII and at codepoints
    with nothing further to expand.

    Args:
        cp: The codepoint to expand
        tables: Decomposition tables from collect_tables()
        compatible: Also follow compatibility decompositions

    Returns:
        The fully expanded codepoint sequence ([cp] when nothing applies)

    Raises:
        DecompositionCycleError: if the chain is cyclic or too deep
    """
    out: list[int] = []
    _expand(cp, tables, compatible, (), out)
    return out


def compute_fully_decomposed(
    tables: DecompositionTables,
) -> tuple[dict[int, list[int]], dict[int, list[int]]]:
    """
    Expand every decomposable codepoint in both modes.

    Codepoints whose expansion is just themselves get no entry. A
    compatibility entry identical to the canonical one is pruned.

    Returns:
        (canonical, compatibility) mappings of codepoint -> expansion
    """
    canon: dict[int, list[int]] = {}
    compat: dict[int, list[int]] = {}

    # Anything without a decomposition expands to itself in both modes
    candidates = sorted(set(tables.canonical) | set(tables.compatibility))
    for cp in candidates:
        if is_hangul_syllable(cp):
            continue

        expanded = decompose(cp, tables, compatible=False)
        if expanded != [cp]:
            canon[cp] = expanded

        expanded = decompose(cp, tables, compatible=True)
        if expanded != [cp]:
            compat[cp] = expanded

    pruned = [cp for cp, seq in compat.items() if canon.get(cp) == seq]
    for cp in pruned:
        del compat[cp]

    logger.debug(
        "Fully decomposed %d canonical, %d compatibility (%d pruned)",
        len(canon),
        len(compat),
        len(pruned),
    )
    return canon, compat


def sort_codepoints(chars: Iterable[int], combining_classes: dict[int, int]) -> list[int]:
    """
    Canonically reorder combining marks.

    Each maximal run of nonzero-class codepoints between starters (class 0)
    is stable-sorted by combining class. Starters never move.

    Example:
        >>> sort_codepoints([0x61, 0x301, 0x323], {0x301: 230, 0x323: 220})
        [97, 803, 769]
    """
    out: list[int] = []
    run: list[tuple[int, int]] = []
    for ch in chars:
        cc = combining_classes.get(ch, 0)
        if cc == 0:
            run.sort(key=itemgetter(0))
            out.extend(c for _, c in run)
            run.clear()
            out.append(ch)
        else:
            run.append((cc, ch))
    run.sort(key=itemgetter(0))
    out.extend(c for _, c in run)
    return out


def filter_diacritics(chars: Iterable[int]) -> Optional[list[int]]:
    """
    Remove combining diacritical marks from a codepoint sequence.

    Returns:
        The remaining codepoints, or None if nothing was removed
    """
    removed = False
    kept: list[int] = []
    for ch in chars:
        if is_diacritic_codepoint(ch):
            removed = True
        else:
            kept.append(ch)
    return kept if removed else None


def add_mapping(
    src: dict[int, list[int]],
    combining_classes: dict[int, int],
    dst: dict[int, str],
) -> None:
    """
    Add diacritic-stripped replacements from ``src`` into ``dst``.

    Existing keys in ``dst`` are overwritten. Diacritic codepoints are never
    added as keys.
    """
    for cp, expansion in src.items():
        if is_diacritic_codepoint(cp):
            continue
        stripped = filter_diacritics(sort_codepoints(expansion, combining_classes))
        if stripped is not None:
            dst[cp] = "".join(map(chr, stripped))


def build_diacritic_mapping(
    source: DecompositionTables | Iterable[DecompositionRecord],
) -> dict[int, str]:
    """
    Build the final codepoint -> replacement mapping.

    Canonical results go in first; compatibility results overwrite them
    where both exist.

    Args:
        source: DecompositionTables, or a record stream to collect first

    Returns:
        Mapping of codepoint to its diacritic-free replacement string
    """
    tables = source if isinstance(source, DecompositionTables) else collect_tables(source)
    canon, compat = compute_fully_decomposed(tables)

    mapping: dict[int, str] = {}
    add_mapping(canon, tables.combining_classes, mapping)
    add_mapping(compat, tables.combining_classes, mapping)

    logger.info("Built diacritic mapping with %d entries", len(mapping))
    return mapping
