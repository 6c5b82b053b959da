"""
Perfect hash table submodule.

Builds and queries static Compress-Hash-Displace tables keyed by codepoint.

Basic usage:
    >>> from unistrip.phf import build_table
    >>> table = build_table({0xE9: "e", 0xC5: "A"})
    >>> table.get("é")
    'e'
    >>> table.get("x") is None
    True
"""

from unistrip.phf._build import (
    FIXED_SEED,
    HashState,
    LAMBDA,
    MAX_ATTEMPTS,
    TableConstructionError,
    build_table,
    generate_hash,
)
from unistrip.phf._hash import Hashes, get_index, hash_key
from unistrip.phf._table import PerfectHashTable

__all__ = [
    "FIXED_SEED",
    "HashState",
    "Hashes",
    "LAMBDA",
    "MAX_ATTEMPTS",
    "PerfectHashTable",
    "TableConstructionError",
    "build_table",
    "generate_hash",
    "get_index",
    "hash_key",
]
