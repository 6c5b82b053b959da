"""
Keyed hashing shared by table construction and lookup.

A key hashes to three 32-bit words: ``g`` picks the bucket, ``f1`` and
``f2`` combine with the bucket's displacement pair to pick the slot.
"""

from __future__ import annotations

import hashlib
import struct
from typing import NamedTuple, Sequence

__all__ = ["Hashes", "displace", "get_index", "hash_key"]

_MASK32 = 0xFFFFFFFF
_WORDS = struct.Struct("<III")


class Hashes(NamedTuple):
    g: int
    f1: int
    f2: int


def hash_key(key: int, seed: int) -> Hashes:
    """Hash a codepoint with BLAKE2b keyed by the 64-bit seed."""
    digest = hashlib.blake2b(
        key.to_bytes(4, "little"),
        digest_size=_WORDS.size,
        key=seed.to_bytes(8, "little"),
    ).digest()
    return Hashes(*_WORDS.unpack(digest))


def displace(f1: int, f2: int, d1: int, d2: int) -> int:
    return (f2 + f1 * d1 + d2) & _MASK32


def get_index(hashes: Hashes, disps: Sequence[tuple[int, int]], length: int) -> int:
    """Slot index of a hashed key in a table of ``length`` entries."""
    d1, d2 = disps[hashes.g % len(disps)]
    return displace(hashes.f1, hashes.f2, d1, d2) % length
