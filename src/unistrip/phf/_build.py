"""
Compress-Hash-Displace construction of a perfect hash table.

Keys are split into buckets of about LAMBDA keys. Buckets are placed
largest first: each gets the first displacement pair (d1, d2) that sends
all of its keys to free, distinct slots. A seed that cannot place every
bucket is abandoned and the next seed from a deterministic sequence is
tried, up to ``max_attempts`` seeds.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from unistrip.phf._hash import Hashes, displace, hash_key
from unistrip.phf._table import PerfectHashTable

__all__ = [
    "FIXED_SEED",
    "HashState",
    "LAMBDA",
    "MAX_ATTEMPTS",
    "TableConstructionError",
    "build_table",
    "generate_hash",
]

logger = logging.getLogger(__name__)

LAMBDA = 5
FIXED_SEED = 1234567890
MAX_ATTEMPTS = 64


class TableConstructionError(RuntimeError):
    """The perfect hash table could not be built."""


@dataclass(frozen=True)
class HashState:
    """
    Result of a successful construction.

    ``map[slot]`` is the index (into the input key sequence) of the key
    stored at ``slot``.
    """

    seed: int
    disps: tuple[tuple[int, int], ...]
    map: tuple[int, ...]


def _find_displacement(
    pairs: list[tuple[int, int]],
    occupied: list[bool],
    table_len: int,
) -> Optional[tuple[tuple[int, int], list[int]]]:
    """Search (d1, d2) in [0, table_len)^2 for a collision-free placement."""
    for d1 in range(table_len):
        for d2 in range(table_len):
            slots: list[int] = []
            for f1, f2 in pairs:
                idx = displace(f1, f2, d1, d2) % table_len
                if occupied[idx] or idx in slots:
                    break
                slots.append(idx)
            else:
                return (d1, d2), slots
    return None


def _try_generate_hash(keys: Sequence[int], seed: int) -> Optional[HashState]:
    hashes: list[Hashes] = [hash_key(key, seed) for key in keys]
    # Two keys with identical hashes can never be separated
    if len(set(hashes)) != len(hashes):
        logger.debug("Seed %#x: keys alias", seed)
        return None

    table_len = len(keys)
    buckets_len = (table_len + LAMBDA - 1) // LAMBDA
    buckets: list[list[int]] = [[] for _ in range(buckets_len)]
    for i, h in enumerate(hashes):
        buckets[h.g % buckets_len].append(i)

    occupied = [False] * table_len
    slot_map = [0] * table_len
    disps = [(0, 0)] * buckets_len

    order = sorted(range(buckets_len), key=lambda b: len(buckets[b]), reverse=True)
    for b in order:
        members = buckets[b]
        if not members:
            continue
        pairs = [(hashes[i].f1, hashes[i].f2) for i in members]
        found = _find_displacement(pairs, occupied, table_len)
        if found is None:
            logger.debug("Seed %#x: no displacement for bucket of %d", seed, len(members))
            return None
        disps[b], slots = found
        for i, idx in zip(members, slots):
            occupied[idx] = True
            slot_map[idx] = i

    return HashState(seed=seed, disps=tuple(disps), map=tuple(slot_map))


def generate_hash(
    keys: Sequence[int],
    *,
    rng_seed: int = FIXED_SEED,
    max_attempts: int = MAX_ATTEMPTS,
) -> HashState:
    """
    Build a perfect hash over distinct integer keys.

    Args:
        keys: Distinct codepoints
        rng_seed: Seed for the sequence of hash seeds to try
        max_attempts: How many hash seeds to try before giving up

    Returns:
        HashState whose ``map`` has exactly ``len(keys)`` slots

    Raises:
        TableConstructionError: on an empty or duplicated key set, or when
            every attempted seed fails
    """
    if not keys:
        raise TableConstructionError("cannot build a table with no keys")
    if len(set(keys)) != len(keys):
        raise TableConstructionError("duplicate keys")

    rng = random.Random(rng_seed)
    for attempt in range(1, max_attempts + 1):
        seed = rng.getrandbits(64)
        state = _try_generate_hash(keys, seed)
        if state is not None:
            logger.debug(
                "Placed %d keys in %d buckets on attempt %d",
                len(keys),
                len(state.disps),
                attempt,
            )
            return state

    raise TableConstructionError(
        f"no perfect hash found for {len(keys)} keys after {max_attempts} seeds"
    )


def build_table(mapping: Mapping[int, str], **kwargs) -> PerfectHashTable:
    """
    Build a PerfectHashTable from a codepoint -> value mapping.

    Keys are processed in ascending order, so the same mapping always gives
    the same table. Keyword arguments go to generate_hash().
    """
    keys = sorted(mapping)
    if not keys:
        raise TableConstructionError("cannot build a table with no keys")
    state = generate_hash(keys, **kwargs)

    table = PerfectHashTable(
        range_min=keys[0],
        range_max=keys[-1],
        seed=state.seed,
        disps=state.disps,
        entries=tuple((keys[i], mapping[keys[i]]) for i in state.map),
    )
    logger.info("Built perfect hash table with %d entries", len(table))
    return table
