"""
Immutable perfect hash table keyed by codepoint.

Provides:
- PerfectHashTable: O(1) lookup with a range fast-reject and one key
  comparison, no probing
- save()/load(): JSON round-trip
- to_python_source(): an importable module defining the table as a constant
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from unistrip.phf._hash import get_index, hash_key

__all__ = ["PerfectHashTable"]

Key = Union[str, int]


def _codepoint(key: Key) -> int:
    return key if isinstance(key, int) else ord(key)


@dataclass(frozen=True)
class PerfectHashTable:
    """
    Static displacement-based hash table over a fixed set of codepoints.

    Attributes:
        range_min: Smallest key; anything below is rejected without hashing
        range_max: Largest key; anything above is rejected without hashing
        seed: Hash seed the displacements were computed for
        disps: One (d1, d2) displacement pair per bucket
        entries: (codepoint, value) pairs in slot order

    Only keys present at build time are guaranteed distinct slots; any other
    codepoint hashes to some occupied slot and is rejected by the key check.
    """

    range_min: int
    range_max: int
    seed: int
    disps: tuple[tuple[int, int], ...]
    entries: tuple[tuple[int, str], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "disps", tuple((int(d1), int(d2)) for d1, d2 in self.disps))
        object.__setattr__(self, "entries", tuple((int(k), v) for k, v in self.entries))
        if self.entries and not self.disps:
            raise ValueError("a non-empty table needs at least one displacement")

    def __len__(self) -> int:
        return len(self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    def __contains__(self, key: Key) -> bool:
        return self.get(key) is not None

    def contains_key(self, key: Key) -> bool:
        return self.get(key) is not None

    def get(self, key: Key) -> Optional[str]:
        """
        Look up a character's value.

        Args:
            key: A single character or an integer codepoint

        Returns:
            The stored value, or None if the key was not in the build set
        """
        cp = _codepoint(key)
        if not self.range_min <= cp <= self.range_max or not self.entries:
            return None
        idx = get_index(hash_key(cp, self.seed), self.disps, len(self.entries))
        stored, value = self.entries[idx]
        return value if stored == cp else None

    def get_entry(self, key: Key) -> Optional[tuple[str, str]]:
        """Return (character, value) for a key in the table, else None."""
        value = self.get(key)
        if value is None:
            return None
        return chr(_codepoint(key)), value

    def keys(self) -> Iterator[str]:
        return (chr(k) for k, _ in self.entries)

    def values(self) -> Iterator[str]:
        return (v for _, v in self.entries)

    def items(self) -> Iterator[tuple[str, str]]:
        return ((chr(k), v) for k, v in self.entries)

    def to_dict(self) -> dict:
        return {
            "range": [self.range_min, self.range_max],
            "seed": self.seed,
            "disps": [list(d) for d in self.disps],
            "entries": [[k, v] for k, v in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> PerfectHashTable:
        range_min, range_max = data["range"]
        return cls(
            range_min=range_min,
            range_max=range_max,
            seed=data["seed"],
            disps=data["disps"],
            entries=data["entries"],
        )

    def save(self, path: str | Path) -> None:
        """Save table to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=1)

    @classmethod
    def load(cls, path: str | Path) -> PerfectHashTable:
        """Load table from JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def to_python_source(self, name: str = "DIACRITICS_MAPPING", comment: str = "") -> str:
        """
        Render the table as the source of an importable Python module.

        The module defines one constant, ``name``, equal to this table.

        Args:
            name: Identifier for the constant
            comment: Optional text for the module docstring
        """
        if not name.isidentifier():
            raise ValueError(f"not a valid identifier: {name!r}")

        doc = "Generated perfect hash table. Do not edit."
        if comment:
            # Escape for the triple-quoted literal
            comment = comment.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
            doc = f"{doc}\n\n{comment}\n"
        lines = [
            f'"""{doc}"""',
            "",
            "from unistrip.phf import PerfectHashTable",
            "",
            f"{name} = PerfectHashTable(",
            f"    range_min={self.range_min:#06x},",
            f"    range_max={self.range_max:#06x},",
            f"    seed={self.seed:#x},",
            "    disps=(",
        ]
        lines.extend(f"        ({d1}, {d2})," for d1, d2 in self.disps)
        lines.append("    ),")
        lines.append("    entries=(")
        lines.extend(f"        ({k:#06x}, {v!r})," for k, v in self.entries)
        lines.append("    ),")
        lines.append(")")
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"PerfectHashTable(entries={len(self.entries)}, buckets={len(self.disps)}, "
            f"range=U+{self.range_min:04X}..U+{self.range_max:04X})"
        )
