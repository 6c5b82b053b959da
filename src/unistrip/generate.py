"""
Generate a static diacritics table.

Builds the diacritic mapping from a local ``UnicodeData.txt`` (or from the
interpreter's ``unicodedata`` when no file is given), constructs the perfect
hash table and writes it as an importable Python module or as JSON.

Usage:
    python -m unistrip.generate --ucd UnicodeData.txt --out diacritics_table.py
    python -m unistrip.generate --format json --out diacritics_table.json
"""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
import unicodedata
from typing import Optional

from unistrip.decomposition import (
    build_diacritic_mapping,
    load_unicode_data,
    records_from_unicodedata,
)
from unistrip.phf import PerfectHashTable, build_table

__all__ = ["build_parser", "generate_table", "main", "render"]

logger = logging.getLogger(__name__)


def generate_table(ucd: Optional[pathlib.Path] = None) -> PerfectHashTable:
    """Build the diacritics table from ``ucd`` or from ``unicodedata``."""
    if ucd is not None:
        records = load_unicode_data(ucd)
    else:
        logger.info("Using bundled Unicode %s data", unicodedata.unidata_version)
        records = records_from_unicodedata(relevant_only=True)
    return build_table(build_diacritic_mapping(records))


def render(table: PerfectHashTable, fmt: str, name: str, source: str) -> str:
    if fmt == "json":
        return json.dumps(table.to_dict(), ensure_ascii=False, indent=1) + "\n"
    return table.to_python_source(name=name, comment=f"Source: {source}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="unistrip-generate",
        description="Generate a static diacritics perfect hash table.",
    )
    ap.add_argument("--ucd", type=pathlib.Path, default=None,
                    help="path to UnicodeData.txt (default: bundled unicodedata)")
    ap.add_argument("--format", choices=("python", "json"), default="python")
    ap.add_argument("--name", default="DIACRITICS_MAPPING",
                    help="constant name in the generated Python module")
    ap.add_argument("--out", type=pathlib.Path, default=None,
                    help="output file (default: stdout)")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(levelname)s %(name)s: %(message)s",
    )

    table = generate_table(args.ucd)
    source = str(args.ucd) if args.ucd else f"unicodedata {unicodedata.unidata_version}"
    text = render(table, args.format, args.name, source)

    if args.out is None:
        sys.stdout.write(text)
    else:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(text, encoding="utf-8")
        logger.info("Wrote %d entries to %s", len(table), args.out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
