"""Shared fixtures for unistrip tests."""

from pathlib import Path

import pytest

from unistrip.decomposition import (
    build_diacritic_mapping,
    collect_tables,
    parse_unicode_data,
    records_from_unicodedata,
)
from unistrip.phf import build_table

# Verbatim UnicodeData.txt lines covering canonical, compatibility,
# nested, singleton, diacritic-keyed and Hangul records.
UNICODE_DATA_LINES = [
    "0041;LATIN CAPITAL LETTER A;Lu;0;L;;;;;N;;;;0061;",
    "0061;LATIN SMALL LETTER A;Ll;0;L;;;;;N;;;0041;;0041",
    "00A8;DIAERESIS;Sk;0;ON;<compat> 0020 0308;;;;N;SPACING DIAERESIS;;;;",
    "00C5;LATIN CAPITAL LETTER A WITH RING ABOVE;Lu;0;L;0041 030A;;;;N;LATIN CAPITAL LETTER A RING;;;00E5;",
    "00E9;LATIN SMALL LETTER E WITH ACUTE;Ll;0;L;0065 0301;;;;N;LATIN SMALL LETTER E ACUTE;;00C9;;00C9",
    "017D;LATIN CAPITAL LETTER Z WITH CARON;Lu;0;L;005A 030C;;;;N;LATIN CAPITAL LETTER Z HACEK;;;017E;",
    "017E;LATIN SMALL LETTER Z WITH CARON;Ll;0;L;007A 030C;;;;N;LATIN SMALL LETTER Z HACEK;;017D;;017D",
    "01C4;LATIN CAPITAL LETTER DZ WITH CARON;Lu;0;L;<compat> 0044 017D;;;;N;LATIN CAPITAL LETTER D Z HACEK;;;01C6;01C5",
    "01C5;LATIN CAPITAL LETTER D WITH SMALL LETTER Z WITH CARON;Lt;0;L;<compat> 0044 017E;;;;N;LATIN LETTER CAPITAL D SMALL Z HACEK;;01C4;01C6;01C5",
    "0300;COMBINING GRAVE ACCENT;Mn;230;NSM;;;;;N;NON-SPACING GRAVE;;;;",
    "0301;COMBINING ACUTE ACCENT;Mn;230;NSM;;;;;N;NON-SPACING ACUTE;;;;",
    "0307;COMBINING DOT ABOVE;Mn;230;NSM;;;;;N;NON-SPACING DOT ABOVE;;;;",
    "0308;COMBINING DIAERESIS;Mn;230;NSM;;;;;N;NON-SPACING DIAERESIS;;;;",
    "030A;COMBINING RING ABOVE;Mn;230;NSM;;;;;N;NON-SPACING RING ABOVE;;;;",
    "030C;COMBINING CARON;Mn;230;NSM;;;;;N;NON-SPACING HACEK;;;;",
    "0323;COMBINING DOT BELOW;Mn;220;NSM;;;;;N;NON-SPACING DOT BELOW;;;;",
    "0341;COMBINING ACUTE TONE MARK;Mn;230;NSM;0301;;;;N;NON-SPACING ACUTE TONE MARK;;;;",
    "0385;GREEK DIALYTIKA TONOS;Sk;0;ON;00A8 0301;;;;N;GREEK SPACING DIAERESIS TONOS;;;;",
    "1E63;LATIN SMALL LETTER S WITH DOT BELOW;Ll;0;L;0073 0323;;;;N;;;1E62;;1E62",
    "1E69;LATIN SMALL LETTER S WITH DOT BELOW AND DOT ABOVE;Ll;0;L;1E63 0307;;;;N;;;1E68;;1E68",
    "212B;ANGSTROM SIGN;Lu;0;L;00C5;;;;N;ANGSTROM UNIT;;;00E5;",
    "2460;CIRCLED DIGIT ONE;No;0;ON;<circle> 0031;;1;1;N;;;;;",
    "AC00;<Hangul Syllable, First>;Lo;0;L;;;;;N;;;;;",
    "D7A3;<Hangul Syllable, Last>;Lo;0;L;;;;;N;;;;;",
]

# What the lines above must produce
EXPECTED_MAPPING = {
    0x00A8: " ",
    0x00C5: "A",
    0x00E9: "e",
    0x017D: "Z",
    0x017E: "z",
    0x01C4: "DZ",
    0x01C5: "Dz",
    0x0385: " ",
    0x1E63: "s",
    0x1E69: "s",
    0x212B: "A",
}


@pytest.fixture
def unicode_data_lines() -> list[str]:
    """Return the sample UnicodeData.txt lines."""
    return list(UNICODE_DATA_LINES)


@pytest.fixture
def unicode_data_file(tmp_path: Path) -> Path:
    """Write the sample lines to a UnicodeData.txt file."""
    path = tmp_path / "UnicodeData.txt"
    path.write_text("\n".join(UNICODE_DATA_LINES) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_tables():
    """Decomposition tables collected from the sample lines."""
    return collect_tables(parse_unicode_data(UNICODE_DATA_LINES))


@pytest.fixture
def sample_table():
    """Perfect hash table over the sample mapping."""
    return build_table(EXPECTED_MAPPING)


@pytest.fixture(scope="session")
def bundled_mapping() -> dict:
    """Diacritic mapping built from the interpreter's unicodedata."""
    return build_diacritic_mapping(records_from_unicodedata(relevant_only=True))
