"""Tests for UnicodeData.txt parsing and the unicodedata record provider."""

import pytest

from unistrip.decomposition import (
    Category,
    DecompositionRecord,
    UnicodeDataError,
    collect_tables,
    load_unicode_data,
    parse_decomposition,
    parse_unicode_data,
    records_from_unicodedata,
)


def _line(cp="00E9", cat="Ll", ccc="0", decomp="0065 0301"):
    return f"{cp};NAME;{cat};{ccc};L;{decomp};;;;N;;;;;"


# =============================================================================
# parse_decomposition
# =============================================================================


class TestParseDecomposition:
    def test_empty(self):
        assert parse_decomposition("") == (None, None)

    def test_canonical(self):
        assert parse_decomposition("0065 0301") == ((0x65, 0x301), None)

    def test_compatibility_drops_tag(self):
        assert parse_decomposition("<compat> 0020 0308") == (None, (0x20, 0x308))

    def test_other_tags_are_compatibility(self):
        assert parse_decomposition("<circle> 0031") == (None, (0x31,))
        assert parse_decomposition("<font> 0041") == (None, (0x41,))

    def test_singleton_canonical(self):
        assert parse_decomposition("00C5") == ((0xC5,), None)

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            parse_decomposition("00G1 0301")

    def test_unterminated_tag(self):
        with pytest.raises(ValueError):
            parse_decomposition("<compat 0020")

    def test_tag_without_sequence(self):
        with pytest.raises(ValueError, match="empty"):
            parse_decomposition("<compat>")
        with pytest.raises(ValueError, match="empty"):
            parse_decomposition("<font>   ")


# =============================================================================
# parse_unicode_data
# =============================================================================


class TestParseUnicodeData:
    def test_parses_all_sample_lines(self, unicode_data_lines):
        records = list(parse_unicode_data(unicode_data_lines))
        assert len(records) == len(unicode_data_lines)

    def test_canonical_record(self, unicode_data_lines):
        records = {r.codepoint: r for r in parse_unicode_data(unicode_data_lines)}
        assert records[0xC5] == DecompositionRecord(
            codepoint=0xC5,
            category=Category.UPPERCASE_LETTER,
            combining_class=0,
            canonical=(0x41, 0x30A),
            compatibility=None,
        )

    def test_compatibility_record(self, unicode_data_lines):
        records = {r.codepoint: r for r in parse_unicode_data(unicode_data_lines)}
        record = records[0x1C4]
        assert record.canonical is None
        assert record.compatibility == (0x44, 0x17D)

    def test_combining_class(self, unicode_data_lines):
        records = {r.codepoint: r for r in parse_unicode_data(unicode_data_lines)}
        assert records[0x301].combining_class == 230
        assert records[0x323].combining_class == 220
        assert records[0x301].category is Category.NONSPACING_MARK

    def test_skips_blank_lines(self):
        records = list(parse_unicode_data(["", _line(), "   ", ""]))
        assert len(records) == 1

    def test_accepts_trailing_newlines(self):
        records = list(parse_unicode_data([_line() + "\n"]))
        assert records[0].canonical == (0x65, 0x301)

    def test_wrong_field_count(self):
        with pytest.raises(UnicodeDataError, match="line 2"):
            list(parse_unicode_data([_line(), "0041;A;Lu;0"]))

    def test_too_many_fields(self):
        with pytest.raises(UnicodeDataError, match="fields"):
            list(parse_unicode_data([_line() + ";extra"]))

    def test_invalid_codepoint(self):
        with pytest.raises(UnicodeDataError, match="codepoint"):
            list(parse_unicode_data([_line(cp="ZZZZ")]))

    def test_codepoint_out_of_range(self):
        with pytest.raises(UnicodeDataError, match="range"):
            list(parse_unicode_data([_line(cp="110000")]))

    def test_unknown_category(self):
        with pytest.raises(UnicodeDataError, match="category"):
            list(parse_unicode_data([_line(cat="Xx")]))

    def test_unassigned_category(self):
        with pytest.raises(UnicodeDataError, match="unassigned"):
            list(parse_unicode_data([_line(cat="Cn")]))

    def test_invalid_combining_class(self):
        with pytest.raises(UnicodeDataError, match="combining class"):
            list(parse_unicode_data([_line(ccc="abc")]))

    def test_combining_class_out_of_range(self):
        with pytest.raises(UnicodeDataError, match="out of range"):
            list(parse_unicode_data([_line(ccc="256")]))

    def test_invalid_decomposition(self):
        with pytest.raises(UnicodeDataError, match="decomposition"):
            list(parse_unicode_data([_line(decomp="0065 XYZ")]))

    def test_empty_tagged_decomposition(self):
        with pytest.raises(UnicodeDataError, match="line 1: invalid decomposition"):
            list(parse_unicode_data([_line(decomp="<compat>")]))

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            list(parse_unicode_data([_line(cat="??")]))

    def test_error_line_number(self):
        with pytest.raises(UnicodeDataError) as excinfo:
            list(parse_unicode_data([_line(), _line(), _line(cat="Qq")]))
        assert excinfo.value.line_no == 3


class TestLoadUnicodeData:
    def test_load_file(self, unicode_data_file, unicode_data_lines):
        records = load_unicode_data(unicode_data_file)
        assert len(records) == len(unicode_data_lines)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_unicode_data(tmp_path / "missing.txt")


# =============================================================================
# Category
# =============================================================================


class TestCategory:
    def test_all_tags_round_trip(self):
        assert len(Category) == 30
        for cat in Category:
            assert Category(cat.tag) is cat

    def test_predicates(self):
        assert Category("Lu").is_letter()
        assert Category("Lu").is_cased_letter()
        assert not Category("Lo").is_cased_letter()
        assert Category("Mn").is_mark()
        assert Category("Nd").is_number()
        assert Category("Pd").is_punctuation()
        assert Category("Sk").is_symbol()
        assert Category("Zs").is_separator()
        assert Category("Co").is_other()


# =============================================================================
# Providers and table collection
# =============================================================================


class TestCollectTables:
    def test_only_nonzero_classes_stored(self, sample_tables):
        assert 0x41 not in sample_tables.combining_classes
        assert sample_tables.combining_classes[0x30A] == 230

    def test_decompositions_split_by_kind(self, sample_tables):
        assert sample_tables.canonical[0xE9] == [0x65, 0x301]
        assert sample_tables.compatibility[0xA8] == [0x20, 0x308]
        assert 0xA8 not in sample_tables.canonical
        assert 0xE9 not in sample_tables.compatibility


class TestRecordsFromUnicodedata:
    def test_relevant_records(self):
        records = {r.codepoint: r for r in records_from_unicodedata(relevant_only=True)}
        assert records[0xE9].canonical == (0x65, 0x301)
        assert records[0x1C4].compatibility == (0x44, 0x17D)
        assert records[0x301].combining_class == 230
        # No decomposition and class 0
        assert 0x41 not in records
        # Hangul syllables carry no tabulated decomposition
        assert 0xAC00 not in records

    def test_relevant_subset_agrees_with_full_stream(self):
        full = collect_tables(records_from_unicodedata())
        relevant = collect_tables(records_from_unicodedata(relevant_only=True))
        assert full.canonical == relevant.canonical
        assert full.compatibility == relevant.compatibility
        assert full.combining_classes == relevant.combining_classes
