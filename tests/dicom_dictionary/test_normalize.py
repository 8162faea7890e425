"""Tests for keyword, UID name and tag transforms.

Key Scenarios:
- Keywords convert to snake_case and identifiers, including doubled separators
- UID names lose their colon qualifier and retirement marker
- SOP class names squash into identifier form
- Range tags are recognized and filtered out of concrete listings
"""

from __future__ import annotations

import string

import pytest
from hypothesis import given, settings, strategies as st

from DicomDictionary.normalize import (
    TAG_PATTERN,
    ZERO_WIDTH_SPACE,
    concrete_entries,
    fold_keyword,
    is_concrete,
    is_range_tag,
    keyword_to_identifier,
    keyword_to_snake_case,
    normalize_uid_name,
    parse_tag,
    sop_class_identifier,
    strip_separators,
    tag_element,
    tag_group,
)
from DicomDictionary.records import DictionaryEntry

ZWSP = "\u200b"

words = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=8)
keywords = st.lists(words, min_size=1, max_size=6).map(ZWSP.join)
noisy_keywords = st.lists(
    st.one_of(words, st.text(alphabet=ZWSP, min_size=1, max_size=3)), min_size=1, max_size=10
).map("".join)
hex_half = st.text(alphabet="0123456789ABCDEF", min_size=4, max_size=4)
range_half = st.text(alphabet="0123456789ABCDEFx", min_size=4, max_size=4)


pytestmark = pytest.mark.unit


class TestKeywordTransforms:
    @pytest.mark.parametrize(
        ("keyword", "expected"),
        [
            (f"Length{ZWSP}To{ZWSP}End", "length_to_end"),
            (f"Patient{ZWSP}{ZWSP}Sex{ZWSP}Neutered", "patient_sex_neutered"),
            (f"File{ZWSP}Set{ZWSP}ID", "file_set_id"),
            ("Item", "item"),
            ("", ""),
        ],
    )
    def test_snake_case(self, keyword: str, expected: str) -> None:
        assert keyword_to_snake_case(keyword) == expected

    def test_identifier(self) -> None:
        assert keyword_to_identifier(f"Length{ZWSP}To{ZWSP}End") == "LengthToEnd"
        assert keyword_to_identifier(f"Patient{ZWSP}{ZWSP}Sex{ZWSP}Neutered") == (
            "PatientSexNeutered"
        )

    def test_fold_keyword_collapses_runs(self) -> None:
        assert fold_keyword(f"A{ZWSP * 3}B{ZWSP}C") == f"A{ZWSP}B{ZWSP}C"

    def test_separator_constant(self) -> None:
        assert ZERO_WIDTH_SPACE == ZWSP
        assert len(ZERO_WIDTH_SPACE) == 1

    @pytest.mark.property
    @given(keyword=noisy_keywords)
    @settings(max_examples=100)
    def test_strip_separators_is_idempotent(self, keyword: str) -> None:
        once = strip_separators(keyword)
        assert ZWSP not in once
        assert strip_separators(once) == once

    @pytest.mark.property
    @given(keyword=noisy_keywords)
    @settings(max_examples=100)
    def test_snake_case_has_no_double_underscores(self, keyword: str) -> None:
        snake = keyword_to_snake_case(keyword)
        assert "__" not in snake
        assert ZWSP not in snake
        assert snake == snake.lower()

    @pytest.mark.property
    @given(parts=st.lists(words, min_size=1, max_size=6))
    @settings(max_examples=100)
    def test_snake_case_joins_words(self, parts) -> None:
        assert keyword_to_snake_case(ZWSP.join(parts)) == "_".join(parts).lower()

    @pytest.mark.property
    @given(keyword=keywords)
    def test_identifier_matches_stripped_snake_case(self, keyword: str) -> None:
        assert keyword_to_identifier(keyword).lower() == keyword_to_snake_case(keyword).replace(
            "_", ""
        )


class TestUidNames:
    @pytest.mark.parametrize(
        ("full_name", "expected"),
        [
            (
                "Implicit VR Little Endian: Default Transfer Syntax for DICOM",
                "Implicit VR Little Endian",
            ),
            ("Explicit VR Big Endian (Retired)", "Explicit VR Big Endian"),
            (
                "Papyrus 3 Implicit VR Little Endian (Retired)",
                "Papyrus 3 Implicit VR Little Endian",
            ),
            ("Verification SOP Class", "Verification SOP Class"),
            (
                "JPEG Extended (Process 3 & 5): Default Transfer Syntax",
                "JPEG Extended (Process 3 & 5)",
            ),
            ("Name: qualifier (Retired)", "Name"),
            ("", ""),
        ],
    )
    def test_normalize_uid_name(self, full_name: str, expected: str) -> None:
        assert normalize_uid_name(full_name) == expected

    @pytest.mark.property
    @given(
        base=st.text(alphabet=string.ascii_letters + string.digits + " ,-&", max_size=40),
        retired=st.booleans(),
        qualifier=st.one_of(st.none(), st.text(alphabet=string.printable, max_size=20)),
    )
    @settings(max_examples=100)
    def test_normalize_uid_name_recovers_base(self, base, retired, qualifier) -> None:
        full_name = base + (" (Retired)" if retired else "")
        if qualifier is not None:
            full_name += ":" + qualifier
        normalized = normalize_uid_name(full_name)
        assert normalized == base
        assert normalize_uid_name(normalized) == normalized

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Verification SOP Class", "VerificationSOPClass"),
            ("12-lead ECG Waveform Storage", "12leadECGWaveformStorage"),
            ("Key Object Selection Document Storage", "KeyObjectSelectionDocumentStorage"),
            ("Ophthalmic Photography 8 Bit Image Storage", "OphthalmicPhotography8BitImageStorage"),
            ("Standalone Overlay Storage (Retired)", "StandaloneOverlayStorage"),
            ("Hanging Protocol Storage - FIND", "HangingProtocolStorageFIND"),
            ("Basic Text SR Storage/Legacy", "BasicTextSRStorageLegacy"),
        ],
    )
    def test_sop_class_identifier(self, name: str, expected: str) -> None:
        assert sop_class_identifier(name) == expected


class TestTags:
    def test_halves(self) -> None:
        assert tag_group("(7Fxx,0010)") == "7Fxx"
        assert tag_element("(7Fxx,0010)") == "0010"

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("(0008,0005)", False),
            ("(1000,xxx0)", True),
            ("(7Fxx,0010)", True),
            ("(60xx,3000)", True),
            ("(FFFE,E000)", False),
        ],
    )
    def test_is_range_tag(self, tag: str, expected: bool) -> None:
        assert is_range_tag(tag) is expected

    @pytest.mark.property
    @given(group=range_half, element=range_half)
    @settings(max_examples=100)
    def test_range_iff_wildcard(self, group: str, element: str) -> None:
        tag = f"({group},{element})"
        assert TAG_PATTERN.match(tag)
        assert is_range_tag(tag) is ("x" in group + element)

    @pytest.mark.property
    @given(group=st.integers(0, 0xFFFF), element=st.integers(0, 0xFFFF))
    @settings(max_examples=100)
    def test_parse_tag(self, group: int, element: int) -> None:
        assert parse_tag(f"({group:04X},{element:04X})") == (group, element)

    @pytest.mark.property
    @given(group=hex_half, element=hex_half)
    def test_parse_tag_accepts_lowercase(self, group: str, element: str) -> None:
        assert parse_tag(f"({group.lower()},{element})") == (int(group, 16), int(element, 16))

    @pytest.mark.parametrize("tag", ["", "0008,0005", "(0008,005)", "(0008;0005)", "(GGGG,0000)"])
    def test_parse_tag_rejects_malformed(self, tag: str) -> None:
        with pytest.raises(ValueError, match="malformed"):
            parse_tag(tag)

    def test_parse_tag_rejects_ranges(self) -> None:
        with pytest.raises(ValueError, match="range"):
            parse_tag("(1000,xxx0)")


class TestConcreteEntries:
    def test_filters_ranges_and_keywordless_entries(self) -> None:
        entries = [
            DictionaryEntry(tag="(0008,0005)", keyword=f"Specific{ZWSP}Character{ZWSP}Set"),
            DictionaryEntry(tag="(0018,0061)", missing=("name", "keyword")),
            DictionaryEntry(tag="(1000,xxx0)", keyword=f"Escape{ZWSP}Triplet"),
            DictionaryEntry(tag="(FFFE,E000)", keyword="Item"),
        ]
        concrete = concrete_entries(entries)
        assert [entry.tag for entry in concrete] == ["(0008,0005)", "(FFFE,E000)"]
        assert not is_concrete(entries[1])
        assert not is_concrete(entries[2])

    def test_concrete_tags_always_parse(self, parser) -> None:
        for entry in concrete_entries(parser.parse_data_element_registry()):
            parse_tag(entry.tag)
