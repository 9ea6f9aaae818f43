"""Unit tests for pinyin syllable alignment tiers."""

from __future__ import annotations

import re

import pytest

from bible_pinyin.alignment.syllables import (
    RegexSyllableScanner,
    align_pinyin,
    align_pinyin_detailed,
)
from bible_pinyin.models import AlignmentTier


def test_empty_pinyin_or_zero_count_returns_empty_list() -> None:
    assert align_pinyin("", 0) == []
    assert align_pinyin("", 3) == []
    assert align_pinyin("nǐhǎo", 0) == []
    assert align_pinyin_detailed("", 2).tier is AlignmentTier.EMPTY


@pytest.mark.parametrize("pinyin", ["ài", "  shén ", "Yēsū Jīdū", "nǐ'hǎo", "123"])
def test_single_character_returns_trimmed_pinyin(pinyin: str) -> None:
    assert align_pinyin(pinyin, 1) == [pinyin.strip()]


def test_apostrophes_mark_syllable_boundaries() -> None:
    result = align_pinyin_detailed("nǐ'hǎo", 2)

    assert list(result.syllables) == ["nǐ", "hǎo"]
    assert result.tier is AlignmentTier.APOSTROPHE


def test_typographic_apostrophe_is_a_boundary() -> None:
    assert align_pinyin("Xī’ān", 2) == ["Xī", "ān"]


def test_whitespace_delimited_names() -> None:
    result = align_pinyin_detailed("Yēsū Jīdū", 2)

    assert list(result.syllables) == ["Yēsū", "Jīdū"]
    assert result.tier is AlignmentTier.WHITESPACE


def test_byte_order_mark_counts_as_whitespace() -> None:
    assert align_pinyin("\ufeffshén\ufeff", 1) == ["shén"]

    result = align_pinyin_detailed("\ufeffYēsū\ufeffJīdū\u3000", 2)

    assert list(result.syllables) == ["Yēsū", "Jīdū"]
    assert result.tier is AlignmentTier.WHITESPACE


def test_concatenated_syllables_use_phonetic_scan() -> None:
    result = align_pinyin_detailed("fúyīn", 2)

    assert list(result.syllables) == ["fú", "yīn"]
    assert result.tier is AlignmentTier.PHONETIC


@pytest.mark.parametrize(
    ("pinyin", "count", "expected"),
    [
        ("Zhōngguó", 2, ["Zhōng", "guó"]),
        ("shàngdì", 2, ["shàng", "dì"]),
        ("ni3hao3", 2, ["ni3", "hao3"]),
        ("YēsūJīdū", 4, ["Yē", "sū", "Jī", "dū"]),
        ("Yēsū Jīdū", 4, ["Yē", "sū", "Jī", "dū"]),
    ],
)
def test_phonetic_scan_examples(pinyin: str, count: int, expected: list[str]) -> None:
    assert align_pinyin(pinyin, count) == expected


def test_apostrophe_count_mismatch_falls_through_to_phonetic_scan() -> None:
    # Two pieces for three characters; the scan splits "tiānshǐ" further.
    result = align_pinyin_detailed("tiānshǐ'men", 3)

    assert list(result.syllables) == ["tiān", "shǐ", "men"]
    assert result.tier is AlignmentTier.PHONETIC


def test_over_split_scan_merges_trailing_matches() -> None:
    result = align_pinyin_detailed("nǐhǎoma", 2)

    # Three matches into two slots: ratio 1.5 puts match 0 alone, 1-2 together.
    assert list(result.syllables) == ["nǐ", "hǎoma"]
    assert result.tier is AlignmentTier.MERGED


def test_merge_bucketing_follows_floor_ratio() -> None:
    # Four matches into three slots: ratio 4/3 gives buckets [0:1], [1:2], [2:4].
    assert align_pinyin("Yē sū Jī dū", 3) == ["Yē", "sū", "Jīdū"]
    assert align_pinyin("YēsūJīdū", 2) == ["Yēsū", "Jīdū"]


def test_capital_letters_split_when_scan_finds_too_few_syllables() -> None:
    result = align_pinyin_detailed("JHVH", 4)

    assert list(result.syllables) == ["J", "H", "V", "H"]
    assert result.tier is AlignmentTier.CAPITALIZATION


def test_proportional_slicing_is_last_resort() -> None:
    result = align_pinyin_detailed("abcdef", 3)

    # The scan finds two syllables ("a", "de") and there are no capitals.
    assert list(result.syllables) == ["ab", "cd", "ef"]
    assert result.tier is AlignmentTier.PROPORTIONAL


def test_proportional_slicing_keeps_empty_slots_for_short_strings() -> None:
    assert align_pinyin("abc", 5) == ["a", "", "b", "", "c"]


def test_proportional_slicing_gives_remainder_to_last_slot() -> None:
    assert align_pinyin("xyzxyzx", 2) == ["xyzx", "yzx"]


@pytest.mark.parametrize(
    "pinyin",
    ["", " ", "123456", "😀😀", "''''", "a b c d e f g", "Ā", "---", "zzz", "NǏHǍO"],
)
@pytest.mark.parametrize("count", [0, 1, 2, 3, 7, 20])
def test_result_length_always_matches_count(pinyin: str, count: int) -> None:
    result = align_pinyin(pinyin, count)

    expected = 0 if not pinyin else count
    assert len(result) == expected


def test_merge_never_reorders_syllables() -> None:
    pinyin = "bāluóbāluóbāluó"
    result = align_pinyin(pinyin, 2)

    assert "".join(result) == pinyin
    assert len(result) == 2


def test_custom_scanner_replaces_phonetic_pattern() -> None:
    # Scanner that treats every pair of letters as one syllable.
    scanner = RegexSyllableScanner(re.compile(r"..", re.IGNORECASE))

    assert align_pinyin("abcd", 2, scanner=scanner) == ["ab", "cd"]
    assert align_pinyin_detailed("abcd", 2, scanner=scanner).tier is AlignmentTier.PHONETIC
