"""Unit tests for Stage 3 annotation and alignment diagnostics."""

from __future__ import annotations

from bible_pinyin.models import AlignmentTier, Chapter, ChapterWord, Verse
from bible_pinyin.proficiency.levels import PinyinLevel
from bible_pinyin.stages.stage3_annotate import annotate_chapters, annotate_word


def _chapter(*words: ChapterWord) -> Chapter:
    return Chapter(
        book="Test",
        book_id="test",
        chapter=2,
        verses=(Verse(number=5, text="".join(w.chinese for w in words), words=words),),
    )


def test_annotate_word_pairs_characters_with_syllables() -> None:
    item = annotate_word(ChapterWord("福音", "fúyīn", freq="biblical"), PinyinLevel.HSK4)

    assert item.pairs == (("福", "fú"), ("音", "yīn"))
    assert item.tier is AlignmentTier.PHONETIC
    assert item.show_pinyin is True


def test_annotate_word_punctuation_has_no_syllables() -> None:
    item = annotate_word(ChapterWord("，", ""), PinyinLevel.ALL)

    assert item.characters == ("，",)
    assert item.syllables == ()
    assert item.tier is AlignmentTier.EMPTY
    assert item.show_pinyin is False


def test_annotate_word_ignores_ideographic_space() -> None:
    item = annotate_word(ChapterWord("耶穌　基督", "Yēsū Jīdū"), PinyinLevel.ALL)

    assert item.characters == ("耶", "穌", "基", "督")
    assert item.syllables == ("Yē", "sū", "Jī", "dū")


def test_annotate_chapters_applies_level_and_reports_fallbacks() -> None:
    chapter = _chapter(
        ChapterWord("的", "de", hsk_level=1, freq="common"),
        ChapterWord("基督", "Jīdūtú", freq="biblical"),
        ChapterWord("甲乙", "jy"),
        ChapterWord("。", ""),
    )

    annotated, report = annotate_chapters([chapter], "hsk4+")

    words = annotated[0].verses[0].words
    assert annotated[0].pinyin_level == "hsk4+"
    assert [w.show_pinyin for w in words] == [False, True, True, False]
    assert [w.tier for w in words] == [
        AlignmentTier.SINGLE,
        AlignmentTier.MERGED,
        AlignmentTier.PROPORTIONAL,
        AlignmentTier.EMPTY,
    ]

    assert [(f.reference, f.chinese, f.tier) for f in report.fallbacks] == [
        ("test 2:5", "基督", AlignmentTier.MERGED),
        ("test 2:5", "甲乙", AlignmentTier.PROPORTIONAL),
    ]
    assert report.fallbacks[0].syllables == ("Jī", "dūtú")
    assert [s.syllable for s in report.suspects] == ["dūtú", "j", "y"]
