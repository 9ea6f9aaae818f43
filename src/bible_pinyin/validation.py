"""Validation helpers for loaded chapters and annotated output integrity."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from bible_pinyin.models import AnnotatedChapter, Chapter, ChapterWord
from bible_pinyin.proficiency.levels import FREQ_TAGS

VALID_HSK_LEVELS = range(1, 7)
VALID_TOCFL_LEVELS = range(1, 8)
ERROR_PREVIEW = 25


def _raise_if_errors(stage: str, errors: Sequence[str]) -> None:
    if not errors:
        return
    preview = "\n".join(f"- {item}" for item in errors[:ERROR_PREVIEW])
    rest = len(errors) - min(ERROR_PREVIEW, len(errors))
    more = f"\n- ... and {rest} more" if rest > 0 else ""
    raise ValueError(f"{stage} validation failed with {len(errors)} errors:\n{preview}{more}")


def _word_errors(word: ChapterWord, where: str) -> list[str]:
    errors: list[str] = []
    if not word.chinese.strip():
        errors.append(f"{where}: empty chinese")
    if word.hsk_level is not None and word.hsk_level not in VALID_HSK_LEVELS:
        errors.append(f"{where}: invalid hskLevel {word.hsk_level}")
    if word.tocfl_level is not None and word.tocfl_level not in VALID_TOCFL_LEVELS:
        errors.append(f"{where}: invalid tocflLevel {word.tocfl_level}")
    if word.freq is not None and word.freq not in FREQ_TAGS:
        errors.append(f"{where}: invalid freq '{word.freq}'")
    return errors


def validate_chapters(chapters: Sequence[Chapter]) -> None:
    """Validate loaded chapters for numbering and word metadata constraints.

    Args:
        chapters: Stage 1 or Stage 2 chapters.

    Raises:
        ValueError: If any chapter, verse or word violates the expected shape.
    """

    errors: list[str] = []
    for chapter in chapters:
        label = f"{chapter.book_id} {chapter.chapter}"
        if not chapter.book_id:
            errors.append(f"{label}: empty bookId")
        if chapter.chapter < 1:
            errors.append(f"{label}: invalid chapter number {chapter.chapter}")

        seen: set[int] = set()
        for verse in chapter.verses:
            if verse.number < 1:
                errors.append(f"{label}: invalid verse number {verse.number}")
            if verse.number in seen:
                errors.append(f"{label}: duplicate verse number {verse.number}")
            seen.add(verse.number)
            for idx, word in enumerate(verse.words, start=1):
                errors.extend(_word_errors(word, f"{label}:{verse.number} word {idx}"))

    _raise_if_errors("Chapter", errors)


def validate_annotated(chapters: Sequence[AnnotatedChapter]) -> None:
    """Check that every word has exactly one syllable per character.

    Args:
        chapters: Stage 3 chapters.

    Raises:
        ValueError: If a word's syllable count does not match its characters.
    """

    errors: list[str] = []
    for chapter in chapters:
        for verse in chapter.verses:
            for item in verse.words:
                where = f"{chapter.book_id} {chapter.chapter}:{verse.number} '{item.word.chinese}'"
                expected = len(item.characters) if item.word.pinyin else 0
                if len(item.syllables) != expected:
                    errors.append(
                        f"{where}: {len(item.syllables)} syllables for {expected} expected"
                    )

    _raise_if_errors("Annotation", errors)


def _annotated_words(chapters: Sequence[AnnotatedChapter]):
    for chapter in chapters:
        for verse in chapter.verses:
            for item in verse.words:
                if item.word.pinyin:
                    yield item


def collect_tier_counts(chapters: Sequence[AnnotatedChapter]) -> dict[str, int]:
    """Count words with pinyin by alignment tier.

    Args:
        chapters: Stage 3 chapters.

    Returns:
        Dictionary of tier value to word count.
    """

    counter: Counter[str] = Counter()
    for item in _annotated_words(chapters):
        counter[item.tier.value] += 1
    return dict(counter)


def collect_level_counts(chapters: Sequence[AnnotatedChapter]) -> dict[str, int]:
    """Count words with pinyin by HSK level, ``-`` for words without one."""

    counter: Counter[str] = Counter()
    for item in _annotated_words(chapters):
        level = item.word.hsk_level
        counter["-" if level is None else str(level)] += 1
    return dict(counter)


def collect_freq_counts(chapters: Sequence[AnnotatedChapter]) -> dict[str, int]:
    """Count words with pinyin by frequency tag, ``-`` for untagged words."""

    counter: Counter[str] = Counter()
    for item in _annotated_words(chapters):
        counter[item.word.freq or "-"] += 1
    return dict(counter)


def collect_visibility_counts(chapters: Sequence[AnnotatedChapter]) -> dict[str, int]:
    counter: Counter[str] = Counter({"shown": 0, "hidden": 0})
    for item in _annotated_words(chapters):
        counter["shown" if item.show_pinyin else "hidden"] += 1
    return dict(counter)
