"""Vocabulary list built from annotated chapters for review decks."""

from __future__ import annotations

import dataclasses
from typing import Sequence

from bible_pinyin.alignment.characters import contains_hanzi
from bible_pinyin.models import AnnotatedChapter, VocabularyEntry


def build_vocabulary(chapters: Sequence[AnnotatedChapter]) -> list[VocabularyEntry]:
    """Collect one entry per distinct ``(chinese, pinyin)`` pair.

    Only words containing Hanzi and carrying pinyin are kept. Entries are in
    order of first occurrence; metadata comes from that first occurrence.

    Args:
        chapters: Stage 3 chapters.

    Returns:
        Vocabulary entries with occurrence counts.
    """

    entries: dict[tuple[str, str], VocabularyEntry] = {}
    for chapter in chapters:
        for verse in chapter.verses:
            for item in verse.words:
                word = item.word
                if not word.pinyin or not contains_hanzi(word.chinese):
                    continue
                key = (word.chinese, word.pinyin)
                existing = entries.get(key)
                if existing is not None:
                    entries[key] = dataclasses.replace(
                        existing, occurrences=existing.occurrences + 1
                    )
                    continue
                entries[key] = VocabularyEntry(
                    word=word.chinese,
                    pinyin=word.pinyin,
                    syllables=item.syllables,
                    hsk_level=word.hsk_level,
                    tocfl_level=word.tocfl_level,
                    freq=word.freq,
                    definition=word.definition,
                    occurrences=1,
                    first_reference=f"{chapter.book_id} {chapter.chapter}:{verse.number}",
                )
    return list(entries.values())
