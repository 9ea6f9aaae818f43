"""Stage 2: Fill HSK/TOCFL levels and frequency tags from word lists."""

from __future__ import annotations

import dataclasses
import logging
from typing import Sequence

from bible_pinyin.models import Chapter, ChapterWord, ProficiencyStats
from bible_pinyin.proficiency.lookup import (
    ProficiencyRepository,
    frequency_from_combined_level,
    should_update_freq,
)

logger = logging.getLogger(__name__)


def enrich_word(word: ChapterWord, repository: ProficiencyRepository) -> ChapterWord:
    """Return ``word`` with missing proficiency fields filled in.

    Existing levels are kept. ``freq`` is set when absent and upgraded when
    the lookup shows the word is harder than tagged; ``biblical`` is kept.

    Args:
        word: Word with pinyin.
        repository: Proficiency lookup.

    Returns:
        The same instance when nothing changed, otherwise an updated copy.
    """

    info = repository.lookup(word.chinese)
    changes: dict[str, object] = {}

    if info.hsk_level is not None and word.hsk_level is None:
        changes["hsk_level"] = info.hsk_level
    if info.tocfl_level is not None and word.tocfl_level is None:
        changes["tocfl_level"] = info.tocfl_level

    if info.has_level:
        new_freq = frequency_from_combined_level(info.combined_level)
        if word.freq is None:
            changes["freq"] = new_freq
        elif word.freq != "biblical" and should_update_freq(word.freq, info.combined_level):
            changes["freq"] = new_freq

    if not changes:
        return word
    return dataclasses.replace(word, **changes)


def add_proficiency_levels(
    chapters: Sequence[Chapter], repository: ProficiencyRepository
) -> tuple[list[Chapter], ProficiencyStats]:
    """Add proficiency metadata to every word with pinyin.

    Args:
        chapters: Stage 1 chapters.
        repository: HSK/TOCFL lookup.

    Returns:
        Updated chapters and counters of words seen and changed.
    """

    words_total = 0
    words_updated = 0
    out: list[Chapter] = []

    for chapter in chapters:
        verses = []
        for verse in chapter.verses:
            words = []
            for word in verse.words:
                if not word.pinyin:
                    words.append(word)
                    continue
                words_total += 1
                enriched = enrich_word(word, repository)
                if enriched is not word:
                    words_updated += 1
                words.append(enriched)
            verses.append(dataclasses.replace(verse, words=tuple(words)))
        out.append(dataclasses.replace(chapter, verses=tuple(verses)))

    logger.info("Proficiency levels: %d of %d words updated", words_updated, words_total)
    return out, ProficiencyStats(words_total=words_total, words_updated=words_updated)
