"""Stage 3: Align pinyin syllables to characters and apply the display policy."""

from __future__ import annotations

import logging
from typing import Sequence

from bible_pinyin.alignment.characters import split_characters
from bible_pinyin.alignment.inventory import is_valid_syllable
from bible_pinyin.alignment.syllables import (
    DEFAULT_SCANNER,
    SyllableScanner,
    align_pinyin_detailed,
)
from bible_pinyin.models import (
    FALLBACK_TIERS,
    AlignmentReport,
    AlignmentTier,
    AnnotatedChapter,
    AnnotatedVerse,
    AnnotatedWord,
    Chapter,
    ChapterWord,
    FallbackAlignment,
    SuspectSyllable,
)
from bible_pinyin.proficiency.levels import PinyinLevel, parse_pinyin_level, should_show_pinyin

logger = logging.getLogger(__name__)


def annotate_word(
    word: ChapterWord,
    pinyin_level: PinyinLevel,
    scanner: SyllableScanner = DEFAULT_SCANNER,
) -> AnnotatedWord:
    """Pair each character of ``word`` with one pinyin syllable.

    Args:
        word: Segmented word.
        pinyin_level: Learner level used for the display decision.
        scanner: Syllable tokenizer passed to the aligner.

    Returns:
        Annotated word; punctuation gets no syllables and hidden pinyin.
    """

    characters = tuple(split_characters(word.chinese))
    if not word.pinyin:
        return AnnotatedWord(word, characters, (), AlignmentTier.EMPTY, False)

    alignment = align_pinyin_detailed(word.pinyin, len(characters), scanner)
    return AnnotatedWord(
        word=word,
        characters=characters,
        syllables=alignment.syllables,
        tier=alignment.tier,
        show_pinyin=should_show_pinyin(
            pinyin_level, word.hsk_level, word.freq, word.tocfl_level
        ),
    )


def annotate_chapters(
    chapters: Sequence[Chapter],
    pinyin_level: PinyinLevel | str,
    scanner: SyllableScanner = DEFAULT_SCANNER,
) -> tuple[list[AnnotatedChapter], AlignmentReport]:
    """Annotate every word of every chapter.

    Args:
        chapters: Stage 1 or Stage 2 chapters.
        pinyin_level: Learner level setting.
        scanner: Syllable tokenizer passed to the aligner.

    Returns:
        Annotated chapters and a report of fallback alignments and syllables
        missing from the syllable inventory.
    """

    level = parse_pinyin_level(pinyin_level)
    fallbacks: list[FallbackAlignment] = []
    suspects: list[SuspectSyllable] = []
    out: list[AnnotatedChapter] = []

    for chapter in chapters:
        verses: list[AnnotatedVerse] = []
        for verse in chapter.verses:
            reference = chapter.reference(verse.number)
            words = tuple(annotate_word(word, level, scanner) for word in verse.words)
            for item in words:
                if item.tier in FALLBACK_TIERS:
                    logger.debug(
                        "%s: '%s' [%s] aligned by %s fallback",
                        reference,
                        item.word.chinese,
                        item.word.pinyin,
                        item.tier.value,
                    )
                    fallbacks.append(
                        FallbackAlignment(
                            reference=reference,
                            chinese=item.word.chinese,
                            pinyin=item.word.pinyin,
                            tier=item.tier,
                            syllables=item.syllables,
                        )
                    )
                for syllable in item.syllables:
                    if not is_valid_syllable(syllable):
                        suspects.append(
                            SuspectSyllable(
                                reference=reference,
                                chinese=item.word.chinese,
                                pinyin=item.word.pinyin,
                                syllable=syllable,
                            )
                        )
            verses.append(
                AnnotatedVerse(number=verse.number, text=verse.text, words=words, extra=verse.extra)
            )
        out.append(
            AnnotatedChapter(
                book=chapter.book,
                book_id=chapter.book_id,
                chapter=chapter.chapter,
                pinyin_level=level.value,
                verses=tuple(verses),
            )
        )

    logger.info(
        "Annotated %d chapter(s): %d fallback alignment(s), %d suspect syllable(s)",
        len(out),
        len(fallbacks),
        len(suspects),
    )
    return out, AlignmentReport(fallbacks=tuple(fallbacks), suspects=tuple(suspects))
