"""Data models used across content pipeline stages.

Chapter content flows through the stages as immutable records: Stage 1 loads
``Chapter`` trees from preprocessed JSON, Stage 2 fills proficiency metadata on
``ChapterWord`` and Stage 3 produces ``AnnotatedChapter`` trees that pair every
character with its aligned pinyin syllable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class AlignmentTier(str, Enum):
    """Strategy that produced a syllable alignment, in priority order."""

    EMPTY = "empty"
    SINGLE = "single"
    APOSTROPHE = "apostrophe"
    WHITESPACE = "whitespace"
    PHONETIC = "phonetic"
    MERGED = "merged"
    CAPITALIZATION = "capitalization"
    PROPORTIONAL = "proportional"


FALLBACK_TIERS = frozenset(
    {AlignmentTier.MERGED, AlignmentTier.CAPITALIZATION, AlignmentTier.PROPORTIONAL}
)


@dataclass(frozen=True)
class CharacterGloss:
    """One ``breakdown`` item: a character and its standalone meaning."""

    character: str
    meaning: str


@dataclass(frozen=True)
class ChapterWord:
    """One segmented word as emitted by the offline segmentation pass.

    Punctuation is carried as a word with empty ``pinyin``. Keys this package
    does not model are kept in ``extra`` and written back unchanged.
    """

    chinese: str
    pinyin: str
    definition: str = ""
    part_of_speech: str = ""
    hsk_level: int | None = None
    tocfl_level: int | None = None
    freq: str | None = None
    is_name: bool = False
    name_type: str | None = None
    breakdown: tuple[CharacterGloss, ...] = ()
    note: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, hash=False)


@dataclass(frozen=True)
class Verse:
    """One verse; ``extra`` holds unmodeled keys such as ``crossReferences``."""

    number: int
    text: str
    words: tuple[ChapterWord, ...]
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, hash=False)


@dataclass(frozen=True)
class Chapter:
    """A chapter file: book identity plus its verses in order."""

    book: str
    book_id: str
    chapter: int
    verses: tuple[Verse, ...]
    processed_at: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, hash=False)

    def reference(self, verse: int) -> str:
        """Return a compact ``bookId chapter:verse`` reference string."""

        return f"{self.book_id} {self.chapter}:{verse}"


@dataclass(frozen=True)
class AnnotatedWord:
    """Stage 3 word with characters and syllables aligned one to one.

    ``syllables`` is empty for punctuation and otherwise has exactly one entry
    per item in ``characters``.
    """

    word: ChapterWord
    characters: tuple[str, ...]
    syllables: tuple[str, ...]
    tier: AlignmentTier
    show_pinyin: bool

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        """Return ``(character, syllable)`` pairs used for ruby rendering."""

        return tuple(zip(self.characters, self.syllables))


@dataclass(frozen=True)
class AnnotatedVerse:
    number: int
    text: str
    words: tuple[AnnotatedWord, ...]
    extra: Mapping[str, Any] = field(default_factory=dict, repr=False, hash=False)


@dataclass(frozen=True)
class AnnotatedChapter:
    book: str
    book_id: str
    chapter: int
    pinyin_level: str
    verses: tuple[AnnotatedVerse, ...]


@dataclass(frozen=True)
class FallbackAlignment:
    """Report item for words aligned by a degraded fallback tier."""

    reference: str
    chinese: str
    pinyin: str
    tier: AlignmentTier
    syllables: tuple[str, ...]


@dataclass(frozen=True)
class SuspectSyllable:
    """Report item for an aligned syllable missing from the syllable inventory."""

    reference: str
    chinese: str
    pinyin: str
    syllable: str


@dataclass(frozen=True)
class AlignmentReport:
    """Stage 3 alignment diagnostics captured for reporting.

    Items are kept in encounter order; report builders sort them for
    deterministic output.
    """

    fallbacks: tuple[FallbackAlignment, ...] = field(default_factory=tuple)
    suspects: tuple[SuspectSyllable, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProficiencyInfo:
    """HSK/TOCFL levels for one word plus a combined 1-10 difficulty."""

    hsk_level: int | None
    tocfl_level: int | None
    combined_level: int

    @property
    def has_level(self) -> bool:
        return self.hsk_level is not None or self.tocfl_level is not None


@dataclass(frozen=True)
class ProficiencyStats:
    """Stage 2 counters: words with pinyin seen and words changed."""

    words_total: int = 0
    words_updated: int = 0


@dataclass(frozen=True)
class VocabularyEntry:
    """One distinct word/pinyin pair exported for vocabulary review."""

    word: str
    pinyin: str
    syllables: tuple[str, ...]
    hsk_level: int | None
    tocfl_level: int | None
    freq: str | None
    definition: str
    occurrences: int
    first_reference: str
