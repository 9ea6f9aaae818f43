"""Split a pinyin string into one syllable per Chinese character.

Pinyin in preprocessed content is authored by hand or by an LLM, so its
delimiting is inconsistent: apostrophes, spaces, capitalized proper-noun
syllables, or nothing at all. Alignment runs an ordered chain of tiers; each
tier either returns exactly ``count`` pieces or ``None`` and the chain falls
through. The final tier always succeeds, so callers get a list of the requested
length for any input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from bible_pinyin.models import AlignmentTier

APOSTROPHES = "'’"
APOSTROPHE_RE = re.compile(f"[{APOSTROPHES}]")
# Whitespace includes the byte order mark, which `\s` does not match.
WHITESPACE_RE = re.compile(r"[\s\ufeff]+")
TRIM_RE = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")

INITIALS = "zh|ch|sh|[bpmfdtnlgkhjqxrzcsyw]"
VOWELS = "aeiouü" "āáǎà" "ēéěè" "īíǐì" "ōóǒò" "ūúǔù" "ǖǘǚǜ"
PINYIN_SYLLABLE_RE = re.compile(
    rf"(?:{INITIALS})?[{VOWELS}]+(?:ng|n|r)?[1-4]?",
    re.IGNORECASE,
)


class SyllableScanner(Protocol):
    """Tokenizer used by the phonetic tiers."""

    def scan(self, text: str) -> list[str]:
        ...


@dataclass(frozen=True)
class RegexSyllableScanner:
    """Collect greedy, non-overlapping left-to-right matches of ``pattern``."""

    pattern: re.Pattern[str] = PINYIN_SYLLABLE_RE

    def scan(self, text: str) -> list[str]:
        return [match.group(0) for match in self.pattern.finditer(text)]


DEFAULT_SCANNER = RegexSyllableScanner()


@dataclass(frozen=True)
class Alignment:
    """Aligned syllables and the tier that produced them."""

    syllables: tuple[str, ...]
    tier: AlignmentTier


Tier = Callable[[str, int, SyllableScanner], Optional[list[str]]]


def _split_words(text: str) -> list[str]:
    return [piece for piece in WHITESPACE_RE.split(text) if piece]


def _split_apostrophes(text: str, count: int, scanner: SyllableScanner) -> list[str] | None:
    if not APOSTROPHE_RE.search(text):
        return None
    pieces = APOSTROPHE_RE.split(text)
    return pieces if len(pieces) == count else None


def _split_whitespace(text: str, count: int, scanner: SyllableScanner) -> list[str] | None:
    pieces = _split_words(text)
    return pieces if len(pieces) == count else None


def _scan_phonetic(text: str, count: int, scanner: SyllableScanner) -> list[str] | None:
    matches = scanner.scan(APOSTROPHE_RE.sub(" ", text))
    return matches if len(matches) == count else None


def _merge_phonetic(text: str, count: int, scanner: SyllableScanner) -> list[str] | None:
    """Group an over-split scan into ``count`` order-preserving buckets."""

    matches = scanner.scan(APOSTROPHE_RE.sub(" ", text))
    if len(matches) <= count:
        return None

    ratio = len(matches) / count
    merged: list[str] = []
    for idx in range(count):
        start = math.floor(idx * ratio)
        end = len(matches) if idx == count - 1 else math.floor((idx + 1) * ratio)
        merged.append("".join(matches[start:end]))
    return merged


def _split_capitals(text: str, count: int, scanner: SyllableScanner) -> list[str] | None:
    pieces: list[str] = []
    for word in _split_words(text):
        buf: list[str] = []
        for pos, ch in enumerate(word):
            if pos > 0 and ch.isupper():
                pieces.append("".join(buf))
                buf.clear()
            buf.append(ch)
        if buf:
            pieces.append("".join(buf))
    return pieces if len(pieces) == count else None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _slice_proportional(text: str, count: int, scanner: SyllableScanner) -> list[str]:
    """Cut ``text`` into ``count`` slices of roughly equal length.

    The last slice absorbs the rounding remainder. Slices may be empty when the
    string is shorter than ``count``.
    """

    avg_len = len(text) / count
    pieces: list[str] = []
    for idx in range(count):
        start = _round_half_up(idx * avg_len)
        end = len(text) if idx == count - 1 else _round_half_up((idx + 1) * avg_len)
        pieces.append(text[start:end])

    if len(pieces) != count:
        return [text] + [""] * (count - 1)
    return pieces


TIERS: tuple[tuple[AlignmentTier, Tier], ...] = (
    (AlignmentTier.APOSTROPHE, _split_apostrophes),
    (AlignmentTier.WHITESPACE, _split_whitespace),
    (AlignmentTier.PHONETIC, _scan_phonetic),
    (AlignmentTier.MERGED, _merge_phonetic),
    (AlignmentTier.CAPITALIZATION, _split_capitals),
)


def align_pinyin_detailed(
    pinyin: str,
    character_count: int,
    scanner: SyllableScanner = DEFAULT_SCANNER,
) -> Alignment:
    """Align ``pinyin`` to ``character_count`` characters and report the tier.

    Args:
        pinyin: Romanization of one word, possibly space-, apostrophe- or
            capital-delimited, or fully concatenated.
        character_count: Number of characters the syllables must match.
        scanner: Syllable tokenizer for the phonetic tiers.

    Returns:
        ``Alignment`` whose ``syllables`` has exactly ``character_count``
        entries, or none when ``pinyin`` is empty or the count is not positive.
    """

    if not pinyin or character_count <= 0:
        return Alignment((), AlignmentTier.EMPTY)

    text = TRIM_RE.sub("", pinyin)
    if character_count == 1:
        return Alignment((text,), AlignmentTier.SINGLE)

    for tier, strategy in TIERS:
        pieces = strategy(text, character_count, scanner)
        if pieces is not None:
            return Alignment(tuple(pieces), tier)

    return Alignment(
        tuple(_slice_proportional(text, character_count, scanner)),
        AlignmentTier.PROPORTIONAL,
    )


def align_pinyin(
    pinyin: str,
    character_count: int,
    scanner: SyllableScanner = DEFAULT_SCANNER,
) -> list[str]:
    """Return one syllable per character; see :func:`align_pinyin_detailed`."""

    return list(align_pinyin_detailed(pinyin, character_count, scanner).syllables)
