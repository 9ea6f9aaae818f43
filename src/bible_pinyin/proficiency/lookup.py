"""Repository for HSK/TOCFL proficiency lookups of Chinese words."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import json
import logging
import math
from pathlib import Path
from typing import Iterable

from bible_pinyin.io.tsv_io import read_hsk_tsv
from bible_pinyin.models import ProficiencyInfo

logger = logging.getLogger(__name__)

UNKNOWN_COMBINED_LEVEL = 8
HSK_TO_TOCFL_SCALE = 1.17


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def combined_level(hsk_level: int | None, tocfl_level: int | None) -> int:
    """Combine HSK (1-6) and TOCFL (1-7) levels into a 1-10 difficulty.

    Unknown words rate 8 so they sort with advanced vocabulary.
    """

    if hsk_level is not None and tocfl_level is not None:
        level = _round_half_up((hsk_level * HSK_TO_TOCFL_SCALE + tocfl_level) / 2)
    elif hsk_level is not None:
        level = _round_half_up(hsk_level * HSK_TO_TOCFL_SCALE)
    elif tocfl_level is not None:
        level = tocfl_level
    else:
        level = UNKNOWN_COMBINED_LEVEL
    return max(1, min(10, level))


def frequency_from_combined_level(level: int) -> str:
    """Map a combined level onto a frequency tag."""

    if level <= 3:
        return "common"
    if level <= 5:
        return "uncommon"
    return "rare"


def should_update_freq(current: str, level: int) -> bool:
    """Return whether an existing tag understates the word's difficulty."""

    if current == "common" and level > 3:
        return True
    if current == "uncommon" and level > 5:
        return True
    return False


def parse_tocfl_lines(lines: Iterable[str]) -> dict[str, int]:
    """Parse TOCFL JSON lines into a word -> band mapping.

    Each line is an object with ``text``, optional ``text_alt`` and
    ``tocfl_level``. The first band seen for a word wins. Blank and malformed
    lines are skipped.

    Args:
        lines: Raw JSON lines.

    Returns:
        Mapping from word form to TOCFL band.
    """

    mapping: dict[str, int] = {}
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Skipping malformed TOCFL line %d", line_no)
            continue
        level = entry.get("tocfl_level")
        if not isinstance(level, int):
            continue
        for form in [entry.get("text"), *(entry.get("text_alt") or [])]:
            if form and form not in mapping:
                mapping[form] = level
    return mapping


@dataclass(frozen=True)
class ProficiencyRepository:
    """Read-only repository of HSK and TOCFL levels keyed by word form.

    Either source may be ``None`` to disable it. Files are parsed lazily on
    first lookup and cached per instance.
    """

    hsk_path: Path | None = None
    tocfl_path: Path | None = None

    @cached_property
    def hsk_levels(self) -> dict[str, int]:
        """Build and cache a word -> HSK level map.

        Both the listed word and its traditional forms are indexed; the lowest
        level wins for words listed more than once.

        Raises:
            FileNotFoundError: If the configured HSK list does not exist.
        """

        if self.hsk_path is None:
            return {}
        if not self.hsk_path.exists():
            raise FileNotFoundError(f"HSK word list not found: {self.hsk_path}")

        mapping: dict[str, int] = {}
        for listing in read_hsk_tsv(self.hsk_path):
            for form in (listing.word, *listing.traditional):
                if form not in mapping or listing.level < mapping[form]:
                    mapping[form] = listing.level
        logger.info("Loaded %d HSK word forms from %s", len(mapping), self.hsk_path)
        return mapping

    @cached_property
    def tocfl_levels(self) -> dict[str, int]:
        """Build and cache a word -> TOCFL band map.

        Raises:
            FileNotFoundError: If the configured TOCFL list does not exist.
        """

        if self.tocfl_path is None:
            return {}
        if not self.tocfl_path.exists():
            raise FileNotFoundError(f"TOCFL word list not found: {self.tocfl_path}")

        with self.tocfl_path.open("r", encoding="utf-8") as handle:
            mapping = parse_tocfl_lines(handle)
        logger.info("Loaded %d TOCFL word forms from %s", len(mapping), self.tocfl_path)
        return mapping

    def lookup(self, word: str) -> ProficiencyInfo:
        """Look up proficiency levels for a word.

        Args:
            word: Word form, traditional or simplified.

        Returns:
            Levels found for ``word`` and their combined difficulty.
        """

        hsk_level = self.hsk_levels.get(word)
        tocfl_level = self.tocfl_levels.get(word)
        return ProficiencyInfo(
            hsk_level=hsk_level,
            tocfl_level=tocfl_level,
            combined_level=combined_level(hsk_level, tocfl_level),
        )
