"""TSV read/write helpers for HSK word lists and vocabulary exports."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import Sequence

from bible_pinyin.models import VocabularyEntry

VOCABULARY_HEADER = [
    "word",
    "pinyin",
    "syllables",
    "hsk_level",
    "tocfl_level",
    "freq",
    "definition",
    "occurrences",
    "first_reference",
]

LEADING_LEVEL_RE = re.compile(r"^\s*(\d+)")
MAX_HSK_LEVEL = 6


@dataclass(frozen=True)
class HskListing:
    """One HSK word list row: a word, its traditional forms and its level."""

    word: str
    traditional: tuple[str, ...]
    level: int


def _parse_level(label: str) -> int | None:
    """Parse a level label such as ``3`` or ``7-9`` into the 1-6 scale."""

    match = LEADING_LEVEL_RE.match(label)
    if not match:
        return None
    level = int(match.group(1))
    if level < 1:
        return None
    return min(level, MAX_HSK_LEVEL)


def read_hsk_tsv(path: Path) -> list[HskListing]:
    """Read an HSK word list TSV keyed by header names.

    The header must contain ``word`` and ``level``. When a
    ``traditional_cc-cedict`` column is present its slash-separated forms are
    kept as alternate spellings. Rows with an unparseable level are skipped.

    Args:
        path: TSV file path.

    Returns:
        Listings in file order.

    Raises:
        ValueError: If the header lacks a required column.
    """

    with path.open("r", encoding="utf-8") as handle:
        lines = [line.rstrip("\n") for line in handle if line.strip()]

    if not lines:
        return []

    header = [cell.strip() for cell in lines[0].split("\t")]
    missing = [name for name in ("word", "level") if name not in header]
    if missing:
        raise ValueError(f"HSK TSV {path} is missing column(s): {', '.join(missing)}")

    idx_word = header.index("word")
    idx_level = header.index("level")
    idx_trad = header.index("traditional_cc-cedict") if "traditional_cc-cedict" in header else None

    listings: list[HskListing] = []
    for line in lines[1:]:
        cells = [cell.strip() for cell in line.split("\t")]
        if len(cells) <= max(idx_word, idx_level):
            continue
        level = _parse_level(cells[idx_level])
        word = cells[idx_word]
        if level is None or not word:
            continue
        traditional: tuple[str, ...] = ()
        if idx_trad is not None and idx_trad < len(cells):
            traditional = tuple(form for form in cells[idx_trad].split("/") if form)
        listings.append(HskListing(word=word, traditional=traditional, level=level))
    return listings


def _optional(value: int | str | None) -> str:
    return "" if value is None else str(value)


def write_vocabulary_tsv(
    entries: Sequence[VocabularyEntry], output_path: Path, include_header: bool = True
) -> None:
    """Write vocabulary entries to a TSV file using the canonical column order.

    Args:
        entries: Vocabulary entries to serialize.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        if include_header:
            handle.write("\t".join(VOCABULARY_HEADER))
            handle.write("\n")
        for entry in entries:
            handle.write(
                "\t".join(
                    [
                        entry.word,
                        entry.pinyin,
                        " ".join(entry.syllables),
                        _optional(entry.hsk_level),
                        _optional(entry.tocfl_level),
                        _optional(entry.freq),
                        entry.definition,
                        str(entry.occurrences),
                        entry.first_reference,
                    ]
                )
            )
            handle.write("\n")
