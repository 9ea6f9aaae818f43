"""Markdown report generation for annotation run summaries."""

from __future__ import annotations

from typing import Iterable, Sequence

from bible_pinyin.models import AlignmentReport, AlignmentTier, AnnotatedChapter, ProficiencyStats
from bible_pinyin.validation import (
    collect_freq_counts,
    collect_level_counts,
    collect_tier_counts,
    collect_visibility_counts,
)

TIER_ORDER = {tier.value: idx for idx, tier in enumerate(AlignmentTier)}
FREQ_ORDER = {"common": 0, "uncommon": 1, "rare": 2, "biblical": 3}


def _level_sort_key(level: str) -> tuple[int, str]:
    """Sort level labels numerically with the ``-`` placeholder last."""

    return (int(level), level) if level.isdigit() else (10**9, level)


def _reference_sort_key(reference: str) -> tuple[str, int, int]:
    """Sort ``bookId chapter:verse`` references by book, chapter and verse."""

    book_id, _, position = reference.rpartition(" ")
    chapter, _, verse = position.partition(":")
    return book_id, int(chapter or 0), int(verse or 0)


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(cell.replace("|", "\\|") for cell in row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def build_report_md(
    chapters: Sequence[AnnotatedChapter],
    report: AlignmentReport,
    stats: ProficiencyStats | None = None,
) -> str:
    """Build the annotation markdown report for one pipeline run.

    Args:
        chapters: Annotated chapters.
        report: Stage 3 alignment diagnostics.
        stats: Stage 2 counters, ``None`` when enrichment did not run.

    Returns:
        Full markdown content with summary tables.
    """

    tier_counts = collect_tier_counts(chapters)
    tier_rows = [
        (tier, str(tier_counts[tier])) for tier in sorted(tier_counts, key=TIER_ORDER.__getitem__)
    ]

    visibility = collect_visibility_counts(chapters)
    level_label = chapters[0].pinyin_level if chapters else "-"
    visibility_rows = [(key, str(visibility[key])) for key in ("shown", "hidden")]

    level_counts = collect_level_counts(chapters)
    level_rows = [
        (level, str(level_counts[level])) for level in sorted(level_counts, key=_level_sort_key)
    ]

    freq_counts = collect_freq_counts(chapters)
    freq_rows = [
        (freq, str(freq_counts[freq]))
        for freq in sorted(freq_counts, key=lambda item: (FREQ_ORDER.get(item, 99), item))
    ]

    if stats is None:
        enrichment = "Proficiency enrichment was not run."
    else:
        enrichment = _markdown_table(
            ["words_total", "words_updated"],
            [(str(stats.words_total), str(stats.words_updated))],
        )

    fallback_rows = [
        (item.reference, item.chinese, item.pinyin, item.tier.value, " ".join(item.syllables))
        for item in sorted(
            report.fallbacks,
            key=lambda item: (_reference_sort_key(item.reference), item.chinese, item.pinyin),
        )
    ]

    suspect_rows = [
        (item.reference, item.chinese, item.pinyin, item.syllable or "(empty)")
        for item in sorted(
            report.suspects,
            key=lambda item: (
                _reference_sort_key(item.reference),
                item.chinese,
                item.pinyin,
                item.syllable,
            ),
        )
    ]

    sections = [
        "# Alignment Report",
        "",
        "## Words per alignment tier",
        _markdown_table(["tier", "word_count"], tier_rows),
        "",
        f"## Pinyin visibility at level `{level_label}`",
        _markdown_table(["visibility", "word_count"], visibility_rows),
        "",
        "## Words per HSK level",
        _markdown_table(["hsk_level", "word_count"], level_rows),
        "",
        "## Words per frequency tag",
        _markdown_table(["freq", "word_count"], freq_rows),
        "",
        "## Proficiency enrichment",
        enrichment,
        "",
        "## Fallback alignments",
        _markdown_table(["reference", "word", "pinyin", "tier", "syllables"], fallback_rows),
        "",
        "## Suspect syllables",
        _markdown_table(["reference", "word", "pinyin", "syllable"], suspect_rows),
    ]

    return "\n".join(sections) + "\n"
