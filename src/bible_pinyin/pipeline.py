"""Top-level orchestration for the staged chapter annotation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bible_pinyin.models import (
    AlignmentReport,
    AnnotatedChapter,
    Chapter,
    ProficiencyStats,
    VocabularyEntry,
)
from bible_pinyin.proficiency.levels import PinyinLevel
from bible_pinyin.proficiency.lookup import ProficiencyRepository
from bible_pinyin.stages.stage1_load import load_chapters
from bible_pinyin.stages.stage2_proficiency import add_proficiency_levels
from bible_pinyin.stages.stage3_annotate import annotate_chapters
from bible_pinyin.validation import validate_annotated, validate_chapters
from bible_pinyin.vocabulary import build_vocabulary


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one pipeline run.

    Attributes:
        input_dir: Preprocessed chapter directory (``<bookId>/<chapter>.json``).
        pinyin_level: Learner level used for the display decision.
        hsk_path: HSK word list TSV, or ``None`` to skip HSK enrichment.
        tocfl_path: TOCFL JSON lines file, or ``None`` to skip TOCFL enrichment.
        book_ids: Restrict the run to these books when non-empty.
    """

    input_dir: Path
    pinyin_level: PinyinLevel = PinyinLevel.ALL
    hsk_path: Path | None = None
    tocfl_path: Path | None = None
    book_ids: tuple[str, ...] = ()

    @property
    def enrich(self) -> bool:
        return self.hsk_path is not None or self.tocfl_path is not None


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by :func:`run_pipeline`.

    Attributes:
        chapters: Loaded chapters, enriched when a proficiency source was set.
        annotated: Chapters with aligned syllables and display decisions.
        report: Stage 3 alignment diagnostics.
        stats: Stage 2 counters, ``None`` when enrichment did not run.
        vocabulary: Distinct vocabulary entries in first-occurrence order.
    """

    chapters: tuple[Chapter, ...]
    annotated: tuple[AnnotatedChapter, ...]
    report: AlignmentReport
    stats: ProficiencyStats | None
    vocabulary: tuple[VocabularyEntry, ...]


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """Execute all pipeline stages from chapter loading to annotation.

    Args:
        config: Run settings.

    Returns:
        ``PipelineResult`` containing chapters, annotations and diagnostics.
    """

    chapters = load_chapters(config.input_dir, config.book_ids)
    validate_chapters(chapters)

    stats: ProficiencyStats | None = None
    if config.enrich:
        repository = ProficiencyRepository(hsk_path=config.hsk_path, tocfl_path=config.tocfl_path)
        chapters, stats = add_proficiency_levels(chapters, repository)
        validate_chapters(chapters)

    annotated, report = annotate_chapters(chapters, config.pinyin_level)
    validate_annotated(annotated)

    return PipelineResult(
        chapters=tuple(chapters),
        annotated=tuple(annotated),
        report=report,
        stats=stats,
        vocabulary=tuple(build_vocabulary(annotated)),
    )
