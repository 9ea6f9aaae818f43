"""CLI entrypoint for the chapter annotation pipeline."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
import logging
from pathlib import Path
from typing import Sequence

from bible_pinyin.io.chapter_json import (
    MANIFEST_NAME,
    annotated_chapter_to_payload,
    build_manifest,
    chapter_path,
    chapter_to_payload,
    write_json,
)
from bible_pinyin.io.tsv_io import write_vocabulary_tsv
from bible_pinyin.pipeline import PipelineConfig, PipelineResult, run_pipeline
from bible_pinyin.proficiency.levels import PinyinLevel, parse_pinyin_level
from bible_pinyin.reporting.report_md import build_report_md
from bible_pinyin.validation import collect_tier_counts, collect_visibility_counts

logger = logging.getLogger(__name__)


def _resolve_default_path(name: str) -> Path | None:
    """Return ``data/<name>`` when it exists in the working directory."""

    candidate = Path("data") / name
    return candidate if candidate.exists() else None


def _parse_books(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the annotate command.
    """

    parser = argparse.ArgumentParser(
        description="Align pinyin to characters in preprocessed chapter JSON."
    )
    parser.add_argument(
        "--input", required=True, type=Path, help="Preprocessed chapter directory."
    )
    parser.add_argument(
        "--output", required=True, type=Path, help="Destination directory for annotated chapters."
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Markdown report output path (default: report.md in the output directory).",
    )
    parser.add_argument(
        "--level",
        default=PinyinLevel.ALL.value,
        help="Pinyin level: all, hsk2+, hsk4+, hsk5+, hsk6+, none (or beginner..fluent).",
    )
    parser.add_argument(
        "--hsk",
        type=Path,
        default=_resolve_default_path("hsk.tsv"),
        help="HSK word list TSV with word/level columns.",
    )
    parser.add_argument(
        "--tocfl",
        type=Path,
        default=_resolve_default_path("tocfl_words.json"),
        help="TOCFL word list in JSON lines.",
    )
    parser.add_argument(
        "--no-proficiency",
        action="store_true",
        help="Skip HSK/TOCFL enrichment even when word lists are available.",
    )
    parser.add_argument(
        "--books", type=_parse_books, default=(), help="Comma-separated book ids to process."
    )
    parser.add_argument(
        "--vocabulary", type=Path, default=None, help="Write a vocabulary TSV to this path."
    )
    parser.add_argument(
        "--enriched-output",
        type=Path,
        default=None,
        help="Write proficiency-enriched source chapters to this directory.",
    )
    parser.add_argument("--no-header", action="store_true", help="Do not write TSV header.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def _write_outputs(result: PipelineResult, output_dir: Path, generated_at: str) -> None:
    for chapter in result.annotated:
        write_json(
            annotated_chapter_to_payload(chapter),
            chapter_path(output_dir, chapter.book_id, chapter.chapter),
        )
    write_json(build_manifest(result.annotated, generated_at), output_dir / MANIFEST_NAME)


def _print_summary(result: PipelineResult) -> None:
    """Print tier and visibility tables for the annotated output."""

    if not result.annotated:
        print("No chapters loaded; skipping summary.")
        return

    tier_counts = collect_tier_counts(result.annotated)
    tier_rows = [
        [tier, str(count)]
        for tier, count in sorted(tier_counts.items(), key=lambda item: (-item[1], item[0]))
    ]
    print("\nWords per alignment tier:")
    print(_format_table(["tier", "count"], tier_rows))

    visibility = collect_visibility_counts(result.annotated)
    print(f"\nPinyin visibility at level {result.annotated[0].pinyin_level}:")
    print(_format_table(["visibility", "count"], [[k, str(v)] for k, v in visibility.items()]))


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through artifact generation.

    Args:
        argv: Argument list; ``None`` reads ``sys.argv``.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s")

    if not args.input.is_dir():
        raise SystemExit(f"Input directory not found: {args.input}")
    try:
        level = parse_pinyin_level(args.level)
    except ValueError as exc:
        parser.error(str(exc))

    config = PipelineConfig(
        input_dir=args.input,
        pinyin_level=level,
        hsk_path=None if args.no_proficiency else args.hsk,
        tocfl_path=None if args.no_proficiency else args.tocfl,
        book_ids=args.books,
    )
    result = run_pipeline(config)

    generated_at = datetime.now(timezone.utc).isoformat()
    _write_outputs(result, args.output, generated_at)
    report_path = args.report if args.report is not None else args.output / "report.md"
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(
        build_report_md(list(result.annotated), result.report, result.stats), encoding="utf-8"
    )

    print(f"Wrote {len(result.annotated)} annotated chapter(s) to {args.output}")
    print(f"Wrote report to {report_path}")

    if args.vocabulary is not None:
        write_vocabulary_tsv(
            result.vocabulary, output_path=args.vocabulary, include_header=not args.no_header
        )
        print(f"Wrote {len(result.vocabulary)} vocabulary entries to {args.vocabulary}")

    if args.enriched_output is not None:
        for chapter in result.chapters:
            write_json(
                chapter_to_payload(chapter),
                chapter_path(args.enriched_output, chapter.book_id, chapter.chapter),
            )
        logger.info("Wrote enriched chapters to %s", args.enriched_output)

    _print_summary(result)
    print(
        "\nAlignment summary: "
        f"fallbacks={len(result.report.fallbacks)}, "
        f"suspect_syllables={len(result.report.suspects)}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
