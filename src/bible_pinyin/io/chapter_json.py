"""Chapter JSON discovery, serialization and manifest helpers.

Preprocessed content lives at ``<root>/<bookId>/<chapter>.json``. Payload keys
use the camelCase names consumed by the reading app.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from bible_pinyin.models import AnnotatedChapter, AnnotatedWord, Chapter, ChapterWord

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"
MANIFEST_VERSION = "1.0.0"


def discover_chapter_files(root: Path, book_ids: Sequence[str] = ()) -> list[Path]:
    """Find chapter files ordered by book directory then chapter number.

    Args:
        root: Directory holding one sub-directory per book.
        book_ids: Restrict discovery to these book directories when non-empty.

    Returns:
        Chapter file paths; files whose stem is not a number are ignored.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
    """

    if not root.is_dir():
        raise FileNotFoundError(f"Chapter directory not found: {root}")

    wanted = set(book_ids)
    paths: list[Path] = []
    for book_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        if wanted and book_dir.name not in wanted:
            continue
        chapter_files = [p for p in book_dir.glob("*.json") if p.stem.isdigit()]
        paths.extend(sorted(chapter_files, key=lambda p: int(p.stem)))

    missing = wanted - {path.parent.name for path in paths}
    for book_id in sorted(missing):
        logger.warning("No chapter files found for book '%s'", book_id)
    return paths


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def write_json(payload: Any, path: Path) -> None:
    """Write ``payload`` as indented UTF-8 JSON, creating parent directories."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
        handle.write("\n")


def chapter_path(root: Path, book_id: str, chapter: int) -> Path:
    return root / book_id / f"{chapter}.json"


def _word_metadata(word: ChapterWord) -> dict[str, Any]:
    """Serialize word metadata; optional fields are omitted when unset.

    ``definition`` is always written. Unmodeled keys follow the known ones.
    """

    payload: dict[str, Any] = {"definition": word.definition}
    if word.part_of_speech:
        payload["pos"] = word.part_of_speech
    if word.is_name:
        payload["isName"] = True
    if word.name_type:
        payload["nameType"] = word.name_type
    if word.breakdown:
        payload["breakdown"] = [{"c": g.character, "m": g.meaning} for g in word.breakdown]
    if word.freq:
        payload["freq"] = word.freq
    if word.note:
        payload["note"] = word.note
    if word.hsk_level is not None:
        payload["hskLevel"] = word.hsk_level
    if word.tocfl_level is not None:
        payload["tocflLevel"] = word.tocfl_level
    payload.update(word.extra)
    return payload


def chapter_to_payload(chapter: Chapter) -> dict[str, Any]:
    """Serialize a chapter back to the preprocessed chapter JSON shape.

    Keys kept in ``extra`` by the loader (for example ``crossReferences`` on
    verses) are written back so enrichment never drops content.
    """

    return {
        "book": chapter.book,
        "bookId": chapter.book_id,
        "chapter": chapter.chapter,
        "verses": [
            {
                "number": verse.number,
                "text": verse.text,
                "words": [
                    {"chinese": word.chinese, "pinyin": word.pinyin, **_word_metadata(word)}
                    for word in verse.words
                ],
                **verse.extra,
            }
            for verse in chapter.verses
        ],
        "processedAt": chapter.processed_at,
        **chapter.extra,
    }


def _annotated_word_payload(item: AnnotatedWord) -> dict[str, Any]:
    return {
        "chinese": item.word.chinese,
        "pinyin": item.word.pinyin,
        "characters": list(item.characters),
        "syllables": list(item.syllables),
        "alignment": item.tier.value,
        "showPinyin": item.show_pinyin,
        **_word_metadata(item.word),
    }


def annotated_chapter_to_payload(chapter: AnnotatedChapter) -> dict[str, Any]:
    """Serialize an annotated chapter to the rendering JSON shape."""

    return {
        "book": chapter.book,
        "bookId": chapter.book_id,
        "chapter": chapter.chapter,
        "pinyinLevel": chapter.pinyin_level,
        "verses": [
            {
                "number": verse.number,
                "text": verse.text,
                "words": [_annotated_word_payload(item) for item in verse.words],
                **verse.extra,
            }
            for verse in chapter.verses
        ],
    }


def build_manifest(
    chapters: Iterable[Chapter | AnnotatedChapter], generated_at: str
) -> dict[str, Any]:
    """Build the manifest listing available books and chapters.

    ``chapterCount`` is the number of chapters present in ``chapters``, not
    the canonical length of the book.

    Args:
        chapters: Chapters present in the output tree.
        generated_at: ISO-8601 timestamp recorded in the manifest.

    Returns:
        Manifest payload with books keyed by ``bookId``.
    """

    books: dict[str, dict[str, Any]] = {}
    for chapter in chapters:
        book = books.setdefault(
            chapter.book_id,
            {"bookId": chapter.book_id, "bookName": chapter.book, "chapterCount": 0, "chapters": []},
        )
        if chapter.chapter not in book["chapters"]:
            book["chapters"].append(chapter.chapter)

    for book in books.values():
        book["chapters"].sort()
        book["chapterCount"] = len(book["chapters"])

    return {
        "version": MANIFEST_VERSION,
        "generatedAt": generated_at,
        "books": {book_id: books[book_id] for book_id in sorted(books)},
    }
