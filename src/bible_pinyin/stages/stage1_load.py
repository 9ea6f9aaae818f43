"""Stage 1: Load preprocessed chapter JSON into immutable chapter records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from bible_pinyin.io.chapter_json import discover_chapter_files, read_json
from bible_pinyin.models import Chapter, ChapterWord, CharacterGloss, Verse

logger = logging.getLogger(__name__)

WORD_KEYS = frozenset(
    {
        "chinese",
        "pinyin",
        "definition",
        "pos",
        "partOfSpeech",
        "hskLevel",
        "tocflLevel",
        "freq",
        "isName",
        "nameType",
        "breakdown",
        "note",
    }
)
VERSE_KEYS = frozenset({"number", "text", "words"})
CHAPTER_KEYS = frozenset({"book", "bookId", "chapter", "verses", "processedAt"})


def _extra(payload: Mapping[str, Any], known: frozenset[str]) -> dict[str, Any]:
    """Return the keys of ``payload`` not in ``known``, in file order."""

    return {key: value for key, value in payload.items() if key not in known}


def _require(payload: Mapping[str, Any], key: str, kind: type, where: str) -> Any:
    """Fetch a required key and check its JSON type.

    Raises:
        ValueError: If the key is missing or has the wrong type.
    """

    if key not in payload:
        raise ValueError(f"{where}: missing '{key}'")
    value = payload[key]
    # bool is an int subclass; chapter and verse numbers must be real ints.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"{where}: '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def _optional_int(payload: Mapping[str, Any], key: str, where: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where}: '{key}' must be int or null, got {type(value).__name__}")
    return value


def _parse_breakdown(items: Any, where: str) -> tuple[CharacterGloss, ...]:
    if not items:
        return ()
    if not isinstance(items, list):
        raise ValueError(f"{where}: 'breakdown' must be a list")
    glosses: list[CharacterGloss] = []
    for item in items:
        if isinstance(item, Mapping) and item.get("c"):
            glosses.append(CharacterGloss(character=str(item["c"]), meaning=str(item.get("m", ""))))
    return tuple(glosses)


def word_from_payload(payload: Mapping[str, Any], where: str) -> ChapterWord:
    """Convert one decoded word object into a ``ChapterWord``.

    Args:
        payload: Word object from a verse's ``words`` list.
        where: Location prefix for error messages.

    Returns:
        Parsed word; a missing ``pinyin`` is read as punctuation.

    Raises:
        ValueError: If required fields are missing or mistyped.
    """

    if not isinstance(payload, Mapping):
        raise ValueError(f"{where}: word must be an object")
    return ChapterWord(
        chinese=_require(payload, "chinese", str, where),
        pinyin=str(payload.get("pinyin") or ""),
        definition=str(payload.get("definition") or ""),
        part_of_speech=str(payload.get("pos") or payload.get("partOfSpeech") or ""),
        hsk_level=_optional_int(payload, "hskLevel", where),
        tocfl_level=_optional_int(payload, "tocflLevel", where),
        freq=payload.get("freq") or None,
        is_name=bool(payload.get("isName", False)),
        name_type=payload.get("nameType") or None,
        breakdown=_parse_breakdown(payload.get("breakdown"), where),
        note=str(payload.get("note") or ""),
        extra=_extra(payload, WORD_KEYS),
    )


def chapter_from_payload(payload: Any, source: str) -> Chapter:
    """Convert a decoded chapter JSON document into a ``Chapter``.

    Args:
        payload: Decoded JSON document.
        source: File name or label used in error messages.

    Returns:
        Parsed chapter with verses and words in file order.

    Raises:
        ValueError: If the document does not have the chapter shape.
    """

    if not isinstance(payload, Mapping):
        raise ValueError(f"{source}: chapter document must be an object")

    verses: list[Verse] = []
    for v_idx, verse_payload in enumerate(_require(payload, "verses", list, source), start=1):
        where = f"{source} verse[{v_idx}]"
        if not isinstance(verse_payload, Mapping):
            raise ValueError(f"{where}: verse must be an object")
        words_payload = verse_payload.get("words") or []
        if not isinstance(words_payload, list):
            raise ValueError(f"{where}: 'words' must be a list")
        words = tuple(
            word_from_payload(word, f"{where} word[{w_idx}]")
            for w_idx, word in enumerate(words_payload, start=1)
        )
        verses.append(
            Verse(
                number=_require(verse_payload, "number", int, where),
                text=str(verse_payload.get("text") or ""),
                words=words,
                extra=_extra(verse_payload, VERSE_KEYS),
            )
        )

    return Chapter(
        book=str(payload.get("book") or payload.get("bookId") or ""),
        book_id=_require(payload, "bookId", str, source),
        chapter=_require(payload, "chapter", int, source),
        verses=tuple(verses),
        processed_at=str(payload.get("processedAt") or ""),
        extra=_extra(payload, CHAPTER_KEYS),
    )


def load_chapters(root: Path, book_ids: Sequence[str] = ()) -> list[Chapter]:
    """Load every chapter file below ``root``.

    Args:
        root: Preprocessed content directory.
        book_ids: Optional book directory filter.

    Returns:
        Chapters ordered by book then chapter number.
    """

    chapters: list[Chapter] = []
    for path in discover_chapter_files(root, book_ids):
        chapters.append(chapter_from_payload(read_json(path), source=str(path)))
    logger.info("Loaded %d chapter(s) from %s", len(chapters), root)
    return chapters
