"""Unit tests for chapter JSON payloads and the manifest."""

from __future__ import annotations

import json
from pathlib import Path

from bible_pinyin.io.chapter_json import (
    annotated_chapter_to_payload,
    build_manifest,
    chapter_path,
    write_json,
)
from bible_pinyin.models import (
    AlignmentTier,
    AnnotatedChapter,
    AnnotatedVerse,
    AnnotatedWord,
    Chapter,
    ChapterWord,
)


def test_annotated_payload_adds_alignment_fields() -> None:
    item = AnnotatedWord(
        ChapterWord("福音", "fúyīn", freq="biblical", tocfl_level=6),
        ("福", "音"),
        ("fú", "yīn"),
        AlignmentTier.PHONETIC,
        True,
    )
    chapter = AnnotatedChapter("馬可福音", "mark", 1, "hsk2+", (AnnotatedVerse(1, "福音", (item,)),))

    payload = annotated_chapter_to_payload(chapter)

    assert payload["pinyinLevel"] == "hsk2+"
    assert payload["verses"][0]["words"][0] == {
        "chinese": "福音",
        "pinyin": "fúyīn",
        "characters": ["福", "音"],
        "syllables": ["fú", "yīn"],
        "alignment": "phonetic",
        "showPinyin": True,
        "definition": "",
        "freq": "biblical",
        "tocflLevel": 6,
    }


def test_build_manifest_groups_and_sorts_chapters() -> None:
    chapters = [
        Chapter("馬可福音", "mark", 2, ()),
        Chapter("使徒行傳", "acts", 1, ()),
        Chapter("馬可福音", "mark", 1, ()),
        Chapter("馬可福音", "mark", 2, ()),
    ]

    manifest = build_manifest(chapters, generated_at="2025-01-01T00:00:00+00:00")

    assert manifest["version"] == "1.0.0"
    assert manifest["generatedAt"] == "2025-01-01T00:00:00+00:00"
    assert list(manifest["books"]) == ["acts", "mark"]
    assert manifest["books"]["mark"] == {
        "bookId": "mark",
        "bookName": "馬可福音",
        "chapterCount": 2,
        "chapters": [1, 2],
    }


def test_write_json_keeps_hanzi_unescaped(tmp_path: Path) -> None:
    path = chapter_path(tmp_path, "mark", 1)

    write_json({"chinese": "福音"}, path)

    text = path.read_text(encoding="utf-8")
    assert "福音" in text
    assert text.endswith("}\n")
    assert json.loads(text) == {"chinese": "福音"}
