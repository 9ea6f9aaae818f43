"""Unit tests for HSK/TOCFL proficiency lookups."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bible_pinyin.proficiency.lookup import (
    ProficiencyRepository,
    combined_level,
    frequency_from_combined_level,
    parse_tocfl_lines,
    should_update_freq,
)


def _write(path: Path, text: str) -> Path:
    """Write helper for fixture files in tmp directories."""

    path.write_text(text, encoding="utf-8")
    return path


def _hsk_tsv(tmp_path: Path) -> Path:
    return _write(
        tmp_path / "hsk.tsv",
        "\n".join(
            [
                "word_index\tlevel\tword\tpinyin\ttraditional_cc-cedict",
                "1\t1\t爱\tài\t愛",
                "2\t3\t爱\tài\t愛",
                "3\t7-9\t恩典\tēndiǎn\t恩典",
                "4\t2\t里\tlǐ\t裏/裡",
                "5\tx\t坏\thuài\t壞",
            ]
        )
        + "\n",
    )


def _tocfl_jsonl(tmp_path: Path) -> Path:
    lines = [
        json.dumps({"text": "愛", "text_alt": ["爱"], "tocfl_level": 2}, ensure_ascii=False),
        "not json",
        json.dumps({"text": "愛", "tocfl_level": 5}, ensure_ascii=False),
        json.dumps({"text": "福音", "text_alt": [], "tocfl_level": 6}, ensure_ascii=False),
    ]
    return _write(tmp_path / "tocfl.jsonl", "\n".join(lines) + "\n")


def test_combined_level_scales_and_clamps() -> None:
    assert combined_level(None, None) == 8
    assert combined_level(1, None) == 1
    assert combined_level(3, None) == 4
    assert combined_level(6, None) == 7
    assert combined_level(None, 5) == 5
    assert combined_level(2, 2) == 2
    assert combined_level(6, 7) == 7


def test_frequency_tags_from_combined_level() -> None:
    assert frequency_from_combined_level(1) == "common"
    assert frequency_from_combined_level(3) == "common"
    assert frequency_from_combined_level(4) == "uncommon"
    assert frequency_from_combined_level(6) == "rare"


def test_should_update_freq_only_upgrades() -> None:
    assert should_update_freq("common", 4)
    assert not should_update_freq("common", 3)
    assert should_update_freq("uncommon", 6)
    assert not should_update_freq("rare", 10)


def test_parse_tocfl_lines_first_band_wins_and_skips_bad_lines() -> None:
    mapping = parse_tocfl_lines(
        [
            '{"text": "愛", "text_alt": ["爱"], "tocfl_level": 2}',
            "",
            "{broken",
            '{"text": "愛", "tocfl_level": 5}',
            '{"text": "神", "tocfl_level": "3"}',
        ]
    )

    assert mapping == {"愛": 2, "爱": 2}


def test_repository_lookup_merges_both_sources(tmp_path: Path) -> None:
    repo = ProficiencyRepository(hsk_path=_hsk_tsv(tmp_path), tocfl_path=_tocfl_jsonl(tmp_path))

    love = repo.lookup("愛")
    assert (love.hsk_level, love.tocfl_level) == (1, 2)
    assert love.combined_level == 2
    assert love.has_level

    assert repo.lookup("恩典").hsk_level == 6
    assert repo.lookup("裡").hsk_level == 2
    assert repo.lookup("壞").hsk_level is None

    gospel = repo.lookup("福音")
    assert (gospel.hsk_level, gospel.tocfl_level, gospel.combined_level) == (None, 6, 6)

    unknown = repo.lookup("哈利路亞")
    assert not unknown.has_level
    assert unknown.combined_level == 8


def test_repository_without_sources_knows_nothing() -> None:
    info = ProficiencyRepository().lookup("愛")

    assert info.hsk_level is None
    assert info.tocfl_level is None


def test_repository_raises_for_missing_files(tmp_path: Path) -> None:
    repo = ProficiencyRepository(hsk_path=tmp_path / "missing.tsv")

    with pytest.raises(FileNotFoundError):
        repo.lookup("愛")
