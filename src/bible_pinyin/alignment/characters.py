"""Character splitting paired with pinyin alignment."""

from __future__ import annotations

import re

CJK_RE = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\U00020000-\U0002fa1f]")


def split_characters(text: str) -> list[str]:
    """Split text into code points, dropping all whitespace.

    ``str.isspace`` covers the ideographic space U+3000 used as padding in
    Chinese text. The length of the result is the character count passed to
    :func:`bible_pinyin.alignment.syllables.align_pinyin` for the same word.

    Args:
        text: Chinese word as it will be rendered.

    Returns:
        Ordered list of non-whitespace characters.
    """

    return [char for char in text if not char.isspace()]


def is_hanzi(char: str) -> bool:
    """Check if a single character is a CJK ideograph."""

    return bool(CJK_RE.fullmatch(char))


def contains_hanzi(text: str) -> bool:
    return any(is_hanzi(char) for char in text)
