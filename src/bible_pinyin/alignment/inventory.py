"""Valid pinyin syllable inventory used for alignment diagnostics."""

from __future__ import annotations

import functools
import re

from pypinyin import constants as pypinyin_constants

TONE_MARKS = {
    "ā": ("a", 1),
    "á": ("a", 2),
    "ǎ": ("a", 3),
    "à": ("a", 4),
    "ē": ("e", 1),
    "é": ("e", 2),
    "ě": ("e", 3),
    "è": ("e", 4),
    "ī": ("i", 1),
    "í": ("i", 2),
    "ǐ": ("i", 3),
    "ì": ("i", 4),
    "ō": ("o", 1),
    "ó": ("o", 2),
    "ǒ": ("o", 3),
    "ò": ("o", 4),
    "ū": ("u", 1),
    "ú": ("u", 2),
    "ǔ": ("u", 3),
    "ù": ("u", 4),
    "ǖ": ("ü", 1),
    "ǘ": ("ü", 2),
    "ǚ": ("ü", 3),
    "ǜ": ("ü", 4),
    "ń": ("n", 2),
    "ň": ("n", 3),
    "ǹ": ("n", 4),
    "ḿ": ("m", 2),
    "ê": ("e", 5),
}

EXTRA_VALID_SYLLABLES = {"m", "n", "ng", "hm", "hng", "r"}
TONE_DIGIT_RE = re.compile(r"[1-5]$")


def strip_tone_marks(syllable: str) -> str:
    """Normalize one pinyin chunk by removing tone marks and lowercasing.

    Args:
        syllable: Pinyin chunk that may contain tone-marked vowels.

    Returns:
        Tone-free lowercase pinyin where ``v`` is normalized to ``ü``.
    """

    chars: list[str] = []
    for ch in syllable.lower():
        if ch in TONE_MARKS:
            chars.append(TONE_MARKS[ch][0])
        elif ch == "v":
            chars.append("ü")
        else:
            chars.append(ch)
    return "".join(chars)


@functools.lru_cache(maxsize=None)
def valid_syllables() -> frozenset[str]:
    """Collect toneless syllables from the pypinyin character dictionary.

    Returns:
        Syllables including erhua ``+r`` forms and syllabic interjections.
    """

    syllables: set[str] = set()
    for value in pypinyin_constants.PINYIN_DICT.values():
        for item in str(value).split(","):
            base = strip_tone_marks(item.strip())
            if base:
                syllables.add(base)

    syllables.update({s + "r" for s in syllables if not s.endswith("r")})
    syllables.update(EXTRA_VALID_SYLLABLES)
    return frozenset(syllables)


def is_valid_syllable(text: str) -> bool:
    """Return whether ``text`` is one known pinyin syllable.

    Tone marks, a trailing tone digit and case are ignored.
    """

    base = TONE_DIGIT_RE.sub("", strip_tone_marks(text.strip()))
    return bool(base) and base in valid_syllables()
