"""Learner pinyin levels and the per-word pinyin display policy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PinyinLevel(str, Enum):
    """Reading level chosen by the learner, from show-all to show-none."""

    ALL = "all"
    HSK2 = "hsk2+"
    HSK4 = "hsk4+"
    HSK5 = "hsk5+"
    HSK6 = "hsk6+"
    NONE = "none"


@dataclass(frozen=True)
class PinyinLevelInfo:
    """Display metadata for one ``PinyinLevel``.

    ``min_level_to_show`` is the lowest HSK-scale level that still gets pinyin;
    ``None`` shows every word and 7 hides every word.
    """

    level: PinyinLevel
    chinese: str
    english: str
    pinyin: str
    description: str
    min_level_to_show: int | None


PINYIN_LEVELS: tuple[PinyinLevelInfo, ...] = (
    PinyinLevelInfo(
        PinyinLevel.ALL, "初学", "Beginner", "chūxué", "Show pinyin for all characters", None
    ),
    PinyinLevelInfo(
        PinyinLevel.HSK2,
        "入门",
        "Elementary",
        "rùmén",
        "Hide very basic words (HSK 1, common words)",
        2,
    ),
    PinyinLevelInfo(
        PinyinLevel.HSK4,
        "中级",
        "Intermediate",
        "zhōngjí",
        "Show pinyin for less common words (HSK 4+, rare/biblical)",
        4,
    ),
    PinyinLevelInfo(
        PinyinLevel.HSK5,
        "中高级",
        "Upper-Intermediate",
        "zhōnggāojí",
        "Show pinyin for advanced vocabulary (HSK 5+, rare/biblical)",
        5,
    ),
    PinyinLevelInfo(
        PinyinLevel.HSK6,
        "高级",
        "Advanced",
        "gāojí",
        "Show pinyin only for rare/biblical terms (HSK 6+)",
        6,
    ),
    PinyinLevelInfo(PinyinLevel.NONE, "流利", "Fluent", "liúlì", "No pinyin shown", 7),
)

LEVEL_INFO = {info.level: info for info in PINYIN_LEVELS}

LEVEL_ALIASES = {
    "beginner": PinyinLevel.ALL,
    "beginner_all": PinyinLevel.ALL,
    "show_all": PinyinLevel.ALL,
    "elementary": PinyinLevel.HSK2,
    "intermediate": PinyinLevel.HSK4,
    "upper_intermediate": PinyinLevel.HSK5,
    "advanced": PinyinLevel.HSK6,
    "fluent": PinyinLevel.NONE,
    "fluent_none": PinyinLevel.NONE,
    "show_none": PinyinLevel.NONE,
}

FREQ_TAGS = ("common", "uncommon", "rare", "biblical")

# Frequency tags a learner at each level is assumed to know.
FAMILIAR_FREQS = {
    PinyinLevel.HSK2: frozenset({"common"}),
    PinyinLevel.HSK4: frozenset({"common", "uncommon"}),
    PinyinLevel.HSK5: frozenset({"common", "uncommon"}),
    PinyinLevel.HSK6: frozenset({"common", "uncommon"}),
}


def parse_pinyin_level(value: PinyinLevel | str) -> PinyinLevel:
    """Resolve a level setting from an enum member, value or alias.

    Args:
        value: ``PinyinLevel``, a value such as ``hsk4+``, or an alias such as
            ``intermediate`` or ``fluent_none``.

    Returns:
        The matching ``PinyinLevel``.

    Raises:
        ValueError: If ``value`` names no known level.
    """

    if isinstance(value, PinyinLevel):
        return value

    key = value.strip().lower()
    try:
        return PinyinLevel(key)
    except ValueError:
        pass

    alias = LEVEL_ALIASES.get(key.replace("-", "_"))
    if alias is None:
        choices = ", ".join(level.value for level in PinyinLevel)
        raise ValueError(f"Unknown pinyin level '{value}' (expected one of: {choices}).")
    return alias


def normalize_tocfl_level(tocfl_level: int) -> int:
    """Map a TOCFL band (1-7) onto the HSK 1-6 scale, rounding up."""

    return -(-tocfl_level * 6 // 7)


def effective_level(hsk_level: int | None, tocfl_level: int | None) -> int | None:
    """Return the harder of the HSK and normalized TOCFL levels, if any."""

    levels = []
    if hsk_level is not None:
        levels.append(hsk_level)
    if tocfl_level is not None:
        levels.append(normalize_tocfl_level(tocfl_level))
    return max(levels) if levels else None


def should_show_pinyin(
    level: PinyinLevel | str,
    hsk_level: int | None = None,
    freq: str | None = None,
    tocfl_level: int | None = None,
) -> bool:
    """Decide whether a word gets pinyin at the learner's level.

    A word is hidden once either its numeric level falls below the level
    threshold or its frequency tag is familiar at this level. Words without
    any metadata are shown.

    Args:
        level: Learner level setting.
        hsk_level: HSK level 1-6 of the word.
        freq: Frequency tag (``common``, ``uncommon``, ``rare``, ``biblical``).
        tocfl_level: TOCFL band 1-7 of the word.

    Returns:
        ``True`` when pinyin should be rendered above the word.
    """

    level = parse_pinyin_level(level)
    if level is PinyinLevel.ALL:
        return True
    if level is PinyinLevel.NONE:
        return False

    threshold = LEVEL_INFO[level].min_level_to_show
    numeric = effective_level(hsk_level, tocfl_level)
    if numeric is not None and threshold is not None and numeric < threshold:
        return False
    if freq is not None and freq in FAMILIAR_FREQS.get(level, frozenset()):
        return False
    return True
