"""Pinyin alignment and display policy for bilingual scripture chapters."""

from .alignment.characters import split_characters
from .alignment.syllables import align_pinyin
from .proficiency.levels import PinyinLevel, should_show_pinyin

__all__ = ["align_pinyin", "split_characters", "should_show_pinyin", "PinyinLevel"]
