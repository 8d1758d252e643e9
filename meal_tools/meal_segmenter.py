# meal_tools/meal_segmenter.py
"""
MealText — Meal Segmenter Tool
==============================
Splits a normalized meal description into independent food-item segments.

Explicit separators: + , / | newline, the words และ / กับ / and / with,
then runs of two or more spaces.

Implicit combination: informal Thai often juxtaposes a dish and an egg
without punctuation ("กะเพราไก่ ไข่ 2 ฟอง"), so a segment is split once in
front of an egg keyword that does not start the segment. Only the egg family
triggers this split.
"""

import re
from typing import List

from meal_tools.meal_vocabulary import EGG_KEYWORD_PATTERN


# =============================================================================
# PATTERNS
# =============================================================================
SEPARATOR_RE = re.compile(
    r"\s*(?:\+|,|/|\||\n|และ|กับ)\s*|\s+(?:and|with)\s+",
    re.IGNORECASE,
)
WIDE_GAP_RE = re.compile(r"\s{2,}")
EGG_KEYWORD_RE = re.compile(EGG_KEYWORD_PATTERN, re.IGNORECASE)


# =============================================================================
# TOOLS
# =============================================================================
def split_meal_text(text: str) -> List[str]:
    """Split on explicit separators and wide gaps; returns trimmed, non-empty segments."""
    if not text or not text.strip():
        return []

    segments: List[str] = []
    for part in SEPARATOR_RE.split(text):
        for piece in WIDE_GAP_RE.split(part):
            piece = piece.strip()
            if piece:
                segments.append(piece)
    return segments


def split_implicit_combo(segment: str) -> List[str]:
    """
    Split "<dish> <egg keyword> ..." into two segments.

    Example:
        >>> split_implicit_combo("กะเพราไก่ ไข่ 2 ฟอง")
        ['กะเพราไก่', 'ไข่ 2 ฟอง']
        >>> split_implicit_combo("ไข่ดาว 2 ฟอง")
        ['ไข่ดาว 2 ฟอง']
    """
    s = " ".join(segment.split())
    if not s:
        return []

    match = EGG_KEYWORD_RE.search(s)
    if match and match.start() > 0:
        left = s[:match.start()].strip()
        right = s[match.start():].strip()
        if left and right:
            return [left, right]
    return [s]


def segment_meal_text(text: str) -> List[str]:
    """Explicit split followed by the implicit-combination heuristic."""
    segments: List[str] = []
    for part in split_meal_text(text):
        segments.extend(split_implicit_combo(part))
    return segments


__all__ = [
    "split_meal_text",
    "split_implicit_combo",
    "segment_meal_text",
]
