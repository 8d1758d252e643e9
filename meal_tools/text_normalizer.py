# meal_tools/text_normalizer.py
"""
MealText — Text Normalizer Tool
===============================
Canonicalizes free-form meal text before segmentation:

1. Removes zero-width characters
2. Converts Thai digits (๐-๙) to ASCII digits
3. Separates a digit from a directly following letter ("2ฟอง" -> "2 ฟอง")
4. Spells standalone number words as digits ("ไข่ สอง ฟอง" -> "ไข่ 2 ฟอง")
5. Collapses whitespace runs and trims

This is a pure text-processing tool (no AI required). It is total:
any input, including None, yields a string.
"""

import re
from typing import Optional

from meal_tools.meal_vocabulary import NUMBER_WORDS, THAI_DIGITS


# =============================================================================
# PATTERNS
# =============================================================================
ZERO_WIDTH_RE = re.compile("[\u200B-\u200D\uFEFF]")
WHITESPACE_RE = re.compile(r"\s+")

# Thai block (ก-๛) or Latin letters
DIGIT_LETTER_RE = re.compile(r"([0-9])(?=[ก-๛a-zA-Z])")

NUMBER_WORD_RES = [
    (re.compile(rf"(^|\s){re.escape(word)}(?=\s|$)", re.IGNORECASE), str(value))
    for word, value in NUMBER_WORDS.items()
]


# =============================================================================
# HELPERS
# =============================================================================
def normalize_whitespace(text: Optional[str]) -> str:
    """Drop zero-width characters, collapse whitespace runs, trim."""
    if not text:
        return ""
    text = ZERO_WIDTH_RE.sub("", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def replace_number_words(text: str) -> str:
    """Replace number words bounded by whitespace or string edges with digits."""
    for pattern, digits in NUMBER_WORD_RES:
        text = pattern.sub(lambda m, d=digits: f"{m.group(1)}{d}", text)
    return text


# =============================================================================
# MAIN TOOL: normalize_text
# =============================================================================
def normalize_text(text: Optional[str]) -> str:
    """
    Normalize a meal description for downstream regex matching.

    Args:
        text: Raw user text. None is treated as empty.

    Returns:
        Normalized text. normalize_text(normalize_text(x)) == normalize_text(x).

    Example:
        >>> normalize_text("ไข่ต้ม  สอง\\nฟอง")
        'ไข่ต้ม 2 ฟอง'
        >>> normalize_text("เวย์ 1สกู๊ป")
        'เวย์ 1 สกู๊ป'
    """
    out = normalize_whitespace(text)
    if not out:
        return ""

    out = out.translate(THAI_DIGITS)
    # Split digits from letters before spelling out number words, so a word
    # freed by the split ("2หนึ่ง") is converted in the same pass.
    out = DIGIT_LETTER_RE.sub(r"\1 ", out)
    out = replace_number_words(out)

    return normalize_whitespace(out)


__all__ = [
    "normalize_text",
    "normalize_whitespace",
    "replace_number_words",
]
