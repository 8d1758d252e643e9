# meal_tools/name_canonicalizer.py
"""
MealText — Name Canonicalizer Tool
==================================
Turns a meal segment into a canonical food name:

- strips multiplier tokens, standalone numbers and unit aliases
- strips hedging fillers (ประมาณ, about...) and addition words (เพิ่ม, extra...)
- maps spelling variants through FOOD_ALIASES
  (กะเพราไก่ / ข้าวผัดกะเพราไก่ -> ข้าวกะเพราไก่, เวย์ -> เวย์โปรตีน)

Egg preparations keep distinct names: ไข่ดาว, ไข่ต้ม and ไข่เจียว are never merged.
The canonicalizer never returns an empty name for a non-empty segment.
"""

import re
from typing import List

from meal_tools.meal_vocabulary import (
    ADDITION_RE,
    FILLER_RE,
    FOOD_ALIAS_RULES,
    NUMBER_PATTERN,
    UNIT_TOKEN_RE,
)
from meal_tools.text_normalizer import normalize_whitespace


# =============================================================================
# PATTERNS
# =============================================================================
MULTIPLIER_TOKEN_RE = re.compile(rf"(?<![A-Za-z])[x×]\s*{NUMBER_PATTERN}(?![0-9])", re.IGNORECASE)
NUMBER_TOKEN_RE = re.compile(rf"(?<![0-9.]){NUMBER_PATTERN}(?![0-9])")
MODIFIER_RE = re.compile(rf"(?:{ADDITION_RE.pattern})\s*[^\s0-9]*", re.IGNORECASE)


# =============================================================================
# HELPERS
# =============================================================================
def apply_food_aliases(name: str) -> str:
    """Replace known spelling variants with their canonical form, in table order."""
    out = name
    for pattern, canonical in FOOD_ALIAS_RULES:
        out = pattern.sub(canonical, out)
    return out


def strip_quantity_tokens(segment: str) -> str:
    """Remove multipliers, numbers, unit aliases and filler words."""
    s = MULTIPLIER_TOKEN_RE.sub(" ", segment)
    # Units before numbers: number-bound aliases (กก, g, l) need the digit
    # still in place to be recognised.
    s = UNIT_TOKEN_RE.sub(" ", s)
    s = NUMBER_TOKEN_RE.sub(" ", s)
    s = FILLER_RE.sub(" ", s)
    s = ADDITION_RE.sub(" ", s)
    return normalize_whitespace(s)


# =============================================================================
# MAIN TOOLS
# =============================================================================
def canonicalize_name(segment: str) -> str:
    """
    Canonical food name for a segment.

    Example:
        >>> canonicalize_name("เวย์ 1 สกู๊ป")
        'เวย์โปรตีน'
        >>> canonicalize_name("2 ฟอง")
        '2 ฟอง'
    """
    raw = normalize_whitespace(segment)
    if not raw:
        return ""

    cleaned = strip_quantity_tokens(raw)
    if not cleaned:
        return raw

    name = normalize_whitespace(apply_food_aliases(cleaned))
    return name or raw


def extract_modifiers(segment: str) -> List[str]:
    """
    Addition hints found in a segment ("เพิ่มไข่ดาว", "extra cheese").

    Example:
        >>> extract_modifiers("กะเพราหมูสับ เพิ่มไข่ดาว")
        ['เพิ่มไข่ดาว']
    """
    if not segment:
        return []
    return [
        normalize_whitespace(m.group(0))
        for m in MODIFIER_RE.finditer(segment)
        if m.group(0).strip()
    ]


__all__ = [
    "canonicalize_name",
    "extract_modifiers",
    "apply_food_aliases",
    "strip_quantity_tokens",
]
