# meal_tools/quantity_extractor.py
"""
MealText — Quantity/Unit Extractor Tool
=======================================
Determines the quantity and canonical unit of one meal segment.

Ordered cascade, first match wins:
    1. "<number> <unit>"        "ไข่ 2 ฟอง", "นม 250 ml"
    2. multiplier               "x2", "× 3"
    3. leading number           "2 ข้าวมันไก่"
    4. any number               "ไข่ต้ม 2"
    5. number word + unit       "ไข่สองฟอง" (un-normalized input)

A unit-qualified number is the strongest evidence of intent; a bare number
elsewhere in the segment is the weakest. No match -> quantity 1, no unit.
"""

import math
import re
from typing import Optional

from meal_tools.meal_vocabulary import (
    NUMBER_PATTERN,
    NUMBER_WORD_ALTERNATION,
    NUMBER_WORDS,
    UNIT_ALTERNATION,
    UNIT_TOKEN_RE,
    resolve_unit,
)
from meal_tools.schemas import MealUnit, ParsedQuantity


# =============================================================================
# CASCADE PATTERNS
# =============================================================================
NUMBER_UNIT_RE = re.compile(
    rf"(?<![0-9.])({NUMBER_PATTERN})\s*({UNIT_ALTERNATION})", re.IGNORECASE
)
MULTIPLIER_RE = re.compile(rf"(?<![A-Za-z])[x×]\s*({NUMBER_PATTERN})", re.IGNORECASE)
LEADING_NUMBER_RE = re.compile(rf"^({NUMBER_PATTERN})(?![0-9])")
ANY_NUMBER_RE = re.compile(rf"(?<![0-9.])({NUMBER_PATTERN})")
NUMBER_WORD_UNIT_RE = re.compile(
    rf"({NUMBER_WORD_ALTERNATION})\s*({UNIT_ALTERNATION})", re.IGNORECASE
)


# =============================================================================
# HELPERS
# =============================================================================
def detect_unit(text: str) -> Optional[MealUnit]:
    """Return the canonical unit of the leftmost unit alias in text, if any."""
    if not text:
        return None
    match = UNIT_TOKEN_RE.search(text)
    return resolve_unit(match.group(0)) if match else None


def _quantity(value: float, unit: Optional[MealUnit]) -> ParsedQuantity:
    if value > 0 and math.isfinite(value):
        return ParsedQuantity(quantity=value, unit=unit, explicit=True)
    # Zero or overflowing quantities are not a meal; fall back to one standard unit
    return ParsedQuantity(quantity=1.0, unit=unit, explicit=False)


# =============================================================================
# MAIN TOOL: extract_quantity
# =============================================================================
def extract_quantity(segment: str) -> ParsedQuantity:
    """
    Extract quantity and unit from a single meal segment.

    Args:
        segment: One segment, normally already passed through normalize_text().

    Returns:
        ParsedQuantity with quantity > 0. `explicit` is False when no number
        was found and the quantity defaulted to 1.

    Example:
        >>> extract_quantity("ไข่ 2 ฟอง")
        ParsedQuantity(quantity=2.0, unit=<MealUnit.EGG: 'ฟอง'>, explicit=True)
    """
    s = (segment or "").strip()
    if not s:
        return ParsedQuantity()

    unit = detect_unit(s)

    # 1. Explicit number + unit
    match = NUMBER_UNIT_RE.search(s)
    if match:
        return _quantity(float(match.group(1)), resolve_unit(match.group(2)) or unit)

    # 2. Multiplier notation
    match = MULTIPLIER_RE.search(s)
    if match:
        return _quantity(float(match.group(1)), unit)

    # 3. Leading number
    match = LEADING_NUMBER_RE.search(s)
    if match:
        return _quantity(float(match.group(1)), unit)

    # 4. Any number
    match = ANY_NUMBER_RE.search(s)
    if match:
        return _quantity(float(match.group(1)), unit)

    # 5. Number word + unit
    match = NUMBER_WORD_UNIT_RE.search(s)
    if match:
        value = NUMBER_WORDS.get(match.group(1).lower())
        if value is not None:
            return _quantity(float(value), resolve_unit(match.group(2)) or unit)

    return ParsedQuantity(quantity=1.0, unit=unit, explicit=False)


__all__ = [
    "extract_quantity",
    "detect_unit",
]
