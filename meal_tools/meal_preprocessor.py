# meal_tools/meal_preprocessor.py
"""
MealText — Meal Preprocessor Tool
=================================
Parses a free-form Thai/English meal description into structured items.

Pipeline:
    normalize_text -> segment_meal_text -> per segment:
        extract_quantity + canonicalize_name + extract_modifiers

The result is used as a hint in the outbound model request and as direct
input to the fallback estimator. Never fails: unparseable text yields
warnings, not exceptions.
"""

import logging
import os
from typing import List

from dotenv import load_dotenv

from meal_tools.meal_segmenter import segment_meal_text
from meal_tools.name_canonicalizer import canonicalize_name, extract_modifiers
from meal_tools.quantity_extractor import extract_quantity
from meal_tools.schemas import ParsedItem, PreprocessResult
from meal_tools.text_normalizer import normalize_text, normalize_whitespace

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================
load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


PREPROCESS_CONFIG = {
    "max_input_chars": _env_int("MEALTEXT_MAX_INPUT_CHARS", 2000),
}

WARNING_NO_ITEMS = "ไม่สามารถแยกรายการอาหารได้จากข้อความนี้"
WARNING_DEFAULTED_QTY = "ไม่พบจำนวนชัดเจนในบางรายการ: สมมติเป็น 1 หน่วยมาตรฐาน"


# =============================================================================
# MAIN TOOL: normalize_and_parse_meal
# =============================================================================
def normalize_and_parse_meal(text: str) -> PreprocessResult:
    """
    Normalize and parse a meal description into food items.

    Args:
        text: Natural language description of a meal.
              Examples:
              - "กะเพราไก่ ไข่ 2 ฟอง"
              - "ข้าวมันไก่ + น้ำอัดลม 1 กระป๋อง"
              - "เวย์ 1 สกู๊ป"

    Returns:
        PreprocessResult with:
        - normalized_text: the canonicalized input
        - items: one ParsedItem per segment, in input order
        - warnings: advisory messages (no items found, or quantities
          defaulted while several items were listed)

    Example:
        >>> r = normalize_and_parse_meal("กะเพราไก่ ไข่ 2 ฟอง")
        >>> [(i.canonical_name, i.quantity, i.unit) for i in r.items]
        [('ข้าวกะเพราไก่', 1.0, None), ('ไข่', 2.0, <MealUnit.EGG: 'ฟอง'>)]
    """
    text = text or ""
    max_chars = PREPROCESS_CONFIG["max_input_chars"]
    if max_chars > 0 and len(text) > max_chars:
        logger.warning(f"⚠️ Meal text truncated from {len(text)} to {max_chars} chars")
        text = text[:max_chars]

    normalized_text = normalize_text(text)
    warnings: List[str] = []
    items: List[ParsedItem] = []
    defaulted = 0

    for segment in segment_meal_text(normalized_text):
        raw = normalize_whitespace(segment)
        if not raw:
            continue

        parsed = extract_quantity(raw)
        if not parsed.explicit:
            defaulted += 1

        items.append(ParsedItem(
            raw_segment=raw,
            canonical_name=canonicalize_name(raw) or raw,
            quantity=parsed.quantity,
            unit=parsed.unit,
            modifiers=extract_modifiers(raw),
        ))

    if not items and normalized_text:
        warnings.append(WARNING_NO_ITEMS)

    if len(items) >= 2 and defaulted > 0:
        warnings.append(WARNING_DEFAULTED_QTY)

    logger.debug(f"🍽️ Parsed {len(items)} item(s) from '{normalized_text[:80]}'")

    return PreprocessResult(
        normalized_text=normalized_text,
        items=items,
        warnings=warnings,
    )


__all__ = [
    "normalize_and_parse_meal",
    "PREPROCESS_CONFIG",
    "WARNING_NO_ITEMS",
    "WARNING_DEFAULTED_QTY",
]
