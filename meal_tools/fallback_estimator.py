# meal_tools/fallback_estimator.py
"""
MealText — Fallback Nutrition Estimator Tool
============================================
Deterministic nutrition numbers for recognised foods, used only when the
upstream model answered with a structurally valid but all-zero/all-null
result.

Only foods in FALLBACK_NUTRITION are estimated. Anything else is left out
of the output so the caller knows it still needs the model's judgment.
"""

import logging
import math
import os
import re
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from meal_tools.meal_vocabulary import NUMBER_PATTERN
from meal_tools.schemas import (
    Confidence,
    FallbackEstimate,
    MealUnit,
    ParsedItem,
    PreprocessResult,
)
from meal_tools.text_normalizer import normalize_text

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================
load_dotenv()


def _env_number(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


FALLBACK_CONFIG = {
    "round_digits": int(_env_number("MEALTEXT_FALLBACK_ROUND_DIGITS", 1)),
    "max_scale_factor": _env_number("MEALTEXT_FALLBACK_MAX_SCALE", 20.0),
}


# =============================================================================
# FOOD DATABASE — per one standard serving
# =============================================================================
# kind "unit": single-unit foods (eggs, scoops) whose baseline varies little.
# kind "serving": rice and composite dishes, scaled per plate/serving.
# match "prefix": protein variants (ข้าวกะเพราไก่, ข้าวกะเพราหมู) share the baseline.
FALLBACK_NUTRITION: Dict[str, Dict[str, Any]] = {
    "ไข่ต้ม": {
        "calories": 72, "protein": 6.3, "carbs": 0.4, "fat": 4.8,
        "per": "1 ฟอง", "grams": 50, "kind": "unit", "match": "exact",
    },
    "ไข่ดาว": {
        "calories": 110, "protein": 6.3, "carbs": 0.4, "fat": 9.0,
        "per": "1 ฟอง", "grams": 50, "kind": "unit", "match": "exact",
    },
    "ไข่เจียว": {
        "calories": 160, "protein": 6.5, "carbs": 0.6, "fat": 14.5,
        "per": "1 ฟอง", "grams": 60, "kind": "unit", "match": "exact",
    },
    "ไข่": {
        "calories": 72, "protein": 6.3, "carbs": 0.4, "fat": 4.8,
        "per": "1 ฟอง", "grams": 50, "kind": "unit", "match": "exact",
    },
    "เวย์โปรตีน": {
        "calories": 120, "protein": 24.0, "carbs": 3.0, "fat": 1.5,
        "per": "1 สกู๊ป", "grams": 30, "kind": "unit", "match": "exact",
    },
    "ข้าวสวย": {
        "calories": 210, "protein": 4.3, "carbs": 45.0, "fat": 0.4,
        "per": "1 จาน", "grams": 160, "kind": "serving", "match": "exact",
    },
    "ข้าวกะเพรา": {
        "calories": 580, "protein": 25.0, "carbs": 70.0, "fat": 21.0,
        "per": "1 จาน", "grams": 350, "kind": "serving", "match": "prefix",
    },
}

# Volume/spoon measures cannot be mapped onto these baselines
MEASURE_UNITS = {MealUnit.TABLESPOON, MealUnit.TEASPOON, MealUnit.MILLILITER, MealUnit.LITER}

GRAM_MENTION_RE = re.compile(
    rf"({NUMBER_PATTERN})\s*(กิโลกรัม|กรัม|kg|grams?|g)(?![A-Za-z])", re.IGNORECASE
)

NOTE_FALLBACK = "ประมาณค่าจากฐานข้อมูลสำรอง เนื่องจากผลจาก AI เป็นศูนย์ทั้งหมด"
NOTE_GRAMS = "คำนวณตามน้ำหนักที่ระบุ ({grams:g} กรัม)"
NOTE_MEASURE = "หน่วยตวงไม่ตรงกับฐานข้อมูล สมมติ 1 หน่วยมาตรฐาน"
NOTE_CAPPED = "ปริมาณสูงผิดปกติ จำกัดไว้ที่ {factor:g} เท่าของหน่วยมาตรฐาน"


# =============================================================================
# HELPERS
# =============================================================================
def match_food(canonical_name: str) -> Optional[Tuple[str, Dict[str, Any]]]:
    """Find the table entry for a canonical name (exact first, then prefix)."""
    name = (canonical_name or "").strip()
    if not name:
        return None

    if name in FALLBACK_NUTRITION:
        return name, FALLBACK_NUTRITION[name]

    for key in sorted(FALLBACK_NUTRITION, key=len, reverse=True):
        entry = FALLBACK_NUTRITION[key]
        if entry["match"] == "prefix" and name.startswith(key):
            return key, entry
    return None


def item_grams(item: ParsedItem) -> Optional[float]:
    if item.unit == MealUnit.GRAM:
        return item.quantity
    if item.unit == MealUnit.KILOGRAM:
        return item.quantity * 1000
    return None


def text_grams(text: str) -> Optional[float]:
    """Single explicit gram amount in free text (None if absent or ambiguous)."""
    mentions = GRAM_MENTION_RE.findall(normalize_text(text))
    if len(mentions) != 1:
        return None
    value, unit = mentions[0]
    grams = float(value)
    if unit.lower() in ("kg", "กิโลกรัม"):
        grams *= 1000
    return grams if grams > 0 and math.isfinite(grams) else None


def segment_grams(item: ParsedItem) -> Optional[float]:
    """Weight of an item: its own gram unit, else a gram amount in its segment."""
    return item_grams(item) or text_grams(item.raw_segment)


def _clamp(value: float) -> float:
    return round(max(0.0, float(value)), FALLBACK_CONFIG["round_digits"])


def estimate_item(
    item: ParsedItem,
    grams_hint: Optional[float] = None
) -> Optional[FallbackEstimate]:
    """Estimate one parsed item; None when the food is not in the table."""
    found = match_food(item.canonical_name)
    if found is None:
        return None
    key, entry = found

    notes = [NOTE_FALLBACK]
    grams = segment_grams(item) or grams_hint

    if grams:
        factor = grams / entry["grams"]
        confidence = Confidence.HIGH
        notes.append(NOTE_GRAMS.format(grams=grams))
    elif item.unit in MEASURE_UNITS:
        factor = 1.0
        confidence = Confidence.LOW
        notes.append(NOTE_MEASURE)
    else:
        factor = item.quantity
        confidence = Confidence.HIGH if entry["kind"] == "unit" else Confidence.MEDIUM

    max_factor = FALLBACK_CONFIG["max_scale_factor"]
    if max_factor > 0 and factor > max_factor:
        factor = max_factor
        notes.append(NOTE_CAPPED.format(factor=max_factor))

    if grams:
        label = f"{entry['grams'] * factor:g} กรัม"
    else:
        per_qty, _, per_unit = entry["per"].partition(" ")
        label = f"{float(per_qty) * factor:g} {per_unit} (~{entry['grams'] * factor:g} กรัม)"

    return FallbackEstimate(
        canonical_name=key,
        assumed_serving_label=label,
        calories_kcal=_clamp(entry["calories"] * factor),
        protein_g=_clamp(entry["protein"] * factor),
        carbs_g=_clamp(entry["carbs"] * factor),
        fat_g=_clamp(entry["fat"] * factor),
        confidence=confidence,
        notes=notes,
    )


# =============================================================================
# MAIN TOOL: estimate_fallback_nutrition
# =============================================================================
def estimate_fallback_nutrition(
    preprocess_result: PreprocessResult,
    original_text: str
) -> List[FallbackEstimate]:
    """
    Deterministic nutrition estimates for the recognised items of a meal.

    Args:
        preprocess_result: Output of normalize_and_parse_meal().
        original_text: The user's free text; a single gram amount in it is
                       applied when exactly one item can be scaled by weight.

    Returns:
        One FallbackEstimate per recognised item, in item order. Items whose
        canonical name is not in FALLBACK_NUTRITION are omitted.

    Example:
        >>> r = normalize_and_parse_meal("ไข่ต้ม 2 ฟอง")
        >>> estimate_fallback_nutrition(r, "ไข่ต้ม 2 ฟอง")[0].calories_kcal
        144.0
    """
    if preprocess_result is None:
        return []

    items = list(preprocess_result.items)

    # A gram amount in the free text is only attributable when no item already
    # carries a weight unit and exactly one recognised item has no unit at all.
    unitless = [it for it in items if it.unit is None and match_food(it.canonical_name)]
    weighed = any(segment_grams(it) is not None for it in items)
    grams_target = unitless[0] if len(unitless) == 1 and not weighed else None
    grams_hint = text_grams(original_text) if grams_target is not None else None

    estimates: List[FallbackEstimate] = []
    for item in items:
        hint = grams_hint if item is grams_target else None
        estimate = estimate_item(item, grams_hint=hint)
        if estimate is None:
            logger.debug(f"⚠️ No fallback baseline for '{item.canonical_name}'")
            continue
        estimates.append(estimate)

    logger.info(f"🧮 Fallback estimator matched {len(estimates)}/{len(items)} item(s)")
    return estimates


__all__ = [
    "estimate_fallback_nutrition",
    "estimate_item",
    "match_food",
    "text_grams",
    "segment_grams",
    "FALLBACK_NUTRITION",
    "FALLBACK_CONFIG",
]
