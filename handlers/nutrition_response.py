# handlers/nutrition_response.py
"""
MealText — Model Response Handlers
==================================
Caller-side glue between raw generative-model text and the application:

    raw text -> recover_structured_object(shape)
             -> failure: error dict with the candidate, so the caller can
                ask the model to reformat or show an error
             -> degenerate (all-zero) nutrition: fallback estimator
             -> otherwise: the model's own answer

Returns plain status dicts: "success", "partial" or "error".
"""

import logging
from datetime import datetime
from typing import Any, Dict, List

from handlers.response_shapes import CoachAdvice, NutritionItem, NutritionReply
from meal_tools.fallback_estimator import estimate_fallback_nutrition, match_food
from meal_tools.json_recovery import recover_structured_object
from meal_tools.meal_preprocessor import normalize_and_parse_meal
from meal_tools.schemas import FallbackEstimate, RecoveryFailure, RecoverySuccess

logger = logging.getLogger(__name__)

MACRO_FIELDS = ("calories_kcal", "protein_g", "carbs_g", "fat_g")

NON_JSON_SUGGESTION = (
    'Try rephrasing with clearer portions (e.g., "1 bowl", "1 plate", "2 eggs").'
)


# =============================================================================
# HELPERS
# =============================================================================
def is_degenerate_nutrition(reply: NutritionReply) -> bool:
    """True when no result carries a non-zero calorie or macro value."""
    for item in reply.results:
        for field in MACRO_FIELDS:
            value = getattr(item, field)
            if value is not None and value != 0:
                return False
    return True


def estimate_to_item(estimate: FallbackEstimate) -> NutritionItem:
    return NutritionItem(
        item_name=estimate.canonical_name,
        assumed_serving=estimate.assumed_serving_label,
        calories_kcal=estimate.calories_kcal,
        protein_g=estimate.protein_g,
        carbs_g=estimate.carbs_g,
        fat_g=estimate.fat_g,
        confidence=estimate.confidence.value,
        notes=list(estimate.notes),
    )


def _dump_items(items: List[NutritionItem]) -> List[Dict[str, Any]]:
    return [item.model_dump(by_alias=True) for item in items]


def _diagnostics(recovered: RecoverySuccess) -> Dict[str, bool]:
    return {
        "used_repair": recovered.used_repair,
        "used_extraction": recovered.used_extraction,
    }


def _error(recovered: RecoveryFailure) -> Dict[str, Any]:
    return {
        "status": "error",
        "error_message": "AI returned non-JSON output.",
        "suggestion": NON_JSON_SUGGESTION,
        "diagnostics": {
            "reason": recovered.reason,
            "last_candidate": recovered.last_candidate,
        },
    }


# =============================================================================
# NUTRITION
# =============================================================================
def resolve_nutrition_reply(raw_model_text: str, meal_text: str = "") -> Dict[str, Any]:
    """
    Turn raw model text for a nutrition request into a result dict.

    Args:
        raw_model_text: Text returned by the model for the nutrition prompt.
        meal_text: The user's original meal description (drives the fallback).

    Returns:
        Dictionary with:
        - status: "success", "partial" or "error"
        - results: list of camelCase nutrition items
        - follow_up_questions / reasoning_summary (from the model)
        - parsing_method: "ai", "ai_repaired" or "fallback_estimate"
        - diagnostics: recovery flags, or the failed candidate on error
    """
    recovered = recover_structured_object(raw_model_text, NutritionReply)
    if not recovered.ok:
        return _error(recovered)

    reply: NutritionReply = recovered.value
    method = "ai_repaired" if recovered.used_repair else "ai"
    result: Dict[str, Any] = {
        "status": "success",
        "results": _dump_items(reply.results),
        "follow_up_questions": list(reply.follow_up_questions),
        "reasoning_summary": reply.reasoning_summary,
        "parsing_method": method,
        "diagnostics": _diagnostics(recovered),
        "parsed_at": datetime.now().isoformat(),
    }

    if not is_degenerate_nutrition(reply):
        return result

    # -------------------------------------------------------------------------
    # Degenerate answer: schema honoured, numbers missing
    # -------------------------------------------------------------------------
    preprocessed = normalize_and_parse_meal(meal_text)
    estimates = estimate_fallback_nutrition(preprocessed, meal_text)
    result["status"] = "partial"
    result["meal_hint"] = preprocessed.to_hint()

    if not estimates:
        logger.warning("⚠️ All-zero nutrition reply and no fallback baseline matched")
        result["notes"] = ["AI returned zero nutrition values and no fallback estimate applies"]
        return result

    result["results"] = _dump_items([estimate_to_item(e) for e in estimates])
    result["parsing_method"] = "fallback_estimate"
    result["unestimated_items"] = [
        item.canonical_name for item in preprocessed.items
        if match_food(item.canonical_name) is None
    ]
    logger.info(f"🧮 Replaced all-zero reply with {len(estimates)} fallback estimate(s)")
    return result


# =============================================================================
# COACH
# =============================================================================
def resolve_coach_reply(raw_model_text: str) -> Dict[str, Any]:
    """Recover the coach advice object from raw model text."""
    recovered = recover_structured_object(raw_model_text, CoachAdvice)
    if not recovered.ok:
        return _error(recovered)

    advice: CoachAdvice = recovered.value
    return {
        "status": "success",
        "advice_markdown": advice.advice_markdown,
        "follow_up_questions": list(advice.follow_up_questions),
        "notes": list(advice.notes),
        "parsing_method": "ai_repaired" if recovered.used_repair else "ai",
        "diagnostics": _diagnostics(recovered),
    }


__all__ = [
    "resolve_nutrition_reply",
    "resolve_coach_reply",
    "is_degenerate_nutrition",
    "estimate_to_item",
]
