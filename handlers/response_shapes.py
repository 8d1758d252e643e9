# handlers/response_shapes.py
"""
MealText — Model Response Shapes
================================
Pydantic shapes passed to recover_structured_object() by the callers that
receive generative-model JSON. Field names are snake_case in Python and
camelCase on the wire (the keys the model is asked to produce).

Validators coerce loosely-typed model output instead of rejecting it:
non-finite or non-numeric nutrients become None, unknown confidence values
become "medium", non-list collections become empty lists.
"""

import math
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


CONFIDENCE_LEVELS = ("low", "medium", "high")


def _finite_number(v: Any) -> Optional[float]:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    return float(v) if math.isfinite(v) else None


def _string_list(v: Any) -> List[str]:
    if not isinstance(v, list):
        return []
    return [str(x) for x in v]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# NUTRITION REPLY
# =============================================================================
class NutritionItem(_WireModel):
    """One estimated item from the model's nutrition answer."""
    item_name: str = "Meal"
    assumed_serving: str = ""
    calories_kcal: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    fiber_g: Optional[float] = None
    sugar_g: Optional[float] = None
    sodium_mg: Optional[float] = None
    confidence: str = "medium"
    notes: List[str] = Field(default_factory=list)

    @field_validator("item_name", mode="before")
    @classmethod
    def _item_name(cls, v: Any) -> str:
        return "Meal" if v is None else str(v)

    @field_validator("assumed_serving", mode="before")
    @classmethod
    def _assumed_serving(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator(
        "calories_kcal", "protein_g", "carbs_g", "fat_g",
        "fiber_g", "sugar_g", "sodium_mg",
        mode="before",
    )
    @classmethod
    def _nutrient(cls, v: Any) -> Optional[float]:
        return _finite_number(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, v: Any) -> str:
        return v if v in CONFIDENCE_LEVELS else "medium"

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, v: Any) -> List[str]:
        return _string_list(v)


class NutritionReply(_WireModel):
    """{"results": [...], "followUpQuestions": [...], "reasoningSummary": "..."}"""
    results: List[NutritionItem] = Field(default_factory=list)
    follow_up_questions: List[str] = Field(default_factory=list)
    reasoning_summary: Optional[str] = None

    @field_validator("results", mode="before")
    @classmethod
    def _results(cls, v: Any) -> List[Any]:
        if not isinstance(v, list):
            return []
        return [r if isinstance(r, dict) else {} for r in v]

    @field_validator("follow_up_questions", mode="before")
    @classmethod
    def _questions(cls, v: Any) -> List[str]:
        return _string_list(v)

    @field_validator("reasoning_summary", mode="before")
    @classmethod
    def _summary(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None


# =============================================================================
# COACH ADVICE
# =============================================================================
class CoachAdvice(_WireModel):
    """{"adviceMarkdown": "...", "followUpQuestions": [...], "notes": [...]}"""
    advice_markdown: str
    follow_up_questions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)

    @field_validator("follow_up_questions", "notes", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> List[str]:
        return _string_list(v)


__all__ = [
    "NutritionItem",
    "NutritionReply",
    "CoachAdvice",
    "CONFIDENCE_LEVELS",
]
