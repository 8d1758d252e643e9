# meal_tools/schemas.py
"""
MealText — Shared Value Objects
===============================
Immutable pydantic models passed between the meal-text parser,
the JSON recovery engine and the fallback estimator.

All models are frozen: they are created fresh per request and never mutated.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================
class MealUnit(str, Enum):
    """Closed canonical unit vocabulary (values are the Thai canonical spellings)."""
    EGG = "ฟอง"
    PLATE = "จาน"
    BOWL = "ชาม"
    CUP = "ถ้วย"
    TABLESPOON = "ช้อนโต๊ะ"
    TEASPOON = "ช้อนชา"
    GRAM = "กรัม"
    KILOGRAM = "กก"
    MILLILITER = "มล"
    LITER = "ลิตร"
    BOTTLE = "ขวด"
    CAN = "กระป๋อง"
    SACHET = "ซอง"
    BOX = "กล่อง"
    SCOOP = "สกู๊ป"
    PIECE = "ชิ้น"


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# NATURAL-LANGUAGE PARSE
# =============================================================================
class ParsedQuantity(BaseModel):
    """Quantity/unit pair for one segment; explicit=False means it was defaulted."""
    model_config = ConfigDict(frozen=True)

    quantity: float = Field(1.0, gt=0)
    unit: Optional[MealUnit] = None
    explicit: bool = False


class ParsedItem(BaseModel):
    """One food item recovered from a meal description."""
    model_config = ConfigDict(frozen=True)

    raw_segment: str
    canonical_name: str
    quantity: float = Field(1.0, gt=0)
    unit: Optional[MealUnit] = None
    modifiers: List[str] = Field(default_factory=list)

    def to_hint(self) -> Dict[str, Any]:
        hint: Dict[str, Any] = {"name": self.canonical_name, "qty": self.quantity}
        if self.unit is not None:
            hint["unit"] = self.unit.value
        if self.modifiers:
            hint["modifiers"] = list(self.modifiers)
        return hint


class PreprocessResult(BaseModel):
    """Output of normalize_and_parse_meal()."""
    model_config = ConfigDict(frozen=True)

    normalized_text: str
    items: List[ParsedItem] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def to_hint(self) -> Dict[str, Any]:
        """Compact dict suitable for embedding in an outbound model request."""
        return {
            "items": [item.to_hint() for item in self.items],
            "warnings": list(self.warnings),
        }


# =============================================================================
# STRUCTURED-OUTPUT RECOVERY
# =============================================================================
class RecoverySuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    value: Any
    used_repair: bool = False
    used_extraction: bool = False


class RecoveryFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    reason: str
    last_candidate: Optional[str] = None


RecoveryResult = Union[RecoverySuccess, RecoveryFailure]


# =============================================================================
# FALLBACK ESTIMATION
# =============================================================================
class FallbackEstimate(BaseModel):
    """Deterministic nutrition approximation for one recognised item."""
    model_config = ConfigDict(frozen=True)

    canonical_name: str
    assumed_serving_label: str
    calories_kcal: float = Field(0.0, ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)
    confidence: Confidence = Confidence.MEDIUM
    notes: List[str] = Field(default_factory=list)


__all__ = [
    "MealUnit",
    "Confidence",
    "ParsedQuantity",
    "ParsedItem",
    "PreprocessResult",
    "RecoverySuccess",
    "RecoveryFailure",
    "RecoveryResult",
    "FallbackEstimate",
]
