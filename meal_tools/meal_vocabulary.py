# meal_tools/meal_vocabulary.py
"""
MealText — Meal Vocabulary Tables
=================================
Static, read-only lookup tables shared by the normalizer, extractor and
canonicalizer. Adding an alias is a data change here, never a logic change.

Compiled patterns are built once at import time.
"""

import re
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from meal_tools.schemas import MealUnit


# =============================================================================
# NUMBER WORDS
# =============================================================================
NUMBER_WORDS: Dict[str, int] = {
    # Thai
    "ศูนย์": 0,
    "หนึ่ง": 1,
    "นึง": 1,  # informal "one"
    "สอง": 2,
    "สาม": 3,
    "สี่": 4,
    "ห้า": 5,
    "หก": 6,
    "เจ็ด": 7,
    "แปด": 8,
    "เก้า": 9,
    "สิบ": 10,
    # English
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

THAI_DIGITS = str.maketrans("๐๑๒๓๔๕๖๗๘๙", "0123456789")


# =============================================================================
# UNIT ALIASES
# =============================================================================
UNIT_ALIASES: Dict[str, MealUnit] = {
    # Thai
    "ฟอง": MealUnit.EGG,
    "จาน": MealUnit.PLATE,
    "ชาม": MealUnit.BOWL,
    "ถ้วย": MealUnit.CUP,
    "แก้ว": MealUnit.CUP,
    "ช้อนโต๊ะ": MealUnit.TABLESPOON,
    "ช้อนชา": MealUnit.TEASPOON,
    "กรัม": MealUnit.GRAM,
    "กิโลกรัม": MealUnit.KILOGRAM,
    "กิโล": MealUnit.KILOGRAM,
    "กก": MealUnit.KILOGRAM,
    "มล": MealUnit.MILLILITER,
    "มิลลิลิตร": MealUnit.MILLILITER,
    "ลิตร": MealUnit.LITER,
    "ขวด": MealUnit.BOTTLE,
    "กระป๋อง": MealUnit.CAN,
    "ซอง": MealUnit.SACHET,
    "กล่อง": MealUnit.BOX,
    "สกู๊ป": MealUnit.SCOOP,
    "สกุป": MealUnit.SCOOP,
    "ชิ้น": MealUnit.PIECE,
    "ลูก": MealUnit.PIECE,
    "ไม้": MealUnit.PIECE,  # skewer
    # English
    "plate": MealUnit.PLATE,
    "plates": MealUnit.PLATE,
    "bowl": MealUnit.BOWL,
    "bowls": MealUnit.BOWL,
    "cup": MealUnit.CUP,
    "cups": MealUnit.CUP,
    "glass": MealUnit.CUP,
    "tbsp": MealUnit.TABLESPOON,
    "tablespoon": MealUnit.TABLESPOON,
    "tablespoons": MealUnit.TABLESPOON,
    "tsp": MealUnit.TEASPOON,
    "teaspoon": MealUnit.TEASPOON,
    "teaspoons": MealUnit.TEASPOON,
    "g": MealUnit.GRAM,
    "gram": MealUnit.GRAM,
    "grams": MealUnit.GRAM,
    "kg": MealUnit.KILOGRAM,
    "ml": MealUnit.MILLILITER,
    "l": MealUnit.LITER,
    "liter": MealUnit.LITER,
    "litre": MealUnit.LITER,
    "liters": MealUnit.LITER,
    "bottle": MealUnit.BOTTLE,
    "bottles": MealUnit.BOTTLE,
    "can": MealUnit.CAN,
    "cans": MealUnit.CAN,
    "sachet": MealUnit.SACHET,
    "sachets": MealUnit.SACHET,
    "box": MealUnit.BOX,
    "boxes": MealUnit.BOX,
    "scoop": MealUnit.SCOOP,
    "scoops": MealUnit.SCOOP,
    "piece": MealUnit.PIECE,
    "pieces": MealUnit.PIECE,
    "pc": MealUnit.PIECE,
    "pcs": MealUnit.PIECE,
}

# Short or ambiguous aliases that only count as a unit directly after a number
# ("กก" also occurs inside words such as ผักกาด).
NUMBER_BOUND_UNIT_ALIASES = frozenset({"กก", "g", "l", "can", "cans"})


# =============================================================================
# FILLER / ADDITION WORDS
# =============================================================================
FILLER_WORDS: List[str] = [
    "จำนวน",
    "ประมาณ",
    "ราวๆ",
    "ราว ๆ",
    "approximately",
    "approx",
    "about",
    "around",
]

ADDITION_WORDS: List[str] = [
    "เพิ่ม",
    "พิเศษ",
    "extra",
]


# =============================================================================
# FOOD ALIASES (applied in order; the matched span is replaced)
# =============================================================================
FOOD_ALIASES: Dict[str, str] = {
    # Rice + basil stir-fry
    r"^(?:ข้าว)?(?:ผัด)?(?:กะ|กระ)เพรา": "ข้าวกะเพรา",
    r"^(?:pad |phat )?(?:kra ?pao|ka ?prao|kra ?pow)(?: rice)?": "ข้าวกะเพรา",
    # Eggs keep their preparation-specific names
    r"ไข่ดาว|fried eggs?|sunny[- ]side[- ]up": "ไข่ดาว",
    r"ไข่ต้ม|(?:hard[- ])?boiled eggs?": "ไข่ต้ม",
    r"ไข่เจียว|omelet(?:te)?s?": "ไข่เจียว",
    r"^eggs?$": "ไข่",
    # Whey
    r"^เวย์(?:\s*โปรตีน)?|^whey(?:\s*protein)?": "เวย์โปรตีน",
    # Plain cooked rice
    r"^(?:ข้าวสวย|ข้าวเปล่า|ข้าว|steamed rice|cooked rice|white rice|rice)$": "ข้าวสวย",
}


# =============================================================================
# COMPILED PATTERNS
# =============================================================================
NUMBER_PATTERN = r"[0-9]+(?:\.[0-9]+)?"

# Egg keywords that trigger the implicit-combination split. English eggs may
# carry their own count ("rice 2 eggs"); the lookbehinds keep "fried egg" and
# "hard boiled egg" whole.
EGG_KEYWORD_PATTERN = (
    r"(?<![0-9])(?<!fried)(?<!boiled)(?<!hard)\s"
    r"(?:ไข่(?:ดาว|ต้ม|เจียว)?"
    rf"|(?:{NUMBER_PATTERN}\s*)?(?:(?:hard[- ])?boiled |fried )?eggs?(?![A-Za-z])"
    r"|omelet(?:te)?s?(?![A-Za-z]))"
)


def _word_pattern(word: str) -> str:
    """Latin words need letter boundaries; Thai has no word delimiters."""
    escaped = re.escape(word)
    if word.isascii():
        return rf"(?<![A-Za-z]){escaped}(?![A-Za-z])"
    return escaped


def _after_number() -> str:
    """Lookbehinds for "a number, then an optional single space"."""
    words = [w for w in NUMBER_WORDS if not w.isascii()]
    anchors = ["[0-9]"] + [re.escape(w) for w in words]
    return "|".join(f"(?<={a})|(?<={a} )" for a in anchors)


def _unit_alias_pattern(alias: str) -> str:
    pattern = _word_pattern(alias)
    if alias in NUMBER_BOUND_UNIT_ALIASES:
        return rf"(?:{_after_number()}){pattern}"
    if not alias.isascii():
        # After a number or as a standalone token, never inside a word
        # (ลูกชิ้น, แก้วมังกร, ไข่ลูกเขย)
        return rf"(?:(?:{_after_number()}){pattern}|(?<!\S){pattern}(?!\S))"
    return pattern


def _alternation(words: List[str], builder: Callable[[str], str]) -> str:
    # Longest first so that e.g. กิโลกรัม wins over กิโล
    ordered = sorted(words, key=len, reverse=True)
    return "|".join(builder(w) for w in ordered)


UNIT_ALTERNATION = _alternation(list(UNIT_ALIASES), _unit_alias_pattern)
NUMBER_WORD_ALTERNATION = _alternation(list(NUMBER_WORDS), _word_pattern)

UNIT_TOKEN_RE: Pattern = re.compile(UNIT_ALTERNATION, re.IGNORECASE)
FILLER_RE: Pattern = re.compile(_alternation(FILLER_WORDS, _word_pattern), re.IGNORECASE)
ADDITION_RE: Pattern = re.compile(_alternation(ADDITION_WORDS, _word_pattern), re.IGNORECASE)

FOOD_ALIAS_RULES: List[Tuple[Pattern, str]] = [
    (re.compile(pattern, re.IGNORECASE), canonical)
    for pattern, canonical in FOOD_ALIASES.items()
]


def resolve_unit(alias: str) -> Optional[MealUnit]:
    """Map a matched alias token to its canonical MealUnit (None if unknown)."""
    if not alias:
        return None
    return UNIT_ALIASES.get(alias.strip().lower())


__all__ = [
    "NUMBER_WORDS",
    "THAI_DIGITS",
    "UNIT_ALIASES",
    "NUMBER_BOUND_UNIT_ALIASES",
    "FILLER_WORDS",
    "ADDITION_WORDS",
    "FOOD_ALIASES",
    "EGG_KEYWORD_PATTERN",
    "NUMBER_PATTERN",
    "UNIT_ALTERNATION",
    "NUMBER_WORD_ALTERNATION",
    "UNIT_TOKEN_RE",
    "FILLER_RE",
    "ADDITION_RE",
    "FOOD_ALIAS_RULES",
    "resolve_unit",
]
