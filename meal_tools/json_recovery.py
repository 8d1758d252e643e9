# meal_tools/json_recovery.py
"""
MealText — Structured Output Recovery Tool
==========================================
Best-effort recovery of one JSON object from generative-model output that
*should* be JSON but often is wrapped in prose, fenced, truncated or
carries stray tokens.

Path: direct parse -> extract + parse -> repair + parse.

Failure is a normal outcome: recover_structured_object() never raises and
returns RecoveryFailure so the caller can ask the model to reformat or
surface an error to the user.
"""

import json
import logging
import os
import re
from typing import Any, Optional, Tuple, Type

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from meal_tools.schemas import RecoveryFailure, RecoveryResult, RecoverySuccess

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


RECOVERY_CONFIG = {
    "candidate_preview_chars": _env_int("MEALTEXT_CANDIDATE_PREVIEW_CHARS", 500),
}

FAILURE_REASON = "Failed to parse JSON from model output"


# =============================================================================
# FENCE STRIPPING
# =============================================================================
FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Return the interior of the first ``` / ```json fence, else the trimmed text."""
    if not text:
        return ""
    match = FENCE_RE.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return text.strip()


# =============================================================================
# BALANCED-OBJECT EXTRACTION
# =============================================================================
OUTSIDE_STRING = 0
IN_STRING = 1
AFTER_ESCAPE = 2


def extract_last_balanced_object(text: str) -> Optional[str]:
    """
    Find the last top-level balanced {...} span, ignoring braces inside strings.

    Example:
        >>> extract_last_balanced_object('noise {"a":1} more {"b":2} trailing')
        '{"b":2}'

    Returns None when no complete object exists or nesting goes negative.
    """
    cleaned = strip_code_fences(text)
    last: Optional[str] = None
    state = OUTSIDE_STRING
    depth = 0
    start = -1

    for i, ch in enumerate(cleaned):
        if state == AFTER_ESCAPE:
            state = IN_STRING
            continue

        if state == IN_STRING:
            if ch == "\\":
                state = AFTER_ESCAPE
            elif ch == '"':
                state = OUTSIDE_STRING
            continue

        if ch == '"':
            state = IN_STRING
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                return None
            if depth == 0 and start != -1:
                last = cleaned[start:i + 1].strip()
                start = -1

    return last


# =============================================================================
# REPAIR PASS
# =============================================================================
LONE_LETTER_LINE_RE = re.compile(r"^[ \t]*[A-Za-z][ \t]*(?:\r?\n|$)", re.MULTILINE)
TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")
UNESCAPED_QUOTE_RE = re.compile(r'(?<!\\)"')


def repair_json_text(candidate: str) -> str:
    """
    Apply the fixed, ordered list of textual repairs once.

    1. Delete lines holding a single stray letter (truncated-stream artifact)
    2. Remove trailing commas before } or ]
    3. Odd number of unescaped quotes -> close the last string
    4. More { than } -> append the missing closing braces
    """
    repaired = LONE_LETTER_LINE_RE.sub("", candidate)
    repaired = TRAILING_COMMA_RE.sub(r"\1", repaired)

    if len(UNESCAPED_QUOTE_RE.findall(repaired)) % 2 == 1:
        repaired = f'{repaired}"'

    missing = repaired.count("{") - repaired.count("}")
    if missing > 0:
        repaired = repaired + "}" * missing

    return repaired


# =============================================================================
# PARSING
# =============================================================================
def _try_parse(text: str, shape: Optional[Type[BaseModel]]) -> Tuple[bool, Any]:
    """Parse text as a JSON object, validated against shape when given."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError, RecursionError):
        return False, None

    if not isinstance(data, dict):
        return False, None

    if shape is None:
        return True, data

    try:
        return True, shape.model_validate(data)
    except ValidationError as e:
        logger.debug(f"⚠️ JSON object does not match {shape.__name__}: {e}")
        return False, None


def _preview(text: str) -> str:
    limit = RECOVERY_CONFIG["candidate_preview_chars"]
    if limit > 0 and len(text) > limit:
        return text[:limit]
    return text


# =============================================================================
# MAIN TOOL: recover_structured_object
# =============================================================================
def recover_structured_object(
    raw_text: str,
    shape: Optional[Type[BaseModel]] = None
) -> RecoveryResult:
    """
    Recover one JSON object from raw model output.

    Args:
        raw_text: Text returned by the generative model.
        shape: Optional pydantic model class the object must validate against.
               When omitted the parsed dict is returned.

    Returns:
        RecoverySuccess(value, used_repair, used_extraction) or
        RecoveryFailure(reason, last_candidate).

    Example:
        >>> recover_structured_object('```json\\n{"a":1,}\\n```').value
        {'a': 1}
    """
    raw_text = raw_text or ""
    candidate = extract_last_balanced_object(raw_text) or strip_code_fences(raw_text)
    used_extraction = candidate != raw_text.strip()

    ok, value = _try_parse(candidate, shape)
    if ok:
        return RecoverySuccess(value=value, used_repair=False, used_extraction=used_extraction)

    if not candidate:
        logger.warning("⚠️ Model output is empty, nothing to recover")
        return RecoveryFailure(reason=FAILURE_REASON, last_candidate=None)

    repaired = repair_json_text(candidate)
    ok, value = _try_parse(repaired, shape)
    if ok:
        logger.info("🔧 Model JSON recovered with repair pass")
        return RecoverySuccess(value=value, used_repair=True, used_extraction=used_extraction)

    logger.warning(f"⚠️ Model JSON unrecoverable: {_preview(candidate)[:120]!r}")
    return RecoveryFailure(reason=FAILURE_REASON, last_candidate=_preview(candidate))


__all__ = [
    "recover_structured_object",
    "strip_code_fences",
    "extract_last_balanced_object",
    "repair_json_text",
    "RECOVERY_CONFIG",
    "FAILURE_REASON",
]
