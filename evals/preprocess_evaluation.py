# evals/preprocess_evaluation.py
"""
MealText — Offline Regression Evaluation
========================================
Replays fixed meal descriptions and model outputs through the pipeline and
scores the results:

- meal parsing: item count, canonical name, quantity and unit per item
- structured output recovery: success/failure, repair flag, recovered keys

No network or model access is needed. Exit code is 0 when every case passes.

Run with: python evals/preprocess_evaluation.py [--export] [--quiet]
"""

import json
import logging
import os
import statistics
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from meal_tools.json_recovery import recover_structured_object
from meal_tools.meal_preprocessor import normalize_and_parse_meal


# =============================================================================
# EVALUATION DATA STRUCTURES
# =============================================================================

@dataclass
class ParseCase:
    """Meal text with the items it must produce."""
    id: str
    input_text: str
    expected_items: List[Dict[str, Any]]
    description: str = ""
    category: str = "meal_parsing"


@dataclass
class RecoveryCase:
    """Raw model output with the expected recovery outcome."""
    id: str
    raw_text: str
    expect_ok: bool
    expect_repair: Optional[bool] = None
    expected_keys: List[str] = field(default_factory=list)
    description: str = ""
    category: str = "json_recovery"


@dataclass
class EvalResult:
    """Result of a single evaluation."""
    case_id: str
    category: str
    passed: bool
    score: float  # 0.0 to 1.0
    details: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)


@dataclass
class EvalSummary:
    """Summary of evaluation run."""
    total_cases: int
    passed_cases: int
    failed_cases: int
    pass_rate: float
    avg_score: float
    category_scores: Dict[str, float]
    timestamp: str


# =============================================================================
# EVALUATION CASES
# =============================================================================

PARSE_CASES: List[ParseCase] = [
    ParseCase(
        id="parse_implicit_combo",
        input_text="กะเพราไก่ ไข่ 2 ฟอง",
        expected_items=[
            {"name_includes": "ข้าวกะเพรา", "qty": 1},
            {"name_includes": "ไข่", "qty": 2, "unit": "ฟอง"},
        ],
        description="Dish and egg without separator split into two items",
    ),
    ParseCase(
        id="parse_whey_alias",
        input_text="เวย์ 1 สกู๊ป",
        expected_items=[{"name_includes": "เวย์โปรตีน", "qty": 1, "unit": "สกู๊ป"}],
        description="Whey alias and scoop unit",
    ),
    ParseCase(
        id="parse_plus_separator",
        input_text="ข้าวมันไก่ + น้ำอัดลม 1 กระป๋อง",
        expected_items=[
            {"name_includes": "ข้าวมันไก่"},
            {"name_includes": "น้ำอัดลม", "qty": 1, "unit": "กระป๋อง"},
        ],
        description="Explicit + separator",
    ),
    ParseCase(
        id="parse_number_word",
        input_text="ไข่ต้ม สอง ฟอง",
        expected_items=[{"name_includes": "ไข่ต้ม", "qty": 2, "unit": "ฟอง"}],
        description="Thai number word spelled out",
    ),
    ParseCase(
        id="parse_english_grams",
        input_text="pad kra pao chicken 350g, fried egg x2",
        expected_items=[
            {"name_includes": "ข้าวกะเพรา", "qty": 350, "unit": "กรัม"},
            {"name_includes": "ไข่ดาว", "qty": 2},
        ],
        description="English phrasing, attached gram unit and multiplier",
    ),
]

RECOVERY_CASES: List[RecoveryCase] = [
    RecoveryCase(
        id="recover_fenced_prose",
        raw_text='```json\n{"adviceMarkdown":"hi","followUpQuestions":[],"notes":[]}\n```\nขอบคุณครับ',
        expect_ok=True,
        expect_repair=False,
        expected_keys=["adviceMarkdown"],
        description="Fenced payload followed by prose",
    ),
    RecoveryCase(
        id="recover_last_object",
        raw_text='noise {"a":1} more {"b":2} trailing',
        expect_ok=True,
        expect_repair=False,
        expected_keys=["b"],
        description="Last balanced object wins",
    ),
    RecoveryCase(
        id="recover_trailing_comma",
        raw_text='{"a":1,}',
        expect_ok=True,
        expect_repair=True,
        expected_keys=["a"],
        description="Trailing comma repaired",
    ),
    RecoveryCase(
        id="recover_truncated_string",
        raw_text='{"results": [], "reasoningSummary": "ประมาณจากจานมาตรฐ',
        expect_ok=True,
        expect_repair=True,
        expected_keys=["results", "reasoningSummary"],
        description="Stream cut mid-string",
    ),
    RecoveryCase(
        id="recover_not_json",
        raw_text="Sorry, I cannot estimate this meal {",
        expect_ok=False,
        description="Prose with a dangling brace fails with a candidate",
    ),
]


# =============================================================================
# EVALUATION LOGIC
# =============================================================================

def evaluate_parse_case(case: ParseCase) -> EvalResult:
    """Score a meal-parsing case: item count 40%, per-item fields 60%."""
    result = normalize_and_parse_meal(case.input_text)

    errors = []
    items = result.items
    count_ok = len(items) == len(case.expected_items)
    if not count_ok:
        errors.append(f"Expected {len(case.expected_items)} items, got {len(items)}")

    checks = 0
    hits = 0
    for i, expected in enumerate(case.expected_items):
        got = items[i] if i < len(items) else None
        for key, value in expected.items():
            checks += 1
            if got is None:
                errors.append(f"Missing item[{i}]")
                continue
            if key == "name_includes":
                ok = value in got.canonical_name
                actual = got.canonical_name
            elif key == "qty":
                ok = got.quantity == value
                actual = got.quantity
            else:
                ok = got.unit is not None and got.unit.value == value
                actual = got.unit.value if got.unit else None
            if ok:
                hits += 1
            else:
                errors.append(f"item[{i}] {key}: expected {value!r}, got {actual!r}")

    field_score = hits / checks if checks else 1.0
    score = 0.4 * (1.0 if count_ok else 0.0) + 0.6 * field_score

    return EvalResult(
        case_id=case.id,
        category=case.category,
        passed=not errors,
        score=round(score, 3),
        details={"items": [it.to_hint() for it in items], "warnings": result.warnings},
        errors=errors,
    )


def evaluate_recovery_case(case: RecoveryCase) -> EvalResult:
    """Score a recovery case: outcome 60%, repair flag 20%, keys 20%."""
    recovered = recover_structured_object(case.raw_text)

    errors = []
    score_components = {"outcome": 1.0, "repair": 1.0, "keys": 1.0}

    if recovered.ok != case.expect_ok:
        score_components["outcome"] = 0.0
        errors.append(f"Expected ok={case.expect_ok}, got ok={recovered.ok}")

    if recovered.ok:
        if case.expect_repair is not None and recovered.used_repair != case.expect_repair:
            score_components["repair"] = 0.0
            errors.append(f"Expected used_repair={case.expect_repair}")
        missing = [k for k in case.expected_keys if k not in recovered.value]
        if missing:
            score_components["keys"] = 0.0
            errors.append(f"Missing keys: {missing}")
        details = {"value": recovered.value, "used_repair": recovered.used_repair}
    else:
        if not recovered.last_candidate:
            score_components["keys"] = 0.0
            errors.append("Failure without a diagnostic candidate")
        details = {"reason": recovered.reason, "last_candidate": recovered.last_candidate}

    weights = {"outcome": 0.6, "repair": 0.2, "keys": 0.2}
    score = sum(score_components[k] * weights[k] for k in weights)

    return EvalResult(
        case_id=case.id,
        category=case.category,
        passed=not errors,
        score=round(score, 3),
        details=details,
        errors=errors,
    )


def run_evaluation(verbose: bool = True) -> Tuple[List[EvalResult], EvalSummary]:
    """
    Run every parse and recovery case.

    Returns:
        Tuple of (results list, summary)
    """
    cases: List[Any] = [*PARSE_CASES, *RECOVERY_CASES]
    results: List[EvalResult] = []

    if verbose:
        print("\n" + "="*60)
        print("🧪 MealText — Offline Regression Evaluation")
        print("="*60)
        print(f"   Cases: {len(cases)}")
        print("="*60 + "\n")

    for i, case in enumerate(cases):
        if verbose:
            print(f"[{i+1}/{len(cases)}] {case.id}: {case.description[:40]}...")

        if isinstance(case, ParseCase):
            result = evaluate_parse_case(case)
        else:
            result = evaluate_recovery_case(case)
        results.append(result)

        if verbose:
            status = "✅ PASS" if result.passed else "❌ FAIL"
            print(f"   {status} (score: {result.score:.2f})")
            for err in result.errors[:2]:
                print(f"      ⚠️ {err}")

    passed = sum(1 for r in results if r.passed)

    category_scores = {}
    for cat in sorted(set(r.category for r in results)):
        category_scores[cat] = statistics.mean(r.score for r in results if r.category == cat)

    summary = EvalSummary(
        total_cases=len(results),
        passed_cases=passed,
        failed_cases=len(results) - passed,
        pass_rate=passed / len(results) if results else 0,
        avg_score=statistics.mean(r.score for r in results) if results else 0,
        category_scores=category_scores,
        timestamp=datetime.now().isoformat(),
    )

    if verbose:
        print("\n" + "="*60)
        print("📊 EVALUATION SUMMARY")
        print("="*60)
        print(f"   Total: {summary.total_cases} cases")
        print(f"   Passed: {summary.passed_cases} ({summary.pass_rate:.1%})")
        print(f"   Failed: {summary.failed_cases}")
        print(f"   Avg Score: {summary.avg_score:.2f}")
        print("\n   Category Scores:")
        for cat, score in category_scores.items():
            print(f"      {cat}: {score:.2f}")
        print("="*60)

    return results, summary


# =============================================================================
# EXPORT RESULTS
# =============================================================================

def export_results(
    results: List[EvalResult],
    summary: EvalSummary,
    output_path: str = "evals/results"
) -> Tuple[str, str]:
    """Export evaluation results to JSON files."""
    os.makedirs(output_path, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    results_file = os.path.join(output_path, f"eval_results_{timestamp}.json")
    with open(results_file, "w", encoding="utf-8") as f:
        json.dump([asdict(r) for r in results], f, indent=2, ensure_ascii=False)

    summary_file = os.path.join(output_path, f"eval_summary_{timestamp}.json")
    with open(summary_file, "w", encoding="utf-8") as f:
        json.dump(asdict(summary), f, indent=2, ensure_ascii=False)

    print(f"\n📁 Results exported to: {output_path}")
    return results_file, summary_file


# =============================================================================
# CLI RUNNER
# =============================================================================

def main() -> int:
    """Run evaluation from command line."""
    import argparse

    parser = argparse.ArgumentParser(description="MealText offline regression evaluation")
    parser.add_argument("--export", action="store_true", help="Export results to JSON")
    parser.add_argument("--quiet", action="store_true", help="Minimal output")
    args = parser.parse_args()

    logging.basicConfig(level=os.environ.get("MEALTEXT_LOG_LEVEL", "WARNING").upper())

    results, summary = run_evaluation(verbose=not args.quiet)

    if args.export:
        export_results(results, summary)

    if summary.failed_cases == 0:
        print("\n✅ Evaluation PASSED")
        return 0
    print("\n❌ Evaluation FAILED")
    return 1


if __name__ == "__main__":
    sys.exit(main())
