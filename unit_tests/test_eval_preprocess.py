from dataclasses import asdict

from evals.preprocess_evaluation import PARSE_CASES, RECOVERY_CASES, run_evaluation


def test_results_carry_scores_only():
    results, summary = run_evaluation(verbose=False)

    assert summary.total_cases == len(PARSE_CASES) + len(RECOVERY_CASES)
    assert set(asdict(results[0])) == {"case_id", "category", "passed", "score", "details", "errors"}
    assert "avg_latency_ms" not in asdict(summary)
    assert "duration_seconds" not in asdict(summary)


def test_regression_cases_pass():
    _, summary = run_evaluation(verbose=False)
    assert summary.failed_cases == 0
