from rule_agent.checks.scoring import (
    build_check_result,
    calculate_score,
    create_issue,
    dominant_severity,
    recommend_when,
)
from rule_agent.core.models import Severity


def _issues(*severities: Severity):
    return [create_issue(f"t{i}", s, "msg", "rule") for i, s in enumerate(severities)]


class TestCalculateScore:
    def test_penalties(self) -> None:
        assert calculate_score([]) == 100
        assert calculate_score(_issues(Severity.ERROR)) == 80
        assert calculate_score(_issues(Severity.WARNING, Severity.INFO)) == 88

    def test_clamped_at_zero(self) -> None:
        assert calculate_score(_issues(*[Severity.ERROR] * 6)) == 0


class TestDominantSeverity:
    def test_empty_is_info(self) -> None:
        assert dominant_severity([]) == Severity.INFO

    def test_highest_wins(self) -> None:
        assert dominant_severity(_issues(Severity.INFO, Severity.ERROR, Severity.WARNING)) == Severity.ERROR


class TestBuildCheckResult:
    def test_error_blocks_pass_even_with_high_score(self) -> None:
        result = build_check_result("c", "style", 80, _issues(Severity.ERROR))
        assert result.score == 80
        assert result.passed is False

    def test_threshold(self) -> None:
        assert build_check_result("c", "structural", 85, _issues(Severity.WARNING)).passed is True
        assert build_check_result("c", "structural", 85, _issues(Severity.WARNING, Severity.WARNING)).passed is False

    def test_recommendations(self) -> None:
        recommender = recommend_when([(lambda i: i.rule == "rule", "Fix it"), (lambda i: False, "Never")])
        result = build_check_result("c", "style", 80, _issues(Severity.INFO, Severity.INFO), recommender)
        assert result.recommendations == ("Fix it",)
