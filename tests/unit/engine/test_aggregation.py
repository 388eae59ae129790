from rule_agent.checks.scoring import build_check_result, create_issue
from rule_agent.core.config import GatingConfig
from rule_agent.core.models import GateStatus, Severity, Summary
from rule_agent.engine.scoring import aggregate, collect_recommendations, gate_verdict, summarize, weighted_score


def _check(family: str, *severities: Severity, recs=()):
    issues = [create_issue("t", s, "m", "r") for s in severities]
    return build_check_result(f"{family} check", family, 0, issues, (lambda _: list(recs)) if recs else None)


class TestWeightedScore:
    def test_empty_run(self) -> None:
        assert weighted_score([]) == 100

    def test_family_weights(self) -> None:
        checks = [_check("style", Severity.ERROR), _check("structural"), _check("integration", *[Severity.ERROR] * 5)]
        # (80*0.4 + 100*0.4 + 0*0.2) / 1.0
        assert weighted_score(checks) == 72

    def test_unknown_family_uses_fallback(self) -> None:
        checks = [_check("custom", Severity.ERROR), _check("style")]
        # (80*0.1 + 100*0.4) / 0.5 = 96
        assert weighted_score(checks) == 96


class TestSummaries:
    def test_summarize(self) -> None:
        summary = summarize([_check("style", Severity.ERROR, Severity.INFO), _check("structural", Severity.WARNING)])
        assert summary == Summary(total_issues=3, error_count=1, warning_count=1, info_count=1)

    def test_recommendations_deduplicated_in_order(self) -> None:
        checks = [_check("style", recs=("a", "b")), _check("structural", recs=("b", "c"))]
        assert collect_recommendations(checks) == ("a", "b", "c")


class TestGateVerdict:
    def test_error_fails_when_fail_on_error(self) -> None:
        assert gate_verdict(Summary(error_count=1, total_issues=1), 95, GatingConfig()) == GateStatus.FAIL

    def test_warning_count_threshold(self) -> None:
        gating = GatingConfig(fail_on_warning_count=2)
        assert gate_verdict(Summary(warning_count=2), 90, gating) == GateStatus.FAIL
        assert gate_verdict(Summary(warning_count=1), 90, gating) == GateStatus.WARNING

    def test_errors_without_fail_on_error(self) -> None:
        gating = GatingConfig(fail_on_error=False)
        assert gate_verdict(Summary(error_count=1), 95, gating) == GateStatus.PASS

    def test_low_score_warns(self) -> None:
        assert gate_verdict(Summary(), 79, GatingConfig()) == GateStatus.WARNING

    def test_disabled_gating_never_fails(self) -> None:
        gating = GatingConfig(enabled=False)
        assert gate_verdict(Summary(error_count=3, warning_count=30), 10, gating) == GateStatus.WARNING

    def test_clean_pass(self) -> None:
        assert gate_verdict(Summary(), 100, GatingConfig()) == GateStatus.PASS


class TestAggregate:
    def test_passed_iff_pass(self) -> None:
        result = aggregate([_check("style")], GatingConfig(), duration_ms=5)
        assert result.gate_status == GateStatus.PASS
        assert result.passed is True
        assert result.duration_ms == 5

    def test_force_fail(self) -> None:
        result = aggregate([_check("style")], GatingConfig(enabled=False), force_fail=True)
        assert result.gate_status == GateStatus.FAIL
        assert result.passed is False
