"""
Aggregation of per-check results into the final verdict.

Everything here is a pure function of its inputs: no I/O, no clock reads.
"""

from collections.abc import Iterable, Mapping, Sequence

from rule_agent.core.config import GatingConfig
from rule_agent.core.models import CheckResult, GateStatus, RuleAgentResult, Severity, Summary

FAMILY_WEIGHTS: dict[str, float] = {
    "style": 0.4,
    "structural": 0.4,
    "integration": 0.2,
}
FALLBACK_WEIGHT = 0.1
WARNING_SCORE_FLOOR = 80
EMPTY_RUN_SCORE = 100


def weighted_score(checks: Sequence[CheckResult], weights: Mapping[str, float] | None = None) -> int:
    """Weighted average of check scores by family; ``EMPTY_RUN_SCORE`` when nothing ran."""
    weights = FAMILY_WEIGHTS if weights is None else weights
    total = 0.0
    total_weight = 0.0
    for check in checks:
        weight = weights.get(check.family, FALLBACK_WEIGHT)
        total += check.score * weight
        total_weight += weight

    if total_weight <= 0:
        return EMPTY_RUN_SCORE
    return max(0, min(100, round(total / total_weight)))


def summarize(checks: Iterable[CheckResult]) -> Summary:
    counts = {Severity.ERROR: 0, Severity.WARNING: 0, Severity.INFO: 0}
    for check in checks:
        for issue in check.issues:
            counts[issue.severity] += 1
    return Summary(
        total_issues=sum(counts.values()),
        error_count=counts[Severity.ERROR],
        warning_count=counts[Severity.WARNING],
        info_count=counts[Severity.INFO],
    )


def collect_recommendations(checks: Iterable[CheckResult]) -> tuple[str, ...]:
    """Union of check recommendations, deduplicated in first-seen order."""
    return tuple(dict.fromkeys(rec for check in checks for rec in check.recommendations))


def gate_verdict(summary: Summary, score: int, gating: GatingConfig) -> GateStatus:
    if gating.enabled:
        if summary.error_count > 0 and gating.fail_on_error:
            return GateStatus.FAIL
        if summary.warning_count >= gating.fail_on_warning_count:
            return GateStatus.FAIL

    if summary.warning_count > 0 or score < WARNING_SCORE_FLOOR:
        return GateStatus.WARNING
    return GateStatus.PASS


def aggregate(
    checks: Sequence[CheckResult],
    gating: GatingConfig,
    duration_ms: int = 0,
    force_fail: bool = False,
) -> RuleAgentResult:
    """
    Build the terminal RuleAgentResult.

    Args:
        checks: Per-check results in registration order.
        gating: Gate policy of the run's config snapshot.
        duration_ms: Wall-clock duration of the run.
        force_fail: Set when a check crashed; the verdict becomes 'fail'
            regardless of gating.
    """
    summary = summarize(checks)
    score = weighted_score(checks)
    status = GateStatus.FAIL if force_fail else gate_verdict(summary, score, gating)
    return RuleAgentResult(
        passed=status == GateStatus.PASS,
        overall_score=score,
        checks=tuple(checks),
        summary=summary,
        recommendations=collect_recommendations(checks),
        gate_status=status,
        duration_ms=duration_ms,
    )
