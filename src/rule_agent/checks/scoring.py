"""Scoring helpers shared by every check."""

from collections.abc import Callable, Iterable, Sequence

from rule_agent.core.models import CheckResult, Issue, Severity

SEVERITY_PENALTIES: dict[Severity, int] = {
    Severity.ERROR: 20,
    Severity.WARNING: 10,
    Severity.INFO: 2,
}

Recommender = Callable[[Sequence[Issue]], list[str]]


def create_issue(
    type: str,
    severity: Severity,
    message: str,
    rule: str,
    file: str | None = None,
    suggestion: str | None = None,
    auto_fixable: bool = False,
) -> Issue:
    return Issue(
        type=type,
        severity=severity,
        message=message,
        rule=rule,
        file=file,
        suggestion=suggestion,
        auto_fixable=auto_fixable,
    )


def calculate_score(issues: Iterable[Issue]) -> int:
    """Start at 100 and subtract a fixed penalty per issue, clamped to [0, 100]."""
    score = 100 - sum(SEVERITY_PENALTIES[issue.severity] for issue in issues)
    return max(0, min(100, score))


def dominant_severity(issues: Iterable[Issue]) -> Severity:
    return max((issue.severity for issue in issues), key=lambda s: s.rank, default=Severity.INFO)


def build_check_result(
    check_name: str,
    family: str,
    threshold: int,
    issues: Sequence[Issue],
    recommender: Recommender | None = None,
) -> CheckResult:
    """
    Assemble a CheckResult from the issues a check found.

    A check passes when its score reaches ``threshold`` and it produced no
    error-severity issue.
    """
    score = calculate_score(issues)
    has_error = any(issue.severity == Severity.ERROR for issue in issues)
    return CheckResult(
        check_name=check_name,
        family=family,
        passed=score >= threshold and not has_error,
        severity=dominant_severity(issues),
        issues=tuple(issues),
        score=score,
        recommendations=tuple(recommender(issues)) if recommender else (),
    )


def recommend_when(rules: Sequence[tuple[Callable[[Issue], bool], str]]) -> Recommender:
    """Build a recommender emitting each message once when any issue matches its test."""

    def recommender(issues: Sequence[Issue]) -> list[str]:
        return [message for test, message in rules if any(test(issue) for issue in issues)]

    return recommender
