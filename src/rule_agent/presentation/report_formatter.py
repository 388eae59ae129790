import html
import re
from collections import Counter
from typing import TYPE_CHECKING

from rule_agent.core.models import GateStatus, Issue, PolicyContext, RuleAgentResult, Severity, Summary

if TYPE_CHECKING:
    from rule_agent.reporters.notice import Notice

RULE = "=" * 80
DIVIDER = "-" * 40

GATE_ICONS = {
    GateStatus.PASS: "🟢",
    GateStatus.WARNING: "🟡",
    GateStatus.FAIL: "🔴",
}

SEVERITY_SECTIONS = [
    (Severity.ERROR, "🔴 Errors"),
    (Severity.WARNING, "🟡 Warnings"),
    (Severity.INFO, "🔵 Info"),
]

FINAL_STATUS = {
    GateStatus.PASS: "🎉 ALL CHECKS PASSED! Module meets quality standards.",
    GateStatus.WARNING: "⚠️  WARNINGS DETECTED. Consider addressing issues before deployment.",
    GateStatus.FAIL: "🚨 CRITICAL ISSUES DETECTED. Must fix errors before proceeding.",
}

_SUMMARY_PATTERNS = {
    "total_issues": re.compile(r"^Total Issues: (\d+)$", re.MULTILINE),
    "error_count": re.compile(r"^🔴 Errors: (\d+)$", re.MULTILINE),
    "warning_count": re.compile(r"^🟡 Warnings: (\d+)$", re.MULTILINE),
    "info_count": re.compile(r"^🔵 Info: (\d+)$", re.MULTILINE),
}


def _format_issue(issue: Issue, detailed: bool) -> list[str]:
    lines = [f"      • {issue.message}"]
    if issue.file:
        lines.append(f"        📁 {issue.file}")
    if detailed and issue.suggestion:
        lines.append(f"        💡 {issue.suggestion}")
    return lines


def _route_icons(route) -> str:
    return " ".join(
        [
            "🔐" if route.auth else "🔓",
            "🛡️" if route.rls else "⚠️",
            "✅" if route.validation else "❌",
            "🚦" if route.rate_limit else "⏰",
        ]
    )


def format_stream_report(result: RuleAgentResult, context: PolicyContext, verbose: bool = False) -> str:
    """Render a run as a plain-text report for build logs.

    Info-severity issues are only listed when ``verbose`` is set; the summary
    counters always include them.
    """
    summary = result.summary
    status = result.gate_status
    lines = [
        RULE,
        "🛡️  RULE AGENT REPORT",
        RULE,
        f"📦 Module: {context.module}",
        f"📅 Timestamp: {context.timestamp.isoformat()}",
        f"📊 Overall Score: {result.overall_score}/100",
        f"🚦 Gate Status: {GATE_ICONS[status]} {status.value.upper()}",
        f"⏱️  Duration: {result.duration_ms}ms",
        "",
        "📋 SUMMARY",
        DIVIDER,
        f"Total Issues: {summary.total_issues}",
        f"🔴 Errors: {summary.error_count}",
        f"🟡 Warnings: {summary.warning_count}",
        f"🔵 Info: {summary.info_count}",
        "",
        "🔍 CHECK RESULTS",
        DIVIDER,
    ]

    for check in result.checks:
        lines.append(f"{'✅' if check.passed else '❌'} {check.check_name}")
        lines.append(f"   Score: {check.score}/100")
        lines.append(f"   Issues: {len(check.issues)}")
        for severity, title in SEVERITY_SECTIONS:
            if severity == Severity.INFO and not verbose:
                continue
            grouped = [i for i in check.issues if i.severity == severity]
            if not grouped:
                continue
            lines.append(f"   {title} ({len(grouped)}):")
            for issue in grouped:
                lines.extend(_format_issue(issue, detailed=severity == Severity.ERROR))
        lines.append("")

    if result.recommendations:
        lines += ["💡 RECOMMENDATIONS", DIVIDER]
        lines += [f"{index}. {rec}" for index, rec in enumerate(result.recommendations, 1)]
        lines.append("")

    lines += ["📁 FILES ANALYZED", DIVIDER, f"Total Files: {len(context.files)}"]
    for kind, count in Counter(f.kind.value for f in context.files).items():
        lines.append(f"  {kind}: {count}")
    lines.append("")

    if context.routes:
        lines += ["🛣️  ROUTES ANALYZED", DIVIDER]
        lines += [f"  {r.method.value} {r.path} {_route_icons(r)}" for r in context.routes]
        lines.append("")

    if context.features:
        lines += ["🚀 FEATURES", DIVIDER]
        lines += [f"  ✨ {feature}" for feature in sorted(context.features)]
        lines.append("")

    lines += ["🎯 FINAL STATUS", DIVIDER, FINAL_STATUS[status], RULE, ""]
    return "\n".join(lines)


def parse_summary(text: str) -> Summary:
    """Recover the summary counters from a stream report."""
    values = {}
    for field, pattern in _SUMMARY_PATTERNS.items():
        match = pattern.search(text)
        if not match:
            raise ValueError(f"Report has no '{field}' line")
        values[field] = int(match.group(1))
    return Summary(**values)


def render_notice_html(notice: "Notice") -> str:
    """Render a notice as an HTML banner. All text is escaped."""
    esc = html.escape
    checks = "".join(f'<li class="check-item">{esc(line)}</li>' for line in notice.check_lines)
    recommendations = ""
    if notice.recommendations:
        items = "".join(f"<li>{esc(rec)}</li>" for rec in notice.recommendations)
        recommendations = f'<div class="recommendations"><h4>💡 Recommendations</h4><ul>{items}</ul></div>'
    dismiss = (
        f'<button class="dismiss-btn" data-notice-id="{esc(notice.id)}">Dismiss</button>' if notice.dismissible else ""
    )
    counts = notice.counts
    return (
        f'<div class="rule-agent-report {notice.status.value}" data-module="{esc(notice.module)}" '
        f'data-fatal="{str(notice.fatal).lower()}">'
        f'<div class="report-header"><span class="status-badge">{esc(notice.badge)}</span>'
        f"<h3>🛡️ Rule Agent Report - {esc(notice.module)}</h3>"
        f'<div class="score">Score: {notice.score}/100</div></div>'
        f'<div class="report-summary">'
        f'<span class="stat error">🔴 {counts.error_count}</span>'
        f'<span class="stat warning">🟡 {counts.warning_count}</span>'
        f'<span class="stat info">🔵 {counts.info_count}</span></div>'
        f'<ul class="checks-list">{checks}</ul>'
        f"{recommendations}"
        f'<div class="report-footer"><small>Generated at {notice.created_at.isoformat()}</small>{dismiss}</div>'
        "</div>"
    )
