"""
Interactive notice reporter.

Turns a RuleAgentResult into a dismissible Notice and posts it to a
NoticeBoard that UI layers poll. Non-fatal notices expire on their own;
fatal ones stay until explicitly dismissed.
"""

import time
import uuid
from collections.abc import Callable
from datetime import UTC, datetime

import structlog
from cachetools import TTLCache
from pydantic import BaseModel, ConfigDict, Field

from rule_agent.core.models import GateStatus, PolicyContext, RuleAgentResult, Summary

logger = structlog.get_logger(__name__)

NOTICE_TTL_SECONDS = 30.0

STATUS_BADGES = {
    GateStatus.PASS: "🟢 PASS",
    GateStatus.WARNING: "🟡 WARNING",
    GateStatus.FAIL: "🔴 FAIL",
}


class Notice(BaseModel):
    """A single in-app banner describing one evaluation run."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    module: str
    status: GateStatus
    badge: str
    score: int
    counts: Summary
    check_lines: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    dismissible: bool = True
    fatal: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


def build_notice(result: RuleAgentResult, context: PolicyContext) -> Notice:
    check_lines = []
    for check in result.checks:
        icon = "✅" if check.passed else "❌"
        line = f"{icon} {check.check_name} {check.score}/100"
        if check.issues:
            line += f" ({len(check.issues)} issues found)"
        check_lines.append(line)

    return Notice(
        module=context.module,
        status=result.gate_status,
        badge=STATUS_BADGES[result.gate_status],
        score=result.overall_score,
        counts=result.summary,
        check_lines=tuple(check_lines),
        recommendations=result.recommendations,
        fatal=result.gate_status == GateStatus.FAIL,
    )


class NoticeBoard:
    """
    Latest notice per module.

    Non-fatal notices live in a TTLCache and disappear after ``ttl`` seconds.
    Fatal notices are kept separately until ``dismiss`` is called. The timer is
    injectable so expiry can be driven deterministically.
    """

    def __init__(self, ttl: float = NOTICE_TTL_SECONDS, timer: Callable[[], float] = time.monotonic, maxsize: int = 256):
        self._transient: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._fatal: dict[str, Notice] = {}

    def post(self, notice: Notice) -> None:
        # A newer notice replaces whatever the module was showing.
        self._transient.pop(notice.module, None)
        self._fatal.pop(notice.module, None)
        if notice.fatal:
            self._fatal[notice.module] = notice
        else:
            self._transient[notice.module] = notice

    def get(self, module: str) -> Notice | None:
        return self._fatal.get(module) or self._transient.get(module)

    def active(self) -> list[Notice]:
        self._transient.expire()
        notices = list(self._fatal.values()) + list(self._transient.values())
        return sorted(notices, key=lambda n: n.created_at)

    def dismiss(self, notice_id: str) -> bool:
        for store in (self._fatal, self._transient):
            for module, notice in list(store.items()):
                if notice.id == notice_id:
                    del store[module]
                    return True
        return False

    def clear(self) -> None:
        self._transient.clear()
        self._fatal.clear()


class InteractiveNoticeReporter:
    """Posts a dismissible notice for each run to a NoticeBoard."""

    name = "UI Notice Reporter"

    def __init__(self, board: NoticeBoard | None = None):
        self.board = board or NoticeBoard()

    async def report(self, result: RuleAgentResult, context: PolicyContext) -> None:
        notice = build_notice(result, context)
        self.board.post(notice)
        logger.info(
            "rule_agent.notice_posted",
            module=context.module,
            notice_id=notice.id,
            gate=result.gate_status.value,
            fatal=notice.fatal,
        )
