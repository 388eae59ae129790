import sys
from typing import TextIO

import structlog

from rule_agent.core.models import PolicyContext, RuleAgentResult
from rule_agent.presentation.report_formatter import format_stream_report

logger = structlog.get_logger(__name__)


class StreamReporter:
    """Writes the plain-text report to a stream (stdout by default) for build logs."""

    name = "Console Reporter"

    def __init__(self, stream: TextIO | None = None, verbose: bool = False):
        self._stream = stream
        self.verbose = verbose

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so test harnesses that swap sys.stdout are honoured.
        return self._stream if self._stream is not None else sys.stdout

    async def report(self, result: RuleAgentResult, context: PolicyContext) -> None:
        self.stream.write(format_stream_report(result, context, verbose=self.verbose))
        self.stream.flush()
        logger.info(
            "rule_agent.report",
            module=context.module,
            score=result.overall_score,
            gate=result.gate_status.value,
            errors=result.summary.error_count,
            warnings=result.summary.warning_count,
        )
