from typing import Protocol, runtime_checkable

from rule_agent.core.models import PolicyContext, RuleAgentResult


@runtime_checkable
class Reporter(Protocol):
    """Sink for a finished evaluation. Failures are isolated by the orchestrator."""

    name: str

    async def report(self, result: RuleAgentResult, context: PolicyContext) -> None: ...
