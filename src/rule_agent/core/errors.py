"""
Core error classes for the Rule Agent.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rule_agent.core.models import RuleAgentResult


class RuleAgentError(Exception):
    """Base class for every error raised by the Rule Agent."""

    pass


class AgentExecutionError(RuleAgentError):
    """Raised when an evaluation run cannot complete as a whole (e.g. it times out)."""

    pass


class GateFailedError(RuleAgentError):
    """Raised by the assert entrypoint when the gate verdict is 'fail'."""

    def __init__(self, module: str, messages: list[str], result: "RuleAgentResult") -> None:
        self.module = module
        self.messages = messages
        self.result = result
        detail = "\n".join(f"❌ {message}" for message in messages) or "❌ gate failed without fatal issues"
        super().__init__(f"🛡️ Rule Agent FAILED for module '{module}' (score {result.overall_score}/100):\n{detail}")


class FixtureError(RuleAgentError):
    """Raised when a reference fixture is missing or malformed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Fixture {path}: {reason}")


class UnknownPresetError(RuleAgentError):
    """Raised when a configuration preset name is not registered."""

    pass
