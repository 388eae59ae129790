"""Check contract.

A check is any object exposing ``name``, ``family``, ``threshold`` and an
async ``run(context)`` returning a CheckResult. Implementations share scoring
through the free functions in ``rule_agent.checks.scoring`` rather than a
common base class.
"""

from typing import Protocol, runtime_checkable

from rule_agent.core.models import CheckResult, PolicyContext


@runtime_checkable
class Check(Protocol):
    """Contract every policy check satisfies.

    Attributes:
        name: Human-readable check name shown in reports.
        family: Weighting family (style, structural, integration, or a custom id).
        threshold: Minimum score required for the check to pass.
    """

    name: str
    family: str
    threshold: int

    async def run(self, context: PolicyContext) -> CheckResult:
        """Evaluate the context. Must not mutate it and must be deterministic."""
        ...
