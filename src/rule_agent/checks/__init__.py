"""Policy checks and the default check registry."""

from rule_agent.checks.architecture import ArchitectureCheck
from rule_agent.checks.base import Check
from rule_agent.checks.branding import BrandingCheck
from rule_agent.checks.capabilities import (
    ContractEventBus,
    ContractMissions,
    EventBusCapability,
    MissionCapability,
)
from rule_agent.checks.integration import IntegrationCheck
from rule_agent.checks.scoring import build_check_result, calculate_score, create_issue, dominant_severity
from rule_agent.fixtures import FixtureSet


def default_checks(fixtures: FixtureSet) -> dict[str, Check]:
    """Build the three default checks, keyed by the ids used in configuration."""
    return {
        "branding": BrandingCheck(fixtures.brand_tokens, fixtures.ui_kit),
        "architecture": ArchitectureCheck(fixtures.allowed_dirs),
        "integration": IntegrationCheck(
            ContractEventBus(fixtures.event_bus),
            ContractMissions(fixtures.event_bus),
            fixtures.ui_kit,
        ),
    }


__all__ = [
    "ArchitectureCheck",
    "BrandingCheck",
    "Check",
    "ContractEventBus",
    "ContractMissions",
    "EventBusCapability",
    "IntegrationCheck",
    "MissionCapability",
    "build_check_result",
    "calculate_score",
    "create_issue",
    "default_checks",
    "dominant_severity",
]
