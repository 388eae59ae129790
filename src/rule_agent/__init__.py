"""
Rule Agent: governance policy checks for proposed code changes.

Build a PolicyContext describing a change, evaluate it with a RuleAgent and
read the weighted score, the issues found and the pass/warning/fail verdict.
"""

from rule_agent.checks import ArchitectureCheck, BrandingCheck, Check, IntegrationCheck
from rule_agent.core.config import PRESET_CONFIGS, CheckConfig, GatingConfig, RuleAgentConfig
from rule_agent.core.errors import (
    AgentExecutionError,
    FixtureError,
    GateFailedError,
    RuleAgentError,
    UnknownPresetError,
)
from rule_agent.core.models import (
    CheckResult,
    FileDescriptor,
    FileKind,
    GateStatus,
    Issue,
    PolicyContext,
    RouteDescriptor,
    RuleAgentResult,
    Severity,
    Summary,
)
from rule_agent.engine import (
    RuleAgent,
    create_agent,
    create_context,
    create_file_info,
    create_route_info,
    run_rule_agent,
)
from rule_agent.reporters import InteractiveNoticeReporter, Reporter, StreamReporter

__all__ = [
    "PRESET_CONFIGS",
    "AgentExecutionError",
    "ArchitectureCheck",
    "BrandingCheck",
    "Check",
    "CheckConfig",
    "CheckResult",
    "FileDescriptor",
    "FileKind",
    "FixtureError",
    "GateFailedError",
    "GateStatus",
    "GatingConfig",
    "IntegrationCheck",
    "InteractiveNoticeReporter",
    "Issue",
    "PolicyContext",
    "Reporter",
    "RouteDescriptor",
    "RuleAgent",
    "RuleAgentConfig",
    "RuleAgentError",
    "RuleAgentResult",
    "Severity",
    "StreamReporter",
    "Summary",
    "UnknownPresetError",
    "create_agent",
    "create_context",
    "create_file_info",
    "create_route_info",
    "run_rule_agent",
]
