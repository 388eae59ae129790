"""
Configuration package - unified access point.

This package provides the Rule Agent configuration classes, the named presets
and the global environment settings instance.
"""

from rule_agent.core.config.check_config import (
    CheckConfig,
    FixtureConfig,
    GatingConfig,
    RuleAgentConfig,
)
from rule_agent.core.config.presets import (
    PRESET_CONFIGS,
    deep_merge,
    get_preset,
    merge_config,
    preset_config,
)
from rule_agent.core.config.settings import LoggingConfig, Settings, configure_logging, settings

__all__ = [
    "CheckConfig",
    "FixtureConfig",
    "GatingConfig",
    "LoggingConfig",
    "PRESET_CONFIGS",
    "RuleAgentConfig",
    "Settings",
    "configure_logging",
    "deep_merge",
    "get_preset",
    "merge_config",
    "preset_config",
    "settings",
]
