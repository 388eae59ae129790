"""
Named configuration presets and partial-config merging.
"""

import copy
from dataclasses import asdict
from typing import Any

from rule_agent.core.config.check_config import (
    CheckConfig,
    FixtureConfig,
    GatingConfig,
    RuleAgentConfig,
)
from rule_agent.core.errors import UnknownPresetError
from rule_agent.core.models import Severity

PRESET_CONFIGS: dict[str, dict[str, Any]] = {
    # Production: everything blocks, low warning tolerance
    "strict": {
        "checks": {
            "branding": {"enabled": True, "severity": "error"},
            "architecture": {"enabled": True, "severity": "error"},
            "integration": {"enabled": True, "severity": "error"},
        },
        "gating": {"enabled": True, "fail_on_error": True, "fail_on_warning_count": 5},
    },
    # Local development: report only, never block
    "development": {
        "checks": {
            "branding": {"enabled": True, "severity": "warning"},
            "architecture": {"enabled": True, "severity": "warning"},
            "integration": {"enabled": True, "severity": "info"},
        },
        "gating": {"enabled": False, "fail_on_error": False, "fail_on_warning_count": 20},
    },
    "ci": {
        "checks": {
            "branding": {"enabled": True, "severity": "error"},
            "architecture": {"enabled": True, "severity": "error"},
            "integration": {"enabled": True, "severity": "warning"},
        },
        "reporters": ["console"],
        "gating": {"enabled": True, "fail_on_error": True, "fail_on_warning_count": 10},
    },
}


def deep_merge(base: dict[str, Any], partial: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``partial`` into a copy of ``base``. Lists are replaced, not concatenated."""
    merged = copy.deepcopy(base)
    for key, value in partial.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def config_to_dict(config: RuleAgentConfig) -> dict[str, Any]:
    return asdict(config)


def config_from_dict(data: dict[str, Any]) -> RuleAgentConfig:
    """Build a RuleAgentConfig from a plain mapping (severities may be strings)."""
    defaults = RuleAgentConfig()
    checks = {
        check_id: CheckConfig(
            enabled=bool(values.get("enabled", True)),
            severity=Severity(values.get("severity", Severity.ERROR)),
            rules=dict(values.get("rules") or {}),
            fixtures=list(values.get("fixtures") or []),
        )
        for check_id, values in (data.get("checks") or {}).items()
    }
    gating = data.get("gating") or {}
    fixtures = data.get("fixtures") or {}
    timeout = data.get("execution_timeout")
    return RuleAgentConfig(
        version=data.get("version", defaults.version),
        checks=checks,
        reporters=list(data.get("reporters", defaults.reporters)),
        gating=GatingConfig(
            enabled=bool(gating.get("enabled", defaults.gating.enabled)),
            fail_on_error=bool(gating.get("fail_on_error", defaults.gating.fail_on_error)),
            fail_on_warning_count=int(gating.get("fail_on_warning_count", defaults.gating.fail_on_warning_count)),
        ),
        fixtures=FixtureConfig(**{**asdict(defaults.fixtures), **fixtures}),
        fatal_severity=Severity(data.get("fatal_severity", defaults.fatal_severity)),
        execution_timeout=float(timeout) if timeout is not None else None,
    )


def merge_config(config: RuleAgentConfig, partial: dict[str, Any]) -> RuleAgentConfig:
    """Return a new config with ``partial`` merged over ``config``."""
    return config_from_dict(deep_merge(config_to_dict(config), partial))


def get_preset(name: str) -> dict[str, Any]:
    try:
        return copy.deepcopy(PRESET_CONFIGS[name])
    except KeyError:
        raise UnknownPresetError(f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESET_CONFIGS))}") from None


def preset_config(name: str, base: RuleAgentConfig | None = None) -> RuleAgentConfig:
    """Build a full config by merging a named preset over ``base`` (defaults when omitted)."""
    return merge_config(base or RuleAgentConfig(), get_preset(name))
