"""
Rule Agent configuration value objects.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rule_agent.core.models import SCHEMA_VERSION, Severity

FIXTURES_DIR = Path(__file__).resolve().parent.parent.parent / "fixtures"


@dataclass
class CheckConfig:
    """Per-check enablement and fatal severity floor."""

    enabled: bool = True
    severity: Severity = Severity.ERROR
    rules: dict[str, Any] = field(default_factory=dict)
    fixtures: list[str] = field(default_factory=list)


@dataclass
class GatingConfig:
    """Gate policy applied to the aggregated result."""

    enabled: bool = True
    fail_on_error: bool = True
    fail_on_warning_count: int = 10


@dataclass
class FixtureConfig:
    """Locations of the reference manifests consulted by the checks."""

    brand_tokens: str = str(FIXTURES_DIR / "brand_tokens.yaml")
    allowed_dirs: str = str(FIXTURES_DIR / "allowed_dirs.yaml")
    ui_kit: str = str(FIXTURES_DIR / "ui_kit.yaml")
    event_bus_contract: str = str(FIXTURES_DIR / "event_bus_contract.yaml")

    @classmethod
    def from_dir(cls, directory: str | Path) -> "FixtureConfig":
        base = Path(directory)
        return cls(
            brand_tokens=str(base / "brand_tokens.yaml"),
            allowed_dirs=str(base / "allowed_dirs.yaml"),
            ui_kit=str(base / "ui_kit.yaml"),
            event_bus_contract=str(base / "event_bus_contract.yaml"),
        )


def _default_checks() -> dict[str, CheckConfig]:
    return {
        "branding": CheckConfig(severity=Severity.ERROR, fixtures=["brand_tokens", "ui_kit"]),
        "architecture": CheckConfig(severity=Severity.ERROR, fixtures=["allowed_dirs"]),
        "integration": CheckConfig(severity=Severity.WARNING, fixtures=["event_bus_contract", "ui_kit"]),
    }


@dataclass
class RuleAgentConfig:
    """Complete configuration of a RuleAgent instance."""

    version: str = SCHEMA_VERSION
    checks: dict[str, CheckConfig] = field(default_factory=_default_checks)
    reporters: list[str] = field(default_factory=lambda: ["console", "ui"])
    gating: GatingConfig = field(default_factory=GatingConfig)
    fixtures: FixtureConfig = field(default_factory=FixtureConfig)
    fatal_severity: Severity = Severity.ERROR
    execution_timeout: float | None = None

    def check(self, check_id: str) -> CheckConfig | None:
        return self.checks.get(check_id)

    def is_enabled(self, check_id: str) -> bool:
        # Checks registered without a config entry run by default.
        check_config = self.checks.get(check_id)
        return check_config is None or check_config.enabled

    def fatal_floor(self, check_id: str) -> Severity:
        check_config = self.checks.get(check_id)
        return check_config.severity if check_config else self.fatal_severity
