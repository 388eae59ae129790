"""Reference fixtures (brand tokens, directory manifest, UI kit, event-bus contract)."""

from rule_agent.fixtures.loader import FixtureSet, clear_fixture_cache, load_fixture
from rule_agent.fixtures.models import (
    AllowedDirectory,
    BrandTokens,
    DirectoryManifest,
    EventBusContract,
    EventDefinition,
    ForbiddenDirectory,
    UIKitComponent,
    UIKitManifest,
)

__all__ = [
    "AllowedDirectory",
    "BrandTokens",
    "DirectoryManifest",
    "EventBusContract",
    "EventDefinition",
    "FixtureSet",
    "ForbiddenDirectory",
    "UIKitComponent",
    "UIKitManifest",
    "clear_fixture_cache",
    "load_fixture",
]
