"""
Loads reference fixtures (YAML manifests) into typed models.

Fixture files are read-only inputs; parsed manifests are cached per path and
modification time so repeated runs do not hit the filesystem.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

import structlog
import yaml
from cachetools import LRUCache
from pydantic import BaseModel, ValidationError

from rule_agent.core.config.check_config import FixtureConfig
from rule_agent.core.errors import FixtureError
from rule_agent.fixtures.models import BrandTokens, DirectoryManifest, EventBusContract, UIKitManifest

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

_FIXTURE_CACHE: LRUCache = LRUCache(maxsize=64)


def load_fixture(path: str | Path, model: type[M]) -> M:
    """
    Load a YAML fixture and validate it against ``model``.

    Args:
        path: Location of the YAML document.
        model: Pydantic model describing the document.

    Returns:
        The validated manifest.

    Raises:
        FixtureError: If the file is missing, is not a mapping, or fails validation.
    """
    path = Path(path)
    try:
        mtime = os.stat(path).st_mtime_ns
    except FileNotFoundError:
        raise FixtureError(str(path), "file not found") from None

    key = (str(path), mtime, model.__name__)
    cached = _FIXTURE_CACHE.get(key)
    if cached is not None:
        return cached

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise FixtureError(str(path), f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise FixtureError(str(path), "top-level document must be a mapping")

    try:
        manifest = model.model_validate(data)
    except ValidationError as e:
        raise FixtureError(str(path), f"does not match {model.__name__}: {e}") from e

    _FIXTURE_CACHE[key] = manifest
    logger.debug("fixture_loaded", path=str(path), model=model.__name__)
    return manifest


def clear_fixture_cache() -> None:
    _FIXTURE_CACHE.clear()


@dataclass(frozen=True)
class FixtureSet:
    """All reference manifests consulted by the default checks."""

    brand_tokens: BrandTokens
    allowed_dirs: DirectoryManifest
    ui_kit: UIKitManifest
    event_bus: EventBusContract

    @classmethod
    def load(cls, config: FixtureConfig | None = None) -> "FixtureSet":
        config = config or FixtureConfig()
        return cls(
            brand_tokens=load_fixture(config.brand_tokens, BrandTokens),
            allowed_dirs=load_fixture(config.allowed_dirs, DirectoryManifest),
            ui_kit=load_fixture(config.ui_kit, UIKitManifest),
            event_bus=load_fixture(config.event_bus_contract, EventBusContract),
        )
