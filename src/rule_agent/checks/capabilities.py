"""
Integration capabilities consulted by the integration check.

The event bus and the mission system are external collaborators. The check
only talks to them through these two protocols, so deployments can plug in
a live registry instead of the manifest-backed defaults below.
"""

import re
from typing import Protocol, runtime_checkable

from rule_agent.core.models import FileDescriptor
from rule_agent.fixtures.models import EventBusContract

_EMIT_CALL = re.compile(
    r"""(?:eventBus\.)?(?:emit|publish)\(\s*['"]([\w.:-]+)['"]\s*(?:,\s*\{([^}]*)\})?"""
)
_PAYLOAD_KEY = re.compile(r"(?:^|,)\s*['\"]?(\w+)['\"]?\s*(?=[:,]|$)")


@runtime_checkable
class EventBusCapability(Protocol):
    def should_emit(self, module: str) -> bool: ...

    def should_listen(self, module: str) -> bool: ...

    def payload_violations(self, file: FileDescriptor) -> list[str]:
        """Describe every emitted payload in ``file`` that breaks the contract."""
        ...


@runtime_checkable
class MissionCapability(Protocol):
    def should_create_missions(self, module: str) -> bool: ...

    def missing_payload_fields(self, file: FileDescriptor) -> list[str]: ...


def _payload_keys(body: str) -> set[str]:
    flattened = " ".join(body.split())
    return set(_PAYLOAD_KEY.findall(flattened))


class ContractEventBus:
    """EventBusCapability backed by the event-bus contract manifest."""

    def __init__(self, contract: EventBusContract):
        self.contract = contract

    def should_emit(self, module: str) -> bool:
        return module in self.contract.emitting_modules

    def should_listen(self, module: str) -> bool:
        return module in self.contract.listening_modules

    def payload_violations(self, file: FileDescriptor) -> list[str]:
        """
        Check each literal emit payload against the contract.

        Only flat object literals are inspected: the payload is captured up to
        its first closing brace, so spread and nested payloads are skipped
        rather than judged on a truncated key set.
        """
        violations = []
        for match in _EMIT_CALL.finditer(file.text):
            name, body = match.group(1), match.group(2)
            event = self.contract.event(name)
            if event is None:
                violations.append(f"unknown event '{name}'")
                continue
            if body is None or "..." in body or "{" in body:
                # Spread, nested or non-literal payloads cannot be checked textually.
                continue
            missing = sorted(set(event.payload) - _payload_keys(body))
            if missing:
                violations.append(f"event '{name}' missing {', '.join(missing)}")
        return violations


class ContractMissions:
    """MissionCapability backed by the event-bus contract manifest."""

    def __init__(self, contract: EventBusContract):
        self.contract = contract

    def should_create_missions(self, module: str) -> bool:
        return module in self.contract.mission_modules

    def missing_payload_fields(self, file: FileDescriptor) -> list[str]:
        text = file.text
        return [
            field
            for field in self.contract.mission_payload_fields
            if not re.search(rf"\b{re.escape(field)}\b\s*[:,}}]", text)
        ]
