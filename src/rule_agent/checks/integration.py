"""
Integration check.

Validates that a module takes part in the cross-module workflow: event-bus
emission and listening, mission creation, consistent API envelopes, UI-kit
reuse and module-level data-flow/loading/error-boundary patterns. Which
modules are expected to emit, listen or create missions is decided by the
injected capabilities, not by this check.
"""

import structlog

from rule_agent.checks import predicates as p
from rule_agent.checks.capabilities import EventBusCapability, MissionCapability
from rule_agent.checks.scoring import build_check_result, create_issue, recommend_when
from rule_agent.core.models import CheckResult, FileKind, Issue, PolicyContext, Severity
from rule_agent.fixtures.models import UIKitManifest

logger = structlog.get_logger(__name__)

recommend = recommend_when(
    [
        (lambda i: i.rule.startswith("event_"), "Integrate with event bus for module communication"),
        (lambda i: i.rule.startswith("mission"), "Add mission creation for actionable insights"),
        (lambda i: i.rule.startswith("api_"), "Ensure consistent API response formats and error handling"),
        (lambda i: i.rule == "ui_kit_reuse", "Maximize UI kit component reuse for consistency"),
        (lambda i: "states" in i.rule, "Implement proper loading, empty, and error states"),
    ]
)


class IntegrationCheck:
    """Validates event-bus, mission, API and UI-kit integration of a module."""

    name = "Integration & Workflow"
    family = "integration"
    threshold = 75
    description = "Validates event-bus, mission and API integration patterns"

    def __init__(self, event_bus: EventBusCapability, missions: MissionCapability, ui_kit: UIKitManifest):
        self.event_bus = event_bus
        self.missions = missions
        self.custom_kit_markup = p.reimplements_kit_component(ui_kit.names)

    async def run(self, context: PolicyContext) -> CheckResult:
        issues: list[Issue] = []
        if context.inspectable_files:
            issues.extend(self.check_event_bus(context))
            issues.extend(self.check_missions(context))
            issues.extend(self.check_api(context))
            issues.extend(self.check_ui_kit(context))
            issues.extend(self.check_workflow(context))

        logger.debug("integration_check_complete", module=context.module, issues=len(issues))
        return build_check_result(self.name, self.family, self.threshold, issues, recommend)

    def check_event_bus(self, context: PolicyContext) -> list[Issue]:
        issues = []
        module = context.module
        if self.event_bus.should_emit(module) and not p.emits_events.any_file(context.files):
            issues.append(
                create_issue(
                    "missing_event_emission",
                    Severity.WARNING,
                    f"Module {module} should emit events to event bus",
                    "event_bus_integration",
                    suggestion="Add eventBus.emit() calls for key module actions",
                )
            )
        if self.event_bus.should_listen(module) and not p.listens_to_events.any_file(context.files):
            issues.append(
                create_issue(
                    "missing_event_listening",
                    Severity.INFO,
                    f"Module {module} could benefit from listening to other module events",
                    "event_bus_integration",
                    suggestion="Add eventBus.on() listeners for relevant events",
                )
            )

        for file in context.files:
            if not p.emits_events(file):
                continue
            for violation in self.event_bus.payload_violations(file):
                issues.append(
                    create_issue(
                        "invalid_event_payload",
                        Severity.WARNING,
                        f"Event payload doesn't match contract: {violation}",
                        "event_payload_validation",
                        file.path,
                        "Ensure event payload matches the event bus contract",
                    )
                )
        return issues

    def check_missions(self, context: PolicyContext) -> list[Issue]:
        issues = []
        module = context.module
        if self.missions.should_create_missions(module) and not p.creates_missions.any_file(context.files):
            issues.append(
                create_issue(
                    "missing_mission_creation",
                    Severity.INFO,
                    f"Module {module} could create missions for actionable insights",
                    "missions_integration",
                    suggestion="Add a create-mission action for insights and recommendations",
                )
            )

        for file in context.files:
            if not p.creates_missions(file):
                continue
            missing = self.missions.missing_payload_fields(file)
            if missing:
                issues.append(
                    create_issue(
                        "improper_mission_payload",
                        Severity.WARNING,
                        f"Mission creation should include proper payload structure (missing {', '.join(missing)})",
                        "mission_payload",
                        file.path,
                        "Include module, title, summary, priority and tags fields",
                    )
                )
        return issues

    def check_api(self, context: PolicyContext) -> list[Issue]:
        issues = []
        api_files = [f for f in context.files_of(FileKind.API) if f.content is not None]
        for file in api_files:
            if not p.uses_response_envelope(file):
                issues.append(
                    create_issue(
                        "inconsistent_api_response",
                        Severity.WARNING,
                        "API should return consistent response format",
                        "api_consistency",
                        file.path,
                        "Use NextResponse.json() with consistent structure",
                    )
                )
            if not p.returns_error_status(file):
                issues.append(
                    create_issue(
                        "poor_error_responses",
                        Severity.WARNING,
                        "API should return proper error responses with status codes",
                        "api_error_handling",
                        file.path,
                        "Return appropriate HTTP status codes and error messages",
                    )
                )

        documented = any(p.is_documentation(f) and p.documents_api(f) for f in context.files)
        if api_files and not documented:
            issues.append(
                create_issue(
                    "missing_api_documentation",
                    Severity.INFO,
                    "Module with APIs should include documentation",
                    "api_documentation",
                    suggestion="Add API endpoint documentation to README",
                )
            )
        return issues

    def check_ui_kit(self, context: PolicyContext) -> list[Issue]:
        issues = []
        for file in context.files_of(FileKind.COMPONENT):
            if file.content is None:
                continue
            if self.custom_kit_markup(file):
                issues.append(
                    create_issue(
                        "custom_ui_implementation",
                        Severity.WARNING,
                        "Avoid custom implementations of existing UI kit components",
                        "ui_kit_reuse",
                        file.path,
                        "Use existing UI kit components instead of custom implementations",
                    )
                )
            if not p.follows_component_patterns(file):
                issues.append(
                    create_issue(
                        "inconsistent_component_pattern",
                        Severity.INFO,
                        "Component should follow established patterns",
                        "component_patterns",
                        file.path,
                        "Follow forwardRef, proper props typing, and export patterns",
                    )
                )
        return issues

    def check_workflow(self, context: PolicyContext) -> list[Issue]:
        issues = []
        files = context.inspectable_files
        if not p.manages_state.any_file(files):
            issues.append(
                create_issue(
                    "poor_data_flow",
                    Severity.INFO,
                    "Module should follow proper data flow patterns (SWR, state management)",
                    "data_flow_patterns",
                    suggestion="Use SWR for server state, useState for local state",
                )
            )
        if p.performs_async_work.any_file(files) and not p.has_loading_state.any_file(files):
            issues.append(
                create_issue(
                    "missing_loading_states",
                    Severity.WARNING,
                    "Module should implement loading states for better UX",
                    "loading_states",
                    suggestion="Add loading spinners, skeletons, or progress indicators",
                )
            )
        if p.needs_error_boundary.any_file(files) and not p.has_error_boundary.any_file(files):
            issues.append(
                create_issue(
                    "missing_error_boundaries",
                    Severity.INFO,
                    "Module should implement error boundaries for robustness",
                    "error_boundaries",
                    suggestion="Add ErrorBoundary components around error-prone sections",
                )
            )
        return issues
