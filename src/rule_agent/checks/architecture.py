"""
Structural/security check.

Validates directory placement against the directory manifest, per-file
typing/import/export conventions, API hardening (validation, auth, tenant
isolation, rate limiting, error handling, logging), UI-file conventions and
the protections declared on each route.
"""

import structlog

from rule_agent.checks import predicates as p
from rule_agent.checks.scoring import build_check_result, create_issue, recommend_when
from rule_agent.core.models import (
    CheckResult,
    FileDescriptor,
    FileKind,
    Issue,
    PolicyContext,
    RouteDescriptor,
    RouteKind,
    Severity,
)
from rule_agent.core.utils.patterns import path_matches
from rule_agent.fixtures.models import DirectoryManifest

logger = structlog.get_logger(__name__)

# Kinds held to the typed-source and export conventions; styles, configs and
# migrations are written in their own languages.
SOURCE_KINDS = frozenset({FileKind.COMPONENT, FileKind.PAGE, FileKind.API, FileKind.HOOK, FileKind.UTIL})

recommend = recommend_when(
    [
        (lambda i: i.rule == "typescript_strict", 'Enable strict TypeScript mode and avoid "any" types'),
        (lambda i: i.rule == "api_security", "Implement comprehensive API security (auth, RLS, rate limiting)"),
        (lambda i: i.rule == "next_js_patterns", "Migrate to Next.js App Router for better performance"),
        (lambda i: i.rule == "react_patterns", "Use Server Components by default, Client Components only when needed"),
        (lambda i: i.rule == "directory_structure", "Follow established directory structure conventions"),
    ]
)


class ArchitectureCheck:
    """Validates directory structure, code conventions and API security."""

    name = "Architecture & Security"
    family = "structural"
    threshold = 85
    description = "Validates directory layout, typing, API hardening and route protections"

    def __init__(self, directories: DirectoryManifest):
        self.directories = directories

    async def run(self, context: PolicyContext) -> CheckResult:
        issues: list[Issue] = []
        issues.extend(self.check_directories(context))

        for file in context.files:
            issues.extend(self.check_file(file))
            if file.kind == FileKind.API:
                issues.extend(self.check_api_file(file))
            if file.is_ui:
                issues.extend(self.check_ui_file(file))

        for route in context.routes:
            issues.extend(self.check_route(route))

        logger.debug("architecture_check_complete", module=context.module, issues=len(issues))
        return build_check_result(self.name, self.family, self.threshold, issues, recommend)

    def check_directories(self, context: PolicyContext) -> list[Issue]:
        issues = []
        paths = [f.path for f in context.files]
        if not paths:
            return issues

        for directory in self.directories.required:
            if not any(path_matches(path, directory.path) for path in paths):
                issues.append(
                    create_issue(
                        "missing_required_directory",
                        Severity.ERROR,
                        f"Missing required directory: {directory.path}",
                        "directory_structure",
                        suggestion=f"Create {directory.path} directory for {directory.purpose}",
                    )
                )

        for forbidden in self.directories.forbidden:
            offenders = [path for path in paths if path_matches(path, forbidden.path)]
            if offenders:
                issues.append(
                    create_issue(
                        "forbidden_directory",
                        Severity.ERROR,
                        f"Using forbidden directory: {forbidden.path}. {forbidden.reason}".strip(),
                        "directory_structure",
                        offenders[0],
                        "Move files to appropriate allowed directories",
                    )
                )

        router = self.directories.router
        if any(path_matches(path, router.legacy) for path in paths):
            issues.append(
                create_issue(
                    "pages_router_usage",
                    Severity.ERROR,
                    f"Using legacy router directory {router.legacy}. Must use {router.primary}",
                    "next_js_patterns",
                    suggestion=f"Migrate from {router.legacy} to {router.primary} directory",
                )
            )
        return issues

    def check_file(self, file: FileDescriptor) -> list[Issue]:
        issues = []
        if file.kind not in SOURCE_KINDS:
            return issues
        path = file.path

        if not p.is_typed_source(file):
            issues.append(
                create_issue(
                    "not_typescript",
                    Severity.ERROR,
                    "All files must use TypeScript (.ts or .tsx)",
                    "typescript",
                    path,
                    "Convert to TypeScript and add proper types",
                )
            )
        if p.uses_escape_hatch_type(file):
            issues.append(
                create_issue(
                    "uses_any_type",
                    Severity.ERROR,
                    'Avoid using "any" type. Use proper TypeScript types',
                    "typescript_strict",
                    path,
                    'Replace "any" with specific types or interfaces',
                )
            )
        if p.has_relative_parent_import(file):
            issues.append(
                create_issue(
                    "relative_imports",
                    Severity.WARNING,
                    "Prefer absolute imports using @ alias",
                    "import_patterns",
                    path,
                    "Use @/components, @/lib, @/hooks instead of relative paths",
                    auto_fixable=True,
                )
            )
        # CI-simulated entries carry no content to inspect for exports.
        if file.content is not None and not p.follows_export_convention(file):
            issues.append(
                create_issue(
                    "improper_exports",
                    Severity.WARNING,
                    "File should follow export conventions for its type",
                    "export_patterns",
                    path,
                    "Use appropriate export pattern (named vs default)",
                )
            )
        if p.has_debug_output(file):
            issues.append(
                create_issue(
                    "console_log_usage",
                    Severity.WARNING,
                    "Remove console.log statements. Use proper logging",
                    "logging",
                    path,
                    "Use logger utility instead of console.log",
                    auto_fixable=True,
                )
            )
        return issues

    def check_api_file(self, file: FileDescriptor) -> list[Issue]:
        issues = []
        if file.content is None:
            # Deleted or oversized handlers have no code left to harden.
            return issues
        path = file.path
        if not p.uses_schema_validation(file):
            issues.append(
                create_issue(
                    "missing_zod_validation",
                    Severity.ERROR,
                    "API routes must use Zod for input validation",
                    "api_validation",
                    path,
                    "Add Zod schema validation for request body and params",
                )
            )
        if not p.has_auth_check(file):
            issues.append(
                create_issue(
                    "missing_authentication",
                    Severity.ERROR,
                    "API routes must implement authentication",
                    "api_security",
                    path,
                    "Add validateApiAccess() or similar auth check",
                )
            )
        if not p.has_tenant_isolation(file):
            issues.append(
                create_issue(
                    "missing_rls",
                    Severity.ERROR,
                    "API routes must implement Row Level Security",
                    "database_security",
                    path,
                    "Ensure queries filter by company_id or user_id",
                )
            )
        if not p.has_rate_limit(file):
            issues.append(
                create_issue(
                    "missing_rate_limiting",
                    Severity.WARNING,
                    "API routes should implement rate limiting",
                    "api_security",
                    path,
                    "Add rate limiting middleware or checks",
                )
            )
        if not p.has_error_handling(file):
            issues.append(
                create_issue(
                    "poor_error_handling",
                    Severity.WARNING,
                    "API routes should have comprehensive error handling",
                    "error_handling",
                    path,
                    "Add try-catch blocks and return proper HTTP status codes",
                )
            )
        if p.logs_sensitive_data(file) or p.has_debug_output(file) or not p.has_structured_logging(file):
            issues.append(
                create_issue(
                    "insecure_logging",
                    Severity.WARNING,
                    "API routes should use secure logging (no PII)",
                    "secure_logging",
                    path,
                    "Use logSecure() function and avoid logging sensitive data",
                )
            )
        return issues

    def check_ui_file(self, file: FileDescriptor) -> list[Issue]:
        issues = []
        path = file.path
        if p.is_client_component(file) and not p.needs_client_interactivity(file):
            issues.append(
                create_issue(
                    "unnecessary_client_component",
                    Severity.WARNING,
                    'Use Server Components by default. Only use "use client" when necessary',
                    "react_patterns",
                    path,
                    "Remove \"use client\" if component doesn't need interactivity",
                    auto_fixable=True,
                )
            )
        if p.has_misnamed_hook(file):
            issues.append(
                create_issue(
                    "improper_hook_usage",
                    Severity.WARNING,
                    "Hooks should follow React rules and naming conventions",
                    "react_hooks",
                    path,
                    'Ensure hooks start with "use" and follow rules of hooks',
                )
            )
        if p.fetches_data(file) and not p.uses_caching_fetch(file):
            issues.append(
                create_issue(
                    "missing_swr",
                    Severity.INFO,
                    "Consider using SWR for data fetching and caching",
                    "data_fetching",
                    path,
                    "Use useSWR hook for API calls and caching",
                )
            )
        if file.content is not None and not p.has_conventional_structure(file):
            issues.append(
                create_issue(
                    "poor_component_structure",
                    Severity.INFO,
                    "Component should follow standard structure (imports, types, component, export)",
                    "component_structure",
                    path,
                    "Organize imports, types, and component definition properly",
                )
            )
        return issues

    def check_route(self, route: RouteDescriptor) -> list[Issue]:
        if route.kind != RouteKind.API:
            return []

        requirements = [
            (route.auth, "api_no_auth", Severity.ERROR, "authentication", "api_security",
             "Add authentication middleware to API route"),
            (route.rls, "api_no_rls", Severity.ERROR, "Row Level Security", "database_security",
             "Implement RLS in database queries"),
            (route.validation, "api_no_validation", Severity.ERROR, "input validation", "api_validation",
             "Add Zod schema validation"),
            (route.rate_limit, "api_no_rate_limit", Severity.WARNING, "rate limiting", "api_security",
             "Add rate limiting middleware"),
        ]
        return [
            create_issue(
                issue_type,
                severity,
                f"API route {route.method.value} {route.path} lacks {what}",
                rule,
                suggestion=suggestion,
            )
            for met, issue_type, severity, what, rule, suggestion in requirements
            if not met
        ]
