"""
Style/branding check.

Validates that UI files reuse the shared UI kit, stick to brand tokens
(colors, typography, spacing grid, radius), animate interactions, stay
accessible, render loading/empty/error states and respond to breakpoints.
"""

import structlog

from rule_agent.checks import predicates as p
from rule_agent.checks.scoring import build_check_result, create_issue, recommend_when
from rule_agent.core.models import CheckResult, FileDescriptor, FileKind, Issue, PolicyContext, Severity
from rule_agent.fixtures.models import BrandTokens, UIKitManifest

logger = structlog.get_logger(__name__)

recommend = recommend_when(
    [
        (lambda i: i.type == "hardcoded_colors", "Migrate to CSS variables for consistent theming"),
        (lambda i: i.type == "missing_ui_component", "Use components from the shared UI kit"),
        (lambda i: i.type == "missing_motion", "Add Framer Motion for premium animations"),
        (lambda i: i.rule == "accessibility", "Improve accessibility with ARIA labels and semantic HTML"),
        (lambda i: "state" in i.rule, "Implement loading, empty, and error states"),
    ]
)


class BrandingCheck:
    """Validates UX/UI and brand compliance of component, page and style files."""

    name = "Branding & UX Premium"
    family = "style"
    threshold = 80
    description = "Validates design-system, brand token and accessibility standards"

    def __init__(self, brand_tokens: BrandTokens, ui_kit: UIKitManifest):
        self.brand_tokens = brand_tokens
        self.ui_kit = ui_kit
        typography = brand_tokens.typography
        self.foreign_font = p.declares_foreign_font(typography.font_family, typography.font_class)
        self.off_grid_spacing = p.uses_off_grid_spacing(brand_tokens.spacing.allowed_steps)
        self.non_preferred_radius = p.uses_non_preferred_radius(brand_tokens.border_radius.preferred)
        self.kit_rules = [
            (component, p.should_use_kit_component(component.trigger), p.uses_kit_component(component.name))
            for component in ui_kit.required
            if component.trigger
        ]

    async def run(self, context: PolicyContext) -> CheckResult:
        issues: list[Issue] = []
        for file in context.files:
            if file.is_ui:
                issues.extend(self.check_component(file))
            elif file.kind == FileKind.STYLE:
                issues.extend(self.check_stylesheet(file))

        # Module-level absences are judged only on files whose content is known.
        if context.inspectable_files:
            issues.extend(self.check_module(context))

        logger.debug("branding_check_complete", module=context.module, issues=len(issues))
        return build_check_result(self.name, self.family, self.threshold, issues, recommend)

    def check_component(self, file: FileDescriptor) -> list[Issue]:
        issues = []
        path = file.path

        for component, should_use, uses in self.kit_rules:
            if should_use(file) and not uses(file):
                issues.append(
                    create_issue(
                        "missing_ui_component",
                        Severity.WARNING,
                        f"Should use {component.name} from UI kit instead of custom implementation",
                        "ui_kit_compliance",
                        path,
                        f'Import {component.name} from "{component.path}"',
                    )
                )

        if p.has_inline_style(file):
            issues.append(
                create_issue(
                    "hardcoded_styles",
                    Severity.ERROR,
                    "Found hardcoded styles. Use Tailwind CSS classes and design tokens",
                    "design_tokens",
                    path,
                    "Replace hardcoded styles with Tailwind classes",
                )
            )
        if p.has_literal_color(file):
            issues.append(
                create_issue(
                    "hardcoded_colors",
                    Severity.ERROR,
                    "Found hardcoded colors. Use CSS variables from brand tokens",
                    "brand_tokens",
                    path,
                    "Use var(--primary), bg-primary, text-foreground and other token classes",
                )
            )
        if self.foreign_font(file):
            font = self.brand_tokens.typography.font_family
            issues.append(
                create_issue(
                    "wrong_font",
                    Severity.WARNING,
                    f"Use {font} as the primary font",
                    "typography",
                    path,
                    f"Use the {self.brand_tokens.typography.font_class} class",
                )
            )
        if self.off_grid_spacing(file):
            issues.append(
                create_issue(
                    "non_grid_spacing",
                    Severity.WARNING,
                    f"Use the {self.brand_tokens.spacing.grid_px}px spacing grid",
                    "spacing_grid",
                    path,
                    "Use spacing steps such as p-2, p-4, p-6, p-8",
                )
            )
        if self.non_preferred_radius(file):
            preferred = ", ".join(f"rounded-{r}" for r in self.brand_tokens.border_radius.preferred)
            issues.append(
                create_issue(
                    "non_preferred_radius",
                    Severity.INFO,
                    f"Prefer {preferred} for a premium look",
                    "border_radius",
                    path,
                    "Use rounded-2xl for cards and rounded-full for buttons",
                )
            )
        if p.needs_motion(file) and not p.uses_motion_library(file):
            issues.append(
                create_issue(
                    "missing_motion",
                    Severity.WARNING,
                    "Interactive elements should use Framer Motion for smooth animations",
                    "animations",
                    path,
                    "Add motion.div or AnimatePresence for transitions",
                )
            )

        issues.extend(self.check_accessibility(file))
        issues.extend(self.check_states(file))

        if file.content is not None and not p.is_responsive(file):
            issues.append(
                create_issue(
                    "not_responsive",
                    Severity.WARNING,
                    "Component should be responsive using Tailwind breakpoints",
                    "responsive_design",
                    path,
                    "Add responsive classes like md:, lg:, xl:",
                )
            )
        return issues

    def check_accessibility(self, file: FileDescriptor) -> list[Issue]:
        issues = []
        if p.has_interactive_elements(file) and not p.has_aria_labels(file):
            issues.append(
                create_issue(
                    "missing_aria_labels",
                    Severity.ERROR,
                    "Interactive elements need ARIA labels for accessibility",
                    "accessibility",
                    file.path,
                    "Add aria-label, aria-labelledby, or aria-describedby",
                )
            )
        if p.has_non_semantic_click(file):
            issues.append(
                create_issue(
                    "non_semantic_html",
                    Severity.WARNING,
                    "Use semantic HTML elements instead of div/span with click handlers",
                    "semantic_html",
                    file.path,
                    "Use <button> or the UI kit Button instead of a clickable div",
                )
            )
            if not p.has_keyboard_handlers(file):
                issues.append(
                    create_issue(
                        "missing_keyboard_nav",
                        Severity.WARNING,
                        "Clickable elements should support keyboard navigation",
                        "keyboard_navigation",
                        file.path,
                        "Add onKeyDown handlers for Enter and Space keys",
                    )
                )
        return issues

    def check_states(self, file: FileDescriptor) -> list[Issue]:
        issues = []
        if p.has_async_operations(file) and not p.has_loading_state(file):
            issues.append(
                create_issue(
                    "missing_loading_state",
                    Severity.WARNING,
                    "Async operations should show loading state",
                    "loading_states",
                    file.path,
                    "Add loading spinner or skeleton while data loads",
                )
            )
        if p.renders_lists(file) and not p.has_empty_state(file):
            issues.append(
                create_issue(
                    "missing_empty_state",
                    Severity.INFO,
                    "Data lists should handle empty state gracefully",
                    "empty_states",
                    file.path,
                    "Add EmptyState component when no data available",
                )
            )
        if p.handles_errors(file) and not p.has_error_state(file):
            issues.append(
                create_issue(
                    "missing_error_state",
                    Severity.WARNING,
                    "Error handling should include user-friendly error state",
                    "error_states",
                    file.path,
                    "Add ErrorBoundary or error message display",
                )
            )
        return issues

    def check_stylesheet(self, file: FileDescriptor) -> list[Issue]:
        issues = []
        if file.content is None:
            return issues
        if not p.uses_theme_variables(file):
            issues.append(
                create_issue(
                    "no_css_variables",
                    Severity.ERROR,
                    "Styles should use CSS variables for theming",
                    "css_variables",
                    file.path,
                    "Use var(--primary), var(--background), etc.",
                )
            )
        if not p.has_dark_mode_selector(file):
            issues.append(
                create_issue(
                    "no_theme_support",
                    Severity.WARNING,
                    "Styles should support both light and dark themes",
                    "theme_support",
                    file.path,
                    "Add .dark selector support",
                )
            )
        return issues

    def check_module(self, context: PolicyContext) -> list[Issue]:
        issues = []
        if context.module != "core" and not p.is_layout_file.any_file(context.files):
            issues.append(
                create_issue(
                    "missing_layout",
                    Severity.WARNING,
                    "Module should use consistent layout components",
                    "layout_consistency",
                    suggestion="Import and use Sidebar/Header components",
                )
            )
        if not p.has_theme_switching.any_file(context.inspectable_files):
            issues.append(
                create_issue(
                    "no_theme_implementation",
                    Severity.INFO,
                    "Module should support light/dark theme switching",
                    "theme_consistency",
                    suggestion="Add theme support with dark: classes",
                )
            )
        return issues
