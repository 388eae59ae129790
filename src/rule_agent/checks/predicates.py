"""Named content heuristics used by the checks.

Every heuristic is a ``Predicate``: a named, independently testable boolean
test over a FileDescriptor (or raw text). The matching strategy lives in the
predicate's ``matcher`` so it can be replaced (regular expressions today,
structural analysis later) without touching a check's control flow.

These are shallow pattern matches over raw text. They produce false
positives and false negatives by nature.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from rule_agent.core.models import FileDescriptor, FileKind

Matcher = Callable[[FileDescriptor], bool]


@dataclass(frozen=True)
class Predicate:
    """A named heuristic over a file."""

    name: str
    matcher: Matcher
    description: str = ""

    def __call__(self, subject: FileDescriptor | str) -> bool:
        if isinstance(subject, str):
            subject = FileDescriptor(path="<inline>", kind=FileKind.UTIL, content=subject)
        return self.matcher(subject)

    def __invert__(self) -> "Predicate":
        return Predicate(f"not_{self.name}", lambda f: not self.matcher(f), f"not ({self.description})")

    def __and__(self, other: "Predicate") -> "Predicate":
        return Predicate(
            f"{self.name}_and_{other.name}",
            lambda f: self.matcher(f) and other.matcher(f),
            f"({self.description}) and ({other.description})",
        )

    def __or__(self, other: "Predicate") -> "Predicate":
        return Predicate(
            f"{self.name}_or_{other.name}",
            lambda f: self.matcher(f) or other.matcher(f),
            f"({self.description}) or ({other.description})",
        )

    def any_file(self, files: Iterable[FileDescriptor]) -> bool:
        return any(self.matcher(f) for f in files)


def content_matches(name: str, *patterns: str, flags: int = 0, description: str = "") -> Predicate:
    """Predicate that is true when any of ``patterns`` is found in the file content."""
    compiled = [re.compile(p, flags) for p in patterns]

    def matcher(file: FileDescriptor) -> bool:
        text = file.text
        return any(p.search(text) for p in compiled)

    return Predicate(name, matcher, description)


def path_matches(name: str, *patterns: str, flags: int = 0, description: str = "") -> Predicate:
    """Predicate that is true when any of ``patterns`` is found in the file path."""
    compiled = [re.compile(p, flags) for p in patterns]
    return Predicate(name, lambda f: any(p.search(f.path) for p in compiled), description)


# --- Style / branding ---

has_inline_style = content_matches(
    "has_inline_style", r"style=\{", r'style="', description="inline style attribute instead of token classes"
)
has_literal_color = content_matches(
    "has_literal_color",
    r"(?<![&\w])#(?:[0-9a-fA-F]{3}){1,2}(?:[0-9a-fA-F]{2})?\b",
    r"\brgba?\(",
    r"\bhsla?\((?!\s*var\()",
    description="literal color code instead of a theme variable",
)
needs_motion = content_matches("needs_motion", r"\btransition\b", r"\banimate-", r"hover:", r"focus:")
uses_motion_library = content_matches("uses_motion_library", r"\bmotion\.", r"AnimatePresence", r"framer-motion")
is_responsive = content_matches("is_responsive", r"\b(?:sm|md|lg|xl|2xl):")
uses_theme_variables = content_matches("uses_theme_variables", r"var\(--")
has_dark_mode_selector = content_matches("has_dark_mode_selector", r"\.dark\b", r"\bdark:")
has_interactive_elements = content_matches(
    "has_interactive_elements", r"\bonClick\b", r"\bonSubmit\b", r"<button\b", r"<input\b", r"<select\b"
)
has_aria_labels = content_matches("has_aria_labels", r"aria-label", r"aria-labelledby", r"aria-describedby")
has_non_semantic_click = content_matches("has_non_semantic_click", r"<(?:div|span)\b[^>]*\bonClick")
has_keyboard_handlers = content_matches("has_keyboard_handlers", r"\bonKey(?:Down|Up|Press)\b")
has_async_operations = content_matches("has_async_operations", r"\buseEffect\b", r"\buseSWR\b", r"\bfetch\(", r"\basync\b")
has_loading_state = content_matches("has_loading_state", r"(?i)loading", r"Skeleton", r"Spinner")
renders_lists = content_matches("renders_lists", r"\.map\(", r"\.filter\(")
has_empty_state = content_matches(
    "has_empty_state",
    r"EmptyState",
    r"(?i)\bempty\b",
    r"(?i)no\s+\w*\s*data",
    r"\.length\s*===?\s*0",
    r"!\s*\w+(?:\?)?\.length",
)
handles_errors = content_matches("handles_errors", r"\btry\s*\{", r"\.catch\(", r"\berror\b")
has_error_state = content_matches(
    "has_error_state", r"ErrorBoundary", r"error\.message", r"errorMessage", r"\berror\s*&&", r"\bisError\b"
)
is_layout_file = path_matches("is_layout_file", r"(?i)layout", r"(?i)sidebar", r"(?i)header")
has_theme_switching = content_matches(
    "has_theme_switching", r"\bdark:", r"(?i)\btheme\b", r"useTheme", r"ThemeProvider"
)


def declares_foreign_font(font_family: str, font_class: str) -> Predicate:
    """A font-family declaration that is not the brand font and no brand font class."""
    declaration = re.compile(r"font-?family\s*[:=]\s*([^;\n}]+)", re.IGNORECASE)

    def matcher(file: FileDescriptor) -> bool:
        text = file.text
        if font_class and font_class in text:
            return False
        return any(font_family.lower() not in m.group(1).lower() for m in declaration.finditer(text))

    return Predicate("declares_foreign_font", matcher, f"font-family other than {font_family}")


_SPACING_UTILITY = re.compile(
    r"(?<![\w-])-?(?:p|m|px|py|pt|pb|pl|pr|mx|my|mt|mb|ml|mr|gap|gap-x|gap-y|space-x|space-y)-(\[[^\]]+\]|[\w.]+)"
)


def uses_off_grid_spacing(allowed_steps: Iterable[str]) -> Predicate:
    """Spacing utilities using arbitrary values or steps outside the brand grid."""
    allowed = set(allowed_steps)

    def matcher(file: FileDescriptor) -> bool:
        for match in _SPACING_UTILITY.finditer(file.text):
            value = match.group(1)
            if value.startswith("["):
                return True
            if allowed and value not in allowed and value not in ("auto", "px"):
                return True
        return False

    return Predicate("uses_off_grid_spacing", matcher, "spacing outside the 8px grid")


def uses_non_preferred_radius(preferred: Iterable[str]) -> Predicate:
    names = "|".join(re.escape(p) for p in preferred) or "2xl|full"
    return content_matches(
        "uses_non_preferred_radius",
        rf"\brounded-(?!(?:{names})(?![\w-]))[\w\[\].-]+",
        description="border radius other than the preferred brand radius",
    )


def should_use_kit_component(trigger: str) -> Predicate:
    return content_matches("should_use_kit_component", trigger)


def uses_kit_component(component_name: str) -> Predicate:
    return content_matches(
        f"uses_{component_name.lower()}",
        rf"<{re.escape(component_name)}\b",
        rf"import[^\n]*\b{re.escape(component_name)}\b",
    )


# --- Structure / security ---

_TYPED_SUFFIXES = (".ts", ".tsx")

is_typed_source = Predicate("is_typed_source", lambda f: f.path.endswith(_TYPED_SUFFIXES))
uses_escape_hatch_type = content_matches(
    "uses_escape_hatch_type", r":\s*any\b", r"<any>", r"\bany\[\]", r"\bas\s+any\b"
)
has_relative_parent_import = content_matches(
    "has_relative_parent_import", r"""from\s+['"]\.\./""", r"""require\(\s*['"]\.\./"""
)
has_debug_output = content_matches("has_debug_output", r"console\.(?:log|debug|warn|error)\(")
uses_schema_validation = content_matches(
    "uses_schema_validation",
    r"""from\s+['"]zod['"]""",
    r"\bz\.\w+\(",
    r"\.safeParse\(",
    r"(?<!JSON)\.parse\(",
)
has_auth_check = content_matches(
    "has_auth_check",
    r"validateApiAccess",
    r"requireAuth",
    r"\bgetUser\(",
    r"\bgetSession\(",
    r"\bauth\.\w+",
    r"\bverify(?:Jwt|Token)\b",
    r"\bjwt\b",
    r"(?i)authorization",
)
has_tenant_isolation = content_matches(
    "has_tenant_isolation", r"\bcompany_id\b", r"\btenant_id\b", r"\buser_id\b", r"""\.eq\(\s*['"]\w*id['"]"""
)
has_rate_limit = content_matches("has_rate_limit", r"(?i)rate[_-]?limit", r"(?i)throttle")
has_error_handling = content_matches(
    "has_error_handling", r"\btry\s*\{.*?\bcatch\b", r"\.catch\(", r"NextResponse\.json\([^)]*error", flags=re.DOTALL
)
has_structured_logging = content_matches("has_structured_logging", r"\blogSecure\(", r"\blogger\.\w+\(", r"createLogger")
logs_sensitive_data = content_matches(
    "logs_sensitive_data",
    r"(?:console\.\w+|logger\.\w+|log\w*)\([^)]*\b(?:password|token|secret|authorization|cpf|credit_?card)\b",
    flags=re.IGNORECASE,
)
is_client_component = content_matches("is_client_component", r"""^\s*['"]use client['"]""", flags=re.MULTILINE)
needs_client_interactivity = content_matches(
    "needs_client_interactivity",
    r"\buse(?:State|Effect|Reducer|Ref|LayoutEffect)\b",
    r"\bon(?:Click|Change|Submit|KeyDown)\b",
    r"\bwindow\.",
    r"\bdocument\.",
)
has_misnamed_hook = content_matches(
    "has_misnamed_hook", r"function\s+[a-z]\w*Hook\b", r"const\s+[a-z]\w*Hook\s*="
)
fetches_data = content_matches("fetches_data", r"\bfetch\(", r"\baxios\b", r"useEffect\(\s*async")
uses_caching_fetch = content_matches(
    "uses_caching_fetch", r"\buseSWR\b", r"""from\s+['"]swr['"]""", r"\buseQuery\b"
)

_LEADING_DIRECTIVE = re.compile(r"""^\s*(?:['"]use (?:client|server)['"];?\s*)?""")
_COMPONENT_DEF = re.compile(r"function\s+[A-Z]\w*|const\s+[A-Z]\w*\s*(?::[^=]+)?=")


def _conventional_structure(file: FileDescriptor) -> bool:
    text = file.text
    body = text[_LEADING_DIRECTIVE.match(text).end():]
    return body.startswith("import") and bool(_COMPONENT_DEF.search(text)) and "export" in text


has_conventional_structure = Predicate(
    "has_conventional_structure", _conventional_structure, "imports, then component definition, then export"
)

_EXPORT_CONVENTIONS: dict[FileKind, Predicate] = {
    FileKind.PAGE: content_matches("has_default_export", r"\bexport\s+default\b"),
    FileKind.API: content_matches(
        "exports_http_handlers",
        r"\bexport\s+(?:async\s+)?function\s+(?:GET|POST|PUT|DELETE|PATCH)\b",
        r"\bexport\s+const\s+(?:GET|POST|PUT|DELETE|PATCH)\b",
    ),
    FileKind.HOOK: content_matches("exports_use_hook", r"\bexport\s+(?:default\s+)?(?:function|const)\s+use[A-Z]\w*"),
}
_ANY_EXPORT = content_matches("has_export", r"\bexport\b")


def follows_export_convention(file: FileDescriptor) -> bool:
    return _EXPORT_CONVENTIONS.get(file.kind, _ANY_EXPORT)(file)


# --- Integration ---

emits_events = content_matches(
    "emits_events", r"eventBus\.(?:emit|publish)\(", r"(?<![\w.])emit\(", r"(?<![\w.])publish\("
)
listens_to_events = content_matches("listens_to_events", r"eventBus\.(?:on|subscribe)\(", r"\.subscribe\(")
creates_missions = content_matches(
    "creates_missions", r"/api/missions/create", r"\bcreateMission\b", r"\bhandleCreateMission\b"
)
uses_response_envelope = content_matches("uses_response_envelope", r"NextResponse\.json\(", r"\bResponse\.json\(")
returns_error_status = content_matches("returns_error_status", r"status:\s*[45]\d\d")
is_documentation = path_matches("is_documentation", r"(?i)readme", r"(?i)\.mdx?$")
documents_api = content_matches("documents_api", r"\bAPI\b", r"(?i)endpoint", r"\b(?:GET|POST|PUT|DELETE|PATCH)\b")
follows_component_patterns = content_matches(
    "follows_component_patterns", r"\bforwardRef\b", r"(?:interface|type)\s+\w*Props\b", r"\bexport\b"
)
manages_state = content_matches(
    "manages_state", r"\buseSWR\b", r"\buseState\b", r"\buseEffect\b", r"\buseReducer\b", r"\buseQuery\b"
)
performs_async_work = content_matches("performs_async_work", r"\buseSWR\b", r"\bfetch\(", r"\basync\b")
has_error_boundary = content_matches(
    "has_error_boundary", r"ErrorBoundary", r"componentDidCatch", r"(?i)error[-_ ]?boundary"
) | path_matches("is_error_route", r"(?:^|/)error\.(?:tsx|jsx)$")
needs_error_boundary = content_matches("needs_error_boundary", r"\basync\b", r"\bfetch\(", r"/api/")


def reimplements_kit_component(component_names: Iterable[str]) -> Predicate:
    """Markup styled as a kit component without importing that component."""
    names = list(component_names)

    def matcher(file: FileDescriptor) -> bool:
        text = file.text
        for name in names:
            styled = re.search(rf"className=[^>]*\b{re.escape(name.lower())}\b", text)
            imported = re.search(rf"import[^\n]*\b{re.escape(name)}\b", text)
            if styled and not imported:
                return True
        return False

    return Predicate("reimplements_kit_component", matcher, "custom markup duplicating a UI-kit component")
