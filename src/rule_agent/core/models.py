from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

SCHEMA_VERSION = "1.0.0"


class Severity(str, Enum):
    """Severity of a single issue, ordered from least to most severe."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def at_least(self, other: "Severity") -> bool:
        return self.rank >= other.rank


_SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


class GateStatus(str, Enum):
    """Final verdict of an evaluation run."""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class FileKind(str, Enum):
    """Closed set of file roles a change can contain."""

    COMPONENT = "component"
    PAGE = "page"
    API = "api"
    HOOK = "hook"
    UTIL = "util"
    STYLE = "style"
    CONFIG = "config"
    MIGRATION = "migration"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class RouteKind(str, Enum):
    API = "api"
    PAGE = "page"


class FileDescriptor(BaseModel):
    """A single file of the change under evaluation."""

    model_config = ConfigDict(frozen=True)

    path: str
    kind: FileKind
    content: str | None = None  # None for CI-simulated entries
    size: int = 0
    dependencies: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    exports: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _derive_size(cls, data: Any) -> Any:
        if isinstance(data, dict) and "size" not in data:
            content = data.get("content")
            data = {**data, "size": len(content) if content else 0}
        return data

    @property
    def text(self) -> str:
        """Content as text, empty when the descriptor carries none."""
        return self.content or ""

    @property
    def is_ui(self) -> bool:
        return self.kind in (FileKind.COMPONENT, FileKind.PAGE)


class RouteDescriptor(BaseModel):
    """A route exposed by the change, with its declared protections."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: HttpMethod
    kind: RouteKind
    auth: bool = False
    rls: bool = False
    validation: bool = False
    rate_limit: bool = False


class PolicyContext(BaseModel):
    """
    Immutable description of what is being evaluated.

    Built once by the caller and passed by reference through every check
    and reporter of a run.
    """

    model_config = ConfigDict(frozen=True)

    module: str
    files: tuple[FileDescriptor, ...] = ()
    routes: tuple[RouteDescriptor, ...] = ()
    features: frozenset[str] = frozenset()
    brand_tokens: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str = SCHEMA_VERSION

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.routes and not self.features

    def files_of(self, *kinds: FileKind) -> list[FileDescriptor]:
        return [f for f in self.files if f.kind in kinds]

    @property
    def inspectable_files(self) -> list[FileDescriptor]:
        """Files carrying content. CI-simulated entries only count for path rules."""
        return [f for f in self.files if f.content is not None]


class Issue(BaseModel):
    """A single policy-rule violation or observation emitted by a check."""

    model_config = ConfigDict(frozen=True)

    type: str
    severity: Severity
    message: str
    rule: str
    file: str | None = None
    line: int | None = None
    column: int | None = None
    suggestion: str | None = None
    auto_fixable: bool = False


class CheckResult(BaseModel):
    """Outcome of one check for one run."""

    model_config = ConfigDict(frozen=True)

    check_name: str
    family: str
    passed: bool
    severity: Severity
    issues: tuple[Issue, ...] = ()
    score: int = Field(ge=0, le=100)
    recommendations: tuple[str, ...] = ()

    def issues_at_least(self, severity: Severity) -> list[Issue]:
        return [i for i in self.issues if i.severity.at_least(severity)]


class Summary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_issues: int = 0
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0


class RuleAgentResult(BaseModel):
    """Terminal artifact of an orchestrator execution."""

    model_config = ConfigDict(frozen=True)

    passed: bool
    overall_score: int = Field(ge=0, le=100)
    checks: tuple[CheckResult, ...] = ()
    summary: Summary = Field(default_factory=Summary)
    recommendations: tuple[str, ...] = ()
    gate_status: GateStatus
    duration_ms: int = 0

    @model_validator(mode="after")
    def _passed_matches_gate(self) -> "RuleAgentResult":
        if self.passed != (self.gate_status == GateStatus.PASS):
            raise ValueError("passed must be true exactly when gate_status is 'pass'")
        return self

    @property
    def issues(self) -> list[Issue]:
        return [issue for check in self.checks for issue in check.issues]
