from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Manifest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Typography(_Manifest):
    font_family: str = "Inter"
    font_class: str = "font-sans"
    font_size: dict[str, str] = Field(default_factory=dict)
    font_weight: dict[str, str] = Field(default_factory=dict)
    line_height: dict[str, str] = Field(default_factory=dict)


class Spacing(_Manifest):
    grid_px: int = 8
    allowed_steps: list[str] = Field(default_factory=list)


class BorderRadius(_Manifest):
    preferred: list[str] = Field(default_factory=lambda: ["2xl", "full"])
    values: dict[str, str] = Field(default_factory=dict)


class BrandTokens(_Manifest):
    """Brand/style token reference document."""

    colors: dict[str, str] = Field(default_factory=dict)
    typography: Typography = Field(default_factory=Typography)
    spacing: Spacing = Field(default_factory=Spacing)
    border_radius: BorderRadius = Field(default_factory=BorderRadius)
    shadows: dict[str, str] = Field(default_factory=dict)
    breakpoints: dict[str, str] = Field(default_factory=dict)


class AllowedDirectory(_Manifest):
    path: str
    purpose: str = ""
    required: bool = False
    allowed_file_types: list[str] = Field(default_factory=list)
    naming_convention: str = ""


class ForbiddenDirectory(_Manifest):
    path: str
    reason: str = ""


class RouterLayout(_Manifest):
    primary: str = "src/app/"
    legacy: str = "src/pages/"


class DirectoryManifest(_Manifest):
    """Allowed/forbidden directory manifest."""

    router: RouterLayout = Field(default_factory=RouterLayout)
    directories: list[AllowedDirectory] = Field(default_factory=list)
    forbidden: list[ForbiddenDirectory] = Field(default_factory=list)

    @property
    def required(self) -> list[AllowedDirectory]:
        return [d for d in self.directories if d.required]


class UIKitComponent(_Manifest):
    name: str
    path: str
    required: bool = False
    props: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)
    trigger: str | None = None  # regex signalling the component should be used
    dependencies: list[str] = Field(default_factory=list)


class UIKitManifest(_Manifest):
    """Shared UI-kit component manifest."""

    base_components: list[UIKitComponent] = Field(default_factory=list)

    @property
    def required(self) -> list[UIKitComponent]:
        return [c for c in self.base_components if c.required]

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.base_components]


class EventDefinition(_Manifest):
    name: str
    channel: str = ""
    required: bool = False
    description: str = ""
    payload: dict[str, Any] = Field(default_factory=dict)


class EventBusContract(_Manifest):
    """Event-bus and mission contract, including which modules are expected to participate."""

    channels: list[str] = Field(default_factory=list)
    middleware: list[str] = Field(default_factory=list)
    events: list[EventDefinition] = Field(default_factory=list)
    emitting_modules: list[str] = Field(default_factory=list)
    listening_modules: list[str] = Field(default_factory=list)
    mission_modules: list[str] = Field(default_factory=list)
    mission_payload_fields: list[str] = Field(default_factory=list)

    def event(self, name: str) -> EventDefinition | None:
        return next((e for e in self.events if e.name == name), None)
