"""
Filesystem context loader.

Walks a Next.js-style project tree, infers the role of each file from its
location and name, and derives route descriptors from app-router route and
page files. Route protections are inferred with the same heuristics the
structural check applies to file content.
"""

import asyncio
import re
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

import structlog

from rule_agent.checks import predicates as p
from rule_agent.core.models import FileDescriptor, FileKind, HttpMethod, PolicyContext, RouteDescriptor, RouteKind
from rule_agent.core.utils.patterns import normalize_path
from rule_agent.loaders.interface import ContextLoader

logger = structlog.get_logger(__name__)

SOURCE_SUFFIXES = frozenset({".ts", ".tsx", ".js", ".jsx", ".mjs", ".css", ".scss", ".sql", ".json", ".md", ".mdx"})
SKIPPED_DIRS = frozenset({"node_modules", ".next", ".git", "dist", "build", "coverage", ".turbo"})
MAX_FILE_BYTES = 512 * 1024

_HANDLER_EXPORT = re.compile(
    r"\bexport\s+(?:async\s+function\s+|function\s+|const\s+)(GET|POST|PUT|DELETE|PATCH)\b"
)
_ROUTE_GROUP = re.compile(r"^\(.*\)$")


def infer_kind(path: str) -> FileKind:
    """Map a project-relative path to a FileKind."""
    posix = PurePosixPath(path)
    name = posix.name
    suffix = posix.suffix.lower()
    parts = posix.parts

    if suffix == ".sql" or "migrations" in parts:
        return FileKind.MIGRATION
    if suffix in (".css", ".scss"):
        return FileKind.STYLE
    if suffix in (".json", ".md", ".mdx") or ".config." in name or name.startswith("."):
        return FileKind.CONFIG
    if "api" in parts and (posix.stem == "route" or "pages" in parts):
        return FileKind.API
    if posix.stem in ("page", "layout", "error", "loading", "not-found") or "pages" in parts:
        return FileKind.PAGE
    if "hooks" in parts or re.match(r"use[A-Z]", name):
        return FileKind.HOOK
    if "components" in parts or suffix in (".tsx", ".jsx"):
        return FileKind.COMPONENT
    return FileKind.UTIL


def route_path(path: str) -> str | None:
    """URL path served by an app-router ``route``/``page`` file or a pages-router API file."""
    posix = PurePosixPath(path)
    parts = list(posix.parts)
    if "app" in parts and posix.stem in ("route", "page"):
        segments = parts[parts.index("app") + 1 : -1]
    elif "pages" in parts and "api" in parts:
        segments = parts[parts.index("pages") + 1 : -1] + ([] if posix.stem == "index" else [posix.stem])
    else:
        return None
    segments = [s for s in segments if not _ROUTE_GROUP.match(s)]
    return "/" + "/".join(segments)


def describe_routes(file: FileDescriptor) -> list[RouteDescriptor]:
    """Routes served by ``file``; none when its content is unknown (deleted or oversized)."""
    url = route_path(file.path)
    if url is None or file.content is None:
        return []

    if file.kind != FileKind.API:
        return [RouteDescriptor(path=url, method=HttpMethod.GET, kind=RouteKind.PAGE)]

    methods = list(dict.fromkeys(_HANDLER_EXPORT.findall(file.text))) or [HttpMethod.GET.value]
    protections = {
        "auth": p.has_auth_check(file),
        "rls": p.has_tenant_isolation(file),
        "validation": p.uses_schema_validation(file),
        "rate_limit": p.has_rate_limit(file),
    }
    return [RouteDescriptor(path=url, method=HttpMethod(m), kind=RouteKind.API, **protections) for m in methods]


class FilesystemContextLoader(ContextLoader):
    """Builds a PolicyContext from files under ``root``."""

    def __init__(self, root: str | Path, features: Iterable[str] = ()):
        self.root = Path(root)
        self.features = frozenset(features)

    async def load(self, module: str, paths: Iterable[str] | None = None) -> PolicyContext:
        return await asyncio.to_thread(self._load, module, list(paths) if paths is not None else None)

    def _load(self, module: str, paths: list[str] | None) -> PolicyContext:
        relative = [normalize_path(path) for path in paths] if paths is not None else list(self._walk())
        files = []
        for rel in sorted(relative):
            descriptor = self._describe(rel)
            if descriptor is not None:
                files.append(descriptor)

        routes = [route for file in files for route in describe_routes(file)]
        logger.info("context_loaded", module=module, root=str(self.root), files=len(files), routes=len(routes))
        return PolicyContext(module=module, files=tuple(files), routes=tuple(routes), features=self.features)

    def _walk(self) -> Iterable[str]:
        for path in self.root.rglob("*"):
            rel = path.relative_to(self.root)
            if any(part in SKIPPED_DIRS for part in rel.parts):
                continue
            if path.is_file() and path.suffix.lower() in SOURCE_SUFFIXES:
                yield rel.as_posix()

    def _describe(self, rel: str) -> FileDescriptor | None:
        full = self.root / rel
        if not full.is_file():
            # Deleted files in a diff still count for directory rules.
            logger.debug("context_file_missing", path=rel)
            return FileDescriptor(path=rel, kind=infer_kind(rel))
        if full.stat().st_size > MAX_FILE_BYTES:
            logger.warning("context_file_too_large", path=rel)
            return FileDescriptor(path=rel, kind=infer_kind(rel))
        try:
            content = full.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning("context_file_not_text", path=rel)
            return None
        return FileDescriptor(path=rel, kind=infer_kind(rel), content=content)
