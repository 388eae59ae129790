from pathlib import Path

import pytest

from rule_agent.core.config import preset_config
from rule_agent.core.models import FileDescriptor, FileKind, GateStatus, HttpMethod, RouteKind
from rule_agent.engine import RuleAgent
from rule_agent.loaders import ContextLoader, FilesystemContextLoader, describe_routes, infer_kind, route_path


def _write(root: Path, rel: str, content: str | bytes) -> None:
    target = root / rel
    target.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        target.write_bytes(content)
    else:
        target.write_text(content, encoding="utf-8")


class TestInferKind:
    @pytest.mark.parametrize(
        "path,kind",
        [
            ("supabase/migrations/2024_01_01_reports.sql", FileKind.MIGRATION),
            ("src/app/globals.css", FileKind.STYLE),
            ("tailwind.config.ts", FileKind.CONFIG),
            ("src/app/reports/README.md", FileKind.CONFIG),
            ("src/app/api/reports/route.ts", FileKind.API),
            ("src/pages/api/legacy.ts", FileKind.API),
            ("src/app/reports/page.tsx", FileKind.PAGE),
            ("src/app/reports/error.tsx", FileKind.PAGE),
            ("src/hooks/useReports.ts", FileKind.HOOK),
            ("src/lib/useDebounce.ts", FileKind.HOOK),
            ("src/components/ui/button.tsx", FileKind.COMPONENT),
            ("src/features/reports/Chart.tsx", FileKind.COMPONENT),
            ("src/lib/format.ts", FileKind.UTIL),
        ],
    )
    def test_kinds(self, path: str, kind: FileKind) -> None:
        assert infer_kind(path) == kind


class TestRoutes:
    @pytest.mark.parametrize(
        "path,url",
        [
            ("src/app/api/reports/route.ts", "/api/reports"),
            ("src/app/(dashboard)/reports/page.tsx", "/reports"),
            ("src/app/page.tsx", "/"),
            ("src/pages/api/users/index.ts", "/api/users"),
            ("src/pages/api/users/[id].ts", "/api/users/[id]"),
            ("src/lib/format.ts", None),
        ],
    )
    def test_route_path(self, path: str, url: str | None) -> None:
        assert route_path(path) == url

    def test_api_route_protections_inferred_from_content(self, good_api_file) -> None:
        routes = describe_routes(good_api_file)
        assert len(routes) == 1
        route = routes[0]
        assert (route.path, route.method, route.kind) == ("/api/reports", HttpMethod.GET, RouteKind.API)
        assert route.auth and route.rls and route.validation and route.rate_limit

    def test_one_route_per_handler(self) -> None:
        file = FileDescriptor(
            path="src/app/api/items/route.ts",
            kind=FileKind.API,
            content="export async function GET() {}\nexport const POST = handler;\n",
        )
        routes = describe_routes(file)
        assert [r.method for r in routes] == [HttpMethod.GET, HttpMethod.POST]
        assert not any(r.auth for r in routes)

    def test_page_routes_are_get(self) -> None:
        file = FileDescriptor(path="src/app/reports/page.tsx", kind=FileKind.PAGE, content="")
        assert describe_routes(file)[0].kind == RouteKind.PAGE


class TestFilesystemContextLoader:
    @pytest.fixture
    def project(self, tmp_path: Path, good_api_file) -> Path:
        _write(tmp_path, good_api_file.path, good_api_file.content)
        _write(tmp_path, "src/lib/format.ts", "export const fmt = (v: number) => v.toFixed(2);\n")
        _write(tmp_path, "node_modules/pkg/index.js", "module.exports = {};\n")
        _write(tmp_path, "src/lib/blob.ts", b"\xff\xfe\x00\x01")
        _write(tmp_path, "public/logo.png", b"\x89PNG")
        return tmp_path

    def test_is_a_context_loader(self, project) -> None:
        assert isinstance(FilesystemContextLoader(project), ContextLoader)

    @pytest.mark.asyncio
    async def test_walks_tree(self, project) -> None:
        context = await FilesystemContextLoader(project, features=["exports"]).load("reports")

        assert [f.path for f in context.files] == ["src/app/api/reports/route.ts", "src/lib/format.ts"]
        assert context.module == "reports"
        assert context.features == frozenset({"exports"})
        assert [r.path for r in context.routes] == ["/api/reports"]

    @pytest.mark.asyncio
    async def test_explicit_paths(self, project) -> None:
        context = await FilesystemContextLoader(project).load("reports", ["./src/lib/format.ts", "src/lib/deleted.ts"])

        by_path = {f.path: f for f in context.files}
        assert set(by_path) == {"src/lib/format.ts", "src/lib/deleted.ts"}
        assert by_path["src/lib/format.ts"].content.startswith("export const fmt")
        assert by_path["src/lib/deleted.ts"].content is None
        assert context.routes == ()


class TestDeletedFiles:
    def test_contentless_route_file_serves_no_route(self, simulated_files) -> None:
        assert [describe_routes(f) for f in simulated_files] == [[], [], [], []]

    @pytest.mark.asyncio
    async def test_deleted_api_route_does_not_fail_ci(self, tmp_path: Path) -> None:
        context = await FilesystemContextLoader(tmp_path).load("reports", ["src/app/api/orders/route.ts"])

        assert context.files[0].content is None
        assert context.files[0].kind == FileKind.API
        assert context.routes == ()

        result = await RuleAgent(preset_config("ci"), reporters={}).execute(context)
        assert result.summary.error_count == 0
        assert result.gate_status == GateStatus.PASS
