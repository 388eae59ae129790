import pytest

from rule_agent.checks import ArchitectureCheck
from rule_agent.core.models import (
    FileDescriptor,
    FileKind,
    HttpMethod,
    PolicyContext,
    RouteDescriptor,
    RouteKind,
    Severity,
)


@pytest.fixture
def check(fixture_set) -> ArchitectureCheck:
    return ArchitectureCheck(fixture_set.allowed_dirs)


def _types(result) -> set[str]:
    return {issue.type for issue in result.issues}


def _errors(result) -> list:
    return [issue for issue in result.issues if issue.severity == Severity.ERROR]


class TestApiSecurity:
    @pytest.mark.asyncio
    async def test_fully_protected_route_and_file_have_no_errors(self, check, good_api_file, secure_route) -> None:
        result = await check.run(PolicyContext(module="reports", files=(good_api_file,), routes=(secure_route,)))
        assert _errors(result) == []
        assert result.family == "structural"

    @pytest.mark.asyncio
    async def test_unprotected_api_file(self, check) -> None:
        content = "export async function POST(req: Request) {\n  const body = await req.json();\n  return Response.json(body);\n}\n"
        file = FileDescriptor(path="src/app/api/orders/route.ts", kind=FileKind.API, content=content)
        result = await check.run(PolicyContext(module="market", files=(file,)))
        assert {"missing_zod_validation", "missing_authentication", "missing_rls"} <= _types(result)
        assert {"missing_rate_limiting", "poor_error_handling", "insecure_logging"} <= _types(result)
        assert result.passed is False

    @pytest.mark.asyncio
    async def test_route_flags_one_issue_per_unmet_requirement(self, check) -> None:
        route = RouteDescriptor(path="/api/orders", method=HttpMethod.POST, kind=RouteKind.API, auth=True)
        result = await check.run(PolicyContext(module="market", routes=(route,)))
        assert sorted(_types(result)) == ["api_no_rate_limit", "api_no_rls", "api_no_validation"]
        assert [i.severity for i in result.issues if i.type == "api_no_rate_limit"] == [Severity.WARNING]

    @pytest.mark.asyncio
    async def test_page_routes_not_checked(self, check) -> None:
        route = RouteDescriptor(path="/reports", method=HttpMethod.GET, kind=RouteKind.PAGE)
        result = await check.run(PolicyContext(module="reports", routes=(route,)))
        assert result.issues == ()


class TestDirectories:
    @pytest.mark.asyncio
    async def test_required_directory(self, check, good_component) -> None:
        result = await check.run(PolicyContext(module="reports", files=(good_component,)))
        assert "missing_required_directory" in _types(result)

    @pytest.mark.asyncio
    async def test_forbidden_and_legacy_router(self, check, good_api_file) -> None:
        legacy = FileDescriptor(path="src/pages/index.tsx", kind=FileKind.PAGE)
        forbidden = FileDescriptor(path="src/utils/format.ts", kind=FileKind.UTIL)
        result = await check.run(PolicyContext(module="reports", files=(good_api_file, legacy, forbidden)))
        assert {"pages_router_usage", "forbidden_directory"} <= _types(result)
        assert "missing_required_directory" not in _types(result)

    @pytest.mark.asyncio
    async def test_empty_context(self, check) -> None:
        result = await check.run(PolicyContext(module="reports"))
        assert result.issues == ()
        assert result.score == 100
        assert result.passed is True


class TestFileConventions:
    @pytest.mark.asyncio
    async def test_untyped_source_and_escape_hatch(self, check) -> None:
        file = FileDescriptor(
            path="src/lib/helpers.js",
            kind=FileKind.UTIL,
            content="import x from '../shared';\nexport const f = (a: any) => console.log(a);\n",
        )
        result = await check.run(PolicyContext(module="reports", files=(file,)))
        assert {"not_typescript", "uses_any_type", "relative_imports", "console_log_usage"} <= _types(result)

    @pytest.mark.asyncio
    async def test_migrations_and_styles_exempt_from_typing(self, check) -> None:
        files = (
            FileDescriptor(path="supabase/migrations/001.sql", kind=FileKind.MIGRATION, content="create table x();"),
            FileDescriptor(path="src/app/globals.css", kind=FileKind.STYLE, content=":root { --x: 1; }"),
        )
        result = await check.run(PolicyContext(module="reports", files=files))
        assert "not_typescript" not in _types(result)
        assert "improper_exports" not in _types(result)

    @pytest.mark.asyncio
    async def test_unnecessary_client_directive(self, check) -> None:
        content = "'use client';\nimport { Card } from '@/components/ui/card';\nexport function Static() { return <Card />; }\n"
        file = FileDescriptor(path="src/app/reports/page.tsx", kind=FileKind.PAGE, content=content)
        result = await check.run(PolicyContext(module="reports", files=(file,)))
        assert "unnecessary_client_component" in _types(result)
        assert "improper_exports" in _types(result)
        assert "Use Server Components by default, Client Components only when needed" in result.recommendations

    @pytest.mark.asyncio
    async def test_compliant_component(self, check, good_component) -> None:
        page = FileDescriptor(path="src/app/reports/page.tsx", kind=FileKind.PAGE, content=None)
        result = await check.run(PolicyContext(module="reports", files=(good_component, page)))
        assert result.issues == ()


class TestContentlessFiles:
    @pytest.mark.asyncio
    async def test_simulated_api_file_not_graded_as_unprotected(self, check, simulated_files) -> None:
        result = await check.run(PolicyContext(module="reports", files=simulated_files))

        assert result.issues == ()
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_path_rules_still_apply(self, check, simulated_files) -> None:
        files = (*simulated_files, FileDescriptor(path="src/utils/old.js", kind=FileKind.UTIL))
        result = await check.run(PolicyContext(module="reports", files=files))

        assert _types(result) == {"forbidden_directory", "not_typescript"}
