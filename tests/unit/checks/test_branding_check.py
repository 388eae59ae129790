import pytest

from rule_agent.checks import BrandingCheck
from rule_agent.core.models import FileDescriptor, FileKind, PolicyContext, Severity


@pytest.fixture
def check(fixture_set) -> BrandingCheck:
    return BrandingCheck(fixture_set.brand_tokens, fixture_set.ui_kit)


def _types(result) -> set[str]:
    return {issue.type for issue in result.issues}


class TestBrandingCheck:
    @pytest.mark.asyncio
    async def test_inline_style_and_hex_color_fail(self, check, bad_component) -> None:
        result = await check.run(PolicyContext(module="core", files=(bad_component,)))

        assert {"hardcoded_styles", "hardcoded_colors"} <= _types(result)
        assert any(issue.severity == Severity.ERROR for issue in result.issues)
        assert result.score <= 80
        assert result.passed is False
        assert result.family == "style"

    @pytest.mark.asyncio
    async def test_compliant_component(self, check, good_component) -> None:
        result = await check.run(PolicyContext(module="core", files=(good_component,)))

        assert result.issues == ()
        assert result.score == 100
        assert result.passed is True
        assert result.severity == Severity.INFO

    @pytest.mark.asyncio
    async def test_empty_context_has_no_issues(self, check) -> None:
        result = await check.run(PolicyContext(module="reports"))
        assert result.issues == ()
        assert result.score == 100

    @pytest.mark.asyncio
    async def test_missing_layout_skipped_for_core(self, check, good_component) -> None:
        reports = await check.run(PolicyContext(module="reports", files=(good_component,)))
        core = await check.run(PolicyContext(module="core", files=(good_component,)))
        assert "missing_layout" in _types(reports)
        assert "missing_layout" not in _types(core)

    @pytest.mark.asyncio
    async def test_stylesheet_rules(self, check) -> None:
        css = FileDescriptor(path="src/app/globals.css", kind=FileKind.STYLE, content="body { color: red; }")
        result = await check.run(PolicyContext(module="core", files=(css,)))
        assert {"no_css_variables", "no_theme_support"} <= _types(result)

    @pytest.mark.asyncio
    async def test_accessibility(self, check) -> None:
        content = "export function X() {\n  return <div onClick={go} className='md:p-4'>Go</div>;\n}\n"
        file = FileDescriptor(path="src/components/X.tsx", kind=FileKind.COMPONENT, content=content)
        result = await check.run(PolicyContext(module="core", files=(file,)))
        assert {"missing_aria_labels", "non_semantic_html", "missing_keyboard_nav"} <= _types(result)
        assert "Improve accessibility with ARIA labels and semantic HTML" in result.recommendations

    @pytest.mark.asyncio
    async def test_ui_kit_reuse(self, check) -> None:
        content = "export function X() {\n  return <input className='md:p-4' aria-label='q' />;\n}\n"
        file = FileDescriptor(path="src/components/X.tsx", kind=FileKind.COMPONENT, content=content)
        result = await check.run(PolicyContext(module="core", files=(file,)))
        kit_issues = [i for i in result.issues if i.type == "missing_ui_component"]
        assert [i.message for i in kit_issues] == ["Should use Input from UI kit instead of custom implementation"]
        assert kit_issues[0].severity == Severity.WARNING

    @pytest.mark.asyncio
    async def test_deterministic(self, check, bad_component, good_component) -> None:
        ctx = PolicyContext(module="reports", files=(bad_component, good_component))
        first = await check.run(ctx)
        second = await check.run(ctx)
        assert first == second


class TestContentlessFiles:
    @pytest.mark.asyncio
    async def test_simulated_files_raise_nothing(self, check, simulated_files) -> None:
        result = await check.run(PolicyContext(module="reports", files=simulated_files))

        assert result.issues == ()
        assert result.passed is True

    @pytest.mark.asyncio
    async def test_simulated_stylesheet_beside_real_component(self, check, good_component, simulated_files) -> None:
        result = await check.run(PolicyContext(module="core", files=(good_component, *simulated_files)))

        assert "no_css_variables" not in _types(result)
        assert "not_responsive" not in _types(result)
        assert result.issues == ()
