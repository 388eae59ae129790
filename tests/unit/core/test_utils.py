import asyncio

import pytest

from rule_agent.core.utils import execute_with_timeout, log_operation, path_matches


class TestPathMatches:
    def test_directory_prefix(self) -> None:
        assert path_matches("src/app/page.tsx", "src/app/")
        assert not path_matches("src/application/page.tsx", "src/app/")

    def test_leading_dot_slash_ignored(self) -> None:
        assert path_matches("./src/utils/x.ts", "src/utils/")

    def test_glob(self) -> None:
        assert path_matches("src/app/api/x/route.ts", "src/app/**/route.ts")
        assert path_matches("src/app/route.ts", "src/app/**/route.ts")
        assert not path_matches("src/app/api/x/page.tsx", "src/app/**/route.ts")


class TestTimeout:
    @pytest.mark.asyncio
    async def test_returns_result(self) -> None:
        async def work():
            return 42

        assert await execute_with_timeout(work(), timeout=1) == 42

    @pytest.mark.asyncio
    async def test_no_timeout_waits(self) -> None:
        async def work():
            return "done"

        assert await execute_with_timeout(work(), timeout=None) == "done"

    @pytest.mark.asyncio
    async def test_times_out_with_message(self) -> None:
        async def slow():
            await asyncio.sleep(1)

        with pytest.raises(TimeoutError, match="too slow"):
            await execute_with_timeout(slow(), timeout=0.01, timeout_message="too slow")


class TestLogOperation:
    @pytest.mark.asyncio
    async def test_propagates_errors(self) -> None:
        with pytest.raises(ValueError):
            async with log_operation("unit.test", {"module": "x"}):
                raise ValueError("boom")
