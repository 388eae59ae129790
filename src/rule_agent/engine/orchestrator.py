"""
Rule Agent orchestrator.

A RuleAgent is an explicit, caller-owned object holding a configuration, a
check registry and a reporter registry. Each execution reads one config
snapshot, runs the enabled checks concurrently, aggregates their results
into a verdict and hands that verdict to every configured reporter.
"""

import asyncio
import copy
import time
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from rule_agent.checks import Check, default_checks
from rule_agent.checks.scoring import create_issue
from rule_agent.core.config import RuleAgentConfig, get_preset, merge_config, preset_config
from rule_agent.core.errors import AgentExecutionError, GateFailedError
from rule_agent.core.models import (
    CheckResult,
    FileDescriptor,
    FileKind,
    GateStatus,
    HttpMethod,
    PolicyContext,
    RouteDescriptor,
    RouteKind,
    RuleAgentResult,
    Severity,
)
from rule_agent.core.utils import execute_with_timeout, log_operation
from rule_agent.engine.scoring import aggregate
from rule_agent.fixtures import FixtureSet
from rule_agent.reporters import InteractiveNoticeReporter, Reporter, StreamReporter

logger = structlog.get_logger(__name__)


def default_reporters() -> dict[str, Reporter]:
    return {"console": StreamReporter(), "ui": InteractiveNoticeReporter()}


class RuleAgent:
    """
    Runs policy checks against a PolicyContext and reports the verdict.

    Args:
        config: Initial configuration. Defaults to ``RuleAgentConfig()``.
        checks: Check registry keyed by id. Defaults to the branding,
            architecture and integration checks built from the configured
            fixtures.
        reporters: Reporter registry keyed by id. Defaults to ``console``
            (stream) and ``ui`` (interactive notice).
    """

    def __init__(
        self,
        config: RuleAgentConfig | None = None,
        checks: Mapping[str, Check] | None = None,
        reporters: Mapping[str, Reporter] | None = None,
    ):
        self._config = config or RuleAgentConfig()
        self._custom_checks = checks is not None
        self._checks: dict[str, Check] = (
            dict(checks) if checks is not None else default_checks(FixtureSet.load(self._config.fixtures))
        )
        self._reporters: dict[str, Reporter] = dict(reporters) if reporters is not None else default_reporters()

    # --- Registry management ---

    @property
    def checks(self) -> dict[str, Check]:
        return dict(self._checks)

    @property
    def reporters(self) -> dict[str, Reporter]:
        return dict(self._reporters)

    def add_check(self, check_id: str, check: Check) -> None:
        self._checks = {**self._checks, check_id: check}

    def remove_check(self, check_id: str) -> bool:
        if check_id not in self._checks:
            return False
        self._checks = {k: v for k, v in self._checks.items() if k != check_id}
        return True

    def add_reporter(self, reporter_id: str, reporter: Reporter) -> None:
        self._reporters = {**self._reporters, reporter_id: reporter}

    def remove_reporter(self, reporter_id: str) -> bool:
        if reporter_id not in self._reporters:
            return False
        self._reporters = {k: v for k, v in self._reporters.items() if k != reporter_id}
        return True

    # --- Configuration ---

    def get_config(self) -> RuleAgentConfig:
        return copy.deepcopy(self._config)

    def update_config(self, partial: dict[str, Any]) -> RuleAgentConfig:
        """
        Deep-merge ``partial`` into the live config.

        The merged config replaces the previous one in a single assignment, so
        runs already in flight keep the snapshot they started with. When the
        fixture locations change, the default checks are rebuilt against the
        new manifests.
        """
        new_config = merge_config(self._config, partial)
        if new_config.fixtures != self._config.fixtures and not self._custom_checks:
            self._checks = {**self._checks, **default_checks(FixtureSet.load(new_config.fixtures))}
        self._config = new_config
        logger.info("rule_agent.config_updated", keys=sorted(partial))
        return self.get_config()

    def apply_preset(self, name: str) -> RuleAgentConfig:
        return self.update_config(get_preset(name))

    # --- Execution ---

    async def execute(self, context: PolicyContext) -> RuleAgentResult:
        """
        Evaluate ``context`` and dispatch the result to the configured reporters.

        Raises:
            AgentExecutionError: If the whole run exceeds ``execution_timeout``.
        """
        return await self._run(context, self._config, self._checks, self._reporters)

    async def _run(
        self,
        context: PolicyContext,
        config: RuleAgentConfig,
        checks: dict[str, Check],
        reporters: dict[str, Reporter],
    ) -> RuleAgentResult:
        try:
            return await execute_with_timeout(
                self._execute(context, config, checks, reporters),
                timeout=config.execution_timeout,
                timeout_message=f"Rule Agent run for module '{context.module}' timed out",
            )
        except TimeoutError as e:
            raise AgentExecutionError(str(e)) from e

    async def assert_rules(self, context: PolicyContext) -> RuleAgentResult:
        """
        Evaluate ``context`` and raise when the gate verdict is 'fail'.

        Raises:
            GateFailedError: Carrying the messages of every fatal issue, i.e.
                issues at or above the owning check's configured severity floor.
        """
        config, checks = self._config, self._checks
        result = await self._run(context, config, checks, self._reporters)
        if result.gate_status != GateStatus.FAIL:
            return result

        # Results come back in registry order, one per enabled check.
        check_ids = [check_id for check_id in checks if config.is_enabled(check_id)]
        messages = []
        for check_id, check in zip(check_ids, result.checks, strict=True):
            floor = config.fatal_floor(check_id)
            messages.extend(issue.message for issue in check.issues_at_least(floor))
        raise GateFailedError(context.module, messages, result)

    async def _execute(
        self,
        context: PolicyContext,
        config: RuleAgentConfig,
        checks: dict[str, Check],
        reporters: dict[str, Reporter],
    ) -> RuleAgentResult:
        start = time.monotonic()
        enabled = [(check_id, check) for check_id, check in checks.items() if config.is_enabled(check_id)]
        if context.is_empty:
            logger.info("rule_agent.empty_context", module=context.module)

        async with log_operation("rule_agent.execute", {"module": context.module}, checks=len(enabled)):
            outcomes = await asyncio.gather(
                *(check.run(context) for _, check in enabled),
                return_exceptions=True,
            )

            results: list[CheckResult] = []
            crashed = False
            for (check_id, check), outcome in zip(enabled, outcomes, strict=True):
                if isinstance(outcome, BaseException):
                    if not isinstance(outcome, Exception):
                        raise outcome
                    crashed = True
                    logger.error(
                        "rule_agent.check_failed",
                        module=context.module,
                        check=check_id,
                        error=str(outcome),
                        exc_info=outcome,
                    )
                    results.append(crashed_check_result(check, outcome))
                else:
                    results.append(outcome)

            duration_ms = int((time.monotonic() - start) * 1000)
            result = aggregate(results, config.gating, duration_ms=duration_ms, force_fail=crashed)
            logger.info(
                "rule_agent.evaluated",
                module=context.module,
                score=result.overall_score,
                gate=result.gate_status.value,
                errors=result.summary.error_count,
                warnings=result.summary.warning_count,
            )

        await self._dispatch(result, context, config, reporters)
        return result

    async def _dispatch(
        self,
        result: RuleAgentResult,
        context: PolicyContext,
        config: RuleAgentConfig,
        reporters: dict[str, Reporter],
    ) -> None:
        for reporter_id in config.reporters:
            reporter = reporters.get(reporter_id)
            if reporter is None:
                logger.warning("rule_agent.reporter_missing", reporter=reporter_id)
                continue
            try:
                await reporter.report(result, context)
            except Exception as e:
                logger.error("rule_agent.reporter_failed", reporter=reporter_id, error=str(e), exc_info=True)


def crashed_check_result(check: Check, error: Exception) -> CheckResult:
    issue = create_issue(
        "agent_execution_error",
        Severity.ERROR,
        f"Check '{check.name}' failed to run: {error}",
        "agent_execution",
        suggestion="Inspect the logs for the check's traceback",
    )
    return CheckResult(
        check_name=check.name,
        family=check.family,
        passed=False,
        severity=Severity.ERROR,
        issues=(issue,),
        score=0,
    )


# --- Context construction helpers ---


def create_file_info(
    path: str,
    kind: FileKind | str,
    content: str | None = None,
    dependencies: Iterable[str] = (),
    imports: Iterable[str] = (),
    exports: Iterable[str] = (),
) -> FileDescriptor:
    return FileDescriptor(
        path=path,
        kind=FileKind(kind),
        content=content,
        dependencies=tuple(dependencies),
        imports=tuple(imports),
        exports=tuple(exports),
    )


def create_route_info(
    path: str,
    method: HttpMethod | str = HttpMethod.GET,
    kind: RouteKind | str = RouteKind.API,
    auth: bool = False,
    rls: bool = False,
    validation: bool = False,
    rate_limit: bool = False,
) -> RouteDescriptor:
    return RouteDescriptor(
        path=path,
        method=HttpMethod(method.upper() if isinstance(method, str) else method),
        kind=RouteKind(kind),
        auth=auth,
        rls=rls,
        validation=validation,
        rate_limit=rate_limit,
    )


def create_context(
    module: str,
    files: Iterable[FileDescriptor] = (),
    routes: Iterable[RouteDescriptor] = (),
    features: Iterable[str] = (),
    brand_tokens: str | None = None,
) -> PolicyContext:
    return PolicyContext(
        module=module,
        files=tuple(files),
        routes=tuple(routes),
        features=frozenset(features),
        brand_tokens=brand_tokens,
    )


# --- Convenience entrypoints ---


def create_agent(preset: str | None = None, **overrides: Any) -> RuleAgent:
    """Build a RuleAgent from a named preset, with optional partial-config overrides."""
    config = preset_config(preset) if preset else RuleAgentConfig()
    if overrides:
        config = merge_config(config, overrides)
    return RuleAgent(config)


async def run_rule_agent(
    module: str,
    files: Iterable[FileDescriptor] = (),
    routes: Iterable[RouteDescriptor] = (),
    features: Iterable[str] = (),
    preset: str | None = None,
    enforce: bool = False,
) -> RuleAgentResult:
    """One-shot evaluation with a fresh agent; ``enforce`` uses the assert entrypoint."""
    agent = create_agent(preset)
    context = create_context(module, files, routes, features)
    if enforce:
        return await agent.assert_rules(context)
    return await agent.execute(context)
