#!/usr/bin/env python3
"""
Run the Rule Agent against a project directory from CI.

Exits 1 when the gate verdict is 'fail', 0 otherwise.

    python scripts/run_rule_agent.py --root . --module reports --preset ci
    git diff --name-only origin/main | python scripts/run_rule_agent.py --module reports --changed -
"""

import argparse
import asyncio
import sys

from rule_agent.core.config import configure_logging, settings
from rule_agent.core.errors import AgentExecutionError, GateFailedError, RuleAgentError
from rule_agent.engine import RuleAgent
from rule_agent.loaders import FilesystemContextLoader


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate governance rules for a module.")
    parser.add_argument("--root", default=".", help="Project root to scan")
    parser.add_argument("--module", required=True, help="Module name being evaluated")
    parser.add_argument("--preset", default=settings.preset or "ci", help="Configuration preset (strict, development, ci)")
    parser.add_argument("--feature", action="append", default=[], help="Declared feature (repeatable)")
    parser.add_argument(
        "--changed",
        help="File listing the paths to evaluate, one per line ('-' for stdin). Defaults to the whole tree.",
    )
    parser.add_argument("--verbose", action="store_true", help="List info-level issues in the report")
    return parser.parse_args(argv)


def read_changed(source: str | None) -> list[str] | None:
    if source is None:
        return None
    if source == "-":
        lines = sys.stdin.read().splitlines()
    else:
        with open(source, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    return [line.strip() for line in lines if line.strip()]


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(settings.logging)

    loader = FilesystemContextLoader(args.root, features=args.feature)
    context = await loader.load(args.module, read_changed(args.changed))

    try:
        # Environment settings (fixtures dir, timeout) first, preset merged over them.
        agent = RuleAgent(settings.agent_config())
        agent.apply_preset(args.preset)
        console = agent.reporters.get("console")
        if console is not None:
            console.verbose = args.verbose
        await agent.assert_rules(context)
    except GateFailedError as e:
        print(f"\n{e}", file=sys.stderr)
        return 1
    except AgentExecutionError as e:
        print(f"💥 Rule Agent could not complete: {e}", file=sys.stderr)
        return 2
    except RuleAgentError as e:
        print(f"💥 Rule Agent configuration error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
