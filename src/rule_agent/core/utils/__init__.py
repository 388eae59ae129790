"""
Shared utilities for logging and timeout handling.
"""

from rule_agent.core.utils.logging import log_operation
from rule_agent.core.utils.patterns import compile_glob, path_matches
from rule_agent.core.utils.timeout import execute_with_timeout

__all__ = [
    "compile_glob",
    "execute_with_timeout",
    "log_operation",
    "path_matches",
]
