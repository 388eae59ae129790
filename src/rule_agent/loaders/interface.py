from abc import ABC, abstractmethod
from collections.abc import Iterable

from rule_agent.core.models import PolicyContext


class ContextLoader(ABC):
    """
    Abstract interface for building a PolicyContext from some source.

    This lets CI scripts and services evaluate a working tree, a PR diff or
    a stored snapshot without changing the evaluation code.
    """

    @abstractmethod
    async def load(self, module: str, paths: Iterable[str] | None = None) -> PolicyContext:
        """
        Build the context for ``module``.

        Args:
            module: Logical module name being evaluated.
            paths: Optional subset of paths to include (e.g. files changed in a PR).

        Returns:
            The immutable PolicyContext.
        """
        pass
