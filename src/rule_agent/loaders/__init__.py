"""
Context loaders package.

Implementations of the ContextLoader interface for building a PolicyContext
from different sources.
"""

from rule_agent.loaders.filesystem import FilesystemContextLoader, describe_routes, infer_kind, route_path
from rule_agent.loaders.interface import ContextLoader

__all__ = ["ContextLoader", "FilesystemContextLoader", "describe_routes", "infer_kind", "route_path"]
