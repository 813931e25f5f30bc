"""Question dependency tracking."""

from formlogic.dependencies.graph import DependencyGraph

__all__ = ["DependencyGraph"]
