"""Registry, dependency graph and flattening engine."""

from .type_registry import TypeRegistry
from .dependency_graph import DependencyGraph, edges_for
from .flattener import flatten, resolve_order

__all__ = ["TypeRegistry", "DependencyGraph", "edges_for", "flatten", "resolve_order"]
