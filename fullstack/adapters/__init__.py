"""Adapters — bindings to the executor, filesystem, shell and publisher.

Public re-exports for convenient access.
"""

from fullstack.adapters.base import BuildGraph, EvaluationCallback
from fullstack.adapters.memory import InMemoryBuildGraph

__all__ = [
    "BuildGraph",
    "EvaluationCallback",
    "InMemoryBuildGraph",
]
