"""
Exception hierarchy.

Configuration problems surface before anything runs. Execution
problems are raised inside the build graph and converted to failed
receipts at the ``execute`` boundary.
"""

from __future__ import annotations


class FullstackError(Exception):
    """Base class for all errors raised by this package."""


class UnitStateError(FullstackError):
    """A unit was used in a lifecycle state that does not allow it."""


class ExecutionError(FullstackError):
    """An operation could not be executed."""


class OperationNotFoundError(ExecutionError):
    """A dependency address does not resolve to a registered operation."""


class OperationFailedError(ExecutionError):
    """An action of an operation raised."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"Execution failed for '{path}': {cause}")
        self.path = path
        self.cause = cause
