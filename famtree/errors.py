"""
Exceptions for famtree.

Two families live here:
- FamtreeError: recoverable conditions surfaced to the caller
  (bad distribution parameters, rejected edge insertions)
- InvariantViolation: programming errors that must never be caught and
  retried (identifier collision, generator producing an invalid edge)

Validation failures are not exceptions; they are reported as data by
famtree.validator.
"""

from typing import Optional
from uuid import UUID


class FamtreeError(Exception):
    """Base exception for recoverable famtree errors."""


class DistributionError(FamtreeError, ValueError):
    """Raised when a Gaussian sampler is built from invalid parameters."""

    def __init__(self, parameter: str, mean: float, std: float, reason: str) -> None:
        super().__init__(f"invalid {parameter} distribution (mean={mean}, std={std}): {reason}")
        self.parameter = parameter
        self.mean = mean
        self.std = std


class EdgeError(FamtreeError):
    """Base exception for rejected edge insertions."""

    def __init__(self, message: str, parent: Optional[UUID], child: Optional[UUID]) -> None:
        super().__init__(message)
        self.parent = parent
        self.child = child


class NodeNotFoundError(EdgeError):
    """Raised when an identifier is not present in the node store."""

    def __init__(self, node_id: UUID, parent: Optional[UUID] = None, child: Optional[UUID] = None) -> None:
        super().__init__(f"node not found: {node_id}", parent, child)
        self.node_id = node_id


class CycleDetectedError(EdgeError):
    """Raised when parent -> child would close a cycle."""

    def __init__(self, parent: UUID, child: UUID) -> None:
        super().__init__(f"cycle detected: {parent} -> {child}", parent, child)


class EdgeAlreadyExistsError(EdgeError):
    """Raised when child is already a child of parent."""

    def __init__(self, parent: UUID, child: UUID) -> None:
        super().__init__(f"edge already exists: {parent} -> {child}", parent, child)


class InvariantViolation(RuntimeError):
    """Internal invariant broken; indicates a bug, not bad input."""


class IdentifierCollisionError(InvariantViolation):
    """Raised when a freshly generated identifier is already in the store."""

    def __init__(self, node_id: UUID) -> None:
        super().__init__(f"identifier collision detected: {node_id}")
        self.node_id = node_id


class GeneratorInvariantError(InvariantViolation):
    """Raised when the generator's own edge insertion is rejected."""
