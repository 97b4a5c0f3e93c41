"""
Core Data Models for famtree

This module defines the canonical data structures used throughout the system:
- Payload: The closed variant carried by every node (number, text or empty)
- Node: A single vertex of the family-tree graph
- GeneratorConfig: Parameters of one generation run
- GenerationResult: The generated graph plus the seed that produced it
- ValidationReport: Outcome of the structural checks with diagnostic statistics

These models are designed to be:
- Immutable where possible (using frozen dataclasses)
- Keyed by uuid.UUID identifiers rather than object references
- Clear in their semantic meaning
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union
from uuid import UUID

if TYPE_CHECKING:
    from famtree.graph import AcyclicGraph


MAX_U64 = 2**64 - 1


class PayloadKind(Enum):
    """Tag of the node payload variant."""

    NUMBER = "number"
    TEXT = "text"
    EMPTY = "empty"


@dataclass(frozen=True)
class Payload:
    """
    Opaque data attached to a node.

    Exactly one of three shapes:
        NUMBER: value is an int in [0, 2**64)
        TEXT:   value is a str
        EMPTY:  value is None

    Use the classmethod constructors rather than building instances directly.
    """

    kind: PayloadKind = PayloadKind.EMPTY
    value: Union[int, str, None] = None

    def __post_init__(self) -> None:
        """Validate that value matches kind."""
        if self.kind is PayloadKind.NUMBER:
            if (
                not isinstance(self.value, int)
                or isinstance(self.value, bool)
                or not 0 <= self.value <= MAX_U64
            ):
                raise ValueError(f"number payload must be an unsigned 64-bit int, got {self.value!r}")
        elif self.kind is PayloadKind.TEXT:
            if not isinstance(self.value, str):
                raise ValueError(f"text payload must be a str, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"empty payload cannot carry a value, got {self.value!r}")

    @classmethod
    def number(cls, value: int) -> "Payload":
        return cls(PayloadKind.NUMBER, value)

    @classmethod
    def text(cls, value: str) -> "Payload":
        return cls(PayloadKind.TEXT, value)

    @classmethod
    def empty(cls) -> "Payload":
        return cls(PayloadKind.EMPTY, None)

    @classmethod
    def coerce(cls, value: Union["Payload", int, str, None]) -> "Payload":
        """
        Build a payload from a plain Python value.

        int -> NUMBER, str -> TEXT, None -> EMPTY; a Payload is returned as is.
        """
        if isinstance(value, Payload):
            return value
        if value is None:
            return cls.empty()
        if isinstance(value, str):
            return cls.text(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.number(value)
        raise TypeError(f"cannot build a payload from {type(value).__name__}")

    @property
    def is_empty(self) -> bool:
        return self.kind is PayloadKind.EMPTY

    def describe(self) -> str:
        """Short human-readable form, e.g. for log lines."""
        if self.kind is PayloadKind.NUMBER:
            return f"number({self.value})"
        if self.kind is PayloadKind.TEXT:
            return f"text({self.value!r})"
        return "empty"


@dataclass(frozen=True)
class Node:
    """
    A single vertex in the graph.

    The set of children is owned by the graph, not by the node, so a Node
    never changes once created.

    Attributes:
        id: Globally unique 128-bit identifier, the sole lookup key
        name: Optional display name used as a label when rendering
        payload: Opaque data carried by the node

    Invariants:
        - id is never reused or mutated after creation
    """

    id: UUID
    name: Optional[str] = None
    payload: Payload = field(default_factory=Payload.empty)


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Parameters of one generation run.

    Attributes:
        name: Label of the produced graph ("output" when omitted)
        depth: Number of levels, root level included (>= 1)
        width_mean: Mean of the per-level node budget
        width_std: Standard deviation of the per-level node budget
        child_mean: Mean number of children a parent attempts to create
        child_std: Standard deviation of the per-parent branching factor
        seed: Unsigned 64-bit seed; a fresh one is drawn when omitted

    Standard deviations are checked when the samplers are built, so an
    invalid value surfaces as a DistributionError from generate().
    """

    depth: int = 3
    width_mean: float = 10.0
    width_std: float = 5.0
    child_mean: float = 3.0
    child_std: float = 2.0
    seed: Optional[int] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 1:
            raise ValueError(f"depth must be a positive integer, got {self.depth!r}")
        if self.seed is not None and not 0 <= self.seed <= MAX_U64:
            raise ValueError(f"seed must be an unsigned 64-bit int, got {self.seed!r}")

    def with_seed(self, seed: int) -> "GeneratorConfig":
        """Return a copy of this config pinned to an explicit seed."""
        return GeneratorConfig(
            depth=self.depth,
            width_mean=self.width_mean,
            width_std=self.width_std,
            child_mean=self.child_mean,
            child_std=self.child_std,
            seed=seed,
            name=self.name,
        )


@dataclass
class GenerationResult:
    """
    Result of one generation run.

    Attributes:
        graph: The completed graph; treated as read-only from here on
        seed: The seed actually used, so the run can be reproduced
        level_targets: Sampled width cap of each level after the root
    """

    graph: "AcyclicGraph"
    seed: int
    level_targets: list[int] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return self.graph.node_count

    @property
    def edge_count(self) -> int:
        return self.graph.edge_count


class FailureKind(Enum):
    """Structural property violated by a graph."""

    ROOT_COUNT_MISMATCH = "root_count_mismatch"
    MULTIPLE_PATHS = "multiple_paths"


@dataclass(frozen=True)
class ValidationFailure:
    """
    The specific property a graph failed.

    Attributes:
        kind: Which check failed
        message: Human-readable explanation
        roots_found: Number of roots, for ROOT_COUNT_MISMATCH
        node_id: First node reached twice, for MULTIPLE_PATHS
    """

    kind: FailureKind
    message: str
    roots_found: Optional[int] = None
    node_id: Optional[UUID] = None


@dataclass
class GraphStatistics:
    """
    Diagnostic metrics re-derived from the finished graph.

    None of these decide pass or fail; they let a caller compare the random
    draw with the configured distribution parameters.
    """

    node_count: int = 0
    edge_count: int = 0
    average_children: float = 0.0
    max_depth: Optional[int] = None
    average_depth: Optional[float] = None
    average_width: Optional[float] = None
    level_sizes: list[int] = field(default_factory=list)


@dataclass
class ValidationReport:
    """
    Outcome of validating a graph.

    Attributes:
        passed: True iff there is exactly one root and one path to every node
        root: Identifier of the unique root, when there is one
        statistics: Diagnostic metrics
        failure: The violated property, None when passed
    """

    passed: bool
    root: Optional[UUID] = None
    statistics: GraphStatistics = field(default_factory=GraphStatistics)
    failure: Optional[ValidationFailure] = None

    @property
    def failure_kind(self) -> Optional[FailureKind]:
        return self.failure.kind if self.failure else None

    def summary_lines(self, config: Optional[GeneratorConfig] = None) -> list[str]:
        """
        Render the report as human-readable lines.

        Expected values are shown next to the measured ones when a config
        is supplied.
        """
        stats = self.statistics
        lines = []
        if self.root is not None:
            lines.append(f"Found root: {self.root.hex}")
        if self.failure is not None:
            lines.append(f"Validation failed: {self.failure.message}")
            return lines

        lines.append("Graph has only one path to each node")

        expected_children = f" (expected average {config.child_mean:.2f})" if config else ""
        lines.append(
            f"Average children per node with children: {stats.average_children:.2f}{expected_children}"
        )
        if config is not None:
            lines.append(f"Max depth {stats.max_depth} + 1 <= {config.depth}")
        else:
            lines.append(f"Max depth {stats.max_depth}")
        lines.append(f"Average depth {stats.average_depth:.2f}")
        expected_width = f" (expected average {config.width_mean:.2f})" if config else ""
        lines.append(
            f"Average width without root level: {stats.average_width:.2f}{expected_width}"
        )
        return lines
