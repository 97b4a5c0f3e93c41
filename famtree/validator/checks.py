"""
Structural Validation for famtree

This module re-derives the shape of a finished graph and checks that it is
a tree: exactly one root, and exactly one path from that root to every node.
It only looks at the graph itself, never at generator bookkeeping.

Checks (pass/fail):
    ROOT_COUNT_MISMATCH: number of nodes without a parent is not 1
    MULTIPLE_PATHS:      some node is reachable from the root twice

Statistics (diagnostic only):
    - average children over nodes that have at least one child
    - maximum and average depth
    - average level width, root level excluded

Design Decisions:
    - Traversals here are written independently of AcyclicGraph's own
      reachability search, so a bug in one cannot hide in the other
    - Failures are returned as data in a ValidationReport, never raised
"""

import logging
from collections import deque
from typing import Optional
from uuid import UUID

from famtree.graph import AcyclicGraph
from famtree.models import (
    FailureKind,
    GeneratorConfig,
    GraphStatistics,
    ValidationFailure,
    ValidationReport,
)

logger = logging.getLogger(__name__)


def validate(graph: AcyclicGraph, config: Optional[GeneratorConfig] = None) -> ValidationReport:
    """
    Validate that a graph is a single-rooted tree.

    Args:
        graph: The finished graph; it is not modified
        config: Generation parameters, used only to log expected values

    Returns:
        ValidationReport; report.passed is False and report.failure names the
        violated property when a check fails
    """
    parents = graph.parent_index()
    stats = GraphStatistics(
        node_count=graph.node_count,
        edge_count=graph.edge_count,
        average_children=average_children(graph),
    )

    roots = find_roots(graph, parents)
    if len(roots) != 1:
        failure = ValidationFailure(
            kind=FailureKind.ROOT_COUNT_MISMATCH,
            message=f"expected 1 root, found {len(roots)}",
            roots_found=len(roots),
        )
        logger.warning("Validation failed: %s", failure.message)
        return ValidationReport(passed=False, statistics=stats, failure=failure)

    root = roots[0]
    levels = build_levels(graph, root)
    depths = node_depths(levels)

    stats.level_sizes = [len(level) for level in levels]
    stats.max_depth = max(depths.values(), default=0)
    stats.average_depth = sum(depths.values()) / len(depths) if depths else 0.0
    stats.average_width = average_width_without_root(levels)

    repeated = first_repeated_node(graph, root)
    if repeated is not None:
        failure = ValidationFailure(
            kind=FailureKind.MULTIPLE_PATHS,
            message=f"graph contains multiple paths to node {repeated.hex}",
            node_id=repeated,
        )
        logger.warning("Validation failed: %s", failure.message)
        return ValidationReport(passed=False, root=root, statistics=stats, failure=failure)

    if config is not None:
        logger.info(
            "Average children %.2f (expected %.2f), average width %.2f (expected %.2f), "
            "max depth %d of %d levels",
            stats.average_children,
            config.child_mean,
            stats.average_width,
            config.width_mean,
            stats.max_depth,
            config.depth,
        )

    return ValidationReport(passed=True, root=root, statistics=stats)


def find_roots(graph: AcyclicGraph, parents: dict[UUID, set[UUID]]) -> list[UUID]:
    """Return the nodes that have no parent, in insertion order."""
    return [node_id for node_id in graph.node_ids() if node_id not in parents]


def average_children(graph: AcyclicGraph) -> float:
    """Average out-degree over nodes with at least one child (0.0 if none)."""
    counts = [len(graph.children(node_id)) for node_id in graph.node_ids()]
    with_children = [count for count in counts if count > 0]
    if not with_children:
        return 0.0
    return sum(with_children) / len(with_children)


def build_levels(graph: AcyclicGraph, root: UUID) -> list[list[UUID]]:
    """
    Layer the graph breadth-first from the root.

    Each level is de-duplicated but a node may still appear on several
    levels when the graph is not a tree. Terminates because the graph is
    acyclic.
    """
    levels = []
    current = [root]

    while current:
        levels.append(current)
        following: dict[UUID, None] = {}
        for node_id in current:
            for child in sorted(graph.children(node_id)):
                following[child] = None
        current = list(following)

    return levels


def node_depths(levels: list[list[UUID]]) -> dict[UUID, int]:
    """Map each node to the index of the deepest level it appears on."""
    depths = {}
    for depth, level in enumerate(levels):
        for node_id in level:
            depths[node_id] = depth
    return depths


def average_width_without_root(levels: list[list[UUID]]) -> float:
    if len(levels) <= 1:
        return 0.0
    return sum(len(level) for level in levels[1:]) / (len(levels) - 1)


def first_repeated_node(graph: AcyclicGraph, root: UUID) -> Optional[UUID]:
    """
    Walk from the root and return the first node reached a second time.

    Returns:
        None when every node is reachable by exactly one path
    """
    visited = {root}
    queue = deque([root])

    while queue:
        current = queue.popleft()
        for child in sorted(graph.children(current)):
            if child in visited:
                return child
            visited.add(child)
            queue.append(child)

    return None


def has_single_paths(graph: AcyclicGraph, root: UUID) -> bool:
    """Check that every node is reachable from root by exactly one path."""
    return first_repeated_node(graph, root) is None
