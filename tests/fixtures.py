"""
Test fixtures for famtree.

This module provides small hand-built graphs and configurations
for testing the generator, validator and renderers.
"""

import random

from famtree.graph import AcyclicGraph
from famtree.models import GeneratorConfig

# Seeds exercised by the property-style tests
SEEDS = [0, 1, 2, 7, 42, 1234, 99999, 2**32 + 5, 2**64 - 1]

SMALL_CONFIG = GeneratorConfig(depth=4, width_mean=6.0, width_std=2.0, child_mean=2.0, child_std=1.0)

WIDE_CONFIG = GeneratorConfig(depth=6, width_mean=30.0, width_std=10.0, child_mean=5.0, child_std=3.0)

# Branching far above the width budget so the cap binds on every level
CAPPED_CONFIG = GeneratorConfig(depth=5, width_mean=3.0, width_std=0.5, child_mean=20.0, child_std=1.0)


def make_chain(length: int, label: str = "chain") -> tuple[AcyclicGraph, list]:
    """Build a -> b -> c ... with `length` nodes."""
    graph = AcyclicGraph(label)
    rng = random.Random(length)
    ids = [graph.add_node(f"n{i}", i, rng=rng) for i in range(length)]
    for parent, child in zip(ids, ids[1:]):
        graph.add_edge(parent, child)
    return graph, ids


def make_diamond() -> tuple[AcyclicGraph, dict]:
    """
    Build A -> B, A -> C, B -> C.

    C is reachable from A by two paths.
    """
    graph = AcyclicGraph("diamond")
    ids = {name: graph.add_node(name) for name in ("A", "B", "C")}
    graph.add_edge(ids["A"], ids["B"])
    graph.add_edge(ids["A"], ids["C"])
    graph.add_edge(ids["B"], ids["C"])
    return graph, ids


def make_tree() -> tuple[AcyclicGraph, dict]:
    """
    Build a small tree:

        root
        ├── a
        │   ├── c
        │   └── d
        └── b
    """
    graph = AcyclicGraph("tree")
    ids = {name: graph.add_node(name) for name in ("root", "a", "b", "c", "d")}
    graph.add_edge(ids["root"], ids["a"])
    graph.add_edge(ids["root"], ids["b"])
    graph.add_edge(ids["a"], ids["c"])
    graph.add_edge(ids["a"], ids["d"])
    return graph, ids
