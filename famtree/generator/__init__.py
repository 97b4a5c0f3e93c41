"""
Generator module for famtree.

This module provides the seeded, level-by-level stochastic construction of
family-tree shaped graphs.
"""

from famtree.generator.family_tree import (
    GaussianSampler,
    draw_seed,
    generate,
    generate_graph,
    round_half_away,
)

__all__ = [
    "GaussianSampler",
    "draw_seed",
    "generate",
    "generate_graph",
    "round_half_away",
]
