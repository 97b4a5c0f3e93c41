"""
Graph module for famtree.

This module provides the NetworkX-based node store and the acyclic edge
insertion contract shared by the generator, validator and renderers.
"""

from famtree.graph.acyclic import AcyclicGraph, new_identifier

__all__ = [
    "AcyclicGraph",
    "new_identifier",
]
