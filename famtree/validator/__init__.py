"""
Validator module for famtree.

This module checks finished graphs for the tree property and reports
diagnostic branching statistics.
"""

from famtree.validator.checks import (
    build_levels,
    find_roots,
    has_single_paths,
    validate,
)

__all__ = [
    "build_levels",
    "find_roots",
    "has_single_paths",
    "validate",
]
