"""
Render module for famtree.

This module provides the DOT and Mermaid text renderers.
"""

from famtree.render.formats import OutputFormat, render, to_dot, to_mermaid

__all__ = [
    "OutputFormat",
    "render",
    "to_dot",
    "to_mermaid",
]
