"""
famtree

Core engine for generating random family-tree shaped graphs, checking
their structure and rendering them as DOT or Mermaid text.
"""

from famtree.models import GeneratorConfig, Node, Payload, ValidationReport

__all__ = ["GeneratorConfig", "Node", "Payload", "ValidationReport"]
__version__ = "0.1.0"
