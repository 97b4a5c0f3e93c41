"""
Text Renderers for famtree

This module turns a finished graph into one of two textual descriptions:
- DOT (Graphviz) digraph
- Mermaid flowchart

Both renderers are pure functions of the graph. Nodes and children are
emitted sorted by identifier, so the same graph always renders to the same
bytes. Identifiers are printed as 32-character hex strings.
"""

from enum import Enum
from typing import Optional

from famtree.graph import AcyclicGraph


class OutputFormat(str, Enum):
    """Supported output formats."""

    DOT = "dot"
    MERMAID = "mermaid"


def _dot_quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _yaml_quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", " ")
    return f'"{escaped}"'


def _mermaid_label(text: str) -> str:
    escaped = text.replace('"', "#quot;").replace("\n", " ")
    return f'["{escaped}"]'


def to_dot(graph: AcyclicGraph) -> str:
    """
    Render the graph in Graphviz DOT syntax.

    Example:
        digraph "family" {
          node [shape = box]
          graph [rankdir = TB]

          "0f3e..." [label = "Root"];
          "0f3e..." -> {"4a1c..." "9b2d..."};
        }
    """
    lines = [
        f"digraph {_dot_quote(graph.label)} {{",
        "  node [shape = box]",
        "  graph [rankdir = TB]",
        "",
    ]

    for node_id in sorted(graph.node_ids()):
        node = graph.get_node(node_id)
        declaration = f"  {_dot_quote(node_id.hex)}"
        if node.name is not None:
            declaration += f" [label = {_dot_quote(node.name)}]"
        lines.append(declaration + ";")

        children = sorted(graph.children(node_id))
        if children:
            targets = " ".join(_dot_quote(child.hex) for child in children)
            lines.append(f"  {_dot_quote(node_id.hex)} -> {{{targets}}};")

    lines.append("}")
    return "\n".join(lines) + "\n"


def to_mermaid(graph: AcyclicGraph) -> str:
    """
    Render the graph as a Mermaid flowchart.

    Example:
        ---
        title: "family"
        ---
        flowchart TB
          0f3e...["Root"] --> 4a1c... & 9b2d...
    """
    lines = [
        "---",
        f"title: {_yaml_quote(graph.label)}",
        "---",
        "flowchart TB",
    ]

    for node_id in sorted(graph.node_ids()):
        node = graph.get_node(node_id)
        line = f"  {node_id.hex}"
        if node.name is not None:
            line += _mermaid_label(node.name)

        children = sorted(graph.children(node_id))
        if children:
            line += " --> " + " & ".join(child.hex for child in children)
        lines.append(line)

    return "\n".join(lines) + "\n"


def render(graph: AcyclicGraph, fmt: Optional[OutputFormat] = None) -> str:
    """
    Render the graph in the requested format (DOT by default).

    Raises:
        ValueError: Unknown format name
    """
    fmt = OutputFormat(fmt) if fmt is not None else OutputFormat.DOT
    if fmt is OutputFormat.MERMAID:
        return to_mermaid(graph)
    return to_dot(graph)
