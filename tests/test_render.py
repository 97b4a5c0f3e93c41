"""
Tests for the render module.

Tests the exact DOT and Mermaid output, label escaping and ordering.
"""

import pytest
from famtree.generator import generate
from famtree.graph import AcyclicGraph
from famtree.render import OutputFormat, render, to_dot, to_mermaid

from tests.fixtures import WIDE_CONFIG


@pytest.fixture
def parent_child():
    """A named parent with one named child."""
    graph = AcyclicGraph("Test Graph")
    parent = graph.add_node("Parent")
    child = graph.add_node("Child")
    graph.add_edge(parent, child)
    return graph, parent, child


class TestDot:
    """Tests for the DOT renderer."""

    def test_dot_format(self, parent_child):
        """Test the exact output for a two-node graph."""
        graph, parent, child = parent_child

        node_lines = {
            parent: [
                f'  "{parent.hex}" [label = "Parent"];',
                f'  "{parent.hex}" -> {{"{child.hex}"}};',
            ],
            child: [f'  "{child.hex}" [label = "Child"];'],
        }
        body = [line for node_id in sorted(node_lines) for line in node_lines[node_id]]
        expected = "\n".join(
            ['digraph "Test Graph" {', "  node [shape = box]", "  graph [rankdir = TB]", ""]
            + body
            + ["}"]
        ) + "\n"

        assert to_dot(graph) == expected

    def test_unnamed_childless_node(self):
        """Test that a bare node renders without label or edge line."""
        graph = AcyclicGraph("g")
        node = graph.add_node()

        lines = to_dot(graph).splitlines()

        assert f'  "{node.hex}";' in lines
        assert not any("->" in line for line in lines)

    def test_children_sorted(self):
        """Test that every child appears on one edge line, sorted."""
        graph = AcyclicGraph("g")
        root = graph.add_node("Root")
        children = [graph.add_node() for _ in range(5)]
        for child in children:
            graph.add_edge(root, child)

        edge_lines = [line for line in to_dot(graph).splitlines() if "->" in line]

        targets = " ".join(f'"{child.hex}"' for child in sorted(children))
        assert edge_lines == [f'  "{root.hex}" -> {{{targets}}};']

    def test_label_escaping(self):
        """Test that quotes and backslashes in labels are escaped."""
        graph = AcyclicGraph('say "hi"')
        node = graph.add_node('a "quoted" \\ name')

        output = to_dot(graph)

        assert output.startswith('digraph "say \\"hi\\"" {\n')
        assert f'  "{node.hex}" [label = "a \\"quoted\\" \\\\ name"];' in output.splitlines()


class TestMermaid:
    """Tests for the Mermaid renderer."""

    def test_mermaid_format(self, parent_child):
        """Test the exact output for a two-node graph."""
        graph, parent, child = parent_child

        node_lines = {
            parent: f'  {parent.hex}["Parent"] --> {child.hex}',
            child: f'  {child.hex}["Child"]',
        }
        expected = "\n".join(
            ["---", 'title: "Test Graph"', "---", "flowchart TB"]
            + [node_lines[node_id] for node_id in sorted(node_lines)]
        ) + "\n"

        assert to_mermaid(graph) == expected

    def test_multiple_children_joined(self):
        """Test that several targets are joined with '&'."""
        graph = AcyclicGraph("g")
        root = graph.add_node()
        children = [graph.add_node() for _ in range(3)]
        for child in children:
            graph.add_edge(root, child)

        lines = to_mermaid(graph).splitlines()

        targets = " & ".join(child.hex for child in sorted(children))
        assert f"  {root.hex} --> {targets}" in lines

    def test_unnamed_childless_node(self):
        """Test that a bare node renders as its identifier only."""
        graph = AcyclicGraph("g")
        node = graph.add_node()

        assert to_mermaid(graph).splitlines()[-1] == f"  {node.hex}"

    def test_label_escaping(self):
        """Test that quotes in labels become entity codes."""
        graph = AcyclicGraph("multi\nline")
        node = graph.add_node('the "one"')

        lines = to_mermaid(graph).splitlines()

        assert lines[1] == 'title: "multi line"'
        assert f'  {node.hex}["the #quot;one#quot;"]' in lines

    def test_title_is_quoted(self):
        """Test that a title with a colon stays a single front-matter value."""
        graph = AcyclicGraph('family: smith "senior" \\ jr')

        lines = to_mermaid(graph).splitlines()

        assert lines[:3] == ["---", 'title: "family: smith \\"senior\\" \\\\ jr"', "---"]


class TestRenderDispatch:
    """Tests for determinism and format selection."""

    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_rendering_is_deterministic(self, fmt):
        """Test that rendering twice yields identical bytes."""
        graph = generate(WIDE_CONFIG.with_seed(42)).graph

        assert render(graph, fmt) == render(graph, fmt)

    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_same_seed_same_text(self, fmt):
        """Test that two runs with one seed render identically."""
        first = generate(WIDE_CONFIG.with_seed(11)).graph
        second = generate(WIDE_CONFIG.with_seed(11)).graph

        assert render(first, fmt) == render(second, fmt)

    def test_nodes_ordered_by_identifier(self):
        """Test that node declarations follow identifier order."""
        graph = generate(WIDE_CONFIG.with_seed(3)).graph

        declared = [
            line.split('"')[1]
            for line in to_dot(graph).splitlines()
            if line.startswith('  "') and "->" not in line
        ]

        assert declared == [node_id.hex for node_id in sorted(graph.node_ids())]

    def test_dispatch(self):
        """Test format selection by enum and by name."""
        graph = AcyclicGraph("g")
        graph.add_node("x")

        assert render(graph) == to_dot(graph)
        assert render(graph, OutputFormat.MERMAID) == to_mermaid(graph)
        assert render(graph, "mermaid") == to_mermaid(graph)

        with pytest.raises(ValueError):
            render(graph, "svg")
