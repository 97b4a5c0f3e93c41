"""
Acyclic Graph for famtree

This module owns the node store and the only edge insertion path, built on
a NetworkX DiGraph where nodes are keyed by uuid.UUID and edges point from
parent to child.

Design Decisions:
    - Uses NetworkX DiGraph for the directed parent -> child relation
    - Stores Node objects as node attributes
    - Relationships are identifier lookups, never object references
    - Append-only: nodes and edges can be added but never removed

Graph Properties:
    - Directed: edges point from parent to child
    - Acyclic: every insertion is gated by a reachability check
    - No parallel edges, no dangling edges
    - Node IDs are random 128-bit UUIDs
"""

import logging
import random
import uuid
from collections import deque
from typing import Iterator, Optional, Union
from uuid import UUID

import networkx as nx

from famtree.errors import (
    CycleDetectedError,
    EdgeAlreadyExistsError,
    IdentifierCollisionError,
    NodeNotFoundError,
)
from famtree.models import Node, Payload

logger = logging.getLogger(__name__)

PayloadLike = Union[Payload, int, str, None]


def new_identifier(rng: Optional[random.Random] = None) -> UUID:
    """
    Create a random version 4 UUID.

    Args:
        rng: Seeded source to draw the 128 bits from. When omitted the
             ambient entropy source behind uuid.uuid4() is used.

    Returns:
        A fresh identifier
    """
    if rng is None:
        return uuid.uuid4()
    return UUID(int=rng.getrandbits(128), version=4)


class AcyclicGraph:
    """
    An append-only directed acyclic graph of Nodes.

    Wraps a NetworkX DiGraph to provide a clean interface for:
    - Creating nodes with store-unique identifiers
    - Inserting edges that keep the graph acyclic
    - Deriving the reverse adjacency (child -> parents)

    Attributes:
        label: Name of the graph, used as the title when rendering
        graph: Read-only view of the underlying NetworkX DiGraph

    Usage:
        graph = AcyclicGraph("family")
        root = graph.add_node("Root")
        child = graph.add_node()
        graph.add_edge(root, child)
    """

    def __init__(self, label: str) -> None:
        """Initialize an empty graph with the given label."""
        self._label = label
        self._graph: nx.DiGraph = nx.DiGraph()

    @property
    def label(self) -> str:
        return self._label

    @property
    def graph(self) -> nx.DiGraph:
        """Read-only view of the underlying NetworkX graph; edges go through add_edge."""
        return self._graph.copy(as_view=True)

    @property
    def node_count(self) -> int:
        """Return the number of nodes in the graph."""
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Return the number of edges in the graph."""
        return self._graph.number_of_edges()

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def add_node(
        self,
        name: Optional[str] = None,
        payload: PayloadLike = None,
        rng: Optional[random.Random] = None,
    ) -> UUID:
        """
        Create a node with no children and return its identifier.

        Args:
            name: Optional display name
            payload: Payload, or a plain int/str/None converted with Payload.coerce
            rng: Seeded source for the identifier (ambient entropy if omitted)

        Returns:
            The new node's identifier

        Raises:
            IdentifierCollisionError: The generated identifier is already taken
        """
        node_id = new_identifier(rng)
        return self._insert_node(node_id, name, Payload.coerce(payload))

    def _insert_node(self, node_id: UUID, name: Optional[str], payload: Payload) -> UUID:
        if node_id in self._graph:
            raise IdentifierCollisionError(node_id)
        self._graph.add_node(node_id, node=Node(id=node_id, name=name, payload=payload))
        logger.debug("Created node %s name=%r payload=%s", node_id.hex, name, payload.describe())
        return node_id

    def add_edge(self, parent: UUID, child: UUID) -> None:
        """
        Add a parent -> child edge.

        All checks run before the graph is touched, so a rejected call
        leaves it unchanged. The cycle check dominates the duplicate check.

        Args:
            parent: Identifier of the parent node
            child: Identifier of the child node

        Raises:
            NodeNotFoundError: parent or child is not in the graph
            CycleDetectedError: child already reaches parent (self-loops included)
            EdgeAlreadyExistsError: child is already a child of parent
        """
        for node_id in (parent, child):
            if node_id not in self._graph:
                raise NodeNotFoundError(node_id, parent=parent, child=child)

        if self._reaches(child, parent):
            raise CycleDetectedError(parent, child)

        if self._graph.has_edge(parent, child):
            raise EdgeAlreadyExistsError(parent, child)

        self._graph.add_edge(parent, child)

    def _reaches(self, start: UUID, target: UUID) -> bool:
        """Breadth-first search from start along children edges."""
        queue = deque([start])
        queued = {start}

        while queue:
            current = queue.popleft()
            if current == target:
                return True
            for child in self._graph.successors(current):
                if child not in queued:
                    queued.add(child)
                    queue.append(child)

        return False

    def get_node(self, node_id: UUID) -> Node:
        """
        Retrieve a Node by its identifier.

        Raises:
            NodeNotFoundError: The identifier is not in the graph
        """
        if node_id not in self._graph:
            raise NodeNotFoundError(node_id)
        return self._graph.nodes[node_id]["node"]

    def children(self, node_id: UUID) -> frozenset[UUID]:
        """
        Get the identifiers of a node's children.

        Raises:
            NodeNotFoundError: The identifier is not in the graph
        """
        if node_id not in self._graph:
            raise NodeNotFoundError(node_id)
        return frozenset(self._graph.successors(node_id))

    def node_ids(self) -> Iterator[UUID]:
        """Iterate over node identifiers in insertion order."""
        yield from self._graph.nodes

    def nodes(self) -> Iterator[Node]:
        """Iterate over Nodes in insertion order."""
        for node_id in self._graph.nodes:
            yield self._graph.nodes[node_id]["node"]

    def edges(self) -> Iterator[tuple[UUID, UUID]]:
        """Iterate over (parent, child) pairs."""
        yield from self._graph.edges

    def parent_index(self) -> dict[UUID, set[UUID]]:
        """
        Build the reverse adjacency from scratch.

        Scans every node's children once; recomputed on each call.
        Nodes without parents do not appear as keys.

        Returns:
            Mapping from child identifier to the set of its parents
        """
        parents: dict[UUID, set[UUID]] = {}
        for node_id in self._graph.nodes:
            for child in self._graph.successors(node_id):
                parents.setdefault(child, set()).add(node_id)
        return parents

    def snapshot(self) -> tuple[str, frozenset]:
        """
        Return a hashable structural fingerprint of the graph.

        Two snapshots compare equal iff label, nodes and edges are equal.
        """
        return (
            self._label,
            frozenset(
                (node.id, node.name, node.payload, self.children(node.id))
                for node in self.nodes()
            ),
        )
