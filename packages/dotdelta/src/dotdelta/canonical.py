"""Canonical node/edge model and the AST walk that produces it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dotdelta.parser.ast import (
    Attr,
    AttributeStatement,
    EdgeStatement,
    Endpoint,
    Graph,
    NodeStatement,
    Statement,
    Subgraph,
)
from dotdelta.parser.parser import parse_dot

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CanonicalEdge:
    source: str
    target: str
    attrs: dict[str, str] = field(default_factory=dict, hash=False)

    @property
    def label(self) -> str | None:
        return self.attrs.get("label")

    @property
    def pair(self) -> tuple[str, str]:
        return (self.source, self.target)


@dataclass(slots=True, frozen=True, eq=False)
class CanonicalGraph:
    """Deduplicated nodes plus edges in declaration order.

    Node order is kept for deterministic output but does not take part in
    equality. Edge order does.
    """

    nodes: tuple[str, ...] = ()
    edges: tuple[CanonicalEdge, ...] = ()
    name: str | None = None
    directed: bool = True
    strict: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CanonicalGraph):
            return NotImplemented
        return set(self.nodes) == set(other.nodes) and self.edges == other.edges

    def __hash__(self) -> int:
        return hash(frozenset(self.nodes))


class Canonicalizer:
    def __init__(self) -> None:
        self._nodes: dict[str, None] = {}
        self._edges: list[CanonicalEdge] = []
        self._subgraph_members: dict[int, list[str]] = {}

    def build(self, graph: Graph) -> CanonicalGraph:
        self._walk(graph.statements)
        return CanonicalGraph(
            nodes=tuple(self._nodes),
            edges=tuple(self._edges),
            name=graph.id,
            directed=graph.directed,
            strict=graph.strict,
        )

    def _walk(self, statements: tuple[Statement, ...]) -> list[str]:
        """Apply ``statements`` and return the node ids they mention, in order."""
        mentioned: dict[str, None] = {}
        for statement in statements:
            if isinstance(statement, NodeStatement):
                self._declare(statement.id)
                mentioned[statement.id] = None
            elif isinstance(statement, EdgeStatement):
                for node_id in self._add_edges(statement):
                    mentioned[node_id] = None
            elif isinstance(statement, Subgraph):
                for node_id in self._expand(statement):
                    mentioned[node_id] = None
            elif isinstance(statement, AttributeStatement):
                # Defaults are not propagated.
                continue
        return list(mentioned)

    def _add_edges(self, statement: EdgeStatement) -> list[str]:
        groups = [self._resolve(endpoint) for endpoint in statement.endpoints]
        attrs = resolve_attrs(statement.attrs)
        for tails, heads in zip(groups, groups[1:]):
            for tail in tails:
                for head in heads:
                    self._edges.append(CanonicalEdge(source=tail, target=head, attrs=dict(attrs)))
        return [node_id for group in groups for node_id in group]

    def _resolve(self, endpoint: Endpoint) -> list[str]:
        if isinstance(endpoint, Subgraph):
            return self._expand(endpoint)
        self._declare(endpoint)
        return [endpoint]

    def _expand(self, subgraph: Subgraph) -> list[str]:
        # A subgraph shared by two links of a chain is walked only once.
        key = id(subgraph)
        if key not in self._subgraph_members:
            self._subgraph_members[key] = self._walk(subgraph.statements)
        return self._subgraph_members[key]

    def _declare(self, node_id: str) -> None:
        self._nodes.setdefault(node_id, None)


def resolve_attrs(attrs: tuple[Attr, ...]) -> dict[str, str]:
    resolved: dict[str, str] = {}
    for key, value in attrs:
        resolved[key] = value
    return resolved


def canonicalize(graph: Graph) -> CanonicalGraph:
    return Canonicalizer().build(graph)


def parse_graph(source: str) -> CanonicalGraph:
    graph = canonicalize(parse_dot(source))
    logger.debug("parsed graph %r: %d nodes, %d edges", graph.name, len(graph.nodes), len(graph.edges))
    return graph
