from dataclasses import dataclass, field

from dotdelta.canonical import CanonicalGraph

EdgePair = tuple[str, str]


@dataclass(slots=True, frozen=True)
class GraphDelta:
    added_nodes: frozenset[str] = field(default_factory=frozenset)
    removed_nodes: frozenset[str] = field(default_factory=frozenset)
    added_edges: frozenset[EdgePair] = field(default_factory=frozenset)
    removed_edges: frozenset[EdgePair] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not (self.added_nodes or self.removed_nodes or self.added_edges or self.removed_edges)


def compute_delta(before: CanonicalGraph, after: CanonicalGraph) -> GraphDelta:
    """Set difference of node ids and ``(source, target)`` pairs.

    Edge attributes, labels included, are not part of edge identity here, so
    relabelling an edge produces no delta.
    """
    nodes_before, edges_before = _to_sets(before)
    nodes_after, edges_after = _to_sets(after)

    return GraphDelta(
        added_nodes=frozenset(nodes_after - nodes_before),
        removed_nodes=frozenset(nodes_before - nodes_after),
        added_edges=frozenset(edges_after - edges_before),
        removed_edges=frozenset(edges_before - edges_after),
    )


def _to_sets(graph: CanonicalGraph) -> tuple[set[str], set[EdgePair]]:
    nodes = set(graph.nodes)
    edges = {edge.pair for edge in graph.edges}
    return nodes, edges
