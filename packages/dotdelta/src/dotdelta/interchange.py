import json
from typing import Any

from dotdelta.canonical import CanonicalEdge, CanonicalGraph
from dotdelta.delta import GraphDelta
from dotdelta.errors import InterchangeError


def graph_to_dict(graph: CanonicalGraph) -> dict[str, Any]:
    links: list[dict[str, str]] = []
    for edge in graph.edges:
        link = {"source": edge.source, "target": edge.target}
        if edge.label is not None:
            link["label"] = edge.label
        links.append(link)

    return {
        "nodes": [{"id": node_id, "name": node_id} for node_id in graph.nodes],
        "links": links,
    }


def graph_from_dict(payload: Any) -> CanonicalGraph:
    if not isinstance(payload, dict):
        raise InterchangeError("graph payload must be an object")

    nodes: dict[str, None] = {}
    for entry in _list_field(payload, "nodes"):
        if not isinstance(entry, dict) or not isinstance(entry.get("id"), str):
            raise InterchangeError(f"invalid node entry: {entry!r}")
        nodes[entry["id"]] = None

    edges: list[CanonicalEdge] = []
    for entry in _list_field(payload, "links"):
        if not isinstance(entry, dict):
            raise InterchangeError(f"invalid link entry: {entry!r}")
        source, target, label = entry.get("source"), entry.get("target"), entry.get("label")
        if not isinstance(source, str) or not isinstance(target, str):
            raise InterchangeError(f"link needs string source and target: {entry!r}")
        if label is not None and not isinstance(label, str):
            raise InterchangeError(f"link label must be a string: {entry!r}")
        nodes.setdefault(source, None)
        nodes.setdefault(target, None)
        attrs = {} if label is None else {"label": label}
        edges.append(CanonicalEdge(source=source, target=target, attrs=attrs))

    return CanonicalGraph(nodes=tuple(nodes), edges=tuple(edges))


def delta_to_dict(delta: GraphDelta) -> dict[str, Any]:
    return {
        "added_nodes": sorted(delta.added_nodes),
        "removed_nodes": sorted(delta.removed_nodes),
        "added_edges": [list(pair) for pair in sorted(delta.added_edges)],
        "removed_edges": [list(pair) for pair in sorted(delta.removed_edges)],
    }


def dumps(payload: dict[str, Any], indent: int | None = 2) -> str:
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def loads_graph(text: str) -> CanonicalGraph:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InterchangeError(f"invalid graph JSON: {exc}", cause=exc) from exc
    return graph_from_dict(payload)


def _list_field(payload: dict[str, Any], name: str) -> list[Any]:
    value = payload.get(name, [])
    if not isinstance(value, list):
        raise InterchangeError(f"{name!r} must be a list")
    return value
