import json

import pytest

from dotdelta.canonical import CanonicalEdge, parse_graph
from dotdelta.delta import GraphDelta
from dotdelta.errors import InterchangeError
from dotdelta.interchange import (
    delta_to_dict,
    dumps,
    graph_from_dict,
    graph_to_dict,
    loads_graph,
)


def test_graph_to_dict_emits_nodes_and_links_with_optional_label():
    graph = parse_graph('digraph { a -> b [label="x", color=red]; b -> c; }')

    assert graph_to_dict(graph) == {
        "nodes": [
            {"id": "a", "name": "a"},
            {"id": "b", "name": "b"},
            {"id": "c", "name": "c"},
        ],
        "links": [
            {"source": "a", "target": "b", "label": "x"},
            {"source": "b", "target": "c"},
        ],
    }


def test_delta_to_dict_sorts_each_list():
    delta = GraphDelta(
        added_nodes=frozenset({"z", "c"}),
        removed_nodes=frozenset({"b"}),
        added_edges=frozenset({("z", "a"), ("c", "z")}),
        removed_edges=frozenset(),
    )

    assert delta_to_dict(delta) == {
        "added_nodes": ["c", "z"],
        "removed_nodes": ["b"],
        "added_edges": [["c", "z"], ["z", "a"]],
        "removed_edges": [],
    }


def test_graph_from_dict_reads_interchange_back():
    graph = parse_graph('digraph { lonely; a -> b [label="x"]; b -> a }')

    restored = loads_graph(dumps(graph_to_dict(graph)))

    assert restored == graph
    assert restored.nodes == ("lonely", "a", "b")


def test_graph_from_dict_synthesizes_link_endpoints():
    graph = graph_from_dict({"links": [{"source": "a", "target": "b"}]})

    assert graph.nodes == ("a", "b")
    assert graph.edges == (CanonicalEdge(source="a", target="b"),)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"nodes": "a"},
        {"nodes": [{"name": "a"}]},
        {"links": [{"source": "a"}]},
        {"links": [{"source": "a", "target": "b", "label": 3}]},
        {"links": ["a->b"]},
    ],
)
def test_graph_from_dict_rejects_malformed_payloads(payload):
    with pytest.raises(InterchangeError):
        graph_from_dict(payload)


def test_loads_graph_wraps_json_errors():
    with pytest.raises(InterchangeError) as excinfo:
        loads_graph("{not json")

    assert isinstance(excinfo.value.cause, json.JSONDecodeError)


def test_dumps_indent_and_compact():
    assert dumps({"a": [1]}, indent=None) == '{"a": [1]}'
    assert dumps({"a": 1}) == '{\n  "a": 1\n}'
    assert dumps({"id": "é"}, indent=None) == '{"id": "é"}'
