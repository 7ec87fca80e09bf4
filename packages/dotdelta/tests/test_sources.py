import io
import json

import httpx
import pytest

from dotdelta.canonical import CanonicalEdge
from dotdelta.errors import InterchangeError, SourceError
from dotdelta.sources import is_url, load_graph, load_source


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_load_source_reads_utf8_files(tmp_path):
    path = tmp_path / "graph.dot"
    path.write_text('digraph { "é" -> b }', encoding="utf-8")

    assert load_source(str(path)) == 'digraph { "é" -> b }'


def test_missing_file_raises_source_error(tmp_path):
    missing = str(tmp_path / "nope.dot")

    with pytest.raises(SourceError) as excinfo:
        load_source(missing)

    assert excinfo.value.location == missing
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_dash_reads_stdin():
    assert load_source("-", stdin=io.StringIO("digraph { a }")) == "digraph { a }"


def test_urls_are_fetched_without_cache():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["headers"] = dict(request.headers)
        return httpx.Response(200, text="digraph { a -> b }")

    client = _client(handler)
    text = load_source("https://example.com/semantic_graph.dot", http_client=client)

    assert text == "digraph { a -> b }"
    assert captured["url"] == "https://example.com/semantic_graph.dot"
    assert captured["headers"]["cache-control"] == "no-store"
    assert not client.is_closed


def test_http_error_status_raises_source_error():
    client = _client(lambda request: httpx.Response(404, text="missing"))

    with pytest.raises(SourceError, match="HTTP 404") as excinfo:
        load_source("http://example.com/g.dot", http_client=client)

    assert isinstance(excinfo.value.cause, httpx.HTTPStatusError)


def test_transport_failure_raises_source_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceError, match="connection refused") as excinfo:
        load_source("http://example.com/g.dot", http_client=_client(handler))

    assert excinfo.value.location == "http://example.com/g.dot"


def test_load_graph_parses_dot_and_reads_json_snapshots(tmp_path):
    dot_path = tmp_path / "g.dot"
    dot_path.write_text("digraph { a -> b [label=x] }", encoding="utf-8")
    json_path = tmp_path / "g.json"
    json_path.write_text(
        json.dumps({"nodes": [{"id": "a", "name": "a"}], "links": []}), encoding="utf-8"
    )

    assert load_graph(str(dot_path)).edges == (
        CanonicalEdge(source="a", target="b", attrs={"label": "x"}),
    )
    assert load_graph(str(json_path)).nodes == ("a",)


def test_load_graph_uses_url_path_to_detect_json():
    payload = {"nodes": [], "links": [{"source": "x", "target": "y"}]}
    client = _client(lambda request: httpx.Response(200, json=payload))

    graph = load_graph("https://example.com/snap.json?rev=2", http_client=client)

    assert graph.nodes == ("x", "y")


def test_load_graph_reports_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[", encoding="utf-8")

    with pytest.raises(InterchangeError):
        load_graph(str(path))


def test_is_url():
    assert is_url("http://a/b.dot")
    assert is_url("https://a/b.dot")
    assert not is_url("graphs/http.dot")
