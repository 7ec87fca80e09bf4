"""String-in, string-out entry points for embedding hosts.

Every function returns interchange JSON. Syntax errors come back as
``{"error": "DOT syntax error: ..."}`` instead of raising.
"""

from dotdelta.canonical import parse_graph
from dotdelta.delta import compute_delta
from dotdelta.errors import DotSyntaxError
from dotdelta.interchange import delta_to_dict, dumps, graph_to_dict


def parse(text: str) -> str:
    try:
        graph = parse_graph(text)
    except DotSyntaxError as exc:
        return _error(exc)
    return dumps(graph_to_dict(graph), indent=None)


def delta(text1: str, text2: str) -> str:
    try:
        before = parse_graph(text1)
        after = parse_graph(text2)
    except DotSyntaxError as exc:
        return _error(exc)
    return dumps(delta_to_dict(compute_delta(before, after)), indent=None)


class DotParser:
    def parse(self, text: str) -> str:
        return parse(text)

    def delta(self, text1: str, text2: str) -> str:
        return delta(text1, text2)


def _error(exc: DotSyntaxError) -> str:
    return dumps({"error": f"DOT syntax error: {exc}"}, indent=None)
