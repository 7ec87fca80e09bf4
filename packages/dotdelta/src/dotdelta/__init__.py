import logging

from dotdelta.canonical import CanonicalEdge, CanonicalGraph, canonicalize, parse_graph
from dotdelta.delta import GraphDelta, compute_delta
from dotdelta.errors import DotDeltaError, DotSyntaxError, LexError, ParseError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CanonicalEdge",
    "CanonicalGraph",
    "DotDeltaError",
    "DotSyntaxError",
    "GraphDelta",
    "LexError",
    "ParseError",
    "canonicalize",
    "compute_delta",
    "parse_graph",
]
