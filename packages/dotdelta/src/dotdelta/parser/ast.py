from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

Attr = tuple[str, str]


@dataclass(slots=True, frozen=True)
class NodeStatement:
    id: str
    attrs: tuple[Attr, ...] = ()


@dataclass(slots=True, frozen=True)
class EdgeStatement:
    endpoints: tuple[Endpoint, ...]
    attrs: tuple[Attr, ...] = ()


@dataclass(slots=True, frozen=True)
class AttributeStatement:
    target: str
    attrs: tuple[Attr, ...] = ()


@dataclass(slots=True, frozen=True)
class Subgraph:
    id: str | None = None
    statements: tuple[Statement, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class Graph:
    directed: bool
    strict: bool = False
    id: str | None = None
    statements: tuple[Statement, ...] = field(default_factory=tuple)


Endpoint = Union[str, Subgraph]
Statement = Union[NodeStatement, EdgeStatement, AttributeStatement, Subgraph]
