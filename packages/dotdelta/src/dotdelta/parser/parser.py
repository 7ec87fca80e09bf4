from dotdelta.errors import ParseError
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
from dotdelta.parser.lexer import Token, tokenize

# Keeps the parser and the canonical walk well inside the interpreter's
# recursion limit.
MAX_SUBGRAPH_DEPTH = 100


class DotParser:
    def __init__(self, source: str):
        self._tokens = tokenize(source)
        self._index = 0
        self._depth = 0

    def parse(self) -> Graph:
        strict = self._accept_keyword("strict")
        kind = self._expect_keyword("graph", "digraph")
        graph_id = None
        if self._peek().kind == "ID":
            graph_id = self._parse_id("graph name")
        self._expect("LBRACE", "'{'")
        statements = self._parse_stmt_list()
        self._expect("RBRACE", "'}'")
        self._expect("EOF", "end of input")
        return Graph(
            directed=kind == "digraph",
            strict=strict,
            id=graph_id,
            statements=tuple(statements),
        )

    def _parse_stmt_list(self) -> list[Statement]:
        statements: list[Statement] = []
        while self._peek().kind not in {"RBRACE", "EOF"}:
            statements.extend(self._parse_statement())
            if self._peek().kind == "SEMICOLON":
                self._consume()
        return statements

    def _parse_statement(self) -> list[Statement]:
        token = self._peek()

        if token.kind == "KEYWORD" and token.value.lower() in {"graph", "node", "edge"}:
            self._consume()
            return [AttributeStatement(target=token.value.lower(), attrs=self._parse_attr_list())]

        if token.kind == "LBRACE" or self._at_keyword("subgraph"):
            subgraph = self._parse_subgraph()
            if self._peek().kind == "EDGEOP":
                return self._parse_edge_statements(subgraph)
            return [subgraph]

        if token.kind != "ID":
            raise self._error("statement")

        lead = self._parse_id()
        if self._peek().kind == "EQUALS":
            self._consume()
            value = self._parse_id("attribute value")
            return [AttributeStatement(target="graph", attrs=((lead, value),))]

        self._skip_port()
        if self._peek().kind == "EDGEOP":
            return self._parse_edge_statements(lead)

        # A bare id followed by "[" is always a node statement.
        return [NodeStatement(id=lead, attrs=self._parse_attr_list(optional=True))]

    def _parse_edge_statements(self, first: Endpoint) -> list[Statement]:
        chain = [first]
        while self._peek().kind == "EDGEOP":
            self._consume()
            chain.append(self._parse_endpoint())

        attrs = self._parse_attr_list(optional=True)
        return [
            EdgeStatement(endpoints=(chain[index], chain[index + 1]), attrs=attrs)
            for index in range(len(chain) - 1)
        ]

    def _parse_endpoint(self) -> Endpoint:
        if self._peek().kind == "LBRACE" or self._at_keyword("subgraph"):
            return self._parse_subgraph()
        if self._peek().kind != "ID":
            raise self._error("node identifier or subgraph")
        node_id = self._parse_id()
        self._skip_port()
        return node_id

    def _parse_subgraph(self) -> Subgraph:
        subgraph_id = None
        if self._accept_keyword("subgraph") and self._peek().kind == "ID":
            subgraph_id = self._parse_id("subgraph name")
        if self._depth >= MAX_SUBGRAPH_DEPTH:
            raise self._error(f"at most {MAX_SUBGRAPH_DEPTH} nested subgraphs")
        self._expect("LBRACE", "'{'")
        self._depth += 1
        statements = self._parse_stmt_list()
        self._depth -= 1
        self._expect("RBRACE", "'}'")
        return Subgraph(id=subgraph_id, statements=tuple(statements))

    def _parse_attr_list(self, optional: bool = False) -> tuple[Attr, ...]:
        if optional and self._peek().kind != "LBRACKET":
            return ()

        attrs: list[Attr] = []
        self._expect("LBRACKET", "'['")
        while True:
            while self._peek().kind != "RBRACKET":
                key = self._parse_id("attribute name")
                self._expect("EQUALS", "'='")
                value = self._parse_id("attribute value")
                attrs.append((key, value))
                if self._peek().kind in {"COMMA", "SEMICOLON"}:
                    self._consume()
            self._expect("RBRACKET", "']'")
            if self._peek().kind != "LBRACKET":
                return tuple(attrs)
            self._consume()

    def _parse_id(self, expected: str = "identifier") -> str:
        token = self._peek()
        if token.kind != "ID":
            raise self._error(expected)
        self._consume()

        value = token.value
        if token.quoted:
            while self._peek().kind == "PLUS":
                self._consume()
                part = self._peek()
                if part.kind != "ID" or not part.quoted:
                    raise self._error("quoted string")
                value += self._consume().value
        return value

    def _skip_port(self) -> None:
        # Ports ("a:p" or "a:p:ne") do not change node identity.
        for label in ("port", "compass point"):
            if self._peek().kind != "COLON":
                return
            self._consume()
            self._parse_id(label)

    def _at_keyword(self, name: str) -> bool:
        token = self._peek()
        return token.kind == "KEYWORD" and token.value.lower() == name

    def _accept_keyword(self, name: str) -> bool:
        if self._at_keyword(name):
            self._consume()
            return True
        return False

    def _expect_keyword(self, *names: str) -> str:
        for name in names:
            if self._accept_keyword(name):
                return name
        raise self._error(" or ".join(repr(name) for name in names))

    def _expect(self, kind: str, expected: str) -> Token:
        if self._peek().kind != kind:
            raise self._error(expected)
        return self._consume()

    def _error(self, expected: str) -> ParseError:
        token = self._peek()
        return ParseError(position=token.position, expected=expected, found=token.describe())

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _consume(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token


def parse_dot(source: str) -> Graph:
    return DotParser(source).parse()
