from collections.abc import Callable, Iterator
from dataclasses import dataclass

from dotdelta.errors import LexError


@dataclass(slots=True, frozen=True)
class Token:
    kind: str
    value: str
    position: int
    quoted: bool = False

    def describe(self) -> str:
        if self.kind == "EOF":
            return "end of input"
        if self.quoted:
            return f'"{self.value}"'
        return repr(self.value)


SINGLE_CHAR_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "=": "EQUALS",
    ",": "COMMA",
    ";": "SEMICOLON",
    ":": "COLON",
    "+": "PLUS",
}

KEYWORDS = frozenset({"strict", "graph", "digraph", "subgraph", "node", "edge"})

EDGE_OPS = ("->", "--")


def strip_comments(source: str) -> str:
    """Drop ``//`` line comments.

    Works line by line and is not quote-aware, so a ``//`` inside a quoted
    string also starts a comment.
    """
    lines: list[str] = []
    for line in source.split("\n"):
        if line.lstrip().startswith("//"):
            lines.append("")
            continue
        cut = line.find("//")
        lines.append(line if cut == -1 else line[:cut])
    return "\n".join(lines)


class Lexer:
    """Lazy token sequence over ``source``; every iteration starts over."""

    def __init__(self, source: str):
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        return _scan(self.source)


def lex(source: str) -> list[Token]:
    return list(Lexer(source))


def tokenize(source: str) -> list[Token]:
    return lex(strip_comments(source))


def _scan(source: str) -> Iterator[Token]:
    offset_of = _byte_offsets(source)
    index = 0
    length = len(source)

    while index < length:
        char = source[index]
        if char.isspace():
            index += 1
            continue

        if source.startswith("/*", index):
            end = source.find("*/", index + 2)
            if end == -1:
                raise LexError("unterminated block comment", offset=offset_of(index))
            index = end + 2
            continue

        if char == '"':
            value, end = _read_string(source, index, offset_of)
            yield Token("ID", value, offset_of(index), quoted=True)
            index = end
            continue

        if char == "<":
            value, end = _read_html(source, index, offset_of)
            yield Token("ID", value, offset_of(index), quoted=True)
            index = end
            continue

        if source.startswith(EDGE_OPS, index):
            yield Token("EDGEOP", source[index : index + 2], offset_of(index))
            index += 2
            continue

        token_kind = SINGLE_CHAR_TOKENS.get(char)
        if token_kind is not None:
            yield Token(token_kind, char, offset_of(index))
            index += 1
            continue

        if _starts_signed_numeral(source, index):
            value, end = _read_numeral(source, index)
            yield Token("ID", value, offset_of(index))
            index = end
            continue

        if _is_identifier_part(char):
            value, end = _read_identifier(source, index)
            kind = "KEYWORD" if value.lower() in KEYWORDS else "ID"
            yield Token(kind, value, offset_of(index))
            index = end
            continue

        raise LexError(f"unexpected character {char!r}", offset=offset_of(index))

    yield Token("EOF", "", offset_of(length))


def _byte_offsets(source: str) -> Callable[[int], int]:
    if source.isascii():
        return lambda index: index

    table = [0]
    total = 0
    for char in source:
        total += len(char.encode("utf-8", "surrogatepass"))
        table.append(total)
    return table.__getitem__


def _read_string(source: str, index: int, offset_of: Callable[[int], int]) -> tuple[str, int]:
    start = index
    index += 1
    result: list[str] = []

    while index < len(source):
        char = source[index]
        if char == '"':
            return "".join(result), index + 1
        if char == "\\" and index + 1 < len(source):
            escaped = source[index + 1]
            if escaped == '"':
                result.append('"')
            elif escaped != "\n":
                result.append(char)
                result.append(escaped)
            index += 2
            continue
        result.append(char)
        index += 1

    raise LexError("unterminated quoted string", offset=offset_of(start))


def _read_html(source: str, index: int, offset_of: Callable[[int], int]) -> tuple[str, int]:
    start = index
    depth = 0

    while index < len(source):
        char = source[index]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth == 0:
                return source[start + 1 : index], index + 1
        index += 1

    raise LexError("unterminated HTML string", offset=offset_of(start))


def _starts_signed_numeral(source: str, index: int) -> bool:
    if source[index] not in "-.":
        return False
    index += 1
    if source[index - 1] == "-" and index < len(source) and source[index] == ".":
        index += 1
    return index < len(source) and source[index].isdigit()


def _read_numeral(source: str, index: int) -> tuple[str, int]:
    start = index
    if source[index] == "-":
        index += 1
    seen_dot = False
    while index < len(source) and (source[index].isdigit() or source[index] == "."):
        if source[index] == ".":
            if seen_dot:
                break
            seen_dot = True
        index += 1
    return source[start:index], index


def _read_identifier(source: str, index: int) -> tuple[str, int]:
    start = index
    while index < len(source) and _is_identifier_part(source[index]):
        index += 1
    if (
        source[start:index].isdigit()
        and index + 1 < len(source)
        and source[index] == "."
        and source[index + 1].isdigit()
    ):
        index += 1
        while index < len(source) and source[index].isdigit():
            index += 1
    return source[start:index], index


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == "_"
