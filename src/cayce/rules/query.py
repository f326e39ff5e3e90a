# SPDX-License-Identifier: MIT
"""tree-sitter boundary: parsing, query compilation, and capture ordering."""

from __future__ import annotations

from bisect import bisect_left
from itertools import accumulate

from tree_sitter import Language, Node, Parser, Query, QueryCursor, QueryError, Tree

from cayce.rules.base import QueryCompilationError, Position


class SourceText:
    """Source string plus its UTF-8 encoding, for mapping node byte offsets back to characters.

    tree-sitter reports offsets and columns in bytes. Findings report them in
    characters so that ``text[start.index:end.index]`` is the node text.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.encoded = text.encode("utf-8")
        # None means pure ASCII: byte and character offsets coincide
        self._byte_offsets: list[int] | None = None
        if len(self.encoded) != len(text):
            self._byte_offsets = list(accumulate((len(ch.encode("utf-8")) for ch in text), initial=0))

    def char_index(self, byte_offset: int) -> int:
        """Return the character offset corresponding to a byte offset."""
        if self._byte_offsets is None:
            return byte_offset
        return bisect_left(self._byte_offsets, byte_offset)

    def position(self, byte_offset: int, row: int) -> Position:
        """Build a Position for a node boundary; the column is counted in characters."""
        index = self.char_index(byte_offset)
        line_start = self.text.rfind("\n", 0, index) + 1
        return Position(row=row, column=index - line_start, index=index)


def parse_source(language: Language, source: SourceText) -> Tree:
    """Parse source text with a fresh parser for the given grammar."""
    parser = Parser(language)
    return parser.parse(source.encoded)


def compile_query(language: Language, query_text: str, rule_id: str) -> Query:
    """Compile a tree query, translating tree-sitter errors to QueryCompilationError."""
    try:
        return Query(language, query_text)
    except QueryError as exc:
        raise QueryCompilationError(rule_id, query_text, str(exc)) from exc


def ordered_captures(query: Query, node: Node) -> list[tuple[str, Node]]:
    """Evaluate a query and return (capture name, node) pairs in document order.

    The Python binding groups captures by name; a stable sort on the start
    offset restores document order while keeping the query's capture order
    for nodes that start at the same offset.
    """
    grouped = QueryCursor(query).captures(node)
    pairs = [(name, captured) for name, nodes in grouped.items() for captured in nodes]
    pairs.sort(key=lambda pair: pair[1].start_byte)
    return pairs
