# SPDX-License-Identifier: MIT
"""ScanRule: runs a descriptor's tree query over source text and builds findings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from cayce.rules.base import (
    TARGET_CAPTURE_PREFIX,
    Finding,
    MissingLanguageBindingError,
    RuleDescriptor,
)
from cayce.rules.query import SourceText, compile_query, ordered_captures, parse_source

if TYPE_CHECKING:
    from tree_sitter import Language, Node

log = logging.getLogger(__name__)


class ScanRule:
    """Base class for query-driven rules.

    Subclasses declare a ``descriptor`` class attribute. The grammar is bound
    onto each instance by the owning plugin (see ``CaycePlugin.get_rules``).

    An instance remembers the last source it validated, so it must not be
    shared between concurrent ``validate`` calls.
    """

    descriptor: ClassVar[RuleDescriptor]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if not isinstance(getattr(cls, "descriptor", None), RuleDescriptor):
            msg = f"{cls.__name__} must define a RuleDescriptor as its 'descriptor' attribute"
            raise TypeError(msg)

    def __init__(self) -> None:
        self.language: Language | None = None
        self._raw_source: str | None = None

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def severity(self) -> int:
        return self.descriptor.severity

    def validate(self, source: str, *, context: str | None = None) -> list[Finding]:
        """Run the tree query over ``source`` and return one finding per target capture.

        Args:
            source: Raw source text to scan.
            context: Location hint for the findings (usually a file path).
                Defaults to the descriptor's ``context``.

        Raises:
            MissingLanguageBindingError: No grammar has been bound to this rule.
            QueryCompilationError: The descriptor's tree query is malformed.
        """
        self._raw_source = source
        if self.language is None:
            raise MissingLanguageBindingError(self.descriptor.id)

        text = SourceText(source)
        tree = parse_source(self.language, text)
        query = compile_query(self.language, self.descriptor.tree_query, self.descriptor.id)

        findings = [
            self.build_scan_result(node, text, context=context)
            for name, node in ordered_captures(query, tree.root_node)
            if name.startswith(TARGET_CAPTURE_PREFIX)
        ]
        log.debug("Rule %s produced %d finding(s)", self.descriptor.id, len(findings))
        return findings

    def build_scan_result(self, node: Node, source: SourceText, *, context: str | None = None) -> Finding:
        """Map a captured syntax node to a Finding (pure)."""
        d = self.descriptor
        start = source.position(node.start_byte, node.start_point.row)
        end = source.position(node.end_byte, node.end_point.row)
        return Finding(
            rule_id=d.id,
            start=start,
            end=end,
            message=d.message,
            suggestion=d.suggestion,
            severity=int(d.severity),
            category=d.category,
            context=d.context if context is None else context,
            node_text=source.text[start.index : end.index],
        )

    def get_source(self) -> str | None:
        """Return the source passed to the most recent ``validate`` call, if any."""
        return self._raw_source
