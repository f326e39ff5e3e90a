# SPDX-License-Identifier: MIT
"""XML output: findings as a ``<scanResults>`` document, one ``<item>`` per finding."""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

from cayce.formatters.base import Formatter, OutputFormat
from cayce.rules.base import Finding

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
ROOT_ELEMENT = "scanResults"
ITEM_ELEMENT = "item"
REPLACEMENT_CHARACTER = "\ufffd"

_QUOTE_ENTITIES = {"'": "&apos;", '"': "&quot;"}
# Anything outside the XML 1.0 Char production, including lone surrogates
_INVALID_XML_CHARS = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def escape_xml(value: str) -> str:
    """Escape the five XML special characters in text content.

    Characters XML 1.0 cannot carry at all, such as NUL or a lone surrogate,
    become U+FFFD so the document always parses.
    """
    return escape(_INVALID_XML_CHARS.sub(REPLACEMENT_CHARACTER, value), _QUOTE_ENTITIES)


def _render(tag: str, value: object, indent: str, lines: list[str]) -> None:
    if isinstance(value, dict):
        lines.append(f"{indent}<{tag}>")
        for key, child in value.items():
            _render(key, child, indent + "  ", lines)
        lines.append(f"{indent}</{tag}>")
    elif isinstance(value, list):
        lines.append(f"{indent}<{tag}>")
        for child in value:
            _render(ITEM_ELEMENT, child, indent + "  ", lines)
        lines.append(f"{indent}</{tag}>")
    else:
        lines.append(f"{indent}<{tag}>{escape_xml(str(value))}</{tag}>")


class XmlFormatter(Formatter):
    name = "XML"
    file_extension = "xml"
    output_formats = (OutputFormat.XML,)

    def encode(self, findings: list[Finding]) -> str:
        lines = [XML_DECLARATION]
        _render(ROOT_ELEMENT, [f.to_wire() for f in findings], "", lines)
        return "\n".join(lines) + "\n"
