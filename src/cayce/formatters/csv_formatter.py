# SPDX-License-Identifier: MIT
"""CSV output: one quoted header row plus one row per finding."""

from __future__ import annotations

import csv
import io

from cayce.formatters.base import Formatter, OutputFormat
from cayce.rules.base import Finding

CSV_HEADERS = (
    "RuleId",
    "StartRow",
    "StartColumn",
    "StartIndex",
    "EndRow",
    "EndColumn",
    "EndIndex",
    "Message",
    "Suggestion",
    "Severity",
    "Category",
    "Context",
    "NodeText",
)


def _row(f: Finding) -> list[str | int | None]:
    # QUOTE_STRINGS leaves None as a bare empty field
    return [
        f.rule_id,
        f.start.row,
        f.start.column,
        f.start.index,
        f.end.row,
        f.end.column,
        f.end.index,
        f.message,
        f.suggestion or None,
        f.severity,
        f.category or None,
        f.context,
        f.node_text or None,
    ]


class CsvFormatter(Formatter):
    name = "CSV"
    file_extension = "csv"
    output_formats = (OutputFormat.CSV,)

    def encode(self, findings: list[Finding]) -> str:
        """Render rows joined by newlines; no findings means no output at all."""
        if not findings:
            return ""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_STRINGS, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        writer.writerows(_row(f) for f in findings)
        # Drop the terminator after the last row
        return buffer.getvalue()[:-1]
