# SPDX-License-Identifier: MIT
"""JSON output: the finding list as indented JSON."""

from __future__ import annotations

import json

from cayce.formatters.base import Formatter, OutputFormat
from cayce.rules.base import Finding


class JsonFormatter(Formatter):
    name = "JSON"
    file_extension = "json"
    output_formats = (OutputFormat.JSON,)

    def encode(self, findings: list[Finding]) -> str:
        return json.dumps([f.to_wire() for f in findings], indent=2, ensure_ascii=False)
