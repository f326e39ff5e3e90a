# SPDX-License-Identifier: MIT
"""Finding serializers: JSON, CSV, XML, and SARIF."""

from cayce.formatters.base import Formatter, OutputFormat
from cayce.formatters.csv_formatter import CsvFormatter
from cayce.formatters.json_formatter import JsonFormatter
from cayce.formatters.sarif_formatter import SarifFormatter
from cayce.formatters.xml_formatter import XmlFormatter

FORMATTERS: tuple[type[Formatter], ...] = (
    JsonFormatter,
    CsvFormatter,
    XmlFormatter,
    SarifFormatter,
)


def get_formatter(output_format: OutputFormat | str) -> Formatter:
    """Return a formatter instance that produces ``output_format``."""
    for cls in FORMATTERS:
        formatter = cls()
        if formatter.supports_output_format(output_format):
            return formatter
    msg = f"No formatter supports output format {output_format!r}"
    raise ValueError(msg)


__all__ = [
    "FORMATTERS",
    "CsvFormatter",
    "Formatter",
    "JsonFormatter",
    "OutputFormat",
    "SarifFormatter",
    "XmlFormatter",
    "get_formatter",
]
