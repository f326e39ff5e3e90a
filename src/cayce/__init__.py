"""Cayce: pluggable tree-sitter rule engine with multi-format reporting."""

from cayce.formatters import (
    CsvFormatter,
    Formatter,
    JsonFormatter,
    OutputFormat,
    SarifFormatter,
    XmlFormatter,
    get_formatter,
)
from cayce.plugin import CaycePlugin, PluginLoadError, load_plugin
from cayce.rules import (
    Finding,
    MissingLanguageBindingError,
    Position,
    QueryCompilationError,
    RuleDescriptor,
    RuleEngine,
    RuleSeverity,
    ScanRule,
)

__all__ = [
    "CaycePlugin",
    "CsvFormatter",
    "Finding",
    "Formatter",
    "JsonFormatter",
    "MissingLanguageBindingError",
    "OutputFormat",
    "PluginLoadError",
    "Position",
    "QueryCompilationError",
    "RuleDescriptor",
    "RuleEngine",
    "RuleSeverity",
    "SarifFormatter",
    "ScanRule",
    "XmlFormatter",
    "get_formatter",
    "load_plugin",
]
