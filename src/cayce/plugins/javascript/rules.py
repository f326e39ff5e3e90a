# SPDX-License-Identifier: MIT
"""JavaScript rules: console calls, eval, and debugger statements."""

from __future__ import annotations

from cayce.rules.base import RuleDescriptor, RuleSeverity
from cayce.rules.scan_rule import ScanRule


class NoConsoleRule(ScanRule):
    """Flag calls on the global ``console`` object."""

    descriptor = RuleDescriptor(
        id="NO-CONSOLE",
        name="No console calls",
        category="Best Practices",
        message="Unexpected console call",
        suggestion="Use the application's logger instead of console.*",
        tree_query="""
        (call_expression
          function: (member_expression
            object: (identifier) @console.object
            property: (property_identifier) @console.method)
          (#eq? @console.object "console")) @target.call
        """,
        severity=4,
    )


class NoEvalRule(ScanRule):
    """Flag direct calls to ``eval``."""

    descriptor = RuleDescriptor(
        id="NO-EVAL",
        name="No eval",
        category="Security",
        message="eval() executes arbitrary code",
        suggestion="Parse data with JSON.parse or restructure to avoid dynamic evaluation",
        tree_query="""
        (call_expression
          function: (identifier) @callee
          (#eq? @callee "eval")) @target.eval
        """,
        severity=8,
    )


class NoDebuggerRule(ScanRule):
    descriptor = RuleDescriptor(
        id="NO-DEBUGGER",
        name="No debugger statements",
        category="Best Practices",
        message="debugger statement left in source",
        tree_query="(debugger_statement) @target",
        severity=RuleSeverity.WARNING,
    )
