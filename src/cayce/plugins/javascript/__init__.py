# SPDX-License-Identifier: MIT
"""JavaScript plugin backed by the tree-sitter-javascript grammar."""

from __future__ import annotations

import tree_sitter_javascript
from tree_sitter import Language

from cayce.plugin import CaycePlugin
from cayce.plugins.javascript.rules import NoConsoleRule, NoDebuggerRule, NoEvalRule
from cayce.rules.scan_rule import ScanRule

JAVASCRIPT = Language(tree_sitter_javascript.language())


class JavaScriptPlugin(CaycePlugin):
    def get_language(self) -> Language:
        return JAVASCRIPT

    def register_rules(self) -> list[ScanRule]:
        return [NoConsoleRule(), NoEvalRule(), NoDebuggerRule()]


__all__ = ["JAVASCRIPT", "JavaScriptPlugin", "NoConsoleRule", "NoDebuggerRule", "NoEvalRule"]
