# SPDX-License-Identifier: MIT
"""Rule engine: tree queries select nodes, target captures become findings."""

from cayce.rules.base import (
    Finding,
    MissingLanguageBindingError,
    Position,
    QueryCompilationError,
    RuleDescriptor,
    RuleSeverity,
)
from cayce.rules.config import ProfileConfig, load_profile
from cayce.rules.engine import RuleEngine
from cayce.rules.scan_rule import ScanRule

__all__ = [
    "Finding",
    "MissingLanguageBindingError",
    "Position",
    "ProfileConfig",
    "QueryCompilationError",
    "RuleDescriptor",
    "RuleEngine",
    "RuleSeverity",
    "ScanRule",
    "load_profile",
]


def run_rules(rules: list[ScanRule], source: str, profile: ProfileConfig, context: str | None = None) -> list[Finding]:
    """Convenience: run bound rules over one source text, return filtered findings."""
    return RuleEngine(rules, profile=profile).run(source, context=context)


def check_gate(findings: list[Finding], profile: ProfileConfig) -> bool:
    """Convenience: check if any findings exceed the profile gate."""
    return RuleEngine([], profile=profile).check_gate(findings)
