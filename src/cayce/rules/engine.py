# SPDX-License-Identifier: MIT
"""Rule engine: runs a set of bound rules against source text or files."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from cayce.rules.config import PROFILES, ProfileConfig

if TYPE_CHECKING:
    from cayce.rules.base import Finding
    from cayce.rules.scan_rule import ScanRule

log = logging.getLogger(__name__)


class RuleEngine:
    """Runs rules in order and filters their findings through a profile."""

    def __init__(
        self,
        rules: Iterable[ScanRule],
        profile: ProfileConfig | None = None,
        include: Iterable[str] | None = None,
    ) -> None:
        wanted = set(include) if include is not None else None
        self._rules: list[ScanRule] = [r for r in rules if wanted is None or r.id in wanted]
        self.profile = profile or PROFILES["all"]

    @property
    def rules(self) -> list[ScanRule]:
        return list(self._rules)

    def run(self, source: str, context: str | None = None) -> list[Finding]:
        """Run all rules and collect findings at or above the profile's report threshold."""
        findings: list[Finding] = []
        for rule in self._rules:
            findings.extend(
                f for f in rule.validate(source, context=context) if f.severity >= self.profile.report_on
            )
        return findings

    def run_file(self, path: str | Path) -> list[Finding]:
        """Read a UTF-8 file and run all rules, attributing findings to its path."""
        path = Path(path)
        log.debug("Scanning %s with %d rule(s)", path, len(self._rules))
        return self.run(path.read_text(encoding="utf-8"), context=str(path))

    def check_gate(self, findings: list[Finding]) -> bool:
        """Return True if any finding meets or exceeds the profile's fail_on threshold."""
        return any(f.severity >= self.profile.fail_on for f in findings)
