# SPDX-License-Identifier: MIT
"""SARIF 2.1.0 output: one run, one result per finding."""

from __future__ import annotations

import json

from cayce.formatters.base import Formatter, OutputFormat
from cayce.formatters.sarif import (
    SarifArtifactLocation,
    SarifLocation,
    SarifMessage,
    SarifPhysicalLocation,
    SarifProperties,
    SarifRegion,
    SarifReport,
    SarifResult,
    SarifRun,
)
from cayce.rules.base import Finding

ERROR_THRESHOLD = 8
WARNING_THRESHOLD = 4


def sarif_level(severity: int) -> str:
    """Map an open-ended integer severity to a SARIF result level."""
    if severity >= ERROR_THRESHOLD:
        return "error"
    if severity >= WARNING_THRESHOLD:
        return "warning"
    return "note"


def _result(f: Finding) -> SarifResult:
    # Positions are copied through unchanged, zero-based like the other formats
    region = SarifRegion(
        startLine=f.start.row,
        startColumn=f.start.column,
        endLine=f.end.row,
        endColumn=f.end.column,
    )
    return SarifResult(
        ruleId=f.rule_id,
        message=SarifMessage(text=f.message),
        locations=[
            SarifLocation(
                physicalLocation=SarifPhysicalLocation(
                    artifactLocation=SarifArtifactLocation(uri=f.context),
                    region=region,
                )
            )
        ],
        level=sarif_level(f.severity),
        properties=SarifProperties(
            category=f.category or "Default",
            suggestion=f.suggestion or "",
            nodeText=f.node_text or "",
        ),
    )


class SarifFormatter(Formatter):
    name = "SARIF"
    file_extension = "sarif"
    output_formats = (OutputFormat.SARIF, OutputFormat.SARIFV2)

    def build_report(self, findings: list[Finding]) -> SarifReport:
        return SarifReport(runs=[SarifRun(results=[_result(f) for f in findings])])

    def encode(self, findings: list[Finding]) -> str:
        report = self.build_report(findings)
        return json.dumps(report.model_dump(by_alias=True), indent=2, ensure_ascii=False)
