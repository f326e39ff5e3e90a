# SPDX-License-Identifier: MIT
"""SARIF 2.1.0 output models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
SARIF_VERSION = "2.1.0"
TOOL_NAME = "Cayce"
TOOL_INFORMATION_URI = "https://github.com/cayce/cayce-core"


class SarifMessage(BaseModel):
    text: str


class SarifArtifactLocation(BaseModel):
    uri: str


class SarifRegion(BaseModel):
    startLine: int
    startColumn: int
    endLine: int
    endColumn: int


class SarifPhysicalLocation(BaseModel):
    artifactLocation: SarifArtifactLocation
    region: SarifRegion


class SarifLocation(BaseModel):
    physicalLocation: SarifPhysicalLocation


class SarifProperties(BaseModel):
    category: str = "Default"
    suggestion: str = ""
    nodeText: str = ""


class SarifResult(BaseModel):
    ruleId: str
    message: SarifMessage
    locations: list[SarifLocation] = Field(default_factory=list)
    level: str = "note"
    properties: SarifProperties = Field(default_factory=SarifProperties)


class SarifDriver(BaseModel):
    name: str = TOOL_NAME
    informationUri: str = TOOL_INFORMATION_URI
    rules: list[dict[str, object]] = Field(default_factory=list)


class SarifTool(BaseModel):
    driver: SarifDriver = Field(default_factory=SarifDriver)


class SarifRun(BaseModel):
    tool: SarifTool = Field(default_factory=SarifTool)
    results: list[SarifResult] = Field(default_factory=list)


class SarifReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_uri: str = Field(default=SARIF_SCHEMA, alias="$schema")
    version: str = SARIF_VERSION
    runs: list[SarifRun] = Field(default_factory=list)
