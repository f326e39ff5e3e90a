# SPDX-License-Identifier: MIT
"""Rule severity, descriptor, finding models, and rule engine errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

TARGET_CAPTURE_PREFIX = "target"


class RuleSeverity(IntEnum):
    """Named severity levels, ordered for threshold comparison.

    Severities on descriptors and findings are plain integers; these members
    are a convenience subset and plugins may use larger values.
    """

    NOT_APPLICABLE = 0
    INFORMATION = 1
    WARNING = 2
    VIOLATION = 3


class QueryCompilationError(ValueError):
    """Raised when a rule's tree query cannot be compiled for its language."""

    def __init__(self, rule_id: str, query: str, reason: str) -> None:
        self.rule_id = rule_id
        self.query = query
        self.reason = reason
        super().__init__(f"Rule {rule_id!r} has an invalid tree query: {reason}")


class MissingLanguageBindingError(RuntimeError):
    """Raised when a rule is validated before a plugin bound its language."""

    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(
            f"Rule {rule_id!r} has no language binding. "
            "Obtain rules through CaycePlugin.get_rules() before validating."
        )


@dataclass(frozen=True)
class RuleDescriptor:
    """Configuration of one rule type, validated once at construction."""

    id: str
    message: str
    tree_query: str
    severity: int
    name: str = ""
    category: str | None = None
    suggestion: str | None = None
    context: str = ""

    def __post_init__(self) -> None:
        for field_name in ("id", "message", "tree_query"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                msg = f"RuleDescriptor.{field_name} is required and must be a non-empty string"
                raise ValueError(msg)
        if isinstance(self.severity, bool) or not isinstance(self.severity, int):
            msg = f"RuleDescriptor.severity must be an integer, got {self.severity!r}"
            raise ValueError(msg)
        if self.severity < 0:
            msg = f"RuleDescriptor.severity must be >= 0, got {self.severity}"
            raise ValueError(msg)
        if f"@{TARGET_CAPTURE_PREFIX}" not in self.tree_query:
            msg = (
                f"Rule {self.id!r}: tree_query must name at least one capture "
                f"starting with @{TARGET_CAPTURE_PREFIX}"
            )
            raise ValueError(msg)
        if not self.name:
            object.__setattr__(self, "name", self.id)


class Position(BaseModel):
    """Zero-based row, column, and character offset into the source text."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    row: int = Field(alias="Row", ge=0)
    column: int = Field(alias="Column", ge=0)
    index: int = Field(alias="Index", ge=0)


class Finding(BaseModel):
    """A single reported match of a rule against source text.

    Field aliases are the wire names used by every output format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rule_id: str = Field(alias="RuleId")
    start: Position = Field(alias="Start")
    end: Position = Field(alias="End")
    message: str = Field(alias="Message")
    suggestion: str | None = Field(default=None, alias="Suggestion")
    severity: int = Field(alias="Severity", ge=0)
    category: str | None = Field(default=None, alias="Category")
    context: str = Field(alias="Context")
    node_text: str | None = Field(default=None, alias="NodeText")

    def to_wire(self) -> dict[str, object]:
        """Return the PascalCase mapping used by the serializers, without absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
