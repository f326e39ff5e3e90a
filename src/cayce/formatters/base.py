# SPDX-License-Identifier: MIT
"""Formatter base: shared validate, encode, persist pipeline for every output format."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from enum import StrEnum
from pathlib import Path
from typing import ClassVar

from pydantic import ValidationError

from cayce.rules.base import Finding

log = logging.getLogger(__name__)

_REQUIRED_KEYS = frozenset({"RuleId", "Start", "End"})


class OutputFormat(StrEnum):
    SARIF = "sarif"
    SARIFV2 = "sarifv2"
    CSV = "csv"
    JSON = "json"
    XML = "xml"

    @classmethod
    def parse(cls, value: str) -> OutputFormat:
        """Resolve a case-insensitive format name."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            msg = f"Unknown output format: {value!r}. Valid formats: {[f.value for f in cls]}"
            raise ValueError(msg) from None


class Formatter(ABC):
    """Renders findings to one encoding and optionally writes them to a file.

    Subclasses set the class attributes and implement ``encode`` only.
    """

    name: ClassVar[str]
    file_extension: ClassVar[str]
    output_formats: ClassVar[tuple[OutputFormat, ...]]

    def get_name(self) -> str:
        return self.name

    def get_file_extension(self) -> str:
        return self.file_extension

    def get_supported_output_formats(self) -> list[OutputFormat]:
        return list(self.output_formats)

    def supports_output_format(self, output_format: OutputFormat | str) -> bool:
        return OutputFormat.parse(output_format) in self.output_formats

    def format(
        self,
        findings: Iterable[Finding | Mapping[str, object]],
        output_format: OutputFormat | str,
        output_filename: str | Path | None = None,
    ) -> str:
        """Encode findings and, if ``output_filename`` is given, write them to disk.

        ``output_format`` may be a tag or its name in any case (``"JSON"``).
        A failed write is logged; the encoded content is returned either way.

        Raises:
            TypeError: If an element is not a finding.
            ValueError: If ``output_format`` is unknown or names another formatter's tag.
        """
        if not self.supports_output_format(output_format):
            msg = f"{self.get_name()} formatter does not support output format {output_format!r}"
            raise ValueError(msg)
        validated = self.validate_findings(findings)
        content = self.encode(validated)
        if output_filename:
            self.write_to_file(content, output_filename)
        return content

    @abstractmethod
    def encode(self, findings: list[Finding]) -> str:
        raise NotImplementedError

    def validate_findings(self, findings: Iterable[Finding | Mapping[str, object]]) -> list[Finding]:
        """Accept Finding objects or PascalCase mappings of the same shape."""
        validated: list[Finding] = []
        for position, item in enumerate(findings):
            if isinstance(item, Finding):
                validated.append(item)
                continue
            if isinstance(item, Mapping) and _REQUIRED_KEYS <= item.keys():
                try:
                    validated.append(Finding.model_validate(item))
                except ValidationError as exc:
                    msg = f"{self.get_name()} formatter received a malformed finding at index {position}"
                    raise TypeError(msg) from exc
                continue
            msg = (
                f"{self.get_name()} formatter expects findings with RuleId, Start and End; "
                f"got {type(item).__name__} at index {position}"
            )
            raise TypeError(msg)
        return validated

    def output_path(self, output_filename: str | Path) -> Path:
        """Return the target path with this formatter's extension appended if missing."""
        suffix = f".{self.get_file_extension()}"
        name = str(output_filename)
        if name.lower().endswith(suffix.lower()):
            return Path(name)
        return Path(name + suffix)

    def write_to_file(self, content: str, output_filename: str | Path) -> Path | None:
        """Write content as UTF-8, creating parent directories. Returns None on failure.

        Content is encoded before the file is opened, so text that is not valid
        UTF-8 (a lone surrogate) leaves no empty file behind.
        """
        path = self.output_path(output_filename)
        try:
            data = content.encode("utf-8")
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, UnicodeError):
            log.exception("Failed to write %s output to %s", self.get_name(), path)
            return None
        log.debug("Wrote %s output to %s", self.get_name(), path)
        return path
