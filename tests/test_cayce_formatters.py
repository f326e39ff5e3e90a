# SPDX-License-Identifier: MIT
"""Tests for cayce.formatters: JSON, CSV, XML, SARIF encodings and file output."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import defusedxml.ElementTree as DefusedET
import pytest

from cayce.formatters import (
    CsvFormatter,
    JsonFormatter,
    OutputFormat,
    SarifFormatter,
    XmlFormatter,
    get_formatter,
)
from cayce.formatters.csv_formatter import CSV_HEADERS
from cayce.formatters.sarif import SARIF_SCHEMA
from cayce.formatters.sarif_formatter import sarif_level
from cayce.formatters.xml_formatter import XML_DECLARATION, escape_xml
from cayce.rules.base import Finding, Position

_FINDINGS = [
    Finding(
        rule_id="RULE-001",
        start=Position(row=10, column=5, index=100),
        end=Position(row=10, column=15, index=110),
        message="Test message 1",
        suggestion="Suggested fix 1",
        severity=8,
        category="Security",
        context="src/test.js",
        node_text='const test = "test";',
    ),
    Finding(
        rule_id="RULE-002",
        start=Position(row=20, column=8, index=200),
        end=Position(row=20, column=18, index=210),
        message="Test message 2",
        severity=4,
        context="src/test2.js",
    ),
]


def _with_message(message: str) -> Finding:
    return _FINDINGS[1].model_copy(update={"message": message})


class TestOutputFormat:
    def test_parse_case_insensitive(self) -> None:
        assert OutputFormat.parse("SARIFv2") is OutputFormat.SARIFV2
        assert OutputFormat.parse(" json ") is OutputFormat.JSON

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            OutputFormat.parse("yaml")

    @pytest.mark.parametrize(
        ("fmt", "cls"),
        [
            (OutputFormat.JSON, JsonFormatter),
            (OutputFormat.CSV, CsvFormatter),
            (OutputFormat.XML, XmlFormatter),
            (OutputFormat.SARIF, SarifFormatter),
            (OutputFormat.SARIFV2, SarifFormatter),
        ],
    )
    def test_get_formatter(self, fmt: OutputFormat, cls: type) -> None:
        assert isinstance(get_formatter(fmt), cls)


class TestFormatterContract:
    @pytest.mark.parametrize(
        ("formatter", "name", "ext"),
        [
            (JsonFormatter(), "JSON", "json"),
            (CsvFormatter(), "CSV", "csv"),
            (XmlFormatter(), "XML", "xml"),
            (SarifFormatter(), "SARIF", "sarif"),
        ],
    )
    def test_identity(self, formatter, name: str, ext: str) -> None:  # type: ignore[no-untyped-def]
        assert formatter.get_name() == name
        assert formatter.get_file_extension() == ext

    def test_supported_formats(self) -> None:
        assert JsonFormatter().get_supported_output_formats() == [OutputFormat.JSON]
        assert SarifFormatter().get_supported_output_formats() == [OutputFormat.SARIF, OutputFormat.SARIFV2]
        assert not CsvFormatter().supports_output_format(OutputFormat.JSON)

    def test_unsupported_format_rejected(self) -> None:
        with pytest.raises(ValueError, match="does not support"):
            JsonFormatter().format(_FINDINGS, OutputFormat.CSV)
        with pytest.raises(ValueError, match="does not support"):
            JsonFormatter().format(_FINDINGS, "csv")

    def test_format_names_any_case(self) -> None:
        expected = JsonFormatter().format(_FINDINGS, OutputFormat.JSON)
        assert JsonFormatter().format(_FINDINGS, "JSON") == expected
        assert JsonFormatter().format(_FINDINGS, " json ") == expected
        assert SarifFormatter().supports_output_format("SARIFv2")
        assert isinstance(get_formatter("CSV"), CsvFormatter)

    def test_unknown_format_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown output format"):
            JsonFormatter().format(_FINDINGS, "yaml")

    @pytest.mark.parametrize("formatter", [JsonFormatter(), CsvFormatter(), XmlFormatter(), SarifFormatter()])
    def test_rejects_non_findings(self, formatter) -> None:  # type: ignore[no-untyped-def]
        fmt = formatter.get_supported_output_formats()[0]
        with pytest.raises(TypeError, match=formatter.get_name()):
            formatter.format([{"rule": "x", "line": 1}], fmt)
        with pytest.raises(TypeError, match=formatter.get_name()):
            formatter.format(["not a finding"], fmt)

    def test_rejects_malformed_mapping(self) -> None:
        bad = {"RuleId": "R", "Start": "nowhere", "End": {}}
        with pytest.raises(TypeError, match="malformed"):
            JsonFormatter().format([bad], OutputFormat.JSON)

    def test_accepts_wire_mappings(self) -> None:
        wire = [f.to_wire() for f in _FINDINGS]
        assert JsonFormatter().format(wire, OutputFormat.JSON) == JsonFormatter().format(_FINDINGS, OutputFormat.JSON)


class TestFileOutput:
    def test_appends_extension(self, tmp_path: Path) -> None:
        content = JsonFormatter().format(_FINDINGS, OutputFormat.JSON, tmp_path / "report")
        assert (tmp_path / "report.json").read_text(encoding="utf-8") == content

    def test_keeps_extension_case_insensitive(self, tmp_path: Path) -> None:
        CsvFormatter().format(_FINDINGS, OutputFormat.CSV, str(tmp_path / "report.CSV"))
        assert (tmp_path / "report.CSV").exists()
        assert not (tmp_path / "report.CSV.csv").exists()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "scan"
        SarifFormatter().format(_FINDINGS, OutputFormat.SARIFV2, target)
        assert (tmp_path / "a" / "b" / "scan.sarif").exists()

    def test_writes_utf8_without_bom(self, tmp_path: Path) -> None:
        XmlFormatter().format([_with_message("naïve ☃")], OutputFormat.XML, tmp_path / "out")
        raw = (tmp_path / "out.xml").read_bytes()
        assert not raw.startswith(b"\xef\xbb\xbf")
        assert "naïve ☃" in raw.decode("utf-8")

    def test_write_failure_returns_content(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with caplog.at_level(logging.ERROR, logger="cayce.formatters.base"):
            content = JsonFormatter().format(_FINDINGS, OutputFormat.JSON, blocker / "report")
        assert json.loads(content)[0]["RuleId"] == "RULE-001"
        assert "Failed to write JSON output" in caplog.text

    def test_unencodable_content_returns_content(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        finding = _with_message("bad \ud800 surrogate")
        with caplog.at_level(logging.ERROR, logger="cayce.formatters.base"):
            content = JsonFormatter().format([finding], OutputFormat.JSON, tmp_path / "r")
        assert "\ud800" in content
        assert "Failed to write JSON output" in caplog.text
        assert not (tmp_path / "r.json").exists()

    def test_no_filename_no_write(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        JsonFormatter().format(_FINDINGS, OutputFormat.JSON)
        assert list(tmp_path.iterdir()) == []


class TestJsonFormatter:
    def test_round_trip(self) -> None:
        parsed = json.loads(JsonFormatter().format(_FINDINGS, OutputFormat.JSON))
        assert parsed == [f.to_wire() for f in _FINDINGS]
        assert [Finding.model_validate(p) for p in parsed] == _FINDINGS

    def test_omits_absent_optionals(self) -> None:
        parsed = json.loads(JsonFormatter().format(_FINDINGS, OutputFormat.JSON))
        assert "Suggestion" not in parsed[1]
        assert "NodeText" not in parsed[1]

    def test_two_space_indent(self) -> None:
        out = JsonFormatter().format(_FINDINGS, OutputFormat.JSON)
        assert out.splitlines()[1] == "  {"
        assert out.splitlines()[2].startswith('    "RuleId"')

    def test_empty(self) -> None:
        assert JsonFormatter().format([], OutputFormat.JSON) == "[]"


class TestCsvFormatter:
    def test_exact_output(self) -> None:
        out = CsvFormatter().format(_FINDINGS, OutputFormat.CSV)
        assert out.split("\n") == [
            ",".join(f'"{h}"' for h in CSV_HEADERS),
            '"RULE-001",10,5,100,10,15,110,"Test message 1","Suggested fix 1",8,"Security","src/test.js","const test = ""test"";"',
            '"RULE-002",20,8,200,20,18,210,"Test message 2",,4,,"src/test2.js",',
        ]

    def test_quote_escaping(self) -> None:
        out = CsvFormatter().format([_with_message('say "quotes"')], OutputFormat.CSV)
        assert '"say ""quotes"""' in out

    def test_empty_optional_strings_render_empty(self) -> None:
        f = _FINDINGS[1].model_copy(update={"suggestion": "", "category": ""})
        row = CsvFormatter().format([f], OutputFormat.CSV).split("\n")[1]
        assert ',"Test message 2",,4,,' in row

    def test_no_trailing_newline(self) -> None:
        assert not CsvFormatter().format(_FINDINGS, OutputFormat.CSV).endswith("\n")

    def test_empty(self) -> None:
        assert CsvFormatter().format([], OutputFormat.CSV) == ""


class TestXmlFormatter:
    def test_structure(self) -> None:
        out = XmlFormatter().format(_FINDINGS, OutputFormat.XML)
        assert out.startswith(XML_DECLARATION + "\n<scanResults>\n  <item>\n    <RuleId>RULE-001</RuleId>")
        root = DefusedET.fromstring(out.encode("utf-8"))
        assert root.tag == "scanResults"
        items = root.findall("item")
        assert len(items) == 2
        assert items[0].findtext("Start/Row") == "10"
        assert items[0].findtext("End/Index") == "110"
        assert items[0].findtext("NodeText") == 'const test = "test";'
        assert items[1].find("Suggestion") is None

    def test_escaping(self) -> None:
        out = XmlFormatter().format([_with_message('<special> & "chars"')], OutputFormat.XML)
        assert "<Message>&lt;special&gt; &amp; &quot;chars&quot;</Message>" in out

    def test_escape_apostrophe(self) -> None:
        assert escape_xml("it's") == "it&apos;s"

    def test_control_characters_replaced(self) -> None:
        f = _FINDINGS[0].model_copy(update={"node_text": "a\x00b\x0cc\td"})
        root = DefusedET.fromstring(XmlFormatter().format([f], OutputFormat.XML).encode("utf-8"))
        assert root.findtext("item/NodeText") == "a\ufffdb\ufffdc\td"

    def test_lone_surrogate_replaced(self) -> None:
        assert escape_xml("x\ud800y") == "x\ufffdy"
        assert escape_xml("snow ☃ \U0001f600") == "snow ☃ \U0001f600"

    def test_empty(self) -> None:
        out = XmlFormatter().format([], OutputFormat.XML)
        assert out == XML_DECLARATION + "\n<scanResults>\n</scanResults>\n"
        assert len(DefusedET.fromstring(out.encode("utf-8"))) == 0


class TestSarifFormatter:
    def _doc(self, findings: list[Finding], fmt: OutputFormat = OutputFormat.SARIF) -> dict:
        return json.loads(SarifFormatter().format(findings, fmt))

    def test_document_shape(self) -> None:
        doc = self._doc(_FINDINGS)
        assert doc["$schema"] == SARIF_SCHEMA
        assert doc["version"] == "2.1.0"
        assert len(doc["runs"]) == 1
        driver = doc["runs"][0]["tool"]["driver"]
        assert driver["name"] == "Cayce"
        assert driver["informationUri"].startswith("https://")
        assert len(doc["runs"][0]["results"]) == 2

    def test_result(self) -> None:
        result = self._doc(_FINDINGS)["runs"][0]["results"][0]
        assert result["ruleId"] == "RULE-001"
        assert result["message"] == {"text": "Test message 1"}
        location = result["locations"][0]["physicalLocation"]
        assert location["artifactLocation"] == {"uri": "src/test.js"}
        assert location["region"] == {"startLine": 10, "startColumn": 5, "endLine": 10, "endColumn": 15}
        assert result["level"] == "error"
        assert result["properties"] == {
            "category": "Security",
            "suggestion": "Suggested fix 1",
            "nodeText": 'const test = "test";',
        }

    def test_region_copies_positions(self) -> None:
        f = _FINDINGS[1].model_copy(
            update={"start": Position(row=0, column=0, index=0), "end": Position(row=0, column=14, index=14)}
        )
        region = self._doc([f])["runs"][0]["results"][0]["locations"][0]["physicalLocation"]["region"]
        assert region == {"startLine": 0, "startColumn": 0, "endLine": 0, "endColumn": 14}

    def test_property_defaults(self) -> None:
        result = self._doc(_FINDINGS)["runs"][0]["results"][1]
        assert result["properties"] == {"category": "Default", "suggestion": "", "nodeText": ""}

    def test_aliases_identical(self) -> None:
        assert self._doc(_FINDINGS, OutputFormat.SARIF) == self._doc(_FINDINGS, OutputFormat.SARIFV2)

    @pytest.mark.parametrize(
        ("severity", "level"),
        [(0, "note"), (1, "note"), (2, "note"), (3, "note"), (4, "warning"), (7, "warning"), (8, "error"), (12, "error")],
    )
    def test_levels(self, severity: int, level: str) -> None:
        assert sarif_level(severity) == level
        f = _FINDINGS[1].model_copy(update={"severity": severity})
        assert self._doc([f])["runs"][0]["results"][0]["level"] == level

    def test_empty(self) -> None:
        assert self._doc([])["runs"][0]["results"] == []
