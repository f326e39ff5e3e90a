# SPDX-License-Identifier: MIT
"""Command-line entry point: run via `python -m cayce` or the `cayce` script."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from cayce.formatters import OutputFormat, get_formatter
from cayce.plugin import PluginLoadError, load_plugin
from cayce.rules.base import Finding, QueryCompilationError
from cayce.rules.config import PROFILES, load_profile
from cayce.rules.engine import RuleEngine

log = logging.getLogger("cayce")

DEFAULT_PLUGIN = "cayce.plugins.javascript:JavaScriptPlugin"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cayce", description="Run tree-sitter rules over source files")
    parser.add_argument("files", nargs="+", help="Source files to scan")
    parser.add_argument(
        "--plugin",
        default=DEFAULT_PLUGIN,
        help="Plugin as 'package.module:ClassName' (default: bundled JavaScript plugin)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        default=OutputFormat.JSON.value,
        choices=[f.value for f in OutputFormat],
        help="Report encoding",
    )
    parser.add_argument("--output", default=None, help="Write the report to this file instead of stdout")
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=None,
        help="Scan profile (overrides CAYCE_PROFILE env var)",
    )
    parser.add_argument(
        "--rule",
        dest="rules",
        action="append",
        default=None,
        help="Only run this rule id (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = "DEBUG" if args.verbose else os.environ.get("CAYCE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        profile = load_profile(args.profile)
        plugin = load_plugin(args.plugin)
    except (PluginLoadError, ValueError) as exc:
        print(f"cayce: {exc}", file=sys.stderr)
        return 2

    engine = RuleEngine(plugin.get_rules(), profile=profile, include=args.rules)
    findings: list[Finding] = []
    for path in args.files:
        try:
            findings.extend(engine.run_file(path))
        except (OSError, UnicodeDecodeError) as exc:
            print(f"cayce: cannot read {path}: {exc}", file=sys.stderr)
            return 2
        except QueryCompilationError as exc:
            print(f"cayce: {exc}", file=sys.stderr)
            return 2

    output_format = OutputFormat.parse(args.output_format)
    report = get_formatter(output_format).format(findings, output_format, args.output)
    if not args.output:
        print(report)
    log.info("%d finding(s) from %d file(s) with profile %s", len(findings), len(args.files), profile.name)
    return 1 if engine.check_gate(findings) else 0


if __name__ == "__main__":
    sys.exit(main())
