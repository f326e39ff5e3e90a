# SPDX-License-Identifier: MIT
"""Profile configuration for the rule engine."""

from __future__ import annotations

import os
from dataclasses import dataclass

from cayce.rules.base import RuleSeverity


@dataclass(frozen=True)
class ProfileConfig:
    """Configuration for a scan profile: controls reporting and gate thresholds."""

    name: str
    report_on: int
    fail_on: int


PROFILES: dict[str, ProfileConfig] = {
    "all": ProfileConfig(
        name="all",
        report_on=RuleSeverity.NOT_APPLICABLE,
        fail_on=RuleSeverity.VIOLATION,
    ),
    "warnings": ProfileConfig(
        name="warnings",
        report_on=RuleSeverity.WARNING,
        fail_on=RuleSeverity.WARNING,
    ),
    "violations": ProfileConfig(
        name="violations",
        report_on=RuleSeverity.VIOLATION,
        fail_on=RuleSeverity.VIOLATION,
    ),
}

PROFILE_ENV_VAR = "CAYCE_PROFILE"
DEFAULT_PROFILE = "all"


def load_profile(cli_profile: str | None = None) -> ProfileConfig:
    """Resolve the active scan profile.

    An explicit ``cli_profile`` wins over ``$CAYCE_PROFILE``; with neither set
    (or set to blank) the ``all`` profile is used. Names are matched without
    regard to case or surrounding whitespace.

    Raises:
        ValueError: For a name that is not in ``PROFILES``.
    """
    requested = cli_profile or os.environ.get(PROFILE_ENV_VAR, "")
    key = requested.strip().lower() or DEFAULT_PROFILE
    profile = PROFILES.get(key)
    if profile is None:
        msg = f"Unknown profile: {requested!r}. Valid profiles: {sorted(PROFILES)}"
        raise ValueError(msg)
    return profile
