# SPDX-License-Identifier: MIT
"""Plugins bundled with cayce."""
