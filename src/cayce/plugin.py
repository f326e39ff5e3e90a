# SPDX-License-Identifier: MIT
"""Plugin contract: binds a set of rules to one grammar and one package identity.

A plugin subclasses ``CaycePlugin`` and implements two methods::

    class MyPlugin(CaycePlugin):
        def get_language(self) -> Language:
            return Language(tree_sitter_javascript.language())

        def register_rules(self) -> list[ScanRule]:
            return [NoConsoleRule(), NoEvalRule()]

Callers always obtain rules through ``get_rules()``, which binds the grammar.
The package identity comes from a ``plugin.json`` manifest placed next to the
module that defines the plugin class.
"""

from __future__ import annotations

import importlib
import inspect
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Language

    from cayce.rules.scan_rule import ScanRule

log = logging.getLogger(__name__)

MANIFEST_NAME = "plugin.json"
INVALID_PACKAGE_ID = "invalid"


class PluginLoadError(ImportError):
    """Raised when a plugin spec cannot be resolved to a CaycePlugin subclass."""


class CaycePlugin(ABC):
    """Base class for rule plugins."""

    @abstractmethod
    def get_language(self) -> Language:
        """Return the tree-sitter grammar every rule of this plugin runs against."""
        raise NotImplementedError

    @abstractmethod
    def register_rules(self) -> list[ScanRule]:
        """Return fresh instances of the rules this plugin provides."""
        raise NotImplementedError

    def get_rules(self) -> list[ScanRule]:
        """Return the plugin's rules with the grammar bound onto each of them.

        ``register_rules`` is called on every invocation; callers cache if needed.
        """
        rules = self.register_rules()
        language = self.get_language()
        for rule in rules:
            rule.language = language
        return rules

    def manifest_path(self) -> Path:
        return Path(inspect.getfile(type(self))).resolve().parent / MANIFEST_NAME

    def get_package_id(self) -> str:
        """Return the ``name`` field of the plugin manifest, or ``"invalid"`` on any failure."""
        try:
            path = self.manifest_path()
            manifest = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, TypeError, ValueError) as exc:
            log.warning("Could not read plugin manifest for %s: %s", type(self).__name__, exc)
            return INVALID_PACKAGE_ID

        name = manifest.get("name") if isinstance(manifest, dict) else None
        if not isinstance(name, str) or not name:
            log.warning("Plugin manifest %s has no usable 'name' field", path)
            return INVALID_PACKAGE_ID
        return name


def load_plugin(spec: str) -> CaycePlugin:
    """Import and instantiate a plugin from a ``package.module:ClassName`` spec.

    Raises:
        PluginLoadError: If the spec is malformed, the import fails, or the
            target is not a CaycePlugin subclass.
    """
    module_name, sep, class_name = spec.partition(":")
    if not sep or not module_name or not class_name:
        msg = f"Invalid plugin spec {spec!r}: expected 'package.module:ClassName'"
        raise PluginLoadError(msg)

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import plugin module {module_name!r}: {exc}"
        raise PluginLoadError(msg) from exc

    plugin_cls = getattr(module, class_name, None)
    if not (inspect.isclass(plugin_cls) and issubclass(plugin_cls, CaycePlugin)):
        msg = f"{spec!r} does not name a CaycePlugin subclass"
        raise PluginLoadError(msg)

    plugin = plugin_cls()
    log.info("Loaded plugin %s (%s)", spec, plugin.get_package_id())
    return plugin
