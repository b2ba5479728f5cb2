"""Plugin registry and module loading helpers."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from pydantic import ValidationError

from asset_pipeline.errors import PluginError
from asset_pipeline.plugins.base import Compressor, Converter, Plugin, Template
from asset_pipeline.plugins.builtins import CssTagTemplate, JavaScriptTagTemplate
from asset_pipeline.schemas import PluginDeclaration
from asset_pipeline.types import HandlerKind

logger = logging.getLogger(__name__)

HANDLER_KINDS: tuple[HandlerKind, ...] = ("converter", "compressor", "template")

_MODULE_EXPORTS: dict[str, HandlerKind] = {
    "CONVERTERS": "converter",
    "COMPRESSORS": "compressor",
    "TEMPLATES": "template",
}


@dataclass(frozen=True)
class HandlerDescriptor:
    """Registered plugin together with its normalized declaration."""

    kind: HandlerKind
    filetype: str
    priority: int
    plugin: Plugin


class PluginRegistry:
    """Registry of converter, compressor and template plugins.

    Lookups are deterministic: converters and compressors resolve to the most
    recently registered match, templates to the highest priority match with
    ties going to the most recently registered.
    """

    def __init__(self) -> None:
        self._handlers: list[HandlerDescriptor] = []

    def register(self, kind: HandlerKind, plugin: Plugin) -> HandlerDescriptor:
        """Register plugin instance for ``kind``.

        Parameters
        ----------
        kind : {"converter", "compressor", "template"}
            Stage the plugin participates in.
        plugin : Converter | Compressor | Template
            Plugin instance to register.

        Returns
        -------
        HandlerDescriptor
            Stored descriptor.

        Raises
        ------
        PluginError
            If ``kind`` is unknown or the plugin declaration is invalid.
        """
        if kind not in HANDLER_KINDS:
            raise PluginError(
                f"Unknown plugin kind '{kind}'. Expected one of: {', '.join(HANDLER_KINDS)}"
            )
        priority = getattr(plugin, "priority", 0) if kind == "template" else 0
        try:
            declaration = PluginDeclaration(
                filetype=getattr(plugin, "filetype", ""),
                priority=priority,
            )
        except ValidationError as exc:
            raise PluginError(
                f"Invalid {kind} declaration for '{type(plugin).__name__}': {exc}"
            ) from exc

        descriptor = HandlerDescriptor(
            kind=kind,
            filetype=declaration.filetype,
            priority=declaration.priority,
            plugin=plugin,
        )
        self._handlers.append(descriptor)
        logger.debug(
            "registered %s %s for %s", kind, type(plugin).__name__, descriptor.filetype
        )
        return descriptor

    def register_converter(self, plugin: Converter) -> HandlerDescriptor:
        """Register a converter plugin."""
        return self.register("converter", plugin)

    def register_compressor(self, plugin: Compressor) -> HandlerDescriptor:
        """Register a compressor plugin."""
        return self.register("compressor", plugin)

    def register_template(self, plugin: Template) -> HandlerDescriptor:
        """Register a template plugin."""
        return self.register("template", plugin)

    def handlers(self, kind: HandlerKind) -> list[HandlerDescriptor]:
        """Return descriptors for ``kind`` in registration order."""
        return [handler for handler in self._handlers if handler.kind == kind]

    def find_handler(self, kind: HandlerKind, extension: str) -> Plugin | None:
        """Find the plugin handling ``extension`` for ``kind``.

        Parameters
        ----------
        kind : {"converter", "compressor", "template"}
            Stage being dispatched.
        extension : str
            File extension including the leading dot. Case-insensitive.

        Returns
        -------
        Converter | Compressor | Template | None
            Selected plugin, or ``None`` when nothing matches.
        """
        wanted = extension.lower()
        matches = [
            handler for handler in self.handlers(kind) if handler.filetype == wanted
        ]
        if not matches:
            return None
        if kind == "template":
            matches = sorted(matches, key=lambda handler: handler.priority)
        return matches[-1].plugin

    def load_module(self, module_or_path: str) -> None:
        """Load plugins from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load plugins
            from trusted sources.

        Parameters
        ----------
        module_or_path : str
            Python import path or filesystem path to plugin module.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    .. warning::
        This function executes arbitrary Python code from the specified module or
        file. Only load plugins from trusted sources.

    Parameters
    ----------
    module_or_path : str
        Python module path or local file path.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    PluginError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise PluginError(f"Unable to load plugin module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise PluginError(
                f"Unable to execute plugin module {candidate}: {exc}"
            ) from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise PluginError(
            f"Unable to import plugin module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: PluginRegistry) -> None:
    """Register plugin definitions exposed by ``module``.

    A ``register_plugins(registry)`` hook takes precedence over the
    ``CONVERTERS``, ``COMPRESSORS`` and ``TEMPLATES`` sequences.
    """
    if hasattr(module, "register_plugins"):
        module.register_plugins(registry)
        return

    found = False
    for attribute, kind in _MODULE_EXPORTS.items():
        plugins_obj = getattr(module, attribute, None)
        if plugins_obj is None:
            continue
        found = True
        for plugin in plugins_obj:
            registry.register(kind, plugin)

    if not found:
        raise PluginError(
            "Plugin module must expose register_plugins(registry), "
            "CONVERTERS, COMPRESSORS, or TEMPLATES."
        )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> PluginRegistry:
    """Create registry holding the built-in templates.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional plugin modules to load after the built-ins, so their
        plugins win over the defaults.

    Returns
    -------
    PluginRegistry
        Registry with built-in and external plugins.
    """
    registry = PluginRegistry()
    registry.register_template(JavaScriptTagTemplate())
    registry.register_template(CssTagTemplate())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
