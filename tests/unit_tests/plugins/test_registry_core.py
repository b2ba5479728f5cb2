"""Unit tests for plugin registry dispatch and module loading helpers."""

from __future__ import annotations

import types
from pathlib import Path

import pytest

from asset_pipeline.errors import PluginError
from asset_pipeline.plugins.builtins import CssTagTemplate, JavaScriptTagTemplate
from asset_pipeline.plugins.registry import (
    PluginRegistry,
    _import_module_or_path,
    _register_from_module,
    create_default_registry,
)


class _Converter:
    """Converter test double."""

    def __init__(self, filetype: str) -> None:
        self.filetype = filetype

    def convert(self, content: str) -> str:
        return content


class _Template:
    """Template test double rendering its own label."""

    def __init__(self, filetype: str, priority: int, label: str) -> None:
        self.filetype = filetype
        self.priority = priority
        self.label = label

    def render(self, display_path: str | None, filename: str) -> str:
        return f"{self.label}:{display_path}/{filename}"


def test_find_handler_returns_none_without_match() -> None:
    """Treat a missing plugin as a valid lookup outcome."""
    registry = PluginRegistry()
    registry.register_converter(_Converter(".coffee"))
    assert registry.find_handler("converter", ".js") is None
    assert registry.find_handler("compressor", ".coffee") is None


def test_find_handler_is_case_insensitive() -> None:
    """Normalize declared and requested extensions."""
    registry = PluginRegistry()
    plugin = _Converter(".CoFFee")
    registry.register_converter(plugin)
    assert registry.find_handler("converter", ".COFFEE") is plugin


def test_last_registered_converter_wins() -> None:
    """Let a later registration override an earlier default."""
    registry = PluginRegistry()
    first = _Converter(".coffee")
    second = _Converter(".coffee")
    registry.register_converter(first)
    registry.register_converter(second)
    assert registry.find_handler("converter", ".coffee") is second


def test_highest_priority_template_wins() -> None:
    """Select the highest priority template regardless of registration order."""
    registry = PluginRegistry()
    high = _Template(".js", 5, "high")
    registry.register_template(high)
    registry.register_template(_Template(".js", 1, "low"))
    assert registry.find_handler("template", ".js") is high


def test_equal_priority_templates_prefer_later_registration() -> None:
    """Break template priority ties in favor of the later registration."""
    registry = PluginRegistry()
    registry.register_template(_Template(".js", 0, "first"))
    later = _Template(".js", 0, "later")
    registry.register_template(later)
    assert registry.find_handler("template", ".js") is later


def test_register_rejects_invalid_filetype() -> None:
    """Reject declarations that are not dotted extensions."""
    registry = PluginRegistry()
    with pytest.raises(PluginError, match="Invalid converter declaration"):
        registry.register_converter(_Converter("js"))
    with pytest.raises(PluginError, match="Invalid compressor declaration"):
        registry.register("compressor", object())  # type: ignore[arg-type]


def test_register_rejects_unknown_kind() -> None:
    """Reject kinds outside converter, compressor and template."""
    with pytest.raises(PluginError, match="Unknown plugin kind"):
        PluginRegistry().register("minifier", _Converter(".js"))  # type: ignore[arg-type]


def test_handlers_preserve_registration_order() -> None:
    """List descriptors per kind in registration order."""
    registry = PluginRegistry()
    registry.register_converter(_Converter(".a"))
    registry.register_template(_Template(".js", 3, "t"))
    registry.register_converter(_Converter(".B"))
    assert [h.filetype for h in registry.handlers("converter")] == [".a", ".b"]
    assert [h.priority for h in registry.handlers("template")] == [3]


def test_import_module_by_path_and_register_exports(tmp_path: Path) -> None:
    """Load plugin module from file path and register its exported sequences."""
    plugin_file = tmp_path / "plugin_mod.py"
    plugin_file.write_text(
        "class Upper:\n"
        "    filetype = '.up'\n"
        "    def convert(self, content):\n"
        "        return content.upper()\n"
        "CONVERTERS = [Upper()]\n",
        encoding="utf-8",
    )
    module = _import_module_or_path(str(plugin_file))
    registry = PluginRegistry()
    _register_from_module(module, registry)
    plugin = registry.find_handler("converter", ".up")
    assert plugin is not None
    assert type(plugin).__name__ == "Upper"


def test_import_module_invalid_path_spec_raises(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Raise PluginError when file path exists but import spec is invalid."""
    plugin_file = tmp_path / "plugin_mod.py"
    plugin_file.write_text("x = 1\n", encoding="utf-8")
    monkeypatch.setattr(
        "asset_pipeline.plugins.registry.importlib.util.spec_from_file_location",
        lambda *_args, **_kwargs: None,
    )
    with pytest.raises(PluginError, match="Unable to load plugin module"):
        _import_module_or_path(str(plugin_file))


def test_import_module_executing_with_error_raises(tmp_path: Path) -> None:
    """Wrap errors raised while executing a plugin file."""
    plugin_file = tmp_path / "broken_mod.py"
    plugin_file.write_text("raise RuntimeError('boom')\n", encoding="utf-8")
    with pytest.raises(PluginError, match="Unable to execute plugin module"):
        _import_module_or_path(str(plugin_file))


def test_import_module_by_name_failure_raises() -> None:
    """Raise PluginError when import path cannot be imported."""
    with pytest.raises(PluginError, match="Unable to import plugin module"):
        _import_module_or_path("module.that.does.not.exist")


def test_register_from_module_uses_register_plugins() -> None:
    """Prefer register_plugins(registry) hook when available."""
    registry = PluginRegistry()
    module = types.SimpleNamespace(
        register_plugins=lambda r: r.register_converter(_Converter(".hook")),
        CONVERTERS=[_Converter(".ignored")],
    )
    _register_from_module(module, registry)  # type: ignore[arg-type]
    assert registry.find_handler("converter", ".hook") is not None
    assert registry.find_handler("converter", ".ignored") is None


def test_register_from_module_with_all_sequences() -> None:
    """Register every plugin from CONVERTERS, COMPRESSORS and TEMPLATES."""
    registry = PluginRegistry()
    compressor = types.SimpleNamespace(filetype=".js", compress=lambda c: c)
    module = types.SimpleNamespace(
        CONVERTERS=[_Converter(".a")],
        COMPRESSORS=[compressor],
        TEMPLATES=[_Template(".css", 2, "css")],
    )
    _register_from_module(module, registry)  # type: ignore[arg-type]
    assert registry.find_handler("compressor", ".js") is compressor
    assert registry.find_handler("template", ".css") is not None


def test_register_from_module_requires_contract() -> None:
    """Raise when plugin module exposes no supported registration contract."""
    with pytest.raises(PluginError, match="must expose"):
        _register_from_module(types.SimpleNamespace(), PluginRegistry())  # type: ignore[arg-type]


def test_registry_load_module_calls_import_and_register(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Execute load_module wrapper path through helper functions."""
    registry = PluginRegistry()
    module = types.SimpleNamespace(CONVERTERS=[_Converter(".x")])
    monkeypatch.setattr(
        "asset_pipeline.plugins.registry._import_module_or_path", lambda _path: module
    )
    registry.load_module("pkg.mod")
    assert registry.find_handler("converter", ".x") is not None


def test_create_default_registry_loads_extra_modules(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Register built-in templates, then load extra plugin modules in order."""
    loaded: list[str] = []

    def fake_load_module(self: PluginRegistry, module: str) -> None:
        loaded.append(module)

    monkeypatch.setattr(PluginRegistry, "load_module", fake_load_module)
    registry = create_default_registry(extra_modules=["a.b", "c.d"])
    assert isinstance(registry.find_handler("template", ".js"), JavaScriptTagTemplate)
    assert isinstance(registry.find_handler("template", ".css"), CssTagTemplate)
    assert loaded == ["a.b", "c.d"]


def test_user_template_overrides_builtin_at_default_priority() -> None:
    """Let a priority-0 user template beat the priority -1 built-in."""
    registry = create_default_registry()
    custom = _Template(".js", 0, "custom")
    registry.register_template(custom)
    assert registry.find_handler("template", ".js") is custom
