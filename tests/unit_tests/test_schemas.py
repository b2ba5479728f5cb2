"""Unit tests for configuration and manifest validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from asset_pipeline.errors import ConfigurationError, ManifestLoadError
from asset_pipeline.schemas import PipelineConfig, load_config_file, parse_manifest


def test_config_defaults() -> None:
    """Expose documented defaults when no options are given."""
    config = PipelineConfig.from_options(None)
    assert config.staging_path == ".asset_pipeline"
    assert config.output_path == "assets"
    assert config.display_path is None
    assert config.bundle is True
    assert config.compress is True
    assert config.gzip is False


def test_config_layers_options_over_defaults() -> None:
    """Override only the provided keys."""
    config = PipelineConfig.from_options({"gzip": True, "output_path": "js"})
    assert config.gzip is True
    assert config.output_path == "js"
    assert config.bundle is True


def test_config_rejects_unknown_keys() -> None:
    """Wrap validation failures as ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Invalid pipeline configuration"):
        PipelineConfig.from_options({"bundel": True})


def test_config_rejects_empty_staging_path() -> None:
    """Refuse a staging path that would point at the source root."""
    with pytest.raises(ConfigurationError):
        PipelineConfig.from_options({"staging_path": "  "})


def test_config_serialization_is_stable() -> None:
    """Serialize equal configs identically regardless of option order."""
    first = PipelineConfig.from_options({"gzip": True, "bundle": False})
    second = PipelineConfig.from_options({"bundle": False, "gzip": True})
    assert first.serialize() == second.serialize()
    assert first.serialize() != PipelineConfig().serialize()


def test_parse_manifest_from_yaml_keeps_order_and_duplicates() -> None:
    """Parse YAML lists without deduplicating entries."""
    assert parse_manifest("- b.js\n- a.js\n- b.js\n") == ["b.js", "a.js", "b.js"]


def test_parse_manifest_accepts_sequences_and_empty_documents() -> None:
    """Accept already-parsed sequences and empty YAML documents."""
    assert parse_manifest(("a.js", "b.js")) == ["a.js", "b.js"]
    assert parse_manifest("") == []


@pytest.mark.parametrize(
    ("manifest", "match"),
    [
        ("[a.js, b.js\n", "Invalid manifest syntax"),
        ("key: value\n", "Invalid manifest"),
        ("- a.js\n- ''\n", "Invalid manifest"),
    ],
)
def test_parse_manifest_rejects_invalid_documents(manifest: str, match: str) -> None:
    """Raise ManifestLoadError for bad syntax, non-lists and empty entries."""
    with pytest.raises(ManifestLoadError, match=match):
        parse_manifest(manifest)


def test_load_config_file(tmp_path: Path) -> None:
    """Load a YAML mapping into a validated config."""
    path = tmp_path / "pipeline.yml"
    path.write_text("gzip: true\ndisplay_path: static\n", encoding="utf-8")
    config = load_config_file(path)
    assert config.gzip is True
    assert config.display_path == "static"


def test_load_config_file_requires_mapping(tmp_path: Path) -> None:
    """Reject config files that are not mappings or cannot be read."""
    path = tmp_path / "pipeline.yml"
    path.write_text("- gzip\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        load_config_file(path)
    with pytest.raises(ConfigurationError, match="Unable to load config file"):
        load_config_file(tmp_path / "missing.yml")
