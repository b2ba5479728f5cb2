"""Pydantic schemas for runtime validation of pipeline inputs."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from asset_pipeline.errors import ConfigurationError, ManifestLoadError
from asset_pipeline.types import ManifestSource


class PipelineConfig(BaseModel):
    """Validated pipeline options layered over defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    staging_path: str = ".asset_pipeline"
    output_path: str = "assets"
    display_path: str | None = None
    bundle: bool = True
    compress: bool = True
    gzip: bool = False

    @field_validator("staging_path")
    @classmethod
    def _validate_staging_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("staging_path cannot be empty.")
        return value

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> PipelineConfig:
        """Layer ``options`` over the defaults.

        Parameters
        ----------
        options : Mapping[str, Any] | None, default=None
            User-supplied option overrides.

        Returns
        -------
        PipelineConfig
            Validated configuration.

        Raises
        ------
        ConfigurationError
            If an option is unknown or has an invalid value.
        """
        try:
            return cls.model_validate(dict(options or {}))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid pipeline configuration: {exc}") from exc

    def serialize(self) -> str:
        """Return a stable textual form used in cache fingerprints."""
        return self.model_dump_json()


class PluginDeclaration(BaseModel):
    """Validated file-type declaration of a registered plugin."""

    model_config = ConfigDict(extra="forbid", strict=True)

    filetype: str
    priority: int = 0

    @field_validator("filetype")
    @classmethod
    def _normalize_filetype(cls, value: str) -> str:
        value = value.strip().lower()
        if len(value) < 2 or not value.startswith("."):
            raise ValueError("filetype must be an extension such as '.js'.")
        return value


class ManifestDocument(RootModel[list[str]]):
    """Ordered list of source-relative asset paths."""

    @field_validator("root")
    @classmethod
    def _validate_paths(cls, value: list[str]) -> list[str]:
        if any(not item.strip() for item in value):
            raise ValueError("manifest entries cannot be empty.")
        return value


def parse_manifest(manifest: ManifestSource) -> list[str]:
    """Parse a manifest into its ordered list of paths.

    Parameters
    ----------
    manifest : str | Sequence[str]
        YAML document holding a list of paths, or the list itself.

    Returns
    -------
    list[str]
        Manifest entries in their original order, duplicates included.

    Raises
    ------
    ManifestLoadError
        If the document is not valid YAML or not a list of strings.
    """
    payload: object = manifest
    if isinstance(manifest, str):
        try:
            payload = yaml.safe_load(manifest)
        except yaml.YAMLError as exc:
            raise ManifestLoadError(f"Invalid manifest syntax: {exc}") from exc
        if payload is None:
            payload = []
    try:
        return ManifestDocument.model_validate(payload).root
    except ValidationError as exc:
        raise ManifestLoadError(f"Invalid manifest: {exc}") from exc


def load_config_file(path: Path) -> PipelineConfig:
    """Load pipeline options from a YAML mapping file.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, parsed, or validated.
    """
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to load config file {path}: {exc}") from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping.")
    return PipelineConfig.from_options(loaded)
