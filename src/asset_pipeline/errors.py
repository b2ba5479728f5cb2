"""Exception hierarchy for the asset pipeline."""

from __future__ import annotations


class AssetPipelineError(Exception):
    """Base class for all pipeline failures."""

    exit_code = 1


class ConfigurationError(AssetPipelineError):
    """Pipeline configuration could not be validated or loaded."""


class ManifestLoadError(AssetPipelineError):
    """Manifest could not be parsed or one of its files could not be read."""


class PluginError(AssetPipelineError):
    """Plugin declaration or plugin module is invalid."""


class ConversionError(AssetPipelineError):
    """A converter plugin failed while converting an asset."""


class CompressionError(AssetPipelineError):
    """A compressor plugin failed while compressing an asset."""


class SaveError(AssetPipelineError):
    """An asset could not be written to the staging area."""


class StagingCleanupError(AssetPipelineError):
    """Staged assets could not be removed."""
