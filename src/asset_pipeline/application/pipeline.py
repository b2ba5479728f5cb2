"""Ordered transformation stages over a manifest's assets."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from gzip import compress as gzip_compress
from pathlib import Path
from typing import cast

from asset_pipeline.application.ports import AssetStore
from asset_pipeline.application.results import PipelineResult
from asset_pipeline.errors import (
    CompressionError,
    ConversionError,
    ManifestLoadError,
    SaveError,
)
from asset_pipeline.infrastructure.filesystem import LocalAssetStore
from asset_pipeline.models import Asset
from asset_pipeline.plugins.base import Compressor, Converter, Template
from asset_pipeline.plugins.registry import PluginRegistry
from asset_pipeline.schemas import PipelineConfig

logger = logging.getLogger(__name__)

type Assets = tuple[Asset, ...]


class Pipeline:
    """Run collect, convert, bundle, compress, gzip, save and markup in order.

    Parameters
    ----------
    manifest : Sequence[str]
        Source-relative asset paths, processed in order.
    prefix : str
        Basename of the bundled asset.
    source : Path
        Source root; staged files are written below it.
    output_type : str
        Extension of the final representation, e.g. ``".js"``.
    config : PipelineConfig
        Stage toggles and output paths.
    registry : PluginRegistry
        Plugins used for dispatch.
    store : AssetStore | None, default=None
        Filesystem port for the collect and save stages.

    Notes
    -----
    Stages never mutate assets; each one returns a new tuple. Any stage
    failure is logged and raised, aborting the run.
    """

    def __init__(
        self,
        manifest: Sequence[str],
        prefix: str,
        source: Path,
        output_type: str,
        config: PipelineConfig,
        registry: PluginRegistry,
        store: AssetStore | None = None,
    ) -> None:
        self.manifest = tuple(manifest)
        self.prefix = prefix
        self.source = source
        self.output_type = output_type
        self.config = config
        self.registry = registry
        self.store = store or LocalAssetStore()

    def process(self) -> PipelineResult:
        """Run every enabled stage and return the final assets and markup."""
        assets = self.collect()
        assets = self.convert(assets)
        if self.config.bundle:
            assets = self.bundle(assets)
        if self.config.compress:
            assets = self.compress(assets)
        if self.config.gzip:
            assets = self.gzip(assets)
        assets = self.save(assets)
        return PipelineResult(assets=assets, html=self.markup(assets))

    def collect(self) -> Assets:
        """Read every manifest entry into an asset."""
        assets: list[Asset] = []
        for path in self.manifest:
            full_path = self.source / path
            try:
                content = self.store.read_text(full_path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Failed to load assets from provided manifest: %s", exc)
                raise ManifestLoadError(f"Unable to read asset '{path}': {exc}") from exc
            assets.append(
                Asset(content=content, filename=full_path.name, dirname=str(full_path.parent))
            )
        return tuple(assets)

    def convert(self, assets: Assets) -> Assets:
        """Convert each asset until no converter matches its extension."""
        return tuple(self._convert_asset(asset) for asset in assets)

    def _convert_asset(self, asset: Asset) -> Asset:
        # A filename seen twice means the converters would loop forever.
        seen: set[str] = set()
        while True:
            converter = cast(
                "Converter | None", self.registry.find_handler("converter", asset.extension)
            )
            if converter is None:
                return asset
            plugin_name = type(converter).__name__
            if asset.filename in seen:
                logger.error(
                    "Failed to convert '%s' with '%s': converter cycle",
                    asset.filename,
                    plugin_name,
                )
                raise ConversionError(
                    f"Converter cycle while converting '{asset.filename}': "
                    "the filename was already converted."
                )
            seen.add(asset.filename)
            try:
                content = converter.convert(asset.content)
            except Exception as exc:
                logger.error(
                    "Failed to convert '%s' with '%s': %s", asset.filename, plugin_name, exc
                )
                raise ConversionError(
                    f"Failed to convert '{asset.filename}' with '{plugin_name}': {exc}"
                ) from exc
            asset = asset.converted(content, self.output_type)

    def bundle(self, assets: Assets) -> Assets:
        """Collapse all assets into a single ``{prefix}{output_type}`` asset."""
        parts: list[str] = []
        for asset in assets:
            try:
                parts.append(asset.as_text())
            except UnicodeDecodeError as exc:
                logger.error("Failed to bundle '%s': %s", asset.filename, exc)
                raise ConversionError(
                    f"Failed to bundle '{asset.filename}': content is not UTF-8 text: {exc}"
                ) from exc
        content = "\n".join(parts)
        return (
            Asset(
                content=content,
                filename=f"{self.prefix}{self.output_type}",
                dirname=str(self.source),
            ),
        )

    def compress(self, assets: Assets) -> Assets:
        """Compress every asset with the compressor for the output type.

        Without a registered compressor the stage leaves all assets unchanged.
        """
        compressor = cast(
            "Compressor | None",
            self.registry.find_handler("compressor", self.output_type),
        )
        if compressor is None:
            logger.debug("no compressor registered for '%s'", self.output_type)
            return assets

        plugin_name = type(compressor).__name__
        compressed: list[Asset] = []
        for asset in assets:
            try:
                content = compressor.compress(asset.content)
            except Exception as exc:
                logger.error(
                    "Failed to compress '%s' with '%s': %s",
                    asset.filename,
                    plugin_name,
                    exc,
                )
                raise CompressionError(
                    f"Failed to compress '{asset.filename}' with '{plugin_name}': {exc}"
                ) from exc
            compressed.append(asset.with_content(content))
        return tuple(compressed)

    def gzip(self, assets: Assets) -> Assets:
        """Follow every asset with a gzip-encoded ``.gz`` sibling."""
        expanded: list[Asset] = []
        for asset in assets:
            expanded.append(asset)
            expanded.append(
                Asset(
                    content=gzip_compress(asset.as_bytes(), mtime=0),
                    filename=f"{asset.filename}.gz",
                    dirname=asset.dirname,
                )
            )
        return tuple(expanded)

    def save(self, assets: Assets) -> Assets:
        """Write assets below ``{source}/{staging_path}/{output_path}``."""
        output_path = self.config.output_path
        directory = self.source / self.config.staging_path / output_path
        saved: list[Asset] = []
        for asset in assets:
            try:
                self.store.write(directory / asset.filename, asset.content)
            except OSError as exc:
                logger.error("Failed to save '%s' to disk: %s", asset.filename, exc)
                raise SaveError(
                    f"Failed to save '{asset.filename}' to {directory}: {exc}"
                ) from exc
            saved.append(asset.saved_to(output_path))
        return tuple(saved)

    def markup(self, assets: Assets) -> str:
        """Concatenate the template fragment of every asset that has one."""
        display_path = self.config.display_path or self.config.output_path
        fragments: list[str] = []
        for asset in assets:
            template = cast(
                "Template | None", self.registry.find_handler("template", asset.extension)
            )
            if template is not None:
                fragments.append(template.render(display_path, asset.filename))
        return "".join(fragments)
