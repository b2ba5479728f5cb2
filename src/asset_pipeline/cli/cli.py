#!/usr/bin/env python3
"""
asset_pipeline.cli.cli

Typer-based CLI for building and cleaning staged assets.

Examples
--------
Bundle and stage the scripts listed in a manifest:

    asset-pipeline build manifest.yml --source site --destination _site \
        --type .js --prefix global

Remove staged assets:

    asset-pipeline clean --source site
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Any

import typer

from asset_pipeline.errors import AssetPipelineError, PluginError

app = typer.Typer(
    name="asset-pipeline",
    help="Convert, bundle, compress and stage assets listed in a manifest.",
    no_args_is_help=True,
)

LOG_FORMAT = "Asset Pipeline: %(message)s"


def _print_pipeline_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly pipeline error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the pipeline.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _config_overrides(
    config_file: Path | None,
    **overrides: Any,
) -> dict[str, Any]:
    """Merge config file values with explicitly passed CLI options."""
    options: dict[str, Any] = {}
    if config_file is not None:
        from asset_pipeline.schemas import load_config_file

        try:
            options = load_config_file(config_file).model_dump()
        except AssetPipelineError as exc:
            raise typer.BadParameter(str(exc)) from exc
    for key, value in overrides.items():
        if value is not None:
            options[key] = value
    return options


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline progress."),
) -> None:
    """Initialize shared CLI state and logging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("build")
def build_cmd(
    ctx: typer.Context,
    manifest_path: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        dir_okay=False,
        help="YAML file listing asset paths relative to --source.",
    ),
    source: Path = typer.Option(
        Path("."), "--source", file_okay=False, help="Source root directory."
    ),
    destination: Path = typer.Option(
        Path("_site"), "--destination", help="Public destination root."
    ),
    output_type: str = typer.Option(
        ..., "--type", help="Final output extension, e.g. .js or .css."
    ),
    prefix: str = typer.Option(..., "--prefix", help="Basename of the bundled asset."),
    tag: str = typer.Option("asset", "--tag", help="Label used in log messages."),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        readable=True,
        dir_okay=False,
        help="YAML file with pipeline options.",
    ),
    bundle: bool | None = typer.Option(
        None, "--bundle/--no-bundle", help="Collapse assets into a single file."
    ),
    compress: bool | None = typer.Option(
        None, "--compress/--no-compress", help="Run the compressor stage."
    ),
    gzip: bool | None = typer.Option(
        None, "--gzip/--no-gzip", help="Also emit .gz siblings."
    ),
    staging_path: str | None = typer.Option(
        None, "--staging-path", help="Staging directory below --source."
    ),
    output_path: str | None = typer.Option(
        None, "--output-path", help="Public subpath used in markup."
    ),
    display_path: str | None = typer.Option(
        None, "--display-path", help="Override for markup URLs."
    ),
    plugin_module: list[str] | None = typer.Option(
        None,
        "--plugin-module",
        help="Plugin module import path or file path (repeatable).",
    ),
) -> None:
    """Run the pipeline for a manifest and print the generated markup."""
    debug: bool = bool(ctx.obj.get("debug", False))

    options = _config_overrides(
        config_file,
        bundle=bundle,
        compress=compress,
        gzip=gzip,
        staging_path=staging_path,
        output_path=output_path,
        display_path=display_path,
    )

    from asset_pipeline.plugins.registry import create_default_registry
    from asset_pipeline.schemas import PipelineConfig

    try:
        config = PipelineConfig.from_options(options)
        registry = create_default_registry(extra_modules=plugin_module)
    except AssetPipelineError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        from asset_pipeline.api import build_assets
        from asset_pipeline.application.cache import PipelineCache

        # One invocation, one cache.
        run = build_assets(
            manifest=manifest_path.read_text(encoding="utf-8"),
            prefix=prefix,
            source=source,
            destination=destination,
            output_type=output_type,
            config=config,
            tag=tag,
            registry=registry,
            cache=PipelineCache(),
        )
    except Exception as exc:
        raise typer.Exit(code=_print_pipeline_error(exc, debug))

    for asset in run.assets:
        staged = source / config.staging_path / (asset.output_path or "") / asset.filename
        typer.echo(f"✓ Staged: {staged}")
    typer.echo(run.html)


@app.command("clean")
def clean_cmd(
    ctx: typer.Context,
    source: Path = typer.Option(
        Path("."), "--source", file_okay=False, help="Source root directory."
    ),
    staging_path: str | None = typer.Option(
        None, "--staging-path", help="Staging directory below --source."
    ),
) -> None:
    """Remove staged assets."""
    debug: bool = bool(ctx.obj.get("debug", False))
    options = _config_overrides(None, staging_path=staging_path)

    try:
        from asset_pipeline.api import clean_staged_assets

        clean_staged_assets(source=source, config=options)
    except Exception as exc:
        raise typer.Exit(code=_print_pipeline_error(exc, debug))
    typer.echo("✓ Removed staged assets.")


@app.command("plugins")
def plugins_cmd(
    plugin_module: list[str] | None = typer.Option(
        None,
        "--plugin-module",
        help="Plugin module import path or file path (repeatable).",
    ),
) -> None:
    """List registered plugins in dispatch order."""
    from asset_pipeline.plugins.registry import HANDLER_KINDS, create_default_registry

    try:
        registry = create_default_registry(extra_modules=plugin_module)
    except PluginError as exc:
        raise typer.BadParameter(str(exc)) from exc

    for kind in HANDLER_KINDS:
        for handler in registry.handlers(kind):
            typer.echo(
                f"{kind}: {type(handler.plugin).__name__} "
                f"({handler.filetype}, priority {handler.priority})"
            )


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
