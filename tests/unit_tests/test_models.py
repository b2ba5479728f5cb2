"""Unit tests for the immutable asset record."""

from __future__ import annotations

import dataclasses

import pytest

from asset_pipeline.models import Asset


def test_extension_is_lower_cased() -> None:
    """Report the current extension in lower case."""
    assert Asset(content="", filename="App.CoFFee").extension == ".coffee"
    assert Asset(content="", filename="README").extension == ""


def test_converted_strips_extension_and_appends_output_type() -> None:
    """Append the output type when no extension is left after stripping."""
    asset = Asset(content="a", filename="app.coffee", dirname="src")
    converted = asset.converted("b", ".js")
    assert converted.filename == "app.js"
    assert converted.content == "b"
    assert converted.dirname == "src"
    assert asset.filename == "app.coffee"


def test_converted_keeps_inner_extension() -> None:
    """Keep the next extension in a multi-extension chain."""
    asset = Asset(content="a", filename="app.css.scss")
    assert asset.converted("b", ".js").filename == "app.css"


def test_assets_are_frozen() -> None:
    """Reject in-place mutation."""
    asset = Asset(content="a", filename="a.js")
    with pytest.raises(dataclasses.FrozenInstanceError):
        asset.filename = "b.js"  # type: ignore[misc]


def test_saved_to_and_encoding_helpers() -> None:
    """Mark output path and convert between text and bytes."""
    asset = Asset(content="héllo", filename="a.js").saved_to("assets")
    assert asset.output_path == "assets"
    assert asset.as_bytes() == "héllo".encode()
    assert Asset(content=b"hi", filename="a.js").as_text() == "hi"
