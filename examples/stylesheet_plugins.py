#!/usr/bin/env python3
"""Example plugin module for stylesheet pipelines.

Load it with::

    asset-pipeline build styles.yml --type .css --prefix site \
        --plugin-module examples/stylesheet_plugins.py
"""

from __future__ import annotations

import re
from string import Template

SITE_VARIABLES = {
    "brand_color": "#0b5fff",
    "font_stack": "system-ui, sans-serif",
}


class VariableTemplateConverter:
    """Expand ``$name`` placeholders in ``.tmpl`` sources."""

    filetype = ".tmpl"

    def convert(self, content: str) -> str:
        """Substitute known site variables, leaving unknown ones untouched."""
        return Template(content).safe_substitute(SITE_VARIABLES)


class CssWhitespaceCompressor:
    """Collapse whitespace in CSS output."""

    filetype = ".css"

    def compress(self, content: str) -> str:
        content = re.sub(r"/\*.*?\*/", "", content, flags=re.DOTALL)
        content = re.sub(r"\s+", " ", content)
        return re.sub(r"\s*([{};:,])\s*", r"\1", content).strip()


class PreloadStylesheetTemplate:
    """Emit a preload hint ahead of the stylesheet link."""

    filetype = ".css"
    priority = 1

    def render(self, display_path: str | None, filename: str) -> str:
        prefix = f"/{display_path}" if display_path and display_path != "/" else ""
        href = f"{prefix}/{filename}"
        return (
            f"<link rel='preload' href='{href}' as='style' />"
            f"<link href='{href}' rel='stylesheet' type='text/css' />"
        )


CONVERTERS = [VariableTemplateConverter()]
COMPRESSORS = [CssWhitespaceCompressor()]
TEMPLATES = [PreloadStylesheetTemplate()]
