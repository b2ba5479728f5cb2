"""Built-in markup templates."""

from __future__ import annotations


def _url_prefix(display_path: str | None) -> str:
    """Return ``/display_path`` or an empty prefix for root-level paths."""
    path = (display_path or "").strip()
    if not path or path == "/":
        return ""
    return f"/{path}"


class JavaScriptTagTemplate:
    """Default ``<script>`` tag for JavaScript assets.

    Notes
    -----
    Registered with a negative priority so that any user template for
    ``.js`` takes precedence.
    """

    filetype = ".js"
    priority = -1

    def render(self, display_path: str | None, filename: str) -> str:
        """Render a script tag pointing at the staged asset."""
        src = f"{_url_prefix(display_path)}/{filename}"
        return f"<script src='{src}' type='text/javascript'></script>"


class CssTagTemplate:
    """Default stylesheet ``<link>`` tag for CSS assets."""

    filetype = ".css"
    priority = -1

    def render(self, display_path: str | None, filename: str) -> str:
        """Render a stylesheet link pointing at the staged asset."""
        href = f"{_url_prefix(display_path)}/{filename}"
        return f"<link href='{href}' rel='stylesheet' type='text/css' />"
