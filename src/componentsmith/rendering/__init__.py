"""HTML rendering helpers."""

from componentsmith.rendering.html import markdown_to_html, render_code_html

__all__ = ["markdown_to_html", "render_code_html"]
