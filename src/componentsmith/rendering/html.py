"""Markdown and code to HTML for the presentation layer."""

from __future__ import annotations

import html
import re

from componentsmith.extraction.fences import find_fenced_blocks
from componentsmith.extraction.language import classify_language

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_BULLET_RE = re.compile(r"^[-*] (.+)$", re.MULTILINE)
_SAFE_SCHEMES = frozenset({"http", "https", "mailto"})


def render_code_html(code: str, language: str | None = None) -> str:
    """Escaped ``<pre><code>`` block tagged with its language class."""
    lang = classify_language(language, code)
    return (
        f'<pre><code class="language-{html.escape(lang)}">'
        f"{html.escape(code)}</code></pre>"
    )


def markdown_to_html(md: str) -> str:
    """Minimal Markdown to HTML conversion.

    Fenced blocks are rendered through :func:`render_code_html`;
    the text between them gets headings, bold, inline code, links,
    bullets and pipe tables.
    """
    parts: list[str] = []
    cursor = 0
    for block in find_fenced_blocks(md):
        parts.append(_inline_to_html(md[cursor : block.start]))
        parts.append(
            render_code_html(
                block.code,
                block.language,
            )
        )
        cursor = block.end
    parts.append(_inline_to_html(md[cursor:]))
    return "\n".join(p for p in parts if p.strip())


def _inline_to_html(md: str) -> str:
    result = html.escape(md.strip("\n"))

    result = _HEADING_RE.sub(
        lambda m: (
            f"<h{len(m.group(1))}>"
            f"{m.group(2)}"
            f"</h{len(m.group(1))}>"
        ),
        result,
    )
    result = _BOLD_RE.sub(r"<strong>\1</strong>", result)
    result = _CODE_RE.sub(r"<code>\1</code>", result)
    result = _LINK_RE.sub(_link, result)
    result = _BULLET_RE.sub(r"<li>\1</li>", result)

    # Tables (basic: pipe-delimited)
    in_table = False
    out_lines: list[str] = []
    for line in result.split("\n"):
        stripped = line.strip()
        if stripped.startswith("|") and stripped.endswith("|"):
            if "---" in stripped:
                continue  # separator row
            cells = [c.strip() for c in stripped.strip("|").split("|")]
            tag = "th" if not in_table else "td"
            if not in_table:
                out_lines.append("<table>")
                in_table = True
            out_lines.append(
                "<tr>"
                + "".join(f"<{tag}>{c}</{tag}>" for c in cells)
                + "</tr>"
            )
        else:
            if in_table:
                out_lines.append("</table>")
                in_table = False
            out_lines.append(line)
    if in_table:
        out_lines.append("</table>")

    return "\n".join(out_lines)


def _is_safe_href(url: str) -> bool:
    scheme, sep, _ = url.partition(":")
    if not sep or any(c in scheme for c in "/?#"):
        return True  # relative
    return scheme.lower() in _SAFE_SCHEMES


def _link(match: re.Match[str]) -> str:
    label, url = match.group(1), match.group(2)
    if not _is_safe_href(url):
        return label
    return f'<a href="{url}">{label}</a>'
