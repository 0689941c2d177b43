"""Approximate (lossy) conversions from component markup back to XML.

Nothing here inverts :func:`render_element_as_component` exactly:
attribute formatting, quoting and whitespace are left as found, only
tag names are rewritten.
"""

from __future__ import annotations

import re

_OPEN_TAG_RE = re.compile(r"<([A-Z][a-zA-Z]*)")
_CLOSE_TAG_RE = re.compile(r"</([A-Z][a-zA-Z]*)")
_UPPER_RE = re.compile(r"[A-Z]")
_COMPONENT_RE = re.compile(r"<([A-Z][a-zA-Z0-9]*)")


def to_kebab_case(name: str) -> str:
    """``UserCard`` → ``user-card``."""
    kebab = _UPPER_RE.sub(lambda m: "-" + m.group(0).lower(), name)
    return kebab[1:] if kebab.startswith("-") else kebab


def render_component_as_xml(markup: str) -> str:
    """Rewrite PascalCase opening/closing tags as kebab-case tags."""
    converted = _OPEN_TAG_RE.sub(
        lambda m: f"<{to_kebab_case(m.group(1))}", markup
    )
    return _CLOSE_TAG_RE.sub(
        lambda m: f"</{to_kebab_case(m.group(1))}", converted
    )


def extract_components(text: str) -> list[str]:
    """Distinct PascalCase component names used in ``text``, in order."""
    seen: dict[str, None] = {}
    for match in _COMPONENT_RE.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def extract_tag(text: str, tag_name: str) -> str:
    """Inner content of every ``<tag>…</tag>`` region, newline-joined."""
    pattern = re.compile(
        rf"<{re.escape(tag_name)}>(.*?)</{re.escape(tag_name)}>",
        re.DOTALL,
    )
    return "\n".join(m.group(1) for m in pattern.finditer(text))
