"""Serialize element trees as React component markup."""

from __future__ import annotations

from componentsmith.markup.schemas import XMLElement


def to_pascal_case(name: str) -> str:
    """``user-card`` → ``UserCard``; each segment title-cased."""
    return "".join(
        part[:1].upper() + part[1:].lower() for part in name.split("-")
    )


def _format_attribute(key: str, value: str) -> str:
    # Double quotes would end the attribute early; everything else is
    # passed through untouched.
    return f'{key}="{value.replace(chr(34), "&quot;")}"'


def render_element_as_component(element: XMLElement) -> str:
    """Render ``element`` and its subtree as component markup.

    Children are joined by newlines; an element without children
    renders as ``<Tag attrs></Tag>``.
    """
    name = to_pascal_case(element.tag_name)
    props = " ".join(
        _format_attribute(key, value)
        for key, value in element.attributes.items()
    )
    opening = f"<{name} {props}>" if props else f"<{name}>"

    body = "\n".join(
        child
        if isinstance(child, str)
        else render_element_as_component(child)
        for child in element.children
    )
    if not body:
        return f"{opening}</{name}>"
    return f"{opening}\n{body}\n</{name}>"
