"""Element tree produced by the XML parser."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class XMLElement(BaseModel):
    """One element node; owns its children exclusively.

    ``children`` keeps document order, interleaving text and
    sub-elements. Text children are trimmed and never empty.
    """

    tag_name: str
    attributes: dict[str, str] = Field(
        default_factory=lambda: dict[str, str]()
    )
    children: list[XMLElement | str] = Field(
        default_factory=lambda: list[XMLElement | str]()
    )

    @field_validator("tag_name")
    @classmethod
    def _non_empty_tag(cls, v: str) -> str:
        if not v:
            raise ValueError("tag_name must not be empty")
        return v

    @field_validator("children")
    @classmethod
    def _no_blank_text(
        cls, v: list[XMLElement | str]
    ) -> list[XMLElement | str]:
        return [
            child.strip() if isinstance(child, str) else child
            for child in v
            if not isinstance(child, str) or child.strip()
        ]

    @property
    def elements(self) -> list[XMLElement]:
        """Element children only, in document order."""
        return [c for c in self.children if isinstance(c, XMLElement)]

    @property
    def text(self) -> str:
        """Direct text children joined by single spaces."""
        return " ".join(c for c in self.children if isinstance(c, str))

    def depth(self) -> int:
        """Nesting depth counting this element as 1."""
        deepest = 0
        stack: list[tuple[XMLElement, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.elements)
        return deepest

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict with camelCase keys for JSON consumers."""
        return {
            "tagName": self.tag_name,
            "attributes": dict(self.attributes),
            "children": [
                c.to_dict() if isinstance(c, XMLElement) else c
                for c in self.children
            ],
        }
