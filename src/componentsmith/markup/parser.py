"""Parse XML documents into ``XMLElement`` trees.

Uses the standard library DOM (expat underneath) so attribute order
and namespace declarations come through the way a browser DOM would
report them. Comments and processing instructions are dropped.
"""

from __future__ import annotations

import logging
from typing import Any
from xml.dom import Node
from xml.dom.minidom import Element, parseString
from xml.parsers.expat import ExpatError

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from componentsmith.constants import MAX_XML_DEPTH
from componentsmith.errors import ParseError, ValidationError
from componentsmith.markup.schemas import XMLElement

logger = logging.getLogger(__name__)

_TEXT_NODES = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)


def parse_xml(xml: str, schema: Any | None = None) -> XMLElement:
    """Parse ``xml`` into an element tree.

    Raises :class:`ParseError` when the input is not well-formed or
    nests deeper than ``MAX_XML_DEPTH`` elements.
    When ``schema`` (any type pydantic can validate) is given, the
    dumped tree is validated against it afterwards and
    :class:`ValidationError` is raised on mismatch, carrying the
    already-parsed tree.
    """
    if not isinstance(xml, str) or not xml.strip():
        raise ParseError("XML parsing error: empty document")

    try:
        document = parseString(xml.strip())
    except ExpatError as exc:
        logger.debug("event=xml_parse_failed error=%s", exc)
        raise ParseError(
            f"XML parsing error: {exc}",
            line=exc.lineno,
            column=exc.offset,
        ) from exc
    except ValueError as exc:
        # Lone surrogates cannot be encoded for expat
        logger.debug("event=xml_parse_failed error=%s", exc)
        raise ParseError(f"XML parsing error: {exc}") from exc

    if _dom_depth(document.documentElement) > MAX_XML_DEPTH:
        logger.debug("event=xml_too_deep limit=%d", MAX_XML_DEPTH)
        raise ParseError(
            f"XML parsing error: document nested deeper than "
            f"{MAX_XML_DEPTH} elements"
        )

    try:
        root = _element_to_model(document.documentElement)
    finally:
        document.unlink()

    if schema is not None:
        validate_element(root, schema)
    return root


def validate_element(element: XMLElement, schema: Any) -> Any:
    """Validate a parsed tree against ``schema``; return the result."""
    try:
        return TypeAdapter(schema).validate_python(element.model_dump())
    except PydanticValidationError as exc:
        raise ValidationError(
            f"XML validation failed: {exc.error_count()} error(s)",
            element=element,
            details=[dict(e) for e in exc.errors()],
        ) from exc


def _element_to_model(node: Element) -> XMLElement:
    children: list[XMLElement | str] = []
    for child in node.childNodes:
        if child.nodeType in _TEXT_NODES:
            text = child.data.strip()  # pyright: ignore[reportAttributeAccessIssue]
            if text:
                children.append(text)
        elif child.nodeType == Node.ELEMENT_NODE:
            children.append(_element_to_model(child))  # type: ignore[arg-type]

    return XMLElement(
        tag_name=node.tagName.lower(),
        attributes=dict(node.attributes.items()),
        children=children,
    )


def _dom_depth(node: Element) -> int:
    deepest = 0
    stack: list[tuple[Element, int]] = [(node, 1)]
    while stack:
        current, level = stack.pop()
        deepest = max(deepest, level)
        if deepest > MAX_XML_DEPTH:
            break
        stack.extend(
            (child, level + 1)  # type: ignore[misc]
            for child in current.childNodes
            if child.nodeType == Node.ELEMENT_NODE
        )
    return deepest
