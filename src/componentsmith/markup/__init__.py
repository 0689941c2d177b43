"""XML ↔ component markup conversion."""

from componentsmith.errors import ParseError, ValidationError
from componentsmith.markup.approximate import (
    extract_components,
    extract_tag,
    render_component_as_xml,
    to_kebab_case,
)
from componentsmith.markup.parser import parse_xml, validate_element
from componentsmith.markup.renderer import (
    render_element_as_component,
    to_pascal_case,
)
from componentsmith.markup.schemas import XMLElement

__all__ = [
    "ParseError",
    "ValidationError",
    "XMLElement",
    "extract_components",
    "extract_tag",
    "parse_xml",
    "render_component_as_xml",
    "render_element_as_component",
    "to_kebab_case",
    "to_pascal_case",
    "validate_element",
]
