"""Tests for the XMLElement model invariants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from componentsmith.markup.schemas import XMLElement


def test_empty_tag_rejected() -> None:
    with pytest.raises(PydanticValidationError):
        XMLElement(tag_name="")


def test_blank_text_children_dropped() -> None:
    element = XMLElement(tag_name="p", children=["  ", " hi ", "\n"])
    assert element.children == ["hi"]


def test_elements_and_text_views() -> None:
    inner = XMLElement(tag_name="b")
    element = XMLElement(tag_name="p", children=["a", inner, "c"])
    assert element.elements == [inner]
    assert element.text == "a c"


def test_children_owned_per_instance() -> None:
    first = XMLElement(tag_name="a")
    second = XMLElement(tag_name="a")
    first.children.append(XMLElement(tag_name="b"))
    assert second.children == []


def test_depth_of_deep_tree_built_in_code() -> None:
    root = XMLElement(tag_name="a")
    node = root
    for _ in range(1500):
        child = XMLElement(tag_name="a")
        node.children.append(child)
        node = child
    assert root.depth() == 1501
