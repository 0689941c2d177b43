"""Tests for element → component rendering and the lossy reverse."""

from __future__ import annotations

from componentsmith.markup.approximate import (
    extract_components,
    extract_tag,
    render_component_as_xml,
    to_kebab_case,
)
from componentsmith.markup.parser import parse_xml
from componentsmith.markup.renderer import (
    render_element_as_component,
    to_pascal_case,
)
from componentsmith.markup.schemas import XMLElement


class TestPascalCase:
    def test_kebab(self) -> None:
        assert to_pascal_case("user-card") == "UserCard"

    def test_single_word(self) -> None:
        assert to_pascal_case("button") == "Button"

    def test_segments_lowercased(self) -> None:
        assert to_pascal_case("NAV-BAR") == "NavBar"


class TestRenderElement:
    def test_empty_element(self) -> None:
        element = XMLElement(tag_name="spacer")
        assert render_element_as_component(element) == "<Spacer></Spacer>"

    def test_attributes_in_order(self) -> None:
        element = XMLElement(
            tag_name="user-card",
            attributes={"name": "Ada", "role": "admin"},
        )
        assert render_element_as_component(element) == (
            '<UserCard name="Ada" role="admin"></UserCard>'
        )

    def test_children_joined_by_newlines(self) -> None:
        root = parse_xml("<card><title>Hi</title><body/></card>")
        assert render_element_as_component(root) == (
            "<Card>\n<Title>\nHi\n</Title>\n<Body></Body>\n</Card>"
        )

    def test_quote_in_attribute_escaped(self) -> None:
        element = XMLElement(tag_name="a", attributes={"title": 'say "hi"'})
        assert render_element_as_component(element) == (
            '<A title="say &quot;hi&quot;"></A>'
        )

    def test_text_children(self) -> None:
        element = XMLElement(tag_name="label", children=["Name"])
        assert render_element_as_component(element) == (
            "<Label>\nName\n</Label>"
        )


class TestKebabCase:
    def test_pascal(self) -> None:
        assert to_kebab_case("UserCard") == "user-card"

    def test_single(self) -> None:
        assert to_kebab_case("Button") == "button"


class TestComponentToXml:
    def test_tags_rewritten(self) -> None:
        markup = '<UserCard name="Ada">\n<Avatar></Avatar>\n</UserCard>'
        assert render_component_as_xml(markup) == (
            '<user-card name="Ada">\n<avatar></avatar>\n</user-card>'
        )

    def test_lowercase_tags_untouched(self) -> None:
        assert render_component_as_xml("<div><Span/></div>") == (
            "<div><span/></div>"
        )

    def test_round_trip_keeps_tag_names_and_depth(self) -> None:
        original = parse_xml(
            '<user-card id="1"><nav-bar><menu-item/></nav-bar></user-card>'
        )
        rendered = render_element_as_component(original)
        back = parse_xml(render_component_as_xml(rendered))

        assert back.tag_name == original.tag_name
        assert back.depth() == original.depth()
        assert [e.tag_name for e in back.elements] == ["nav-bar"]
        assert back.attributes == {"id": "1"}


class TestExtractors:
    def test_extract_components_distinct_in_order(self) -> None:
        text = "<Card><Button /><Card.Body /><Button /></Card><div/>"
        assert extract_components(text) == ["Card", "Button"]

    def test_extract_components_none(self) -> None:
        assert extract_components("<div><span/></div>") == []

    def test_extract_tag(self) -> None:
        text = "<thinking>a</thinking> x <thinking>b\nc</thinking>"
        assert extract_tag(text, "thinking") == "a\nb\nc"

    def test_extract_tag_missing(self) -> None:
        assert extract_tag("nothing", "thinking") == ""
