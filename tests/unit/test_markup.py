"""Markup sanitizer, parser and feature extraction tests."""

import pytest
from hypothesis import given, strategies as st

from uiforge.core import ParseError
from uiforge.markup import (
    Bounds,
    MarkupNode,
    extract_features,
    load_markup,
    parse_markup,
    parse_number,
    sanitize_markup,
)


# ============================================================================
# Sanitizer Tests
# ============================================================================

@pytest.mark.unit
class TestSanitizer:
    """Allow-list sanitizing."""

    @pytest.mark.parametrize(
        "markup",
        [
            '<svg><script>alert(1)</script></svg>',
            '<svg><foreignObject><div/></foreignObject></svg>',
            '<svg><rect onclick="alert(1)"/></svg>',
            '<svg><image href="javascript:alert(1)"/></svg>',
            '<svg><rect fill=" JavaScript :x"/></svg>',
        ],
    )
    def test_unsafe_markup_rejected(self, markup):
        with pytest.raises(ParseError, match="Unsafe"):
            sanitize_markup(markup)

    def test_doctype_rejected(self):
        markup = '<!DOCTYPE svg [<!ENTITY x "boom">]><svg><text>&x;</text></svg>'
        with pytest.raises(ParseError, match="DOCTYPE"):
            sanitize_markup(markup)

    @pytest.mark.parametrize("markup", ["", "   ", "<svg><rect></svg>", "not markup"])
    def test_malformed_markup_rejected(self, markup):
        with pytest.raises(ParseError):
            sanitize_markup(markup)

    def test_unsupported_root_rejected(self):
        with pytest.raises(ParseError, match="root"):
            sanitize_markup("<html><body/></html>")

    def test_depth_limit(self):
        nested = "<svg><g><g><g><rect/></g></g></g></svg>"
        with pytest.raises(ParseError, match="depth"):
            sanitize_markup(nested, max_depth=3)
        assert "<rect" in sanitize_markup(nested, max_depth=5)

    def test_non_rendering_elements_dropped_with_subtree(self):
        clean = sanitize_markup(
            '<svg><desc><rect/></desc><defs><text>hidden</text></defs>'
            '<clipPath><rect/></clipPath><circle r="2"/></svg>'
        )
        assert "desc" not in clean
        assert "hidden" not in clean
        assert "<rect" not in clean
        assert "<circle" in clean

    def test_unknown_wrapper_keeps_allowed_content(self):
        root = load_markup('<svg><a href="x"><text>t</text></a></svg>')

        text = next(root.elements())
        assert text.name == "text"
        assert text.text_content() == "t"
        assert "href" not in text.attributes

    @pytest.mark.parametrize("wrapper", ["switch", "symbol", "div", "span"])
    def test_unknown_wrappers_unwrapped_in_place(self, wrapper):
        root = load_markup(
            f'<svg><rect id="a"/><{wrapper}><g><rect id="b"/></g><text>t</text></{wrapper}>'
            '<circle id="c"/></svg>'
        )

        assert [n.name for n in root.elements()] == ["rect", "g", "text", "circle"]
        assert [n.attributes.get("id") for n in root.descendants()] == ["a", None, "b", None, "c"]

    def test_svg_attribute_case_preserved(self):
        root = load_markup('<svg viewBox="0 0 10 10" width="10"><rect/></svg>')
        assert dict(root.attributes) == {"viewBox": "0 0 10 10", "width": "10"}

    def test_dropped_element_keeps_tail_text(self):
        root = parse_markup(sanitize_markup("<svg><text>Hello <title>x</title>world</text></svg>"))
        text = next(root.elements())
        assert text.text_content() == "Hello world"

    def test_unknown_attributes_dropped(self):
        clean = sanitize_markup('<svg><rect class="x" style="fill:red" width="10"/></svg>')
        assert "class" not in clean
        assert "style" not in clean
        assert 'width="10"' in clean

    def test_namespaces_removed(self, button_svg):
        clean = sanitize_markup(button_svg)
        assert "xmlns" not in clean
        assert clean.startswith("<svg")

    def test_image_href_policy(self):
        markup = (
            '<svg xmlns:xlink="http://www.w3.org/1999/xlink">'
            '<image xlink:href="logo.png" width="10" height="10"/>'
            '<image href="https://evil.example/x.png"/>'
            '<image href="data:image/png;base64,AAAA"/>'
            '<rect href="logo.png"/>'
            '</svg>'
        )
        root = load_markup(markup)
        first, second, third, rect = root.elements()
        assert first.attributes["href"] == "logo.png"
        assert "href" not in second.attributes
        assert third.attributes["href"].startswith("data:image/png")
        assert "href" not in rect.attributes


# ============================================================================
# Parser Tests
# ============================================================================

@pytest.mark.unit
class TestParser:
    """Attribute tree construction."""

    def test_tree_preserves_document_order(self):
        root = parse_markup('<svg><rect id="a"/><g><circle id="b"/></g><text id="c">x</text></svg>')
        assert root.name == "svg"
        assert [n.attributes.get("id") for n in root.descendants()] == ["a", None, "b", "c"]

    def test_text_runs_interleaved(self):
        root = parse_markup('<svg><text>Hello <tspan>big</tspan> world</text></svg>')
        text = next(root.elements())
        assert [c.type for c in text.children] == ["text", "element", "text"]
        assert text.direct_text() == "Hello "
        assert text.text_content() == "Hello big world"

    def test_whitespace_only_text_dropped(self):
        root = parse_markup("<svg>\n  <rect/>\n  <text>  </text>\n</svg>")
        assert [c.type for c in root.children] == ["element", "element"]
        assert root.children[1].children == ()

    def test_attributes_are_read_only(self):
        root = parse_markup('<svg width="10"/>')
        with pytest.raises(TypeError):
            root.attributes["width"] = "20"

    def test_node_defaults(self):
        node = MarkupNode(type="text", value="x")
        assert dict(node.attributes) == {}
        assert node.children == ()

    def test_syntax_error(self):
        with pytest.raises(ParseError, match="Invalid markup"):
            parse_markup("<svg>")


# ============================================================================
# Feature Extraction Tests
# ============================================================================

@pytest.mark.unit
class TestFeatures:
    """Flat feature stream."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("24", 24.0),
            ("24px", 24.0),
            ("  .5em", 0.5),
            ("-3.25", -3.25),
            ("1e2", 100.0),
            ("auto", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_number(self, value, expected):
        assert parse_number(value) == expected

    def test_pre_order(self, button_svg):
        features = extract_features(load_markup(button_svg)).to_list()
        assert [f.type for f in features] == ["svg", "g", "rect", "text"]
        assert features[3].text == "Submit"

    def test_stream_is_restartable(self, form_svg):
        stream = extract_features(load_markup(form_svg))
        assert list(stream) == list(stream)
        assert len(list(stream)) == 6

    def test_bounds_need_positive_size(self):
        features = extract_features(
            load_markup('<svg><rect x="2" y="3" width="10" height="5"/><rect width="0" height="5"/></svg>')
        ).to_list()
        assert features[1].bounds == Bounds(x=2.0, y=3.0, width=10.0, height=5.0)
        assert features[2].bounds is None

    def test_numeric_attribute(self):
        feature = extract_features(load_markup('<svg><text font-size="18px">a</text></svg>')).to_list()[1]
        assert feature.number("font-size") == 18.0
        assert feature.number("missing") is None

    def test_to_dict(self):
        feature = extract_features(
            load_markup('<svg><rect width="4" height="2" fill="#000"/></svg>')
        ).to_list()[1]
        data = feature.to_dict()
        assert data["type"] == "rect"
        assert data["attributes"]["fill"] == "#000"
        assert data["bounds"] == {"x": 0.0, "y": 0.0, "width": 4.0, "height": 2.0}
        assert "text" not in data


@given(st.from_regex(r"[+-]?[0-9]{1,6}(\.[0-9]{1,3})?", fullmatch=True), st.sampled_from(["", "px", "em", "%"]))
def test_parse_number_prefix_property(number, unit):
    """Property test: the numeric prefix is read regardless of the unit suffix."""
    assert parse_number(number + unit) == float(number)
