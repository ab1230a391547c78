"""Patch engine tests."""

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st
from pydantic import ValidationError as PydanticValidationError

from uiforge.patch import (
    AddClassOp,
    InsertAfterOp,
    PatchEngine,
    PatchRequest,
    SourceView,
    TextEditOp,
    first_match,
)
from uiforge.patch.classes import add_class, remove_class, replace_class, split_tokens


def request(*ops: dict) -> PatchRequest:
    return PatchRequest.model_validate({"ops": list(ops)})


def add(jsx: str, class_name: str, file: str = "Card.tsx") -> dict:
    return {"op": "addClass", "file": file, "jsx": jsx, "className": class_name}


CLASS_TOKENS = st.from_regex(r"[a-z][a-z0-9\-:]{0,15}", fullmatch=True)


# ============================================================================
# Op Schema Tests
# ============================================================================

@pytest.mark.unit
class TestPatchRequest:
    """Patch request validation."""

    def test_ops_parsed_by_discriminator(self):
        req = request(
            add("<button", "bg-blue-500"),
            {"op": "replaceClass", "file": "X", "jsx": "<div", "from": "a", "to": "b"},
            {"op": "setAttribute", "file": "X", "jsx": "<img", "name": "alt", "value": "Logo"},
            {"op": "insertAfter", "file": "X", "targetJsx": "<h1", "code": "<hr />"},
            {"op": "textEdit", "file": "X", "find": "Save", "replace": "Send"},
        )
        assert [op.op for op in req.ops] == ["addClass", "replaceClass", "setAttribute", "insertAfter", "textEdit"]
        assert isinstance(req.ops[0], AddClassOp)
        assert req.ops[0].class_name == "bg-blue-500"
        assert req.ops[1].from_ == "a"
        assert isinstance(req.ops[3], InsertAfterOp)
        assert req.ops[3].locator == "<h1"
        assert isinstance(req.ops[4], TextEditOp)

    @pytest.mark.parametrize(
        "payload,locator",
        [
            (add("<button", "mb-2"), "<button"),
            ({"op": "removeClass", "file": "X", "jsx": "<div", "className": "p-4"}, "<div"),
            ({"op": "replaceClass", "file": "X", "jsx": "<h1", "from": "a", "to": "b"}, "<h1"),
            ({"op": "setAttribute", "file": "X", "jsx": "<img", "name": "alt", "value": "v"}, "<img"),
            ({"op": "insertAfter", "file": "X", "targetJsx": "<h1", "code": "<hr />"}, "<h1"),
            ({"op": "textEdit", "file": "X", "find": "Save", "replace": "Send"}, "Save"),
        ],
    )
    def test_every_op_has_a_locator(self, payload, locator):
        assert request(payload).ops[0].locator == locator

    @pytest.mark.parametrize("token", ["", "two words", 'q"uote', "b{race}", "<tag>", "back`tick"])
    def test_invalid_class_tokens(self, token):
        with pytest.raises(PydanticValidationError):
            request(add("<button", token))

    @pytest.mark.parametrize("name", ["1bad", "has space", "a=b", ""])
    def test_invalid_attribute_names(self, name):
        with pytest.raises(PydanticValidationError):
            request({"op": "setAttribute", "file": "X", "jsx": "<a", "name": name, "value": "v"})

    def test_namespaced_attribute_name(self):
        req = request({"op": "setAttribute", "file": "X", "jsx": "<svg", "name": "xlink:href", "value": "#a"})
        assert req.ops[0].name == "xlink:href"

    def test_unknown_op_rejected(self):
        with pytest.raises(PydanticValidationError):
            request({"op": "deleteNode", "file": "X", "jsx": "<a"})

    def test_extra_fields_rejected(self):
        with pytest.raises(PydanticValidationError):
            request({**add("<a", "b"), "force": True})

    def test_op_count_limits(self):
        with pytest.raises(PydanticValidationError):
            PatchRequest.model_validate({"ops": []})
        with pytest.raises(PydanticValidationError):
            PatchRequest.model_validate({"ops": [add("<a", "b")] * 101})
        with pytest.raises(PydanticValidationError):
            PatchRequest.model_validate({"ops": [add("<a", "b")] * 3}, context={"max_ops": 2})
        assert len(PatchRequest.model_validate({"ops": [add("<a", "b")] * 100}).ops) == 100


# ============================================================================
# Class Token Tests
# ============================================================================

@pytest.mark.unit
class TestClassTokens:
    """Order-preserving token list edits."""

    def test_add(self):
        assert add_class("a b", "c") == "a b c"
        assert add_class("a b", "a") == "a b"
        assert add_class("", "a") == "a"

    def test_remove_normalizes(self):
        assert remove_class("  a  b a   c ", "b") == "a c"
        assert remove_class("a", "a") == ""

    def test_replace(self):
        assert replace_class("a b c", "b", "x") == "a x c"
        assert replace_class("a b c", "b", "c") == "a c"
        assert replace_class("a b", "z", "x") == "a b"


@given(st.lists(CLASS_TOKENS, max_size=8), CLASS_TOKENS)
def test_add_class_idempotent(tokens, token):
    """Property test: adding a class twice equals adding it once."""
    value = " ".join(tokens)
    once = add_class(value, token)
    assert add_class(once, token) == once
    assert split_tokens(once).count(token) == 1


@given(st.lists(CLASS_TOKENS, max_size=8), CLASS_TOKENS, st.sampled_from([" ", "  ", "\t", "\n "]))
def test_remove_class_normalized(tokens, token, separator):
    """Property test: removal leaves no duplicates and no stray whitespace."""
    result = remove_class(separator + separator.join(tokens) + separator, token)
    parts = result.split(" ")
    assert result == result.strip()
    assert "  " not in result
    assert token not in split_tokens(result)
    if result:
        assert len(parts) == len(set(parts))


# ============================================================================
# Locator Tests
# ============================================================================

@pytest.mark.unit
class TestLocator:
    """First-match element location."""

    def test_pre_order_elements(self, card_source):
        view = SourceView(card_source)
        assert [view.tag_name(e) for e in view.elements] == ["div", "h1", "img", "button"]
        assert view.elements[2].self_closing
        assert view.elements[1].parent is view.elements[0]

    def test_opening_tag_match_first(self, card_source):
        view = SourceView(card_source)
        assert view.tag_name(first_match(view, "<button")) == "button"
        assert view.tag_name(first_match(view, 'className="text-xl"')) == "h1"

    def test_innermost_match_for_content(self, card_source):
        view = SourceView(card_source)
        assert view.tag_name(first_match(view, "Title")) == "h1"
        assert view.tag_name(first_match(view, "Save")) == "button"

    def test_no_match(self, card_source):
        assert first_match(SourceView(card_source), "<section") is None

    def test_attributes(self, card_source):
        view = SourceView(card_source)
        img = view.elements[2]
        assert [a.name for a in view.attributes(img)] == ["src"]
        assert view.attribute(img, "alt") is None
        assert view.line_indent(img.node) == "      "


# ============================================================================
# Engine Tests
# ============================================================================

@pytest.mark.unit
class TestAddClass:
    """addClass."""

    def test_adds_class_once(self, patch_engine, generated_button_source):
        result = patch_engine.apply(generated_button_source, request(add("<button", "bg-blue-500", "X")))

        assert result.success
        assert result.source.count("bg-blue-500") == 1
        assert result.diffs == ["X: addClass bg-blue-500 on <button>"]

        again = patch_engine.apply(result.source, request(add("<button", "bg-blue-500", "X")))
        assert again.source == result.source
        assert again.diffs == ["X: addClass bg-blue-500 on <button> (unchanged)"]

    def test_creates_missing_class_name(self, patch_engine, card_source):
        result = patch_engine.apply(card_source, request(add("<button", "bg-blue-500")))
        assert '<button type="submit" className="bg-blue-500">Save</button>' in result.source

    def test_self_closing_element(self, patch_engine, card_source):
        result = patch_engine.apply(card_source, request(add("<img", "rounded")))
        assert '<img src="/logo.png" className="rounded" />' in result.source

    def test_expression_string_and_static_template(self, patch_engine):
        source = 'const A = () => <div><p className={"a b"}>x</p><span className={`c`}>y</span></div>;\n'

        result = patch_engine.apply(source, request(add("<p", "z"), add("<span", "d")))

        assert result.success
        assert 'className={"a b z"}' in result.source
        assert "className={`c d`}" in result.source

    @pytest.mark.parametrize(
        "expression",
        ["{styles.box}", "{cn('a', active && 'b')}", "{`a ${b}`}"],
    )
    def test_dynamic_class_name_unsupported(self, patch_engine, expression):
        source = f"const A = () => <div className={expression}>x</div>;\n"

        result = patch_engine.apply(source, request(add("<div", "z")))

        assert not result.success
        assert result.diffs == []
        assert result.errors == ["Card.tsx: addClass - className is not a static string"]
        assert result.source == source

    @given(CLASS_TOKENS)
    @hypothesis_settings(max_examples=25, deadline=None)
    def test_idempotent_on_source(self, token):
        """Property test: repeating addClass leaves the class list unchanged."""
        source = 'const A = () => <div className="p-4 flex"><b>x</b></div>;\n'
        engine = PatchEngine()

        once = engine.apply(source, request(add("<div", token))).source
        twice = engine.apply(once, request(add("<div", token))).source

        assert once == twice
        view = SourceView(once)
        attr = view.attribute(view.elements[0], "className")
        assert view.text(attr.value).decode().strip('"').split().count(token) == 1


@pytest.mark.unit
class TestOtherOps:
    """removeClass, replaceClass, setAttribute, insertAfter, textEdit."""

    def test_remove_class_normalizes(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source, request({"op": "removeClass", "file": "X", "jsx": "<div", "className": "rounded"})
        )
        assert '<div className="p-4">' in result.source
        assert result.diffs == ["X: removeClass rounded on <div>"]

    def test_replace_class(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source,
            request({"op": "replaceClass", "file": "X", "jsx": "text-xl", "from": "text-xl", "to": "text-2xl"}),
        )
        assert '<h1 className="text-2xl">Title</h1>' in result.source
        assert result.diffs == ["X: replaceClass text-xl -> text-2xl on <h1>"]

    def test_set_attribute_new_and_existing(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source,
            request(
                {"op": "setAttribute", "file": "X", "jsx": "<img", "name": "alt", "value": "Logo"},
                {"op": "setAttribute", "file": "X", "jsx": "<button", "name": "type", "value": "button"},
            ),
        )
        assert '<img src="/logo.png" alt={"Logo"} />' in result.source
        assert '<button type={"button"}>Save</button>' in result.source
        assert result.diffs[0] == 'X: setAttribute alt={"Logo"} on <img>'

    def test_set_attribute_escapes_value(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source,
            request({"op": "setAttribute", "file": "X", "jsx": "<img", "name": "alt", "value": 'a "b" </img>'}),
        )
        assert 'alt={"a \\"b\\" </img>"}' in result.source

    def test_insert_after(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source,
            request({"op": "insertAfter", "file": "X", "targetJsx": "<h1", "code": '<p className="lead">Sub</p>'}),
        )
        assert '</h1>\n      <p className="lead">Sub</p>\n      <img' in result.source
        assert result.diffs == ["X: insertAfter <h1> (+27 chars)"]

    def test_text_edit(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source, request({"op": "textEdit", "file": "X", "find": "Save", "replace": "Send"})
        )
        assert ">Send</button>" in result.source
        assert result.diffs == ["X: textEdit 'Save' -> 'Send'"]


@pytest.mark.unit
class TestPartialFailure:
    """Failed ops are recorded and skipped."""

    def test_missing_target(self, patch_engine, card_source):
        result = patch_engine.apply(card_source, request(add("<section", "x")))

        assert result.success is False
        assert len(result.errors) == 1
        assert result.diffs == []
        assert result.source == card_source
        assert "target not found" in result.errors[0]

    def test_missing_text(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source, request({"op": "textEdit", "file": "X", "find": "Nope", "replace": "x"})
        )
        assert result.errors == ["X: textEdit - target not found: 'Nope'"]

    def test_later_ops_still_run(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source,
            request(add("<section", "x"), add("<h1", "mb-2"), add("<nav", "y")),
        )

        assert not result.success
        assert len(result.errors) == 2
        assert result.diffs == ["Card.tsx: addClass mb-2 on <h1>"]
        assert 'className="text-xl mb-2"' in result.source

    def test_ops_see_previous_edits(self, patch_engine, card_source):
        result = patch_engine.apply(
            card_source,
            request(
                {"op": "textEdit", "file": "X", "find": "<h1", "replace": "<h2"},
                {"op": "textEdit", "file": "X", "find": "</h1>", "replace": "</h2>"},
                add("<h2", "font-bold"),
            ),
        )
        assert result.success
        assert '<h2 className="text-xl font-bold">Title</h2>' in result.source
