"""
Tests for the selector model and the YAML/JSON loaders.
"""

import pytest

from phone_selector.selectors.errors import SelectorSchemaError
from phone_selector.selectors.loader import load_selector_file, load_selector_from_json
from phone_selector.selectors.schema import RelativeDirection, Selector, selector_from_dict


class TestSelectorFromDict:
    def test_flat_fields(self):
        selector = selector_from_dict(
            {"text": "Save", "id": "id/save", "width": 100, "tolerance": 3, "enabled": True}
        )
        assert selector == Selector(text="Save", id="id/save", width=100, tolerance=3, enabled=True)

    def test_string_shorthand(self):
        assert selector_from_dict("Login") == Selector(text="Login")

    def test_nested_anchor_shorthand(self):
        selector = selector_from_dict({"text": "Login", "below": "Header"})
        assert selector.below == Selector(text="Header")

    def test_relative_keys(self):
        selector = selector_from_dict(
            {
                "id": "field",
                "rightOf": {"text": "Email"},
                "containsDescendants": ["a", {"id": "b"}],
            }
        )
        assert selector.right_of == Selector(text="Email")
        assert selector.contains_descendants == [Selector(text="a"), Selector(id="b")]

    def test_index_is_normalized_to_string(self):
        assert selector_from_dict({"text": "Item", "index": -1}).index == "-1"
        assert selector_from_dict({"text": "Item", "index": "2"}).index == "2"

    def test_numeric_text_is_stringified(self):
        assert selector_from_dict({"text": 42}).text == "42"

    def test_errors_are_collected(self):
        with pytest.raises(SelectorSchemaError) as info:
            selector_from_dict(
                {
                    "txt": "typo",
                    "width": -1,
                    "enabled": "yes",
                    "below": {"height": True},
                },
                source="login.yaml",
            )
        errors = info.value.errors
        assert "selector: unknown field 'txt'" in errors
        assert "selector.width: must be a non-negative integer" in errors
        assert "selector.enabled: must be true or false" in errors
        assert "selector.below.height: must be a non-negative integer" in errors
        assert "login.yaml" in str(info.value)

    def test_non_mapping(self):
        with pytest.raises(SelectorSchemaError):
            selector_from_dict(["text", "Login"])

    def test_descendants_must_be_list(self):
        with pytest.raises(SelectorSchemaError) as info:
            selector_from_dict({"containsDescendants": "x"})
        assert info.value.errors == ["selector.containsDescendants: must be a list"]

    def test_schema_error_is_value_error(self):
        with pytest.raises(ValueError):
            selector_from_dict({"unknown": 1})


class TestSelectorHelpers:
    def test_relative_anchor_precedence(self):
        selector = Selector(text="x", above=Selector(text="a"), below=Selector(text="b"))
        anchor, direction = selector.relative_anchor()
        assert anchor.text == "b"
        assert direction is RelativeDirection.BELOW

    def test_no_anchor(self):
        assert Selector(text="x").relative_anchor() == (None, None)

    def test_base_drops_relative_and_index(self):
        selector = Selector(
            text="x",
            css="Button",
            index="1",
            enabled=True,
            child_of=Selector(text="p"),
            contains_descendants=[Selector(text="c")],
        )
        base = selector.base()
        assert base == Selector(text="x", enabled=True)
        assert selector.child_of is not None

    def test_is_empty(self):
        assert Selector().is_empty()
        assert not Selector(enabled=False).is_empty()
        assert not Selector(height=10).is_empty()
        assert not Selector(contains_descendants=[Selector(text="c")]).is_empty()

    def test_describe(self):
        selector = Selector(
            text="Login",
            enabled=True,
            index="0",
            below=Selector(text="Header"),
        )
        assert selector.describe() == (
            'text="Login", enabled=true, index=0, below=(text="Header")'
        )

    def test_describe_size_and_descendants(self):
        selector = Selector(
            width=100, tolerance=2, contains_descendants=[Selector(id="a"), Selector(id="b")]
        )
        assert selector.describe() == (
            'width=100, tolerance=2, containsDescendants=[(id="a"), (id="b")]'
        )

    def test_describe_empty(self):
        assert Selector().describe() == "<empty selector>"

    def test_describe_cycle(self):
        selector = Selector(text="x")
        selector.below = selector
        assert selector.describe() == 'text="x", below=(<cycle>)'


class TestLoaders:
    def test_yaml_file(self, tmp_path):
        path = tmp_path / "login.yaml"
        path.write_text(
            "text: Login\n"
            "below:\n"
            "  text: Header\n"
            "index: 0\n"
            "enabled: true\n",
            encoding="utf-8",
        )
        selector = load_selector_file(path)
        assert selector == Selector(
            text="Login", index="0", enabled=True, below=Selector(text="Header")
        )

    def test_yaml_flow_style(self, tmp_path):
        path = tmp_path / "flow.yaml"
        path.write_text("{id: submit, leftOf: {text: Cancel}}\n", encoding="utf-8")
        selector = load_selector_file(str(path))
        assert selector.left_of == Selector(text="Cancel")

    def test_yaml_plain_string(self, tmp_path):
        path = tmp_path / "text.yaml"
        path.write_text("Continue\n", encoding="utf-8")
        assert load_selector_file(path) == Selector(text="Continue")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SelectorSchemaError, match="Empty"):
            load_selector_file(path)

    def test_broken_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("text: [unclosed\n", encoding="utf-8")
        with pytest.raises(SelectorSchemaError, match="Failed to parse YAML"):
            load_selector_file(path)

    def test_json(self):
        selector = load_selector_from_json('{"text": "OK", "childOf": {"id": "dialog"}}')
        assert selector.child_of == Selector(id="dialog")

    def test_invalid_json(self):
        with pytest.raises(SelectorSchemaError, match="Invalid JSON"):
            load_selector_from_json("{text:")
