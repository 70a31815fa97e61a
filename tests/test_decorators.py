"""Tests for metadata decoration, mapping, optional and passthrough wrappers."""

import pytest
from pydantic import ValidationError

from schemacraft import (
    BooleanSchema,
    Decorated,
    Invalid,
    JsonInteger,
    JsonObject,
    JsonString,
    MISSING,
    Metadata,
    OptionalComponent,
    Passthrough,
    TypeMismatch,
    Valid,
)


def test_description_added_to_schema():
    component = JsonInteger().description("The unique identifier for a product")
    assert component.schema() == {
        "type": "integer",
        "description": "The unique identifier for a product",
    }


def test_decoration_keeps_parse_behavior():
    """Test that decorated parse results equal the inner component's results."""
    inner = JsonInteger(minimum=0)
    component = inner.title("Count").description("How many").default(0).examples(1, 2)
    for value in (0, 5, -1, "x", None):
        assert component.parse(value) == inner.parse(value)


def test_chained_metadata_merges_into_one_wrapper():
    """Test that chaining decorations does not clobber earlier keys."""
    component = JsonString().title("Name").description("Full name")
    assert isinstance(component, Decorated)
    assert isinstance(component.inner, JsonString)
    assert component.schema() == {"type": "string", "title": "Name", "description": "Full name"}


def test_explicit_reset_replaces_same_key():
    component = JsonString().description("old").description("new")
    assert component.schema()["description"] == "new"


def test_reset_through_wrappers_replaces_same_key():
    """Test that the last fluent setter wins even when wrappers sit in between."""
    direct = JsonString().description("a").description("b")
    through_map = JsonString().description("a").map(str.upper).description("b")
    through_optional = JsonString().description("a").optional().description("b")
    through_erase = JsonString().description("a").erase().description("b")
    for component in (direct, through_map, through_optional, through_erase):
        assert component.schema() == {"type": "string", "description": "b"}
    assert through_map.parse("x") == Valid("X")
    assert through_optional.is_optional


def test_metadata_never_overrides_inner_keys():
    """Test that metadata cannot replace a key the inner schema already set."""
    inner = Decorated(JsonString(), Metadata(title="Inner"))
    outer = Decorated(inner, Metadata(title="Outer", description="Added"))
    assert outer.schema() == {"type": "string", "title": "Inner", "description": "Added"}


def test_null_default_is_rendered():
    """Test that an explicit None default renders as null while unset keys are omitted."""
    assert JsonString().optional().default(None).schema() == {"type": "string", "default": None}
    assert "default" not in JsonString().title("x").schema()


def test_deprecated_flag():
    assert JsonString().deprecated().schema() == {"type": "string", "deprecated": True}


def test_metadata_rejects_unknown_keys_and_non_json_defaults():
    with pytest.raises(ValidationError):
        Metadata(summary="nope")
    with pytest.raises(ValidationError):
        Metadata(default=object())


def test_decorating_boolean_schema():
    assert BooleanSchema(True).description("anything").schema() == {"description": "anything"}
    assert BooleanSchema(False).title("nothing").schema() == {"not": {}, "title": "nothing"}


def test_map_transforms_output():
    component = JsonString().map(str.upper)
    assert component.schema() == {"type": "string"}
    assert component.parse("abc") == Valid("ABC")


def test_map_propagates_inner_failure_unchanged():
    component = JsonString().map(str.upper)
    assert component.parse(1) == JsonString().parse(1)


def test_map_transform_errors_become_issues():
    """Test that a failing transform yields a 'map' constraint violation, not an exception."""
    component = JsonString().map(int)
    result = component.parse("not a number")
    assert isinstance(result, Invalid)
    assert result.error.rule == "map"
    assert component.parse("42") == Valid(42)


def test_optional_schema_unchanged():
    assert JsonString().optional().schema() == {"type": "string"}


def test_optional_absent_is_none():
    component = OptionalComponent(JsonString())
    assert component.parse(MISSING) == Valid(None)
    assert component.parse("x") == Valid("x")
    assert component.parse(3).error == TypeMismatch(expected="string", actual="integer")


def test_empty_optional_contributes_nothing():
    component = OptionalComponent(None)
    assert component.schema() == {}
    assert component.parse({"any": "thing"}) == Valid(None)


def test_optional_marks_property_optional():
    """Test that the container records optionality from an optional component."""
    from schemacraft import Property

    component = JsonObject((Property("nick", JsonString().optional().description("Nickname")),))
    assert "required" not in component.schema()
    assert component.parse({}).value.nick is None


def test_passthrough_returns_raw_input():
    component = Passthrough(JsonInteger())
    assert component.parse(3.0) == Valid(3.0)
    assert component.parse("x").error == TypeMismatch(expected="integer", actual="string")
