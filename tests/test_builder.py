"""Tests for builder helpers that replace nested schema declarations."""

import pytest

from schemacraft import (
    AnyComponent,
    BooleanSchema,
    CollectionBuilder,
    Conditional,
    First,
    JsonInteger,
    JsonObject,
    JsonString,
    ObjectBuilder,
    OptionalComponent,
    Passthrough,
    Second,
    Valid,
    array_of,
    build_block,
    build_either,
    build_optional,
    collect,
    decorated,
    mapped,
    object_of,
    optional,
    prop,
)
from schemacraft.builder import accumulate


def test_product_declaration():
    """Test the catalog product example end to end."""
    product = object_of(
        prop("productId", JsonInteger().description("The unique identifier for a product")),
        prop("productName", JsonString().description("Name of the product")),
    ).description("A product from Acme's catalog")

    assert product.schema() == {
        "type": "object",
        "properties": {
            "productId": {
                "type": "integer",
                "description": "The unique identifier for a product",
            },
            "productName": {"type": "string", "description": "Name of the product"},
        },
        "required": ["productId", "productName"],
        "description": "A product from Acme's catalog",
    }
    parsed = product.validate({"productId": 1, "productName": "Anvil"})
    assert parsed.productName == "Anvil"


def test_build_block_bool():
    assert build_block(True) == BooleanSchema(True)
    assert build_block(False).schema() is False
    component = JsonString()
    assert build_block(component) is component
    with pytest.raises(TypeError):
        build_block("string")


def test_build_optional():
    assert build_optional(None) == OptionalComponent(None)
    assert build_optional(JsonString()).schema() == {"type": "string"}


def test_build_either_picks_branch():
    """Test that a declaration-time condition selects one tagged branch."""
    chosen = build_either(True, JsonInteger(), JsonString())
    assert isinstance(chosen, Conditional)
    assert chosen.schema() == {"type": "integer"}
    assert chosen.parse(1) == Valid(First(1))

    other = build_either(False, JsonInteger(), JsonString())
    assert other.schema() == {"type": "string"}
    assert other.parse("a") == Valid(Second("a"))


def test_collect_preserves_order_and_erases():
    items = collect(JsonInteger(), JsonString())
    assert all(isinstance(item, AnyComponent) for item in items)
    assert [item.schema() for item in items] == [{"type": "integer"}, {"type": "string"}]


def test_accumulate_is_persistent():
    first = accumulate((), JsonInteger())
    second = accumulate(first, JsonString())
    assert len(first) == 1
    assert len(second) == 2


def test_collection_builder_start_and_append():
    """Test that each append returns a new erased collection and leaves the old one intact."""
    builder = CollectionBuilder()
    started = builder.start(JsonInteger())
    extended = builder.append(started, JsonString())
    assert len(started) == 1
    assert [item.schema() for item in extended] == [{"type": "integer"}, {"type": "string"}]
    assert all(isinstance(item, AnyComponent) for item in extended)

    raw = CollectionBuilder(passthrough=True).start(JsonInteger().map(str))
    assert isinstance(raw[0].inner, Passthrough)
    assert raw[0].parse(3) == Valid(3)


def test_collect_passthrough():
    items = collect(JsonInteger().map(str), passthrough=True)
    assert isinstance(items[0].inner, Passthrough)
    assert items[0].parse(3) == Valid(3)


def test_object_builder_incremental():
    builder = ObjectBuilder(additional_properties=False)
    builder.property("id", JsonInteger()).property("nick", JsonString(), optional=True)
    assert len(builder) == 2
    component = builder.build()
    assert isinstance(component, JsonObject)
    assert component.required_keys == ["id"]
    assert component.schema()["additionalProperties"] is False


def test_object_builder_rejects_duplicates():
    builder = ObjectBuilder().property("id", JsonInteger())
    with pytest.raises(ValueError, match="Duplicate property key"):
        builder.property("id", JsonString())


def test_functional_wrappers():
    assert decorated(JsonString(), title="T").schema() == {"type": "string", "title": "T"}
    twice = decorated(decorated(JsonString(), title="T"), description="D")
    assert twice.schema() == {"type": "string", "title": "T", "description": "D"}
    assert mapped(JsonString(), len).parse("abc") == Valid(3)
    assert optional(JsonString()).is_optional


def test_array_of_kwargs():
    assert array_of(JsonString(), min_items=1).schema() == {
        "type": "array",
        "items": {"type": "string"},
        "minItems": 1,
    }
