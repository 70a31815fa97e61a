"""Tests for the reference table and $ref components."""

import threading

import pytest

from schemacraft import (
    DuplicateReferenceError,
    Invalid,
    JsonArray,
    JsonInteger,
    JsonObject,
    JsonReference,
    JsonString,
    Property,
    ReferenceTable,
    ReferenceTableLockedError,
    UnresolvedReference,
    UnresolvedReferenceError,
    Valid,
)


def test_reference_schema_is_pointer(table):
    ref = table.register("Name", JsonString())
    assert ref.schema() == {"$ref": "#/$defs/Name"}


def test_reference_parse_delegates(table):
    ref = table.register("Count", JsonInteger(minimum=0))
    assert ref.parse(3) == Valid(3)
    assert ref.parse(-1).error.rule == "minimum"


def test_reference_requires_registration(table):
    with pytest.raises(UnresolvedReferenceError, match="not registered"):
        JsonReference("Nope", table)


def test_deferred_unresolved_reference_fails_at_parse(table):
    ref = table.ref("Later", deferred=True)
    result = ref.parse(1)
    assert isinstance(result, Invalid)
    assert result.error == UnresolvedReference(ref="Later")


def test_duplicate_registration(table):
    table.register("A", JsonString())
    with pytest.raises(DuplicateReferenceError):
        table.register("A", JsonInteger())


def test_invalid_definition_name(table):
    with pytest.raises(ValueError, match="Definition name"):
        table.register("has space", JsonString())


def test_table_freezes_on_first_use(table):
    """Test that registering after the first render or parse fails fast."""
    ref = table.register("A", JsonString())
    assert not table.frozen
    ref.parse("x")
    assert table.frozen
    with pytest.raises(ReferenceTableLockedError):
        table.register("B", JsonString())


def test_table_freezes_on_render(table):
    ref = table.register("A", JsonString())
    ref.schema()
    with pytest.raises(ReferenceTableLockedError):
        table.register("B", JsonString())


def test_recursive_definition(table):
    """Test that a deferred self-reference supports recursive shapes."""
    node = JsonObject((
        Property("value", JsonInteger()),
        Property("children", JsonArray(table.ref("Node", deferred=True)), optional=True),
    ))
    root = table.register("Node", node)

    result = root.parse({"value": 1, "children": [{"value": 2, "children": []}, {"value": 3}]})
    assert result.ok
    assert result.value.children[0].value == 2

    bad = root.parse({"value": 1, "children": [{"value": "x"}]})
    assert bad.error.path == ("children", 0, "value")
    assert bad.error.inner.path == ("children", 0, "value")

    assert table.definitions() == {
        "Node": {
            "type": "object",
            "properties": {
                "value": {"type": "integer"},
                "children": {"type": "array", "items": {"$ref": "#/$defs/Node"}},
            },
            "required": ["value"],
        }
    }


def test_definitions_in_registration_order():
    table = ReferenceTable({"B": JsonString(), "A": JsonInteger()})
    assert table.names() == ["B", "A"]
    assert list(table.definitions()) == ["B", "A"]
    assert len(table) == 2
    assert "A" in table


def test_custom_definitions_key():
    table = ReferenceTable(definitions_key="definitions")
    assert table.register("X", JsonString()).schema() == {"$ref": "#/definitions/X"}


def test_concurrent_parse_after_freeze(table):
    """Test that many threads can parse through a frozen table."""
    ref = table.register("Count", JsonInteger())
    table.freeze()
    results = []

    def worker(n):
        results.append(ref.parse(n))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sorted(result.value for result in results) == list(range(16))
