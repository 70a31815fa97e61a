"""Performance sentinels (gated)."""

from __future__ import annotations

import pytest

from schemacraft import JsonArray, JsonInteger, JsonObject, JsonString, Property, one_of

MAX_WIDE_OBJECT_MS = 50.0
MAX_LONG_ARRAY_MS = 100.0


def _assert_budget(benchmark, max_ms: float) -> None:
    mean_ms = benchmark.stats.stats.mean * 1000.0
    assert mean_ms < max_ms, f"Mean {mean_ms:.2f} ms exceeded budget {max_ms:.2f} ms"


@pytest.mark.perf
def test_wide_object_sentinel(benchmark):
    component = JsonObject(tuple(Property(f"k{i}", JsonInteger()) for i in range(500)))
    value = {f"k{i}": i for i in range(500)}
    result = benchmark.pedantic(lambda: component.parse(value), rounds=5, iterations=1)

    assert result.ok
    _assert_budget(benchmark, MAX_WIDE_OBJECT_MS)


@pytest.mark.perf
def test_long_array_sentinel(benchmark):
    component = JsonArray(JsonObject((
        Property("id", JsonInteger()),
        Property("label", one_of(JsonInteger(), JsonString())),
    )))
    value = [{"id": i, "label": str(i)} for i in range(2000)]
    result = benchmark.pedantic(lambda: component.parse(value), rounds=5, iterations=1)

    assert result.ok
    _assert_budget(benchmark, MAX_LONG_ARRAY_MS)
