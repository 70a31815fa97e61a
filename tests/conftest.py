"""Pytest configuration and shared component fixtures.

No sys.path hacks - tests import from the installed schemacraft package.
"""

import pytest

from schemacraft import JsonArray, JsonInteger, JsonObject, JsonString, Property, ReferenceTable


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def person():
    """Object with one required integer and one optional string."""
    return JsonObject((
        Property("a", JsonInteger()),
        Property("b", JsonString(), optional=True),
    ))


@pytest.fixture
def catalog():
    """Object holding an array of strings under 'tags'."""
    return JsonObject((
        Property("name", JsonString()),
        Property("tags", JsonArray(JsonString())),
    ))


@pytest.fixture
def table():
    return ReferenceTable()
