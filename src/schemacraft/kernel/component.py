"""The component contract every schema node implements.

A component is an immutable description of a JSON shape. It renders itself
as a JSON Schema value with ``schema()`` and checks input with ``parse()``,
which returns ``Valid(output)`` or ``Invalid(issues)`` and never raises on
bad input.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Dict, Generic, TypeVar, Union

from schemacraft.contracts import ParseResult, unwrap

Output = TypeVar("Output")
NewOutput = TypeVar("NewOutput")

SchemaValue = Union[Dict[str, Any], bool]


class _Missing:
    """Marker for a value that is absent from its container (not JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()


def json_kind(value: Any) -> str:
    """Name the JSON kind of a Python value, as used in type mismatch issues."""
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return f"python {type(value).__name__}"


def json_equal(left: Any, right: Any) -> bool:
    """JSON value equality: booleans never equal numbers, 1 equals 1.0."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if set(left.keys()) != set(right.keys()):
            return False
        return all(json_equal(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    if type(left) is not type(right):
        return False
    return left == right


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and not math.isfinite(value))


class SchemaComponent(ABC, Generic[Output]):
    """Base class for all schema components.

    Subclasses are frozen dataclasses: once built, a component tree can be
    shared between threads and rendered or parsed any number of times.
    """

    @abstractmethod
    def schema(self) -> SchemaValue:
        """Render this component as a JSON Schema value.

        Returns a fresh value on every call; the result is a pure function
        of the component tree.
        """

    @abstractmethod
    def parse(self, value: Any) -> ParseResult[Output]:
        """Parse a JSON value into this component's output type."""

    @property
    def is_optional(self) -> bool:
        """True when the component accepts being absent from its container."""
        return False

    def validate(self, value: Any) -> Output:
        """Parse ``value`` and return the output, raising ``ParseFailure`` on rejection."""
        return unwrap(self.parse(value))

    # Decoration

    def title(self, title: str) -> "SchemaComponent[Output]":
        return self._decorate(title=title)

    def description(self, description: str) -> "SchemaComponent[Output]":
        return self._decorate(description=description)

    def default(self, value: Any) -> "SchemaComponent[Output]":
        return self._decorate(default=value)

    def examples(self, *values: Any) -> "SchemaComponent[Output]":
        return self._decorate(examples=list(values))

    def deprecated(self, deprecated: bool = True) -> "SchemaComponent[Output]":
        return self._decorate(deprecated=deprecated)

    def _decorate(self, **metadata: Any) -> "SchemaComponent[Output]":
        from schemacraft.kernel.decorators import Decorated, Metadata
        return Decorated(self, Metadata(**metadata))

    # Output transforms

    def map(self, transform: Callable[[Output], NewOutput]) -> "SchemaComponent[NewOutput]":
        from schemacraft.kernel.decorators import Mapped
        return Mapped(self, transform)

    def optional(self) -> "SchemaComponent[Output | None]":
        from schemacraft.kernel.decorators import OptionalComponent
        return OptionalComponent(self)

    def passthrough(self) -> "SchemaComponent[Any]":
        from schemacraft.kernel.decorators import Passthrough
        return Passthrough(self)

    def erase(self) -> "SchemaComponent[Output]":
        from schemacraft.kernel.erasure import AnyComponent
        return AnyComponent(self)

