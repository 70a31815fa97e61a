"""Leaf components: strings, numbers, booleans, null, enums and constants.

Each primitive checks the JSON kind first and then its refinements, so a
wrong kind is always reported as a type mismatch rather than as a
constraint violation.
"""

import copy
import enum
import math
import re
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple, Type, Union

from schemacraft.contracts import (
    ConstraintViolation,
    ParseResult,
    TypeMismatch,
    Valid,
    fail,
)
from schemacraft.kernel.component import (
    SchemaComponent,
    SchemaValue,
    is_finite_number,
    json_equal,
    json_kind,
)

Number = Union[int, float]


@dataclass(frozen=True)
class JsonString(SchemaComponent[str]):
    """A JSON string with optional length, pattern and format refinements.

    ``format`` is rendered as an annotation only; it is not checked.
    """
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    _compiled: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.min_length is not None and self.min_length < 0:
            raise ValueError(f"min_length must be >= 0, got {self.min_length}")
        if self.max_length is not None and self.max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {self.max_length}")
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError(
                f"min_length ({self.min_length}) exceeds max_length ({self.max_length})"
            )
        if self.pattern is not None:
            try:
                compiled = re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern '{self.pattern}': {e}") from e
            object.__setattr__(self, "_compiled", compiled)

    def schema(self) -> SchemaValue:
        rendered: Dict[str, Any] = {"type": "string"}
        if self.min_length is not None:
            rendered["minLength"] = self.min_length
        if self.max_length is not None:
            rendered["maxLength"] = self.max_length
        if self.pattern is not None:
            rendered["pattern"] = self.pattern
        if self.format is not None:
            rendered["format"] = self.format
        return rendered

    def parse(self, value: Any) -> ParseResult[str]:
        if not isinstance(value, str):
            return fail(TypeMismatch(expected="string", actual=json_kind(value)))
        if self.min_length is not None and len(value) < self.min_length:
            return fail(ConstraintViolation(
                rule="minLength",
                detail=f"length {len(value)} is shorter than {self.min_length}",
            ))
        if self.max_length is not None and len(value) > self.max_length:
            return fail(ConstraintViolation(
                rule="maxLength",
                detail=f"length {len(value)} is longer than {self.max_length}",
            ))
        if self._compiled is not None and self._compiled.search(value) is None:
            return fail(ConstraintViolation(
                rule="pattern",
                detail=f"'{value}' does not match '{self.pattern}'",
            ))
        return Valid(value)


@dataclass(frozen=True)
class _NumericBounds:
    """Range refinements shared by integers and numbers."""
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    exclusive_minimum: Optional[Number] = None
    exclusive_maximum: Optional[Number] = None
    multiple_of: Optional[Number] = None

    def _validate_bounds(self) -> None:
        for name in ("minimum", "maximum", "exclusive_minimum", "exclusive_maximum", "multiple_of"):
            bound = getattr(self, name)
            if bound is not None and not is_finite_number(bound):
                raise ValueError(f"{name} must be a finite number, got {bound!r}")
        if self.multiple_of is not None and self.multiple_of <= 0:
            raise ValueError(f"multiple_of must be > 0, got {self.multiple_of}")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(f"minimum ({self.minimum}) exceeds maximum ({self.maximum})")

    def _render_bounds(self, rendered: Dict[str, Any]) -> Dict[str, Any]:
        if self.minimum is not None:
            rendered["minimum"] = self.minimum
        if self.maximum is not None:
            rendered["maximum"] = self.maximum
        if self.exclusive_minimum is not None:
            rendered["exclusiveMinimum"] = self.exclusive_minimum
        if self.exclusive_maximum is not None:
            rendered["exclusiveMaximum"] = self.exclusive_maximum
        if self.multiple_of is not None:
            rendered["multipleOf"] = self.multiple_of
        return rendered

    def _check_bounds(self, value: Number) -> Optional[ConstraintViolation]:
        if self.minimum is not None and value < self.minimum:
            return ConstraintViolation(rule="minimum", detail=f"{value} is less than {self.minimum}")
        if self.maximum is not None and value > self.maximum:
            return ConstraintViolation(rule="maximum", detail=f"{value} is greater than {self.maximum}")
        if self.exclusive_minimum is not None and value <= self.exclusive_minimum:
            return ConstraintViolation(
                rule="exclusiveMinimum",
                detail=f"{value} is not greater than {self.exclusive_minimum}",
            )
        if self.exclusive_maximum is not None and value >= self.exclusive_maximum:
            return ConstraintViolation(
                rule="exclusiveMaximum",
                detail=f"{value} is not less than {self.exclusive_maximum}",
            )
        if self.multiple_of is not None and not _is_multiple(value, self.multiple_of):
            return ConstraintViolation(
                rule="multipleOf",
                detail=f"{value} is not a multiple of {self.multiple_of}",
            )
        return None


def _is_multiple(value: Number, divisor: Number) -> bool:
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    try:
        quotient = value / divisor
    except OverflowError:
        quotient = math.inf
    if not math.isfinite(quotient):
        return Fraction(value) % Fraction(divisor) == 0
    return abs(quotient - round(quotient)) < 1e-9


@dataclass(frozen=True)
class JsonInteger(_NumericBounds, SchemaComponent[int]):
    """A JSON integer. Integral floats such as ``3.0`` parse to ``int``; booleans never do."""

    def __post_init__(self):
        self._validate_bounds()

    def schema(self) -> SchemaValue:
        return self._render_bounds({"type": "integer"})

    def parse(self, value: Any) -> ParseResult[int]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return fail(TypeMismatch(expected="integer", actual=json_kind(value)))
        if isinstance(value, float):
            if not is_finite_number(value) or not value.is_integer():
                return fail(TypeMismatch(expected="integer", actual="number"))
            value = int(value)
        issue = self._check_bounds(value)
        if issue is not None:
            return fail(issue)
        return Valid(value)


@dataclass(frozen=True)
class JsonNumber(_NumericBounds, SchemaComponent[float]):
    """A JSON number (integer or float). NaN and infinities are rejected."""

    def __post_init__(self):
        self._validate_bounds()

    def schema(self) -> SchemaValue:
        return self._render_bounds({"type": "number"})

    def parse(self, value: Any) -> ParseResult[float]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return fail(TypeMismatch(expected="number", actual=json_kind(value)))
        if not is_finite_number(value):
            return fail(ConstraintViolation(rule="finite", detail=f"{value} is not a finite number"))
        issue = self._check_bounds(value)
        if issue is not None:
            return fail(issue)
        return Valid(value)


@dataclass(frozen=True)
class JsonBoolean(SchemaComponent[bool]):
    """A JSON boolean."""

    def schema(self) -> SchemaValue:
        return {"type": "boolean"}

    def parse(self, value: Any) -> ParseResult[bool]:
        if not isinstance(value, bool):
            return fail(TypeMismatch(expected="boolean", actual=json_kind(value)))
        return Valid(value)


@dataclass(frozen=True)
class JsonNull(SchemaComponent[None]):
    """JSON null."""

    def schema(self) -> SchemaValue:
        return {"type": "null"}

    def parse(self, value: Any) -> ParseResult[None]:
        if value is not None:
            return fail(TypeMismatch(expected="null", actual=json_kind(value)))
        return Valid(None)


@dataclass(frozen=True)
class JsonEnum(SchemaComponent[Any]):
    """A value drawn from a fixed list of JSON values."""
    values: Tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError("JsonEnum requires at least one value")

    @classmethod
    def of(cls, enum_type: Type[enum.Enum]) -> SchemaComponent[Any]:
        """Enum over the values of a Python ``Enum`` class, parsing to its members."""
        return cls(tuple(member.value for member in enum_type)).map(enum_type)

    def schema(self) -> SchemaValue:
        return {"enum": copy.deepcopy(list(self.values))}

    def parse(self, value: Any) -> ParseResult[Any]:
        for candidate in self.values:
            if json_equal(candidate, value):
                return Valid(value)
        return fail(ConstraintViolation(
            rule="enum",
            detail=f"{value!r} is not one of {list(self.values)!r}",
        ))


@dataclass(frozen=True)
class JsonConst(SchemaComponent[Any]):
    """Exactly one JSON value."""
    value: Any

    def schema(self) -> SchemaValue:
        return {"const": copy.deepcopy(self.value)}

    def parse(self, value: Any) -> ParseResult[Any]:
        if not json_equal(self.value, value):
            return fail(ConstraintViolation(
                rule="const",
                detail=f"{value!r} is not {self.value!r}",
            ))
        return Valid(value)


@dataclass(frozen=True)
class JsonAny(SchemaComponent[Any]):
    """The empty schema: any present JSON value is accepted unchanged."""

    def schema(self) -> SchemaValue:
        return {}

    def parse(self, value: Any) -> ParseResult[Any]:
        if json_kind(value) not in _JSON_KINDS:
            return fail(TypeMismatch(expected="JSON value", actual=json_kind(value)))
        return Valid(value)


_JSON_KINDS = frozenset({"null", "boolean", "integer", "number", "string", "object", "array"})


@dataclass(frozen=True)
class BooleanSchema(SchemaComponent[Any]):
    """The literal ``true`` / ``false`` schema.

    ``true`` accepts every value, ``false`` rejects every value.
    """
    accept: bool

    def schema(self) -> SchemaValue:
        return self.accept

    def parse(self, value: Any) -> ParseResult[Any]:
        if not self.accept:
            return fail(ConstraintViolation(rule="false", detail="schema 'false' rejects every value"))
        return Valid(value)
