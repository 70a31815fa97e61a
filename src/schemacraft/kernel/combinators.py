"""Combinators: objects, arrays, tuples and conditionals.

Combinators recurse into their children and prefix each child's issues
with the key or index they were found under, so a failure deep inside a
document reports its full location.

By default parsing stops at the first issue. With ``collect_errors=True``
objects, arrays and tuples keep going and report every issue; the first
reported issue is the same one fail-fast mode would return.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from schemacraft.contracts import (
    ArityMismatch,
    ConstraintViolation,
    IndexedError,
    Invalid,
    MissingKey,
    ParseIssue,
    ParseResult,
    TypeMismatch,
    UnionExhausted,
    Valid,
    fail,
)
from schemacraft.kernel.component import SchemaComponent, SchemaValue, json_equal, json_kind
from schemacraft.kernel.erasure import erase

A = TypeVar("A")
B = TypeVar("B")


class Record(Mapping):
    """Immutable parsed object with both mapping and attribute access.

    >>> record = Record({"id": 1, "name": None})
    >>> record.id, record["name"]
    (1, None)
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any]):
        object.__setattr__(self, "_fields", dict(fields))

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "_fields":
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Record is immutable")

    def __reduce__(self):
        return (Record, (self._fields,))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        return f"Record({inner})"

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._fields)


@dataclass(frozen=True)
class Property:
    """A named object member.

    A property is optional when ``optional`` is set or when its component
    is itself optional (``component.optional()``).
    """
    key: str
    component: SchemaComponent[Any]
    optional: bool = False

    def __post_init__(self):
        if not isinstance(self.key, str):
            raise TypeError(f"Property key must be a string, got {type(self.key).__name__}")
        if not isinstance(self.component, SchemaComponent):
            raise TypeError(
                f"Property '{self.key}' component must be a SchemaComponent, "
                f"got {type(self.component).__name__}"
            )
        object.__setattr__(self, "component", erase(self.component))

    @property
    def required(self) -> bool:
        return not (self.optional or self.component.is_optional)


def _check_unique_keys(properties: Sequence[Property]) -> None:
    seen = set()
    duplicates = set()
    for prop in properties:
        if prop.key in seen:
            duplicates.add(prop.key)
        seen.add(prop.key)
    if duplicates:
        raise ValueError(f"Duplicate property keys not allowed: {sorted(duplicates)}")


@dataclass(frozen=True)
class JsonObject(SchemaComponent[Any]):
    """A JSON object built from an ordered list of properties.

    Parsed output is a ``Record`` keyed by property name, or whatever
    ``into(**fields)`` returns when ``into`` is given (a pydantic model,
    a dataclass, or any callable taking keyword arguments). Absent optional
    properties are bound to ``None``.
    """
    properties: Tuple[Property, ...] = ()
    additional_properties: Optional[bool] = None
    into: Optional[Callable[..., Any]] = None
    collect_errors: bool = False

    def __post_init__(self):
        object.__setattr__(self, "properties", tuple(self.properties))
        _check_unique_keys(self.properties)

    @property
    def keys(self) -> List[str]:
        return [prop.key for prop in self.properties]

    @property
    def required_keys(self) -> List[str]:
        return [prop.key for prop in self.properties if prop.required]

    def schema(self) -> SchemaValue:
        rendered: Dict[str, Any] = {"type": "object"}
        if self.properties:
            rendered["properties"] = {
                prop.key: prop.component.schema() for prop in self.properties
            }
        required = self.required_keys
        if required:
            rendered["required"] = required
        if self.additional_properties is not None:
            rendered["additionalProperties"] = self.additional_properties
        return rendered

    def parse(self, value: Any) -> ParseResult[Any]:
        if not isinstance(value, Mapping):
            return fail(TypeMismatch(expected="object", actual=json_kind(value)))

        issues: List[ParseIssue] = []
        fields: Dict[str, Any] = {}
        for prop in self.properties:
            if prop.key not in value:
                if prop.required:
                    issues.append(MissingKey(key=prop.key))
                    if not self.collect_errors:
                        break
                else:
                    fields[prop.key] = None
                continue
            result = prop.component.parse(value[prop.key])
            if isinstance(result, Invalid):
                issues.extend(result.with_prefix(prop.key).issues)
                if not self.collect_errors:
                    break
            else:
                fields[prop.key] = result.value

        if self.additional_properties is False and (self.collect_errors or not issues):
            known = set(self.keys)
            for key in value:
                if key not in known:
                    issues.append(ConstraintViolation(
                        rule="additionalProperties",
                        detail=f"unexpected key '{key}'",
                        path=(key,),
                    ))
                    if not self.collect_errors:
                        break

        if issues:
            return Invalid(tuple(issues))
        return self._build(fields)

    def _build(self, fields: Dict[str, Any]) -> ParseResult[Any]:
        if self.into is None:
            return Valid(Record(fields))
        try:
            return Valid(self.into(**fields))
        except (ValueError, TypeError) as e:
            return fail(ConstraintViolation(rule="into", detail=str(e)))


def _element_issues(index: int, result: Invalid) -> List[ParseIssue]:
    issues: List[ParseIssue] = []
    for issue in result.issues:
        inner = issue.with_prefix(index)
        issues.append(IndexedError(index=index, inner=inner, path=inner.path))
    return issues


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


@dataclass(frozen=True)
class JsonArray(SchemaComponent[List[Any]]):
    """A homogeneous JSON array: every element parses with ``items``."""
    items: SchemaComponent[Any]
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: bool = False
    collect_errors: bool = False

    def __post_init__(self):
        object.__setattr__(self, "items", erase(self.items))
        if self.min_items is not None and self.min_items < 0:
            raise ValueError(f"min_items must be >= 0, got {self.min_items}")
        if self.max_items is not None and self.max_items < 0:
            raise ValueError(f"max_items must be >= 0, got {self.max_items}")
        if (
            self.min_items is not None
            and self.max_items is not None
            and self.min_items > self.max_items
        ):
            raise ValueError(f"min_items ({self.min_items}) exceeds max_items ({self.max_items})")

    def schema(self) -> SchemaValue:
        rendered: Dict[str, Any] = {"type": "array", "items": self.items.schema()}
        if self.min_items is not None:
            rendered["minItems"] = self.min_items
        if self.max_items is not None:
            rendered["maxItems"] = self.max_items
        if self.unique_items:
            rendered["uniqueItems"] = True
        return rendered

    def parse(self, value: Any) -> ParseResult[List[Any]]:
        if not _is_array(value):
            return fail(TypeMismatch(expected="array", actual=json_kind(value)))
        if self.min_items is not None and len(value) < self.min_items:
            return fail(ConstraintViolation(
                rule="minItems",
                detail=f"{len(value)} items is fewer than {self.min_items}",
            ))
        if self.max_items is not None and len(value) > self.max_items:
            return fail(ConstraintViolation(
                rule="maxItems",
                detail=f"{len(value)} items is more than {self.max_items}",
            ))

        issues: List[ParseIssue] = []
        parsed: List[Any] = []
        for index, element in enumerate(value):
            result = self.items.parse(element)
            if isinstance(result, Invalid):
                issues.extend(_element_issues(index, result))
                if not self.collect_errors:
                    break
            else:
                parsed.append(result.value)

        if self.unique_items and (self.collect_errors or not issues):
            for index in range(1, len(value)):
                if any(json_equal(value[index], value[j]) for j in range(index)):
                    issues.append(ConstraintViolation(
                        rule="uniqueItems",
                        detail=f"item {index} duplicates an earlier item",
                        path=(index,),
                    ))
                    if not self.collect_errors:
                        break

        if issues:
            return Invalid(tuple(issues))
        return Valid(parsed)


@dataclass(frozen=True)
class JsonTuple(SchemaComponent[Tuple[Any, ...]]):
    """A fixed-arity JSON array where each position has its own component."""
    items: Tuple[SchemaComponent[Any], ...]
    collect_errors: bool = False

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(erase(item) for item in self.items))

    def schema(self) -> SchemaValue:
        arity = len(self.items)
        return {
            "type": "array",
            "prefixItems": [item.schema() for item in self.items],
            "minItems": arity,
            "maxItems": arity,
        }

    def parse(self, value: Any) -> ParseResult[Tuple[Any, ...]]:
        if not _is_array(value):
            return fail(TypeMismatch(expected="array", actual=json_kind(value)))
        if len(value) != len(self.items):
            return fail(ArityMismatch(expected=len(self.items), actual=len(value)))

        issues: List[ParseIssue] = []
        parsed: List[Any] = []
        for index, (item, element) in enumerate(zip(self.items, value)):
            result = item.parse(element)
            if isinstance(result, Invalid):
                issues.extend(_element_issues(index, result))
                if not self.collect_errors:
                    break
            else:
                parsed.append(result.value)

        if issues:
            return Invalid(tuple(issues))
        return Valid(tuple(parsed))


@dataclass(frozen=True)
class First(Generic[A]):
    """Output of a conditional whose first branch matched."""
    value: A


@dataclass(frozen=True)
class Second(Generic[B]):
    """Output of a conditional whose second branch matched."""
    value: B


@dataclass(frozen=True)
class Conditional(SchemaComponent[Any]):
    """Two alternatives; output is tagged ``First`` or ``Second``.

    With both branches present the schema is ``anyOf`` and parsing tries
    the first branch, then the second. A one-sided conditional (built by
    ``Conditional.first`` / ``Conditional.second`` when a builder picks a
    branch) renders and parses just that branch.
    """
    first_branch: Optional[SchemaComponent[Any]] = None
    second_branch: Optional[SchemaComponent[Any]] = None

    def __post_init__(self):
        if self.first_branch is None and self.second_branch is None:
            raise ValueError("Conditional requires at least one branch")

    @classmethod
    def first(cls, component: SchemaComponent[Any]) -> "Conditional":
        return cls(first_branch=component)

    @classmethod
    def second(cls, component: SchemaComponent[Any]) -> "Conditional":
        return cls(second_branch=component)

    def schema(self) -> SchemaValue:
        if self.second_branch is None:
            return self.first_branch.schema()
        if self.first_branch is None:
            return self.second_branch.schema()
        return {"anyOf": [self.first_branch.schema(), self.second_branch.schema()]}

    def parse(self, value: Any) -> ParseResult[Any]:
        branch_errors: List[Tuple[ParseIssue, ...]] = []
        for branch, tag in ((self.first_branch, First), (self.second_branch, Second)):
            if branch is None:
                continue
            result = branch.parse(value)
            if isinstance(result, Valid):
                return Valid(tag(result.value))
            branch_errors.append(result.issues)

        if len(branch_errors) == 1:
            return Invalid(branch_errors[0])
        return fail(UnionExhausted(branch_errors=tuple(branch_errors)))


@dataclass(frozen=True)
class AnyOf(SchemaComponent[Any]):
    """Any number of alternatives; output is the first matching branch's output."""
    components: Tuple[SchemaComponent[Any], ...]

    def __post_init__(self):
        object.__setattr__(self, "components", tuple(erase(c) for c in self.components))
        if not self.components:
            raise ValueError("AnyOf requires at least one component")

    def schema(self) -> SchemaValue:
        return {"anyOf": [component.schema() for component in self.components]}

    def parse(self, value: Any) -> ParseResult[Any]:
        branch_errors: List[Tuple[ParseIssue, ...]] = []
        for component in self.components:
            result = component.parse(value)
            if isinstance(result, Valid):
                return result
            branch_errors.append(result.issues)
        return fail(UnionExhausted(branch_errors=tuple(branch_errors)))
