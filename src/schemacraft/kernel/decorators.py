"""Wrappers that decorate a component or change its output type.

All wrappers delegate ``parse`` to the wrapped component; none of them
changes what the wrapped component accepts.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, JsonValue

from schemacraft.contracts import ConstraintViolation, Invalid, ParseResult, Valid, fail
from schemacraft.kernel.component import MISSING, SchemaComponent, SchemaValue


class Metadata(BaseModel):
    """Annotation keywords attached to a component.

    Only keys that were explicitly set are rendered, so ``default=None``
    renders as ``"default": null`` while an unset default is omitted.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    default: JsonValue = None
    examples: Optional[List[JsonValue]] = None
    deprecated: Optional[bool] = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def render(self) -> Dict[str, Any]:
        return copy.deepcopy(self.model_dump(exclude_unset=True))

    def merged(self, other: "Metadata") -> "Metadata":
        """Combine with ``other``; keys set on ``other`` replace the same keys here."""
        fields = self.model_dump(exclude_unset=True)
        fields.update(other.model_dump(exclude_unset=True))
        return Metadata(**fields)


def as_object_schema(rendered: SchemaValue) -> Dict[str, Any]:
    """Convert the ``true``/``false`` schema forms to their object equivalents."""
    if rendered is True:
        return {}
    if rendered is False:
        return {"not": {}}
    return rendered


@dataclass(frozen=True)
class Decorated(SchemaComponent[Any]):
    """A component with metadata attached.

    Metadata never overrides a key the inner schema already renders. The
    fluent setters (``.title()``, ``.description()``, ...) instead merge into
    the nearest ``Decorated`` layer, looking through ``Mapped``,
    ``OptionalComponent``, ``Passthrough`` and ``AnyComponent``, so the last
    fluent call for a key wins however the chain is built.
    """
    inner: SchemaComponent[Any]
    metadata: Metadata

    @property
    def is_optional(self) -> bool:
        return self.inner.is_optional

    def _decorate(self, **metadata: Any) -> SchemaComponent[Any]:
        return Decorated(self.inner, self.metadata.merged(Metadata(**metadata)))

    def schema(self) -> SchemaValue:
        rendered = dict(as_object_schema(self.inner.schema()))
        for key, value in self.metadata.render().items():
            rendered.setdefault(key, value)
        return rendered

    def parse(self, value: Any) -> ParseResult[Any]:
        return self.inner.parse(value)


@dataclass(frozen=True)
class Mapped(SchemaComponent[Any]):
    """Applies ``transform`` to the inner component's output.

    The transform should be pure. A ``ValueError`` or ``TypeError`` it raises
    becomes a ``map`` constraint violation.
    """
    inner: SchemaComponent[Any]
    transform: Callable[[Any], Any]

    @property
    def is_optional(self) -> bool:
        return self.inner.is_optional

    def _decorate(self, **metadata: Any) -> SchemaComponent[Any]:
        return Mapped(self.inner._decorate(**metadata), self.transform)

    def schema(self) -> SchemaValue:
        return self.inner.schema()

    def parse(self, value: Any) -> ParseResult[Any]:
        result = self.inner.parse(value)
        if isinstance(result, Invalid):
            return result
        try:
            return Valid(self.transform(result.value))
        except (ValueError, TypeError) as e:
            return fail(ConstraintViolation(rule="map", detail=str(e)))


@dataclass(frozen=True)
class OptionalComponent(SchemaComponent[Any]):
    """A component that may be absent from its container.

    Absence is recorded by the container (an object's ``required`` list),
    so the wrapped schema renders unchanged. With no wrapped component the
    schema is empty and every value parses to ``None``.
    """
    wrapped: Optional[SchemaComponent[Any]] = None

    @property
    def is_optional(self) -> bool:
        return True

    def _decorate(self, **metadata: Any) -> SchemaComponent[Any]:
        if self.wrapped is None:
            return super()._decorate(**metadata)
        return OptionalComponent(self.wrapped._decorate(**metadata))

    def schema(self) -> SchemaValue:
        if self.wrapped is None:
            return {}
        return self.wrapped.schema()

    def parse(self, value: Any) -> ParseResult[Any]:
        if value is MISSING or self.wrapped is None:
            return Valid(None)
        return self.wrapped.parse(value)


@dataclass(frozen=True)
class Passthrough(SchemaComponent[Any]):
    """Validates with the inner component but outputs the raw JSON input."""
    inner: SchemaComponent[Any]

    @property
    def is_optional(self) -> bool:
        return self.inner.is_optional

    def _decorate(self, **metadata: Any) -> SchemaComponent[Any]:
        return Passthrough(self.inner._decorate(**metadata))

    def schema(self) -> SchemaValue:
        return self.inner.schema()

    def parse(self, value: Any) -> ParseResult[Any]:
        result = self.inner.parse(value)
        if isinstance(result, Invalid) or value is MISSING:
            return result
        return Valid(value)
