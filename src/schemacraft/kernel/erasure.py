"""Type erasure: store components of different concrete types side by side."""

from dataclasses import dataclass
from typing import Any

from schemacraft.contracts import ParseResult
from schemacraft.kernel.component import Output, SchemaComponent, SchemaValue


@dataclass(frozen=True)
class AnyComponent(SchemaComponent[Output]):
    """Hides a component's concrete type behind the common interface.

    Rendering and parsing are forwarded unchanged. Erasing an already
    erased component does not add another layer.
    """
    inner: SchemaComponent[Output]

    def __post_init__(self):
        if isinstance(self.inner, AnyComponent):
            object.__setattr__(self, "inner", self.inner.inner)

    @property
    def is_optional(self) -> bool:
        return self.inner.is_optional

    def _decorate(self, **metadata: Any) -> "AnyComponent[Output]":
        return AnyComponent(self.inner._decorate(**metadata))

    def schema(self) -> SchemaValue:
        return self.inner.schema()

    def parse(self, value: Any) -> ParseResult[Output]:
        return self.inner.parse(value)

    def erase(self) -> "AnyComponent[Output]":
        return self


def erase(component: SchemaComponent[Output]) -> AnyComponent[Output]:
    """Erase ``component`` to ``AnyComponent``."""
    if isinstance(component, AnyComponent):
        return component
    return AnyComponent(component)
