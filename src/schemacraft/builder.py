"""Builder helpers for assembling component trees.

These functions are the explicit form of nested schema declarations:

    product = object_of(
        prop("productId", JsonInteger().description("The unique identifier for a product")),
        prop("productName", JsonString().description("Name of the product")),
        prop("tags", array_of(JsonString()), optional=True),
    ).description("A product from Acme's catalog")

``ObjectBuilder`` and ``collect`` cover the incremental case where
properties or items are appended one at a time.
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from schemacraft.kernel.combinators import (
    AnyOf,
    Conditional,
    JsonArray,
    JsonObject,
    JsonTuple,
    Property,
)
from schemacraft.kernel.component import SchemaComponent
from schemacraft.kernel.decorators import Mapped, OptionalComponent, Passthrough
from schemacraft.kernel.erasure import AnyComponent, erase
from schemacraft.kernel.primitives import BooleanSchema


def build_block(block: Union[SchemaComponent[Any], bool]) -> SchemaComponent[Any]:
    """A single declaration: a component as-is, or a bool as the ``true``/``false`` schema."""
    if isinstance(block, bool):
        return BooleanSchema(block)
    if not isinstance(block, SchemaComponent):
        raise TypeError(f"Expected a SchemaComponent or bool, got {type(block).__name__}")
    return block


def build_optional(component: Optional[SchemaComponent[Any]]) -> OptionalComponent:
    """A declaration that may contribute nothing (``component`` is ``None``)."""
    return OptionalComponent(component)


def build_either(
    condition: bool,
    first: SchemaComponent[Any],
    second: SchemaComponent[Any],
) -> Conditional:
    """Pick one of two declarations; the output is tagged with the branch taken."""
    if condition:
        return Conditional.first(first)
    return Conditional.second(second)


def accumulate(
    accumulated: Sequence[AnyComponent[Any]],
    component: SchemaComponent[Any],
    passthrough: bool = False,
) -> Tuple[AnyComponent[Any], ...]:
    """Append one component to an erased collection, returning a new tuple.

    With ``passthrough`` the component is wrapped so its output is the raw
    JSON input, which lets components with unrelated output types share a
    JSON-valued collection.
    """
    if passthrough:
        component = Passthrough(component)
    return tuple(accumulated) + (erase(component),)


def collect(*components: SchemaComponent[Any], passthrough: bool = False) -> Tuple[AnyComponent[Any], ...]:
    """Fold ``components`` into an erased collection, preserving order."""
    collection: Tuple[AnyComponent[Any], ...] = ()
    for component in components:
        collection = accumulate(collection, component, passthrough=passthrough)
    return collection


class CollectionBuilder:
    """Builds an erased collection one component at a time.

    ``start`` opens a collection with its first component and ``append``
    returns a new collection with one more; neither mutates its input.
    """

    def __init__(self, passthrough: bool = False):
        self.passthrough = passthrough

    def start(self, component: SchemaComponent[Any]) -> Tuple[AnyComponent[Any], ...]:
        return accumulate((), component, passthrough=self.passthrough)

    def append(
        self,
        accumulated: Sequence[AnyComponent[Any]],
        component: SchemaComponent[Any],
    ) -> Tuple[AnyComponent[Any], ...]:
        return accumulate(accumulated, component, passthrough=self.passthrough)


class ObjectBuilder:
    """Accumulates properties one at a time and builds a ``JsonObject``.

    Keys are checked for uniqueness as they are added.
    """

    def __init__(
        self,
        additional_properties: Optional[bool] = None,
        into: Optional[Callable[..., Any]] = None,
        collect_errors: bool = False,
    ):
        self._properties: List[Property] = []
        self._keys = set()
        self._additional_properties = additional_properties
        self._into = into
        self._collect_errors = collect_errors

    def property(self, key: str, component: SchemaComponent[Any], optional: bool = False) -> "ObjectBuilder":
        if key in self._keys:
            raise ValueError(f"Duplicate property key: '{key}'")
        self._properties.append(Property(key, component, optional))
        self._keys.add(key)
        return self

    def __len__(self) -> int:
        return len(self._properties)

    def build(self) -> JsonObject:
        return JsonObject(
            tuple(self._properties),
            additional_properties=self._additional_properties,
            into=self._into,
            collect_errors=self._collect_errors,
        )


def prop(key: str, component: SchemaComponent[Any], optional: bool = False) -> Property:
    return Property(key, component, optional)


def object_of(
    *properties: Property,
    additional_properties: Optional[bool] = None,
    into: Optional[Callable[..., Any]] = None,
    collect_errors: bool = False,
) -> JsonObject:
    return JsonObject(
        properties,
        additional_properties=additional_properties,
        into=into,
        collect_errors=collect_errors,
    )


def array_of(item: SchemaComponent[Any], **kwargs: Any) -> JsonArray:
    return JsonArray(item, **kwargs)


def tuple_of(*items: SchemaComponent[Any], collect_errors: bool = False) -> JsonTuple:
    return JsonTuple(collect(*items), collect_errors=collect_errors)


def one_of(first: SchemaComponent[Any], second: SchemaComponent[Any]) -> Conditional:
    """Union of two alternatives, tried in order; output is ``First`` or ``Second``."""
    return Conditional(first, second)


def any_of(*components: SchemaComponent[Any]) -> AnyOf:
    """Union of any number of alternatives; output is the matching raw JSON value."""
    return AnyOf(collect(*components, passthrough=True))


def decorated(component: SchemaComponent[Any], **metadata: Any) -> SchemaComponent[Any]:
    return component._decorate(**metadata)


def mapped(component: SchemaComponent[Any], transform: Callable[[Any], Any]) -> Mapped:
    return Mapped(component, transform)


def optional(component: SchemaComponent[Any]) -> OptionalComponent:
    return OptionalComponent(component)


__all__ = [
    "CollectionBuilder",
    "ObjectBuilder",
    "accumulate",
    "any_of",
    "array_of",
    "build_block",
    "build_either",
    "build_optional",
    "collect",
    "decorated",
    "erase",
    "mapped",
    "object_of",
    "one_of",
    "optional",
    "prop",
    "tuple_of",
]
