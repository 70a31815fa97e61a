"""Component kernel: the contract, leaf nodes, wrappers and combinators."""

from schemacraft.kernel.component import MISSING, SchemaComponent, SchemaValue
from schemacraft.kernel.primitives import (
    BooleanSchema,
    JsonAny,
    JsonBoolean,
    JsonConst,
    JsonEnum,
    JsonInteger,
    JsonNull,
    JsonNumber,
    JsonString,
)
from schemacraft.kernel.decorators import Decorated, Mapped, Metadata, OptionalComponent, Passthrough
from schemacraft.kernel.combinators import (
    AnyOf,
    Conditional,
    First,
    JsonArray,
    JsonObject,
    JsonTuple,
    Property,
    Record,
    Second,
)
from schemacraft.kernel.erasure import AnyComponent, erase
from schemacraft.kernel.references import (
    DuplicateReferenceError,
    JsonReference,
    ReferenceTable,
    ReferenceTableError,
    ReferenceTableLockedError,
    UnresolvedReferenceError,
)

__all__ = [
    "MISSING",
    "SchemaComponent",
    "SchemaValue",
    "BooleanSchema",
    "JsonAny",
    "JsonBoolean",
    "JsonConst",
    "JsonEnum",
    "JsonInteger",
    "JsonNull",
    "JsonNumber",
    "JsonString",
    "Decorated",
    "Mapped",
    "Metadata",
    "OptionalComponent",
    "Passthrough",
    "AnyOf",
    "Conditional",
    "First",
    "JsonArray",
    "JsonObject",
    "JsonTuple",
    "Property",
    "Record",
    "Second",
    "AnyComponent",
    "erase",
    "DuplicateReferenceError",
    "JsonReference",
    "ReferenceTable",
    "ReferenceTableError",
    "ReferenceTableLockedError",
    "UnresolvedReferenceError",
]
