"""schemacraft: compose JSON Schema documents from typed components."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("schemacraft")
except PackageNotFoundError:
    __version__ = "dev"

from schemacraft.api import ValidationResult, dumps_schema, render_document, schema_hash, validate
from schemacraft.builder import (
    CollectionBuilder,
    ObjectBuilder,
    any_of,
    array_of,
    build_block,
    build_either,
    build_optional,
    collect,
    decorated,
    mapped,
    object_of,
    one_of,
    optional,
    prop,
    tuple_of,
)
from schemacraft.codes import IssueCode
from schemacraft.contracts import (
    ArityMismatch,
    ConstraintViolation,
    IndexedError,
    Invalid,
    MissingKey,
    ParseFailure,
    ParseIssue,
    ParseResult,
    TypeMismatch,
    UnionExhausted,
    UnresolvedReference,
    Valid,
)
from schemacraft.kernel import (
    MISSING,
    AnyComponent,
    AnyOf,
    BooleanSchema,
    Conditional,
    Decorated,
    DuplicateReferenceError,
    First,
    JsonAny,
    JsonArray,
    JsonBoolean,
    JsonConst,
    JsonEnum,
    JsonInteger,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonReference,
    JsonString,
    JsonTuple,
    Mapped,
    Metadata,
    OptionalComponent,
    Passthrough,
    Property,
    Record,
    ReferenceTable,
    ReferenceTableLockedError,
    SchemaComponent,
    Second,
    UnresolvedReferenceError,
    erase,
)
from schemacraft.settings import RenderSettings

__all__ = [
    "__version__",
    # api
    "ValidationResult",
    "dumps_schema",
    "render_document",
    "schema_hash",
    "validate",
    "RenderSettings",
    # builders
    "CollectionBuilder",
    "ObjectBuilder",
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
    # results and issues
    "IssueCode",
    "ArityMismatch",
    "ConstraintViolation",
    "IndexedError",
    "Invalid",
    "MissingKey",
    "ParseFailure",
    "ParseIssue",
    "ParseResult",
    "TypeMismatch",
    "UnionExhausted",
    "UnresolvedReference",
    "Valid",
    # components
    "MISSING",
    "SchemaComponent",
    "AnyComponent",
    "AnyOf",
    "BooleanSchema",
    "Conditional",
    "Decorated",
    "First",
    "JsonAny",
    "JsonArray",
    "JsonBoolean",
    "JsonConst",
    "JsonEnum",
    "JsonInteger",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonReference",
    "JsonString",
    "JsonTuple",
    "Mapped",
    "Metadata",
    "OptionalComponent",
    "Passthrough",
    "Property",
    "Record",
    "Second",
    "ReferenceTable",
    "DuplicateReferenceError",
    "ReferenceTableLockedError",
    "UnresolvedReferenceError",
]
