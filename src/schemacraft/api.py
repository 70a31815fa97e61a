"""Public API for schemacraft.

High-level functions that turn a component tree into a complete schema
document, serialize or fingerprint it, and report parse results in a
JSON-friendly shape.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from schemacraft._internal.canonical_json import sha256_digest
from schemacraft.contracts import Invalid, ParseIssue, format_path
from schemacraft.kernel.combinators import First, Record, Second
from schemacraft.kernel.component import SchemaComponent
from schemacraft.kernel.decorators import as_object_schema
from schemacraft.kernel.references import ReferenceTable
from schemacraft.settings import RenderSettings

logger = logging.getLogger(__name__)


class ValidationIssue(BaseModel):
    """A single parse issue flattened for reporting."""
    code: str  # IssueCode value, e.g. "MISSING_KEY", "TYPE_MISMATCH"
    message: str
    location: str  # "$.items[1].name"
    path: List[Any] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Result of checking a value against a component."""
    ok: bool
    value: Any = None  # Parsed output when ok, as plain JSON data
    issues: List[ValidationIssue] = Field(default_factory=list)


def _plain(value: Any) -> Any:
    """Convert parsed output to data pydantic can serialize; records become dicts."""
    if isinstance(value, Record):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (First, Second)):
        return {"value": _plain(value.value)}
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _issue_to_report(issue: ParseIssue) -> ValidationIssue:
    return ValidationIssue(
        code=issue.code.value,
        message=issue.message,
        location=format_path(issue.path),
        path=list(issue.path),
    )


def render_document(
    component: SchemaComponent[Any],
    table: Optional[ReferenceTable] = None,
    settings: Optional[RenderSettings] = None,
) -> Dict[str, Any]:
    """Render ``component`` as a standalone JSON Schema document.

    Args:
        component: Root component
        table: Reference table whose definitions are emitted under ``$defs``
        settings: Rendering options (defaults to ``RenderSettings()``)

    Returns:
        Document dict: ``$schema`` first (if enabled), then the root
        schema's keys, then the definitions
    """
    settings = settings or RenderSettings()
    document: Dict[str, Any] = {}
    if settings.include_dialect:
        document["$schema"] = settings.dialect
    document.update(as_object_schema(component.schema()))
    if table is not None and len(table):
        document[table.definitions_key] = table.definitions()
    logger.debug(
        "Rendered schema document with %d top-level keys",
        len(document),
    )
    return document


def dumps_schema(
    component: SchemaComponent[Any],
    table: Optional[ReferenceTable] = None,
    settings: Optional[RenderSettings] = None,
) -> str:
    """Serialize the rendered document, keeping property order for readable diffs."""
    settings = settings or RenderSettings()
    document = render_document(component, table, settings)
    return json.dumps(
        document,
        indent=settings.indent,
        ensure_ascii=settings.ensure_ascii,
        allow_nan=False,
    )


def schema_hash(
    component: SchemaComponent[Any],
    table: Optional[ReferenceTable] = None,
    settings: Optional[RenderSettings] = None,
) -> str:
    """Stable fingerprint of the rendered document ("sha256:<hex>")."""
    return sha256_digest(render_document(component, table, settings))


def validate(component: SchemaComponent[Any], value: Any) -> ValidationResult:
    """Parse ``value`` with ``component`` and report every issue found.

    Never raises for bad input; inspect ``ok`` and ``issues``.
    """
    result = component.parse(value)
    if isinstance(result, Invalid):
        return ValidationResult(
            ok=False,
            issues=[_issue_to_report(issue) for issue in result.issues],
        )
    return ValidationResult(ok=True, value=_plain(result.value))
