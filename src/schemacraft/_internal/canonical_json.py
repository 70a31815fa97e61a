"""Canonical JSON serialization for rendered schema documents.

Used wherever a schema must be compared or fingerprinted: two documents
that differ only in key order serialize to the same text and hash.
Human-facing output (``dumps_schema``) keeps insertion order instead.
"""

import hashlib
import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - Sorted keys
    - Compact separators (",", ":")
    - Non-ASCII kept as UTF-8
    - NaN and infinities rejected

    Args:
        obj: JSON-compatible Python value

    Returns:
        Canonical JSON string

    Raises:
        ValueError: If obj contains NaN or infinite floats
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def sha256_digest(obj: Any) -> str:
    """SHA256 of the canonical serialization, prefixed with "sha256:"."""
    digest = hashlib.sha256(canonical_dumps(obj).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
