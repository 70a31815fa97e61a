"""Issue code constants for parse failures.

These constants prevent stringly-typed error codes and ensure
client code matches on the correct issue kinds.
"""

from enum import Enum


class IssueCode(str, Enum):
    """Parse issue codes."""

    TYPE_MISMATCH = "TYPE_MISMATCH"
    MISSING_KEY = "MISSING_KEY"
    ARITY_MISMATCH = "ARITY_MISMATCH"
    INDEXED_ERROR = "INDEXED_ERROR"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    UNRESOLVED_REFERENCE = "UNRESOLVED_REFERENCE"
    UNION_EXHAUSTED = "UNION_EXHAUSTED"
