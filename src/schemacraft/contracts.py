"""Public parse result and issue models for schemacraft.

Every rejection produced by ``parse()`` is one of the issue models below.
Issues carry the path (keys and indices) into the input where the
failure occurred; combinators prefix their own key or index as the
failure travels back up the component tree.
"""

from dataclasses import dataclass
from typing import Any, Generic, Literal, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, SerializeAsAny, computed_field

from schemacraft.codes import IssueCode

T = TypeVar("T")

PathSegment = Union[str, int]
Path = Tuple[PathSegment, ...]


def format_path(path: Path) -> str:
    """Render a path as a JSONPath-like location string (``$.items[1].name``)."""
    parts = ["$"]
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(f".{segment}")
    return "".join(parts)


class ParseIssue(BaseModel):
    """Base model for a single parse issue."""
    code: IssueCode
    path: Path = ()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @computed_field
    @property
    def message(self) -> str:
        return self._describe()

    def _describe(self) -> str:
        return self.code.value

    def with_prefix(self, segment: PathSegment) -> "ParseIssue":
        """Return a copy of this issue located one level deeper under ``segment``."""
        return self.model_copy(update={"path": (segment,) + self.path})


class TypeMismatch(ParseIssue):
    """Input value has the wrong JSON kind."""
    code: Literal[IssueCode.TYPE_MISMATCH] = IssueCode.TYPE_MISMATCH
    expected: str
    actual: str

    def _describe(self) -> str:
        return f"expected {self.expected}, got {self.actual}"


class MissingKey(ParseIssue):
    """A required object key is absent."""
    code: Literal[IssueCode.MISSING_KEY] = IssueCode.MISSING_KEY
    key: str

    def _describe(self) -> str:
        return f"missing required key '{self.key}'"


class ArityMismatch(ParseIssue):
    """A fixed-arity array has the wrong number of items."""
    code: Literal[IssueCode.ARITY_MISMATCH] = IssueCode.ARITY_MISMATCH
    expected: int
    actual: int

    def _describe(self) -> str:
        return f"expected {self.expected} items, got {self.actual}"


class IndexedError(ParseIssue):
    """An array element failed to parse.

    ``path`` is the full location of the failing value, starting at the
    element index. It always equals ``inner.path``.
    """
    code: Literal[IssueCode.INDEXED_ERROR] = IssueCode.INDEXED_ERROR
    index: int
    inner: SerializeAsAny[ParseIssue]

    def _describe(self) -> str:
        return f"item {self.index}: {self.inner.message}"

    def with_prefix(self, segment: PathSegment) -> "IndexedError":
        return self.model_copy(update={
            "path": (segment,) + self.path,
            "inner": self.inner.with_prefix(segment),
        })


class ConstraintViolation(ParseIssue):
    """Value has the right kind but violates a refinement (minimum, pattern, enum, ...)."""
    code: Literal[IssueCode.CONSTRAINT_VIOLATION] = IssueCode.CONSTRAINT_VIOLATION
    rule: str
    detail: str

    def _describe(self) -> str:
        return f"{self.rule}: {self.detail}"


class UnresolvedReference(ParseIssue):
    """A deferred reference names a definition that was never registered."""
    code: Literal[IssueCode.UNRESOLVED_REFERENCE] = IssueCode.UNRESOLVED_REFERENCE
    ref: str

    def _describe(self) -> str:
        return f"unresolved reference '{self.ref}'"


class UnionExhausted(ParseIssue):
    """No branch of a conditional accepted the value.

    ``branch_errors`` holds the issues of each branch in order, so callers
    can see why every alternative was rejected.
    """
    code: Literal[IssueCode.UNION_EXHAUSTED] = IssueCode.UNION_EXHAUSTED
    branch_errors: Tuple[Tuple[SerializeAsAny[ParseIssue], ...], ...]

    def _describe(self) -> str:
        reasons = [
            f"branch {i}: {issues[0].message}" if issues else f"branch {i}: rejected"
            for i, issues in enumerate(self.branch_errors)
        ]
        return "no branch matched (" + "; ".join(reasons) + ")"

    def with_prefix(self, segment: PathSegment) -> "UnionExhausted":
        return self.model_copy(update={
            "path": (segment,) + self.path,
            "branch_errors": tuple(
                tuple(issue.with_prefix(segment) for issue in issues)
                for issues in self.branch_errors
            ),
        })


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful parse holding the component's output value."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    """Failed parse holding one or more issues.

    In fail-fast mode there is exactly one issue. In collect-all mode the
    first issue is the one fail-fast mode would have reported.
    """
    issues: Tuple[ParseIssue, ...]

    @property
    def ok(self) -> bool:
        return False

    @property
    def error(self) -> ParseIssue:
        return self.issues[0]

    def with_prefix(self, segment: PathSegment) -> "Invalid":
        return Invalid(tuple(issue.with_prefix(segment) for issue in self.issues))


ParseResult = Union[Valid[T], Invalid]


def fail(issue: ParseIssue) -> Invalid:
    """Build a single-issue failure."""
    return Invalid((issue,))


class ParseFailure(ValueError):
    """Raised by ``validate()`` when a value does not parse."""

    def __init__(self, issues: Tuple[ParseIssue, ...]):
        self.issues = issues
        lines = [f"{format_path(issue.path)}: {issue.message}" for issue in issues]
        super().__init__("; ".join(lines))

    @property
    def error(self) -> ParseIssue:
        return self.issues[0]


def unwrap(result: "ParseResult[Any]") -> Any:
    """Return the value of a successful result or raise ``ParseFailure``."""
    if isinstance(result, Invalid):
        raise ParseFailure(result.issues)
    return result.value
