"""Named definitions and ``$ref`` components.

A ``ReferenceTable`` is the only mutable structure in a component tree. It
is populated first and then frozen, either explicitly or by the first
render or parse that goes through a reference; registering afterwards
fails instead of racing with readers.
"""

import logging
import re
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from schemacraft.contracts import ParseResult, UnresolvedReference, fail
from schemacraft.kernel.component import SchemaComponent, SchemaValue

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


class ReferenceTableError(ValueError):
    """Base error for reference table misuse."""
    pass


class DuplicateReferenceError(ReferenceTableError):
    """Raised when a name is registered twice."""
    pass


class ReferenceTableLockedError(ReferenceTableError):
    """Raised when registering into a frozen table."""
    pass


class UnresolvedReferenceError(ReferenceTableError):
    """Raised when a reference names a definition that is not registered."""
    pass


class ReferenceTable:
    """Registry of named component definitions rendered under ``$defs``."""

    def __init__(
        self,
        definitions: Optional[Mapping[str, SchemaComponent[Any]]] = None,
        definitions_key: str = "$defs",
    ):
        self._definitions: Dict[str, SchemaComponent[Any]] = {}
        self._frozen = False
        self._lock = threading.Lock()
        self.definitions_key = definitions_key
        for name, component in (definitions or {}).items():
            self.register(name, component)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, component: SchemaComponent[Any]) -> "JsonReference":
        """Register ``component`` under ``name`` and return a reference to it.

        Raises:
            ValueError: If ``name`` is not a valid definition name
            DuplicateReferenceError: If ``name`` is already registered
            ReferenceTableLockedError: If the table is frozen
        """
        if not _NAME_RE.match(name):
            raise ValueError(
                f"Definition name '{name}' must contain only letters, digits, '_', '.' or '-'"
            )
        with self._lock:
            if self._frozen:
                raise ReferenceTableLockedError(
                    f"Cannot register '{name}': reference table is frozen"
                )
            if name in self._definitions:
                raise DuplicateReferenceError(f"Definition '{name}' is already registered")
            self._definitions[name] = component
        logger.debug("Registered definition %s", name)
        return JsonReference(name, self)

    def freeze(self) -> None:
        with self._lock:
            if self._frozen:
                return
            self._frozen = True
        logger.debug("Reference table frozen with %d definitions", len(self._definitions))

    def resolve(self, name: str) -> Optional[SchemaComponent[Any]]:
        """Look up a definition, freezing the table on first use."""
        self.freeze()
        return self._definitions.get(name)

    def ref(self, name: str, deferred: bool = False) -> "JsonReference":
        return JsonReference(name, self, deferred=deferred)

    def pointer(self, name: str) -> str:
        return f"#/{self.definitions_key}/{name}"

    def names(self) -> List[str]:
        return list(self._definitions)

    def definitions(self) -> Dict[str, SchemaValue]:
        """Render every definition, in registration order."""
        self.freeze()
        return {name: component.schema() for name, component in self._definitions.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)


@dataclass(frozen=True)
class JsonReference(SchemaComponent[Any]):
    """A ``$ref`` to a named definition.

    The name must already be registered unless ``deferred`` is set, which
    allows forward and recursive references. Parsing delegates to the
    referenced definition.
    """
    name: str
    table: ReferenceTable
    deferred: bool = False

    def __post_init__(self):
        if not self.deferred and self.name not in self.table:
            raise UnresolvedReferenceError(
                f"Reference '{self.name}' is not registered; "
                f"register it first or pass deferred=True"
            )

    def schema(self) -> SchemaValue:
        self.table.freeze()
        return {"$ref": self.table.pointer(self.name)}

    def parse(self, value: Any) -> ParseResult[Any]:
        target = self.table.resolve(self.name)
        if target is None:
            return fail(UnresolvedReference(ref=self.name))
        return target.parse(value)
