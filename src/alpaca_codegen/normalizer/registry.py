"""The shared type table (``components.schemas``) and schema kind tags."""

from typing import Any, Iterator

from alpaca_codegen.errors import InvariantError
from alpaca_codegen.parser.base import SchemaKind

KIND_KEY = "x-kind"
SCHEMA_REF_PREFIX = "#/components/schemas/"


def ref_to(name: str) -> str:
    return f"{SCHEMA_REF_PREFIX}{name}"


def set_kind(schema: dict[str, Any], kind: SchemaKind) -> None:
    """Tag a schema with its role; a schema can only ever have one."""
    prev = schema.get(KIND_KEY)
    if prev and prev != kind.value:
        raise InvariantError(f"Conflicting x-kind: {prev} vs {kind.value}")
    schema[KIND_KEY] = kind.value


def get_kind(schema: dict[str, Any]) -> SchemaKind | None:
    value = schema.get(KIND_KEY)
    if value is None:
        return None
    try:
        return SchemaKind(value)
    except ValueError:
        raise InvariantError(f"Unknown x-kind: {value}") from None


class TypeTable:
    """Named schemas of a document; names are the handles references use."""

    def __init__(self, document: dict[str, Any]):
        components = document.setdefault("components", {})
        self.schemas: dict[str, Any] = components.setdefault("schemas", {})

    def register(self, name: str, schema: dict[str, Any]) -> dict[str, str]:
        """Store ``schema`` under ``name`` and return a reference to it.

        Last write wins: names come from operation ids plus a role suffix, so a
        clash means the same operation role is being registered again.
        """
        self.schemas[name] = schema
        return {"$ref": ref_to(name)}

    def remove(self, name: str) -> None:
        del self.schemas[name]

    def merge(self, schemas: dict[str, Any]) -> None:
        self.schemas.update(schemas)

    def items(self) -> list[tuple[str, Any]]:
        # Snapshot, so stages can remove entries while iterating.
        return list(self.schemas.items())

    def __getitem__(self, name: str) -> Any:
        return self.schemas[name]

    def __contains__(self, name: str) -> bool:
        return name in self.schemas

    def __iter__(self) -> Iterator[str]:
        return iter(list(self.schemas))

    def __len__(self) -> int:
        return len(self.schemas)
