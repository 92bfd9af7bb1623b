"""Validation and removal of the Alpaca transaction envelope.

Every request carries ``ClientID``/``ClientTransactionID`` and every response
``ClientTransactionID``/``ServerTransactionID``/``ErrorNumber``/``ErrorMessage``.
The generated code handles those in shared wrappers, so once their declared
shapes are checked they are dropped from the per-operation schemas.
"""

from typing import Any

from alpaca_codegen.errors import InvariantError
from alpaca_codegen.normalizer.classifier import without_opt_fields
from alpaca_codegen.normalizer.registry import TypeTable, get_kind
from alpaca_codegen.parser.base import SchemaKind
from alpaca_codegen.parser.document import is_ref

_UINT32 = {"type": "integer", "format": "uint32"}

RESPONSE_ENVELOPE = {
    "ClientTransactionID": _UINT32,
    "ServerTransactionID": _UINT32,
    "ErrorNumber": {"type": "integer", "format": "int32"},
    "ErrorMessage": {"type": "string"},
}

# Defaults of these differ between entries of the API description (some are
# missing them), so only type and format are checked.
REQUEST_ENVELOPE = {
    "ClientID": _UINT32,
    "ClientTransactionID": _UINT32,
}

ENVELOPES = {
    SchemaKind.REQUEST: REQUEST_ENVELOPE,
    SchemaKind.RESPONSE: RESPONSE_ENVELOPE,
}


def strip_envelope(name: str, schema: dict[str, Any]) -> None:
    """Check and remove the envelope fields of one Request/Response schema."""
    kind = get_kind(schema)
    envelope = ENVELOPES.get(kind)
    if envelope is None:
        return

    properties = schema.get("properties") or {}
    found = {field: properties.get(field) for field in envelope}
    if without_opt_fields(found) != envelope:
        bad = sorted(field for field, shape in envelope.items() if without_opt_fields(found[field]) != shape)
        raise InvariantError(f"Missing {kind.value.lower()} properties in {name}: {bad}")

    schema["properties"] = {k: v for k, v in properties.items() if k not in envelope}

    if "required" in schema:
        required = [r for r in schema["required"] if r not in envelope]
        if required:
            schema["required"] = required
        else:
            del schema["required"]


def strip_envelopes(table: TypeTable) -> None:
    for name, schema in table.items():
        # Aliases are handled at the entry they point to.
        if not is_ref(schema):
            strip_envelope(name, schema)
