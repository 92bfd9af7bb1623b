"""Schema canonicalization and shape keys.

Two schemas that would generate the same type must end up with the same
``shape_key``. ``canonicalize`` drops values that only restate a default
(empty string default, ``false`` default, zero default, integer bounds equal
to the bounds of the format), and ``shape_key`` ignores descriptions.
"""

import json
from typing import Any

from alpaca_codegen.parser.document import is_ref

DEFAULT_INTEGER_FORMAT = "int32"

INTEGER_RANGES = {
    "int32": (-2**31, 2**31 - 1),
    "uint32": (0, 2**32 - 1),
}


def canonicalize(schema: dict[str, Any]) -> dict[str, Any]:
    """Normalize ``schema`` in place and return it.

    References are not followed: the schema they point to is canonicalized at
    its own type-table entry, and the graph without reference edges is acyclic.
    """
    if is_ref(schema):
        return schema

    schema_type = schema.get("type")
    if schema_type == "string":
        if schema.get("default") == "":
            del schema["default"]
    elif schema_type == "boolean":
        if schema.get("default") is False:
            del schema["default"]
    elif schema_type in ("integer", "number"):
        if schema_type == "integer":
            _canonicalize_integer(schema)
        default = schema.get("default")
        if default == 0 and not isinstance(default, bool):
            del schema["default"]
    elif schema_type == "array":
        items = schema.get("items")
        if isinstance(items, dict):
            canonicalize(items)
    elif schema_type == "object":
        for prop in (schema.get("properties") or {}).values():
            canonicalize(prop)

    return schema


def _canonicalize_integer(schema: dict[str, Any]) -> None:
    fmt = schema.setdefault("format", DEFAULT_INTEGER_FORMAT)
    bounds = INTEGER_RANGES.get(fmt)
    if bounds is None:
        return
    low, high = bounds
    if "minimum" in schema and schema["minimum"] == low:
        del schema["minimum"]
    if "maximum" in schema and schema["maximum"] == high:
        del schema["maximum"]


def _without_descriptions(schema: Any) -> Any:
    if not isinstance(schema, dict):
        return schema
    result = {}
    for key, value in schema.items():
        if key == "description":
            continue
        if key == "properties" and isinstance(value, dict):
            value = {name: _without_descriptions(prop) for name, prop in value.items()}
        elif key == "items":
            value = _without_descriptions(value)
        elif key == "required" and isinstance(value, list):
            value = sorted(value)
        result[key] = value
    return result


def shape_key(schema: Any) -> str:
    """Comparison key of an already canonicalized schema."""
    return json.dumps(_without_descriptions(schema), sort_keys=True)
