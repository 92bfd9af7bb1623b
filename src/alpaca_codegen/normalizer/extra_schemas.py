"""Shared schemas that registered duplicates are folded into.

They are always added to the type table, so the renderer can rely on them
whether or not any operation ends up using them.
"""

from alpaca_codegen.parser.base import SchemaKind

_DEVICE_NUMBER = {
    "type": "integer",
    "format": "uint32",
    "description": "Zero based device number as set on the server (0 to 4294967295)",
}

EXTRA_SCHEMAS: dict[str, dict] = {
    "DeviceNumberPath": {
        "type": "object",
        "properties": {
            "device_number": _DEVICE_NUMBER,
        },
        "required": ["device_number"],
        "x-kind": SchemaKind.PATH.value,
    },
    "DeviceTypeAndNumberPath": {
        "type": "object",
        "properties": {
            "device_type": {
                "type": "string",
                "default": "telescope",
                "pattern": "^[a-z]*$",
                "description": "One of the recognised ASCOM device types e.g. telescope (must be lower case)",
            },
            "device_number": _DEVICE_NUMBER,
        },
        "required": ["device_type", "device_number"],
        "x-kind": SchemaKind.PATH.value,
    },
}

for _kind in SchemaKind:
    EXTRA_SCHEMAS[f"Empty{_kind.value}"] = {
        "type": "object",
        "properties": {},
        "x-kind": _kind.value,
    }
