"""API description loading and local ``$ref`` resolution.

The document is loaded once with PyYAML (which also reads JSON) and every
later stage works on that same object graph; references are looked up on
demand instead of being inlined, so registering a schema in one place is
visible through every reference to it.
"""

from pathlib import Path
from typing import Any
from urllib.parse import unquote

import yaml

from alpaca_codegen.errors import InvariantError


def load_document(file_path: Path) -> dict[str, Any]:
    """Load an OpenAPI description from a YAML or JSON file."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvariantError(f"Could not parse {file_path}: {e}") from e

    if not isinstance(doc, dict) or not isinstance(doc.get("paths"), dict):
        raise InvariantError(f"{file_path} is not an OpenAPI document (no paths)")
    return doc


def is_ref(maybe_ref: Any) -> bool:
    return isinstance(maybe_ref, dict) and "$ref" in maybe_ref


class RefResolver:
    """Looks up ``#/...`` JSON pointers inside one document."""

    def __init__(self, document: dict[str, Any]):
        self.document = document

    def resolve(self, ref: str) -> Any:
        if not ref.startswith("#/"):
            raise InvariantError(f"Only local references are supported: {ref}")

        target: Any = self.document
        for token in ref[2:].split("/"):
            token = unquote(token).replace("~1", "/").replace("~0", "~")
            if isinstance(target, list) and token.isdigit():
                index = int(token)
                target = target[index] if index < len(target) else None
            elif isinstance(target, dict):
                target = target.get(token)
            else:
                target = None
            if target is None:
                raise InvariantError(f"Unresolvable reference: {ref}")
        return target

    def resolve_maybe(self, maybe_ref: Any) -> Any:
        """Return the target of a reference object, or the object itself."""
        seen: set[str] = set()
        while is_ref(maybe_ref):
            ref = maybe_ref["$ref"]
            if ref in seen:
                raise InvariantError(f"Circular reference: {ref}")
            seen.add(ref)
            maybe_ref = self.resolve(ref)
        return maybe_ref
