"""Data models shared by the parser and normalizer stages.

Schemas themselves stay plain JSON-schema dicts inside the loaded document:
every stage mutates the document in place and the renderer consumes it whole.
The models here describe the handles around that document.
"""

import json
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, SkipValidation

from alpaca_codegen.naming import to_pascal_case


class HttpMethod(str, Enum):
    """OpenAPI operation methods, in enumeration order."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class SchemaKind(str, Enum):
    """Semantic role of a registered schema (stored under ``x-kind``)."""

    PATH = "Path"
    REQUEST = "Request"
    RESPONSE = "Response"


class RequestKind(str, Enum):
    """How an operation's request parameters are encoded."""

    QUERY = "Query"
    FORM = "Form"


class Operation(BaseModel):
    """One method of one path in the API description."""

    path: str  # /telescope/{device_number}/connected
    method: HttpMethod
    id: str  # get_telescope_connected
    # The live operation dict; never copied so stages can tag it in place.
    operation: SkipValidation[dict[str, Any]]

    @property
    def type_id(self) -> str:
        return to_pascal_case(self.id)


class DuplicateShape(BaseModel):
    """A canonical schema shape shared by several type-table entries."""

    key: str
    count: int

    @property
    def shape(self) -> dict:
        return json.loads(self.key)


class NormalizedApi(BaseModel):
    """Pipeline output handed to the renderer."""

    document: SkipValidation[dict[str, Any]]
    ref_replacements: dict[str, str] = {}
    duplicates: list[DuplicateShape] = []

    @property
    def schemas(self) -> dict[str, Any]:
        return self.document["components"]["schemas"]

    def operations(self) -> Iterator[Operation]:
        from alpaca_codegen.parser.operations import iter_operations

        return iter_operations(self.document)

    def resolve_ref(self, ref: str) -> str:
        """Follow the replacement map to the reference that survived dedup."""
        while ref in self.ref_replacements:
            ref = self.ref_replacements[ref]
        return ref
