"""Request/response classification of a single operation.

Every Alpaca operation has the same shape: path parameters, then either a
query string (GET) or a form-encoded body (everything else), one JSON success
response and two plain-text error responses. Anything else is rejected.
"""

import json
from typing import Any

from alpaca_codegen.errors import InvariantError
from alpaca_codegen.normalizer.registry import TypeTable, set_kind
from alpaca_codegen.parser.base import HttpMethod, Operation, RequestKind, SchemaKind
from alpaca_codegen.parser.document import RefResolver, is_ref
from alpaca_codegen.parser.params import group_parameters

QUERY_METHOD = HttpMethod.GET
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

OPT_FIELDS = frozenset({"description", "minimum", "maximum", "default"})

ERROR_RESPONSE_SHAPE = {"content": {"text/plain": {"schema": {"type": "string"}}}}
ERROR_RESPONSES = {"400": ERROR_RESPONSE_SHAPE, "500": ERROR_RESPONSE_SHAPE}

PATH_SCHEMA_KEY = "x-path-schema"
REQUEST_SCHEMA_KEY = "x-request-schema"
RESPONSE_SCHEMA_KEY = "x-response-schema"
REQUEST_KIND_KEY = "x-request-kind"


def without_opt_fields(obj: Any) -> Any:
    """Deep copy of ``obj`` without descriptive fields, for shape comparisons."""
    return json.loads(
        json.dumps(obj),
        object_hook=lambda d: {k: v for k, v in d.items() if k not in OPT_FIELDS},
    )


def get_content(owner: dict[str, Any], content_type: str, resolver: RefResolver) -> tuple[dict, dict]:
    """Return the (media type object, resolved object schema) of a body.

    The body must have exactly one media type, ``content_type``.
    """
    content = owner.get("content") or {}
    keys = list(content)
    if keys != [content_type]:
        raise InvariantError(f"Unexpected content types: {keys} (expected {content_type})")
    media = content[content_type]
    if not isinstance(media, dict):
        raise InvariantError(f"Empty media type object for {content_type}")
    schema = resolver.resolve_maybe(media.get("schema"))
    if not isinstance(schema, dict) or schema.get("type") != "object":
        raise InvariantError("Content is not an object")
    return media, schema


def classify_operation(op: Operation, resolver: RefResolver, table: TypeTable) -> None:
    """Register and tag the path, request and response schemas of ``op``."""
    operation = op.operation
    type_id = op.type_id

    path_params, query_params = group_parameters(operation.get("parameters") or [], resolver)

    if path_params is None:
        raise InvariantError(f"Missing path parameters for {op.id}")
    set_kind(path_params, SchemaKind.PATH)
    operation[PATH_SCHEMA_KEY] = table.register(f"{type_id}Path", path_params)

    request_body = resolver.resolve_maybe(operation.get("requestBody"))

    if op.method == QUERY_METHOD:
        if query_params is None:
            raise InvariantError(f"Missing query parameters for {op.id}")
        if request_body:
            raise InvariantError(f"Unexpected request body for {op.id}")

        set_kind(query_params, SchemaKind.REQUEST)
        operation[REQUEST_SCHEMA_KEY] = table.register(f"{type_id}Request", query_params)
        operation[REQUEST_KIND_KEY] = RequestKind.QUERY.value
    else:
        if query_params is not None:
            raise InvariantError(f"Unexpected query parameters for {op.id}")
        if not request_body:
            raise InvariantError(f"Missing request body for {op.id}")

        try:
            media, schema = get_content(request_body, FORM_CONTENT_TYPE, resolver)
        except InvariantError as e:
            raise InvariantError(f"Request body of {op.id}: {e}") from None
        if not is_ref(media["schema"]):
            media["schema"] = table.register(f"{type_id}Request", schema)

        set_kind(schema, SchemaKind.REQUEST)
        operation[REQUEST_SCHEMA_KEY] = dict(media["schema"])
        operation[REQUEST_KIND_KEY] = RequestKind.FORM.value

    _classify_responses(op, resolver, table)


def _classify_responses(op: Operation, resolver: RefResolver, table: TypeTable) -> None:
    responses = {str(code): resp for code, resp in (op.operation.get("responses") or {}).items()}

    success = responses.pop("200", None)
    if success is None:
        raise InvariantError(f"Missing successful response for {op.method.value} {op.path}")

    errors = {}
    for code, resp in responses.items():
        resp = resolver.resolve_maybe(resp)
        if not isinstance(resp, dict):
            raise InvariantError(f"Empty {code} response for {op.method.value} {op.path}")
        resp = dict(resp)
        if isinstance(resp.get("content"), dict):
            resp["content"] = {
                media_type: (
                    {**media, "schema": resolver.resolve_maybe(media.get("schema"))}
                    if isinstance(media, dict) else media
                )
                for media_type, media in resp["content"].items()
            }
        errors[code] = resp
    if without_opt_fields(errors) != ERROR_RESPONSES:
        raise InvariantError(
            f"Unexpected error responses for {op.method.value} {op.path}: {sorted(responses)}"
        )

    try:
        media, schema = get_content(resolver.resolve_maybe(success), JSON_CONTENT_TYPE, resolver)
    except InvariantError as e:
        raise InvariantError(f"Successful response of {op.id}: {e}") from None
    if not is_ref(media["schema"]):
        media["schema"] = table.register(f"{op.type_id}Response", schema)

    set_kind(schema, SchemaKind.RESPONSE)
    op.operation[RESPONSE_SCHEMA_KEY] = dict(media["schema"])
