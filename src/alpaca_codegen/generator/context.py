"""Hand-off of a normalized API to an external template renderer."""

from pprint import pformat
from typing import Any

from alpaca_codegen.naming import to_pascal_case, to_snake_case
from alpaca_codegen.parser.base import NormalizedApi
from alpaca_codegen.parser.document import RefResolver


def build_render_context(result: NormalizedApi) -> dict[str, Any]:
    """Everything a server/client template needs, keyed the way templates use it."""
    return {
        "api": result.document,
        "refs": RefResolver(result.document),
        "ref_replacements": result.ref_replacements,
        "resolve_ref": result.resolve_ref,
        "ops": result.operations,
        "dbg": pformat,
        "to_pascal_case": to_pascal_case,
        "to_snake_case": to_snake_case,
    }


def dump_payload(result: NormalizedApi) -> dict[str, Any]:
    """Serializable form of a normalized API, as written by the CLI."""
    return {"api": result.document, "refReplacements": result.ref_replacements}
