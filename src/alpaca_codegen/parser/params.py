"""Groups an operation's parameters into object schemas by location."""

from typing import Any

from alpaca_codegen.errors import InvariantError
from alpaca_codegen.parser.document import RefResolver


def group_parameters(
    parameters: list[dict], resolver: RefResolver
) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    """Build the (path, query) parameter schemas of one operation.

    Either side is None when the operation declares no parameter there.
    """
    grouped: dict[str, dict[str, Any]] = {}
    for param in parameters:
        param = resolver.resolve_maybe(param)
        location = param.get("in")
        container = grouped.setdefault(location, {"type": "object", "properties": {}})

        prop: dict[str, Any] = {}
        if param.get("description"):
            prop["description"] = param["description"]
        prop.update(param.get("schema") or {})
        container["properties"][param["name"]] = prop

        if param.get("required"):
            container.setdefault("required", []).append(param["name"])

    path_params = grouped.pop("path", None)
    query_params = grouped.pop("query", None)
    if grouped:
        names = [p for schema in grouped.values() for p in schema["properties"]]
        raise InvariantError(
            f"Unsupported parameter locations {sorted(map(str, grouped))} for parameters {names}"
        )
    return path_params, query_params
