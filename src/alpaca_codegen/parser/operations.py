"""Operation enumeration over the path/method matrix of a document."""

import re
from typing import Any, Iterator

from alpaca_codegen.parser.base import HttpMethod, Operation

_PLACEHOLDER = re.compile(r"^\{.*\}$")


def path_id(path: str) -> str:
    """/telescope/{device_number}/connected -> telescope_connected"""
    segments = path.split("/")[1:]
    return "_".join(s for s in segments if not _PLACEHOLDER.match(s))


def iter_operations(document: dict[str, Any]) -> Iterator[Operation]:
    """Yield every operation in path order, then in HttpMethod order.

    The order decides the insertion order into the type table, so it has to
    stay stable between runs. Call again to restart.
    """
    for path, methods in (document.get("paths") or {}).items():
        pid = path_id(path)
        methods = methods or {}
        for method in HttpMethod:
            operation = methods.get(method.value)
            if operation:
                yield Operation(path=path, method=method, id=f"{method.value}_{pid}", operation=operation)
