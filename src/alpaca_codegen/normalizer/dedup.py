"""Folding of duplicate schemas into the shared extra schemas."""

import copy
from collections import Counter
from typing import Any

from alpaca_codegen.logger import get_logger
from alpaca_codegen.normalizer.canonical import canonicalize, shape_key
from alpaca_codegen.normalizer.registry import TypeTable, ref_to
from alpaca_codegen.parser.base import DuplicateShape
from alpaca_codegen.parser.document import is_ref


def deduplicate(
    table: TypeTable,
    extra_schemas: dict[str, dict[str, Any]],
    merge_duplicates: bool = False,
) -> tuple[dict[str, str], list[DuplicateShape]]:
    """Replace entries shaped like an extra schema with a reference to it.

    Expects the table to be canonicalized already. Returns the reference
    replacements and the shapes that still occur more than once; those are
    only reported, the run goes on. With ``merge_duplicates`` every later
    occurrence of such a shape is also folded into the first one.
    """
    logger = get_logger()
    extras = {name: canonicalize(copy.deepcopy(schema)) for name, schema in extra_schemas.items()}
    extra_keys: dict[str, str] = {}
    for name, schema in extras.items():
        extra_keys.setdefault(shape_key(schema), name)

    replacements: dict[str, str] = {}
    counts: Counter[str] = Counter()
    first_seen: dict[str, str] = {}

    for name, schema in table.items():
        # Extras merged by an earlier run stay as they are.
        if name in extras or is_ref(schema):
            continue
        key = shape_key(schema)
        if key in extra_keys:
            target = extra_keys[key]
        else:
            counts[key] += 1
            target = first_seen.setdefault(key, name)
            if not merge_duplicates or target == name:
                continue

        table.remove(name)
        replacements[ref_to(name)] = ref_to(target)
        logger.debug("%s -> %s", name, target)

    table.merge(extras)

    duplicates = [DuplicateShape(key=key, count=count) for key, count in counts.most_common() if count > 1]
    for dup in duplicates:
        logger.warning("Found %d schemas with the same shape: %s", dup.count, dup.key)

    return replacements, duplicates
