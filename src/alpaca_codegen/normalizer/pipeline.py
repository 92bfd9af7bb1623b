"""Full normalization run over one API description."""

from typing import Any

from alpaca_codegen.logger import log_stage
from alpaca_codegen.normalizer.canonical import canonicalize
from alpaca_codegen.normalizer.classifier import classify_operation
from alpaca_codegen.normalizer.dedup import deduplicate
from alpaca_codegen.normalizer.envelope import strip_envelopes
from alpaca_codegen.normalizer.extra_schemas import EXTRA_SCHEMAS
from alpaca_codegen.normalizer.registry import TypeTable
from alpaca_codegen.parser.base import NormalizedApi
from alpaca_codegen.parser.document import RefResolver, is_ref
from alpaca_codegen.parser.names import CanonicalNames
from alpaca_codegen.parser.operations import iter_operations

CANONICAL_NAME_KEY = "x-canonical-name"


def normalize_api(
    document: dict[str, Any],
    names: CanonicalNames | None = None,
    extra_schemas: dict[str, dict[str, Any]] = EXTRA_SCHEMAS,
    merge_duplicates: bool = False,
) -> NormalizedApi:
    """Classify, strip, canonicalize and deduplicate ``document`` in place.

    ``merge_duplicates`` also folds repeated shapes into their first
    occurrence instead of only reporting them.

    Raises InvariantError on the first operation or schema that does not fit
    the Alpaca operation shape.
    """
    resolver = RefResolver(document)
    table = TypeTable(document)

    with log_stage("classify") as logger:
        count = 0
        for op in iter_operations(document):
            classify_operation(op, resolver, table)
            if names is not None:
                op.operation[CANONICAL_NAME_KEY] = names.resolve_path(op.path)
            count += 1
        logger.info("Classified %d operations, %d schemas registered", count, len(table))

    with log_stage("strip envelope"):
        strip_envelopes(table)

    with log_stage("canonicalize"):
        for _, schema in table.items():
            if not is_ref(schema):
                canonicalize(schema)

    with log_stage("deduplicate") as logger:
        replacements, duplicates = deduplicate(table, extra_schemas, merge_duplicates)
        logger.info("Replaced %d schemas, %d left", len(replacements), len(table))

    return NormalizedApi(document=document, ref_replacements=replacements, duplicates=duplicates)
