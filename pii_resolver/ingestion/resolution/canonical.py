"""
Canonical Schema Builder

Collapses type-label synonymy using observed co-occurrence: when the same
value is reported under several pii_type labels, those labels are linked.

Two merge modes:
    one-hop (default): a type's names are itself plus the labels it
        directly shared a value with
    transitive: a type's names are its whole connected component
        (A-B via one value and B-C via another put A, B and C together)
"""

from __future__ import annotations

import logging
from itertools import combinations

from pii_resolver.types import CanonicalType, TypeGroup, ValueGroup
from pii_resolver.utils.clustering import label_components

logger = logging.getLogger(__name__)


def type_relations(
    value_groups: dict[str, ValueGroup],
) -> tuple[dict[str, set[str]], dict[str, set[str]]]:
    """
    Build the type-relation graph from value groups with several labels.

    Returns:
        (neighbours, linking_values): for each type, the labels it shares a
        value with and the value keys that produced those edges
    """
    neighbours: dict[str, set[str]] = {}
    linking_values: dict[str, set[str]] = {}

    for key, group in value_groups.items():
        if len(group.pii_types) < 2:
            continue
        for a, b in combinations(group.pii_types, 2):
            neighbours.setdefault(a, set()).add(b)
            neighbours.setdefault(b, set()).add(a)
        for pii_type in group.pii_types:
            linking_values.setdefault(pii_type, set()).add(key)

    return neighbours, linking_values


def build_canonical_schema(
    type_groups: dict[str, TypeGroup],
    value_groups: dict[str, ValueGroup],
    *,
    transitive: bool = False,
) -> dict[str, CanonicalType]:
    """
    Build one CanonicalType per type group.

    Args:
        type_groups: Type groups of the run
        value_groups: Value groups of the run (source of the edges)
        transitive: Merge whole connected components instead of one hop

    Returns:
        {pii_type: CanonicalType}, in type-group order
    """
    neighbours, linking_values = type_relations(value_groups)

    if transitive:
        edges = [(a, b) for a, related in neighbours.items() for b in related]
        names = label_components(type_groups.keys(), edges)
    else:
        names = {t: {t} | neighbours.get(t, set()) for t in type_groups}

    schema: dict[str, CanonicalType] = {}
    for pii_type, group in type_groups.items():
        schema[pii_type] = CanonicalType(
            canonical_type=pii_type,
            all_type_names=sorted(names.get(pii_type, {pii_type})),
            total_occurrences=group.occurrence_count,
            unique_values_count=group.unique_value_count,
            confidence_breakdown=group.confidence_breakdown.model_copy(),
            files=list(group.files),
            value_match_count=len(linking_values.get(pii_type, ())),
        )

    merged = sum(1 for entry in schema.values() if entry.is_merged)
    logger.debug(
        f"Canonical schema: {len(schema)} types, {merged} merged "
        f"({'transitive' if transitive else 'one-hop'})"
    )
    return schema
