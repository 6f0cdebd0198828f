"""
Value and Type Grouping

One pass over a run's occurrences builds two independent maps:

    ValueGroup: key = (optionally normalized) value, any pii_type
    TypeGroup:  key = pii_type, any value

Groups are assembled in private mutable accumulators and finalized into
pydantic models only after the derived flags are computed, so callers
never see a partially built group.

Dict order is first-seen order in the occurrence list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pii_resolver.types import (
    ConfidenceBreakdown,
    PIIOccurrence,
    TypeGroup,
    ValueGroup,
)
from pii_resolver.utils.text import grouping_key

logger = logging.getLogger(__name__)


@dataclass
class _GroupAccumulator:
    """Fields shared by value and type groups."""

    contexts: list[str] = field(default_factory=list)
    all_contexts: list[str] = field(default_factory=list)
    confidence: ConfidenceBreakdown = field(default_factory=ConfidenceBreakdown)
    files: list[str] = field(default_factory=list)
    occurrences: list[PIIOccurrence] = field(default_factory=list)

    def add(self, occurrence: PIIOccurrence) -> None:
        candidate = occurrence.candidate
        if candidate.context:
            self.all_contexts.append(candidate.context)
            if candidate.context not in self.contexts:
                self.contexts.append(candidate.context)
        self.confidence.add(candidate.confidence)
        if occurrence.file_name not in self.files:
            self.files.append(occurrence.file_name)
        self.occurrences.append(occurrence)

    @property
    def has_uncertain(self) -> bool:
        return self.confidence.medium > 0 or self.confidence.low > 0


@dataclass
class _ValueAccumulator(_GroupAccumulator):
    value: str = ""
    pii_types: list[str] = field(default_factory=list)

    def finalize(self) -> ValueGroup:
        has_type_conflict = len(self.pii_types) > 1
        return ValueGroup(
            value=self.value,
            pii_types=list(self.pii_types),
            contexts=list(self.contexts),
            all_contexts=list(self.all_contexts),
            confidence_breakdown=self.confidence,
            files=list(self.files),
            occurrences=list(self.occurrences),
            is_ambiguous=has_type_conflict or self.has_uncertain,
            has_type_conflict=has_type_conflict,
        )


@dataclass
class _TypeAccumulator(_GroupAccumulator):
    pii_type: str = ""
    # grouping key -> first-seen original value
    values: dict[str, str] = field(default_factory=dict)

    def finalize(self) -> TypeGroup:
        unique_value_count = len(self.values)
        has_value_conflict = unique_value_count > 1
        return TypeGroup(
            pii_type=self.pii_type,
            values=list(self.values.values()),
            unique_value_count=unique_value_count,
            contexts=list(self.contexts),
            all_contexts=list(self.all_contexts),
            confidence_breakdown=self.confidence,
            files=list(self.files),
            occurrences=list(self.occurrences),
            is_ambiguous=has_value_conflict or self.has_uncertain,
            has_value_conflict=has_value_conflict,
        )


def group_occurrences(
    occurrences: list[PIIOccurrence],
    *,
    normalize_values: bool = True,
) -> tuple[dict[str, ValueGroup], dict[str, TypeGroup]]:
    """
    Build value groups and type groups in a single pass.

    Args:
        occurrences: Filtered occurrences of one run
        normalize_values: Trim + lowercase values to build value keys

    Returns:
        (value_groups, type_groups), keyed by grouping key and pii_type
    """
    by_value: dict[str, _ValueAccumulator] = {}
    by_type: dict[str, _TypeAccumulator] = {}

    for occurrence in occurrences:
        candidate = occurrence.candidate
        key = grouping_key(candidate.value, normalize_values)

        value_acc = by_value.get(key)
        if value_acc is None:
            value_acc = by_value[key] = _ValueAccumulator(value=candidate.value)
        if candidate.pii_type not in value_acc.pii_types:
            value_acc.pii_types.append(candidate.pii_type)
        value_acc.add(occurrence)

        type_acc = by_type.get(candidate.pii_type)
        if type_acc is None:
            type_acc = by_type[candidate.pii_type] = _TypeAccumulator(
                pii_type=candidate.pii_type
            )
        type_acc.values.setdefault(key, candidate.value)
        type_acc.add(occurrence)

    value_groups = {key: acc.finalize() for key, acc in by_value.items()}
    type_groups = {key: acc.finalize() for key, acc in by_type.items()}

    logger.debug(
        f"Grouped {len(occurrences)} occurrences into "
        f"{len(value_groups)} value groups, {len(type_groups)} type groups"
    )
    return value_groups, type_groups
