"""
Conflict Detection

Three independent emission rules. Conflicts are never deduplicated
against each other, and an empty list is a valid result.

    value_type_mismatch: one value seen under 2+ types
        severity high if more than 2 types, else medium
    type_value_mismatch: one type seen with 2+ distinct values
        severity high if more than 3 values, else medium
    confidence_issue: one per low-confidence occurrence, severity low
"""

from __future__ import annotations

from pii_resolver.types import PIIConflict, PIIOccurrence, TypeGroup, ValueGroup


def value_type_conflicts(value_groups: dict[str, ValueGroup]) -> list[PIIConflict]:
    conflicts = []
    for group in value_groups.values():
        if not group.has_type_conflict:
            continue
        conflicts.append(
            PIIConflict(
                conflict_type="value_type_mismatch",
                description=(
                    f'Value "{group.value}" was identified as multiple PII types: '
                    f"{', '.join(group.pii_types)}"
                ),
                value=group.value,
                files=list(group.files),
                severity="high" if len(group.pii_types) > 2 else "medium",
                occurrences=list(group.occurrences),
            )
        )
    return conflicts


def type_value_conflicts(type_groups: dict[str, TypeGroup]) -> list[PIIConflict]:
    conflicts = []
    for group in type_groups.values():
        if not group.has_value_conflict:
            continue
        conflicts.append(
            PIIConflict(
                conflict_type="type_value_mismatch",
                description=(
                    f'PII type "{group.pii_type}" appears with '
                    f"{group.unique_value_count} different values"
                ),
                pii_type=group.pii_type,
                files=list(group.files),
                severity="high" if group.unique_value_count > 3 else "medium",
                occurrences=list(group.occurrences),
            )
        )
    return conflicts


def confidence_conflicts(occurrences: list[PIIOccurrence]) -> list[PIIConflict]:
    conflicts = []
    for occurrence in occurrences:
        candidate = occurrence.candidate
        if candidate.confidence != "low":
            continue
        conflicts.append(
            PIIConflict(
                conflict_type="confidence_issue",
                description=(
                    f'Low confidence PII: "{candidate.value}" as "{candidate.pii_type}"'
                ),
                value=candidate.value,
                pii_type=candidate.pii_type,
                files=[occurrence.file_name],
                severity="low",
                occurrences=[occurrence],
            )
        )
    return conflicts


def detect_conflicts(
    value_groups: dict[str, ValueGroup],
    type_groups: dict[str, TypeGroup],
    occurrences: list[PIIOccurrence],
) -> list[PIIConflict]:
    """Run all three rules: value conflicts, then type conflicts, then low confidence."""
    return (
        value_type_conflicts(value_groups)
        + type_value_conflicts(type_groups)
        + confidence_conflicts(occurrences)
    )
