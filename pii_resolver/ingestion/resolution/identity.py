"""
Identity Grouping

Record-level join on the primary identity fields (name, address, phone).
Works on whole IndividualRecords, not on filtered occurrences: two
documents land in the same group when they report the same identity
value, whatever their candidates say.
"""

from __future__ import annotations

from collections.abc import Iterable

from pii_resolver.types import FileRef, IdentityGroup, IdentityGroups, IndividualRecord
from pii_resolver.utils.text import grouping_key

IDENTITY_FIELDS = ("name", "address", "phone")


def group_by_identity(
    records: Iterable[IndividualRecord],
    *,
    normalize_values: bool = True,
) -> IdentityGroups:
    """
    Group documents by shared name, address and phone.

    Each group keeps the first-seen original spelling as its value.
    """
    groups = IdentityGroups()

    for record in records:
        for field, value in record.identity_fields().items():
            by_key = groups.by_field(field)  # type: ignore[arg-type]
            key = grouping_key(value, normalize_values)
            group = by_key.get(key)
            if group is None:
                group = by_key[key] = IdentityGroup(value=value, field=field)  # type: ignore[arg-type]
            group.files.append(FileRef(file_name=record.file_name, file_path=record.file_path))
            group.count += 1

    return groups
