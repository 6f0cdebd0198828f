"""
Text Processing Utilities

Value normalization and identity-type classification shared by the
resolution stages.
"""

from __future__ import annotations

# Substrings that mark a pii_type as one of the document's identity fields.
# Matched case-insensitively anywhere in the label ("Customer Name" -> name).
IDENTITY_TYPE_LEXICON: tuple[str, ...] = (
    "name",
    "customer name",
    "subscriber name",
    "employee name",
    "address",
    "home address",
    "mailing address",
    "billing address",
    "service address",
    "phone",
    "phone number",
    "telephone",
    "contact phone",
)


def normalize_value(value: str) -> str:
    """Trim surrounding whitespace and lowercase."""
    return value.strip().lower()


def grouping_key(value: str, normalize: bool) -> str:
    """Key used to group values: normalized or verbatim."""
    return normalize_value(value) if normalize else value


def is_identity_type(pii_type: str) -> bool:
    """
    Check whether a pii_type label names an identity field.

    Identity labels (name/address/phone and their variants) are handled
    by identity grouping and never enter value/type grouping.
    """
    label = pii_type.lower()
    return any(term in label for term in IDENTITY_TYPE_LEXICON)
