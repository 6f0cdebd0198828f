"""
Utility Functions

Core algorithms and helper functions used throughout the package.

Modules:
    clustering: Union-Find over labels for transitive type merging
    text: Value normalization and identity-type classification
"""

from pii_resolver.utils.clustering import UnionFind, label_components
from pii_resolver.utils.text import (
    IDENTITY_TYPE_LEXICON,
    grouping_key,
    is_identity_type,
    normalize_value,
)

__all__ = [
    "UnionFind",
    "label_components",
    "IDENTITY_TYPE_LEXICON",
    "grouping_key",
    "is_identity_type",
    "normalize_value",
]
