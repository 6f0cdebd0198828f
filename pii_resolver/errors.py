"""
Error Taxonomy

All errors raised by pii_resolver derive from PIIResolverError.

Recoverable (caught and logged by the scan pipeline):
    - ExtractionError: the oracle call for one chunk failed
    - SchemaValidationError: oracle output or a persisted corpus failed validation

Caller misuse (never caught internally):
    - InvalidArgumentError: bad chunk size/overlap, out-of-range lookups
    - NotLoadedError: resolution or reader queries before ingestion
    - ConfigurationError: missing provider credentials
"""

from __future__ import annotations


class PIIResolverError(Exception):
    """Base class for all pii_resolver errors."""


class ConfigurationError(PIIResolverError):
    """Provider configuration is incomplete (e.g. missing API key)."""


class InvalidArgumentError(PIIResolverError, ValueError):
    """An argument is outside its allowed range."""


class ExtractionError(PIIResolverError):
    """Extraction failed for a chunk or could not start for a document."""


class SchemaValidationError(ExtractionError):
    """Structured data did not match its expected schema."""


class NotLoadedError(PIIResolverError):
    """An operation needs a loaded corpus but none is available."""
