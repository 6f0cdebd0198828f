"""
Storage

The corpus is a single JSON document per scan run.

Modules:
    json_store: Save/load ExtractionResults
    reader: Read-only queries and statistics over a loaded corpus

Directory Structure:
    data/
    ├── pii-extraction-results-1700000000000.json
    └── pii-extraction-results-1700000123456.json
"""

from pii_resolver.storage.json_store import (
    latest_results_file,
    load_extraction_results,
    save_extraction_results,
)
from pii_resolver.storage.reader import ExtractionReader

__all__ = [
    "ExtractionReader",
    "latest_results_file",
    "load_extraction_results",
    "save_extraction_results",
]
