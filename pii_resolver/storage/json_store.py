"""
JSON Corpus Store

Persists ExtractionResults as a single JSON document:

    {
      "timestamp": "2026-01-01T00:00:00+00:00",
      "total_files_processed": 2,
      "total_pii_found": 17,
      "files": [IndividualRecord, ...]
    }

Files are named pii-extraction-results-<epoch_ms>.json.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from pydantic import ValidationError

from pii_resolver.errors import SchemaValidationError
from pii_resolver.types import ExtractionResults

logger = logging.getLogger(__name__)

RESULTS_FILE_PREFIX = "pii-extraction-results-"


def results_file_name(epoch_ms: int | None = None) -> str:
    """File name for a results document written at epoch_ms (now if None)."""
    if epoch_ms is None:
        epoch_ms = time.time_ns() // 1_000_000
    return f"{RESULTS_FILE_PREFIX}{epoch_ms}.json"


def save_extraction_results(
    results: ExtractionResults,
    output_dir: str | Path = "data",
) -> Path:
    """
    Write a corpus to output_dir.

    Args:
        results: Corpus to persist
        output_dir: Directory to write into (created if missing)

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    path = output_dir / results_file_name()
    payload = results.model_dump(mode="json")
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    logger.info(f"Saved {results.total_files_processed} documents to {path}")
    return path


def load_extraction_results(path: str | Path) -> ExtractionResults:
    """
    Read and validate a corpus file.

    Raises:
        FileNotFoundError: If the file does not exist
        SchemaValidationError: If the content is not valid JSON or not a corpus
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Extraction results not found: {path}")

    raw = path.read_text(encoding="utf-8")
    try:
        return ExtractionResults.model_validate_json(raw)
    except ValidationError as e:
        raise SchemaValidationError(f"Invalid extraction results in {path}: {e}") from e


def latest_results_file(directory: str | Path) -> Path | None:
    """Most recent results file in directory, by the timestamp in its name."""
    directory = Path(directory)
    if not directory.is_dir():
        return None

    def epoch(p: Path) -> int:
        stem = p.stem.removeprefix(RESULTS_FILE_PREFIX)
        return int(stem) if stem.isdigit() else -1

    candidates = sorted(directory.glob(f"{RESULTS_FILE_PREFIX}*.json"), key=epoch)
    return candidates[-1] if candidates else None
