"""
PIIScanner - Document Scan Entry Point

Runs the per-document pipeline: chunk, call the oracle once per chunk,
fold overlapping results. Directory scans produce an ExtractionResults
corpus ready for storage or resolution.

Example:
    >>> scanner = PIIScanner()
    >>> document = await scanner.scan_file("statement.txt")
    >>> print(document.total_pii_found, document.name)

    # Whole directory, sync API
    >>> results = scanner.scan_directory_sync("./documents")
    >>> save_extraction_results(results, "data")
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from pii_resolver.errors import ConfigurationError, ExtractionError, InvalidArgumentError
from pii_resolver.ingestion.chunking import chunk_text
from pii_resolver.ingestion.extraction import extract_pii_from_chunks
from pii_resolver.ingestion.resolution import deduplicate_chunk_results
from pii_resolver.types import DocumentScanResult, ExtractionResults, IndividualRecord

if TYPE_CHECKING:
    from pii_resolver.config.settings import ResolverConfig
    from pii_resolver.providers.base import LLMProvider

logger = logging.getLogger(__name__)


def build_extraction_results(records: list[IndividualRecord]) -> ExtractionResults:
    """Wrap scanned records into a corpus stamped with the current UTC time."""
    return ExtractionResults(
        timestamp=datetime.now(timezone.utc).isoformat(),
        total_files_processed=len(records),
        total_pii_found=sum(len(r.pii_candidates) for r in records),
        files=records,
    )


class PIIScanner:
    """
    Scans documents for PII through the extraction oracle.

    Args:
        config: Optional configuration. Uses defaults if not provided.
        llm: Optional provider. Built from config on first use if omitted.
    """

    def __init__(
        self,
        config: "ResolverConfig | None" = None,
        llm: "LLMProvider | None" = None,
    ) -> None:
        if config is None:
            from pii_resolver.config import ResolverConfig
            config = ResolverConfig()
        self._config = config
        self._llm = llm

    def _create_llm_provider(self) -> "LLMProvider":
        """Create LLM provider based on config."""
        provider = self._config.llm_provider.lower()

        if provider == "openai":
            if not self._config.openai_api_key:
                raise ConfigurationError(
                    "OPENAI_API_KEY is not set. Export it or pass openai_api_key in the config."
                )
            from pii_resolver.providers.llm.openai import OpenAILLMProvider
            return OpenAILLMProvider(
                api_key=self._config.openai_api_key,
                model=self._config.llm_model,
            )
        raise ConfigurationError(f"Unknown LLM provider: {provider}")

    @property
    def llm(self) -> "LLMProvider":
        """The oracle provider, created on first access."""
        if self._llm is None:
            self._llm = self._create_llm_provider()
        return self._llm

    @property
    def config(self) -> "ResolverConfig":
        return self._config

    # === Scanning ===

    async def scan_text(
        self,
        text: str,
        *,
        file_name: str = "<text>",
        file_path: str | None = None,
    ) -> DocumentScanResult:
        """
        Scan one document's text.

        Chunk failures are recorded in errors and never abort the scan.

        Raises:
            InvalidArgumentError: If configured chunk size or overlap is out of range
        """
        chunks = chunk_text(
            text,
            self._config.chunk_size,
            self._config.overlap_percentage,
        )
        extractions = await extract_pii_from_chunks(
            chunks,
            self.llm,
            concurrency=self._config.extraction_concurrency,
        )

        successful = [e.result for e in extractions if e.result is not None]
        errors = [e.error for e in extractions if e.error is not None]
        combined = deduplicate_chunk_results(successful)

        logger.info(
            f"Scanned {file_name}: {len(chunks)} chunks, "
            f"{len(combined.pii_candidates)} PII candidates"
            + (f", {len(errors)} chunks failed" if errors else "")
        )

        return DocumentScanResult(
            file_name=file_name,
            file_path=file_path or file_name,
            chunks_scanned=len(chunks),
            chunks_failed=len(errors),
            total_pii_found=len(combined.pii_candidates),
            results=successful,
            combined_pii=combined.pii_candidates,
            name=combined.name,
            address=combined.address,
            phone=combined.phone,
            errors=errors,
        )

    async def scan_file(self, path: str | Path) -> DocumentScanResult:
        """
        Read a UTF-8 text file and scan it.

        Raises:
            OSError: If the file cannot be read
            ExtractionError: If the file is not valid UTF-8
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"{path.name} is not valid UTF-8 text: {e}") from e
        return await self.scan_text(text, file_name=path.name, file_path=str(path))

    async def scan_directory(
        self,
        path: str | Path,
        *,
        pattern: str | None = None,
        on_progress: Callable[[str, int, int], None] | None = None,
    ) -> ExtractionResults:
        """
        Scan every matching file in a directory.

        A document that cannot be scanned is logged and left out of the
        corpus; the remaining documents still run.

        Args:
            path: Directory path
            pattern: Glob pattern (default: config.file_pattern)
            on_progress: Callback (filename, current, total)

        Returns:
            ExtractionResults for the scanned documents
        """
        path = Path(path)
        if not path.is_dir():
            raise InvalidArgumentError(f"Not a directory: {path}")

        # Raises on bad chunking options or provider config before any file is read
        chunk_text("", self._config.chunk_size, self._config.overlap_percentage)
        _ = self.llm

        files = sorted(p for p in path.glob(pattern or self._config.file_pattern) if p.is_file())
        logger.info(f"Found {len(files)} files in {path}")

        records = []
        for i, file_path in enumerate(files):
            if on_progress:
                on_progress(file_path.name, i + 1, len(files))
            try:
                document = await self.scan_file(file_path)
            except ConfigurationError:
                raise
            except Exception as e:
                logger.warning(f"Skipping {file_path.name}: {e}")
                continue
            records.append(document.to_record())

        return build_extraction_results(records)

    # Sync wrappers
    def scan_text_sync(self, text: str, **kwargs: Any) -> DocumentScanResult:
        """Synchronous version of scan_text()."""
        return asyncio.run(self.scan_text(text, **kwargs))

    def scan_file_sync(self, path: str | Path) -> DocumentScanResult:
        """Synchronous version of scan_file()."""
        return asyncio.run(self.scan_file(path))

    def scan_directory_sync(self, path: str | Path, **kwargs: Any) -> ExtractionResults:
        """Synchronous version of scan_directory()."""
        return asyncio.run(self.scan_directory(path, **kwargs))
