"""
PII Extractor

Sends chunks to the extraction oracle and collects structured results.

A chunk whose oracle call fails is logged and recorded with its error;
it never cancels sibling chunks and never aborts the document.

Example:
    >>> from pii_resolver.providers.llm import OpenAILLMProvider
    >>> llm = OpenAILLMProvider()
    >>> extractions = await extract_pii_from_chunks(chunks, llm, concurrency=4)
    >>> ok = [e.result for e in extractions if e.ok]
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from pii_resolver.errors import ExtractionError, SchemaValidationError
from pii_resolver.types import ChunkExtraction, PIIExtractionResult, TextChunk

if TYPE_CHECKING:
    from pii_resolver.providers.base import LLMProvider

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# System Prompt
# -----------------------------------------------------------------------------

PII_SCANNER_SYSTEM_PROMPT = """\
You are a PII (Personally Identifiable Information) scanner. Identify and extract
every piece of personally identifiable information in the provided text.

PII includes, among others:
- Names
- Social Security Numbers
- Driver's License Numbers
- Passport Numbers
- Credit Card Numbers
- Bank Account Numbers
- Phone Numbers
- Email Addresses
- Dates of Birth
- Home Addresses
- Employer Information
- Medical Information
- Financial Information
- Vehicle Identification Numbers
- License Plate Numbers
- Policy Numbers

For each PII candidate:
1. Extract the exact value as it appears in the text
2. Choose the most appropriate PII type label
3. Rate your confidence: high, medium, or low
4. Give brief context about where it was found

If the text is about one individual, also fill in their name, address and phone.

Be thorough but avoid false positives. Mark anything that looks like PII but is
uncertain with "low" confidence."""

_EXTRACTION_USER_TEMPLATE = """\
Extract all PII from the text below.

Text to extract from:
{content}"""


# -----------------------------------------------------------------------------
# Core Extraction Functions
# -----------------------------------------------------------------------------


async def extract_pii_from_chunk(
    chunk: TextChunk,
    llm: "LLMProvider",
) -> PIIExtractionResult:
    """
    Run the oracle on a single chunk.

    Args:
        chunk: The window of text to scan
        llm: LLM provider used as the oracle

    Returns:
        Validated PIIExtractionResult

    Raises:
        SchemaValidationError: If the oracle output does not match the schema
        ExtractionError: If the oracle call itself fails
    """
    prompt = _EXTRACTION_USER_TEMPLATE.format(content=chunk.content)

    try:
        return await llm.generate_structured(
            prompt,
            PIIExtractionResult,
            system=PII_SCANNER_SYSTEM_PROMPT,
        )
    except ValidationError as e:
        raise SchemaValidationError(
            f"Chunk {chunk.index}: schema validation failed: {e}"
        ) from e
    except Exception as e:
        raise ExtractionError(f"Chunk {chunk.index}: extraction failed: {e}") from e


# -----------------------------------------------------------------------------
# Batch Extraction with Concurrency
# -----------------------------------------------------------------------------


async def extract_pii_from_chunks(
    chunks: list[TextChunk],
    llm: "LLMProvider",
    *,
    concurrency: int = 1,
) -> list[ChunkExtraction]:
    """
    Run the oracle on every chunk of a document.

    Args:
        chunks: Windows of one document
        llm: LLM provider used as the oracle
        concurrency: Max concurrent oracle calls (1 = sequential, -1 = unlimited)

    Returns:
        One ChunkExtraction per chunk, ordered by chunk index
    """
    if not chunks:
        return []

    async def extract_one(chunk: TextChunk) -> ChunkExtraction:
        try:
            result = await extract_pii_from_chunk(chunk, llm)
        except ExtractionError as e:
            logger.warning(f"Skipping chunk {chunk.index}: {e}")
            return ChunkExtraction(index=chunk.index, error=str(e))
        logger.debug(
            f"Chunk {chunk.index}: {len(result.pii_candidates)} PII candidates"
        )
        return ChunkExtraction(index=chunk.index, result=result)

    if concurrency == 1:
        extractions = [await extract_one(chunk) for chunk in chunks]
    elif concurrency == -1:
        extractions = list(await asyncio.gather(*(extract_one(c) for c in chunks)))
    else:
        semaphore = asyncio.Semaphore(max(concurrency, 1))

        async def extract_with_semaphore(chunk: TextChunk) -> ChunkExtraction:
            async with semaphore:
                return await extract_one(chunk)

        extractions = list(
            await asyncio.gather(*(extract_with_semaphore(c) for c in chunks))
        )

    # Later-chunk-wins dedup depends on chunk order
    return sorted(extractions, key=lambda e: e.index)
