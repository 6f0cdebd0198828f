"""
Tests for the PIIScanner facade.

Tests cover:
- Provider factory and configuration errors
- Single-document scans with chunk failures
- Directory scans with per-document isolation
- Convenience functions
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pii_resolver.api.scanner import PIIScanner
from pii_resolver.config import ResolverConfig
from pii_resolver.errors import ConfigurationError, ExtractionError, InvalidArgumentError
from pii_resolver.types import PIICandidate, PIIExtractionResult


def _result(*candidates, **identity):
    return PIIExtractionResult(
        pii_candidates=[
            PIICandidate(value=v, pii_type=t, confidence=c) for v, t, c in candidates
        ],
        **identity,
    )


def _scanner(llm, **config):
    config.setdefault("openai_api_key", "test-key")
    return PIIScanner(ResolverConfig(**config), llm=llm)


class TestScannerProviderFactory:
    """Tests for provider creation."""

    def test_create_llm_provider_openai(self):
        config = ResolverConfig(llm_provider="openai", openai_api_key="test-key")
        scanner = PIIScanner(config)

        with patch("pii_resolver.providers.llm.openai.OpenAILLMProvider") as mock_provider:
            mock_provider.return_value = MagicMock()
            scanner._create_llm_provider()
            mock_provider.assert_called_once_with(api_key="test-key", model=config.llm_model)

    def test_missing_api_key_raises(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        scanner = PIIScanner(ResolverConfig())

        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            _ = scanner.llm

    def test_unknown_provider_raises(self):
        scanner = PIIScanner(ResolverConfig(llm_provider="unknown", openai_api_key="k"))

        with pytest.raises(ConfigurationError, match="Unknown LLM provider"):
            scanner._create_llm_provider()

    def test_provider_is_lazy(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        PIIScanner(ResolverConfig())  # no error until first use


class TestScanText:
    """Tests for scan_text."""

    @pytest.mark.asyncio
    async def test_overlapping_chunks_are_deduplicated(self):
        llm = AsyncMock()
        llm.generate_structured = AsyncMock(side_effect=[
            _result(("123-45-6789", "SSN", "medium"), name="Emily Chen"),
            _result(("123-45-6789", "SSN", "high"), ("emily@x.com", "Email", "high"), name="E. Chen"),
        ])
        scanner = _scanner(llm, chunk_size=10, overlap_percentage=30)

        document = await scanner.scan_text("x" * 15, file_name="emily.txt")

        assert document.chunks_scanned == 2
        assert document.chunks_failed == 0
        assert document.total_pii_found == 2
        assert document.combined_pii[0].confidence == "high"
        assert document.name == "Emily Chen"
        assert len(document.results) == 2
        assert document.file_path == "emily.txt"

    @pytest.mark.asyncio
    async def test_chunk_failure_is_recorded(self):
        llm = AsyncMock()
        llm.generate_structured = AsyncMock(side_effect=[
            RuntimeError("timeout"),
            _result(("AB123", "Passport Number", "high")),
        ])
        scanner = _scanner(llm, chunk_size=10, overlap_percentage=0)

        document = await scanner.scan_text("x" * 20)

        assert document.chunks_scanned == 2
        assert document.chunks_failed == 1
        assert "timeout" in document.errors[0]
        assert [c.value for c in document.combined_pii] == ["AB123"]

    @pytest.mark.asyncio
    async def test_invalid_chunking_raises(self):
        scanner = _scanner(AsyncMock(), chunk_size=0)

        with pytest.raises(InvalidArgumentError):
            await scanner.scan_text("text")

    def test_to_record(self):
        llm = AsyncMock()
        llm.generate_structured = AsyncMock(return_value=_result(("1", "SSN", "high"), phone="555"))
        scanner = _scanner(llm)

        record = scanner.scan_text_sync("text", file_name="a.txt", file_path="/docs/a.txt").to_record()

        assert record.file_path == "/docs/a.txt"
        assert record.phone == "555"
        assert len(record.pii_candidates) == 1


class TestScanDirectory:
    """Tests for scan_directory."""

    @pytest.mark.asyncio
    async def test_scans_matching_files_in_order(self, tmp_path):
        (tmp_path / "b.txt").write_text("bbb")
        (tmp_path / "a.txt").write_text("aaa")
        (tmp_path / "skip.md").write_text("mmm")
        llm = AsyncMock()
        llm.generate_structured = AsyncMock(return_value=_result(("1", "SSN", "high")))
        progress = []

        results = await _scanner(llm).scan_directory(
            tmp_path, on_progress=lambda name, i, n: progress.append((name, i, n))
        )

        assert [f.file_name for f in results.files] == ["a.txt", "b.txt"]
        assert results.total_files_processed == 2
        assert results.total_pii_found == 2
        assert progress == [("a.txt", 1, 2), ("b.txt", 2, 2)]
        assert results.timestamp.endswith("+00:00")

    @pytest.mark.asyncio
    async def test_unreadable_document_is_skipped(self, tmp_path):
        (tmp_path / "bad.txt").write_bytes(b"\xff\xfe\xfa")
        (tmp_path / "good.txt").write_text("ok")
        llm = AsyncMock()
        llm.generate_structured = AsyncMock(return_value=_result())

        results = await _scanner(llm).scan_directory(tmp_path)

        assert [f.file_name for f in results.files] == ["good.txt"]

    @pytest.mark.asyncio
    async def test_not_a_directory(self, tmp_path):
        with pytest.raises(InvalidArgumentError):
            await _scanner(AsyncMock()).scan_directory(tmp_path / "missing")

    @pytest.mark.asyncio
    async def test_custom_pattern(self, tmp_path):
        (tmp_path / "a.txt").write_text("aaa")
        (tmp_path / "b.log").write_text("bbb")
        llm = AsyncMock()
        llm.generate_structured = AsyncMock(return_value=_result())

        results = await _scanner(llm).scan_directory(tmp_path, pattern="*.log")

        assert [f.file_name for f in results.files] == ["b.log"]


class TestConvenience:
    """Tests for convenience functions."""

    def test_resolve_file(self, tmp_path):
        from pii_resolver import resolve_file, save_extraction_results
        from pii_resolver.api.scanner import build_extraction_results
        from pii_resolver.types import IndividualRecord

        record = IndividualRecord(
            file_name="a.txt",
            file_path="/a.txt",
            pii_candidates=[
                PIICandidate(value="x", pii_type="SSN", confidence="high"),
                PIICandidate(value="x", pii_type="Tax ID", confidence="medium"),
            ],
        )
        path = save_extraction_results(build_extraction_results([record]), tmp_path)

        result = resolve_file(path)

        assert result.summary.value_conflicts_count == 1


class TestScanFileErrors:
    """Tests for document-level failures."""

    @pytest.mark.asyncio
    async def test_non_utf8_file_raises_extraction_error(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(ExtractionError, match="bad.txt"):
            await _scanner(AsyncMock()).scan_file(path)

    @pytest.mark.asyncio
    async def test_missing_api_key_raises_before_reading_files(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        progress = []

        with pytest.raises(ConfigurationError):
            await PIIScanner(ResolverConfig()).scan_directory(
                tmp_path, on_progress=lambda *args: progress.append(args)
            )

        assert progress == []
