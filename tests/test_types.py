"""Tests for data model types."""

import pytest
from pydantic import ValidationError

from pii_resolver.types import (
    ChunkExtraction,
    ConfidenceBreakdown,
    DocumentScanResult,
    IdentityGroup,
    IdentityGroups,
    IndividualRecord,
    PIICandidate,
    PIIExtractionResult,
    ResolutionOptions,
    TextChunk,
)


class TestPIICandidate:
    """Tests for PIICandidate."""

    def test_valid(self):
        candidate = PIICandidate(value="123-45-6789", pii_type="SSN", confidence="high")
        assert candidate.context is None

    def test_rejects_unknown_confidence(self):
        with pytest.raises(ValidationError):
            PIICandidate(value="x", pii_type="SSN", confidence="certain")

    def test_is_immutable(self):
        candidate = PIICandidate(value="x", pii_type="SSN", confidence="low")
        with pytest.raises(ValidationError):
            candidate.value = "y"

    def test_free_form_type(self):
        """Any label the oracle chooses is accepted."""
        candidate = PIICandidate(value="x", pii_type="Gym Membership ID", confidence="medium")
        assert candidate.pii_type == "Gym Membership ID"


class TestExtractionSchema:
    """Tests for the oracle output schema."""

    def test_defaults(self):
        result = PIIExtractionResult()
        assert result.pii_candidates == []
        assert result.name is None

    def test_from_json(self):
        result = PIIExtractionResult.model_validate_json(
            '{"name": "Jane", "pii_candidates": '
            '[{"value": "1", "pii_type": "SSN", "confidence": "high", "context": "tax"}]}'
        )
        assert result.pii_candidates[0].context == "tax"


class TestRecords:
    """Tests for IndividualRecord and DocumentScanResult."""

    def test_identity_fields_skip_empty(self):
        record = IndividualRecord(file_name="a", file_path="/a", name="Jane", address="")
        assert record.identity_fields() == {"name": "Jane"}

    def test_scan_result_to_record(self):
        candidate = PIICandidate(value="1", pii_type="SSN", confidence="high")
        document = DocumentScanResult(
            file_name="a.txt", file_path="/a.txt", combined_pii=[candidate], address="1 Main St"
        )

        record = document.to_record()

        assert record.pii_candidates == [candidate]
        assert record.address == "1 Main St"


class TestChunkTypes:
    """Tests for TextChunk and ChunkExtraction."""

    def test_chunk_length(self):
        assert TextChunk(index=0, content="abc", start_index=5, end_index=8).length == 3

    def test_chunk_extraction_ok(self):
        assert ChunkExtraction(index=0, result=PIIExtractionResult()).ok
        assert not ChunkExtraction(index=0, error="boom").ok


class TestResolutionTypes:
    """Tests for resolution helper types."""

    def test_confidence_breakdown_add(self):
        breakdown = ConfidenceBreakdown()
        breakdown.add("low")
        breakdown.add("low")
        breakdown.add("high")

        assert (breakdown.high, breakdown.medium, breakdown.low) == (1, 0, 2)
        assert breakdown.total == 3

    def test_options_defaults(self):
        options = ResolutionOptions()

        assert options.ambiguous_only is False
        assert options.min_confidence is None
        assert options.include_high_confidence_in_conflicts is True
        assert options.normalize_values is True
        assert options.transitive_canonical is False

    def test_options_reject_bad_confidence(self):
        with pytest.raises(ValidationError):
            ResolutionOptions(min_confidence="sure")

    def test_identity_groups_by_field(self):
        groups = IdentityGroups(phone={"555": IdentityGroup(value="555", field="phone", count=2)})

        assert groups.by_field("phone")["555"].count == 2
        assert groups.shared()[0].value == "555"
        assert groups.total == 1
