"""Tests for corpus persistence and the extraction reader."""

import json

import pytest

from pii_resolver.errors import InvalidArgumentError, NotLoadedError, SchemaValidationError
from pii_resolver.storage import (
    ExtractionReader,
    latest_results_file,
    load_extraction_results,
    save_extraction_results,
)
from pii_resolver.types import ExtractionResults, IndividualRecord, PIICandidate


def _candidate(value, pii_type, confidence="high", context=None):
    return PIICandidate(value=value, pii_type=pii_type, confidence=confidence, context=context)


@pytest.fixture
def corpus():
    return ExtractionResults(
        timestamp="2026-01-01T00:00:00+00:00",
        total_files_processed=2,
        total_pii_found=5,
        files=[
            IndividualRecord(
                file_name="emily_bank.txt",
                file_path="/docs/emily_bank.txt",
                name="Emily Chen",
                pii_candidates=[
                    _candidate("123-45-6789", "SSN", "high", "tax section"),
                    _candidate("4111 1111 1111 1111", "Credit Card Number", "medium", "payments"),
                    _candidate("emily@example.com", "Email", "low", "tax section"),
                ],
            ),
            IndividualRecord(
                file_name="john_medical.txt",
                file_path="/docs/john_medical.txt",
                pii_candidates=[
                    _candidate("987-65-4321", "SSN", "high", "intake"),
                    _candidate("POL-7", "Insurance Policy Number", "medium"),
                ],
            ),
        ],
    )


@pytest.fixture
def reader(corpus):
    return ExtractionReader(corpus)


class TestJsonStore:
    """Tests for save/load."""

    def test_save_writes_named_file(self, corpus, tmp_path):
        path = save_extraction_results(corpus, tmp_path / "out")

        assert path.parent == tmp_path / "out"
        assert path.name.startswith("pii-extraction-results-")
        assert path.suffix == ".json"
        data = json.loads(path.read_text())
        assert data["total_files_processed"] == 2
        assert data["files"][0]["pii_candidates"][0]["pii_type"] == "SSN"

    def test_save_then_load(self, corpus, tmp_path):
        path = save_extraction_results(corpus, tmp_path)
        assert load_extraction_results(path) == corpus

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_extraction_results(tmp_path / "nope.json")

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SchemaValidationError):
            load_extraction_results(path)

    def test_load_wrong_shape(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"files": [{"file_name": "a"}]}))
        with pytest.raises(SchemaValidationError):
            load_extraction_results(path)

    def test_bad_confidence_is_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({
            "timestamp": "t",
            "total_files_processed": 1,
            "total_pii_found": 1,
            "files": [{
                "file_name": "a",
                "file_path": "/a",
                "pii_candidates": [{"value": "x", "pii_type": "SSN", "confidence": "certain"}],
            }],
        }))
        with pytest.raises(SchemaValidationError):
            load_extraction_results(path)

    def test_latest_results_file(self, tmp_path):
        for ts in (100, 2000, 30):
            (tmp_path / f"pii-extraction-results-{ts}.json").write_text("{}")

        assert latest_results_file(tmp_path).name == "pii-extraction-results-2000.json"
        assert latest_results_file(tmp_path / "missing") is None


class TestReaderNotLoaded:
    """Every query needs loaded data."""

    @pytest.mark.parametrize(
        "method,args",
        [
            ("get_all_results", ()),
            ("get_all_candidates", ()),
            ("get_by_file_name", ("a",)),
            ("get_by_file_index", (0,)),
            ("get_unique_types", ()),
            ("get_by_type", ("SSN",)),
            ("get_by_confidence", ("high",)),
            ("get_statistics", ()),
            ("get_unique_contexts", ()),
            ("get_all_contexts", ()),
            ("aggregate_types", ()),
            ("get_aggregated_type", ("SSN",)),
        ],
    )
    def test_raises_before_load(self, method, args):
        with pytest.raises(NotLoadedError):
            getattr(ExtractionReader(), method)(*args)

    def test_query_raises_before_load(self):
        with pytest.raises(NotLoadedError):
            ExtractionReader().query(confidence="high")

    def test_load_from_file(self, corpus, tmp_path):
        path = save_extraction_results(corpus, tmp_path)
        reader = ExtractionReader()

        reader.load_from_file(path)

        assert reader.is_loaded
        assert reader.get_statistics().total_files == 2


class TestReaderQueries:
    """Tests for lookups and query filters."""

    def test_get_by_file_name_exact(self, reader):
        assert len(reader.get_by_file_name("emily_bank.txt")) == 3
        assert reader.get_by_file_name("emily") == []

    def test_get_by_file_index_bounds(self, reader):
        assert reader.get_by_file_index(1).file_name == "john_medical.txt"
        with pytest.raises(InvalidArgumentError):
            reader.get_by_file_index(2)
        with pytest.raises(InvalidArgumentError):
            reader.get_by_file_index(-1)

    def test_query_type_substring_case_insensitive(self, reader):
        values = [c.value for c in reader.query(pii_type="ssn")]
        assert values == ["123-45-6789", "987-65-4321"]

    def test_query_file_name_substring(self, reader):
        values = [c.value for c in reader.query(file_name="john")]
        assert values == ["987-65-4321", "POL-7"]

    def test_query_unknown_file_is_empty(self, reader):
        assert reader.query(file_name="nobody") == []

    def test_query_combined_filters(self, reader):
        result = reader.query(confidence="high", search_value="987", file_name=".txt")
        assert result == []  # first matching file is emily_bank.txt

    def test_query_search_value(self, reader):
        assert [c.value for c in reader.query(search_value="EMILY@")] == ["emily@example.com"]

    def test_unique_types_sorted(self, reader):
        assert reader.get_unique_types() == [
            "Credit Card Number", "Email", "Insurance Policy Number", "SSN",
        ]

    def test_get_by_type_exact(self, reader):
        assert len(reader.get_by_type("SSN")) == 2
        assert reader.get_by_type("ssn") == []

    def test_get_by_confidence(self, reader):
        assert [c.value for c in reader.get_by_confidence("medium")] == [
            "4111 1111 1111 1111", "POL-7",
        ]


class TestReaderStatistics:
    """Tests for statistics and aggregation."""

    def test_statistics(self, reader):
        stats = reader.get_statistics()

        assert stats.total_pii_candidates == 5
        assert (stats.pii_by_confidence.high, stats.pii_by_confidence.medium, stats.pii_by_confidence.low) == (2, 2, 1)
        assert stats.pii_by_type["SSN"] == 2
        assert stats.files_summary[0].total_pii == 3
        assert stats.files_summary[1].confidence_breakdown.medium == 1

    def test_contexts(self, reader):
        assert reader.get_all_contexts() == ["tax section", "payments", "tax section", "intake"]
        assert reader.get_unique_contexts() == ["intake", "payments", "tax section"]

    def test_aggregate_types_sorted_by_count(self, reader):
        aggregation = reader.aggregate_types()

        assert aggregation.pii_types[0].pii_type == "SSN"
        assert aggregation.pii_types[0].count == 2
        assert aggregation.pii_types[0].unique_contexts == ["tax section", "intake"]
        assert len(aggregation.all_contexts) == 4

    def test_get_aggregated_type(self, reader):
        entry = reader.get_aggregated_type("Email")

        assert entry.count == 1
        assert entry.confidence_breakdown.low == 1
        assert reader.get_aggregated_type("VIN") is None
