"""Tests for the canonical schema builder."""

import pytest

from pii_resolver.ingestion.resolution.canonical import build_canonical_schema, type_relations
from pii_resolver.ingestion.resolution.grouping import group_occurrences
from pii_resolver.types import PIICandidate, PIIOccurrence


def _occ(value, pii_type, confidence="high"):
    return PIIOccurrence(
        candidate=PIICandidate(value=value, pii_type=pii_type, confidence=confidence),
        file_name="a.txt",
        file_path="/docs/a.txt",
    )


@pytest.fixture
def chain():
    """A-B share value1, B-C share value2; A and C never meet."""
    occurrences = [
        _occ("value1", "A"),
        _occ("value1", "B"),
        _occ("value2", "B"),
        _occ("value2", "C"),
        _occ("value3", "D"),
    ]
    value_groups, type_groups = group_occurrences(occurrences)
    return value_groups, type_groups


class TestTypeRelations:
    """Tests for the type-relation graph."""

    def test_edges_and_linking_values(self, chain):
        value_groups, _ = chain
        neighbours, linking = type_relations(value_groups)

        assert neighbours == {"A": {"B"}, "B": {"A", "C"}, "C": {"B"}}
        assert linking == {"A": {"value1"}, "B": {"value1", "value2"}, "C": {"value2"}}


class TestOneHop:
    """Default one-hop merging."""

    def test_direct_neighbours_only(self, chain):
        value_groups, type_groups = chain
        schema = build_canonical_schema(type_groups, value_groups)

        assert schema["A"].all_type_names == ["A", "B"]
        assert schema["B"].all_type_names == ["A", "B", "C"]
        assert schema["C"].all_type_names == ["B", "C"]
        assert schema["D"].all_type_names == ["D"]

    def test_value_match_count(self, chain):
        value_groups, type_groups = chain
        schema = build_canonical_schema(type_groups, value_groups)

        assert schema["B"].value_match_count == 2
        assert schema["A"].value_match_count == 1
        assert schema["D"].value_match_count == 0

    def test_unmerged_type(self, chain):
        value_groups, type_groups = chain
        entry = build_canonical_schema(type_groups, value_groups)["D"]

        assert not entry.is_merged
        assert entry.canonical_type == "D"
        assert entry.total_occurrences == 1
        assert entry.unique_values_count == 1
        assert entry.files == ["a.txt"]

    def test_one_entry_per_type_group(self, chain):
        value_groups, type_groups = chain
        schema = build_canonical_schema(type_groups, value_groups)
        assert list(schema) == list(type_groups)


class TestTransitive:
    """Union-find merging across multi-hop chains."""

    def test_chain_is_merged(self, chain):
        value_groups, type_groups = chain
        schema = build_canonical_schema(type_groups, value_groups, transitive=True)

        for label in ("A", "B", "C"):
            assert schema[label].all_type_names == ["A", "B", "C"]
        assert schema["D"].all_type_names == ["D"]

    def test_value_match_count_is_unchanged(self, chain):
        value_groups, type_groups = chain
        schema = build_canonical_schema(type_groups, value_groups, transitive=True)

        assert schema["A"].value_match_count == 1
