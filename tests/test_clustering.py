"""Tests for union-find clustering and text helpers."""

from pii_resolver.utils.clustering import UnionFind, label_components
from pii_resolver.utils.text import grouping_key, is_identity_type, normalize_value


class TestUnionFind:
    """Tests for UnionFind."""

    def test_union_and_find(self):
        uf = UnionFind(["a", "b", "c"])

        assert uf.union("a", "b")
        assert not uf.union("b", "a")
        assert uf.connected("a", "b")
        assert not uf.connected("a", "c")

    def test_elements_registered_on_first_use(self):
        uf = UnionFind()
        uf.union("x", "y")
        assert sorted(map(sorted, uf.get_components())) == [["x", "y"]]

    def test_components(self):
        uf = UnionFind(range(5))
        uf.union(0, 1)
        uf.union(3, 4)
        uf.union(1, 4)

        components = sorted(sorted(c) for c in uf.get_components())
        assert components == [[0, 1, 3, 4], [2]]


class TestLabelComponents:
    """Tests for label_components."""

    def test_isolated_labels_map_to_themselves(self):
        assert label_components(["a"], []) == {"a": {"a"}}

    def test_chain(self):
        mapping = label_components(["a", "b", "c", "d"], [("a", "b"), ("b", "c")])

        assert mapping["a"] == {"a", "b", "c"}
        assert mapping["c"] == {"a", "b", "c"}
        assert mapping["d"] == {"d"}


class TestTextHelpers:
    """Tests for normalization and identity-type matching."""

    def test_normalize_value(self):
        assert normalize_value("  John DOE \n") == "john doe"

    def test_grouping_key(self):
        assert grouping_key(" A ", True) == "a"
        assert grouping_key(" A ", False) == " A "

    def test_identity_type_substring_match(self):
        assert is_identity_type("Customer Name")
        assert is_identity_type("PHONE NUMBER")
        assert is_identity_type("Previous Address")
        assert is_identity_type("Username")

    def test_non_identity_types(self):
        for label in ("SSN", "Email", "Account Number", "Date of Birth", "VIN"):
            assert not is_identity_type(label)
