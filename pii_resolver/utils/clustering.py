"""
Clustering Algorithms

Union-Find (Disjoint Set Union) over string labels.

Used by the canonical schema builder when transitive merging is enabled:
type labels that co-occur on a value are unioned, and every connected
component becomes one set of synonymous labels.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable


class UnionFind:
    """
    Union-Find with path compression and union by rank.

    Elements are registered on first use, so the universe does not need
    to be known up front.
    """

    def __init__(self, elements: Iterable[Hashable] = ()) -> None:
        self.parent: dict[Hashable, Hashable] = {}
        self.rank: dict[Hashable, int] = {}
        for element in elements:
            self.add(element)

    def add(self, x: Hashable) -> None:
        """Register x as a singleton if unseen."""
        if x not in self.parent:
            self.parent[x] = x
            self.rank[x] = 0

    def find(self, x: Hashable) -> Hashable:
        """Find root of element x with path compression."""
        self.add(x)
        if self.parent[x] != x:
            self.parent[x] = self.find(self.parent[x])
        return self.parent[x]

    def union(self, x: Hashable, y: Hashable) -> bool:
        """Union components containing x and y. Returns True if merged."""
        px, py = self.find(x), self.find(y)
        if px == py:
            return False

        if self.rank[px] < self.rank[py]:
            px, py = py, px
        self.parent[py] = px
        if self.rank[px] == self.rank[py]:
            self.rank[px] += 1
        return True

    def connected(self, x: Hashable, y: Hashable) -> bool:
        """Check if x and y are in the same component."""
        return self.find(x) == self.find(y)

    def get_components(self) -> list[list[Hashable]]:
        """Get all components, each in registration order."""
        components: dict[Hashable, list[Hashable]] = {}
        for element in self.parent:
            components.setdefault(self.find(element), []).append(element)
        return list(components.values())


def label_components(
    labels: Iterable[str],
    edges: Iterable[tuple[str, str]],
) -> dict[str, set[str]]:
    """
    Map every label to the full set of labels in its component.

    Args:
        labels: All labels (isolated labels map to themselves)
        edges: Pairs of labels known to be related

    Returns:
        {label: component_labels}
    """
    uf = UnionFind(labels)
    for a, b in edges:
        uf.union(a, b)

    mapping: dict[str, set[str]] = {}
    for component in uf.get_components():
        members = {str(m) for m in component}
        for member in members:
            mapping[member] = members
    return mapping
