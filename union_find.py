"""
Disjoint-set union over the cells of a rows × cols grid.

Each cell (row, col) is a node with the flat id ``row * cols + col``. The
forest lives in two plain lists (parent, size) indexed by that id, so there
is no pointer graph to manage. ``find`` compresses paths and ``union``
attaches the smaller tree under the larger one, which keeps every lookup
effectively constant time.

Coordinates must already be reduced into ``[0, rows) × [0, cols)``.
"""

from __future__ import annotations


class GridUnionFind:
    """Union-find with path compression and union by size, keyed by cell."""

    def __init__(self, rows: int, cols: int) -> None:
        self.rows: int = rows
        self.cols: int = cols
        n = rows * cols
        self._parent: list[int] = list(range(n))
        # Only meaningful at roots; a root that gets attached keeps a stale size
        self._size: list[int] = [1] * n

    def cell_id(self, row: int, col: int) -> int:
        return row * self.cols + col

    def find(self, row: int, col: int) -> int:
        """Root id of the set containing (row, col)."""
        return self._find_id(self.cell_id(row, col))

    def _find_id(self, node: int) -> int:
        parent = self._parent
        root = node
        while parent[root] != root:
            root = parent[root]

        # Path compression: point every visited node straight at the root
        while parent[node] != root:
            parent[node], node = root, parent[node]

        return root

    def union(self, row1: int, col1: int, row2: int, col2: int) -> int:
        """
        Merge the sets holding the two cells and return the surviving root.

        The smaller tree goes under the larger one. On a tie the second
        cell's root goes under the first cell's root.
        """
        a = self.find(row1, col1)
        b = self.find(row2, col2)
        if a == b:
            return a

        if self._size[a] < self._size[b]:
            a, b = b, a
        self._parent[b] = a
        self._size[a] += self._size[b]
        return a

    def connected(self, row1: int, col1: int, row2: int, col2: int) -> bool:
        return self.find(row1, col1) == self.find(row2, col2)

    def set_size(self, row: int, col: int) -> int:
        """Number of cells in the set containing (row, col)."""
        return self._size[self.find(row, col)]
