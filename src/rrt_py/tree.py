"""Append-only tree store for RRT.

Nodes refer to their parent by index into the tree, so the tree owns every
node and a path is recovered by walking indices back to the root.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from rrt_py.errors import PreconditionError
from rrt_py.geometry import Point


@dataclass(frozen=True)
class Node:
    pt: Point
    parent: Optional[int] = None

    def __call__(self) -> list[float]:
        return self.pt()


class Tree:
    """Ordered collection of nodes. Index 0 is the root."""

    INITIAL_CAPACITY = 64

    def __init__(self, root: Point):
        self.nodes: list[Node] = []

        # Coordinates mirrored into a growable array for the nearest scan
        self._points = np.empty((self.INITIAL_CAPACITY, 2), dtype=float)

        self.append(Node(root, None))

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def append(self, node: Node) -> int:
        """Adds ``node`` as the last element and returns its index.

        The parent must already be in the tree, which keeps the parent
        relation acyclic. Only the first node may have no parent.
        """
        index = len(self.nodes)

        if node.parent is None:
            if index != 0:
                raise PreconditionError("Only the root node may have no parent")
        elif not 0 <= node.parent < index:
            raise PreconditionError(
                f"Parent index {node.parent} does not refer to a node in a tree of size {index}"
            )

        if index == self._points.shape[0]:
            grown = np.empty((2 * index, 2), dtype=float)
            grown[:index] = self._points
            self._points = grown

        self._points[index] = (node.pt.x, node.pt.y)
        self.nodes.append(node)

        return index

    def nearest(self, query: Point) -> tuple[int, float]:
        """Index of the node closest to ``query`` and its distance.

        Linear scan. ``np.argmin`` keeps the first minimum, so ties go to the
        node inserted earliest.
        """
        points = self._points[: len(self.nodes)]
        distances = np.hypot(points[:, 0] - query.x, points[:, 1] - query.y)
        index = int(np.argmin(distances))

        return index, float(distances[index])

    def path_to(self, index: int) -> list[Point]:
        """Points from the root to the node at ``index``"""
        path = []
        current: Optional[int] = index

        while current is not None:
            node = self.nodes[current]
            path.append(node.pt)
            current = node.parent

        return path[::-1]

    def snapshot(self) -> tuple[Node, ...]:
        return tuple(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)
