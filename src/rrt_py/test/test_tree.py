import numpy as np
import pytest

from rrt_py.errors import PreconditionError
from rrt_py.geometry import Point, distance
from rrt_py.tree import Node, Tree


@pytest.fixture
def tree():
    tree = Tree(Point(0.0, 0.0))
    tree.append(Node(Point(10.0, 0.0), 0))
    tree.append(Node(Point(10.0, 10.0), 1))
    tree.append(Node(Point(-5.0, 5.0), 0))
    return tree


def test_root(tree: Tree):
    assert tree.root == Node(Point(0.0, 0.0), None)
    assert tree[0].parent is None
    assert len(tree) == 4


def test_append_returns_index(tree: Tree):
    index = tree.append(Node(Point(1.0, 1.0), 3))
    assert index == 4
    assert tree[-1].pt == Point(1.0, 1.0)


def test_append_rejects_forward_references(tree: Tree):
    with pytest.raises(PreconditionError):
        tree.append(Node(Point(1.0, 1.0), 4))
    with pytest.raises(PreconditionError):
        tree.append(Node(Point(1.0, 1.0), -1))
    assert len(tree) == 4


def test_append_rejects_second_root(tree: Tree):
    with pytest.raises(PreconditionError):
        tree.append(Node(Point(1.0, 1.0), None))


def test_nearest(tree: Tree):
    index, dist = tree.nearest(Point(9.0, 8.0))
    assert index == 2
    assert dist == pytest.approx(distance(Point(9.0, 8.0), Point(10.0, 10.0)))


def test_nearest_on_node(tree: Tree):
    assert tree.nearest(Point(-5.0, 5.0)) == (3, 0.0)


def test_nearest_tie_goes_to_earliest():
    tree = Tree(Point(-1.0, 0.0))
    tree.append(Node(Point(1.0, 0.0), 0))
    tree.append(Node(Point(0.0, 1.0), 0))

    index, dist = tree.nearest(Point(0.0, 0.0))
    assert index == 0
    assert dist == pytest.approx(1.0)


def test_nearest_matches_brute_force():
    rng = np.random.default_rng(7)
    tree = Tree(Point(0.0, 0.0))
    # Enough nodes to grow past the initial buffer
    for i in range(200):
        x, y = rng.uniform(-100, 100, size=2)
        tree.append(Node(Point(float(x), float(y)), int(rng.integers(0, len(tree)))))

    for _ in range(50):
        x, y = rng.uniform(-120, 120, size=2)
        query = Point(float(x), float(y))
        index, dist = tree.nearest(query)
        assert all(dist <= distance(node.pt, query) for node in tree)
        assert dist == pytest.approx(distance(tree[index].pt, query))


def test_path_to(tree: Tree):
    assert tree.path_to(2) == [Point(0.0, 0.0), Point(10.0, 0.0), Point(10.0, 10.0)]
    assert tree.path_to(0) == [Point(0.0, 0.0)]


def test_snapshot_is_frozen(tree: Tree):
    snapshot = tree.snapshot()
    tree.append(Node(Point(3.0, 3.0), 0))
    assert len(snapshot) == 4
    assert len(tree) == 5
