"""Plotting helpers for trees and paths"""

from rrt_py.geometry import Point


def plot_tree(tree, ax):
    """Plots every node of the tree and the edge to its parent"""
    if tree is None:
        return

    nodesx = []
    nodesy = []

    for node in tree:
        nodesx.append(node.pt.x)
        nodesy.append(node.pt.y)

        if node.parent is not None:
            parent = tree[node.parent].pt
            ax.plot([node.pt.x, parent.x], [node.pt.y, parent.y], color="red", alpha=0.5)

    ax.scatter(nodesx, nodesy, color="gold", s=4)


def plot_path(path: list[Point], ax, path_name=None, color=None):
    """Plots the path given. Assumes that the first point is start and the last is goal"""
    if not path:
        return

    pointsx = [pt.x for pt in path]
    pointsy = [pt.y for pt in path]

    if path_name is not None:
        ax.plot(pointsx, pointsy, label=f"{path_name}", color=color or "blue", linewidth=3)
    else:
        ax.plot(pointsx, pointsy, color="blue", linewidth=3)

    ax.scatter(pointsx, pointsy, alpha=0.75, color="red")
    ax.scatter([pointsx[0], pointsx[-1]], [pointsy[0], pointsy[-1]], color="blue")
