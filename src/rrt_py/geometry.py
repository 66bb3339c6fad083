"""Geometry primitives used by the planner"""

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon

from rrt_py.errors import DegeneratePolygonError


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __call__(self) -> list[float]:
        return [self.x, self.y]

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> "Point":
        return Point(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Point":
        x, y = values
        return cls(float(x), float(y))


def distance(point1: Point, point2: Point) -> float:
    return float(np.hypot(point1.x - point2.x, point1.y - point2.y))


class Polygon:
    """Closed polygonal obstacle.

    The point sequence is closed on construction, so ``points[0] ==
    points[-1]`` and ``num_points`` counts the repeated vertex. A polygon
    needs at least 3 distinct vertices and a simple boundary; anything else
    raises ``DegeneratePolygonError`` instead of becoming an obstacle that
    nothing can ever be inside of.
    """

    def __init__(self, points: Iterable[Point | Sequence[float]]):
        points = [p if isinstance(p, Point) else Point.from_sequence(p) for p in points]

        if len(points) > 0 and points[0] != points[-1]:
            points.append(points[0])

        distinct = set(points)
        if len(distinct) < 3:
            raise DegeneratePolygonError(
                f"Polygon needs at least 3 distinct vertices, got {len(distinct)}"
            )

        self.points: tuple[Point, ...] = tuple(points)
        self.num_points = len(self.points)

        self.collision_object = ShapelyPolygon([p() for p in self.points])
        if not self.collision_object.is_valid or self.collision_object.area == 0.0:
            raise DegeneratePolygonError(
                f"Polygon boundary is not simple: {[p() for p in self.points]}"
            )

    def contains(self, point: Point) -> bool:
        # covers() counts the boundary as inside
        return self.collision_object.covers(ShapelyPoint(point.x, point.y))

    def __iter__(self):
        return iter(self.points)

    def __len__(self) -> int:
        return self.num_points

    def __str__(self) -> str:
        string = "----Polygon----\n"
        for p in self.points:
            string += f"{p.x, p.y}\n"

        string += "-----"

        return string


def point_inside_any_obstacle(point: Point, obstacles: Iterable[Polygon]) -> bool:
    for obstacle in obstacles:
        if obstacle.contains(point):
            return True

    return False
