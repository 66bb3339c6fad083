import inspect
import logging
from typing import Any, Optional

import numpy as np
import yaml

from rrt_py.errors import PreconditionError, SceneConfigError
from rrt_py.geometry import Point, Polygon, point_inside_any_obstacle

logger = logging.getLogger(__name__)

# Default workspace, same as the original 800x600 window
XLIMS = [0.0, 800.0]
YLIMS = [0.0, 600.0]


def read_config_file(config_file_path) -> dict:
    with open(config_file_path, "r") as file:
        yaml_data = yaml.safe_load(file)

    if not isinstance(yaml_data, dict):
        raise SceneConfigError(f"Scene file {config_file_path} does not hold a mapping")

    return yaml_data


def _read_point(scene: dict, key: str) -> Optional[Point]:
    if key not in scene:
        return None
    try:
        return Point.from_sequence(scene[key])
    except (TypeError, ValueError) as e:
        raise SceneConfigError(f"'{key}' must be a pair of numbers, got {scene[key]!r}") from e


def _read_limits(bounds: dict, key: str, default: list[float]) -> list[float]:
    if key not in bounds:
        return default
    try:
        limits = [float(v) for v in bounds[key]]
    except (TypeError, ValueError) as e:
        raise SceneConfigError(f"'{key}' must be a pair of numbers, got {bounds[key]!r}") from e

    if len(limits) != 2:
        raise SceneConfigError(f"'{key}' must be a pair of numbers, got {bounds[key]!r}")

    return limits


class Obstacle:
    def __init__(self, obstacle_dict: dict):
        try:
            self.endpoints = [[float(e[0]), float(e[1])] for e in obstacle_dict["points"]]
        except (KeyError, TypeError, IndexError, ValueError) as e:
            raise SceneConfigError(f"Malformed obstacle entry: {obstacle_dict!r}") from e

        self.polygon = Polygon(self.endpoints)

    def __call__(self, *args: Any, **kwds: Any) -> Polygon:
        return self.polygon

    def __str__(self) -> str:
        return str(self.polygon)


class StaticObject:
    """Rectangle given by its centre, size and rotation in degrees"""

    def __init__(self, static_obj_dict: dict) -> None:
        try:
            center = np.array(
                [float(static_obj_dict["center"][0]), float(static_obj_dict["center"][1])]
            )
            width = float(static_obj_dict["width"]) * 0.5
            height = float(static_obj_dict["height"]) * 0.5
            rotation = np.deg2rad(float(static_obj_dict.get("rotation", 0.0)))
        except (KeyError, TypeError, IndexError, ValueError) as e:
            raise SceneConfigError(f"Malformed static object entry: {static_obj_dict!r}") from e

        corners = np.array(
            [
                [width, height],
                [width, -height],
                [-width, -height],
                [-width, height],
            ]
        )
        rot = np.array(
            [
                [np.cos(rotation), -np.sin(rotation)],
                [np.sin(rotation), np.cos(rotation)],
            ]
        )
        self.endpoints = (corners @ rot.T + center).tolist()

        self.polygon = Polygon(self.endpoints)

    def __call__(self, *args: Any, **kwds: Any) -> Polygon:
        return self.polygon

    def __str__(self) -> str:
        return str(self.polygon)


class EnvironmentManager:
    """Workspace bounds, obstacles and optionally the start and goal of a scene.

    The obstacle set is fixed once the manager is built. Scenes are usually
    loaded from YAML with ``EnvironmentManager.from_file``.
    """

    def __init__(
        self,
        obstacles: Optional[list[Polygon]] = None,
        xlims: list[float] = XLIMS,
        ylims: list[float] = YLIMS,
        start: Optional[Point] = None,
        goal: Optional[Point] = None,
        planner_params: Optional[dict] = None,
    ) -> None:
        self.xlims = [float(xlims[0]), float(xlims[1])]
        self.ylims = [float(ylims[0]), float(ylims[1])]

        if self.xlims[0] >= self.xlims[1] or self.ylims[0] >= self.ylims[1]:
            raise PreconditionError(
                f"Workspace bounds must be increasing, got {self.xlims} x {self.ylims}"
            )

        self.obstacles: tuple[Polygon, ...] = tuple(obstacles or [])
        self.start = start
        self.goal = goal
        self.planner_params = dict(planner_params or {})

    @classmethod
    def from_dict(cls, scene: dict) -> "EnvironmentManager":
        bounds = scene.get("bounds", {})
        if not isinstance(bounds, dict):
            raise SceneConfigError(f"'bounds' must be a mapping, got {bounds!r}")

        xlims = _read_limits(bounds, "xlims", XLIMS)
        ylims = _read_limits(bounds, "ylims", YLIMS)

        obstacles = [Obstacle(o)() for o in scene.get("obstacles") or []]
        obstacles += [StaticObject(o)() for o in scene.get("static_objects") or []]

        planner_params = scene.get("planner") or {}
        if not isinstance(planner_params, dict):
            raise SceneConfigError(f"'planner' must be a mapping, got {planner_params!r}")

        env = cls(
            obstacles,
            xlims,
            ylims,
            start=_read_point(scene, "start"),
            goal=_read_point(scene, "goal"),
            planner_params=planner_params,
        )
        logger.info(
            "Loaded scene with %d obstacles in %s x %s", len(env.obstacles), env.xlims, env.ylims
        )

        return env

    @classmethod
    def from_file(cls, filename) -> "EnvironmentManager":
        return cls.from_dict(read_config_file(filename))

    def planner_config(self, **overrides):
        """RRTConfig built from the scene's ``planner`` section"""
        from rrt_py.planner.rrt import RRTConfig

        params = {**self.planner_params, **overrides}

        known = set(inspect.signature(RRTConfig).parameters)
        unknown = sorted(set(params) - known)
        if unknown:
            raise SceneConfigError(f"Unknown planner parameters {unknown}")

        return RRTConfig(**params)

    def point_inside_any_obstacle(self, point: Point) -> bool:
        return point_inside_any_obstacle(point, self.obstacles)

    def is_within_bounds(self, point: Point) -> bool:
        return (
            self.xlims[0] <= point.x <= self.xlims[1]
            and self.ylims[0] <= point.y <= self.ylims[1]
        )

    def plot(self, ax):
        for i, obst in enumerate(self.obstacles):
            ax.fill(
                [p.x for p in obst.points],
                [p.y for p in obst.points],
                color="navy",
                label="Obstacles" if i == 0 else None,
                alpha=0.5,
            )

        if self.start is not None:
            ax.scatter([self.start.x], [self.start.y], color="magenta", label="Start", zorder=3)
        if self.goal is not None:
            ax.scatter([self.goal.x], [self.goal.y], color="green", label="Goal", zorder=3)

        ax.set_xlim(*self.xlims)
        ax.set_ylim(*self.ylims)
        ax.legend()
