import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

import numpy as np
from tqdm import tqdm

from rrt_py.env import EnvironmentManager
from rrt_py.errors import PreconditionError
from rrt_py.geometry import Point, distance
from rrt_py.planner import Planner, Status
from rrt_py.planner.sampler import GoalBiasedSampler
from rrt_py.planner.utils import plot_path, plot_tree
from rrt_py.tree import Node, Tree

logger = logging.getLogger(__name__)

# A frontier node this close to the goal is the goal
GOAL_TOLERANCE = 1e-9


class RRTConfig:
    def __init__(
        self,
        step_size: float = 20.0,
        goal_bias: float = 0.1,
        max_iter: int = 1000,
        seed: Optional[int] = None,
        progress: bool = False,
    ) -> None:
        try:
            step_size = float(step_size)
            goal_bias = float(goal_bias)
            max_iter = int(max_iter)
        except (TypeError, ValueError) as e:
            raise PreconditionError(f"Planner parameters must be numbers: {e}") from e

        # Written so that NaN fails the checks
        if not step_size > 0:
            raise PreconditionError(f"step_size must be positive, got {step_size}")
        if not 0.0 <= goal_bias <= 1.0:
            raise PreconditionError(f"goal_bias must be in [0, 1], got {goal_bias}")
        if max_iter < 0:
            raise PreconditionError(f"max_iter must not be negative, got {max_iter}")

        self.step_size = step_size
        self.goal_bias = goal_bias
        self.max_iter = max_iter
        self.seed = seed
        self.progress = progress


@dataclass
class PlanResult:
    status: Status
    tree: Tree
    path: list[Point] = field(default_factory=list)
    iterations: int = 0
    goal_index: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.status == Status.REACHED


def steer(near: Point, sample: Point, step_size: float) -> Point:
    """Point ``step_size`` away from ``near`` on the line towards ``sample``.

    A sample closer than ``step_size`` (including one on top of ``near``)
    gives back ``near`` itself rather than overshooting.
    """
    if not step_size > 0:
        raise PreconditionError(f"step_size must be positive, got {step_size}")

    dist = distance(sample, near)
    if dist < step_size:
        return near

    return near + (sample - near) * (step_size / dist)


class RRT(Planner):
    def __init__(
        self,
        env_manager: EnvironmentManager,
        config: RRTConfig = RRTConfig(),
        rng: Optional[np.random.Generator] = None,
    ):
        super().__init__(env_manager)
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        self.tree: Optional[Tree] = None
        self.goal: Optional[Point] = None
        self.goal_index: Optional[int] = None

    def reset(self, start: Point, goal: Point) -> None:
        for name, point in (("start", start), ("goal", goal)):
            if not self.env_manager.is_within_bounds(point):
                raise PreconditionError(
                    f"The {name} {point()} lies outside the workspace "
                    f"{self.env_manager.xlims} x {self.env_manager.ylims}"
                )
            if self.env_manager.point_inside_any_obstacle(point):
                raise PreconditionError(f"The {name} {point()} lies inside an obstacle")

        self.tree = Tree(start)
        self.goal = goal
        self.goal_index = None

    def extend(self, sample: Point) -> Status:
        """Grows the tree by at most one step towards ``sample``.

        TRAPPED leaves the tree untouched, ADVANCED appends one node and
        REACHED appends the new node and, unless it already sits on the goal,
        a goal node parented to it.
        """
        step_size = self.config.step_size

        near_index, _ = self.tree.nearest(sample)
        near = self.tree[near_index]

        new_pt = steer(near.pt, sample, step_size)

        if self.env_manager.point_inside_any_obstacle(new_pt):
            logger.debug("Inside obstacle: %s", new_pt())
            return Status.TRAPPED

        # The sample was within one step of the tree. Nothing new to add,
        # but the existing node may still connect to the goal.
        if new_pt == near.pt:
            frontier_index = near_index
        else:
            frontier_index = self.tree.append(Node(new_pt, near_index))

        goal_dist = distance(self.tree[frontier_index].pt, self.goal)
        if goal_dist < step_size:
            if goal_dist <= GOAL_TOLERANCE:
                self.goal_index = frontier_index
            else:
                self.goal_index = self.tree.append(Node(self.goal, frontier_index))
            logger.debug("Reached")
            return Status.REACHED

        if frontier_index == near_index:
            return Status.TRAPPED

        logger.debug("Advanced, tree size %d", len(self.tree))
        return Status.ADVANCED

    def iterate(self, start: Point, goal: Point) -> Iterator[tuple[int, Status, Tree]]:
        """Runs the planner one extension at a time.

        Yields ``(iteration, status, tree)`` after every step so a caller can
        draw the tree in between. The tree must not be modified by the caller.
        Stops after REACHED or once ``max_iter`` steps have run.
        """
        self.reset(start, goal)
        sampler = GoalBiasedSampler(
            self.env_manager.xlims,
            self.env_manager.ylims,
            goal,
            self.config.goal_bias,
            rng=self.rng,
        )

        for i in tqdm(range(self.config.max_iter), disable=not self.config.progress):
            status = self.extend(sampler.sample())
            yield i + 1, status, self.tree

            if status == Status.REACHED:
                return

    def plan(
        self,
        start: Optional[Point] = None,
        goal: Optional[Point] = None,
        callback: Optional[Callable[[int, Status, Tree], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> PlanResult:
        start = start if start is not None else self.env_manager.start
        goal = goal if goal is not None else self.env_manager.goal
        if start is None or goal is None:
            raise PreconditionError("Both a start and a goal are needed to plan")

        status = Status.TRAPPED
        iterations = 0

        for iterations, status, tree in self.iterate(start, goal):
            if callback is not None:
                callback(iterations, status, tree)

            if status == Status.REACHED:
                break

            if should_stop is not None and should_stop():
                logger.info("Planning stopped after %d iterations", iterations)
                break

        if status == Status.REACHED:
            path = self.tree.path_to(self.goal_index)
            logger.info(
                "Found a valid path in %d iterations with %d nodes", iterations, len(path)
            )
            return PlanResult(Status.REACHED, self.tree, path, iterations, self.goal_index)

        logger.info("No valid path found after %d iterations", iterations)
        return PlanResult(Status.TRAPPED, self.tree, [], iterations, None)

    def compute_plan(self, start_pose: Point, end_pose: Point) -> tuple[bool, list[Point]]:
        result = self.plan(start_pose, end_pose)
        return result.success, result.path

    def plot_path(self, ax, path=None):
        plot_path(path, ax, "RRT-Path", "blue")

    def plot_tree(self, ax):
        plot_tree(self.tree, ax)

    def plot(self, ax, path=None):
        self.plot_tree(ax)
        self.plot_path(ax, path)

    def get_path_length(self, path: list[Point]) -> float:
        dist = 0.0
        for i in range(0, len(path) - 1):
            dist += distance(path[i], path[i + 1])

        return dist
