from typing import Optional

import numpy as np

from rrt_py.errors import PreconditionError
from rrt_py.geometry import Point


class GoalBiasedSampler:
    """Returns the goal with probability ``goal_bias``, otherwise a uniform
    random point inside the workspace bounds.

    The generator is owned by the sampler. Pass ``rng`` (or ``seed``) to make
    a run reproducible.
    """

    def __init__(
        self,
        xlims: list[float],
        ylims: list[float],
        goal: Point,
        goal_bias: float = 0.1,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        if not 0.0 <= goal_bias <= 1.0:
            raise PreconditionError(f"goal_bias must be in [0, 1], got {goal_bias}")

        self.lower = np.asarray([xlims[0], ylims[0]], dtype=float)
        self.upper = np.asarray([xlims[1], ylims[1]], dtype=float)
        self.goal = goal
        self.goal_bias = goal_bias
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def sample(self) -> Point:
        if self.rng.random() < self.goal_bias:
            return self.goal

        x, y = self.rng.uniform(low=self.lower, high=self.upper)
        return Point(float(x), float(y))
