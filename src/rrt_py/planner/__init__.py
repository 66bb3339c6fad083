from enum import Enum

from rrt_py.env import EnvironmentManager
from rrt_py.geometry import Point


class Status(Enum):
    REACHED = "reached"
    ADVANCED = "advanced"
    TRAPPED = "trapped"


class Planner:
    def __init__(self, env_manager: EnvironmentManager):
        self.env_manager = env_manager

    def compute_plan(self, start_pose: Point, end_pose: Point) -> tuple[bool, list[Point]]:
        raise NotImplementedError
