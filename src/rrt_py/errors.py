"""Exceptions raised by rrt_py.

Running out of iterations is not an error: the planner reports it as
``Status.TRAPPED``. These exceptions signal bad inputs.
"""


class RRTError(Exception):
    pass


class PreconditionError(RRTError, ValueError):
    """An argument violates a precondition of the operation it was passed to."""


class DegeneratePolygonError(PreconditionError):
    """Polygon with fewer than 3 distinct vertices or a self-intersecting boundary."""


class SceneConfigError(RRTError):
    """Scene file is missing a key or has a malformed value."""
