# --- maze_lib/errors.py ---
"""
maze_lib/errors.py: The error taxonomy for the maze engine.

All errors are terminal: the pipeline is a one-shot batch job, so callers are
expected to report the message and stop rather than retry.
"""


class MazeError(Exception):
    """Base class for all errors raised by maze_lib."""


class ConfigurationError(MazeError):
    """An option or input is invalid (shape, method, mask, threshold, ...)."""


class UnreachableError(MazeError):
    """Two rooms that were expected to be connected are not."""


class TopologyError(MazeError):
    """A room or wall lookup was made for a coordinate outside the grid."""
