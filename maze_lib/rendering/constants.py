# --- maze_lib/rendering/constants.py ---
# Shared rendering defaults, kept here so config and renderers agree.

DEFAULT_SCALE = 10.0
DEFAULT_MARGIN = 10.0
DEFAULT_WALL_WIDTH = 2.0
# Width of the solution line relative to the scale.
SOLUTION_WIDTH_RATIO = 0.3
