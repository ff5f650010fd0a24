"""Agent perception, decision and movement constants."""

# Genome floors
MIN_RAY_RADIUS = 1
MIN_SIGHT_RANGE = 0.1
MIN_MOVEMENT_SPEED = 1.0

# Default genome values
DEFAULT_RAY_RADIUS = 16
DEFAULT_SIGHT_RANGE = 10.0
DEFAULT_MOVEMENT_SPEED = 5.0
DEFAULT_RANDOM_UTILITY_RANGE = (0.0, 1.0)

# Perception fan
FULL_TURN_DEGREES = 360.0
FORWARD_SIGHT_FACTOR = 1.5  # Extra range for the unrotated forward probe

# Utility scoring
OBSTACLE_UTILITY = -1.0
COVER_SCAN_RADIUS = 5.0  # Fixed, independent of sight range
AMBUSH_DOT_THRESHOLD = -0.5  # Predator roughly behind the agent
AMBUSH_PENALTY = -2.0

# Direction selection: percent chance of taking the best-scored direction
BEST_DIRECTION_CHANCE = 85.0

# Movement: per-tick heading interpolation factor (frame-coupled)
HEADING_SLERP_FACTOR = 0.1
