"""
Global configuration for maze geometry, agent speeds and ghost behaviors.
"""

# Maze geometry - pixels per grid cell (canvas size = maze size * GRID_SIZE)
GRID_SIZE = 20

# Level source: "template" replays the built-in layout every level,
# "generated" builds new layouts with MazeGenerator after level 1
LEVEL_SOURCE = "template"
GENERATED_MAZE_WIDTH = 27
GENERATED_MAZE_HEIGHT = 31
GENERATED_POWER_PELLETS = 4

# Movement Speed Settings (pixels per second - independent of FPS)
PACMAN_SPEED = 200.0
GHOST_SPEED_FACTOR = 0.8          # Ghost base speed = PACMAN_SPEED * factor
FRIGHTENED_SPEED_MULTIPLIER = 0.6
DEAD_SPEED_MULTIPLIER = 1.5       # Eyes hurry back to the pen
MOUTH_ANIMATION_SPEED = 9.0       # Mouth open/close cycles per second while moving

# Agent size and lane keeping, as fractions of the maze cell size
AGENT_RADIUS_FACTOR = 0.4
AGENT_MARGIN_FACTOR = 0.4         # Half-width of the wall-checked bounding box
LANE_SNAP_FACTOR = 0.3            # Max off-centre distance that still allows a turn
ARRIVAL_DISTANCE_FACTOR = 0.5     # Spawn / pen exit reached within this distance

# FPS Settings
TARGET_FPS = 60
MAX_DELTA_TIME = 1.0 / 30.0  # Cap delta time to prevent large jumps (minimum 30 FPS)

# Ghost mode schedule (seconds of simulated time)
SCATTER_DURATION = 7.0
CHASE_DURATION = 20.0
POST_FRIGHT_SCATTER_DURATION = 2.0
GHOST_RELEASE_DELAYS = (0.0, 2.0, 4.0, 6.0)  # direct, ambush, patrol, erratic

# Ghost decision making
GHOST_DECISION_INTERVAL = 0.5
REVERSE_OVERRIDE_PROBABILITY = 0.02
AMBUSH_LOOKAHEAD_CELLS = 4
PATROL_RETREAT_CELLS = 8
ERRATIC_CHASE_PROBABILITY = 0.7
HOME_CORNER_INSET_CELLS = 2
DEAD_GHOST_PATHFINDING = True  # Eyes follow the BFS distance field home

# Power pellets and scoring
POWER_DURATION = 8.0
PELLET_POINTS = 10
POWER_PELLET_POINTS = 50
CAPTURE_POINTS = 200
ESCALATE_CAPTURE_POINTS = False  # Double points per consecutive capture in one power window
CONTACT_FORGIVENESS = 0.8        # Slightly more forgiving collision
STARTING_LIVES = 3

# Logging and Debugging
ENABLE_GAME_EVENT_LOGGING = True
ENABLE_SESSION_LOGGING = False
SESSION_LOG_DIR = "game_logs"
