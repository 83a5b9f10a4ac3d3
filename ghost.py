"""
Ghost entity and its mode state machine.

Modes: WAITING (in the pen) -> SCATTER <-> CHASE, with FRIGHTENED and DEAD as
interrupts. The scatter/chase schedule keeps its elapsed time while an
interrupt is active, so a ghost resumes where it left off.
"""

import config
from ghost_behavior import GhostMode, Personality, Point, choose_direction, distance, home_corner, select_target
from motion_resolver import Direction, MoveResult

GHOST_ORDER = (Personality.DIRECT, Personality.AMBUSH, Personality.PATROL, Personality.ERRATIC)
GHOST_NAMES = {
    Personality.DIRECT: "Blinky",
    Personality.AMBUSH: "Pinky",
    Personality.PATROL: "Inky",
    Personality.ERRATIC: "Clyde",
}
# Column offsets from the ghost spawn cell for each ghost's starting cell
GHOST_START_OFFSETS = (-1, 0, 1, 2)


class Ghost:
    def __init__(self, personality, maze, start_offset=0, release_delay=0.0,
                 scatter_duration=None, chase_duration=None, recovery_duration=None,
                 decision_interval=None, reverse_override_probability=None, base_speed=None):
        self.personality = personality
        self.name = GHOST_NAMES[personality]
        self.start_offset = start_offset
        self.release_delay = release_delay
        self.scatter_duration = scatter_duration if scatter_duration is not None else config.SCATTER_DURATION
        self.chase_duration = chase_duration if chase_duration is not None else config.CHASE_DURATION
        self.recovery_duration = (recovery_duration if recovery_duration is not None
                                  else config.POST_FRIGHT_SCATTER_DURATION)
        self.decision_interval = (decision_interval if decision_interval is not None
                                  else config.GHOST_DECISION_INTERVAL)
        self.reverse_override_probability = (reverse_override_probability if reverse_override_probability is not None
                                             else config.REVERSE_OVERRIDE_PROBABILITY)
        self.base_speed = base_speed if base_speed is not None else config.PACMAN_SPEED * config.GHOST_SPEED_FACTOR
        self.reset(maze)

    def reset(self, maze):
        """Back to the spawn configuration: waiting in the pen with a fresh schedule"""
        self.radius = maze.cell_size * config.AGENT_RADIUS_FACTOR
        self.margin = maze.cell_size * config.AGENT_MARGIN_FACTOR
        self.snap_tolerance = maze.cell_size * config.LANE_SNAP_FACTOR
        self.arrival_distance = maze.cell_size * config.ARRIVAL_DISTANCE_FACTOR
        self.home_corner = home_corner(self.personality, maze)
        self.spawn_cell = maze.ghost_spawn_cell
        self.spawn_point = Point(*maze.cell_center(*maze.ghost_spawn_cell))
        self.pen_exit = Point(*maze.cell_center(*maze.pen_exit_cell))

        col, row = maze.ghost_spawn_cell
        col += self.start_offset
        if not maze.in_grid(col, row) or maze.is_wall(col, row):
            col, row = maze.ghost_spawn_cell
        self.x, self.y = maze.cell_center(col, row)
        self.direction = Direction.LEFT

        self.mode = GhostMode.WAITING
        self.release_timer = self.release_delay
        self.schedule_mode = GhostMode.SCATTER
        self.schedule_timer = 0.0
        self.recovery_timer = 0.0
        self.decision_timer = 0.0
        self.decision_cell = None
        self.force_decision = False
        self.leaving_pen = False
        self.target = Point(self.x, self.y)

    @property
    def position(self):
        return (self.x, self.y)

    @property
    def speed(self):
        if self.mode is GhostMode.FRIGHTENED:
            return self.base_speed * config.FRIGHTENED_SPEED_MULTIPLIER
        if self.mode is GhostMode.DEAD:
            return self.base_speed * config.DEAD_SPEED_MULTIPLIER
        return self.base_speed

    # ------------------------------------------------------------------
    # Mode state machine
    # ------------------------------------------------------------------

    def update_mode(self, dt):
        """Advance pen, recovery and schedule timers. Returns True when released from the pen."""
        if self.mode is GhostMode.WAITING:
            self.release_timer -= dt
            if self.release_timer <= 0:
                self.release()
                return True
            return False

        self.decision_timer += dt
        if self.mode in (GhostMode.FRIGHTENED, GhostMode.DEAD):
            return False

        if self.recovery_timer > 0:
            self.recovery_timer -= dt
            if self.recovery_timer <= 0:
                self.recovery_timer = 0.0
                self.mode = self.schedule_mode
            return False

        self.schedule_timer += dt
        duration = self.scatter_duration if self.schedule_mode is GhostMode.SCATTER else self.chase_duration
        if self.schedule_timer >= duration:
            self.schedule_timer = 0.0
            self.schedule_mode = GhostMode.CHASE if self.schedule_mode is GhostMode.SCATTER else GhostMode.SCATTER
        self.mode = self.schedule_mode
        return False

    def release(self):
        self.mode = self.schedule_mode
        self.release_timer = 0.0
        self.leaving_pen = True
        self.force_decision = True

    def frighten(self):
        """Power pellet eaten. Returns False for ghosts that are dead or still waiting."""
        if self.mode in (GhostMode.DEAD, GhostMode.WAITING):
            return False
        self.mode = GhostMode.FRIGHTENED
        self.recovery_timer = 0.0
        self.direction = self.direction.reverse
        self.force_decision = True
        return True

    def end_fright(self):
        if self.mode is GhostMode.FRIGHTENED:
            self.mode = GhostMode.SCATTER
            self.recovery_timer = self.recovery_duration

    def kill(self):
        self.mode = GhostMode.DEAD
        self.recovery_timer = 0.0
        self.leaving_pen = False
        self.force_decision = True

    def revive(self):
        self.x, self.y = self.spawn_point
        self.mode = GhostMode.SCATTER
        self.recovery_timer = self.recovery_duration
        self.leaving_pen = True
        self.force_decision = True

    # ------------------------------------------------------------------
    # Decisions and movement
    # ------------------------------------------------------------------

    def is_decision_due(self, maze):
        if self.mode is GhostMode.WAITING:
            return False
        if self.force_decision or self.decision_timer >= self.decision_interval:
            return True
        cell = maze.cell_at(self.x, self.y)
        if cell == self.decision_cell:
            return False
        # Junction decision once the ghost nears the centre of a new cell
        cx, cy = maze.cell_center(*cell)
        offset = abs(self.x - cx) if self.direction.is_horizontal else abs(self.y - cy)
        return offset <= self.snap_tolerance

    def decide(self, pacman, maze, resolver, dt, rng):
        self.target = select_target(self, pacman, self.mode, maze, rng)
        self.direction = choose_direction(self, maze, resolver, self.target, dt, rng)
        self.decision_timer = 0.0
        self.decision_cell = maze.cell_at(self.x, self.y)
        self.force_decision = False

    def move(self, dt, resolver):
        if self.mode is GhostMode.WAITING:
            return MoveResult(self.position, True, False)
        result = resolver.try_move(self.position, self.direction, self.speed, dt,
                                   self.margin, self.snap_tolerance)
        if result.accepted:
            self.x, self.y = result.position
        return result

    def check_arrival(self):
        """Revive at the spawn point; stop steering for the pen exit once there"""
        if self.mode is GhostMode.DEAD and distance(self.position, self.spawn_point) <= self.arrival_distance:
            self.revive()
        if self.leaving_pen and distance(self.position, self.pen_exit) <= self.arrival_distance:
            self.leaving_pen = False
            self.force_decision = True


def create_ghosts(maze, release_delays=None, **kwargs):
    """The four ghosts in their fixed order, staggered out of the pen"""
    delays = release_delays if release_delays is not None else config.GHOST_RELEASE_DELAYS
    return [Ghost(personality, maze, start_offset=GHOST_START_OFFSETS[i], release_delay=delays[i], **kwargs)
            for i, personality in enumerate(GHOST_ORDER)]
