"""
Game session controller: runs one simulation tick in a fixed order and
exposes the game state to the presentation layer.
"""

import random
from collections import defaultdict

import config
from collision import CAPTURE, LIFE_LOST, ContactArbiter
from game_state import GamePhase, GameState
from ghost import create_ghosts
from maze_generator import MazeGenerator
from maze_grid import DEFAULT_TEMPLATE, CellKind, MazeGrid
from motion_resolver import MotionResolver
from pacman import Pacman

LEVEL_SOURCES = ("template", "generated")


def log(message):
    if config.ENABLE_GAME_EVENT_LOGGING:
        print(message)


class GameSession:
    def __init__(self, template=None, seed=None, level_source=None, starting_lives=None, ghost_options=None):
        self.level_source = level_source or config.LEVEL_SOURCE
        if self.level_source not in LEVEL_SOURCES:
            raise ValueError(f"Unknown level source {self.level_source!r}; expected one of {LEVEL_SOURCES}")

        self.rng = random.Random(seed)
        self.base_template = tuple(template) if template is not None else DEFAULT_TEMPLATE
        self.maze = MazeGrid(self.base_template)
        self.resolver = MotionResolver(self.maze)
        self.arbiter = ContactArbiter()
        self.state = GameState(starting_lives)
        self.pacman = Pacman(self.maze)
        self.ghosts = create_ghosts(self.maze, **(ghost_options or {}))
        self.next_direction = None
        self.listeners = defaultdict(list)
        self.state.pellets_remaining = self.maze.count_pellets()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_event(self, kind, callback):
        """Register callback(data) for an event kind"""
        self.listeners[kind].append(callback)

    def emit(self, kind, **data):
        for callback in self.listeners[kind]:
            callback(data)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self):
        if self.state.phase is GamePhase.LOADING:
            self.state.phase = GamePhase.PLAYING
            log("Game started")

    def set_intent(self, direction):
        """Buffer a requested direction; None keeps the previous request"""
        if direction is not None:
            self.next_direction = direction

    def toggle_pause(self):
        if self.state.phase is GamePhase.PLAYING:
            self.state.phase = GamePhase.PAUSED
        elif self.state.phase is GamePhase.PAUSED:
            self.state.phase = GamePhase.PLAYING
        else:
            return False
        log(f"Game {'paused' if self.state.phase is GamePhase.PAUSED else 'resumed'}")
        self.emit('pause', paused=self.state.phase is GamePhase.PAUSED)
        return True

    def restart(self):
        """Start over from level 1. Only legal once the game is over."""
        if self.state.phase is not GamePhase.GAME_OVER:
            log("Restart ignored - game is not over")
            return False
        log("RESTARTING GAME - Resetting all states...")
        self.state.reset()
        self.maze.load(self.base_template)
        self.state.pellets_remaining = self.maze.count_pellets()
        self.next_direction = None
        self.reset_positions()
        self.emit('restart', score=self.state.score, lives=self.state.lives, level=self.state.level)
        return True

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, dt):
        """Advance the simulation by dt seconds (clamped to MAX_DELTA_TIME)"""
        dt = max(0.0, min(dt, config.MAX_DELTA_TIME))
        if self.state.phase is not GamePhase.PLAYING:
            return

        # 1. Pacman
        taken = self.pacman.update(dt, self.next_direction, self.resolver)
        if taken is not None and taken is self.next_direction:
            self.next_direction = None

        # 2. Ghost mode timers and due decisions
        for ghost in self.ghosts:
            if ghost.update_mode(dt):
                log(f"{ghost.name} leaves the pen")
            if ghost.is_decision_due(self.maze):
                ghost.decide(self.pacman, self.maze, self.resolver, dt, self.rng)

        # 3. Ghost movement; a blocked ghost picks a new heading right away
        for ghost in self.ghosts:
            if not ghost.move(dt, self.resolver).accepted:
                ghost.decide(self.pacman, self.maze, self.resolver, dt, self.rng)
            ghost.check_arrival()

        # 4. Power countdown
        if self.state.tick_power(dt):
            for ghost in self.ghosts:
                ghost.end_fright()
            self.emit('power', active=False)

        # 5. Contacts
        if self.resolve_contacts():
            return

        # 6. Pellets
        self.consume_pellet()

        # 7. Level completion
        if self.state.pellets_remaining == 0:
            self.advance_level()

    def resolve_contacts(self):
        """Run the contact arbiter. Returns True when the game ended this tick."""
        for event in self.arbiter.resolve(self.state, self.pacman, self.ghosts, self.maze):
            if event.kind == CAPTURE:
                log(f"👻 {event.ghost.name} captured! +{event.points}")
                self.emit('capture', ghost=event.ghost.name, points=event.points, score=self.state.score)
                self.emit('score', score=self.state.score)
            elif event.kind == LIFE_LOST:
                self.next_direction = None
                log(f"Caught by {event.ghost.name} - lives left: {self.state.lives}")
                self.emit('life_lost', ghost=event.ghost.name, lives=self.state.lives)

        if self.state.phase is GamePhase.GAME_OVER:
            log(f"GAME OVER - final score {self.state.score}")
            self.emit('game_over', score=self.state.score, level=self.state.level)
            return True
        return False

    def consume_pellet(self):
        col, row = self.pacman.cell(self.maze)
        kind = self.maze.consume(col, row)
        if kind is CellKind.PELLET:
            self.state.add_score(config.PELLET_POINTS)
            self.state.eat_pellet()
            self.emit('pellet', cell=(col, row), score=self.state.score)
            self.emit('score', score=self.state.score)
        elif kind is CellKind.POWER_PELLET:
            self.state.add_score(config.POWER_PELLET_POINTS)
            self.state.eat_pellet()
            self.state.activate_power()
            frightened = [ghost.name for ghost in self.ghosts if ghost.frighten()]
            self.emit('power', active=True, cell=(col, row), frightened=frightened, score=self.state.score)
            self.emit('score', score=self.state.score)

    def advance_level(self):
        """Next level: new grid, everyone back to spawn, score and lives kept"""
        completed = self.state.level
        self.state.next_level()
        self.maze.load(self.template_for_level(self.state.level))
        self.state.pellets_remaining = self.maze.count_pellets()
        self.next_direction = None
        self.reset_positions()
        log(f"🎉 Level {completed} complete!")
        self.emit('level_complete', completed=completed, level=self.state.level, score=self.state.score)

    def template_for_level(self, level):
        if self.level_source == "generated" and level > 1:
            generator = MazeGenerator(config.GENERATED_MAZE_WIDTH, config.GENERATED_MAZE_HEIGHT,
                                      power_pellets=config.GENERATED_POWER_PELLETS, rng=self.rng)
            return generator.generate_template()
        return self.base_template

    def reset_positions(self):
        self.pacman.reset(self.maze)
        for ghost in self.ghosts:
            ghost.reset(self.maze)

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def snapshot(self):
        """Read-only view of the game for drawing and HUD text"""
        return {
            'pacman': {
                'position': self.pacman.position,
                'direction': self.pacman.direction,
                'moving': self.pacman.moving,
                'mouth_open': self.pacman.mouth_open,
                'radius': self.pacman.radius,
            },
            'ghosts': [
                {
                    'name': ghost.name,
                    'personality': ghost.personality,
                    'position': ghost.position,
                    'direction': ghost.direction,
                    'mode': ghost.mode,
                    'radius': ghost.radius,
                }
                for ghost in self.ghosts
            ],
            'pellets_remaining': self.state.pellets_remaining,
            'score': self.state.score,
            'lives': self.state.lives,
            'level': self.state.level,
            'phase': self.state.phase,
            'power_active': self.state.power_active,
            'power_timer': self.state.power_timer,
        }
