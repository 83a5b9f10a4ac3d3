"""
Session state: score, lives, level, pellets and the global power timer
"""

from enum import Enum

import config


class GamePhase(Enum):
    LOADING = 'loading'
    PLAYING = 'playing'
    PAUSED = 'paused'
    GAME_OVER = 'game_over'


class GameState:
    def __init__(self, starting_lives=None):
        self.starting_lives = starting_lives if starting_lives is not None else config.STARTING_LIVES
        self.phase = GamePhase.LOADING
        self.score = 0
        self.lives = self.starting_lives
        self.level = 1
        self.pellets_remaining = 0
        self.power_active = False
        self.power_timer = 0.0
        self.capture_chain = 0  # Captures inside the current power window

    def reset(self):
        self.phase = GamePhase.PLAYING
        self.score = 0
        self.lives = self.starting_lives
        self.level = 1
        self.pellets_remaining = 0
        self.clear_power()

    def add_score(self, points):
        if points < 0:
            raise ValueError("Score can only increase")
        self.score += points

    def eat_pellet(self):
        self.pellets_remaining = max(0, self.pellets_remaining - 1)

    def lose_life(self):
        self.lives = max(0, self.lives - 1)
        if self.lives == 0:
            self.phase = GamePhase.GAME_OVER

    def next_level(self):
        self.level += 1
        self.clear_power()

    def activate_power(self, duration=None):
        self.power_active = True
        self.power_timer = duration if duration is not None else config.POWER_DURATION
        self.capture_chain = 0

    def tick_power(self, dt):
        """Count the power timer down. Returns True on the tick it expires."""
        if not self.power_active:
            return False
        self.power_timer -= dt
        if self.power_timer <= 0:
            self.clear_power()
            return True
        return False

    def clear_power(self):
        self.power_active = False
        self.power_timer = 0.0
        self.capture_chain = 0
