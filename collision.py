"""
Collision Detection System
Pacman vs ghost contact detection and outcome resolution
"""

import math
from collections import namedtuple

import config
from ghost_behavior import GhostMode

ContactEvent = namedtuple('ContactEvent', ['kind', 'ghost', 'points'])

CAPTURE = 'capture'
LIFE_LOST = 'life_lost'


class ContactArbiter:
    def __init__(self, forgiveness=None, capture_points=None, escalate=None):
        self.forgiveness = forgiveness if forgiveness is not None else config.CONTACT_FORGIVENESS
        self.capture_points = capture_points if capture_points is not None else config.CAPTURE_POINTS
        self.escalate = escalate if escalate is not None else config.ESCALATE_CAPTURE_POINTS

    def is_contact(self, pacman, ghost):
        distance = math.hypot(pacman.x - ghost.x, pacman.y - ghost.y)
        return distance < (pacman.radius + ghost.radius) * self.forgiveness

    def capture_value(self, state):
        if self.escalate:
            return self.capture_points * (2 ** state.capture_chain)
        return self.capture_points

    def resolve(self, state, pacman, ghosts, maze):
        """
        Settle every touching ghost for this tick.

        Ghost eyes (DEAD) pass through Pacman. During power a touching ghost is
        captured; otherwise Pacman loses a life, everyone returns to spawn and
        no further ghosts are checked.
        """
        events = []
        for ghost in ghosts:
            if ghost.mode is GhostMode.DEAD or not self.is_contact(pacman, ghost):
                continue

            if state.power_active:
                points = self.capture_value(state)
                state.add_score(points)
                state.capture_chain += 1
                ghost.kill()
                events.append(ContactEvent(CAPTURE, ghost, points))
                continue

            state.lose_life()
            state.clear_power()
            pacman.reset(maze)
            for other in ghosts:
                other.reset(maze)
            events.append(ContactEvent(LIFE_LOST, ghost, 0))
            break
        return events
