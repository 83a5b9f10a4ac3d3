"""
Held-key tracking for the movement intent (last pressed wins)
"""


class InputState:
    def __init__(self):
        self.held = []  # Directions in press order

    def press(self, direction):
        if direction in self.held:
            self.held.remove(direction)
        self.held.append(direction)

    def release(self, direction):
        if direction in self.held:
            self.held.remove(direction)

    def clear(self):
        self.held = []

    @property
    def intent(self):
        """Most recently pressed direction that is still held, or None"""
        return self.held[-1] if self.held else None
