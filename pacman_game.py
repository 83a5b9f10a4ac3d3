import argparse
import math
import signal
import sys

import pygame

import config
from game_session import GameSession
from game_state import GamePhase
from ghost_behavior import GhostMode, Personality
from input_state import InputState
from maze_grid import CellKind
from motion_resolver import Direction
from session_logger import GameSessionLogger

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}

SCORE_POPUP_DURATION = 1.0  # seconds
SCORE_POPUP_RISE_SPEED = 30  # pixels per second

MOUTH_ANGLES = {
    Direction.RIGHT: 0,
    Direction.DOWN: 90,
    Direction.LEFT: 180,
    Direction.UP: 270,
}


class PacmanGame:
    def __init__(self, seed=None, level_source=None, session_logging=None, fps=None):
        self.session = GameSession(seed=seed, level_source=level_source)
        self.input = InputState()
        self.fps = fps if fps is not None else config.TARGET_FPS
        self.hud_height = 2 * self.session.maze.cell_size
        self.screen_width, self.screen_height = self.window_size()

        pygame.init()

        # Setup signal handler for graceful shutdown
        def signal_handler(signum, frame):
            print("\nReceived signal, shutting down gracefully...")
            self.running = False

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Pacman - Maze Chase")

        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 20, bold=True)
        self.large_font = pygame.font.SysFont("arial", 36, bold=True)

        # Colors - Pacman style
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.YELLOW = (255, 255, 0)
        self.BLUE = (33, 150, 243)
        self.DARK_BLUE = (0, 0, 139)
        self.GHOST_COLORS = {
            Personality.DIRECT: (255, 0, 0),
            Personality.AMBUSH: (255, 182, 193),
            Personality.PATROL: (0, 255, 255),
            Personality.ERRATIC: (255, 165, 0),
        }

        self.running = True
        self.animation_timer = 0.0
        self.score_popups = []  # [text, x, y, seconds left]
        self.last_update = pygame.time.get_ticks()

        logging_enabled = config.ENABLE_SESSION_LOGGING if session_logging is None else session_logging
        self.logger = GameSessionLogger() if logging_enabled else None
        if self.logger:
            self.logger.attach(self.session)

        self.session.on_event('capture', self.on_capture)
        self.session.on_event('level_complete', self.on_level_complete)
        self.session.start()

    def window_size(self):
        maze = self.session.maze
        return maze.pixel_width, maze.pixel_height + self.hud_height

    def on_level_complete(self, data):
        """Generated levels can differ in size from the previous one"""
        if self.window_size() != (self.screen_width, self.screen_height):
            self.screen_width, self.screen_height = self.window_size()
            self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))

    def on_capture(self, data):
        x, y = self.session.pacman.position
        self.score_popups.append([f"+{data['points']}", x, y, SCORE_POPUP_DURATION])

    def handle_events(self):
        """Handle user input"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key in (pygame.K_SPACE, pygame.K_p):
                    self.session.toggle_pause()
                elif event.key == pygame.K_r:
                    if self.session.restart():
                        self.input.clear()
                elif event.key in KEY_DIRECTIONS:
                    self.input.press(KEY_DIRECTIONS[event.key])
            elif event.type == pygame.KEYUP and event.key in KEY_DIRECTIONS:
                self.input.release(KEY_DIRECTIONS[event.key])

    def update(self):
        """Sample input once and run one simulation tick"""
        current_time = pygame.time.get_ticks()
        delta_time = (current_time - self.last_update) / 1000.0
        self.last_update = current_time
        self.animation_timer += delta_time

        self.session.set_intent(self.input.intent)
        self.session.tick(delta_time)
        self.update_score_popups(delta_time)

    def update_score_popups(self, delta_time):
        for popup in self.score_popups:
            popup[2] -= SCORE_POPUP_RISE_SPEED * delta_time
            popup[3] -= delta_time
        self.score_popups = [popup for popup in self.score_popups if popup[3] > 0]

    def draw_maze(self):
        """Draw walls and pellets"""
        maze = self.session.maze
        size = maze.cell_size
        for row in range(maze.height):
            for col in range(maze.width):
                kind = maze.classify(col, row)
                center = (int((col + 0.5) * size), int((row + 0.5) * size))
                if kind is CellKind.WALL:
                    rect = pygame.Rect(col * size, row * size, size, size)
                    pygame.draw.rect(self.screen, self.DARK_BLUE, rect)
                    pygame.draw.rect(self.screen, self.BLUE, rect, 1)
                elif kind is CellKind.PELLET:
                    pygame.draw.circle(self.screen, self.WHITE, center, 3)
                elif kind is CellKind.POWER_PELLET:
                    # Blink power pellets
                    if int(self.animation_timer * 4) % 2 == 0:
                        pygame.draw.circle(self.screen, self.YELLOW, center, 6)

    def draw_pacman(self, pacman):
        """Draw Pacman with mouth animation"""
        center = (int(pacman['position'][0]), int(pacman['position'][1]))
        radius = int(pacman['radius'])
        pygame.draw.circle(self.screen, self.YELLOW, center, radius)

        mouth_open_angle = pacman['mouth_open'] * 40
        if mouth_open_angle > 1:
            mouth_angle = MOUTH_ANGLES[pacman['direction']]
            start_angle = math.radians(mouth_angle - mouth_open_angle)
            end_angle = math.radians(mouth_angle + mouth_open_angle)
            mouth_radius = radius + 2
            pygame.draw.polygon(self.screen, self.BLACK, [
                center,
                (center[0] + math.cos(start_angle) * mouth_radius,
                 center[1] + math.sin(start_angle) * mouth_radius),
                (center[0] + math.cos(end_angle) * mouth_radius,
                 center[1] + math.sin(end_angle) * mouth_radius)
            ])

    def draw_ghosts(self, ghosts, power_timer):
        for ghost in ghosts:
            center = (int(ghost['position'][0]), int(ghost['position'][1]))
            radius = int(ghost['radius'])

            if ghost['mode'] is not GhostMode.DEAD:
                if ghost['mode'] is GhostMode.FRIGHTENED:
                    # Flash between blue and white when the power is about to run out
                    flashing = power_timer < 2 and int(self.animation_timer * 4) % 2
                    color = self.WHITE if flashing else (0, 0, 255)
                else:
                    color = self.GHOST_COLORS[ghost['personality']]
                pygame.draw.circle(self.screen, color, (center[0], center[1] - radius // 4), radius)
                pygame.draw.rect(self.screen, color,
                                 pygame.Rect(center[0] - radius, center[1] - radius // 4, radius * 2, radius))

            self.draw_eyes(center, radius, ghost['direction'])

    def draw_eyes(self, center, radius, direction):
        dx, dy = direction.vector
        for side in (-1, 1):
            eye = (center[0] + side * radius // 3, center[1] - radius // 3)
            pygame.draw.circle(self.screen, self.WHITE, eye, max(2, radius // 4))
            pygame.draw.circle(self.screen, self.BLACK, (eye[0] + dx * 2, eye[1] + dy * 2), max(1, radius // 8))

    def draw_ui(self, snapshot):
        top = self.session.maze.pixel_height
        score_text = self.font.render(f"Score: {snapshot['score']:,}", True, self.WHITE)
        level_text = self.font.render(f"Level: {snapshot['level']}", True, self.WHITE)
        lives_text = self.font.render(f"Lives: {snapshot['lives']}", True, self.YELLOW)
        self.screen.blit(score_text, (10, top + 8))
        self.screen.blit(level_text, (self.screen_width // 2 - 40, top + 8))
        self.screen.blit(lives_text, (self.screen_width - 100, top + 8))

    def draw_score_popups(self):
        for text, x, y, _ in self.score_popups:
            surface = self.font.render(text, True, (0, 255, 255))
            self.screen.blit(surface, surface.get_rect(center=(int(x), int(y))))

    def draw_notification(self, title, subtitle):
        overlay = pygame.Surface((self.screen_width, self.screen_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 160))
        self.screen.blit(overlay, (0, 0))
        title_surface = self.large_font.render(title, True, self.YELLOW)
        subtitle_surface = self.font.render(subtitle, True, self.WHITE)
        center_y = self.screen_height // 2
        self.screen.blit(title_surface, title_surface.get_rect(center=(self.screen_width // 2, center_y - 20)))
        self.screen.blit(subtitle_surface, subtitle_surface.get_rect(center=(self.screen_width // 2, center_y + 20)))

    def draw(self):
        """Draw everything"""
        snapshot = self.session.snapshot()
        self.screen.fill(self.BLACK)
        self.draw_maze()
        self.draw_pacman(snapshot['pacman'])
        self.draw_ghosts(snapshot['ghosts'], snapshot['power_timer'])
        self.draw_score_popups()
        self.draw_ui(snapshot)

        if snapshot['phase'] is GamePhase.PAUSED:
            self.draw_notification("PAUSED", "Press SPACE to resume")
        elif snapshot['phase'] is GamePhase.GAME_OVER:
            self.draw_notification("GAME OVER", f"Final score {snapshot['score']:,} - press R to restart")

        pygame.display.flip()

    def run(self):
        """Main game loop with configurable FPS"""
        try:
            while self.running:
                self.handle_events()
                self.update()
                self.draw()
                self.clock.tick(self.fps)
        except KeyboardInterrupt:
            print("\nGame interrupted by user")
        finally:
            print("Cleaning up resources...")
            if self.logger:
                self.logger.save_session_summary()
            pygame.quit()
            print("Game exited successfully")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pacman maze chase")
    parser.add_argument('--seed', type=int, default=None, help="seed for ghost randomness")
    parser.add_argument('--generated', action='store_true', help="generate new mazes after level 1")
    parser.add_argument('--fps', type=int, default=config.TARGET_FPS)
    parser.add_argument('--log-session', action='store_true', help="write a JSON session log")
    args = parser.parse_args(argv)

    game = PacmanGame(seed=args.seed,
                      level_source="generated" if args.generated else None,
                      session_logging=True if args.log_session else None,
                      fps=args.fps)
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
