import pytest

import config
from ghost import GHOST_ORDER, Ghost, create_ghosts
from ghost_behavior import GhostMode, Personality
from maze_grid import MazeGrid
from motion_resolver import Direction, MotionResolver


@pytest.fixture
def maze():
    return MazeGrid()


def released_ghost(maze, **kwargs):
    ghost = Ghost(Personality.DIRECT, maze, scatter_duration=1.0, chase_duration=2.0,
                  recovery_duration=1.0, **kwargs)
    ghost.release()
    return ghost


def test_create_ghosts_fixed_order_and_stagger(maze):
    ghosts = create_ghosts(maze)
    assert [g.personality for g in ghosts] == list(GHOST_ORDER)
    assert [g.release_delay for g in ghosts] == list(config.GHOST_RELEASE_DELAYS)
    assert [maze.cell_at(*g.position) for g in ghosts] == [(12, 14), (13, 14), (14, 14), (15, 14)]
    assert all(g.mode is GhostMode.WAITING for g in ghosts)


def test_start_offset_onto_wall_falls_back_to_spawn(maze):
    ghost = Ghost(Personality.DIRECT, maze, start_offset=4)
    assert maze.cell_at(*ghost.position) == maze.ghost_spawn_cell


def test_waiting_until_release_timer_expires(maze):
    ghost = Ghost(Personality.AMBUSH, maze, release_delay=2.0)
    assert ghost.update_mode(1.0) is False
    assert ghost.mode is GhostMode.WAITING
    assert ghost.update_mode(1.0) is True
    assert ghost.mode is GhostMode.SCATTER
    assert ghost.leaving_pen


def test_waiting_ghost_does_not_move(maze):
    ghost = Ghost(Personality.AMBUSH, maze, release_delay=5.0)
    start = ghost.position
    result = ghost.move(0.5, None)
    assert result.accepted
    assert ghost.position == start
    assert not ghost.is_decision_due(maze)


def test_scatter_chase_schedule(maze):
    ghost = released_ghost(maze)
    ghost.update_mode(0.5)
    assert ghost.mode is GhostMode.SCATTER
    ghost.update_mode(0.5)
    assert ghost.mode is GhostMode.CHASE
    ghost.update_mode(1.5)
    assert ghost.mode is GhostMode.CHASE
    ghost.update_mode(0.5)
    assert ghost.mode is GhostMode.SCATTER


def test_fright_preserves_schedule_phase(maze):
    ghost = released_ghost(maze)
    ghost.update_mode(1.0)
    ghost.update_mode(0.5)
    assert ghost.mode is GhostMode.CHASE

    assert ghost.frighten()
    ghost.update_mode(5.0)
    assert ghost.mode is GhostMode.FRIGHTENED
    assert ghost.schedule_timer == pytest.approx(0.5)

    ghost.end_fright()
    assert ghost.mode is GhostMode.SCATTER
    ghost.update_mode(0.5)
    assert ghost.mode is GhostMode.SCATTER
    ghost.update_mode(0.5)
    assert ghost.mode is GhostMode.CHASE
    assert ghost.schedule_timer == pytest.approx(0.5)

    ghost.update_mode(1.5)
    assert ghost.mode is GhostMode.SCATTER


def test_frighten_reverses_heading(maze):
    ghost = released_ghost(maze)
    ghost.direction = Direction.UP
    assert ghost.frighten()
    assert ghost.direction is Direction.DOWN
    assert ghost.mode is GhostMode.FRIGHTENED


def test_frighten_skips_dead_and_waiting(maze):
    waiting = Ghost(Personality.PATROL, maze, release_delay=3.0)
    assert not waiting.frighten()
    assert waiting.mode is GhostMode.WAITING

    dead = released_ghost(maze)
    dead.kill()
    assert not dead.frighten()
    assert dead.mode is GhostMode.DEAD


def test_speed_by_mode(maze):
    ghost = released_ghost(maze, base_speed=100.0)
    assert ghost.speed == pytest.approx(100.0)
    ghost.frighten()
    assert ghost.speed == pytest.approx(60.0)
    ghost.kill()
    assert ghost.speed == pytest.approx(150.0)


def test_default_speed_is_fraction_of_pacman_speed(maze):
    ghost = Ghost(Personality.DIRECT, maze)
    assert ghost.base_speed == pytest.approx(config.PACMAN_SPEED * config.GHOST_SPEED_FACTOR)


def test_dead_ghost_revives_at_spawn(maze):
    ghost = released_ghost(maze)
    ghost.leaving_pen = False
    ghost.x, ghost.y = 30, 30
    ghost.kill()
    ghost.check_arrival()
    assert ghost.mode is GhostMode.DEAD

    ghost.x, ghost.y = ghost.spawn_point.x + 3, ghost.spawn_point.y
    ghost.check_arrival()
    assert ghost.position == tuple(ghost.spawn_point)
    assert ghost.mode is GhostMode.SCATTER
    assert ghost.recovery_timer == pytest.approx(1.0)
    assert ghost.leaving_pen


def test_schedule_paused_while_dead(maze):
    ghost = released_ghost(maze)
    ghost.update_mode(0.25)
    ghost.kill()
    ghost.update_mode(10.0)
    assert ghost.mode is GhostMode.DEAD
    assert ghost.schedule_timer == pytest.approx(0.25)
    assert ghost.schedule_mode is GhostMode.SCATTER


def test_leaving_pen_clears_at_exit(maze):
    ghost = released_ghost(maze)
    ghost.force_decision = False
    ghost.x, ghost.y = ghost.pen_exit
    ghost.check_arrival()
    assert not ghost.leaving_pen
    assert ghost.force_decision


def test_decision_due_on_interval_and_new_cell(maze):
    ghost = released_ghost(maze, decision_interval=0.5)
    assert ghost.is_decision_due(maze)  # forced by release
    ghost.force_decision = False
    ghost.decision_cell = maze.cell_at(*ghost.position)
    assert not ghost.is_decision_due(maze)
    ghost.decision_timer = 0.5
    assert ghost.is_decision_due(maze)

    ghost.decision_timer = 0.0
    col, row = ghost.decision_cell
    ghost.x, ghost.y = maze.cell_center(col + 1, row)
    ghost.direction = Direction.RIGHT
    assert ghost.is_decision_due(maze)


def test_reset_restores_spawn_configuration(maze):
    ghost = released_ghost(maze)
    ghost.update_mode(1.5)
    ghost.x, ghost.y = 30, 30
    ghost.kill()
    ghost.reset(maze)
    assert ghost.mode is GhostMode.WAITING
    assert ghost.schedule_mode is GhostMode.SCATTER
    assert ghost.schedule_timer == 0.0
    assert ghost.release_timer == ghost.release_delay
    assert maze.cell_at(*ghost.position) == maze.ghost_spawn_cell
    assert ghost.direction is Direction.LEFT


def test_sizes_follow_cell_size():
    small = MazeGrid(cell_size=10)
    ghost = Ghost(Personality.DIRECT, small)
    assert ghost.radius == pytest.approx(4.0)
    assert ghost.margin == pytest.approx(4.0)
    assert ghost.snap_tolerance == pytest.approx(3.0)
    assert ghost.arrival_distance == pytest.approx(5.0)


def test_arrival_distance_on_small_cells():
    small = MazeGrid(cell_size=10)
    ghost = Ghost(Personality.DIRECT, small)
    ghost.release()
    ghost.leaving_pen = False
    ghost.kill()
    ghost.x, ghost.y = ghost.spawn_point.x + 6, ghost.spawn_point.y
    ghost.check_arrival()
    assert ghost.mode is GhostMode.DEAD
    ghost.x = ghost.spawn_point.x + 4
    ghost.check_arrival()
    assert ghost.mode is GhostMode.SCATTER


def test_released_ghost_moves_on_small_cells():
    small = MazeGrid(cell_size=10)
    resolver = MotionResolver(small)
    ghost = Ghost(Personality.DIRECT, small)
    ghost.release()
    moved = [resolver.try_move(ghost.position, d, ghost.speed, 1 / 60, ghost.margin, ghost.snap_tolerance).accepted
             for d in Direction]
    assert any(moved)
