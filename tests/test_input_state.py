from input_state import InputState
from motion_resolver import Direction


def test_no_keys_no_intent():
    assert InputState().intent is None


def test_last_pressed_wins():
    keys = InputState()
    keys.press(Direction.UP)
    keys.press(Direction.LEFT)
    assert keys.intent is Direction.LEFT
    keys.release(Direction.LEFT)
    assert keys.intent is Direction.UP


def test_repress_moves_key_to_front():
    keys = InputState()
    keys.press(Direction.UP)
    keys.press(Direction.LEFT)
    keys.press(Direction.UP)
    assert keys.intent is Direction.UP
    keys.release(Direction.UP)
    assert keys.intent is Direction.LEFT


def test_release_unknown_key_and_clear():
    keys = InputState()
    keys.release(Direction.DOWN)
    keys.press(Direction.DOWN)
    keys.clear()
    assert keys.intent is None
