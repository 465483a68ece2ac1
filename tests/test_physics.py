"""Jump arc integration."""

import pytest

from dinorun.game.controller import GameState
from dinorun.game.physics import RunnerPhysics


@pytest.fixture
def physics():
    return RunnerPhysics()


def test_at_rest_step_is_noop(physics):
    state = GameState()
    assert physics.step(state, 16) is False
    assert (state.jump_height, state.jump_velocity) == (0, 0)


def test_launch_sets_impulse_and_cancels_crouch(physics):
    state = GameState(is_crouching=True)
    physics.launch(state)
    assert state.is_jumping is True
    assert state.is_crouching is False
    assert state.jump_velocity == 1120
    assert state.jump_height == 0


def test_single_step(physics):
    state = GameState()
    physics.launch(state)
    physics.step(state, 100)
    assert state.jump_velocity == pytest.approx(1120 - 420)
    assert state.jump_height == pytest.approx(70)
    assert physics.visual_offset(state) == pytest.approx(-70)


def test_arc_rises_then_lands(physics):
    state = GameState()
    physics.launch(state)
    heights = []
    landed_at = None
    for frame in range(200):
        if physics.step(state, 10):
            landed_at = frame
            break
        heights.append(state.jump_height)

    assert landed_at is not None
    # about 2 * 1120 / 4200 s of flight
    assert 50 <= landed_at <= 56
    assert max(heights) == pytest.approx(1120 ** 2 / (2 * 4200), rel=0.05)
    assert all(h >= 0 for h in heights)
    assert state.jump_height == 0
    assert state.jump_velocity == 0
    assert state.is_jumping is False


def test_reset_puts_runner_down(physics):
    state = GameState()
    physics.launch(state)
    physics.step(state, 50)
    physics.reset(state)
    assert not physics.is_airborne(state)
    assert state.jump_velocity == 0


def test_custom_gravity():
    physics = RunnerPhysics(jump_velocity=500, gravity=1000)
    state = GameState()
    physics.launch(state)
    physics.step(state, 100)
    assert state.jump_velocity == pytest.approx(500 - 1000 * 0.1)
    assert state.is_jumping is True

    physics.step(state, 1000)
    assert state.jump_velocity == 0
    assert state.jump_height == 0
    assert state.is_jumping is False
