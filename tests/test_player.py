"""Tests for the player controller: movement gate, shield and bombs."""

import pytest

from pixelblaster.environment import Direction, TileKind
from pixelblaster.player import (
    can_move_now,
    move_player,
    movement_delay_ms,
    place_player_bomb,
    resolve_direction,
    update_shield,
)
from pixelblaster.schemas import EventCategory, PowerUpKind, PowerUpState


@pytest.mark.parametrize(
    "speed, expected",
    [(1, 150), (2, 120), (3, 90), (5, 50)],
)
def test_movement_delay(speed, expected):
    assert movement_delay_ms(speed) == expected


def test_movement_gate_speed_one_rejects_second_move(make_state):
    state = make_state(x=3, y=3, speed=1)

    assert move_player(state, {Direction.RIGHT}, now_ms=1000.0) is True
    assert move_player(state, {Direction.RIGHT}, now_ms=1100.0) is False
    assert state.player.cell == (4, 3)
    assert state.player.last_move_ms == 1000.0


def test_movement_gate_speed_three_allows_both(make_state):
    state = make_state(x=3, y=3, speed=3)

    assert move_player(state, {Direction.RIGHT}, now_ms=1000.0) is True
    assert move_player(state, {Direction.RIGHT}, now_ms=1100.0) is True
    assert state.player.cell == (5, 3)


def test_first_move_is_never_gated(make_state):
    state = make_state()
    assert state.player.last_move_ms is None
    assert can_move_now(state.player, 0.0)


@pytest.mark.parametrize(
    "held, expected",
    [
        ({Direction.LEFT, Direction.UP}, Direction.UP),
        ({Direction.RIGHT, Direction.DOWN}, Direction.DOWN),
        ({Direction.UP, Direction.DOWN}, Direction.UP),
        ({Direction.LEFT, Direction.RIGHT}, Direction.LEFT),
        (set(), None),
    ],
)
def test_vertical_input_wins(held, expected):
    assert resolve_direction(held) == expected


def test_move_into_wall_is_a_no_op(make_state):
    state = make_state()
    state.grid.set_tile(2, 1, TileKind.DESTRUCTIBLE)

    assert move_player(state, {Direction.RIGHT}, now_ms=0.0) is False
    assert move_player(state, {Direction.UP}, now_ms=0.0) is False
    assert state.player.cell == (1, 1)
    assert state.player.last_move_ms is None


def test_moving_onto_power_up_collects_it(make_state):
    state = make_state()
    state.power_ups.append(PowerUpState(id=1, x=2, y=1, kind=PowerUpKind.SPEED))

    assert move_player(state, {Direction.RIGHT}, now_ms=0.0)
    assert state.power_ups == []
    assert state.player.speed == 2
    assert state.session.score == 200
    assert state.events[-1].category == EventCategory.POWER_UP_COLLECTED


def test_bomb_limit(make_state):
    state = make_state(x=3, y=3)
    assert place_player_bomb(state) is True
    state.player.x = 4
    assert place_player_bomb(state) is False
    assert len(state.bombs) == 1
    assert state.player.bomb_count == 1


def test_bomb_rejected_on_occupied_cell(make_state):
    state = make_state(max_bombs=3)
    assert place_player_bomb(state)
    assert not place_player_bomb(state)
    assert state.player.bomb_count == 1


def test_mega_bomb_requires_token_underfoot(make_state):
    state = make_state(max_bombs=2)
    state.power_ups.append(PowerUpState(id=7, x=1, y=1, kind=PowerUpKind.MEGA_BOMB))

    assert place_player_bomb(state)
    assert state.bombs[0].is_mega is True
    assert state.bombs[0].effective_range == 4

    state.player.x = 2
    assert place_player_bomb(state)
    assert state.bombs[1].is_mega is False


def test_shield_decays_to_off(make_state):
    state = make_state(has_shield=True, shield_timer=2)
    update_shield(state.player)
    assert state.player.has_shield is True
    assert state.player.shield_timer == 1

    update_shield(state.player)
    assert state.player.has_shield is False
    assert state.player.shield_timer == 0
