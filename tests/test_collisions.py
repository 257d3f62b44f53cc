"""Tests for blast damage, enemy kills and the escape relocation."""

from pixelblaster.collisions import (
    find_escape_cell,
    resolve_collisions,
    resolve_pending_relocation,
)
from pixelblaster.environment import ArenaGridState, TileKind
from pixelblaster.schemas import EnemyState, EscapePolicy, EventCategory, ExplosionState


def burn(state, *cells):
    for x, y in cells:
        state.explosions.append(ExplosionState(id=state.allocate_id(), x=x, y=y))


def categories(state):
    return [e.category for e in state.events]


def test_shielded_player_takes_no_damage(make_state):
    state = make_state(x=5, y=5, has_shield=True, shield_timer=100)
    burn(state, (5, 5))

    resolve_collisions(state)

    assert state.player.lives == 3
    assert state.player.pending_relocation is None
    assert EventCategory.PLAYER_HIT not in categories(state)


def test_hit_costs_one_life_and_resets_to_start(make_state):
    state = make_state(x=5, y=5)
    burn(state, (5, 5), (5, 5))

    resolve_collisions(state, EscapePolicy.RESET_TO_START)

    assert state.player.lives == 2
    pending = state.player.pending_relocation
    assert (pending.x, pending.y) == (1, 1)
    assert categories(state).count(EventCategory.PLAYER_HIT) == 1

    assert resolve_pending_relocation(state) is True
    assert state.player.cell == (1, 1)
    assert state.player.pending_relocation is None
    assert state.events[-1].category == EventCategory.PLAYER_RELOCATED


def test_nearest_safe_policy_keeps_escape_cell(make_state):
    state = make_state(x=5, y=5)
    burn(state, (5, 5))

    resolve_collisions(state, EscapePolicy.NEAREST_SAFE)
    pending = state.player.pending_relocation
    assert (pending.x, pending.y) == (3, 5)


def test_escape_search_order_and_clamping(make_grid):
    grid = make_grid(11)
    # Left lands on the clamped border, so right wins
    assert find_escape_cell(grid, (1, 1)) == (3, 1)

    grid.set_tile(3, 5, TileKind.DESTRUCTIBLE)
    grid.set_tile(7, 5, TileKind.DESTRUCTIBLE)
    assert find_escape_cell(grid, (5, 5)) == (5, 3)


def test_no_safe_cell_falls_back_to_start(make_state):
    grid = ArenaGridState.filled(5, 5, TileKind.INDESTRUCTIBLE)
    for cell in ((1, 1), (2, 2), (2, 1)):
        grid.set_tile(*cell, TileKind.EMPTY)
    assert find_escape_cell(grid, (2, 2)) is None

    state = make_state(grid, x=2, y=2)
    burn(state, (2, 2))
    resolve_collisions(state, EscapePolicy.NEAREST_SAFE)
    pending = state.player.pending_relocation
    assert (pending.x, pending.y) == (1, 1)


def test_pending_relocation_blocks_repeat_hits(make_state):
    state = make_state(x=5, y=5)
    burn(state, (5, 5))

    resolve_collisions(state, delay_ticks=2)
    resolve_collisions(state, delay_ticks=2)
    assert state.player.lives == 2

    assert resolve_pending_relocation(state) is False
    assert resolve_pending_relocation(state) is False
    assert state.player.cell == (5, 5)
    assert resolve_pending_relocation(state) is True
    assert state.player.cell == (1, 1)


def test_enemy_in_blast_dies_once(make_state):
    state = make_state()
    state.enemies = [
        EnemyState(id=0, x=6, y=6),
        EnemyState(id=1, x=8, y=8),
    ]
    burn(state, (6, 6), (6, 6), (7, 6))

    resolve_collisions(state)

    assert [e.id for e in state.enemies] == [1]
    assert state.session.score == 100
    kills = [e for e in state.events if e.category == EventCategory.ENEMY_KILLED]
    assert len(kills) == 1
    assert kills[0].score_delta == 100


def test_no_explosions_no_effect(make_state):
    state = make_state()
    state.enemies = [EnemyState(id=0, x=1, y=1)]
    resolve_collisions(state)
    assert state.player.lives == 3
    assert len(state.enemies) == 1
    assert state.events == []
