"""Tests for the async GameLoop host driver."""

import pytest

from pixelblaster.environment import Direction
from pixelblaster.inputs import ScriptedInput, hold
from pixelblaster.logging_utils import LOG_TAG_ERROR
from pixelblaster.orchestrator import GameLoop, InputSourceError
from pixelblaster.persistence import InMemoryScoreStore
from pixelblaster.schemas import ArenaState, EventCategory, InputIntents, SessionPhase
from pixelblaster.session import GameSession
from pixelblaster.simulation_rules import SimulationRules


class RecordingRules(SimulationRules):
    """Records intents and clock values; scores ``points`` per tick."""

    def __init__(self, points: int = 0, end_tick=None):
        self.points = points
        self.end_tick = end_tick
        self.seen = []

    def on_session_start(self, state: ArenaState) -> ArenaState:
        return state

    def apply_tick(self, state, tick, intents, now_ms):
        self.seen.append((tick, intents, now_ms))
        updated = state.model_copy(deep=True)
        updated.tick = tick
        updated.events = []
        if self.points:
            updated.add_score(self.points, EventCategory.ENEMY_KILLED, "points")
        if self.end_tick is not None and tick >= self.end_tick:
            updated.session.phase = SessionPhase.GAME_OVER
        return updated


class BrokenInput:
    async def next_intents(self, state):
        raise RuntimeError("controller unplugged")


def make_loop(rules, **kwargs):
    kwargs.setdefault("tick_rate_hz", 0)
    kwargs.setdefault("verbose", False)
    return GameLoop(GameSession(rules), **kwargs)


@pytest.mark.asyncio
async def test_runs_requested_ticks_and_notifies_listeners():
    calls = []

    def listener(tick, previous, new):
        calls.append((tick, previous.tick, new.tick))

    loop = make_loop(RecordingRules(), tick_listeners=[listener])
    result = await loop.run(5)

    assert result["ticks"] == 5
    assert result["final_state"].tick == 5
    assert calls == [(1, 0, 1), (2, 1, 2), (3, 2, 3), (4, 3, 4), (5, 4, 5)]


@pytest.mark.asyncio
async def test_stops_early_on_game_over():
    loop = make_loop(RecordingRules(end_tick=3))
    result = await loop.run(10)

    assert result["ticks"] == 3
    assert result["final_state"].session.phase == SessionPhase.GAME_OVER


@pytest.mark.asyncio
async def test_high_score_is_recorded():
    store = InMemoryScoreStore(initial=100)
    loop = make_loop(RecordingRules(points=60), score_store=store)
    result = await loop.run(3)

    assert result["final_state"].session.score == 180
    assert store.high_score == 180
    assert result["high_score"] == 180


@pytest.mark.asyncio
async def test_lower_score_keeps_stored_best():
    store = InMemoryScoreStore(initial=1000)
    loop = make_loop(RecordingRules(points=60), score_store=store)
    result = await loop.run(2)

    assert store.high_score == 1000
    assert result["high_score"] == 1000


@pytest.mark.asyncio
async def test_scripted_input_and_clock_reach_rules():
    rules = RecordingRules()
    script = {2: hold(Direction.LEFT, place_bomb=True)}
    ticks = iter(range(100, 1000, 100))
    loop = make_loop(rules, input_source=ScriptedInput(script), clock=lambda: float(next(ticks)))

    await loop.run(3)

    assert [seen[0] for seen in rules.seen] == [1, 2, 3]
    assert rules.seen[0][1] == InputIntents()
    assert rules.seen[1][1].held == frozenset({Direction.LEFT})
    assert rules.seen[1][1].place_bomb is True
    assert [seen[2] for seen in rules.seen] == [100.0, 200.0, 300.0]


@pytest.mark.asyncio
async def test_input_failure_is_wrapped():
    loop = make_loop(RecordingRules(), input_source=BrokenInput())

    with pytest.raises(InputSourceError) as excinfo:
        await loop.run(3)

    assert excinfo.value.tick == 1
    assert isinstance(excinfo.value.underlying, RuntimeError)
    assert "controller unplugged" in str(excinfo.value)


@pytest.mark.asyncio
async def test_listener_failure_does_not_stop_run(capsys, monkeypatch):
    monkeypatch.setenv("PIXELBLASTER_NO_COLOR", "1")

    def broken(tick, previous, new):
        raise ValueError("boom")

    loop = make_loop(RecordingRules(), tick_listeners=[broken])
    result = await loop.run(2)
    assert result["ticks"] == 2

    out = capsys.readouterr().out
    assert f"{LOG_TAG_ERROR} Tick listener broken failed at tick 1: boom" in out
    assert "Tick listener broken failed at tick 2: boom" in out


@pytest.mark.asyncio
async def test_verbose_run_prints_events(capsys, monkeypatch):
    monkeypatch.setenv("PIXELBLASTER_NO_COLOR", "1")
    loop = make_loop(RecordingRules(points=100), verbose=True)
    await loop.run(1)

    out = capsys.readouterr().out
    assert "Tick 1: 1 events" in out
    assert "enemy_killed: points (+100)" in out
