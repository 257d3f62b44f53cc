"""
Headless host loop.

Decoupled from rendering, storage and the keyboard; all of them are injected.

Coordinates one run:
1. Start the session (if it is still in the menu)
2. Ask the input source for this tick's intents
3. Advance the session one tick
4. Record the score with the score store
5. Notify tick listeners and print a summary
"""

import asyncio
import time
from typing import Callable, Dict, List, Optional

from .config import Config
from .inputs import IdleInput, InputSource
from .logging_utils import (
    Color,
    colored,
    log_error,
    log_event,
    log_info,
    log_success,
    log_tick,
)
from .persistence import InMemoryScoreStore, ScoreStore
from .schemas import ArenaState, EventCategory, SessionPhase
from .session import GameSession

TickListener = Callable[[int, ArenaState, ArenaState], None]

_EVENT_COLORS = {
    EventCategory.PLAYER_HIT: Color.RED,
    EventCategory.GAME_OVER: Color.RED,
    EventCategory.LEVEL_COMPLETE: Color.GREEN,
}


# =============================
# Module-level Exceptions
# =============================

class InputSourceError(Exception):
    """Raised when the injected input source fails to produce intents."""

    def __init__(self, *, tick: int, underlying: Exception) -> None:
        self.tick = tick
        self.underlying = underlying
        message = (
            f"Input source failed at tick {tick}: {underlying}\n\n"
            "Remediation tips:\n"
            "  - Make sure next_intents() is an async method returning InputIntents\n"
            "  - ScriptedInput keys are the tick numbers the intents apply to\n"
            "  - Set PIXELBLASTER_VERBOSE=true to see per-tick events"
        )
        super().__init__(message)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameLoop:
    """
    Fixed-rate tick driver for a ``GameSession``.

    Accepts all collaborators as parameters. No rendering, no global state.
    """

    def __init__(
        self,
        session: GameSession,
        input_source: Optional[InputSource] = None,
        score_store: Optional[ScoreStore] = None,
        tick_listeners: Optional[List[TickListener]] = None,
        *,
        tick_rate_hz: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
        verbose: Optional[bool] = None,
    ):
        """Initialize the loop with injected collaborators.

        Args:
            session: Session to drive
            input_source: Provides intents per tick (default: IdleInput)
            score_store: High-score backend (default: InMemoryScoreStore)
            tick_listeners: Callables invoked after each tick with
                (tick, previous_state, new_state)
            tick_rate_hz: Ticks per second; 0 disables sleeping between ticks
                (default: Config.TICK_RATE_HZ)
            clock: Millisecond clock fed to the movement gate
                (default: time.monotonic in ms)
            verbose: Print every game event (default: Config.VERBOSE)
        """
        self.session = session
        self.input_source = input_source or IdleInput()
        self.score_store = score_store or InMemoryScoreStore()
        self.tick_listeners = tick_listeners or []
        self.tick_rate_hz = Config.TICK_RATE_HZ if tick_rate_hz is None else tick_rate_hz
        self.clock = clock or _monotonic_ms
        self.verbose = Config.VERBOSE if verbose is None else verbose

        self.high_score = 0
        self._pending_score: Optional[int] = None
        self.session.add_score_listener(self._on_score)

    def _on_score(self, score: int) -> None:
        self._pending_score = score

    async def run(self, num_ticks: int) -> Dict:
        """Run the session for up to N ticks.

        Stops early when the rules report the session is over.

        Returns:
            Dict with final_state, ticks (completed) and high_score
        """
        await self.score_store.initialize()

        try:
            self.high_score = await self.score_store.load_high_score()

            if self.session.phase in (SessionPhase.MENU, SessionPhase.GAME_OVER):
                self.session.start()
            await self._flush_score()

            log_info(f"Starting run: level {self.session.level}, ticks: {num_ticks}")
            log_info(f"High score: {self.high_score}")

            interval = 1.0 / self.tick_rate_hz if self.tick_rate_hz else 0.0
            ticks_completed = 0
            stopped_early = False
            for tick_index in range(1, num_ticks + 1):
                try:
                    await self._run_tick()
                except Exception as exc:
                    log_error(f"ERROR at tick {self.session.current_state.tick + 1}: {exc}")
                    raise

                ticks_completed = tick_index

                if self.session.rules.should_stop(self.session.current_state):
                    stopped_early = True
                    break

                if interval:
                    await asyncio.sleep(interval)

            summary = self.session.rules.format_status_summary(self.session.current_state)
            if stopped_early:
                log_event(f"Run ended at tick {self.session.current_state.tick}: {summary}")
            else:
                log_success(f"Run complete: {summary}")

            return {
                "final_state": self.session.current_state,
                "ticks": ticks_completed,
                "high_score": self.high_score,
            }

        finally:
            await self.score_store.close()

    async def _run_tick(self) -> None:
        previous_state = self.session.current_state
        tick = previous_state.tick + 1

        try:
            intents = await self.input_source.next_intents(previous_state)
        except Exception as exc:
            raise InputSourceError(tick=tick, underlying=exc) from exc

        new_state = self.session.tick(intents, self.clock())
        await self._flush_score()

        if self.verbose:
            self._print_events(new_state)

        # Listener failures are logged but don't stop the run.
        for listener in self.tick_listeners:
            try:
                listener(new_state.tick, previous_state, new_state)
            except Exception as exc:
                name = getattr(listener, "__name__", repr(listener))
                log_error(f"Tick listener {name} failed at tick {new_state.tick}: {exc}")

    async def _flush_score(self) -> None:
        if self._pending_score is None:
            return
        score = self._pending_score
        self._pending_score = None
        self.high_score = await self.score_store.record_score(score)

    def _print_events(self, state: ArenaState) -> None:
        if not state.events:
            return
        log_tick(f"Tick {state.tick}: {len(state.events)} events")
        for event in state.events:
            line = f"  {event.category.value}: {event.description}"
            if event.score_delta:
                line += f" (+{event.score_delta})"
            color = _EVENT_COLORS.get(event.category, Color.CYAN)
            print(colored(line, color))
