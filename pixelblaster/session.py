"""
Session state machine.

Phases: MENU -> PLAYING <-> PAUSED, PLAYING -> GAME_OVER, and reset() back to
MENU from anywhere. Only PLAYING sessions tick. Game over and level advance are
decided inside the rules' tick; the session only handles the transitions a host
asks for and forwards score changes to listeners.

Invalid transitions are ignored and reported by returning False.
"""

from typing import Callable, List, Optional

from .rules import ArenaRules
from .schemas import ArenaState, InputIntents, SessionContext, SessionPhase
from .simulation_rules import SimulationRules
from .snapshot import RenderSnapshot, build_render_snapshot

ScoreListener = Callable[[int], None]


class GameSession:
    """Owns the current ``ArenaState`` and drives it through the rules."""

    def __init__(
        self,
        rules: Optional[SimulationRules] = None,
        *,
        state: Optional[ArenaState] = None,
    ):
        """Create a session in the MENU phase unless ``state`` says otherwise.

        Args:
            rules: Tick rules; defaults to ``ArenaRules`` configured from ``Config``
            state: Optional starting state (scenario files, tests)
        """
        self.rules = rules or ArenaRules()
        self.current_state = state or ArenaState()
        self._score_listeners: List[ScoreListener] = []

    @property
    def phase(self) -> SessionPhase:
        return self.current_state.session.phase

    @property
    def score(self) -> int:
        return self.current_state.session.score

    @property
    def level(self) -> int:
        return self.current_state.session.level

    # Score boundary -----------------------------------------------------------

    def add_score_listener(self, listener: ScoreListener) -> None:
        """Register a callback receiving the current score after every change."""
        self._score_listeners.append(listener)

    def _notify_score(self, score: int) -> None:
        for listener in self._score_listeners:
            listener(score)

    # Transitions --------------------------------------------------------------

    def _set_phase(self, phase: SessionPhase) -> None:
        session = self.current_state.session.model_copy(update={"phase": phase})
        self.current_state = self.current_state.model_copy(update={"session": session})

    def start(self) -> bool:
        """Leave MENU or GAME_OVER: reset score and level and load level 1."""
        if self.phase not in (SessionPhase.MENU, SessionPhase.GAME_OVER):
            return False
        fresh = ArenaState(session=SessionContext(phase=SessionPhase.PLAYING, score=0, level=1))
        self.current_state = self.rules.on_session_start(fresh)
        self._notify_score(0)
        return True

    def pause(self) -> bool:
        if self.phase != SessionPhase.PLAYING:
            return False
        self._set_phase(SessionPhase.PAUSED)
        return True

    def resume(self) -> bool:
        if self.phase != SessionPhase.PAUSED:
            return False
        self._set_phase(SessionPhase.PLAYING)
        return True

    def toggle_pause(self) -> bool:
        return self.pause() or self.resume()

    def reset(self) -> bool:
        """Return to MENU with score and level cleared."""
        self.current_state = ArenaState()
        return True

    # Ticking ------------------------------------------------------------------

    def tick(self, intents: Optional[InputIntents] = None, now_ms: float = 0.0) -> ArenaState:
        """Run one tick if PLAYING and return the resulting state.

        Outside PLAYING the current state is returned unchanged.
        """
        if self.phase != SessionPhase.PLAYING:
            return self.current_state

        previous = self.current_state
        new_state = self.rules.apply_tick(
            previous, previous.tick + 1, intents or InputIntents(), now_ms
        )
        self.current_state = new_state

        running = previous.session.score
        for event in new_state.events:
            if event.score_delta:
                running += event.score_delta
                self._notify_score(running)
        return new_state

    def snapshot(self, *, high_score: int = 0) -> RenderSnapshot:
        return build_render_snapshot(self.current_state, high_score=high_score)
