"""
SimulationRules interface for the per-tick arena update.

This module provides the abstract base class that a game session drives once
per tick. Rules are pure Python and deterministic given the same state, inputs,
clock value and random source.

Key responsibilities:
- Prepare the first level when a session starts
- Apply one complete tick (input, AI, bombs, collisions, terminal checks)
- Tell the host loop when the session has ended

Design principle: a tick never mutates the state it was given. Implementations
deep copy it, update the copy in place, and return the copy.
"""

from abc import ABC, abstractmethod

from pixelblaster.schemas import ArenaState, InputIntents, SessionPhase


def format_status_generic(state: ArenaState) -> str:
    """Format the HUD values of ``state`` as a one-line summary.

    Example output:
    "Score=1250, Level=2, Lives=3, Enemies=4, Bombs=2"

    Returns "Phase=menu" while no level is loaded.
    """

    if state.grid is None:
        return f"Phase={state.session.phase.value}"

    parts = [
        f"Score={state.session.score}",
        f"Level={state.session.level}",
        f"Lives={state.player.lives}",
        f"Enemies={len(state.enemies)}",
        f"Bombs={len(state.bombs)}",
    ]
    if state.player.has_shield:
        parts.append(f"Shield={state.player.shield_timer}")
    return ", ".join(parts)


class SimulationRules(ABC):
    """Abstract base class for the deterministic arena update.

    Core responsibilities:
    1. on_session_start() - build the first level into a fresh state
    2. apply_tick() - advance the simulation by one tick
    3. should_stop() - report that the host loop can stop ticking

    SimulationRules subclasses are injected into ``GameSession``. Tests swap in
    minimal rules to exercise the state machine without running the full
    simulation.
    """

    @abstractmethod
    def apply_tick(
        self,
        state: ArenaState,
        tick: int,
        intents: InputIntents,
        now_ms: float,
    ) -> ArenaState:
        """
        Apply one tick to the state and return the new state.

        Args:
            state: State at the end of the previous tick (left untouched)
            tick: Tick number being computed
            intents: Player input captured for this tick
            now_ms: Host wall-clock time in milliseconds, used only by the
                player movement gate

        Returns:
            New state describing the end of this tick
        """
        pass

    @abstractmethod
    def on_session_start(self, state: ArenaState) -> ArenaState:
        """
        Hook called when the session enters play from the menu.

        The session has already reset score and level. Implementations load the
        first level into ``state`` and return it.
        """
        pass

    def should_stop(self, state: ArenaState) -> bool:
        """Return True once no further ticks will change the outcome."""
        return state.session.phase == SessionPhase.GAME_OVER

    def format_status_summary(self, state: ArenaState) -> str:
        """Return a printable status line for host-loop output.

        Subclasses can override to show rule-specific values.
        """

        return format_status_generic(state)
