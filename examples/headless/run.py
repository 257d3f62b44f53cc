"""
Headless Pixel Blaster run

Plays a short scripted opening: drop a bomb in the start corner, walk right,
then duck down out of the blast. Enemies act on their own. ASCII frames are
printed every few ticks.

Run: python examples/headless/run.py --ticks 240 --seed 7
     python examples/headless/run.py --scenario open_arena
"""

import argparse
import asyncio
import random
from typing import Dict

from pixelblaster import (
    ArenaRules,
    ArenaState,
    Direction,
    GameLoop,
    GameSession,
    InputIntents,
    JsonScoreStore,
    ScenarioLoader,
    ScriptedInput,
    build_render_snapshot,
    hold,
)
from pixelblaster.config import Config

FRAME_MS = 1000.0 / 60.0


def build_script() -> Dict[int, InputIntents]:
    script: Dict[int, InputIntents] = {1: hold(Direction.RIGHT, place_bomb=True)}
    for tick in range(2, 41):
        script[tick] = hold(Direction.RIGHT)
    for tick in range(41, 81):
        script[tick] = hold(Direction.DOWN)
    return script


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Headless Pixel Blaster run")
    parser.add_argument("--ticks", type=int, default=240, help="Number of ticks to simulate")
    parser.add_argument("--seed", type=int, default=None, help="Seed for level generation and AI")
    parser.add_argument("--scenario", default=None, help="Load a fixed arena from examples/scenarios")
    parser.add_argument("--every", type=int, default=30, help="Print a frame every N ticks")
    parser.add_argument("--realtime", action="store_true", help="Sleep between ticks at the configured rate")
    return parser.parse_args()


async def main(args: argparse.Namespace) -> None:
    Config.validate()
    print(Config.display())
    print()

    seed = args.seed if args.seed is not None else Config.RANDOM_SEED
    rules = ArenaRules(random.Random(seed))

    if args.scenario:
        session = GameSession(rules, state=ScenarioLoader().load(args.scenario))
    else:
        session = GameSession(rules)

    def print_frame(tick: int, previous: ArenaState, state: ArenaState) -> None:
        if tick % args.every != 0:
            return
        snapshot = build_render_snapshot(state, high_score=loop.high_score)
        print(f"\n--- Tick {tick} | Score {snapshot.score} | Hi {snapshot.high_score} "
              f"| Lives {snapshot.player.lives} | Level {snapshot.level} ---")
        print(snapshot.to_ascii())

    # Simulated clock so the movement gate sees 60 fps regardless of sleeping.
    def frame_clock() -> float:
        return (session.current_state.tick + 1) * FRAME_MS

    loop = GameLoop(
        session,
        input_source=ScriptedInput(build_script()),
        score_store=JsonScoreStore(),
        tick_listeners=[print_frame],
        tick_rate_hz=Config.TICK_RATE_HZ if args.realtime else 0,
        clock=frame_clock,
    )
    result = await loop.run(args.ticks)

    print(f"\nTicks run: {result['ticks']}")
    print(f"Final score: {result['final_state'].session.score} (high score {result['high_score']})")


if __name__ == "__main__":
    asyncio.run(main(parse_args()))
