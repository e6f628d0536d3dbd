"""
Headless mazechase round

Runs a round without any window: a tiny autopilot steers the player toward
the nearest collectible and the board is printed as text every few frames.

Run: python examples/headless/run.py --layout classic --frames 600
"""

import argparse
import asyncio

from mazechase import (
    Direction,
    GameSnapshot,
    LayoutLoader,
    Orchestrator,
    bfs_distances,
    next_step,
    render_ascii,
)
from mazechase.config import Config

STEP_DIRECTIONS = {
    (-1, 0): Direction.UP,
    (1, 0): Direction.DOWN,
    (0, -1): Direction.LEFT,
    (0, 1): Direction.RIGHT,
}


def autopilot(orchestrator: Orchestrator) -> None:
    """Request the first step of the shortest path to the nearest collectible."""
    grid = orchestrator.state.grid
    start = orchestrator.state.player.tile
    distances = bfs_distances(grid, start)
    targets = [
        (hops, tile) for tile, hops in distances.items()
        if hops > 0 and grid.classify(tile).is_collectible
    ]
    if not targets:
        return
    _, goal = min(targets)
    first = next_step(grid, start, goal)
    if first is None:
        return
    step = (first[0] - start[0], first[1] - start[1])
    # Portal hops show up as a full-width column jump
    if abs(step[1]) > 1:
        step = (0, -1 if step[1] > 0 else 1)
    orchestrator.request_direction(STEP_DIRECTIONS.get(step, Direction.NONE))


def print_frame(tick: int, frame: GameSnapshot) -> None:
    print(f'\n{"=" * 40}')
    print(
        f"Tick {tick} | Score: {frame.score} | Lives: {frame.lives} | "
        f"Left: {frame.grid.remaining_collectibles} | {frame.message}"
    )
    print(
        render_ascii(
            frame.grid,
            player=frame.player.tile,
            ghosts=[(ghost.tile, ghost.edible) for ghost in frame.ghosts],
        )
    )


async def main() -> None:
    parser = argparse.ArgumentParser(description="Run a headless mazechase round")
    parser.add_argument("--layout", default=Config.LAYOUT, help="Layout name in examples/layouts")
    parser.add_argument("--frames", type=int, default=600, help="Frames to simulate")
    parser.add_argument("--every", type=int, default=60, help="Print the board every N ticks")
    parser.add_argument("--seed", type=int, default=Config.SEED, help="Random seed")
    args = parser.parse_args()

    print(Config.display())

    layout = LayoutLoader().load(args.layout)
    orchestrator = Orchestrator(layout=layout, settings=Config.game_settings(), seed=args.seed)

    def on_tick(tick: int, frame: GameSnapshot) -> None:
        autopilot(orchestrator)
        if tick % args.every == 0:
            print_frame(tick, frame)

    orchestrator.tick_listeners.append(on_tick)

    result = await orchestrator.run(num_ticks=args.frames, frame_interval=1 / Config.FPS)
    final = result["final_state"]
    print_frame(final.tick, final)
    print(f"\nFinal Score: {final.score}")


if __name__ == "__main__":
    asyncio.run(main())
