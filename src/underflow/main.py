from __future__ import annotations

import argparse
import logging
import random
import sys

from underflow.ai.pick import make_agent, parse_difficulty
from underflow.config import BOARD_SIZE, MAX_GAME_MOVES, ServerConfig
from underflow.game.controller import DRAW, play_game, seed_agent
from underflow.game.server import GameServer


def build_match_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="underflow match", description="Play one headless AI game.")
    ap.add_argument("--size", type=int, default=BOARD_SIZE, help="Board size")
    ap.add_argument(
        "--difficulty", nargs="+", default=["hard", "medium"],
        help="One difficulty per seat (easy/medium/hard); 2 to 4 seats",
    )
    ap.add_argument("--depth", type=int, default=None, help="Override search depth for hard seats")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--max-moves", type=int, default=MAX_GAME_MOVES)
    ap.add_argument("--log-level", type=str, default="INFO")
    return ap


def run_match(argv: list[str]) -> int:
    args = build_match_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        difficulties = [parse_difficulty(d) for d in args.difficulty]
        config = ServerConfig(player_count=len(difficulties), size=args.size)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    rng = random.Random(args.seed)
    agents = [make_agent(d, depth=args.depth) for d in difficulties]
    for agent in agents:
        seed_agent(agent, rng.getrandbits(32))

    server = GameServer.new(config)
    print("Seats: " + " | ".join(f"P{i}: {a.name}" for i, a in enumerate(agents)))

    outcome, stats = play_game(agents, server, max_moves=args.max_moves)

    print()
    print(server.board)
    print()
    if outcome == DRAW:
        print("Draw.")
    else:
        print(f"Player {outcome} ({agents[outcome].name}) wins!")
    for seat, s in stats.items():
        print(f"  P{seat}: moves={s['moves']} nodes={s['nodes']} time={s['time_ms']}ms")
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0].startswith("-"):
        return run_match(argv)

    cmd = argv[0].lower()
    rest = argv[1:]

    if cmd == "match":
        return run_match(rest)

    if cmd == "league":
        from underflow.scripts.league_main import main as league_main
        return league_main(rest)

    print("Usage:")
    print("  python -m underflow match [--size 7] [--difficulty hard medium ...]")
    print("  python -m underflow league [--size 5] [--games-per-pair 2] ...")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
