from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from underflow.config import LEAGUE_BOARD_SIZE, LEAGUE_GAMES_PER_PAIR, MAX_GAME_MOVES

from .league_core import run_league
from .league_format import style
from .league_roster import build_roster
from .league_scoring import SpeedModel


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="underflow league", description="Round-robin league between AI difficulties.")
    ap.add_argument("--size", type=int, default=LEAGUE_BOARD_SIZE, help="Board size")
    ap.add_argument("--games-per-pair", type=int, default=LEAGUE_GAMES_PER_PAIR, help="Games per pairing (seats alternate)")
    ap.add_argument("--max-depth", type=int, default=2, help="Deepest Hard team in the roster")
    ap.add_argument("--seed", type=int, default=1234)
    ap.add_argument("--max-workers", type=int, default=None, help="Worker processes (default = cpu cores, capped at 6)")
    ap.add_argument("--batch-pairings", type=int, default=4, help="Pairings per worker task")
    ap.add_argument("--max-moves", type=int, default=MAX_GAME_MOVES, help="Draw after this many commands")
    ap.add_argument("--z", type=float, default=1.28, help="Z for Wilson LCB")
    ap.add_argument("--ms-target", type=float, default=50.0)
    ap.add_argument("--results-dir", type=str, default="data/results", help="Where the CSV export goes")
    ap.add_argument("--log-level", type=str, default="WARNING")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    roster = build_roster(max_depth=args.max_depth)
    print(style(f"Roster size: {len(roster)} teams", "bold"))

    start = time.perf_counter()
    run_league(
        roster,
        games_per_pair=args.games_per_pair,
        size=args.size,
        seed=args.seed,
        max_workers=args.max_workers,
        batch_pairings=args.batch_pairings,
        max_moves=args.max_moves,
        z=args.z,
        speed=SpeedModel(ms_target=args.ms_target),
        out_dir=Path(args.results_dir),
    )
    elapsed = time.perf_counter() - start

    m = int(elapsed // 60)
    s = elapsed % 60
    print(style(f"Total runtime: {m}:{s:06.3f}", "bold"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
