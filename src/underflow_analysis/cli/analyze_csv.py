from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd

from ..io.load_results import LoadSpec, latest_results_file, load_results
from ..metrics.summarize import (
    SummaryConfig,
    describe_numeric,
    leaderboard,
    select_rows,
    strongest_correlations,
    tier_table,
)
from ..plots import depth_curve, leaderboard_bar, metric_histograms, strength_speed_scatter, use_file_backend

HIST_COLS = ("ppg", "strength_wilson_lcb", "efficiency_score", "avg_ms_per_move", "draw_rate")


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="underflow-analysis",
        description="Summarize and chart an Underflow league export.",
    )
    src = ap.add_argument_group("input")
    src.add_argument("--csv", type=Path, default=None, help="League CSV; defaults to the newest one in --results-dir")
    src.add_argument("--results-dir", type=Path, default=Path("data/results"))
    src.add_argument("--pattern", default="league_results_*.csv", help="Glob used to find the newest export")

    sel = ap.add_argument_group("selection")
    sel.add_argument("--metric", default="strength_wilson_lcb", help="Column to rank by")
    sel.add_argument("--top", type=int, default=20, help="Rows in the leaderboard and bar chart")
    sel.add_argument("--min-games", type=int, default=0)
    sel.add_argument("--max-ms", type=float, default=None, help="Drop teams slower than this per move")

    out = ap.add_argument_group("output")
    out.add_argument("--outdir", type=Path, default=Path("figures"))
    out.add_argument("--show", action="store_true", help="Open chart windows instead of writing PNGs")
    out.add_argument("--no-plots", action="store_true")
    return ap


def _section(title: str, frame: pd.DataFrame, *, index: bool = False) -> None:
    if frame.empty:
        return
    print(f"\n=== {title} ===")
    print(frame.to_string(index=index))


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    csv_path = args.csv or latest_results_file(args.results_dir, args.pattern)
    df = load_results(LoadSpec(csv_path=csv_path))
    print(f"\nLoaded {csv_path}: {len(df)} teams, {len(df.columns)} columns")

    cfg = SummaryConfig(metric=args.metric, top_n=args.top, min_games=args.min_games, max_avg_ms_per_move=args.max_ms)

    _section(f"Leaderboard by {cfg.metric}", leaderboard(df, cfg))
    _section("By tier", tier_table(df))
    _section("Numeric summary", describe_numeric(df), index=True)
    _section("Strongest correlations", strongest_correlations(df))

    if args.no_plots:
        return 0
    if not args.show:
        use_file_backend()

    chosen = select_rows(df, cfg)
    metric_histograms(chosen, args.outdir, HIST_COLS, show=args.show)
    strength_speed_scatter(chosen, args.outdir, cfg.metric, show=args.show)
    leaderboard_bar(chosen, args.outdir, cfg.metric, cfg.top_n, show=args.show)
    depth_curve(chosen, args.outdir, cfg.metric, show=args.show)

    if not args.show:
        print(f"\nCharts written to {args.outdir.resolve()}")
    return 0
