from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Optional

import pandas as pd

# Metrics where the smaller value ranks first.
LOWER_IS_BETTER = frozenset({"avg_ms_per_move", "losses", "draw_rate"})

LEADERBOARD_COLS = [
    "name", "tier", "search_depth",
    "games", "wins", "draws", "losses",
    "ppg", "strength_wilson_lcb", "efficiency_score",
    "avg_ms_per_move", "avg_depth", "nodes",
]


@dataclass(frozen=True)
class SummaryConfig:
    metric: str = "strength_wilson_lcb"
    top_n: int = 20
    min_games: int = 0
    max_avg_ms_per_move: Optional[float] = None


def _need(df: pd.DataFrame, *cols: str) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns {missing}; have {list(df.columns)}")


def select_rows(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    """Teams with enough games and, optionally, fast enough moves."""
    keep = pd.Series(True, index=df.index)
    if cfg.min_games > 0:
        _need(df, "games")
        keep &= df["games"].fillna(0) >= cfg.min_games
    if cfg.max_avg_ms_per_move is not None:
        _need(df, "avg_ms_per_move")
        keep &= df["avg_ms_per_move"].fillna(float("inf")) <= cfg.max_avg_ms_per_move
    return df.loc[keep].copy()


def leaderboard(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    _need(df, "name", cfg.metric)
    ranked = select_rows(df, cfg).sort_values(
        cfg.metric, ascending=cfg.metric in LOWER_IS_BETTER, kind="stable",
    )
    board = ranked[[c for c in LEADERBOARD_COLS if c in ranked.columns]].head(cfg.top_n)
    board = board.reset_index(drop=True)
    board.insert(0, "rk", board.index + 1)
    return board


def tier_table(df: pd.DataFrame) -> pd.DataFrame:
    """Pooled results per difficulty tier (all Hard depths together)."""
    _need(df, "tier", "games", "points", "draws", "moves", "time_ms")
    g = df.groupby("tier", sort=False).agg(
        teams=("name", "count"),
        games=("games", "sum"),
        points=("points", "sum"),
        draws=("draws", "sum"),
        moves=("moves", "sum"),
        time_ms=("time_ms", "sum"),
    )
    g["ppg"] = g["points"].div(g["games"]).where(g["games"] > 0, 0.0)
    g["draw_rate"] = g["draws"].div(g["games"]).where(g["games"] > 0, 0.0)
    g["avg_ms_per_move"] = g["time_ms"].div(g["moves"]).where(g["moves"] > 0, 0.0)
    return g.sort_values("ppg", ascending=False).reset_index()


def describe_numeric(df: pd.DataFrame) -> pd.DataFrame:
    num = df.select_dtypes(include="number")
    return num.describe().T if not num.empty else pd.DataFrame()


def strongest_correlations(df: pd.DataFrame, top_k: int = 10) -> pd.DataFrame:
    """Column pairs with the largest absolute Pearson correlation."""
    num = df.select_dtypes(include="number")
    num = num.loc[:, num.nunique(dropna=True) > 1]
    corr = num.corr()
    rows = [
        {"a": a, "b": b, "corr": corr.at[a, b]}
        for a, b in combinations(corr.columns, 2)
        if pd.notna(corr.at[a, b])
    ]
    out = pd.DataFrame(rows, columns=["a", "b", "corr"])
    if out.empty:
        return out
    order = out["corr"].abs().sort_values(ascending=False).index
    return out.loc[order].head(top_k).reset_index(drop=True)
