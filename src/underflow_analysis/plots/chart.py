from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd


def use_file_backend() -> None:
    """Render without a display when figures only go to disk."""
    matplotlib.use("Agg")


def _emit(fig, path: Path, *, show: bool) -> Optional[Path]:
    if show:
        plt.show()
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path


def metric_histograms(df: pd.DataFrame, outdir: Path, cols: Iterable[str], *, show: bool) -> None:
    for col in cols:
        if col not in df.columns or not pd.api.types.is_numeric_dtype(df[col]):
            continue
        values = df[col].dropna()
        if values.empty:
            continue
        fig, ax = plt.subplots()
        ax.hist(values, bins=min(20, max(5, len(values))))
        ax.set(title=f"Distribution of {col}", xlabel=col, ylabel="teams")
        _emit(fig, outdir / f"hist_{col}.png", show=show)


def strength_speed_scatter(df: pd.DataFrame, outdir: Path, metric: str, *, show: bool) -> Optional[Path]:
    """One colour per difficulty tier, time per move on a log axis."""
    if not {"avg_ms_per_move", metric} <= set(df.columns):
        return None

    fig, ax = plt.subplots()
    by_tier = df.groupby("tier", sort=True) if "tier" in df.columns else [("all", df)]
    for tier, part in by_tier:
        ax.scatter(part["avg_ms_per_move"].clip(lower=1e-3), part[metric], alpha=0.75, label=str(tier))
        for _, row in part.iterrows():
            ax.annotate(str(row["name"]), (max(row["avg_ms_per_move"], 1e-3), row[metric]),
                        fontsize=7, alpha=0.6)
    ax.set_xscale("log")
    ax.set(title=f"{metric} against time per move", xlabel="ms per move (log)", ylabel=metric)
    ax.legend(title="tier")
    return _emit(fig, outdir / f"scatter_{metric}_vs_speed.png", show=show)


def leaderboard_bar(df: pd.DataFrame, outdir: Path, metric: str, top_n: int, *, show: bool) -> Optional[Path]:
    if not {"name", metric} <= set(df.columns):
        return None

    top = df.dropna(subset=[metric]).nlargest(top_n, metric)
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.bar(top["name"].astype(str), top[metric].astype(float))
    ax.set(title=f"Top {len(top)} by {metric}", xlabel="team", ylabel=metric)
    ax.tick_params(axis="x", labelrotation=45)
    return _emit(fig, outdir / f"top_{top_n}_{metric}.png", show=show)


def depth_curve(df: pd.DataFrame, outdir: Path, metric: str, *, show: bool) -> Optional[Path]:
    """Metric of the deep-search teams against their search depth."""
    if not {"search_depth", metric} <= set(df.columns):
        return None

    pts = df.dropna(subset=["search_depth", metric]).groupby("search_depth")[metric].mean()
    if pts.empty:
        return None
    fig, ax = plt.subplots()
    ax.plot(pts.index, pts.values, marker="o")
    ax.set_xticks(list(pts.index))
    ax.set(title=f"{metric} by search depth", xlabel="search depth (plies)", ylabel=metric)
    return _emit(fig, outdir / f"depth_{metric}.png", show=show)
