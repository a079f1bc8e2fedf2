from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

# Everything the league exports except the team name.
RESULT_COLUMNS: Tuple[str, ...] = (
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "efficiency_score",
    "moves", "time_ms", "nodes", "avg_depth",
)

_TEAM_NAME = re.compile(r"^\s*(?P<tier>\S+)(?:\s+d(?P<depth>\d+))?")


@dataclass(frozen=True)
class LoadSpec:
    csv_path: Path
    required: Tuple[str, ...] = ("name", "games", "points")
    numeric: Tuple[str, ...] = field(default=RESULT_COLUMNS)


def parse_team_name(name: str) -> Tuple[str, Optional[int]]:
    """'Hard d2' -> ('Hard', 2); 'Medium' -> ('Medium', None)."""
    m = _TEAM_NAME.match(str(name))
    if m is None:
        return "", None
    depth = m.group("depth")
    return m.group("tier"), int(depth) if depth is not None else None


def load_results(spec: LoadSpec) -> pd.DataFrame:
    """
    Read one league export. Adds `tier` and `search_depth` parsed from the
    team name and `draw_rate`, which is high when games hit the move cap.
    """
    if not spec.csv_path.is_file():
        raise FileNotFoundError(f"CSV not found: {spec.csv_path}")

    df = pd.read_csv(spec.csv_path, skipinitialspace=True).rename(columns=str.strip)
    missing = [c for c in spec.required if c not in df.columns]
    if missing:
        raise ValueError(f"{spec.csv_path.name} is missing columns {missing}")

    present = [c for c in spec.numeric if c in df.columns]
    df[present] = df[present].apply(pd.to_numeric, errors="coerce")

    df["name"] = df["name"].astype(str).str.strip()
    df = df.loc[df["name"] != ""].reset_index(drop=True)

    parsed = [parse_team_name(n) for n in df["name"]]
    df["tier"] = [tier for tier, _ in parsed]
    df["search_depth"] = pd.Series(
        [float("nan") if d is None else float(d) for _, d in parsed], index=df.index, dtype=float,
    )
    df["draw_rate"] = (df["draws"] / df["games"]).where(df["games"] > 0) if "draws" in df.columns else float("nan")
    return df


def latest_results_file(results_dir: Path, pattern: str = "league_results_*.csv") -> Path:
    """Newest export in results_dir; the timestamp in the name orders them."""
    if not results_dir.is_dir():
        raise FileNotFoundError(f"Results directory not found: {results_dir}")
    candidates = sorted(results_dir.glob(pattern), key=lambda p: p.name)
    if not candidates:
        raise FileNotFoundError(f"No files matching {pattern} in {results_dir}")
    return candidates[-1]
