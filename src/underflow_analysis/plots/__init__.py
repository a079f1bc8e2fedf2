from .chart import (
    depth_curve,
    leaderboard_bar,
    metric_histograms,
    strength_speed_scatter,
    use_file_backend,
)

__all__ = [
    "depth_curve",
    "leaderboard_bar",
    "metric_histograms",
    "strength_speed_scatter",
    "use_file_backend",
]
