"""Core transformations: parse, pair, aggregate, factor, count and regress."""

from .aggregator import aggregate_team, unique_game_ids
from .factors import compute_four_factors
from .pairing import pair_opponents
from .parser import format_made_attempted, parse_count, parse_game_table, parse_made_attempted
from .regression import DEFAULT_MODEL_SPECS, RegressionResult, build_regression_frame, fit_models, fit_ols
from .wins import WinCounter, count_wins

__all__ = [
    "DEFAULT_MODEL_SPECS",
    "RegressionResult",
    "WinCounter",
    "aggregate_team",
    "build_regression_frame",
    "compute_four_factors",
    "count_wins",
    "fit_models",
    "fit_ols",
    "format_made_attempted",
    "pair_opponents",
    "parse_count",
    "parse_game_table",
    "parse_made_attempted",
    "unique_game_ids",
]
