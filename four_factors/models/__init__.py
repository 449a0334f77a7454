"""Value types passed between pipeline stages."""

from .box_score import BASE_COUNT_FIELDS, COUNT_FIELDS, GameTable, TeamGameStats
from .season import FourFactors, TeamSeasonTotals, WinRecord

__all__ = [
    "BASE_COUNT_FIELDS",
    "COUNT_FIELDS",
    "FourFactors",
    "GameTable",
    "TeamGameStats",
    "TeamSeasonTotals",
    "WinRecord",
]
