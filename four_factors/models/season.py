"""Season-level aggregates and derived metrics."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class TeamSeasonTotals:
    """Sum of a team's per-game counts over its roster games."""

    team: str
    games: int = 0
    pts: int = 0
    fgm: int = 0
    fga: int = 0
    fg3m: int = 0
    fg3a: int = 0
    ftm: int = 0
    fta: int = 0
    tov: int = 0
    oreb: int = 0
    dreb: int = 0
    opp_pts: int = 0
    opp_fgm: int = 0
    opp_fga: int = 0
    opp_fg3m: int = 0
    opp_fg3a: int = 0
    opp_ftm: int = 0
    opp_fta: int = 0
    opp_tov: int = 0
    opp_oreb: int = 0
    opp_dreb: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class FourFactors:
    """Offensive and defensive four factors for one team."""

    team: str
    efg: float
    tpp: float
    orp: float
    ftr: float
    opp_efg: float
    dtpp: float
    drp: float
    opp_ftr: float

    def differentials(self) -> Dict[str, float]:
        """Offense minus defense for each factor, used as regression predictors."""
        return {
            "efg_diff": self.efg - self.opp_efg,
            "to_diff": self.tpp - self.dtpp,
            "reb_diff": self.orp - self.drp,
            "ftr_diff": self.ftr - self.opp_ftr,
        }

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class WinRecord:
    team: str
    wins: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses

    def to_dict(self) -> dict:
        return {"team": self.team, "wins": self.wins, "losses": self.losses}
