"""Dean Oliver's four factors computed from season totals.

Offense:  EFG, TPP (turnovers per possession), ORP, FTR
Defense:  OPP_EFG, DTPP, DRP, OPP_FTR

A zero denominator raises :class:`UndefinedFactorError` instead of producing
``inf``/``nan``, so callers must explicitly drop the team from any regression.
"""

from __future__ import annotations

from ..errors import UndefinedFactorError
from ..models import FourFactors, TeamSeasonTotals

FREE_THROW_POSSESSION_WEIGHT = 0.44


def _ratio(numerator: float, denominator: float, team: str, factor: str) -> float:
    if denominator == 0:
        raise UndefinedFactorError(team, factor)
    return numerator / denominator


def effective_fg_pct(fgm: int, fg3m: int, fga: int, team: str = "", factor: str = "efg") -> float:
    """eFG% = (FGM + 0.5 * 3FGM) / FGA"""
    return _ratio(fgm + 0.5 * fg3m, fga, team, factor)


def turnovers_per_possession(
    tov: int, fga: int, oreb: int, fta: int, team: str = "", factor: str = "tpp"
) -> float:
    """TPP = TO / (FGA - OR + TO + 0.44 * FTA)"""
    possessions = fga - oreb + tov + FREE_THROW_POSSESSION_WEIGHT * fta
    return _ratio(tov, possessions, team, factor)


def rebound_pct(own: int, opp: int, team: str = "", factor: str = "orp") -> float:
    """Share of available rebounds: own / (own + opponent's complementary boards)."""
    return _ratio(own, own + opp, team, factor)


def free_throw_rate(fta: int, fga: int, team: str = "", factor: str = "ftr") -> float:
    """FTR = FTA / FGA"""
    return _ratio(fta, fga, team, factor)


def compute_four_factors(totals: TeamSeasonTotals) -> FourFactors:
    """Apply the eight four factors formulas to one team's season totals."""
    t = totals
    return FourFactors(
        team=t.team,
        efg=effective_fg_pct(t.fgm, t.fg3m, t.fga, t.team, "efg"),
        tpp=turnovers_per_possession(t.tov, t.fga, t.oreb, t.fta, t.team, "tpp"),
        orp=rebound_pct(t.oreb, t.opp_dreb, t.team, "orp"),
        ftr=free_throw_rate(t.fta, t.fga, t.team, "ftr"),
        opp_efg=effective_fg_pct(t.opp_fgm, t.opp_fg3m, t.opp_fga, t.team, "opp_efg"),
        dtpp=turnovers_per_possession(t.opp_tov, t.opp_fga, t.opp_oreb, t.opp_fta, t.team, "dtpp"),
        drp=rebound_pct(t.dreb, t.opp_oreb, t.team, "drp"),
        opp_ftr=free_throw_rate(t.opp_fta, t.opp_fga, t.team, "opp_ftr"),
    )
