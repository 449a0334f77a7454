"""Season analysis pipeline: tables -> totals -> factors -> wins -> models."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from ..analysis.aggregator import PairedGame, aggregate_team, team_record
from ..analysis.factors import compute_four_factors
from ..analysis.pairing import pair_opponents
from ..analysis.parser import parse_game_table
from ..analysis.regression import RegressionResult, build_regression_frame, fit_models
from ..analysis.wins import count_wins
from ..data.providers import TableProvider
from ..data.roster import Roster
from ..errors import (
    FourFactorsError,
    MalformedGameTableError,
    ParseError,
    RetrievalError,
    TeamNotInGameError,
    TieGameError,
    UndefinedFactorError,
)
from ..models import FourFactors, TeamSeasonTotals, WinRecord

logger = logging.getLogger(__name__)

GAME_ERROR_POLICIES = ("skip", "abort")

# Errors that condemn a single game (or a single team's claim on a game).
_GAME_ERRORS = (RetrievalError, ParseError, MalformedGameTableError, TieGameError, TeamNotInGameError)


@dataclass
class SeasonAnalysisConfig:
    """Configuration for one analysis run."""

    # "skip" drops a bad game and records it; "abort" re-raises the first error.
    on_game_error: str = "skip"
    model_specs: Optional[Dict[str, Sequence[str]]] = None
    response: str = "wins"


@dataclass(frozen=True)
class TeamResult:
    totals: TeamSeasonTotals
    record: WinRecord
    factors: Optional[FourFactors] = None

    def to_dict(self) -> dict:
        return {
            "totals": self.totals.to_dict(),
            "record": self.record.to_dict(),
            "four_factors": self.factors.to_dict() if self.factors else None,
            "differentials": self.factors.differentials() if self.factors else None,
        }


@dataclass
class SeasonReport:
    teams: Dict[str, TeamResult]
    regression_frame: pd.DataFrame
    models: Dict[str, RegressionResult] = field(default_factory=dict)
    model_errors: Dict[str, str] = field(default_factory=dict)
    skipped_games: List[Dict] = field(default_factory=list)
    excluded_teams: Dict[str, str] = field(default_factory=dict)

    def factors_frame(self) -> pd.DataFrame:
        """Per-team four factors and record, one row per team with defined factors."""
        rows = []
        for team, result in sorted(self.teams.items()):
            if result.factors is None:
                continue
            row = result.factors.to_dict()
            row["wins"] = result.record.wins
            row["losses"] = result.record.losses
            rows.append(row)
        return pd.DataFrame(rows).set_index("team") if rows else pd.DataFrame()

    def to_dict(self) -> dict:
        return {
            "teams": {team: result.to_dict() for team, result in self.teams.items()},
            "skipped_games": list(self.skipped_games),
            "excluded_teams": dict(self.excluded_teams),
            "models": {name: result.to_dict() for name, result in self.models.items()},
            "model_errors": dict(self.model_errors),
        }

    def write_json(self, path: str) -> str:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        return str(out)


class SeasonAnalysis:
    """Runs the full pipeline for every team in a roster."""

    def __init__(
        self,
        roster: Roster,
        provider: TableProvider,
        config: Optional[SeasonAnalysisConfig] = None,
    ):
        self.roster = roster
        self.provider = provider
        self.config = config or SeasonAnalysisConfig()
        if self.config.on_game_error not in GAME_ERROR_POLICIES:
            raise ValueError(
                f"on_game_error must be one of {GAME_ERROR_POLICIES}, got {self.config.on_game_error!r}"
            )

    def run(self) -> SeasonReport:
        skipped: List[Dict] = []
        games = self.load_games(skipped)
        logger.info("Loaded %d games (%d skipped)", len(games), len(skipped))

        teams: Dict[str, TeamResult] = {}
        excluded: Dict[str, str] = {}
        factors: Dict[str, FourFactors] = {}
        records: Dict[str, WinRecord] = {}
        for team in self.roster:
            game_ids = self._team_game_ids(team, games, skipped)
            totals = aggregate_team(team, game_ids, games, self.roster.aliases)
            record = count_wins(team, game_ids, games, self.roster.aliases)
            records[team] = record
            try:
                factors[team] = compute_four_factors(totals)
            except UndefinedFactorError as exc:
                logger.warning("Excluding %s from regression: %s", team, exc)
                excluded[team] = str(exc)
            teams[team] = TeamResult(totals=totals, record=record, factors=factors.get(team))

        frame = build_regression_frame(factors, records)
        models, model_errors = fit_models(frame, self.config.model_specs, response=self.config.response)
        logger.info("Fitted %d of %d models on %d teams", len(models), len(models) + len(model_errors), len(frame))
        return SeasonReport(
            teams=teams,
            regression_frame=frame,
            models=models,
            model_errors=model_errors,
            skipped_games=skipped,
            excluded_teams=excluded,
        )

    def load_games(self, skipped: Optional[List[Dict]] = None) -> Dict[str, PairedGame]:
        """Fetch, parse and pair every roster game once.

        Each game is loaded a single time even when two teams list it, and the
        same parsed records serve both the season totals and the win count.
        """
        skipped = skipped if skipped is not None else []
        games: Dict[str, PairedGame] = {}
        for game_id in self.roster.all_game_ids():
            try:
                games[game_id] = self._load_game(game_id)
            except _GAME_ERRORS as exc:
                self._handle_game_error(exc, skipped, game_id)
        return games

    def _load_game(self, game_id: str) -> PairedGame:
        table = self.provider.get_table(game_id)
        first, second = pair_opponents(parse_game_table(table))
        if first.pts == second.pts:
            raise TieGameError(f"tied final score {first.pts}-{second.pts}", game_id=game_id)
        return first, second

    def _team_game_ids(self, team: str, games: Mapping[str, PairedGame], skipped: List[Dict]) -> List[str]:
        valid: List[str] = []
        for game_id in self.roster.game_ids(team):
            if game_id not in games:
                continue
            try:
                team_record(team, game_id, games, self.roster.aliases)
            except TeamNotInGameError as exc:
                self._handle_game_error(exc, skipped, game_id, team)
                continue
            valid.append(game_id)
        dropped = len(self.roster.game_ids(team)) - len(valid)
        if dropped:
            logger.warning("%s: %d of %d roster games excluded", team, dropped, len(self.roster.game_ids(team)))
        return valid

    def _handle_game_error(
        self,
        exc: FourFactorsError,
        skipped: List[Dict],
        game_id: str,
        team: Optional[str] = None,
    ) -> None:
        if self.config.on_game_error == "abort":
            raise exc
        logger.warning("Skipping game %s: %s", game_id, exc)
        skipped.append(
            {
                "game_id": game_id,
                "team": team,
                "error": type(exc).__name__,
                "reason": str(exc),
            }
        )
