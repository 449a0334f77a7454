"""Win/loss counting from final scores."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ..errors import TieGameError
from ..models import WinRecord
from .aggregator import PairedGame, team_record, unique_game_ids


class WinCounter:
    """Accumulates one team's wins and losses game by game."""

    def __init__(self, team: str):
        self.team = team
        self.wins = 0
        self.losses = 0

    def add_game(self, game_id: str, team_score: int, opponent_score: int) -> bool:
        """Record one game and return whether it was a win.

        Raises:
            TieGameError: if the scores are equal.  The tally is left unchanged.
        """
        if team_score == opponent_score:
            raise TieGameError(f"tied final score {team_score}-{opponent_score}", game_id=game_id, team=self.team)
        won = team_score > opponent_score
        if won:
            self.wins += 1
        else:
            self.losses += 1
        return won

    def record(self) -> WinRecord:
        return WinRecord(team=self.team, wins=self.wins, losses=self.losses)


def count_wins(
    team: str,
    game_ids: Iterable[str],
    games: Mapping[str, PairedGame],
    aliases: Optional[Mapping[str, str]] = None,
) -> WinRecord:
    """Count ``team``'s wins over its roster games from already parsed box scores."""
    counter = WinCounter(team)
    for game_id in unique_game_ids(game_ids):
        record = team_record(team, game_id, games, aliases)
        counter.add_game(game_id, record.pts, record.opp_pts)
    return counter.record()
