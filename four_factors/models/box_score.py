"""Raw and normalized box-score models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Mapping, Tuple


# Per-team counts read off one box score.  Order is the column order used in
# reports and JSON payloads.
BASE_COUNT_FIELDS: Tuple[str, ...] = (
    "pts",
    "fgm",
    "fga",
    "fg3m",
    "fg3a",
    "ftm",
    "fta",
    "tov",
    "oreb",
    "dreb",
)

# Every numeric field that is summed into season totals.
COUNT_FIELDS: Tuple[str, ...] = BASE_COUNT_FIELDS + tuple(f"opp_{name}" for name in BASE_COUNT_FIELDS)


@dataclass(frozen=True)
class GameTable:
    """One scraped team-stats table: a column of string cells per team.

    ``rows`` maps a stat label (e.g. ``"FG"``) to one cell per entry in
    ``teams``, in the same column order.
    """

    game_id: str
    teams: Tuple[str, ...]
    rows: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "game_id": self.game_id,
            "teams": list(self.teams),
            "rows": {label: list(cells) for label, cells in self.rows.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "GameTable":
        return cls(
            game_id=str(data["game_id"]),
            teams=tuple(str(t) for t in data.get("teams", [])),
            rows={str(label): tuple(str(c) for c in cells) for label, cells in data.get("rows", {}).items()},
        )


@dataclass(frozen=True)
class TeamGameStats:
    """Normalized counts for one team in one game.

    The ``opp_*`` fields stay zero until the record is paired with the other
    team's record from the same game.
    """

    game_id: str
    team: str
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
    opponent: str = ""
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

    def base_counts(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in BASE_COUNT_FIELDS}

    def to_dict(self) -> dict:
        return asdict(self)
