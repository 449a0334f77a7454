"""Parse raw box-score tables into normalized per-team counts."""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Tuple

from ..data.normalize import STAT_ALIASES, normalize_stat_label, same_team
from ..errors import MalformedGameTableError, ParseError
from ..models import GameTable, TeamGameStats

_MADE_ATTEMPTED_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
_COUNT_RE = re.compile(r"^\s*(\d+)\s*$")


def format_made_attempted(made: int, attempted: int) -> str:
    return f"{made}-{attempted}"


def parse_made_attempted(
    cell: str,
    *,
    game_id: Optional[str] = None,
    team: Optional[str] = None,
    stat: Optional[str] = None,
) -> Tuple[int, int]:
    """Split a ``"<made>-<attempted>"`` cell on its first hyphen.

    Raises:
        ParseError: if the cell is not two non-negative integers joined by a
            hyphen, or if made exceeds attempted.
    """
    match = _MADE_ATTEMPTED_RE.match(str(cell))
    if not match:
        raise ParseError("expected '<made>-<attempted>'", game_id=game_id, team=team, stat=stat, cell=cell)
    made, attempted = int(match.group(1)), int(match.group(2))
    if made > attempted:
        raise ParseError("made exceeds attempted", game_id=game_id, team=team, stat=stat, cell=cell)
    return made, attempted


def parse_count(
    cell: str,
    *,
    game_id: Optional[str] = None,
    team: Optional[str] = None,
    stat: Optional[str] = None,
) -> int:
    match = _COUNT_RE.match(str(cell))
    if not match:
        raise ParseError("expected a non-negative integer", game_id=game_id, team=team, stat=stat, cell=cell)
    return int(match.group(1))


def _locate_rows(table: GameTable) -> Dict[str, Tuple[str, Tuple[str, ...]]]:
    """Return stat -> (original label, cells) for every stat in STAT_ALIASES."""
    by_key: Dict[str, Tuple[str, Tuple[str, ...]]] = {}
    for label, cells in table.rows.items():
        by_key.setdefault(normalize_stat_label(label), (label, tuple(cells)))

    located: Dict[str, Tuple[str, Tuple[str, ...]]] = {}
    for stat, aliases in STAT_ALIASES.items():
        for alias in aliases:
            if alias in by_key:
                located[stat] = by_key[alias]
                break
        else:
            raise MalformedGameTableError(f"missing '{stat}' row", game_id=table.game_id)

    n_teams = len(table.teams)
    for stat, (label, cells) in located.items():
        if len(cells) != n_teams:
            raise MalformedGameTableError(
                f"row {label!r} has {len(cells)} cells for {n_teams} teams",
                game_id=table.game_id,
            )
    return located


def parse_game_table(table: GameTable) -> Tuple[TeamGameStats, TeamGameStats]:
    """Parse one game table into exactly two unpaired ``TeamGameStats``.

    Records are returned in column order; their ``opp_*`` fields are left at
    zero for :func:`~four_factors.analysis.pairing.pair_opponents` to fill.

    Raises:
        MalformedGameTableError: if the table does not hold exactly two
            distinct team columns or lacks a required stat row.
        ParseError: if any cell does not match its expected shape.
    """
    if len(table.teams) != 2:
        raise MalformedGameTableError(
            f"expected 2 team columns, got {len(table.teams)}",
            game_id=table.game_id,
        )
    if same_team(table.teams[0], table.teams[1]):
        raise MalformedGameTableError(f"both columns belong to {table.teams[0]!r}", game_id=table.game_id)

    rows = _locate_rows(table)
    first, second = (_parse_column(table.game_id, team, col, rows) for col, team in enumerate(table.teams))
    return first, second


def _parse_column(
    game_id: str,
    team: str,
    col: int,
    rows: Mapping[str, Tuple[str, Tuple[str, ...]]],
) -> TeamGameStats:
    cells = {stat: row_cells[col] for stat, (_, row_cells) in rows.items()}

    def label(stat: str) -> str:
        return rows[stat][0]

    fgm, fga = parse_made_attempted(cells["fg"], game_id=game_id, team=team, stat=label("fg"))
    fg3m, fg3a = parse_made_attempted(cells["fg3"], game_id=game_id, team=team, stat=label("fg3"))
    ftm, fta = parse_made_attempted(cells["ft"], game_id=game_id, team=team, stat=label("ft"))
    if fg3m > fgm or fg3a > fga:
        raise ParseError(
            "three-point counts exceed field goal counts",
            game_id=game_id,
            team=team,
            stat=label("fg3"),
            cell=cells["fg3"],
        )

    return TeamGameStats(
        game_id=game_id,
        team=team,
        pts=parse_count(cells["pts"], game_id=game_id, team=team, stat=label("pts")),
        fgm=fgm,
        fga=fga,
        fg3m=fg3m,
        fg3a=fg3a,
        ftm=ftm,
        fta=fta,
        tov=parse_count(cells["tov"], game_id=game_id, team=team, stat=label("tov")),
        oreb=parse_count(cells["oreb"], game_id=game_id, team=team, stat=label("oreb")),
        dreb=parse_count(cells["dreb"], game_id=game_id, team=team, stat=label("dreb")),
    )
