"""Sum per-game team records into season totals."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..data.normalize import normalize_team_label, resolve_alias
from ..errors import TeamNotInGameError
from ..models import COUNT_FIELDS, TeamGameStats, TeamSeasonTotals

logger = logging.getLogger(__name__)

PairedGame = Tuple[TeamGameStats, TeamGameStats]


def unique_game_ids(game_ids: Iterable[str]) -> List[str]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: Dict[str, None] = {}
    for game_id in game_ids:
        key = str(game_id).strip()
        if key in seen:
            logger.debug("Dropping duplicate game id %s", key)
            continue
        seen[key] = None
    return list(seen)


def team_record(
    team: str,
    game_id: str,
    games: Mapping[str, PairedGame],
    aliases: Optional[Mapping[str, str]] = None,
) -> TeamGameStats:
    """Select ``team``'s side of a paired game.

    Column names are mapped through ``aliases`` before comparing, so a roster
    label like ``"MSU"`` matches a box-score column ``"Michigan St."``.
    """
    pair = games.get(game_id)
    if pair is None:
        raise TeamNotInGameError("game was not loaded", game_id=game_id, team=team)
    key = normalize_team_label(team)
    for record in pair:
        if normalize_team_label(resolve_alias(record.team, aliases)) == key:
            return record
    raise TeamNotInGameError(
        f"team did not play in this game ({pair[0].team} vs {pair[1].team})",
        game_id=game_id,
        team=team,
    )


def sum_records(team: str, records: Sequence[TeamGameStats]) -> TeamSeasonTotals:
    totals = {name: 0 for name in COUNT_FIELDS}
    for record in records:
        for name in COUNT_FIELDS:
            totals[name] += getattr(record, name)
    return TeamSeasonTotals(team=team, games=len(records), **totals)


def aggregate_team(
    team: str,
    game_ids: Iterable[str],
    games: Mapping[str, PairedGame],
    aliases: Optional[Mapping[str, str]] = None,
) -> TeamSeasonTotals:
    """Sum every count field of ``team``'s paired records over ``game_ids``.

    Only integer addition is used, so the result does not depend on the order
    of ``game_ids``.  Repeated ids count once.
    """
    records = [team_record(team, game_id, games, aliases) for game_id in unique_game_ids(game_ids)]
    return sum_records(team, records)
