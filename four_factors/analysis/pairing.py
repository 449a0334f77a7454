"""Fill each team's opponent counts from the other record of the same game."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence, Tuple

from ..data.normalize import same_team
from ..errors import MalformedGameTableError
from ..models import BASE_COUNT_FIELDS, TeamGameStats


def _mirror(record: TeamGameStats, other: TeamGameStats) -> TeamGameStats:
    opp = {f"opp_{name}": getattr(other, name) for name in BASE_COUNT_FIELDS}
    return replace(record, opponent=other.team, **opp)


def pair_opponents(records: Sequence[TeamGameStats]) -> Tuple[TeamGameStats, TeamGameStats]:
    """Return new records whose ``opp_*`` fields hold the other team's counts.

    Pairing is keyed by game identity, not position: the output keeps the
    input order, so ``pair_opponents([b, a])`` is the reverse of
    ``pair_opponents([a, b])``.

    Raises:
        MalformedGameTableError: unless given exactly two records from the same
            game for two different teams.
    """
    if len(records) != 2:
        game_id = records[0].game_id if records else None
        raise MalformedGameTableError(f"expected 2 team records, got {len(records)}", game_id=game_id)

    first, second = records
    if first.game_id != second.game_id:
        raise MalformedGameTableError(
            f"cannot pair records from different games ({first.game_id!r}, {second.game_id!r})",
            game_id=first.game_id,
        )
    if same_team(first.team, second.team):
        raise MalformedGameTableError("both records belong to the same team", game_id=first.game_id, team=first.team)

    return _mirror(first, second), _mirror(second, first)
