"""Curated team -> game-id assignments.

A roster decides which games count toward each team's season.  The same game
may appear under both participants; within one team's list repeated ids are
dropped so membership is idempotent.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..errors import RosterError
from .validators import validate_roster_payload

logger = logging.getLogger(__name__)


def _dedupe(team: str, game_ids: Sequence) -> Tuple[str, ...]:
    unique: Dict[str, None] = {}
    for game_id in game_ids:
        key = str(game_id).strip()
        if key in unique:
            logger.debug("Roster for %s lists game %s more than once", team, key)
            continue
        unique[key] = None
    return tuple(unique)


@dataclass(frozen=True)
class Roster:
    """Mapping of team label to its ordered, de-duplicated game ids."""

    games: Mapping[str, Tuple[str, ...]]
    aliases: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        teams: Mapping[str, Sequence],
        aliases: Optional[Mapping[str, str]] = None,
    ) -> "Roster":
        return cls(
            games={str(team): _dedupe(str(team), ids) for team, ids in teams.items()},
            aliases=dict(aliases or {}),
        )

    @property
    def teams(self) -> List[str]:
        return list(self.games)

    def game_ids(self, team: str) -> Tuple[str, ...]:
        return self.games[team]

    def all_game_ids(self) -> List[str]:
        """Every game id across all teams, each once, in first-seen order."""
        seen: Dict[str, None] = {}
        for ids in self.games.values():
            for game_id in ids:
                seen.setdefault(game_id, None)
        return list(seen)

    def __iter__(self) -> Iterator[str]:
        return iter(self.games)

    def __len__(self) -> int:
        return len(self.games)

    def to_dict(self) -> dict:
        return {
            "teams": {team: list(ids) for team, ids in self.games.items()},
            "aliases": dict(self.aliases),
        }


def load_roster(path: str) -> Roster:
    """Load and validate a roster JSON file.

    Expected shape::

        {"teams": {"MSU": ["401", "402"], ...},
         "aliases": {"Michigan St.": "MSU"}}
    """
    with open(Path(path), "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise RosterError(f"roster {path} is not valid JSON: {exc}") from exc

    errors = validate_roster_payload(payload)
    if errors:
        raise RosterError(f"roster {path} validation failed: {errors[:5]}")

    roster = Roster.from_mapping(payload["teams"], payload.get("aliases"))
    logger.info("Loaded roster with %d teams and %d unique games", len(roster), len(roster.all_game_ids()))
    return roster
