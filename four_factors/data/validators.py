"""Schema validators for roster and game-table payloads."""

from __future__ import annotations

from typing import Dict, List

from .normalize import normalize_team_label


def validate_roster_payload(payload: Dict) -> List[str]:
    errors: List[str] = []
    if not isinstance(payload, dict):
        return ["roster payload must be an object"]
    teams = payload.get("teams")
    if not isinstance(teams, dict) or not teams:
        return ["roster payload must include non-empty 'teams' object"]

    seen: Dict[str, str] = {}
    for label, game_ids in teams.items():
        key = normalize_team_label(label)
        if not key:
            errors.append(f"teams[{label!r}] has an empty team label")
            continue
        if key in seen:
            errors.append(f"teams[{label!r}] duplicates team {seen[key]!r}")
            continue
        seen[key] = label
        if not isinstance(game_ids, list) or not game_ids:
            errors.append(f"teams[{label!r}] must be a non-empty list of game ids")
            continue
        for idx, game_id in enumerate(game_ids):
            if not isinstance(game_id, (str, int)) or not str(game_id).strip():
                errors.append(f"teams[{label!r}][{idx}] is not a valid game id")

    aliases = payload.get("aliases", {})
    if not isinstance(aliases, dict):
        errors.append("'aliases' must be an object mapping column names to team labels")
    else:
        for alias, label in aliases.items():
            if normalize_team_label(str(label)) not in seen:
                errors.append(f"aliases[{alias!r}] points at unknown team {label!r}")
    return errors


def validate_game_table_payload(payload: Dict) -> List[str]:
    errors: List[str] = []
    if not isinstance(payload, dict):
        return ["game table payload must be an object"]
    missing = [k for k in ("game_id", "teams", "rows") if k not in payload]
    if missing:
        return [f"game table missing fields: {', '.join(missing)}"]

    if not isinstance(payload["teams"], list) or not all(isinstance(t, str) for t in payload["teams"]):
        errors.append("'teams' must be a list of team names")
    rows = payload["rows"]
    if not isinstance(rows, dict) or not rows:
        errors.append("'rows' must be a non-empty object of stat label -> cells")
    else:
        for label, cells in rows.items():
            if not isinstance(cells, list):
                errors.append(f"rows[{label!r}] must be a list of cells")
    return errors
