"""Inputs to the analysis: curated rosters and box-score table providers."""

from .box_score_html import extract_game_table
from .normalize import normalize_team_label
from .providers import HtmlTableProvider, JsonTableProvider, TableProvider
from .roster import Roster, load_roster

__all__ = [
    "HtmlTableProvider",
    "JsonTableProvider",
    "Roster",
    "TableProvider",
    "extract_game_table",
    "load_roster",
    "normalize_team_label",
]
