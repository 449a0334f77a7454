"""Team label normalization shared by the parser, roster and aggregator.

Box-score columns and hand-curated rosters spell the same team differently
(``"Michigan St."``, ``"michigan st"``, ``"MSU"``).  Everything that compares
team identities goes through :func:`normalize_team_label` so that matching
never depends on case, punctuation or accents.
"""

from __future__ import annotations

import html as _html
import re
import unicodedata
from typing import Dict, Mapping, Optional, Tuple


def normalize_team_label(name: str) -> str:
    """Convert an arbitrary team label to a canonical underscore-delimited key.

    Steps:
    1. Decode HTML entities (``&amp;`` → ``&``)
    2. NFKD-normalize Unicode and strip combining marks (``é`` → ``e``)
    3. Lowercase
    4. Replace non-alphanumeric characters with ``_``
    5. Collapse repeated underscores and strip leading/trailing ``_``

    Examples::

        >>> normalize_team_label("Texas A&amp;M")
        'texas_a_m'
        >>> normalize_team_label("San José State")
        'san_jose_state'
        >>> normalize_team_label("MSU")
        'msu'
    """
    if not name:
        return ""
    s = _html.unescape(str(name))
    s = unicodedata.normalize("NFKD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.lower()
    s = re.sub(r"[^a-z0-9]", "_", s)
    s = re.sub(r"_+", "_", s)
    return s.strip("_")


def same_team(a: str, b: str) -> bool:
    return bool(a) and normalize_team_label(a) == normalize_team_label(b)


def resolve_alias(name: str, aliases: Optional[Mapping[str, str]] = None) -> str:
    """Map a box-score column name onto its roster label, if an alias exists."""
    if not aliases:
        return name
    key = normalize_team_label(name)
    for alias, label in aliases.items():
        if normalize_team_label(alias) == key:
            return label
    return name


# Accepted box-score row labels per stat, compared after normalize_stat_label().
# Sites disagree on naming ("3PT" vs "3FG" vs "3-Point Field Goals") so each
# stat has a few.
STAT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "fg": ("fg", "fgm_a", "fgm_fga", "field_goals", "field_goals_made_attempted"),
    "fg3": ("3pt", "3fg", "3p", "3pm_a", "3pm_3pa", "3_point_field_goals", "three_point_field_goals", "three_pointers"),
    "ft": ("ft", "ftm_a", "ftm_fta", "free_throws", "free_throws_made_attempted"),
    "oreb": ("oreb", "or", "orb", "off_reb", "offensive_rebounds"),
    "dreb": ("dreb", "dr", "drb", "def_reb", "defensive_rebounds"),
    "tov": ("to", "tov", "turnovers", "total_turnovers"),
    "pts": ("pts", "points", "score", "final", "t"),
}


def normalize_stat_label(label: str) -> str:
    """Convert a stat row label to an underscore-delimited key.

    ``%`` becomes its own ``pct`` token so percentage rows never collide with
    the made-attempted rows they summarize::

        >>> normalize_stat_label("FG%")
        'fg_pct'
        >>> normalize_stat_label("3-Point Field Goals")
        '3_point_field_goals'
    """
    s = str(label).strip().lower().replace("%", " pct ")
    return re.sub(r"[^a-z0-9]+", "_", s).strip("_")
