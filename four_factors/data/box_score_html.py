"""Extract the team-stats comparison table from a saved box-score page.

Box-score pages lay team totals out as one row per stat with a column per
team::

    <table>
      <thead><tr><th></th><th>MSU</th><th>IU</th></tr></thead>
      <tbody>
        <tr><td>FG</td><td>27-58</td><td>24-61</td></tr>
        ...
      </tbody>
    </table>

Only the HTML layer lives here.  Cell contents are kept as strings; turning
them into numbers is the parser's job.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from ..errors import RetrievalError
from ..models import GameTable
from .normalize import STAT_ALIASES, normalize_stat_label


def _row_cells(row) -> List[str]:
    return [c.get_text(strip=True) for c in row.find_all(["th", "td"])]


def _is_team_stats_table(table) -> bool:
    for row in table.find_all("tr"):
        cells = _row_cells(row)
        if cells and normalize_stat_label(cells[0]) in STAT_ALIASES["fg"]:
            return True
    return False


def _find_table(soup: BeautifulSoup, table_id: Optional[str]):
    if table_id:
        return soup.find("table", {"id": table_id})
    for table in soup.find_all("table"):
        if _is_team_stats_table(table):
            return table
    return None


def extract_game_table(html: str, game_id: str, table_id: Optional[str] = None) -> GameTable:
    """Build a :class:`GameTable` from a box-score page.

    Args:
        html: Page source.
        game_id: Identifier attached to the resulting table.
        table_id: ``id`` attribute of the table; when omitted the first table
            with a field-goal row is used.

    Raises:
        RetrievalError: if no team-stats table or team header can be found.
    """
    soup = BeautifulSoup(html, "lxml")
    table = _find_table(soup, table_id)
    if table is None:
        raise RetrievalError("no team stats table in page", game_id=game_id)

    rows = table.find_all("tr")
    header_row = table.find("thead").find("tr") if table.find("thead") else (rows[0] if rows else None)
    if header_row is None:
        raise RetrievalError("team stats table has no header row", game_id=game_id)
    teams = tuple(cell for cell in _row_cells(header_row)[1:] if cell)
    if not teams:
        raise RetrievalError("team stats header names no teams", game_id=game_id)

    stats: Dict[str, Tuple[str, ...]] = {}
    for row in rows:
        if row is header_row:
            continue
        if "class" in row.attrs and "thead" in row.attrs["class"]:
            continue
        cells = _row_cells(row)
        if len(cells) < 2 or not cells[0]:
            continue
        stats.setdefault(cells[0], tuple(cells[1:]))

    return GameTable(game_id=str(game_id), teams=teams, rows=stats)
