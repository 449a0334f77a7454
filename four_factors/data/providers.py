"""Table providers that supply raw game tables by game id.

Providers only read what has already been fetched to disk.  Any failure to
produce a table is raised as :class:`RetrievalError` so the caller can decide,
per game, whether to skip it or abort the run.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..errors import RetrievalError
from ..models import GameTable
from .box_score_html import extract_game_table
from .validators import validate_game_table_payload

logger = logging.getLogger(__name__)


class TableProvider(ABC):
    """Abstract source of raw box-score tables."""

    @abstractmethod
    def get_table(self, game_id: str) -> GameTable:
        """
        Return the raw table for one game.

        Raises:
            RetrievalError: if the table cannot be produced.
        """


class _DirectoryProvider(TableProvider):
    suffix = ""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def _path(self, game_id: str) -> Path:
        return self.directory / f"{game_id}{self.suffix}"

    def _read(self, game_id: str) -> str:
        path = self._path(game_id)
        if not path.exists():
            raise RetrievalError(f"no cached table at {path}", game_id=game_id)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as exc:
            raise RetrievalError(f"could not read {path}: {exc}", game_id=game_id) from exc


class JsonTableProvider(_DirectoryProvider):
    """Reads ``<game_id>.json`` files holding ``GameTable.to_dict()`` payloads."""

    suffix = ".json"

    def get_table(self, game_id: str) -> GameTable:
        text = self._read(game_id)
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RetrievalError(f"invalid JSON: {exc}", game_id=game_id) from exc
        errors = validate_game_table_payload(payload)
        if errors:
            raise RetrievalError(f"invalid game table payload: {errors[:5]}", game_id=game_id)
        if str(payload["game_id"]) != str(game_id):
            raise RetrievalError(f"file holds game {payload['game_id']!r}", game_id=game_id)
        return GameTable.from_dict(payload)

    def save_table(self, table: GameTable) -> str:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(table.game_id)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(table.to_dict(), f, indent=2)
        return str(path)


class HtmlTableProvider(_DirectoryProvider):
    """Reads saved box-score pages named ``<game_id>.html``."""

    suffix = ".html"

    def __init__(self, directory: str, table_id: Optional[str] = None):
        super().__init__(directory)
        self.table_id = table_id

    def get_table(self, game_id: str) -> GameTable:
        html = self._read(game_id)
        table = extract_game_table(html, game_id, table_id=self.table_id)
        logger.debug("Extracted %d stat rows for game %s", len(table.rows), game_id)
        return table


def create_provider(tables_dir: str, table_format: str = "json", table_id: Optional[str] = None) -> TableProvider:
    if table_format == "json":
        return JsonTableProvider(tables_dir)
    elif table_format == "html":
        return HtmlTableProvider(tables_dir, table_id=table_id)
    else:
        raise ValueError(f"Unknown table format: {table_format}")
