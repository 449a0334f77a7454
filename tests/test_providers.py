"""Unit tests for file-backed table providers."""

import json

import pytest

from four_factors.data.providers import HtmlTableProvider, JsonTableProvider, create_provider
from four_factors.errors import RetrievalError
from four_factors.models import GameTable

TABLE = GameTable(
    game_id="401",
    teams=("MSU", "IU"),
    rows={"FG": ("27-58", "24-61"), "PTS": ("76", "64")},
)


def test_json_provider_round_trip(tmp_path):
    provider = JsonTableProvider(str(tmp_path))
    path = provider.save_table(TABLE)

    assert path.endswith("401.json")
    assert provider.get_table("401") == TABLE


def test_json_provider_missing_file(tmp_path):
    with pytest.raises(RetrievalError) as exc_info:
        JsonTableProvider(str(tmp_path)).get_table("999")
    assert exc_info.value.game_id == "999"


def test_json_provider_invalid_json(tmp_path):
    (tmp_path / "401.json").write_text("{not json")
    with pytest.raises(RetrievalError, match="invalid JSON"):
        JsonTableProvider(str(tmp_path)).get_table("401")


def test_json_provider_invalid_payload(tmp_path):
    (tmp_path / "401.json").write_text(json.dumps({"game_id": "401", "teams": ["A", "B"]}))
    with pytest.raises(RetrievalError, match="missing fields"):
        JsonTableProvider(str(tmp_path)).get_table("401")


def test_json_provider_rejects_mismatched_game(tmp_path):
    (tmp_path / "401.json").write_text(json.dumps(dict(TABLE.to_dict(), game_id="402")))
    with pytest.raises(RetrievalError):
        JsonTableProvider(str(tmp_path)).get_table("401")


def test_html_provider_reads_saved_pages(tmp_path):
    (tmp_path / "77.html").write_text(
        "<table><tr><th></th><th>A</th><th>B</th></tr>"
        "<tr><td>FG</td><td>10-20</td><td>9-21</td></tr></table>"
    )
    table = HtmlTableProvider(str(tmp_path)).get_table("77")
    assert table.teams == ("A", "B")
    assert table.rows["FG"] == ("10-20", "9-21")

    with pytest.raises(RetrievalError):
        HtmlTableProvider(str(tmp_path)).get_table("78")


def test_create_provider(tmp_path):
    assert isinstance(create_provider(str(tmp_path), "json"), JsonTableProvider)
    html = create_provider(str(tmp_path), "html", table_id="team-stats")
    assert isinstance(html, HtmlTableProvider)
    assert html.table_id == "team-stats"
    with pytest.raises(ValueError):
        create_provider(str(tmp_path), "csv")
