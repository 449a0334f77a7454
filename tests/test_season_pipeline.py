"""End-to-end tests for the season analysis pipeline."""

import itertools
import json

import numpy as np
import pytest

from four_factors.analysis.regression import DIFFERENTIAL_COLUMNS
from four_factors.data.providers import JsonTableProvider, TableProvider
from four_factors.data.roster import Roster
from four_factors.errors import MalformedGameTableError, RetrievalError, TieGameError
from four_factors.main import main
from four_factors.models import GameTable
from four_factors.pipeline.season import SeasonAnalysis, SeasonAnalysisConfig

TEAMS = ["MSU", "IU", "UM", "OSU", "PUR", "ILL", "WIS", "IOWA"]


def _column(rng):
    fga = int(rng.integers(50, 66))
    fgm = int(rng.integers(18, 30))
    fg3a = int(rng.integers(12, 26))
    fg3m = int(rng.integers(3, min(fg3a, fgm, 11) + 1))
    fta = int(rng.integers(10, 28))
    ftm = int(rng.integers(5, fta + 1))
    return {
        "fg": (fgm, fga),
        "fg3": (fg3m, fg3a),
        "ft": (ftm, fta),
        "oreb": int(rng.integers(5, 16)),
        "dreb": int(rng.integers(18, 32)),
        "tov": int(rng.integers(7, 18)),
    }


def _points(col):
    return 2 * col["fg"][0] + col["fg3"][0] + col["ft"][0]


def make_table(game_id, home, away, home_col, away_col, tie=False):
    if _points(home_col) == _points(away_col) and not tie:
        made, attempted = home_col["ft"]
        home_col = dict(home_col, ft=(made + 1, attempted + 1))
    cols = (home_col, away_col)
    rows = {
        "FG": tuple(f"{c['fg'][0]}-{c['fg'][1]}" for c in cols),
        "3PT": tuple(f"{c['fg3'][0]}-{c['fg3'][1]}" for c in cols),
        "FT": tuple(f"{c['ft'][0]}-{c['ft'][1]}" for c in cols),
        "OREB": tuple(str(c["oreb"]) for c in cols),
        "DREB": tuple(str(c["dreb"]) for c in cols),
        "TO": tuple(str(c["tov"]) for c in cols),
        "PTS": tuple(str(_points(c)) for c in cols),
    }
    return GameTable(game_id=game_id, teams=(home, away), rows=rows)


def round_robin(seed=2024):
    rng = np.random.default_rng(seed)
    tables = {}
    schedule = {team: [] for team in TEAMS}
    for idx, (home, away) in enumerate(itertools.combinations(TEAMS, 2)):
        game_id = f"40{idx:03d}"
        tables[game_id] = make_table(game_id, home, away, _column(rng), _column(rng))
        schedule[home].append(game_id)
        schedule[away].append(game_id)
    return tables, schedule


class DictTableProvider(TableProvider):
    def __init__(self, tables):
        self.tables = tables
        self.calls = []

    def get_table(self, game_id):
        self.calls.append(game_id)
        if game_id not in self.tables:
            raise RetrievalError("not cached", game_id=game_id)
        return self.tables[game_id]


def test_full_season_produces_factors_wins_and_models():
    tables, schedule = round_robin()
    provider = DictTableProvider(tables)

    report = SeasonAnalysis(Roster.from_mapping(schedule), provider).run()

    assert set(report.teams) == set(TEAMS)
    assert report.skipped_games == []
    assert report.excluded_teams == {}
    # Shared games are fetched once.
    assert sorted(provider.calls) == sorted(tables)

    records = [r.record for r in report.teams.values()]
    assert sum(r.wins for r in records) == len(tables)
    assert all(r.games == len(TEAMS) - 1 for r in records)

    totals = [r.totals for r in report.teams.values()]
    assert sum(t.fga for t in totals) == sum(t.opp_fga for t in totals)
    assert sum(t.oreb for t in totals) == sum(t.opp_oreb for t in totals)

    assert list(report.regression_frame.columns) == [*DIFFERENTIAL_COLUMNS, "wins"]
    assert len(report.regression_frame) == len(TEAMS)
    assert set(report.models) | set(report.model_errors) == {
        "shooting", "turnovers", "rebounding", "free_throws", "four_factors"
    }
    assert report.models["four_factors"].n_obs == len(TEAMS)
    assert report.models["four_factors"].df_resid == len(TEAMS) - 5


def test_skip_policy_records_missing_game():
    tables, schedule = round_robin()
    missing = schedule["MSU"][0]
    del tables[missing]

    report = SeasonAnalysis(Roster.from_mapping(schedule), DictTableProvider(tables)).run()

    assert [s["game_id"] for s in report.skipped_games] == [missing]
    assert report.skipped_games[0]["error"] == "RetrievalError"
    assert report.teams["MSU"].totals.games == len(TEAMS) - 2


def test_abort_policy_raises_first_error():
    tables, schedule = round_robin()
    del tables[schedule["IU"][2]]
    analysis = SeasonAnalysis(
        Roster.from_mapping(schedule),
        DictTableProvider(tables),
        SeasonAnalysisConfig(on_game_error="abort"),
    )
    with pytest.raises(RetrievalError):
        analysis.run()


def test_malformed_and_tied_games_are_skipped():
    tables, schedule = round_robin()
    rng = np.random.default_rng(1)
    bad_id, tie_id = schedule["UM"][0], schedule["UM"][1]
    bad = tables[bad_id]
    tables[bad_id] = GameTable(game_id=bad_id, teams=bad.teams + ("XYZ",), rows=bad.rows)
    col = _column(rng)
    tie = tables[tie_id]
    tables[tie_id] = make_table(tie_id, tie.teams[0], tie.teams[1], col, dict(col), tie=True)

    report = SeasonAnalysis(Roster.from_mapping(schedule), DictTableProvider(tables)).run()

    errors = {s["game_id"]: s["error"] for s in report.skipped_games}
    assert errors == {bad_id: MalformedGameTableError.__name__, tie_id: TieGameError.__name__}


def test_team_listed_for_foreign_game_is_reported():
    tables, schedule = round_robin()
    foreign = next(g for g in schedule["IU"] if g not in schedule["MSU"])
    schedule["MSU"].append(foreign)

    report = SeasonAnalysis(Roster.from_mapping(schedule), DictTableProvider(tables)).run()

    assert report.skipped_games == [
        {
            "game_id": foreign,
            "team": "MSU",
            "error": "TeamNotInGameError",
            "reason": report.skipped_games[0]["reason"],
        }
    ]
    assert report.teams["MSU"].totals.games == len(TEAMS) - 1


def test_team_without_games_is_excluded_from_regression():
    tables, schedule = round_robin()
    schedule["GHOST"] = ["99999"]

    report = SeasonAnalysis(Roster.from_mapping(schedule), DictTableProvider(tables)).run()

    assert "GHOST" in report.excluded_teams
    assert report.teams["GHOST"].factors is None
    assert "GHOST" not in report.regression_frame.index
    assert report.to_dict()["teams"]["GHOST"]["four_factors"] is None


def test_aliases_map_box_score_names_to_roster_labels():
    tables, schedule = round_robin()
    renamed = {
        gid: GameTable(
            game_id=gid,
            teams=tuple("Michigan St." if t == "MSU" else t for t in table.teams),
            rows=table.rows,
        )
        for gid, table in tables.items()
    }
    roster = Roster.from_mapping(schedule, aliases={"Michigan St.": "MSU"})

    report = SeasonAnalysis(roster, DictTableProvider(renamed)).run()

    assert report.skipped_games == []
    assert report.teams["MSU"].totals.games == len(TEAMS) - 1


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        SeasonAnalysis(Roster.from_mapping({"A": ["1"]}), DictTableProvider({}), SeasonAnalysisConfig(on_game_error="retry"))


def test_cli_analyze_writes_report(tmp_path, capsys):
    tables, schedule = round_robin()
    tables_dir = tmp_path / "tables"
    provider = JsonTableProvider(str(tables_dir))
    for table in tables.values():
        provider.save_table(table)
    roster_path = tmp_path / "roster.json"
    roster_path.write_text(json.dumps({"teams": schedule}))
    output = tmp_path / "out" / "report.json"

    code = main([
        "analyze",
        "--roster", str(roster_path),
        "--tables-dir", str(tables_dir),
        "--model", "shooting=efg_diff",
        "--output", str(output),
    ])

    assert code == 0
    report = json.loads(output.read_text())
    assert list(report["models"]) == ["shooting"]
    assert report["models"]["shooting"]["predictors"] == ["efg_diff"]
    assert set(report["teams"]) == set(TEAMS)
    assert "MODEL shooting" in capsys.readouterr().out


def test_cli_factors_and_extract(tmp_path, capsys):
    tables, schedule = round_robin()
    html_dir = tmp_path / "html"
    html_dir.mkdir()
    for gid, table in tables.items():
        header = "".join(f"<th>{t}</th>" for t in table.teams)
        body = "".join(
            f"<tr><td>{label}</td>" + "".join(f"<td>{c}</td>" for c in cells) + "</tr>"
            for label, cells in table.rows.items()
        )
        (html_dir / f"{gid}.html").write_text(f"<table><tr><th></th>{header}</tr>{body}</table>")
    roster_path = tmp_path / "roster.json"
    roster_path.write_text(json.dumps({"teams": schedule}))
    json_dir = tmp_path / "json"

    assert main(["extract", "--roster", str(roster_path), "--html-dir", str(html_dir), "--output-dir", str(json_dir)]) == 0
    assert JsonTableProvider(str(json_dir)).get_table(next(iter(tables))) == tables[next(iter(tables))]

    assert main(["factors", "--roster", str(roster_path), "--tables-dir", str(html_dir), "--format", "html"]) == 0
    out = capsys.readouterr().out
    assert "opp_efg" in out
    assert "IOWA" in out


def test_cli_rejects_bad_model_spec(tmp_path, capsys):
    roster_path = tmp_path / "roster.json"
    roster_path.write_text(json.dumps({"teams": {"A": ["1"]}}))
    code = main(["analyze", "--roster", str(roster_path), "--tables-dir", str(tmp_path), "--model", "bad=pace"])
    assert code == 1
    assert "Unknown predictors" in capsys.readouterr().out
