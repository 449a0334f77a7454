"""Unit tests for opponent pairing."""

import pytest

from four_factors.analysis.pairing import pair_opponents
from four_factors.errors import MalformedGameTableError
from four_factors.models import BASE_COUNT_FIELDS, TeamGameStats


def _record(team, game_id="g1", **counts):
    base = dict(pts=70, fgm=25, fga=60, fg3m=6, fg3a=18, ftm=14, fta=20, tov=12, oreb=10, dreb=25)
    base.update(counts)
    return TeamGameStats(game_id=game_id, team=team, **base)


def test_pairing_mirrors_base_fields():
    a = _record("A", pts=71, fga=55, oreb=8)
    b = _record("B", pts=64, fga=62, oreb=13)

    pa, pb = pair_opponents([a, b])

    for name in BASE_COUNT_FIELDS:
        assert getattr(pa, f"opp_{name}") == getattr(pb, name)
        assert getattr(pb, f"opp_{name}") == getattr(pa, name)
    assert pa.opponent == "B" and pb.opponent == "A"


def test_pairing_is_order_independent():
    a = _record("A", pts=71, dreb=30)
    b = _record("B", pts=64, dreb=20)

    forward = pair_opponents([a, b])
    backward = pair_opponents([b, a])

    assert forward == tuple(reversed(backward))


def test_pairing_does_not_mutate_inputs():
    a = _record("A")
    b = _record("B", pts=50)
    pair_opponents([a, b])
    assert a.opp_pts == 0 and b.opp_pts == 0


@pytest.mark.parametrize("count", [0, 1, 3])
def test_pairing_requires_exactly_two_records(count):
    records = [_record(f"T{i}") for i in range(count)]
    with pytest.raises(MalformedGameTableError):
        pair_opponents(records)


def test_pairing_rejects_records_from_different_games():
    with pytest.raises(MalformedGameTableError):
        pair_opponents([_record("A", game_id="g1"), _record("B", game_id="g2")])


def test_pairing_rejects_same_team():
    with pytest.raises(MalformedGameTableError):
        pair_opponents([_record("A"), _record("a")])
