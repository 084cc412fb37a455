from matchday.models.enums import MatchStage
from matchday.models.tournament import Match, Participant, Side
from matchday.tournament import (
    build_standings,
    rank_for_display,
    rank_for_qualification,
)


def _match(match_id, a, b, winner=None, played=True, stage=MatchStage.LEAGUE):
    return Match(
        id=match_id,
        player_a=Side.of(a) if a else Side.bye(),
        player_b=Side.of(b) if b else Side.bye(),
        round=1,
        stage=stage,
        played=played,
        winner=winner,
    )


def _roster(*entries):
    return [Participant(id=pid, name=pid.upper(), rating=rating) for pid, rating in entries]


def test_points_records_and_buchholz():
    players = _roster(("a", 60), ("b", 50), ("c", 40))
    matches = [
        _match("m1", "a", "b", winner="a"),
        _match("m2", "b", "c"),
        _match("m3", "c", "a", played=False),
        _match("m4", "a", None, winner="a"),
        _match("m5", "a", "outsider", winner="a"),
    ]
    table = build_standings(players, matches)

    assert (table["a"].played, table["a"].wins, table["a"].points) == (1, 1, 3)
    assert (table["b"].losses, table["b"].draws, table["b"].points) == (1, 1, 1)
    assert (table["c"].played, table["c"].draws, table["c"].points) == (1, 1, 1)
    assert table["a"].buchholz == 1
    assert table["b"].buchholz == 4
    assert table["c"].buchholz == 1


def test_rows_are_internally_consistent():
    players = _roster(("a", 50), ("b", 50), ("c", 50), ("d", 50))
    matches = [
        _match("m1", "a", "b", winner="b"),
        _match("m2", "c", "d"),
        _match("m3", "a", "c", winner="a"),
        _match("m4", "b", "d", winner="d"),
    ]
    for row in build_standings(players, matches).values():
        assert row.played == row.wins + row.losses + row.draws
        assert row.points == 3 * row.wins + row.draws


def test_every_participant_gets_a_row():
    table = build_standings(_roster(("a", 50), ("b", 50)), [])
    assert set(table) == {"a", "b"}
    assert table["a"].to_dict() == {
        "played": 0,
        "wins": 0,
        "losses": 0,
        "draws": 0,
        "points": 0,
        "buchholz": 0,
    }


def _split_orders():
    players = _roster(("x", 50), ("y", 50), ("p", 50), ("q", 50), ("r", 50))
    matches = [
        _match("m1", "x", "p", winner="x"),
        _match("m2", "x", "q", winner="q"),
        _match("m3", "y", "q"),
        _match("m4", "y", "r"),
        _match("m5", "y", "p"),
    ]
    return players, build_standings(players, matches)


def test_display_order_prefers_wins():
    players, table = _split_orders()
    ranked = [p.id for p in rank_for_display(players, table)]
    assert ranked[:3] == ["q", "x", "y"]


def test_qualification_order_prefers_buchholz():
    players, table = _split_orders()
    assert table["x"].buchholz == 5
    assert table["y"].buchholz == 6
    ranked = [p.id for p in rank_for_qualification(players, table)]
    assert ranked[:3] == ["q", "y", "x"]


def test_rating_breaks_remaining_ties():
    players = _roster(("low", 40), ("high", 70))
    table = build_standings(players, [])
    assert [p.id for p in rank_for_display(players, table)] == ["high", "low"]
    assert [p.id for p in rank_for_qualification(players, table)] == ["high", "low"]
