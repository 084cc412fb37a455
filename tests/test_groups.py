from collections import Counter

from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import (
    Group,
    Match,
    Participant,
    Side,
    Tournament,
    TournamentSettings,
)
from matchday.pairing import (
    apply_head_to_head_tie_break,
    create_balanced_groups,
    generate_group_stage_matches,
    group_qualifiers,
    maybe_start_knockout_after_groups,
)


def _players(n):
    return [Participant(id=f"p{i}", name=f"Player {i}", rating=50) for i in range(n)]


def _group_match(match_id, a, b, winner, group_id="A", round_number=1):
    return Match(
        id=match_id,
        player_a=Side.of(a),
        player_b=Side.of(b),
        round=round_number,
        stage=MatchStage.GROUP,
        played=True,
        winner=winner,
        group_id=group_id,
    )


def _group_tournament(participants, groups, matches, advance=2):
    return Tournament(
        id="t1",
        name="Groups",
        format=TournamentFormat.GROUP_KO,
        participants=tuple(participants),
        matches=tuple(matches),
        settings=TournamentSettings(advance_per_group=advance, random_seed=5),
        status=TournamentStatus.IN_PROGRESS,
        groups=tuple(groups),
    )


def test_groups_are_balanced_and_lettered():
    groups = create_balanced_groups(_players(10), 3, seed=1)
    assert [g.id for g in groups] == ["A", "B", "C"]
    sizes = sorted(len(g.participant_ids) for g in groups)
    assert sizes == [3, 3, 4]
    members = [pid for g in groups for pid in g.participant_ids]
    assert sorted(members) == sorted(p.id for p in _players(10))


def test_groups_are_reproducible_with_seed():
    assert create_balanced_groups(_players(8), 2, seed=4) == create_balanced_groups(
        _players(8), 2, seed=4
    )


def test_group_fixtures_stay_inside_groups():
    groups = [Group("A", ("p0", "p1", "p2")), Group("B", ("p3", "p4", "p5", "p6"))]
    matches = generate_group_stage_matches(groups)
    assert len(matches) == 3 + 6
    membership = {pid: g.id for g in groups for pid in g.participant_ids}
    for match in matches:
        assert match.stage == MatchStage.GROUP
        assert all(membership[pid] == match.group_id for pid in match.participant_ids)
    per_group = Counter(m.group_id for m in matches)
    assert per_group == {"A": 3, "B": 6}


def test_head_to_head_swaps_top_two():
    a, b, c = _players(3)
    meeting = _group_match("m1", a.id, b.id, b.id)
    assert apply_head_to_head_tie_break([a, b, c], [meeting]) == [b, a, c]


def test_head_to_head_keeps_order_when_leader_won():
    a, b, c = _players(3)
    meeting = _group_match("m1", b.id, a.id, a.id)
    assert apply_head_to_head_tie_break([a, b, c], [meeting]) == [a, b, c]


def test_head_to_head_ignores_draws_and_missing_meetings():
    a, b, c = _players(3)
    draw = Match("m1", Side.of(a.id), Side.of(b.id), 1, MatchStage.GROUP, played=True)
    assert apply_head_to_head_tie_break([a, b, c], [draw]) == [a, b, c]
    assert apply_head_to_head_tie_break([a, b, c], []) == [a, b, c]


def test_qualifiers_follow_group_order():
    players = _players(6)
    groups = [Group("A", ("p0", "p1", "p2")), Group("B", ("p3", "p4", "p5"))]
    matches = [
        _group_match("a1", "p0", "p1", "p0"),
        _group_match("a2", "p0", "p2", "p0", round_number=2),
        _group_match("a3", "p1", "p2", "p2", round_number=3),
        _group_match("b1", "p3", "p4", "p4", group_id="B"),
        _group_match("b2", "p4", "p5", "p4", group_id="B", round_number=2),
        _group_match("b3", "p3", "p5", "p5", group_id="B", round_number=3),
    ]
    tournament = _group_tournament(players, groups, matches)
    qualifiers = [p.id for p in group_qualifiers(tournament)]
    assert qualifiers == ["p0", "p2", "p4", "p5"]


def test_knockout_starts_after_last_group_round():
    players = _players(4)
    groups = [Group("A", ("p0", "p1")), Group("B", ("p2", "p3"))]
    matches = [
        _group_match("a1", "p0", "p1", "p0"),
        _group_match("b1", "p2", "p3", "p3", group_id="B"),
    ]
    tournament = _group_tournament(players, groups, matches, advance=1)
    started = maybe_start_knockout_after_groups(tournament)
    knockout = started.stage_matches(MatchStage.KNOCKOUT)
    assert len(knockout) == 1
    assert knockout[0].round == 2
    assert set(knockout[0].participant_ids) == {"p0", "p3"}


def test_knockout_waits_for_every_group_match():
    players = _players(4)
    groups = [Group("A", ("p0", "p1")), Group("B", ("p2", "p3"))]
    pending = Match("b1", Side.of("p2"), Side.of("p3"), 1, MatchStage.GROUP, group_id="B")
    tournament = _group_tournament(
        players, groups, [_group_match("a1", "p0", "p1", "p0"), pending]
    )
    assert maybe_start_knockout_after_groups(tournament) is tournament
