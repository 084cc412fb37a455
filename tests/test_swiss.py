from collections import Counter
from dataclasses import replace

from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import (
    Match,
    Participant,
    Side,
    Tournament,
    TournamentSettings,
)
from matchday.pairing import maybe_generate_swiss_round, pair_swiss_round


def _players(*ids):
    return [Participant(id=pid, name=pid.upper(), rating=50) for pid in ids]


def _swiss_match(match_id, a, b, winner, round_number=1):
    return Match(
        id=match_id,
        player_a=Side.of(a),
        player_b=Side.of(b) if b else Side.bye(),
        round=round_number,
        stage=MatchStage.SWISS,
        played=True,
        winner=winner,
    )


def _swiss(participants, matches, rounds=3, face_twice=False):
    return Tournament(
        id="t1",
        name="Swiss",
        format=TournamentFormat.SWISS,
        participants=tuple(participants),
        matches=tuple(matches),
        settings=TournamentSettings(rounds=rounds, face_opponents_twice=face_twice),
        status=TournamentStatus.IN_PROGRESS,
    )


def _pairs(tournament, round_number):
    return {
        frozenset(m.participant_ids)
        for m in tournament.matches
        if m.round == round_number and not m.has_bye
    }


def test_first_round_pairs_everyone():
    tournament = maybe_generate_swiss_round(_swiss(_players("a", "b", "c", "d"), []))
    round_one = [m for m in tournament.matches if m.round == 1]
    assert len(round_one) == 2
    assert sorted(pid for m in round_one for pid in m.participant_ids) == [
        "a",
        "b",
        "c",
        "d",
    ]


def test_second_round_avoids_repeat_pairings():
    matches = [_swiss_match("m1", "a", "b", "a"), _swiss_match("m2", "c", "d", "c")]
    tournament = maybe_generate_swiss_round(_swiss(_players("a", "b", "c", "d"), matches))
    round_two = _pairs(tournament, 2)
    assert frozenset({"a", "b"}) not in round_two
    assert frozenset({"c", "d"}) not in round_two
    assert round_two == {frozenset({"a", "c"}), frozenset({"b", "d"})}


def test_unplayed_round_blocks_generation():
    pending = Match("m2", Side.of("c"), Side.of("d"), 1, MatchStage.SWISS)
    tournament = _swiss(
        _players("a", "b", "c", "d"), [_swiss_match("m1", "a", "b", "a"), pending]
    )
    assert maybe_generate_swiss_round(tournament) is tournament


def test_round_count_reached_completes():
    matches = [_swiss_match("m1", "a", "b", "a"), _swiss_match("m2", "c", "d", "c")]
    tournament = maybe_generate_swiss_round(
        _swiss(_players("a", "b", "c", "d"), matches, rounds=1)
    )
    assert tournament.status == TournamentStatus.COMPLETED
    assert len(tournament.matches) == 2


def test_bye_goes_to_lowest_ranked_without_one():
    ranked = _players("a", "b", "c")
    earlier = [_swiss_match("m1", "c", None, "c")]
    pairs = pair_swiss_round(ranked, earlier)
    bye_side, empty = pairs[0]
    assert empty.is_bye
    assert bye_side == Side.of("b")


def test_bye_repeats_when_everyone_had_one():
    ranked = _players("a", "b", "c")
    earlier = [
        _swiss_match("m1", "a", None, "a"),
        _swiss_match("m2", "b", None, "b", round_number=2),
        _swiss_match("m3", "c", None, "c", round_number=3),
    ]
    pairs = pair_swiss_round(ranked, earlier)
    assert pairs[0] == (Side.of("c"), Side.bye())


def test_unavoidable_repeat_falls_back_to_next_opponent():
    ranked = _players("a", "b")
    earlier = [_swiss_match("m1", "a", "b", "a")]
    assert pair_swiss_round(ranked, earlier) == [(Side.of("a"), Side.of("b"))]


def test_facing_twice_allows_one_repeat():
    ranked = _players("a", "b", "c", "d")
    earlier = [_swiss_match("m1", "a", "b", "a"), _swiss_match("m2", "c", "d", "c")]
    pairs = pair_swiss_round(ranked, earlier, max_meetings=2)
    assert pairs[0] == (Side.of("a"), Side.of("b"))


def _play_all(tournament):
    """Record side A (or the only real side) as winner of every open match."""
    matches = tuple(
        m if m.played else replace(m, played=True, winner=m.participant_ids[0])
        for m in tournament.matches
    )
    return replace(tournament, matches=matches)


def test_byes_rotate_across_rounds():
    players = _players("a", "b", "c", "d", "e")
    tournament = maybe_generate_swiss_round(_swiss(players, [], rounds=3))
    for _ in range(3):
        tournament = maybe_generate_swiss_round(_play_all(tournament))
    bye_receivers = Counter(
        m.participant_ids[0] for m in tournament.matches if m.has_bye
    )
    assert sum(bye_receivers.values()) == 3
    assert set(bye_receivers.values()) == {1}
    assert tournament.status == TournamentStatus.COMPLETED
