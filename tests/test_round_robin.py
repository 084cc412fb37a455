from collections import Counter

import pytest

from matchday.models.enums import MatchStage
from matchday.pairing import (
    generate_league_matches,
    round_robin_pairings,
    round_robin_schedule,
)


def _ids(n):
    return [f"p{i}" for i in range(n)]


@pytest.mark.parametrize("n", [2, 3, 4, 5, 6, 7, 8, 11])
def test_every_pair_meets_exactly_once(n):
    schedule = round_robin_pairings(_ids(n))
    meetings = Counter(frozenset(pair) for pairs in schedule for pair in pairs)
    assert len(meetings) == n * (n - 1) // 2
    assert set(meetings.values()) == {1}


@pytest.mark.parametrize("n", [4, 5, 6, 9])
def test_nobody_plays_twice_in_a_round(n):
    for pairs in round_robin_pairings(_ids(n)):
        seen = [pid for pair in pairs for pid in pair]
        assert len(seen) == len(set(seen))


@pytest.mark.parametrize("n", [4, 5])
def test_round_count(n):
    expected = n - 1 if n % 2 == 0 else n
    assert len(round_robin_pairings(_ids(n))) == expected


def test_odd_field_sits_one_out_per_round():
    for pairs in round_robin_pairings(_ids(5)):
        assert len(pairs) == 2


def test_too_small_field_has_no_rounds():
    assert round_robin_pairings([]) == []
    assert round_robin_pairings(["solo"]) == []


@pytest.mark.parametrize("n", [4, 5])
def test_second_pass_reverses_home_and_away(n):
    single = round_robin_pairings(_ids(n))
    double = round_robin_schedule(_ids(n), face_opponents_twice=True)
    assert len(double) == 2 * len(single)
    for k, pairs in enumerate(single):
        assert double[len(single) + k] == [(away, home) for home, away in pairs]
    meetings = Counter(frozenset(pair) for pairs in double for pair in pairs)
    assert set(meetings.values()) == {2}


def test_league_matches_are_unplayed_and_numbered_by_round():
    matches = generate_league_matches(_ids(4))
    assert len(matches) == 6
    assert {m.round for m in matches} == {1, 2, 3}
    assert all(m.stage == MatchStage.LEAGUE and not m.played for m in matches)
    assert len({m.id for m in matches}) == 6


def test_double_league_continues_round_numbers():
    matches = generate_league_matches(_ids(4), face_opponents_twice=True)
    assert len(matches) == 12
    assert max(m.round for m in matches) == 6
