import pytest

from matchday.constants import ELO_DEFAULT_RATING
from matchday.exceptions import RatingValidationException
from matchday.rating import EloResult, apply_elo_update, expected_score, k_factor


def test_provisional_k_factor():
    assert k_factor(0) == 32
    assert k_factor(19) == 32
    assert k_factor(20) == 24


def test_expected_score_is_even_for_equal_ratings():
    assert expected_score(50, 50) == pytest.approx(0.5)


def test_provisional_win_between_equals():
    assert apply_elo_update(50, 50, 1, 0, 0) == EloResult(66.0, 34.0)


def test_established_win_between_equals():
    result = apply_elo_update(50, 50, 1, 20, 20)
    assert result.rating_a == 62.0
    assert result.rating_b == 38.0


def test_ratings_are_clamped():
    assert apply_elo_update(100, 100, 1, 0, 0) == EloResult(100, 84.0)


def test_draw_between_equals_changes_nothing():
    draw = apply_elo_update(ELO_DEFAULT_RATING, ELO_DEFAULT_RATING, 0.5, 10, 10)
    assert draw.rating_a == pytest.approx(ELO_DEFAULT_RATING)
    assert draw.rating_b == pytest.approx(ELO_DEFAULT_RATING)


def test_win_and_loss_are_symmetric():
    a_wins = apply_elo_update(ELO_DEFAULT_RATING, ELO_DEFAULT_RATING, 1, 0, 0)
    b_wins = apply_elo_update(ELO_DEFAULT_RATING, ELO_DEFAULT_RATING, 0, 0, 0)
    assert a_wins.rating_a - ELO_DEFAULT_RATING == pytest.approx(
        ELO_DEFAULT_RATING - b_wins.rating_a
    )


def test_upset_pays_more_than_expected_win():
    expected_gain = apply_elo_update(80, 20, 1, 50, 50).rating_a - 80
    upset_gain = apply_elo_update(20, 80, 1, 50, 50).rating_a - 20
    assert upset_gain > expected_gain


def test_results_have_two_decimals():
    result = apply_elo_update(57, 43, 1, 5, 30)
    assert round(result.rating_a, 2) == result.rating_a
    assert round(result.rating_b, 2) == result.rating_b


@pytest.mark.parametrize("score", [2, -1, 0.25])
def test_invalid_score_raises(score):
    with pytest.raises(RatingValidationException):
        apply_elo_update(50, 50, score, 0, 0)
