"""Elo-style rating update on the 0..100 participant scale.

The progression engine never calls this; callers apply it to a finished
match and write the new ratings back with a rating update.
"""

# Matchday
# Copyright (C) 2025  Matchday developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
from typing import NamedTuple

from matchday.constants import (
    ELO_K_BASE,
    ELO_K_PROVISIONAL,
    ELO_PROVISIONAL_MATCHES,
    ELO_SCALE,
)
from matchday.exceptions import RatingValidationException
from matchday.type_hints import EloScore
from matchday.utils import setup_logger
from matchday.utils.validation import clamp_rating

logger = setup_logger(__name__)

VALID_SCORES = (0, 0.5, 1)


class EloResult(NamedTuple):
    rating_a: float
    rating_b: float


def k_factor(matches_played: int) -> int:
    """Provisional participants move faster."""
    if matches_played < ELO_PROVISIONAL_MATCHES:
        return ELO_K_PROVISIONAL
    return ELO_K_BASE


def expected_score(rating_a: float, rating_b: float) -> float:
    return 1 / (1 + 10 ** ((rating_b - rating_a) / ELO_SCALE))


def _round_half_up(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def apply_elo_update(
    rating_a: float,
    rating_b: float,
    score_a: EloScore,
    matches_played_a: int,
    matches_played_b: int,
) -> EloResult:
    """Compute both ratings after one match.

    Args:
        rating_a: Rating of side A before the match
        rating_b: Rating of side B before the match
        score_a: 1 for an A win, 0.5 for a draw, 0 for a B win
        matches_played_a: Matches A played before this one (selects K)
        matches_played_b: Matches B played before this one (selects K)

    Returns:
        EloResult with both ratings clamped to 0..100 and rounded to
        two decimals

    Raises:
        RatingValidationException: If ``score_a`` is not 0, 0.5 or 1
    """
    if score_a not in VALID_SCORES:
        logger.error(f"Invalid Elo score {score_a!r}")
        raise RatingValidationException(
            f"Score must be 0, 0.5 or 1: {score_a!r}"
        )

    expected_a = expected_score(rating_a, rating_b)
    expected_b = 1 - expected_a
    score_b = 1 - score_a

    next_a = clamp_rating(rating_a + k_factor(matches_played_a) * (score_a - expected_a))
    next_b = clamp_rating(rating_b + k_factor(matches_played_b) * (score_b - expected_b))
    return EloResult(_round_half_up(next_a), _round_half_up(next_b))
