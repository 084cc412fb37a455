"""Match outcome resolution.

Byes resolve without touching the random stream. A live match is decided
by 25 rollouts drawn from the match's own stream (seeded by the tournament
seed and the match id), so its outcome does not depend on the order in
which matches are simulated. Each rollout first rolls for a draw (5% when
draws are allowed, otherwise a roll that can never hit) and then for side
A winning with the logistic rating curve. The side with the most rollout
wins takes the match, side A on an even split; the match is a draw only
when drawn rollouts strictly outnumber both win counts.
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

from typing import NamedTuple, Optional

from matchday.constants import (
    DEFAULT_DRAW_CHANCE,
    SIMULATION_ROLLOUTS,
    WIN_PROBABILITY_SCALE,
)
from matchday.exceptions import ParticipantNotFoundException
from matchday.models.tournament import Match, Participant, Tournament
from matchday.type_hints import Rng
from matchday.utils import setup_logger
from matchday.utils.rng import create_rng

logger = setup_logger(__name__)


class MatchOutcome(NamedTuple):
    """Result to merge into a match: always played, winner None on a draw."""

    played: bool
    winner: Optional[str]


def win_probability(rating_a: float, rating_b: float) -> float:
    """Probability that side A beats side B.

    ``1 / (1 + 10 ** ((rating_b - rating_a) / 20))``: 0.5 at equal ratings,
    about 0.909 for a 20 point edge.
    """
    return 1 / (1 + 10 ** ((rating_b - rating_a) / WIN_PROBABILITY_SCALE))


def _simulate_rollout(
    player_a: Participant,
    player_b: Participant,
    draw_chance: float,
    rng: Rng,
) -> Optional[str]:
    if rng() < draw_chance:
        return None
    if rng() < win_probability(player_a.rating, player_b.rating):
        return player_a.id
    return player_b.id


def simulate_match_result(tournament: Tournament, match: Match) -> MatchOutcome:
    """Decide ``match`` for ``tournament``.

    Args:
        tournament: Snapshot providing roster, seed and draw setting
        match: Match to resolve (its current result is ignored)

    Returns:
        MatchOutcome with ``played=True``

    Raises:
        ParticipantNotFoundException: If a non-bye side is not on the roster
    """
    if match.player_a.is_bye and match.player_b.is_bye:
        return MatchOutcome(True, None)
    if match.player_a.is_bye:
        return MatchOutcome(True, match.player_b.participant_id)
    if match.player_b.is_bye:
        return MatchOutcome(True, match.player_a.participant_id)

    roster = tournament.participant_map()
    player_a = roster.get(match.player_a.participant_id)
    player_b = roster.get(match.player_b.participant_id)
    if player_a is None or player_b is None:
        logger.error(
            f"Match {match.id} references unknown participants "
            f"{match.player_a} / {match.player_b}"
        )
        raise ParticipantNotFoundException(
            "Cannot simulate match with unknown participants."
        )

    rng = create_rng(tournament.settings.random_seed, match.id)
    draw_chance = DEFAULT_DRAW_CHANCE if tournament.settings.allow_draws else 0.0
    a_wins = b_wins = draws = 0

    for _ in range(SIMULATION_ROLLOUTS):
        rollout = _simulate_rollout(player_a, player_b, draw_chance, rng)
        if rollout == player_a.id:
            a_wins += 1
        elif rollout == player_b.id:
            b_wins += 1
        else:
            draws += 1

    winner: Optional[str] = player_a.id
    most_wins = a_wins
    if b_wins > most_wins:
        winner = player_b.id
        most_wins = b_wins
    if draws > most_wins:
        winner = None

    logger.debug(
        f"Simulated {match.id}: {player_a.name} {a_wins} / {player_b.name} {b_wins}"
        f" / draws {draws} -> {winner or 'draw'}"
    )
    return MatchOutcome(True, winner)
