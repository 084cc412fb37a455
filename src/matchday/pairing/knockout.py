"""Single elimination bracket generation and advancement."""

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

from dataclasses import replace
from typing import List, Optional, Sequence

from matchday.constants import ID_PREFIX_MATCH, SEED_LABEL_KNOCKOUT
from matchday.models.enums import MatchStage, TournamentStatus
from matchday.models.tournament import Match, Participant, Side, Tournament
from matchday.utils import generate_id, setup_logger
from matchday.utils.rng import seeded_shuffle

logger = setup_logger(__name__)


def next_power_of_two(value: int) -> int:
    """Smallest power of two that is >= ``value``."""
    size = 1
    while size < value:
        size *= 2
    return size


def _knockout_match(player_a: Side, player_b: Side, round_number: int) -> Match:
    return Match(
        id=generate_id(ID_PREFIX_MATCH),
        player_a=player_a,
        player_b=player_b,
        round=round_number,
        stage=MatchStage.KNOCKOUT,
    )


def generate_knockout_round_one(
    participants: Sequence[Participant],
    seed: Optional[int] = None,
    round_number: int = 1,
) -> List[Match]:
    """Build the opening bracket round.

    The field is shuffled with the ``"ko_round_1"`` stream, padded with byes
    up to the next power of two and paired consecutively (0-1, 2-3, ...).

    Args:
        participants: Entrants (or group qualifiers) in any order
        seed: Tournament random seed
        round_number: Round number to stamp on the matches

    Returns:
        List of knockout matches, empty when fewer than two entrants
    """
    if len(participants) < 2:
        return []

    shuffled = seeded_shuffle(participants, seed, SEED_LABEL_KNOCKOUT)
    sides = [Side.of(p.id) for p in shuffled]
    bracket_size = next_power_of_two(len(sides))
    sides.extend(Side.bye() for _ in range(bracket_size - len(sides)))

    matches = [
        _knockout_match(sides[i], sides[i + 1], round_number)
        for i in range(0, len(sides), 2)
    ]
    logger.info(
        f"Generated knockout round {round_number}: {len(matches)} matches, "
        f"{bracket_size - len(participants)} byes"
    )
    return matches


def maybe_generate_next_knockout_round(tournament: Tournament) -> Tournament:
    """Advance the bracket once its latest round is fully played.

    Winners of the latest round are paired in match order; an odd winner
    out faces a bye. A single remaining winner completes the tournament.
    Rounds that already exist are never regenerated.

    Args:
        tournament: Current snapshot

    Returns:
        New snapshot, or the same one when nothing changes
    """
    knockout_matches = tournament.stage_matches(MatchStage.KNOCKOUT)
    if not knockout_matches:
        return tournament

    max_round = max(m.round for m in knockout_matches)
    current_round = [m for m in knockout_matches if m.round == max_round]
    if any(not m.played for m in current_round):
        return tournament

    winners = [m.winner for m in current_round if m.winner is not None]
    if len(winners) <= 1:
        if len(winners) == 1 and tournament.status != TournamentStatus.COMPLETED:
            logger.info(f"Tournament {tournament.id} decided: champion {winners[0]}")
            return replace(tournament, status=TournamentStatus.COMPLETED)
        return tournament

    next_matches = []
    for i in range(0, len(winners), 2):
        player_b = Side.of(winners[i + 1]) if i + 1 < len(winners) else Side.bye()
        next_matches.append(
            _knockout_match(Side.of(winners[i]), player_b, max_round + 1)
        )

    logger.info(
        f"Generated knockout round {max_round + 1}: {len(next_matches)} matches"
    )
    return replace(tournament, matches=tournament.matches + tuple(next_matches))
