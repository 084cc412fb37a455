"""Swiss system round generation.

Participants are ranked on the current Swiss standings (points, Buchholz,
rating). An odd field gives a bye to the lowest-ranked participant without
one. The rest are paired greedily from the top: each participant takes the
first remaining opponent it has not met the maximum number of times, and
falls back to the next available opponent when every one is exhausted.
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

from collections import Counter
from dataclasses import replace
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

from matchday.constants import ID_PREFIX_MATCH
from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import Match, Participant, Side, Tournament
from matchday.tournament.standings import build_standings, rank_for_qualification
from matchday.utils import generate_id, setup_logger

logger = setup_logger(__name__)


def _pair_key(a: Optional[str], b: Optional[str]) -> FrozenSet[Optional[str]]:
    return frozenset({a, b})


def _select_bye(ranked: Sequence[Participant], had_bye: Set[str]) -> int:
    """Index of the bye receiver, searching from the bottom of the ranking."""
    for index in range(len(ranked) - 1, -1, -1):
        if ranked[index].id not in had_bye:
            return index
    logger.warning(
        "Every participant has already had a bye; assigning a second bye "
        f"to {ranked[-1].name}"
    )
    return len(ranked) - 1


def pair_swiss_round(
    ranked: Sequence[Participant],
    previous_matches: Sequence[Match],
    max_meetings: int = 1,
) -> List[Tuple[Side, Side]]:
    """Pair one Swiss round.

    Args:
        ranked: Participants in ranking order, best first
        previous_matches: Every earlier match of the stage
        max_meetings: Allowed meetings per pair (1, or 2 when facing twice)

    Returns:
        List of (side_a, side_b) pairs; a bye pair comes first
    """
    pairing_counts: Counter = Counter(
        _pair_key(m.player_a.participant_id, m.player_b.participant_id)
        for m in previous_matches
    )
    had_bye = {
        pid for m in previous_matches if m.has_bye for pid in m.participant_ids
    }

    pool = list(ranked)
    pairs: List[Tuple[Side, Side]] = []

    if len(pool) % 2 != 0:
        bye_receiver = pool.pop(_select_bye(pool, had_bye))
        pairs.append((Side.of(bye_receiver.id), Side.bye()))

    while len(pool) > 1:
        top = pool.pop(0)
        index = next(
            (
                i
                for i, candidate in enumerate(pool)
                if pairing_counts[_pair_key(top.id, candidate.id)] < max_meetings
            ),
            None,
        )
        if index is None:
            logger.warning(
                f"No fresh opponent left for {top.name}; repeating a pairing"
            )
            index = 0
        opponent = pool.pop(index)
        pairs.append((Side.of(top.id), Side.of(opponent.id)))
        pairing_counts[_pair_key(top.id, opponent.id)] += 1

    return pairs


def maybe_generate_swiss_round(tournament: Tournament) -> Tournament:
    """Generate the next Swiss round, or complete the tournament.

    Nothing happens while any Swiss match is unplayed. Once the configured
    round count is reached the tournament is marked COMPLETED.

    Args:
        tournament: Current snapshot

    Returns:
        New snapshot, or the same one when nothing changes
    """
    if tournament.format != TournamentFormat.SWISS:
        return tournament

    max_rounds = tournament.settings.rounds
    max_meetings = 2 if tournament.settings.face_opponents_twice else 1
    swiss_matches = tournament.stage_matches(MatchStage.SWISS)
    last_round = max((m.round for m in swiss_matches), default=0)

    if any(not m.played for m in swiss_matches):
        return tournament
    if last_round >= max_rounds:
        if tournament.status != TournamentStatus.COMPLETED:
            logger.info(
                f"Swiss tournament {tournament.id} finished after {last_round} rounds"
            )
        return replace(tournament, status=TournamentStatus.COMPLETED)

    standings = build_standings(tournament.participants, swiss_matches)
    ranked = rank_for_qualification(tournament.participants, standings)
    pairs = pair_swiss_round(ranked, swiss_matches, max_meetings)

    new_matches = tuple(
        Match(
            id=generate_id(ID_PREFIX_MATCH),
            player_a=side_a,
            player_b=side_b,
            round=last_round + 1,
            stage=MatchStage.SWISS,
        )
        for side_a, side_b in pairs
    )
    logger.info(
        f"Generated swiss round {last_round + 1} for {tournament.id}: "
        f"{len(new_matches)} matches"
    )
    return replace(
        tournament,
        matches=tournament.matches + new_matches,
        standings=standings,
    )
