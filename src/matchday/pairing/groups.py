"""Group stage: balanced groups, group fixtures and knockout qualification."""

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

from matchday.constants import SEED_LABEL_GROUPS
from matchday.models.enums import MatchStage, TournamentFormat
from matchday.models.tournament import Group, Match, Participant, Tournament
from matchday.pairing.knockout import generate_knockout_round_one
from matchday.pairing.league import schedule_to_matches
from matchday.tournament.standings import build_standings, rank_for_qualification
from matchday.utils import setup_logger
from matchday.utils.rng import seeded_shuffle

logger = setup_logger(__name__)


def group_letter(index: int) -> str:
    """Group id for a zero-based index: A, B, C, ..."""
    return chr(ord("A") + index)


def create_balanced_groups(
    participants: Sequence[Participant],
    group_count: int,
    seed: Optional[int] = None,
) -> List[Group]:
    """Deal a seeded shuffle of the roster round-robin into ``group_count`` groups.

    Group sizes differ by at most one.
    """
    buckets: List[List[str]] = [[] for _ in range(group_count)]
    shuffled = seeded_shuffle(participants, seed, SEED_LABEL_GROUPS)
    for index, participant in enumerate(shuffled):
        buckets[index % group_count].append(participant.id)
    return [
        Group(id=group_letter(i), participant_ids=tuple(ids))
        for i, ids in enumerate(buckets)
    ]


def generate_group_stage_matches(
    groups: Sequence[Group], face_opponents_twice: bool = False
) -> List[Match]:
    """Round robin fixtures inside every group, tagged with the group id."""
    matches: List[Match] = []
    for group in groups:
        matches.extend(
            schedule_to_matches(
                group.participant_ids,
                MatchStage.GROUP,
                face_opponents_twice,
                group_id=group.id,
            )
        )
    return matches


def apply_head_to_head_tie_break(
    ordered: List[Participant], group_matches: Sequence[Match]
) -> List[Participant]:
    """Swap the top two when the second-placed side won their direct meeting.

    Single pass over the top two slots only; lower places are untouched.
    """
    if len(ordered) < 2:
        return ordered
    first, second = ordered[0], ordered[1]
    direct = next(
        (
            m
            for m in group_matches
            if m.played and m.involves(first.id) and m.involves(second.id)
        ),
        None,
    )
    if direct is None or direct.winner is None or direct.winner == first.id:
        return ordered
    return [second, first] + ordered[2:]


def group_qualifiers(tournament: Tournament) -> List[Participant]:
    """Top ``advance_per_group`` of every group, in group id order."""
    by_id = tournament.participant_map()
    group_matches = tournament.stage_matches(MatchStage.GROUP)
    qualifiers: List[Participant] = []

    for group in tournament.groups or ():
        members = [by_id[pid] for pid in group.participant_ids if pid in by_id]
        matches = [m for m in group_matches if m.group_id == group.id]
        standings = build_standings(members, matches)
        ranked = apply_head_to_head_tie_break(
            rank_for_qualification(members, standings), matches
        )
        qualifiers.extend(ranked[: tournament.settings.advance_per_group])

    return qualifiers


def maybe_start_knockout_after_groups(tournament: Tournament) -> Tournament:
    """Seed knockout round one once every group match has been played.

    The bracket is placed in the round right after the last group round.
    Does nothing while the group stage is incomplete or once knockout
    matches already exist.
    """
    if tournament.format != TournamentFormat.GROUP_KO:
        return tournament
    group_matches = tournament.stage_matches(MatchStage.GROUP)
    if not group_matches or any(not m.played for m in group_matches):
        return tournament
    if tournament.stage_matches(MatchStage.KNOCKOUT):
        return tournament

    qualifiers = group_qualifiers(tournament)
    last_group_round = max(m.round for m in group_matches)
    knockout_matches = generate_knockout_round_one(
        qualifiers,
        tournament.settings.random_seed,
        round_number=last_group_round + 1,
    )
    logger.info(
        f"Group stage finished for {tournament.id}: "
        f"{len(qualifiers)} qualifiers, knockout starts in round {last_group_round + 1}"
    )
    return replace(tournament, matches=tournament.matches + tuple(knockout_matches))
