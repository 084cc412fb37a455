"""Stage progression state machine.

This module decides, after every result change, whether a format needs a
new round or stage and whether the tournament is finished. It also builds
the opening fixtures and performs resets. Every function takes a snapshot
and returns a new one.
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

from dataclasses import replace
from typing import List, Optional, Tuple

from matchday.constants import MIN_GROUP_COUNT
from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import Group, Match, Tournament
from matchday.pairing import (
    create_balanced_groups,
    generate_group_stage_matches,
    generate_knockout_round_one,
    generate_league_matches,
    maybe_generate_next_knockout_round,
    maybe_generate_swiss_round,
    maybe_start_knockout_after_groups,
)
from matchday.tournament.standings import build_standings
from matchday.utils import setup_logger

logger = setup_logger(__name__)


def run_format_progression(tournament: Tournament) -> Tournament:
    """Advance ``tournament`` as far as its recorded results allow.

    Format-specific generation runs first; then standings are rebuilt and
    the catch-all completion rule applies: a tournament whose matches are
    all played is COMPLETED whatever its format.

    Args:
        tournament: Snapshot after a result change

    Returns:
        New snapshot with fresh standings
    """
    if tournament.format == TournamentFormat.GROUP_KO:
        tournament = maybe_start_knockout_after_groups(tournament)
        tournament = maybe_generate_next_knockout_round(tournament)
    elif tournament.format == TournamentFormat.KNOCKOUT:
        tournament = maybe_generate_next_knockout_round(tournament)
    elif tournament.format == TournamentFormat.SWISS:
        tournament = maybe_generate_swiss_round(tournament)

    # Pending bracket matches stay out of the table
    counted = [
        m for m in tournament.matches if m.stage != MatchStage.KNOCKOUT or m.played
    ]
    standings = build_standings(tournament.participants, counted)

    status = tournament.status
    if tournament.matches and not tournament.has_unplayed:
        if status != TournamentStatus.COMPLETED:
            logger.info(f"Tournament {tournament.id} completed")
        status = TournamentStatus.COMPLETED

    return replace(tournament, standings=standings, status=status)


def _opening_fixtures(
    tournament: Tournament,
) -> Tuple[List[Match], Optional[Tuple[Group, ...]]]:
    settings = tournament.settings
    participant_ids = [p.id for p in tournament.participants]

    if tournament.format == TournamentFormat.KNOCKOUT:
        matches = generate_knockout_round_one(
            tournament.participants, settings.random_seed
        )
        return matches, tournament.groups
    if tournament.format == TournamentFormat.GROUP_KO:
        group_count = max(MIN_GROUP_COUNT, settings.group_count)
        groups = tuple(
            create_balanced_groups(
                tournament.participants, group_count, settings.random_seed
            )
        )
        matches = generate_group_stage_matches(groups, settings.face_opponents_twice)
        return matches, groups
    if tournament.format == TournamentFormat.SWISS:
        seeded = maybe_generate_swiss_round(replace(tournament, matches=()))
        return list(seeded.matches), tournament.groups
    matches = generate_league_matches(participant_ids, settings.face_opponents_twice)
    return matches, tournament.groups


def generate_fixtures(tournament: Tournament) -> Tournament:
    """Build the first stage's matches.

    Refused (returns the snapshot unchanged) when matches already exist;
    a reset must come first.

    Args:
        tournament: Snapshot without matches

    Returns:
        IN_PROGRESS snapshot with fixtures, or NOT_STARTED when the roster
        is too small to produce any match
    """
    if tournament.matches:
        logger.warning(
            f"Fixtures already exist for {tournament.id}; reset before regenerating"
        )
        return tournament

    matches, groups = _opening_fixtures(tournament)
    status = TournamentStatus.IN_PROGRESS if matches else TournamentStatus.NOT_STARTED
    logger.info(
        f"Generated {len(matches)} {tournament.format.value} fixtures for "
        f"{tournament.id}"
    )
    return run_format_progression(
        replace(tournament, matches=tuple(matches), groups=groups, status=status)
    )


def reset_tournament(tournament: Tournament) -> Tournament:
    """Clear matches, groups and standings; roster and settings are kept."""
    logger.info(f"Reset tournament {tournament.id}")
    return replace(
        tournament,
        matches=(),
        groups=None,
        standings=None,
        status=TournamentStatus.NOT_STARTED,
    )
