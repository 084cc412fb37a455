"""Final placement of a completed tournament."""

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

from typing import List, Optional

from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus
from matchday.models.tournament import Match, Tournament
from matchday.tournament.standings import build_standings, rank_for_qualification

BRACKET_FORMATS = (TournamentFormat.KNOCKOUT, TournamentFormat.GROUP_KO)


def _final_match(tournament: Tournament) -> Optional[Match]:
    decided = [
        m
        for m in tournament.matches
        if m.stage == MatchStage.KNOCKOUT and m.played and m.winner is not None
    ]
    if not decided:
        return None
    final_round = max(m.round for m in decided)
    return next(m for m in decided if m.round == final_round)


def _ranked_ids(tournament: Tournament) -> List[str]:
    standings = tournament.standings or build_standings(
        tournament.participants, tournament.matches
    )
    return [p.id for p in rank_for_qualification(tournament.participants, standings)]


def get_champion_id(tournament: Tournament) -> Optional[str]:
    """Winner of a COMPLETED tournament, None otherwise.

    Bracket formats take the winner of the final; Swiss and league take
    the top of the standings.
    """
    if tournament.status != TournamentStatus.COMPLETED:
        return None
    if tournament.format in BRACKET_FORMATS:
        final = _final_match(tournament)
        return final.winner if final else None
    ranked = _ranked_ids(tournament)
    return ranked[0] if ranked else None


def get_runner_up_id(tournament: Tournament) -> Optional[str]:
    """Second place of a COMPLETED tournament; a final won on a bye has none."""
    if tournament.status != TournamentStatus.COMPLETED:
        return None
    if tournament.format in BRACKET_FORMATS:
        final = _final_match(tournament)
        return final.loser() if final else None
    ranked = _ranked_ids(tournament)
    return ranked[1] if len(ranked) > 1 else None


def get_champion_name(tournament: Tournament) -> Optional[str]:
    champion_id = get_champion_id(tournament)
    if champion_id is None:
        return None
    champion = tournament.get_participant(champion_id)
    return champion.name if champion else None


def get_runner_up_name(tournament: Tournament) -> Optional[str]:
    runner_up_id = get_runner_up_id(tournament)
    if runner_up_id is None:
        return None
    runner_up = tournament.get_participant(runner_up_id)
    return runner_up.name if runner_up else None
