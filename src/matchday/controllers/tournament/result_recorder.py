"""Result recording for tournaments.

This module applies simulated and manual results to tournament snapshots
and reruns progression afterwards.
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
from typing import Iterable, Optional

from matchday.constants import SIMULATE_ALL_ROUND_LIMIT
from matchday.controllers.tournament.edit_guard import is_match_edit_allowed
from matchday.controllers.tournament.progression import run_format_progression
from matchday.models.enums import MatchStage, TournamentStatus
from matchday.models.tournament import Match, Tournament
from matchday.tournament.simulation import simulate_match_result
from matchday.utils import setup_logger

logger = setup_logger(__name__)


def _is_downstream(match: Match, edited: Match) -> bool:
    """Whether ``match`` was generated from results including ``edited``."""
    if edited.stage == MatchStage.GROUP:
        return match.stage == MatchStage.KNOCKOUT
    if edited.stage in (MatchStage.KNOCKOUT, MatchStage.SWISS):
        return match.stage == edited.stage and match.round > edited.round
    return False


class ResultRecorder:
    """Records match results and keeps the tournament progressing.

    This class is responsible for:
    - Simulating single matches, rounds and whole tournaments
    - Recording manual results behind the edit guard
    - Discarding fixtures built from a result that changed
    """

    def simulate_matches(
        self, tournament: Tournament, match_ids: Iterable[str]
    ) -> Tournament:
        """Simulate the unplayed matches among ``match_ids``.

        Unknown or already played ids are ignored; when nothing is left the
        snapshot comes back unchanged.

        Args:
            tournament: Current snapshot
            match_ids: Matches to resolve

        Returns:
            Progressed snapshot
        """
        targets = set(match_ids)
        pending = [m for m in tournament.matches if m.id in targets and not m.played]
        if not pending:
            logger.debug(f"Nothing to simulate in {tournament.id}")
            return tournament

        outcomes = {m.id: simulate_match_result(tournament, m) for m in pending}
        matches = tuple(
            replace(m, played=True, winner=outcomes[m.id].winner)
            if m.id in outcomes
            else m
            for m in tournament.matches
        )
        logger.debug(f"Simulated {len(outcomes)} matches in {tournament.id}")
        return run_format_progression(
            replace(tournament, matches=matches, status=TournamentStatus.IN_PROGRESS)
        )

    def simulate_round(self, tournament: Tournament, round_number: int) -> Tournament:
        """Simulate every unplayed match of ``round_number``, across stages."""
        match_ids = [
            m.id
            for m in tournament.matches
            if m.round == round_number and not m.played
        ]
        return self.simulate_matches(tournament, match_ids)

    def simulate_all(self, tournament: Tournament) -> Tournament:
        """Simulate round after round until no unplayed match remains.

        Stops after a fixed number of rounds so a misbehaving generator can
        never spin forever.
        """
        for _ in range(SIMULATE_ALL_ROUND_LIMIT):
            pending = next((m for m in tournament.matches if not m.played), None)
            if pending is None or tournament.status == TournamentStatus.COMPLETED:
                return tournament
            tournament = self.simulate_round(tournament, pending.round)

        logger.warning(
            f"Stopped simulating {tournament.id} after "
            f"{SIMULATE_ALL_ROUND_LIMIT} rounds"
        )
        return tournament

    def record_manual_result(
        self,
        tournament: Tournament,
        match_id: str,
        winner_id: Optional[str],
    ) -> Tournament:
        """Record a manual result for ``match_id``.

        A ``winner_id`` that is not one of the match's sides records a draw.
        Changing a result discards every fixture generated from it, after
        which progression rebuilds them from the corrected results.

        Args:
            tournament: Current snapshot
            match_id: Match to record
            winner_id: Winning participant, or None for a draw

        Returns:
            Progressed snapshot, or the input unchanged when the match is
            unknown or locked
        """
        target = tournament.get_match(match_id)
        if target is None:
            logger.warning(f"Match {match_id} not found in {tournament.id}")
            return tournament
        if not is_match_edit_allowed(tournament, target):
            logger.warning(
                f"Match {match_id} is locked: later results depend on it"
            )
            return tournament

        winner = winner_id if winner_id in target.participant_ids else None
        if target.played and target.winner == winner:
            return tournament

        edited = replace(target, played=True, winner=winner)
        matches = tuple(
            edited if m.id == match_id else m
            for m in tournament.matches
            if not _is_downstream(m, target)
        )
        discarded = len(tournament.matches) - len(matches)
        if discarded:
            logger.info(
                f"Discarded {discarded} matches generated after {match_id}"
            )
        logger.debug(f"Recorded {match_id}: {winner or 'draw'}")

        return run_format_progression(
            replace(
                tournament,
                matches=matches,
                status=TournamentStatus.IN_PROGRESS,
            )
        )
