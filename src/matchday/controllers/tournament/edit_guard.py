"""Rules for retroactively changing a recorded result.

A result may only change while nothing generated from it has been played:

- knockout and swiss: the stage's current round (first round with an
  unplayed match, or the latest round when all are played), or the round
  before it while the current round has not started
- group: any round while no knockout match exists; only the last group
  round once the bracket exists but has not started; nothing afterwards
- league: any round, since no fixture depends on another result
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

from dataclasses import dataclass
from typing import Sequence

from matchday.models.enums import MatchStage
from matchday.models.tournament import Match, Tournament


@dataclass(frozen=True)
class ManualEditContext:
    """Edit frontier of a stage.

    Attributes:
        allowed_round: Current round of the stage (0 for an empty stage)
        current_round_started: Whether any match of that round is played
    """

    allowed_round: int
    current_round_started: bool


def get_stage_manual_edit_context(stage_matches: Sequence[Match]) -> ManualEditContext:
    """Locate the editable frontier of a knockout or swiss stage."""
    first_unplayed = next((m for m in stage_matches if not m.played), None)
    latest_round = max((m.round for m in stage_matches), default=0)
    allowed_round = first_unplayed.round if first_unplayed else latest_round
    started = any(m.played for m in stage_matches if m.round == allowed_round)
    return ManualEditContext(allowed_round, started)


def is_manual_round_edit_allowed(
    stage_matches: Sequence[Match], target_round: int
) -> bool:
    """Whether a result in ``target_round`` of a knockout/swiss stage may change."""
    context = get_stage_manual_edit_context(stage_matches)
    if target_round == context.allowed_round:
        return True
    return target_round == context.allowed_round - 1 and not context.current_round_started


def is_group_round_edit_allowed(
    group_matches: Sequence[Match],
    knockout_matches: Sequence[Match],
    target_round: int,
) -> bool:
    """Whether a result in group round ``target_round`` may change."""
    if not knockout_matches:
        return True
    if any(m.played for m in knockout_matches):
        return False
    last_group_round = max((m.round for m in group_matches), default=0)
    return target_round == last_group_round


def is_match_edit_allowed(tournament: Tournament, match: Match) -> bool:
    """Apply the stage-specific rule to ``match`` of ``tournament``."""
    if match.stage == MatchStage.GROUP:
        return is_group_round_edit_allowed(
            tournament.stage_matches(MatchStage.GROUP),
            tournament.stage_matches(MatchStage.KNOCKOUT),
            match.round,
        )
    if match.stage in (MatchStage.KNOCKOUT, MatchStage.SWISS):
        return is_manual_round_edit_allowed(
            tournament.stage_matches(match.stage), match.round
        )
    return True
