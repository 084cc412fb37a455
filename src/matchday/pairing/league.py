"""League fixtures: every round generated up front."""

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

from typing import List, Optional, Sequence

from matchday.constants import ID_PREFIX_MATCH
from matchday.models.enums import MatchStage
from matchday.models.tournament import Match, Side
from matchday.pairing.round_robin import round_robin_schedule
from matchday.utils import generate_id


def schedule_to_matches(
    participant_ids: Sequence[str],
    stage: MatchStage,
    face_opponents_twice: bool = False,
    group_id: Optional[str] = None,
) -> List[Match]:
    """Turn a round robin schedule into unplayed matches of ``stage``."""
    matches = []
    schedule = round_robin_schedule(participant_ids, face_opponents_twice)
    for index, pairs in enumerate(schedule):
        for home, away in pairs:
            matches.append(
                Match(
                    id=generate_id(ID_PREFIX_MATCH),
                    player_a=Side.of(home),
                    player_b=Side.of(away),
                    round=index + 1,
                    stage=stage,
                    group_id=group_id,
                )
            )
    return matches


def generate_league_matches(
    participant_ids: Sequence[str], face_opponents_twice: bool = False
) -> List[Match]:
    """All league matches for the roster, in round order."""
    return schedule_to_matches(participant_ids, MatchStage.LEAGUE, face_opponents_twice)
