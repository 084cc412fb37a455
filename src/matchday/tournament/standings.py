"""Standings table and ranking orders.

Standings are a pure function of (participants, matches) and are rebuilt
from scratch on every call. Two ranking orders exist and are kept apart:

- display order: points, then wins, then rating (league and swiss tables)
- qualification order: points, then Buchholz, then rating (swiss pairing,
  group qualifiers and champions decided on standings)
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

from typing import Dict, Iterable, List, Sequence

from matchday.constants import DRAW_POINTS, LOSS_POINTS, WIN_POINTS
from matchday.models.tournament import Match, Participant, Standing


def build_standings(
    participants: Sequence[Participant], matches: Iterable[Match]
) -> Dict[str, Standing]:
    """Compute a fresh table for ``participants`` from ``matches``.

    Only played matches between two rostered participants count, so byes
    and matches against outsiders (e.g. other groups) are ignored.

    Args:
        participants: Roster to build rows for
        matches: Any match list; unplayed matches are skipped

    Returns:
        Dictionary of participant id to Standing
    """
    table: Dict[str, Standing] = {p.id: Standing() for p in participants}
    counted: List[Match] = []

    for match in matches:
        if not match.played:
            continue
        a = table.get(match.player_a.participant_id)
        b = table.get(match.player_b.participant_id)
        if a is None or b is None:
            continue
        counted.append(match)
        a.played += 1
        b.played += 1
        if match.winner is None:
            a.draws += 1
            b.draws += 1
            a.points += DRAW_POINTS
            b.points += DRAW_POINTS
        elif match.winner == match.player_a.participant_id:
            a.wins += 1
            b.losses += 1
            a.points += WIN_POINTS
            b.points += LOSS_POINTS
        elif match.winner == match.player_b.participant_id:
            b.wins += 1
            a.losses += 1
            b.points += WIN_POINTS
            a.points += LOSS_POINTS

    # Buchholz needs every participant's final points, hence a second pass
    for match in counted:
        a_id = match.player_a.participant_id
        b_id = match.player_b.participant_id
        table[a_id].buchholz += table[b_id].points
        table[b_id].buchholz += table[a_id].points

    return table


def rank_for_display(
    participants: Sequence[Participant], standings: Dict[str, Standing]
) -> List[Participant]:
    """Sort by points, wins, then rating, all descending."""
    return sorted(
        participants,
        key=lambda p: (
            -standings[p.id].points,
            -standings[p.id].wins,
            -p.rating,
        ),
    )


def rank_for_qualification(
    participants: Sequence[Participant], standings: Dict[str, Standing]
) -> List[Participant]:
    """Sort by points, Buchholz, then rating, all descending."""
    return sorted(
        participants,
        key=lambda p: (
            -standings[p.id].points,
            -standings[p.id].buchholz,
            -p.rating,
        ),
    )
