"""Round robin scheduling using the circle method."""

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

from matchday.type_hints import RoundPairs, Schedule


def round_robin_pairings(ids: Sequence[str]) -> Schedule:
    """Single round robin schedule for ``ids``.

    Position 0 stays fixed while every other slot rotates one step per
    round. An odd field gets a ghost slot; whoever meets the ghost sits
    the round out.

    Args:
        ids: Participant ids in seeding order

    Returns:
        ``n - 1`` rounds (``n`` rounded up to even) of (home, away) pairs
    """
    if len(ids) < 2:
        return []

    slots: List[Optional[str]] = list(ids)
    if len(slots) % 2 != 0:
        slots.append(None)

    n = len(slots)
    rounds: Schedule = []
    for _ in range(n - 1):
        pairs: RoundPairs = []
        for i in range(n // 2):
            home = slots[i]
            away = slots[n - 1 - i]
            if home is not None and away is not None:
                pairs.append((home, away))
        rounds.append(pairs)
        # Rotate everything except the fixed first slot
        slots = [slots[0], slots[-1]] + slots[1:-1]
    return rounds


def round_robin_schedule(
    ids: Sequence[str], face_opponents_twice: bool = False
) -> Schedule:
    """Full schedule, optionally followed by a reversed second pass.

    The second pass repeats every round with home and away swapped, so
    round ``k`` of the second pass is round ``len(first_pass) + k`` overall.
    """
    first_pass = round_robin_pairings(ids)
    if not face_opponents_twice:
        return first_pass
    second_pass = [[(away, home) for home, away in pairs] for pairs in first_pass]
    return first_pass + second_pass
