"""TournamentSettings data class."""

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
from typing import Any, Dict, Optional

from matchday.constants import (
    DEFAULT_ADVANCE_PER_GROUP,
    DEFAULT_GROUP_COUNT,
    DEFAULT_SWISS_ROUNDS,
)


@dataclass(frozen=True)
class TournamentSettings:
    """Tournament configuration settings.

    Attributes
    ----------
    group_count : int
        Number of groups for GROUP_KO (at least 2 when fixtures are built).
    advance_per_group : int
        Qualifiers taken from each group into the knockout bracket.
    rounds : int
        Number of Swiss rounds.
    random_seed : int or None
        Seed for reproducible shuffles and simulations. None means random.
    allow_draws : bool
        Whether simulated matches can end in a draw.
    face_opponents_twice : bool
        Double round robin for LEAGUE/GROUP, two meetings allowed in SWISS.
    """

    group_count: int = DEFAULT_GROUP_COUNT
    advance_per_group: int = DEFAULT_ADVANCE_PER_GROUP
    rounds: int = DEFAULT_SWISS_ROUNDS
    random_seed: Optional[int] = None
    allow_draws: bool = False
    face_opponents_twice: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        data: Dict[str, Any] = {
            "groupCount": self.group_count,
            "advancePerGroup": self.advance_per_group,
            "rounds": self.rounds,
            "allowDraws": self.allow_draws,
            "faceOpponentsTwice": self.face_opponents_twice,
        }
        if self.random_seed is not None:
            data["randomSeed"] = self.random_seed
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSettings":
        """Deserialize settings from dictionary; missing keys take defaults."""
        seed = data.get("randomSeed")
        return cls(
            group_count=int(data.get("groupCount", DEFAULT_GROUP_COUNT)),
            advance_per_group=int(
                data.get("advancePerGroup", DEFAULT_ADVANCE_PER_GROUP)
            ),
            rounds=int(data.get("rounds", DEFAULT_SWISS_ROUNDS)),
            random_seed=int(seed) if seed is not None else None,
            allow_draws=bool(data.get("allowDraws", False)),
            face_opponents_twice=bool(data.get("faceOpponentsTwice", False)),
        )
