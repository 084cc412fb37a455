"""Standing data class."""

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
from typing import Any, Dict


@dataclass
class Standing:
    """Table row for one participant, always derived from the match list.

    ``played == wins + losses + draws`` and ``points == 3 * wins + draws``.

    Attributes
    ----------
    played, wins, losses, draws : int
        Counts over played matches.
    points : int
        3-1-0 match points.
    buchholz : int
        Sum of the current points of every opponent played.
    """

    played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    points: int = 0
    buchholz: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "played": self.played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "points": self.points,
            "buchholz": self.buchholz,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Standing":
        """Deserialize standing from dictionary."""
        return cls(
            played=data.get("played", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
            points=data.get("points", 0),
            buchholz=data.get("buchholz", 0),
        )
