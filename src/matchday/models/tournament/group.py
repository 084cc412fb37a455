"""Group data class."""

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
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Group:
    """A fixed partition of participants for the group stage.

    Attributes
    ----------
    id : str
        Group letter ("A", "B", ...).
    participant_ids : tuple of str
        Members in assignment order. Never changes once assigned.
    """

    id: str
    participant_ids: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize group to dictionary."""
        return {"id": self.id, "participantIds": list(self.participant_ids)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Deserialize group from dictionary."""
        return cls(
            id=str(data["id"]),
            participant_ids=tuple(str(p) for p in data.get("participantIds", [])),
        )
