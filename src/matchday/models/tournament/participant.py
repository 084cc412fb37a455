"""Participant data class."""

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

from matchday.constants import BYE_ID, DEFAULT_RATING


@dataclass(frozen=True)
class Participant:
    """A tournament entrant.

    Attributes
    ----------
    id : str
        Identity of the participant inside its tournament.
    name : str
        Display name; career history is keyed by its trimmed lowercase form.
    rating : float
        Relative skill in [0, 100]. Edited by the user between rounds, never
        updated by the progression engine.
    """

    id: str
    name: str
    rating: float = DEFAULT_RATING

    @property
    def name_key(self) -> str:
        """Case-insensitive, trimmed key used to match history entries."""
        return self.name.strip().lower()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {"id": self.id, "name": self.name, "rating": self.rating}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary.

        Raises:
            ValueError: If the id is the reserved bye id
            RatingValidationException: If the rating is not a number
        """
        from matchday.utils.validation import validate_rating_strict

        participant_id = str(data["id"])
        if participant_id == BYE_ID:
            raise ValueError(f"Participant id {BYE_ID!r} is reserved for byes")
        return cls(
            id=participant_id,
            name=str(data["name"]),
            rating=validate_rating_strict(data.get("rating", DEFAULT_RATING)),
        )
