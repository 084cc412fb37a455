"""Match and match side data classes."""

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
from typing import Any, Dict, List, Optional

from matchday.constants import BYE_ID
from matchday.models.enums import MatchStage


@dataclass(frozen=True)
class Side:
    """One side of a match: a participant, or a bye when ``participant_id`` is None.

    A bye is a distinct variant rather than a reserved id, so a participant
    whose id or name happens to be "BYE" is never mistaken for one. The
    string ``BYE_ID`` only appears in the serialized form.
    """

    participant_id: Optional[str] = None

    @classmethod
    def of(cls, participant_id: str) -> "Side":
        return cls(participant_id)

    @classmethod
    def bye(cls) -> "Side":
        return cls(None)

    @property
    def is_bye(self) -> bool:
        return self.participant_id is None

    def to_wire(self) -> str:
        return BYE_ID if self.participant_id is None else self.participant_id

    @classmethod
    def from_wire(cls, value: str) -> "Side":
        return cls.bye() if value == BYE_ID else cls.of(value)

    def __str__(self) -> str:
        return self.to_wire()


@dataclass(frozen=True)
class Match:
    """A single pairing inside a stage.

    Attributes
    ----------
    id : str
        Match identifier; also the RNG discriminator for its simulation.
    player_a, player_b : Side
        The two sides. Either may be a bye.
    round : int
        1-based round number scoped to (tournament, stage).
    stage : MatchStage
        Stage this match belongs to.
    played : bool
        Whether a result has been recorded.
    winner : str or None
        Winning participant id. A played match without a winner is a draw.
    group_id : str or None
        Group letter for group-stage matches.
    """

    id: str
    player_a: Side
    player_b: Side
    round: int
    stage: MatchStage
    played: bool = False
    winner: Optional[str] = None
    group_id: Optional[str] = None

    @property
    def is_draw(self) -> bool:
        return self.played and self.winner is None

    @property
    def has_bye(self) -> bool:
        return self.player_a.is_bye or self.player_b.is_bye

    @property
    def participant_ids(self) -> List[str]:
        """Ids of the real (non-bye) participants on either side."""
        return [
            side.participant_id
            for side in (self.player_a, self.player_b)
            if side.participant_id is not None
        ]

    def involves(self, participant_id: str) -> bool:
        return participant_id in (
            self.player_a.participant_id,
            self.player_b.participant_id,
        )

    def opponent_of(self, participant_id: str) -> Side:
        """Side facing ``participant_id`` in this match."""
        if self.player_a.participant_id == participant_id:
            return self.player_b
        return self.player_a

    def loser(self) -> Optional[str]:
        """Losing participant id of a decided match, None for draws and byes."""
        if not self.played or self.winner is None:
            return None
        loser_side = self.opponent_of(self.winner)
        return loser_side.participant_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "playerA": self.player_a.to_wire(),
            "playerB": self.player_b.to_wire(),
            "played": self.played,
            "round": self.round,
            "stage": self.stage.value,
        }
        if self.winner is not None:
            data["winner"] = self.winner
        if self.group_id is not None:
            data["groupId"] = self.group_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=str(data["id"]),
            player_a=Side.from_wire(data["playerA"]),
            player_b=Side.from_wire(data["playerB"]),
            round=int(data["round"]),
            stage=MatchStage(data["stage"]),
            played=bool(data.get("played", False)),
            winner=data.get("winner"),
            group_id=data.get("groupId"),
        )
