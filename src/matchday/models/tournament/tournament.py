"""Tournament snapshot data class.

A ``Tournament`` is immutable: every action builds a new snapshot with
``dataclasses.replace`` instead of editing matches in place, so a caller
holding an older snapshot never observes a half-applied update.
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

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from matchday.constants import DEFAULT_TOURNAMENT_NAME, SCHEMA_VERSION
from matchday.models.enums import MatchStage, TournamentFormat, TournamentStatus

from .group import Group
from .match import Match
from .participant import Participant
from .standing import Standing
from .tournament_settings import TournamentSettings


@dataclass(frozen=True)
class Tournament:
    """Complete state of one tournament.

    Attributes
    ----------
    id : str
        Tournament identifier.
    name : str
        Display name.
    format : TournamentFormat
        One of GROUP_KO, KNOCKOUT, SWISS, LEAGUE.
    participants : tuple of Participant
        Roster in entry order.
    matches : tuple of Match
        Every generated match, in generation order.
    settings : TournamentSettings
        Format and simulation settings.
    status : TournamentStatus
        NOT_STARTED, IN_PROGRESS or COMPLETED.
    standings : dict of str to Standing or None
        Last computed table. A cache only; always derivable from matches.
    groups : tuple of Group or None
        Group partition for GROUP_KO once fixtures exist.
    schema_version : int
        Serialization schema version.
    """

    id: str
    name: str
    format: TournamentFormat
    participants: Tuple[Participant, ...] = ()
    matches: Tuple[Match, ...] = ()
    settings: TournamentSettings = field(default_factory=TournamentSettings)
    status: TournamentStatus = TournamentStatus.NOT_STARTED
    standings: Optional[Dict[str, Standing]] = None
    groups: Optional[Tuple[Group, ...]] = None
    schema_version: int = SCHEMA_VERSION

    # ========== Lookups ==========

    def participant_map(self) -> Dict[str, Participant]:
        """Participants keyed by id."""
        return {p.id: p for p in self.participants}

    def get_participant(self, participant_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def stage_matches(self, stage: MatchStage) -> Tuple[Match, ...]:
        return tuple(m for m in self.matches if m.stage == stage)

    @property
    def has_unplayed(self) -> bool:
        return any(not m.played for m in self.matches)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "format": self.format.value,
            "participants": [p.to_dict() for p in self.participants],
            "matches": [m.to_dict() for m in self.matches],
            "settings": self.settings.to_dict(),
            "status": self.status.value,
            "schemaVersion": self.schema_version,
        }
        if self.standings is not None:
            data["standings"] = {
                pid: standing.to_dict() for pid, standing in self.standings.items()
            }
        if self.groups is not None:
            data["groups"] = [g.to_dict() for g in self.groups]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Args:
            data: Dictionary containing tournament data

        Returns:
            Reconstructed Tournament object
        """
        standings = data.get("standings")
        groups = data.get("groups")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or DEFAULT_TOURNAMENT_NAME),
            format=TournamentFormat(data["format"]),
            participants=tuple(
                Participant.from_dict(p) for p in data.get("participants", [])
            ),
            matches=tuple(Match.from_dict(m) for m in data.get("matches", [])),
            settings=TournamentSettings.from_dict(data.get("settings") or {}),
            status=TournamentStatus(
                data.get("status", TournamentStatus.NOT_STARTED.value)
            ),
            standings=(
                {pid: Standing.from_dict(s) for pid, s in standings.items()}
                if standings is not None
                else None
            ),
            groups=(
                tuple(Group.from_dict(g) for g in groups)
                if groups is not None
                else None
            ),
            schema_version=int(data.get("schemaVersion") or SCHEMA_VERSION),
        )
