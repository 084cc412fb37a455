"""Persistence of the application state.

The store reads and writes the full state in one piece. Failures never
reach the caller: loading degrades to an empty state and saving reports
``False``, so the in-memory state stays authoritative.
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

import json
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from matchday.constants import SCHEMA_VERSION
from matchday.exceptions import (
    FileLoadException,
    FileSaveException,
    ValidationException,
)
from matchday.models.history import ParticipantHistory
from matchday.models.tournament import Tournament
from matchday.statistics.history import history_from_dict, history_to_dict
from matchday.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class LoadedState:
    """State as read back from storage."""

    tournaments: List[Tournament] = field(default_factory=list)
    participant_history: Dict[str, ParticipantHistory] = field(default_factory=dict)
    current_tournament_id: Optional[str] = None


def encode_state(
    tournaments: Sequence[Tournament],
    participant_history: Mapping[str, ParticipantHistory],
    current_tournament_id: Optional[str],
) -> Dict[str, Any]:
    """Build the stored payload."""
    return {
        "schemaVersion": SCHEMA_VERSION,
        "tournaments": [t.to_dict() for t in tournaments],
        "participantHistory": history_to_dict(participant_history),
        "currentTournamentId": current_tournament_id,
    }


def decode_state(payload: Mapping[str, Any]) -> LoadedState:
    """Rebuild a LoadedState from a stored or transferred payload.

    Tournaments missing ``schemaVersion`` get the current version; the
    history aggregate is normalized.

    Raises:
        KeyError, ValueError, TypeError: If the payload is malformed
    """
    current_id = payload.get("currentTournamentId")
    return LoadedState(
        tournaments=[Tournament.from_dict(t) for t in payload.get("tournaments", [])],
        participant_history=history_from_dict(payload.get("participantHistory") or {}),
        current_tournament_id=str(current_id) if current_id is not None else None,
    )


class StateStore(ABC):
    """Interface of the persistence collaborator."""

    @abstractmethod
    def load_state(self) -> LoadedState:
        """Return the saved state, or an empty one when nothing usable exists."""

    @abstractmethod
    def save_state(
        self,
        tournaments: Sequence[Tournament],
        participant_history: Mapping[str, ParticipantHistory],
        current_tournament_id: Optional[str],
    ) -> bool:
        """Replace the saved state; returns whether it was written."""


class InMemoryStateStore(StateStore):
    """Keeps the encoded payload in memory; used for tests and dry runs."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None):
        self.payload = payload
        self.save_count = 0

    def load_state(self) -> LoadedState:
        if self.payload is None:
            return LoadedState()
        return decode_state(self.payload)

    def save_state(
        self,
        tournaments: Sequence[Tournament],
        participant_history: Mapping[str, ParticipantHistory],
        current_tournament_id: Optional[str],
    ) -> bool:
        self.payload = encode_state(
            tournaments, participant_history, current_tournament_id
        )
        self.save_count += 1
        return True


class JsonStateStore(StateStore):
    """State kept in a single JSON file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> LoadedState:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise FileLoadException(f"Could not read {self.path}: {e}") from e

        if not isinstance(payload, dict):
            raise FileLoadException(f"{self.path} does not hold a state object")
        try:
            return decode_state(payload)
        except (
            KeyError,
            ValueError,
            TypeError,
            AttributeError,
            ValidationException,
        ) as e:
            raise FileLoadException(f"Malformed state in {self.path}: {e}") from e

    def _write(self, payload: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise FileSaveException(f"Could not write {self.path}: {e}") from e

    def load_state(self) -> LoadedState:
        if not self.path.exists():
            logger.debug(f"No state file at {self.path}; starting empty")
            return LoadedState()
        try:
            state = self._read()
        except FileLoadException as e:
            logger.warning(f"{e}; starting with an empty state")
            return LoadedState()
        logger.debug(f"Loaded {len(state.tournaments)} tournaments from {self.path}")
        return state

    def save_state(
        self,
        tournaments: Sequence[Tournament],
        participant_history: Mapping[str, ParticipantHistory],
        current_tournament_id: Optional[str],
    ) -> bool:
        payload = encode_state(tournaments, participant_history, current_tournament_id)
        try:
            self._write(payload)
        except FileSaveException as e:
            logger.warning(f"{e}; keeping in-memory state only")
            return False
        return True
