"""Export and import of the versioned transfer file."""

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

from typing import Any, Dict, Mapping, NamedTuple, Optional, Sequence

from matchday.exceptions import ValidationException
from matchday.models.history import ParticipantHistory
from matchday.models.tournament import Tournament
from matchday.statistics.history import derive_history
from matchday.storage.json_store import LoadedState, decode_state, encode_state
from matchday.utils import now_iso, setup_logger
from matchday.utils.validation import validate_transfer_payload_strict

logger = setup_logger(__name__)


class ImportResult(NamedTuple):
    """Outcome of an import; ``state`` is set only when ``ok``."""

    ok: bool
    error: Optional[str] = None
    state: Optional[LoadedState] = None


def export_state(
    tournaments: Sequence[Tournament],
    participant_history: Mapping[str, ParticipantHistory],
    current_tournament_id: Optional[str],
) -> Dict[str, Any]:
    """Build a transfer document stamped with the export time.

    Returns:
        Dictionary with schemaVersion, exportedAt, tournaments,
        participantHistory and currentTournamentId
    """
    payload = encode_state(tournaments, participant_history, current_tournament_id)
    payload["exportedAt"] = now_iso()
    logger.info(f"Exported {len(tournaments)} tournaments")
    return payload


def import_state(payload: Any) -> ImportResult:
    """Validate and decode a transfer document.

    History is rederived from the imported tournaments; the transferred
    aggregate is used only when they yield none.

    Args:
        payload: Decoded JSON document

    Returns:
        ImportResult; never raises for a malformed document
    """
    try:
        loaded = decode_state(validate_transfer_payload_strict(payload))
    except ValidationException as e:
        logger.warning(f"Rejected import: {e}")
        return ImportResult(ok=False, error=str(e))
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Rejected import: malformed content ({e})")
        return ImportResult(ok=False, error=f"Malformed transfer file: {e}")

    derived = derive_history(loaded.tournaments)
    if derived:
        loaded.participant_history = derived
    logger.info(f"Imported {len(loaded.tournaments)} tournaments")
    return ImportResult(ok=True, state=loaded)
