"""Application state container.

``TournamentStore`` owns a single immutable ``AppState`` snapshot and exposes
the action surface used by the CLI (or any other front end). Each action
builds a new snapshot, rederives career history, persists it and notifies
subscribers. Unknown tournament or match ids are no-ops.
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

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from matchday.constants import (
    DEFAULT_TOURNAMENT_NAME,
    ID_PREFIX_TOURNAMENT,
    SCHEMA_VERSION,
)
from matchday.controllers.tournament import (
    ResultRecorder,
    generate_fixtures,
    reset_tournament,
)
from matchday.exceptions import InvalidTournamentFormatException, MatchdayException
from matchday.models.enums import TournamentFormat, TournamentStatus
from matchday.models.history import ParticipantHistory
from matchday.models.tournament import Participant, Tournament, TournamentSettings
from matchday.statistics.history import derive_history
from matchday.storage.json_store import InMemoryStateStore, StateStore
from matchday.storage.transfer import ImportResult, export_state, import_state
from matchday.utils import generate_id, setup_logger
from matchday.utils.validation import validate_participants, validate_rating_strict

logger = setup_logger(__name__)


@dataclass(frozen=True)
class AppState:
    """Everything the application knows at one point in time.

    Attributes:
        tournaments: Newest first
        participant_history: Career records keyed by name key
        current_tournament_id: Selected tournament, None when there is none
    """

    tournaments: Tuple[Tournament, ...] = ()
    participant_history: Mapping[str, ParticipantHistory] = field(
        default_factory=dict
    )
    current_tournament_id: Optional[str] = None

    def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        for tournament in self.tournaments:
            if tournament.id == tournament_id:
                return tournament
        return None

    @property
    def current_tournament(self) -> Optional[Tournament]:
        if self.current_tournament_id is None:
            return None
        return self.get_tournament(self.current_tournament_id)


@dataclass
class NewTournamentInput:
    """Data entered to create a tournament.

    Participants may have an empty id; one is generated.
    """

    name: str
    format: Union[TournamentFormat, str]
    participants: Sequence[Participant]
    settings: TournamentSettings = field(default_factory=TournamentSettings)


Subscriber = Callable[[AppState], None]


def _parse_format(value: Union[TournamentFormat, str]) -> TournamentFormat:
    try:
        return TournamentFormat(value)
    except ValueError:
        logger.error(f"Unsupported tournament format: {value!r}")
        raise InvalidTournamentFormatException(
            f"Unsupported tournament format: {value!r}"
        ) from None


class TournamentStore:
    """Owns the application state and applies actions to it.

    This class is responsible for:
    - Loading and repairing persisted state
    - Applying tournament actions as snapshot replacements
    - Keeping career history derived from the tournament list
    - Persisting and notifying subscribers after every change
    """

    def __init__(self, persistence: Optional[StateStore] = None):
        """Initialize an empty store.

        Args:
            persistence: Storage collaborator; defaults to an in-memory store
        """
        self.persistence = persistence if persistence is not None else InMemoryStateStore()
        self.state = AppState()
        self.is_hydrated = False
        self._recorder = ResultRecorder()
        self._subscribers: List[Subscriber] = []

    # ========== Subscription & Commit ==========

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for new snapshots; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self, state: AppState) -> AppState:
        self.state = state
        self.persistence.save_state(
            state.tournaments, state.participant_history, state.current_tournament_id
        )
        for callback in list(self._subscribers):
            callback(state)
        return state

    def _commit_tournaments(
        self,
        tournaments: Sequence[Tournament],
        current_tournament_id: Optional[str],
    ) -> AppState:
        tournaments = tuple(tournaments)
        return self._commit(
            AppState(
                tournaments=tournaments,
                participant_history=derive_history(tournaments),
                current_tournament_id=current_tournament_id,
            )
        )

    def _update_tournament(
        self, tournament_id: str, update: Callable[[Tournament], Tournament]
    ) -> AppState:
        target = self.state.get_tournament(tournament_id)
        if target is None:
            logger.warning(f"Tournament {tournament_id} not found")
            return self.state
        updated = update(target)
        if updated is target:
            return self.state
        tournaments = [updated if t.id == tournament_id else t for t in self.state.tournaments]
        return self._commit_tournaments(tournaments, self.state.current_tournament_id)

    # ========== Lifecycle ==========

    def hydrate(self) -> AppState:
        """Load persisted state once, repairing it where needed.

        History is rederived from the loaded tournaments (the stored
        aggregate is kept only if they yield none) and a selection pointing
        at a missing tournament falls back to the first one. The repaired
        state is written back. Any failure leaves the store empty.
        """
        if self.is_hydrated:
            return self.state
        try:
            loaded = self.persistence.load_state()
        except (MatchdayException, KeyError, ValueError, TypeError) as e:
            logger.warning(f"Could not hydrate state: {e}")
            self.is_hydrated = True
            return self.state

        tournaments = tuple(
            t if t.schema_version else replace(t, schema_version=SCHEMA_VERSION)
            for t in loaded.tournaments
        )
        history = derive_history(tournaments) or dict(loaded.participant_history)
        current_id = loaded.current_tournament_id
        if not any(t.id == current_id for t in tournaments):
            current_id = tournaments[0].id if tournaments else None

        self.is_hydrated = True
        logger.info(f"Hydrated {len(tournaments)} tournaments")
        return self._commit(AppState(tournaments, history, current_id))

    def select_tournament(self, tournament_id: str) -> AppState:
        if self.state.get_tournament(tournament_id) is None:
            logger.warning(f"Tournament {tournament_id} not found")
            return self.state
        return self._commit(replace(self.state, current_tournament_id=tournament_id))

    def create_tournament(self, data: NewTournamentInput) -> AppState:
        """Create a tournament from ``data`` and select it.

        Raises:
            InvalidTournamentFormatException: If the format is not supported
        """
        tournament_format = _parse_format(data.format)
        tournament = Tournament(
            id=generate_id(ID_PREFIX_TOURNAMENT),
            name=data.name.strip() or DEFAULT_TOURNAMENT_NAME,
            format=tournament_format,
            participants=tuple(validate_participants(data.participants)),
            settings=data.settings,
            status=TournamentStatus.NOT_STARTED,
        )
        logger.info(
            f"Created {tournament_format.value} tournament {tournament.name!r} with "
            f"{len(tournament.participants)} participants"
        )
        return self._commit_tournaments(
            (tournament,) + self.state.tournaments, tournament.id
        )

    def delete_tournament(self, tournament_id: str) -> AppState:
        if self.state.get_tournament(tournament_id) is None:
            logger.warning(f"Tournament {tournament_id} not found")
            return self.state
        tournaments = [t for t in self.state.tournaments if t.id != tournament_id]
        current_id = self.state.current_tournament_id
        if current_id == tournament_id:
            current_id = tournaments[0].id if tournaments else None
        logger.info(f"Deleted tournament {tournament_id}")
        return self._commit_tournaments(tournaments, current_id)

    def clear_all(self) -> AppState:
        logger.info("Cleared all tournaments and history")
        return self._commit(AppState())

    # ========== Tournament Actions ==========

    def update_participant_rating(
        self, tournament_id: str, participant_id: str, rating: Any
    ) -> AppState:
        """Set a participant's rating, clamped to the rating range.

        Raises:
            RatingValidationException: If ``rating`` is not a number
        """
        new_rating = validate_rating_strict(rating)

        def update(tournament: Tournament) -> Tournament:
            if tournament.get_participant(participant_id) is None:
                logger.warning(
                    f"Participant {participant_id} not found in {tournament_id}"
                )
                return tournament
            participants = tuple(
                replace(p, rating=new_rating) if p.id == participant_id else p
                for p in tournament.participants
            )
            return replace(tournament, participants=participants)

        return self._update_tournament(tournament_id, update)

    def generate_fixtures(self, tournament_id: str) -> AppState:
        return self._update_tournament(tournament_id, generate_fixtures)

    def simulate_match(self, tournament_id: str, match_id: str) -> AppState:
        return self._update_tournament(
            tournament_id, lambda t: self._recorder.simulate_matches(t, [match_id])
        )

    def set_match_result(
        self, tournament_id: str, match_id: str, winner_id: Optional[str]
    ) -> AppState:
        """Record a manual result; refused silently when the match is locked."""
        return self._update_tournament(
            tournament_id,
            lambda t: self._recorder.record_manual_result(t, match_id, winner_id),
        )

    def simulate_round(self, tournament_id: str, round_number: int) -> AppState:
        return self._update_tournament(
            tournament_id, lambda t: self._recorder.simulate_round(t, round_number)
        )

    def simulate_all(self, tournament_id: str) -> AppState:
        return self._update_tournament(tournament_id, self._recorder.simulate_all)

    def reset_tournament(self, tournament_id: str) -> AppState:
        return self._update_tournament(tournament_id, reset_tournament)

    # ========== Transfer ==========

    def export_state(self) -> Dict[str, Any]:
        return export_state(
            self.state.tournaments,
            self.state.participant_history,
            self.state.current_tournament_id,
        )

    def import_state(self, payload: Any) -> ImportResult:
        """Replace the whole state with an imported transfer file.

        The current state is untouched when the file is rejected.
        """
        result = import_state(payload)
        if not result.ok:
            return result

        loaded = result.state
        tournaments = tuple(loaded.tournaments)
        current_id = loaded.current_tournament_id
        if not any(t.id == current_id for t in tournaments):
            current_id = tournaments[0].id if tournaments else None
        self._commit(AppState(tournaments, dict(loaded.participant_history), current_id))
        return result
