"""Career statistics derived from tournament history.

History is a read-side projection: it is rebuilt from scratch from the full
tournament list after every change and never updated incrementally.
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

from typing import Dict, Iterable, Mapping, Optional, Tuple

from matchday.models.enums import TournamentStatus
from matchday.models.history import (
    HeadToHeadRecord,
    ParticipantHistory,
    StagePerformance,
)
from matchday.models.tournament import Match, Tournament
from matchday.tournament.champion import get_champion_id, get_runner_up_id

HistoryMap = Dict[str, ParticipantHistory]


def history_key(name: str) -> str:
    """Key of a participant name in the history map."""
    return name.strip().lower()


def _ensure_entry(history: HistoryMap, name: str) -> ParticipantHistory:
    name = name.strip()
    key = history_key(name)
    entry = history.get(key)
    if entry is None:
        entry = ParticipantHistory(name=name)
        history[key] = entry
    elif entry.name != name:
        entry.name = name
    return entry


def _record(totals, outcome: Optional[str]) -> None:
    """Count one result on any record with played/wins/losses/draws."""
    totals.played += 1
    if outcome == "win":
        totals.wins += 1
    elif outcome == "loss":
        totals.losses += 1
    elif outcome == "draw":
        totals.draws += 1


def _apply_outcome(
    entry: ParticipantHistory,
    opponent_name: str,
    stage_key: str,
    outcome: Optional[str],
) -> None:
    _record(entry, outcome)
    _record(entry.stage_stats.setdefault(stage_key, StagePerformance()), outcome)

    opponent_key = history_key(opponent_name)
    record = entry.opponents.get(opponent_key)
    if record is None:
        record = HeadToHeadRecord(opponent_name=opponent_name.strip())
        entry.opponents[opponent_key] = record
    _record(record, outcome)


def _match_outcomes(match: Match) -> Tuple[Optional[str], Optional[str]]:
    """Outcome labels for side A and side B of a played match."""
    side_a = match.player_a.participant_id
    side_b = match.player_b.participant_id
    if match.winner is None:
        return "draw", "draw"
    if match.winner == side_a:
        return "win", "loss"
    if match.winner == side_b:
        return "loss", "win"
    # Winner outside the match: counted as played only
    return None, None


def _count_placements(history: HistoryMap, tournament: Tournament) -> None:
    roster = tournament.participant_map()
    champion_id = get_champion_id(tournament)
    runner_up_id = get_runner_up_id(tournament)

    if champion_id in roster:
        entry = _ensure_entry(history, roster[champion_id].name)
        entry.championships += 1
        entry.finals += 1
    if runner_up_id in roster:
        entry = _ensure_entry(history, roster[runner_up_id].name)
        entry.runner_ups += 1
        entry.finals += 1


def derive_history(tournaments: Iterable[Tournament]) -> HistoryMap:
    """Rebuild every participant's career record.

    Entries are keyed by trimmed lowercase name, so the same person entered
    in several tournaments accumulates one record. Matches with a bye side
    do not count.

    Args:
        tournaments: Every known tournament, any format or status

    Returns:
        History keyed by name key
    """
    history: HistoryMap = {}

    for tournament in tournaments:
        id_to_name = {p.id: p.name.strip() for p in tournament.participants}
        completed = tournament.status == TournamentStatus.COMPLETED

        seen = set()
        for participant in tournament.participants:
            name = participant.name.strip()
            key = history_key(name)
            if not key or key in seen:
                continue
            seen.add(key)
            entry = _ensure_entry(history, name)
            entry.tournaments += 1
            if completed:
                entry.completed_tournaments += 1

        if completed:
            _count_placements(history, tournament)

        for match in tournament.matches:
            if not match.played or match.has_bye:
                continue
            name_a = id_to_name.get(match.player_a.participant_id)
            name_b = id_to_name.get(match.player_b.participant_id)
            if not name_a or not name_b:
                continue

            outcome_a, outcome_b = _match_outcomes(match)
            stage_key = match.stage.value.lower()
            _apply_outcome(_ensure_entry(history, name_a), name_b, stage_key, outcome_a)
            _apply_outcome(_ensure_entry(history, name_b), name_a, stage_key, outcome_b)

    return history


def normalize_history(stored: Mapping[str, ParticipantHistory]) -> HistoryMap:
    """Re-key a stored aggregate and merge entries that collide.

    Older payloads may be keyed inconsistently (untrimmed or mixed-case
    names); keys are recomputed from each entry's name and duplicates are
    summed, head-to-head records included.
    """
    normalized: HistoryMap = {}
    for value in stored.values():
        key = history_key(value.name)
        if not key:
            continue
        entry = normalized.get(key)
        if entry is None:
            entry = ParticipantHistory(name=value.name.strip())
            normalized[key] = entry

        entry.played += value.played
        entry.wins += value.wins
        entry.losses += value.losses
        entry.draws += value.draws
        entry.tournaments += value.tournaments
        entry.completed_tournaments += value.completed_tournaments
        entry.championships += value.championships
        entry.runner_ups += value.runner_ups
        entry.finals += value.finals
        for stage_key, performance in value.stage_stats.items():
            entry.stage_stats.setdefault(stage_key, StagePerformance()).merge(
                performance
            )

        for opponent in value.opponents.values():
            opponent_key = history_key(opponent.opponent_name)
            if not opponent_key:
                continue
            record = entry.opponents.get(opponent_key)
            if record is None:
                record = HeadToHeadRecord(opponent_name=opponent.opponent_name.strip())
                entry.opponents[opponent_key] = record
            record.played += opponent.played
            record.wins += opponent.wins
            record.losses += opponent.losses
            record.draws += opponent.draws

    return normalized


def history_to_dict(history: Mapping[str, ParticipantHistory]) -> Dict[str, dict]:
    return {key: entry.to_dict() for key, entry in history.items()}


def history_from_dict(data: Mapping[str, dict]) -> HistoryMap:
    """Decode a stored aggregate and normalize it."""
    return normalize_history(
        {key: ParticipantHistory.from_dict(value) for key, value in data.items()}
    )
