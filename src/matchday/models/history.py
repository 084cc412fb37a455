"""Career statistics data classes.

These records are a read-side projection over match history. They are
rebuilt from scratch by ``matchday.statistics.history`` and are never
treated as ground truth.
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
from typing import Any, Dict

from matchday.models.enums import MatchStage


@dataclass
class StagePerformance:
    """Win/loss/draw counts for a single stage."""

    played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def merge(self, other: "StagePerformance") -> None:
        self.played += other.played
        self.wins += other.wins
        self.losses += other.losses
        self.draws += other.draws

    def to_dict(self) -> Dict[str, Any]:
        return {
            "played": self.played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StagePerformance":
        return cls(
            played=data.get("played", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
        )


@dataclass
class HeadToHeadRecord:
    """Record of one participant against a single named opponent."""

    opponent_name: str
    played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opponentName": self.opponent_name,
            "played": self.played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HeadToHeadRecord":
        return cls(
            opponent_name=str(data.get("opponentName", "")).strip(),
            played=data.get("played", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
        )


def _empty_stage_stats() -> Dict[str, StagePerformance]:
    return {stage.value.lower(): StagePerformance() for stage in MatchStage}


@dataclass
class ParticipantHistory:
    """Career record of a participant name across every tournament.

    Attributes:
        name: Trimmed display name (the key is its lowercase form)
        played, wins, losses, draws: Totals over played non-bye matches
        tournaments: Tournaments entered
        completed_tournaments: Entered tournaments that reached COMPLETED
        championships: Completed tournaments won
        runner_ups: Completed tournaments finished second
        finals: Completed tournaments finished first or second
        stage_stats: Per-stage breakdown keyed "group", "knockout", ...
        opponents: Head-to-head records keyed by opponent name key
    """

    name: str
    played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    tournaments: int = 0
    completed_tournaments: int = 0
    championships: int = 0
    runner_ups: int = 0
    finals: int = 0
    stage_stats: Dict[str, StagePerformance] = field(
        default_factory=_empty_stage_stats
    )
    opponents: Dict[str, HeadToHeadRecord] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return self.name.strip().lower()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize history entry to dictionary."""
        return {
            "name": self.name,
            "played": self.played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "tournaments": self.tournaments,
            "completedTournaments": self.completed_tournaments,
            "championships": self.championships,
            "runnerUps": self.runner_ups,
            "finals": self.finals,
            "stageStats": {k: v.to_dict() for k, v in self.stage_stats.items()},
            "opponents": {k: v.to_dict() for k, v in self.opponents.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantHistory":
        """Deserialize history entry; older payloads lack most counters."""
        stage_stats = _empty_stage_stats()
        for key, value in (data.get("stageStats") or {}).items():
            stage_stats[key] = StagePerformance.from_dict(value)
        return cls(
            name=str(data.get("name", "")).strip(),
            played=data.get("played", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
            tournaments=data.get("tournaments", 0),
            completed_tournaments=data.get("completedTournaments", 0),
            championships=data.get("championships", 0),
            runner_ups=data.get("runnerUps", 0),
            finals=data.get("finals", 0),
            stage_stats=stage_stats,
            opponents={
                key: HeadToHeadRecord.from_dict(value)
                for key, value in (data.get("opponents") or {}).items()
            },
        )
