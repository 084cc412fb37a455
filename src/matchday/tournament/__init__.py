"""Standings, outcome simulation and final placement."""

from matchday.tournament.champion import (
    get_champion_id,
    get_champion_name,
    get_runner_up_id,
    get_runner_up_name,
)
from matchday.tournament.simulation import (
    MatchOutcome,
    simulate_match_result,
    win_probability,
)
from matchday.tournament.standings import (
    build_standings,
    rank_for_display,
    rank_for_qualification,
)

__all__ = [
    "MatchOutcome",
    "build_standings",
    "get_champion_id",
    "get_champion_name",
    "get_runner_up_id",
    "get_runner_up_name",
    "rank_for_display",
    "rank_for_qualification",
    "simulate_match_result",
    "win_probability",
]
