"""Pairing generators for every supported format."""

from matchday.pairing.groups import (
    apply_head_to_head_tie_break,
    create_balanced_groups,
    generate_group_stage_matches,
    group_qualifiers,
    maybe_start_knockout_after_groups,
)
from matchday.pairing.knockout import (
    generate_knockout_round_one,
    maybe_generate_next_knockout_round,
)
from matchday.pairing.league import generate_league_matches
from matchday.pairing.round_robin import round_robin_pairings, round_robin_schedule
from matchday.pairing.swiss import maybe_generate_swiss_round, pair_swiss_round

__all__ = [
    "apply_head_to_head_tie_break",
    "create_balanced_groups",
    "generate_group_stage_matches",
    "generate_knockout_round_one",
    "generate_league_matches",
    "group_qualifiers",
    "maybe_generate_next_knockout_round",
    "maybe_generate_swiss_round",
    "maybe_start_knockout_after_groups",
    "pair_swiss_round",
    "round_robin_pairings",
    "round_robin_schedule",
]
