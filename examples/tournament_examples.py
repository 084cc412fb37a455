"""Example script walking through the Matchday tournament formats.

This script shows how to drive the engine programmatically through the
``TournamentStore`` and how to apply Elo updates to finished matches.
Run it after installing the package (``pip install -e .``).
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

from matchday import NewTournamentInput, TournamentStore
from matchday.models import MatchStage, Participant, TournamentFormat, TournamentSettings
from matchday.rating import apply_elo_update
from matchday.tournament import get_champion_name, get_runner_up_name

ROSTER = [
    ("Ada", 78),
    ("Bob", 64),
    ("Cy", 59),
    ("Dee", 55),
    ("Eve", 52),
    ("Fay", 47),
    ("Gus", 41),
    ("Hal", 33),
]


def _participants():
    return [Participant(id="", name=name, rating=rating) for name, rating in ROSTER]


def _banner(title):
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70 + "\n")


def example_every_format():
    """Example: Run one seeded tournament of each format to completion."""

    _banner("EXAMPLE 1: Every format, seeded")

    store = TournamentStore()
    for tournament_format in TournamentFormat:
        settings = TournamentSettings(random_seed=2025, rounds=3, allow_draws=True)
        state = store.create_tournament(
            NewTournamentInput(
                f"{tournament_format.value.title()} Open",
                tournament_format,
                _participants(),
                settings,
            )
        )
        tournament_id = state.current_tournament_id
        store.generate_fixtures(tournament_id)
        finished = store.simulate_all(tournament_id).get_tournament(tournament_id)

        print(f"{finished.name}: {len(finished.matches)} matches, {finished.status.value}")
        print(f"  Champion:  {get_champion_name(finished)}")
        print(f"  Runner-up: {get_runner_up_name(finished)}")

    print("\nCareer leaders:")
    leaders = sorted(
        store.state.participant_history.values(), key=lambda h: -h.championships
    )
    for entry in leaders[:3]:
        print(f"  {entry.name}: {entry.championships} titles, {entry.wins} wins")


def example_manual_correction():
    """Example: Correct a result after the next Swiss round was paired."""

    _banner("EXAMPLE 2: Correcting a Swiss result")

    store = TournamentStore()
    state = store.create_tournament(
        NewTournamentInput(
            "Club Swiss",
            TournamentFormat.SWISS,
            _participants()[:4],
            TournamentSettings(random_seed=7, rounds=3),
        )
    )
    tournament_id = state.current_tournament_id
    store.generate_fixtures(tournament_id)
    tournament = store.simulate_round(tournament_id, 1).get_tournament(tournament_id)

    first = tournament.matches[0]
    loser = first.loser()
    print(f"Round 1 result: {first.winner} beat {loser}")
    print(f"Round 2 pairings: {_round_pairs(tournament, 2)}")

    tournament = store.set_match_result(tournament_id, first.id, loser).get_tournament(
        tournament_id
    )
    print(f"Corrected: {loser} now wins")
    print(f"Round 2 pairings: {_round_pairs(tournament, 2)}")


def _round_pairs(tournament, round_number):
    names = {p.id: p.name for p in tournament.participants}
    return [
        " vs ".join(names[pid] for pid in m.participant_ids)
        for m in tournament.matches
        if m.round == round_number and m.stage == MatchStage.SWISS
    ]


def example_elo_updates():
    """Example: Feed a finished league through the Elo collaborator."""

    _banner("EXAMPLE 3: Elo updates after a league")

    store = TournamentStore()
    state = store.create_tournament(
        NewTournamentInput(
            "Elo League",
            TournamentFormat.LEAGUE,
            _participants()[:4],
            TournamentSettings(random_seed=11, allow_draws=True),
        )
    )
    tournament_id = state.current_tournament_id
    store.generate_fixtures(tournament_id)
    tournament = store.simulate_all(tournament_id).get_tournament(tournament_id)

    ratings = {p.id: p.rating for p in tournament.participants}
    played = {p.id: 0 for p in tournament.participants}
    for match in tournament.matches:
        a = match.player_a.participant_id
        b = match.player_b.participant_id
        if match.winner is None:
            score = 0.5
        else:
            score = 1 if match.winner == a else 0
        ratings[a], ratings[b] = apply_elo_update(
            ratings[a], ratings[b], score, played[a], played[b]
        )
        played[a] += 1
        played[b] += 1

    for participant in tournament.participants:
        print(f"  {participant.name}: {participant.rating} -> {ratings[participant.id]}")
        store.update_participant_rating(tournament_id, participant.id, ratings[participant.id])


def main():
    """Run all examples."""
    example_every_format()
    example_manual_correction()
    example_elo_updates()


if __name__ == "__main__":
    main()
