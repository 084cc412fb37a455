"""Matchday: a tournament progression engine.

Knockout, group-stage-into-knockout, Swiss and league tournaments with
deterministic seeded simulation, manual result editing and career history.
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

__version__ = "0.1.0"

from matchday.controllers.app_state import (  # noqa: E402
    AppState,
    NewTournamentInput,
    TournamentStore,
)
from matchday.models import (  # noqa: E402
    MatchStage,
    Participant,
    Tournament,
    TournamentFormat,
    TournamentSettings,
    TournamentStatus,
)

__all__ = [
    "AppState",
    "MatchStage",
    "NewTournamentInput",
    "Participant",
    "Tournament",
    "TournamentFormat",
    "TournamentSettings",
    "TournamentStatus",
    "TournamentStore",
    "__version__",
]
