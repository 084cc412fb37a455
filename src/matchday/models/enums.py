"""Enumerations shared by the tournament models."""

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

from enum import Enum


class TournamentFormat(str, Enum):
    """Supported tournament formats."""

    GROUP_KO = "GROUP_KO"
    KNOCKOUT = "KNOCKOUT"
    SWISS = "SWISS"
    LEAGUE = "LEAGUE"


class TournamentStatus(str, Enum):
    """Lifecycle of a tournament. Only Reset moves it backwards."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class MatchStage(str, Enum):
    """Stage a match belongs to; round numbers are scoped per stage."""

    GROUP = "GROUP"
    KNOCKOUT = "KNOCKOUT"
    SWISS = "SWISS"
    LEAGUE = "LEAGUE"
