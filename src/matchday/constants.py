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

# --- Constants ---
SCHEMA_VERSION = 1
DEFAULT_STATE_FILE = "~/.matchday/state.json"
STATE_FILE_ENV_VAR = "MATCHDAY_STATE_FILE"

# Wire id of the bye side (in memory a bye is a Side without participant)
BYE_ID = "BYE"

# Match scoring (3-1-0, fixed)
WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0

# Participant ratings
RATING_MIN = 0
RATING_MAX = 100
DEFAULT_RATING = 50

# Simulation
DEFAULT_DRAW_CHANCE = 0.05
SIMULATION_ROLLOUTS = 25
WIN_PROBABILITY_SCALE = 20
SIMULATE_ALL_ROUND_LIMIT = 1000

# Seed labels for the deterministic RNG
SEED_LABEL_GROUPS = "groups_seed"
SEED_LABEL_KNOCKOUT = "ko_round_1"

# Settings defaults
DEFAULT_GROUP_COUNT = 2
MIN_GROUP_COUNT = 2
DEFAULT_ADVANCE_PER_GROUP = 2
DEFAULT_SWISS_ROUNDS = 5

# Elo (external rating collaborator)
ELO_DEFAULT_RATING = DEFAULT_RATING
ELO_SCALE = 20
ELO_K_BASE = 24
ELO_K_PROVISIONAL = 32
ELO_PROVISIONAL_MATCHES = 20

DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"

# ID prefixes
ID_PREFIX_TOURNAMENT = "t"
ID_PREFIX_PARTICIPANT = "p"
ID_PREFIX_MATCH = "match"
