# Padel Pairing
# Copyright (C) 2025  Padel Pairing developers
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
SAVE_FILE_EXTENSION = ".json"

# Player and court limits
MIN_PLAYERS = 4
MAX_PLAYERS = 32
MAX_COURTS = 8
PLAYERS_PER_MATCH = 4

# Default scoring
DEFAULT_NUMBER_OF_COURTS = 1
DEFAULT_POINTS_PER_MATCH = 16

# Americano generation
MAX_MATCHES_PER_PLAYER = 8
COVERAGE_ROUND_MARGIN = 5  # Extra coverage rounds allowed beyond the target
BALANCING_ITERATION_CAP = 10
EXTENSION_ITERATION_CAP = 100
MIN_EXTENSION_ROUNDS = 2

# Round builder search window (bounds the 4-subset enumeration)
CANDIDATE_WINDOW = 8

# Team-split penalties used while covering partner pairs
COVERAGE_REPEAT_PARTNER_PENALTY = 10000
COVERAGE_REPEAT_OPPONENT_WEIGHT = 100
COVERAGE_MATCH_COUNT_WEIGHT = 1

# Team-split penalties used while balancing match counts
BALANCING_REPEAT_PARTNER_WEIGHT = 1000
BALANCING_REPEAT_OPPONENT_WEIGHT = 10
BALANCING_MATCH_COUNT_WEIGHT = 0

# Mexicano completion policy
MIN_MATCHES_FOR_COMPLETION = 3
ROUNDS_REQUIRED_AFTER_CONTINUE = 2

# Logging
LOG_LEVEL_ENV_VAR = "PADELPAIRING_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
